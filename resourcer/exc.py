"""

    resourcer.exc -- exceptions
    ===========================

"""

from webob import exc

__all__ = (
    'NoMatchFound', 'NoURLPatternMatched', 'MethodNotAllowed',
    'ResourceConfigurationError', 'InvalidRoutePattern',
    'RouteReversalError')

class NoMatchFound(Exception):
    """ Raised by :meth:`resourcer.Resource.resolve` when request can't be
    routed

    :attr response:
        :class:`webob.exc.HTTPException` to answer the request with,
        :class:`resourcer.Application` returns it when the exception escapes
        a handler
    """

class NoURLPatternMatched(NoMatchFound):
    """ Raised when path wasn't matched against any URL template"""

    @property
    def response(self):
        return exc.HTTPNotFound()

class MethodNotAllowed(NoMatchFound):
    """ Raised when path was matched but request method isn't allowed

    :attr allowed:
        list of methods the matched routes accept, in route table order
    """

    def __init__(self, allowed=()):
        self.allowed = list(allowed)
        super(MethodNotAllowed, self).__init__(', '.join(self.allowed))

    @property
    def response(self):
        return exc.HTTPMethodNotAllowed(
            headers=[('Allow', ', '.join(self.allowed))])

class ResourceConfigurationError(Exception):
    """ Resource was configured improperly, raised only while resources are
    being defined
    """

class InvalidRoutePattern(ResourceConfigurationError):
    """ Route configured with invalid URL template"""

class RouteReversalError(Exception):
    """ Cannot reverse route"""
