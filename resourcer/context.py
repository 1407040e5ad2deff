"""

    resourcer.context -- per-request context
    ========================================

"""

from webob import Request, Response

__all__ = ('Context',)

class Context(object):
    """ Request context passed to every handler

    Holds a :class:`webob.Request` together with the :class:`webob.Response`
    being prepared for it. A fresh response has ``404 Not Found`` status and
    an empty body, so a request nobody handled ends up as not found.

    :param request:
        :class:`webob.Request` object
    :param response:
        optional :class:`webob.Response` object
    """

    def __init__(self, request, response=None):
        if not isinstance(request, Request):
            request = Request(request)
        self.request = request
        self.response = response or Response(status=404, body=b'')
        self.params = {}
        self.state = {}
        self._explicit_status = response is not None

    @property
    def method(self):
        return self.request.method

    @property
    def path(self):
        """ Path component of request URL, without query string"""
        return self.request.path_info or '/'

    @property
    def query(self):
        return self.request.GET

    @property
    def status(self):
        return self.response.status_code

    @status.setter
    def status(self, code):
        self._explicit_status = True
        self.response.status_code = code

    @property
    def body(self):
        return self.response.text if self.response.charset else self.response.body

    @body.setter
    def body(self, value):
        if not self._explicit_status:
            self.status = 200
        if isinstance(value, bytes):
            self.response.body = value
        else:
            if not self.response.charset:
                self.response.charset = 'UTF-8'
            self.response.text = value

    def get(self, name, default=None):
        """ Request header ``name``"""
        return self.request.headers.get(name, default)

    def set(self, name, value):
        """ Set response header ``name`` to ``value``"""
        self.response.headers[name] = value

    def __repr__(self):
        return '<%s %s %s>' % (self.__class__.__name__, self.method, self.path)
