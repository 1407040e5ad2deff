"""

    resourcer.app -- WSGI application
    =================================

    Runs a chain of handlers for each request::

        app = Application(users.middleware(), threads.middleware())
        response = Request.blank('/users/1').get_response(app)

"""

import asyncio
import logging

from webob import Request
from webob.exc import HTTPException

from resourcer.compose import compose
from resourcer.context import Context
from resourcer.exc import NoMatchFound

__all__ = ('Application',)

log = logging.getLogger(__name__)

class Application(object):
    """ WSGI application which runs ``middlewares`` in order

    :param middlewares:
        handlers, see :mod:`resourcer.compose`
    """

    def __init__(self, *middlewares):
        self.middlewares = list(middlewares)

    def use(self, middleware):
        """ Append ``middleware`` to the chain"""
        self.middlewares.append(middleware)
        return self

    async def handle(self, request):
        """ Run middleware chain for ``request``

        :param request:
            :class:`webob.Request` object
        :return:
            :class:`webob.Response` object
        """
        ctx = Context(request)
        try:
            await compose(self.middlewares)(ctx)
        except NoMatchFound as e:
            return e.response
        except HTTPException as e:
            return e.wsgi_response
        except Exception:
            log.exception('error while handling %s %s', ctx.method, ctx.path)
            raise
        return ctx.response

    def __call__(self, environ, start_response):
        response = asyncio.run(self.handle(Request(environ)))
        return response(environ, start_response)
