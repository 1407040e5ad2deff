"""

    resourcer -- resource routing for asynchronous WebOb applications
    =================================================================

    This module derives RESTful routes from a map of resource actions, matches
    requests against them and dispatches to the matching action::

        users = Resource('users', {
            'index': list_users,
            'show': show_user,
            'update': update_user,
        })
        app = Application(users.middleware())

"""

import re
import copy
import logging
from collections.abc import Mapping
from urllib.parse import urlencode

from resourcer.utils import trailing_slash, singularize
from resourcer.urlpattern import URLPattern
from resourcer.compose import compose, call_handler, call_next
from resourcer.context import Context
from resourcer.app import Application
from resourcer.exc import (
    NoMatchFound, NoURLPatternMatched, MethodNotAllowed,
    ResourceConfigurationError, InvalidRoutePattern, RouteReversalError)

__all__ = (
    'Resource', 'Route', 'resource', 'Context', 'Application', 'compose',
    'DEFAULT_METHODS', 'merge_methods',
    'GET', 'POST', 'PUT', 'DELETE', 'OPTIONS', 'PATCH',
    'NoMatchFound', 'NoURLPatternMatched', 'MethodNotAllowed',
    'ResourceConfigurationError', 'InvalidRoutePattern', 'RouteReversalError')

log = logging.getLogger(__name__)

GET     = 'GET'
POST    = 'POST'
PUT     = 'PUT'
DELETE  = 'DELETE'
OPTIONS = 'OPTIONS'
PATCH   = 'PATCH'

DEFAULT_METHODS = {
    'options':  OPTIONS,
    'new':      GET,
    'create':   POST,
    'edit':     GET,
    'update':   PUT,
    'index':    GET,
    'list':     GET,
    'read':     GET,
    'show':     GET,
    'destroy':  DELETE,
    'remove':   DELETE,
}

_member_action_re = re.compile('(show|read|update|remove|destroy)')

def merge_methods(overrides=None):
    """ Return action name to HTTP method mapping with ``overrides`` applied
    over :data:`DEFAULT_METHODS`

    Neither argument nor defaults are modified.
    """
    methods = dict(DEFAULT_METHODS)
    for action, method in (overrides or {}).items():
        methods[action] = method
    return dict((action, method.upper()) for action, method in methods.items())

class Route(object):
    """ Single route of a resource

    :param action:
        name of the action route was derived from
    :param method:
        HTTP method
    :param url:
        URL template, see :mod:`resourcer.urlpattern`
    :param handler:
        callable invoked when route is dispatched
    """

    url_pattern_cls = URLPattern

    def __init__(self, action, method, url, handler):
        self.action = action
        self.method = method
        self.url = url
        self.handler = handler
        self.pattern = self.url_pattern_cls(url)

    @property
    def params(self):
        return self.pattern.params

    def match(self, path, params=None):
        """ Match ``path`` against route's pattern, binding captured values
        into ``params``

        :raises resourcer.exc.NoURLPatternMatched:
            if ``path`` doesn't match
        """
        captures = self.pattern.match(path)
        if params is not None:
            for name, value in zip(self.params, captures):
                if name:
                    params[name] = value
        return captures

    def prefixed(self, prefix):
        """ Return a copy of route mounted under ``prefix``"""
        return self.__class__(
            self.action, self.method, prefix + self.url, self.handler)

    def __repr__(self):
        return '%s(action=%r, method=%r, url=%r)' % (
            self.__class__.__name__, self.action, self.method, self.url)

    __str__ = __repr__

class Resource(object):
    """ Resource with a set of RESTful actions

    Routes for actions are derived from action names:

    =========================  =======  ===================
    action                     method   URL
    =========================  =======  ===================
    ``index``, ``list``        GET      ``/users``
    ``create``                 POST     ``/users``
    ``options``                OPTIONS  ``/users``
    ``new``                    GET      ``/users/new``
    ``show``, ``read``         GET      ``/users/:user``
    ``edit``                   GET      ``/users/:user/edit``
    ``update``                 PUT      ``/users/:user``
    ``destroy``, ``remove``    DELETE   ``/users/:user``
    =========================  =======  ===================

    Keys of ``actions`` without HTTP method are ignored.

    :param args:
        ``([name,] [*middlewares,] actions)``, where ``name`` is a resource
        name (root resource is created if it's omitted), ``middlewares`` are
        handlers composed in front of every action and ``actions`` is a
        mapping from action name to a handler or a list of handlers
    :param methods:
        mapping from action name to HTTP method, overrides defaults and
        allows custom actions
    :param id:
        name of URL parameter which captures resource identifier, defaults to
        singular form of ``name``
    """

    def __init__(self, *args, methods=None, id=None):
        args = list(args)
        name = args.pop(0) if args and isinstance(args[0], str) else None

        if not args:
            raise ResourceConfigurationError('no actions for resource')
        actions = args.pop()
        if not isinstance(actions, Mapping):
            raise ResourceConfigurationError(
                'actions should be a mapping, got %r' % (actions,))
        for middleware in args:
            if not callable(middleware):
                raise ResourceConfigurationError(
                    "resource middleware '%r' isn't callable" % (middleware,))

        self.name = name
        self.id = id or (singularize(name) if name else 'id')
        self.base = '/' + name if name else '/'
        self.actions = dict(actions)
        self.methods = merge_methods(methods)
        self.middlewares = tuple(args)
        self.resources = []
        self.routes = self._build_routes()

    def _build_routes(self):
        routes = []
        for action, handler in self.actions.items():
            if not action in self.methods:
                continue
            route = Route(action, self.methods[action],
                self.url_for_action(action), self._handler(action, handler))
            log.debug('%s %s -> %s', route.method, route.url, action)
            routes.append(route)
        return routes

    def _handler(self, action, handler):
        if isinstance(handler, (list, tuple)):
            handler = compose(handler)
        elif not callable(handler):
            raise ResourceConfigurationError(
                "handler for action '%s' isn't callable" % action)
        if self.middlewares:
            handler = compose(self.middlewares + (handler,))
        return handler

    def url_for_action(self, action):
        """ URL template for ``action``"""
        base = trailing_slash(self.base)
        if action == 'new':
            return base + 'new'
        elif action == 'edit':
            return base + ':' + self.id + '/edit'
        elif _member_action_re.search(action):
            return base + ':' + self.id
        return self.base

    def match(self, path, params=None):
        """ Match ``path`` against resource routes

        All routes which match ``path`` are returned regardless of their
        method, in route table order.

        :param path:
            path component of request URL
        :param params:
            optional dict to bind captured URL parameters into
        :raises resourcer.exc.NoURLPatternMatched:
            if no route matches ``path``
        """
        path = path.split('?', 1)[0]
        matched = []
        for route in self.routes:
            try:
                route.match(path, params)
            except NoURLPatternMatched:
                continue
            matched.append(route)
        if not matched:
            raise NoURLPatternMatched(path)
        return matched

    def _select(self, matched, method, params):
        allowed = []
        for route in matched:
            if route.method == method and not (
                    params.get(self.id) == 'new'
                    and not route.url.endswith('new')):
                return route, allowed
            if not route.method in allowed:
                allowed.append(route.method)
        return None, allowed

    def resolve(self, path, method):
        """ Find route for ``path`` and ``method``

        :return:
            ``(route, params)`` pair
        :raises resourcer.exc.NoURLPatternMatched:
            if no route matches ``path``
        :raises resourcer.exc.MethodNotAllowed:
            if routes match ``path`` but none accepts ``method``
        """
        params = {}
        matched = self.match(path, params)
        route, allowed = self._select(matched, method.upper(), params)
        if route is None:
            raise MethodNotAllowed(allowed)
        return route, params

    def middleware(self):
        """ Handler which dispatches requests to resource actions

        Requests which match no route are passed to ``next``, requests which
        match by URL but not by method are answered with ``405 Method Not
        Allowed`` (``204 No Content`` for ``OPTIONS``) and ``Allow`` header.
        """
        resource = self

        async def dispatch(ctx, next):
            ctx.params = {}
            try:
                matched = resource.match(ctx.path, ctx.params)
            except NoURLPatternMatched:
                return await call_next(next)

            method = ctx.method.upper()
            route, allowed = resource._select(matched, method, ctx.params)
            if route is not None:
                log.debug('%s %s dispatched to %r', method, ctx.path, route)
                return await call_handler(
                    route.handler, ctx, lambda: call_next(next))

            ctx.status = 204 if method == 'OPTIONS' else 405
            ctx.set('Allow', ', '.join(allowed))
            log.debug('%s %s not allowed, allowed methods: %s',
                method, ctx.path, ', '.join(allowed))

        dispatch.resource = resource
        return dispatch

    def nest(self, resource):
        """ Nest ``resource`` under this resource's identifier

        Returns a new resource with its base path and routes prefixed by
        this resource's base path and identifier parameter, ``resource``
        itself isn't modified::

            threads = forums.nest(Resource('threads', {...}))
            threads.base == '/forums/:forum/threads'

        """
        prefix = trailing_slash(self.base) + ':' + self.id
        nested = resource._prefixed(prefix)
        self.resources.append(nested)
        log.debug('nested %r under %r', nested, self)
        return nested

    add = nest

    def _prefixed(self, prefix):
        nested = copy.copy(self)
        nested.base = prefix + self.base
        nested.routes = [route.prefixed(prefix) for route in self.routes]
        nested.resources = [r._prefixed(prefix) for r in self.resources]
        return nested

    def reverse(self, action, *args, **kwargs):
        """ Reverse route for ``action`` using ``*args`` as URL parameters
        and ``**kwargs`` as query string parameters

        :raises resourcer.exc.RouteReversalError:
            if there's no route for ``action`` or not enough ``args``
        """
        for route in self.routes:
            if route.action == action:
                break
        else:
            raise RouteReversalError("no route for action '%s'" % action)
        url = route.pattern.reverse(*args)
        if kwargs:
            url += '?' + urlencode(kwargs)
        return url

    def __iter__(self):
        return iter(self.routes)

    def __repr__(self):
        return '%s(name=%r, base=%r)' % (
            self.__class__.__name__, self.name, self.base)

    __str__ = __repr__

def resource(*args, **kwargs):
    """ Directive for defining resources

    Same as :class:`.Resource` but also accepts ``parent``, a resource to
    nest the new one under::

        forums = resource('forums', {'index': list_forums})
        threads = resource('threads', {'show': show_thread}, parent=forums)

    """
    parent = kwargs.pop('parent', None)
    r = Resource(*args, **kwargs)
    if parent is not None:
        r = parent.nest(r)
    return r
