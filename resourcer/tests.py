"""

    resourcer.tests -- test suite
    =============================

"""

import asyncio
from unittest import TestCase
from webob import Request, exc

from resourcer import Resource, Route, Application, resource
from resourcer import DEFAULT_METHODS, merge_methods
from resourcer.compose import compose
from resourcer.context import Context
from resourcer.urlpattern import URLPattern
from resourcer.utils import trailing_slash, singularize
from resourcer.exc import (
    NoURLPatternMatched, MethodNotAllowed, ResourceConfigurationError,
    InvalidRoutePattern, RouteReversalError)

__all__ = ()

async def noop(ctx, next):
    pass

def status(code):
    async def handler(ctx, next):
        ctx.status = code
    return handler

class TestRouting(TestCase):

    def request(self, app, url, method='GET'):
        req = Request.blank(url, {'REQUEST_METHOD': method})
        return req.get_response(app)

    def assertNoMatch(self, r, url):
        self.assertRaises(NoURLPatternMatched, r.match, url)

class TestUtils(TestCase):

    def test_trailing_slash(self):
        self.assertEqual(trailing_slash('/forums'), '/forums/')
        self.assertEqual(trailing_slash('/forums/'), '/forums/')
        self.assertEqual(trailing_slash('/'), '/')
        self.assertEqual(trailing_slash(''), '/')

    def test_singularize(self):
        self.assertEqual(singularize('forums'), 'forum')
        self.assertEqual(singularize('threads'), 'thread')
        self.assertEqual(singularize('categories'), 'category')

class TestURLPattern(TestRouting):

    def test_exact(self):
        p = URLPattern('/forums')
        self.assertTrue(p.is_exact)
        self.assertEqual(p.params, [])
        self.assertEqual(p.match('/forums'), ())
        self.assertEqual(p.match('/forums/'), ())
        self.assertNoMatch(p, '/forums/1')
        self.assertNoMatch(p, '/forumsweek')
        self.assertNoMatch(p, '/forums//')

    def test_root(self):
        p = URLPattern('/')
        self.assertEqual(p.match('/'), ())
        self.assertNoMatch(p, '/users')

    def test_params(self):
        p = URLPattern('/forums/:forum/threads/:thread')
        self.assertFalse(p.is_exact)
        self.assertEqual(p.params, ['forum', 'thread'])
        self.assertEqual(p.match('/forums/54/threads/12'), ('54', '12'))
        self.assertEqual(p.match('/forums/54/threads/12/'), ('54', '12'))
        self.assertNoMatch(p, '/forums/54/threads')
        self.assertNoMatch(p, '/forums/54/threads/12/posts')

    def test_case_insensitive(self):
        p = URLPattern('/forums/:forum')
        self.assertEqual(p.match('/FORUMS/Abc'), ('Abc',))
        p = URLPattern('/forums/:forum', sensitive=True)
        self.assertNoMatch(p, '/FORUMS/abc')

    def test_strict(self):
        p = URLPattern('/forums', strict=True)
        self.assertEqual(p.match('/forums'), ())
        self.assertNoMatch(p, '/forums/')

    def test_custom_group(self):
        p = URLPattern('/files/:id(\\d+)')
        self.assertEqual(p.params, ['id'])
        self.assertEqual(p.match('/files/42'), ('42',))
        self.assertNoMatch(p, '/files/abc')

    def test_optional(self):
        p = URLPattern('/forums/:forum?')
        self.assertEqual(p.match('/forums'), (None,))
        self.assertEqual(p.match('/forums/1'), ('1',))

    def test_star(self):
        p = URLPattern('/static/*')
        self.assertEqual(p.params, [None])
        self.assertEqual(p.match('/static/css/main.css'), ('css/main.css',))

    def test_invalid(self):
        p = URLPattern('/x/:id(()')
        self.assertRaises(InvalidRoutePattern, p.match, '/x/1')

    def test_reverse(self):
        p = URLPattern('/forums/:forum/threads/:thread')
        self.assertEqual(p.reverse(1, 'b'), '/forums/1/threads/b')
        self.assertRaises(RouteReversalError, p.reverse, 1)
        self.assertEqual(URLPattern('/forums').reverse(), '/forums')
        self.assertEqual(URLPattern('/forums/:forum?').reverse(), '/forums')

class TestMethods(TestCase):

    def test_defaults(self):
        methods = merge_methods()
        self.assertEqual(methods, DEFAULT_METHODS)
        self.assertIsNot(methods, DEFAULT_METHODS)

    def test_overrides(self):
        methods = merge_methods({'update': 'patch', 'search': 'GET'})
        self.assertEqual(methods['update'], 'PATCH')
        self.assertEqual(methods['search'], 'GET')
        self.assertEqual(methods['show'], 'GET')
        self.assertEqual(DEFAULT_METHODS['update'], 'PUT')
        self.assertFalse('search' in DEFAULT_METHODS)

class TestResource(TestRouting):

    def test_create(self):
        r = Resource('forums', {'index': noop, 'show': noop})
        self.assertEqual(r.name, 'forums')
        self.assertEqual(r.id, 'forum')
        self.assertEqual(r.base, '/forums')
        self.assertEqual(len(r.routes), 2)
        self.assertEqual(r.routes[0].url, '/forums')
        self.assertEqual(r.routes[1].url, '/forums/:forum')
        self.assertEqual(r.routes[1].params, ['forum'])
        self.assertEqual(list(r), r.routes)

    def test_root(self):
        r = Resource({'index': noop, 'show': noop})
        self.assertEqual(r.name, None)
        self.assertEqual(r.id, 'id')
        self.assertEqual(r.base, '/')
        self.assertEqual([x.url for x in r.routes], ['/', '/:id'])

    def test_urls(self):
        actions = dict((name, noop) for name in DEFAULT_METHODS)
        r = Resource('users', actions)
        urls = dict((x.action, (x.method, x.url)) for x in r.routes)
        self.assertEqual(urls, {
            'options': ('OPTIONS', '/users'),
            'new': ('GET', '/users/new'),
            'create': ('POST', '/users'),
            'edit': ('GET', '/users/:user/edit'),
            'update': ('PUT', '/users/:user'),
            'index': ('GET', '/users'),
            'list': ('GET', '/users'),
            'read': ('GET', '/users/:user'),
            'show': ('GET', '/users/:user'),
            'destroy': ('DELETE', '/users/:user'),
            'remove': ('DELETE', '/users/:user'),
        })

    def test_ignores_unknown_actions(self):
        r = Resource('users', {'invalid': True, 'show': noop})
        self.assertEqual([x.action for x in r.routes], ['show'])

    def test_custom_actions(self):
        r = Resource('users', {'search': noop, 'showcase': noop},
            methods={'search': 'get', 'showcase': 'GET'})
        urls = dict((x.action, (x.method, x.url)) for x in r.routes)
        self.assertEqual(urls['search'], ('GET', '/users'))
        self.assertEqual(urls['showcase'], ('GET', '/users/:user'))

    def test_custom_id(self):
        r = Resource('users', {'show': noop, 'edit': noop}, id='user_id')
        self.assertEqual(r.id, 'user_id')
        self.assertEqual([x.url for x in r.routes],
            ['/users/:user_id', '/users/:user_id/edit'])

    def test_configuration_errors(self):
        self.assertRaises(ResourceConfigurationError, Resource)
        self.assertRaises(ResourceConfigurationError, Resource, 'users')
        self.assertRaises(ResourceConfigurationError, Resource, 'users', noop)
        self.assertRaises(ResourceConfigurationError,
            Resource, 'users', 'middleware', {'show': noop})
        self.assertRaises(ResourceConfigurationError,
            Resource, 'users', {'show': 'not a handler'})

    def test_handler_composition(self):
        r = Resource('users', {'show': noop, 'index': [noop, noop]})
        show, index = r.routes
        self.assertIs(show.handler, noop)
        self.assertEqual(index.handler.handlers, (noop, noop))

        def middleware(ctx, next):
            return next()
        r = Resource('users', middleware, {'show': noop, 'index': [noop]})
        show, index = r.routes
        self.assertEqual(show.handler.handlers, (middleware, noop))
        self.assertEqual(index.handler.handlers[0], middleware)

    def test_logs_routes(self):
        with self.assertLogs('resourcer', 'DEBUG') as logs:
            Resource('users', {'show': noop})
        self.assertTrue(any('/users/:user' in line for line in logs.output))

    def test_directive(self):
        forums = resource('forums', {'index': noop})
        threads = resource('threads', {'show': noop}, parent=forums)
        self.assertEqual(threads.base, '/forums/:forum/threads')
        self.assertEqual(forums.resources, [threads])

class TestMatch(TestRouting):

    def setUp(self):
        self.users = Resource('users', {
            'index': noop,
            'create': noop,
            'show': noop,
            'update': noop,
            'edit': noop,
        })

    def test_match(self):
        params = {}
        matched = self.users.match('/users/123', params)
        self.assertEqual([x.action for x in matched], ['show', 'update'])
        self.assertEqual(params, {'user': '123'})

        matched = self.users.match('/users')
        self.assertEqual([x.action for x in matched], ['index', 'create'])

        params = {}
        matched = self.users.match('/users/123/edit', params)
        self.assertEqual([x.action for x in matched], ['edit'])
        self.assertEqual(params, {'user': '123'})

    def test_no_match(self):
        self.assertNoMatch(self.users, '/forums')
        self.assertNoMatch(self.users, '/users/1/2/3')
        self.assertNoMatch(self.users, '/')

    def test_query_string(self):
        self.assertEqual(
            self.users.match('/users?foo=bar'), self.users.match('/users'))

    def test_idempotent(self):
        first, second = {}, {}
        self.assertEqual(
            self.users.match('/users/1', first),
            self.users.match('/users/1', second))
        self.assertEqual(first, second)

    def test_route_match(self):
        route = Route('show', 'GET', '/forums/:forum/threads/:thread', noop)
        params = {}
        self.assertEqual(
            route.match('/forums/1/threads/2', params), ('1', '2'))
        self.assertEqual(params, {'forum': '1', 'thread': '2'})

    def test_anonymous_groups(self):
        route = Route('index', 'GET', '/static/*', noop)
        params = {}
        route.match('/static/a/b', params)
        self.assertEqual(params, {})

    def test_resolve(self):
        route, params = self.users.resolve('/users/1', 'put')
        self.assertEqual(route.action, 'update')
        self.assertEqual(params, {'user': '1'})

        with self.assertRaises(MethodNotAllowed) as cm:
            self.users.resolve('/users/1', 'DELETE')
        self.assertEqual(cm.exception.allowed, ['GET', 'PUT'])
        self.assertEqual(cm.exception.response.status_code, 405)
        self.assertEqual(cm.exception.response.headers['Allow'], 'GET, PUT')

        self.assertRaises(
            NoURLPatternMatched, self.users.resolve, '/forums', 'GET')

class TestNest(TestRouting):

    def test_nest(self):
        forums = Resource('forums', {'index': noop})
        threads = Resource('threads', {'index': noop, 'show': noop})
        nested = forums.nest(threads)
        self.assertEqual(nested.base, '/forums/:forum/threads')
        self.assertEqual([x.url for x in nested.routes], [
            '/forums/:forum/threads',
            '/forums/:forum/threads/:thread'])
        self.assertEqual(nested.routes[1].params, ['forum', 'thread'])
        self.assertEqual(forums.resources, [nested])
        self.assertEqual([x.url for x in forums.routes], ['/forums'])

    def test_nested_resource_is_not_modified(self):
        forums = Resource('forums', {'index': noop})
        boards = Resource('boards', {'index': noop})
        threads = Resource('threads', {'show': noop})
        forums.nest(threads)
        nested = boards.nest(threads)
        self.assertEqual(threads.base, '/threads')
        self.assertEqual(threads.routes[0].url, '/threads/:thread')
        self.assertEqual(nested.base, '/boards/:board/threads')
        self.assertEqual(nested.routes[0].url, '/boards/:board/threads/:thread')

    def test_nest_anonymous(self):
        forums = Resource('forums', {'index': noop})
        nested = forums.nest(Resource({'index': noop, 'show': noop}))
        self.assertEqual(nested.base, '/forums/:forum/')
        self.assertEqual([x.url for x in nested.routes],
            ['/forums/:forum/', '/forums/:forum/:id'])

    def test_nest_under_custom_id(self):
        forums = Resource('forums', {'index': noop}, id='forum_id')
        nested = forums.nest(Resource('threads', {'show': noop}))
        self.assertEqual(nested.routes[0].url,
            '/forums/:forum_id/threads/:thread')

    def test_deep_nesting(self):
        forums = Resource('forums', {'index': noop})
        threads = forums.nest(Resource('threads', {'index': noop}))
        posts = threads.nest(Resource('posts', {'show': noop}))
        self.assertEqual(posts.base, '/forums/:forum/threads/:thread/posts')
        self.assertEqual(posts.routes[0].url,
            '/forums/:forum/threads/:thread/posts/:post')

    def test_nesting_carries_children(self):
        threads = Resource('threads', {'index': noop})
        threads.nest(Resource('posts', {'show': noop}))
        forums = Resource('forums', {'index': noop})
        nested = forums.nest(threads)
        posts = nested.resources[0]
        self.assertEqual(posts.base, '/forums/:forum/threads/:thread/posts')
        self.assertEqual(posts.routes[0].url,
            '/forums/:forum/threads/:thread/posts/:post')
        self.assertEqual(threads.resources[0].base, '/threads/:thread/posts')

class TestReverse(TestRouting):

    def test_reverse(self):
        users = Resource('users', {'index': noop, 'show': noop, 'edit': noop})
        self.assertEqual(users.reverse('index'), '/users')
        self.assertEqual(users.reverse('show', 42), '/users/42')
        self.assertEqual(users.reverse('edit', 42), '/users/42/edit')
        self.assertEqual(users.reverse('index', page=2), '/users?page=2')
        self.assertRaises(RouteReversalError, users.reverse, 'destroy')
        self.assertRaises(RouteReversalError, users.reverse, 'show')

    def test_reverse_nested(self):
        forums = Resource('forums', {'index': noop})
        threads = forums.nest(Resource('threads', {'show': noop}))
        self.assertEqual(threads.reverse('show', 54, 12),
            '/forums/54/threads/12')

class TestCompose(TestCase):

    def test_order(self):
        calls = []

        async def first(ctx, next):
            calls.append('first')
            await next()
            calls.append('first after')

        async def second(ctx, next):
            calls.append('second')
            await next()

        async def last():
            calls.append('last')

        asyncio.run(compose([first, second])(None, last))
        self.assertEqual(calls, ['first', 'second', 'last', 'first after'])

    def test_short_circuit(self):
        calls = []

        async def first(ctx, next):
            calls.append('first')

        async def second(ctx, next):
            calls.append('second')

        asyncio.run(compose([first, second])(None))
        self.assertEqual(calls, ['first'])

    def test_result(self):
        async def first(ctx, next):
            return await next()

        def second(ctx, next):
            return 'result'

        self.assertEqual(asyncio.run(compose([first, second])(None)), 'result')

    def test_next_called_twice(self):
        async def twice(ctx, next):
            await next()
            await next()

        self.assertRaises(
            RuntimeError, asyncio.run, compose([twice, noop])(None))

    def test_not_callable(self):
        self.assertRaises(TypeError, compose, [noop, 'handler'])

class TestContext(TestCase):

    def test_defaults(self):
        ctx = Context(Request.blank('/users?page=2'))
        self.assertEqual(ctx.status, 404)
        self.assertEqual(ctx.method, 'GET')
        self.assertEqual(ctx.path, '/users')
        self.assertEqual(ctx.query['page'], '2')
        self.assertEqual(ctx.params, {})

    def test_body(self):
        ctx = Context(Request.blank('/'))
        ctx.body = 'yo'
        self.assertEqual(ctx.status, 200)
        self.assertEqual(ctx.body, 'yo')

        ctx = Context(Request.blank('/'))
        ctx.status = 201
        ctx.body = b'yo'
        self.assertEqual(ctx.status, 201)
        self.assertEqual(ctx.response.body, b'yo')

    def test_headers(self):
        ctx = Context(Request.blank('/', headers={'X-Token': 'abc'}))
        self.assertEqual(ctx.get('X-Token'), 'abc')
        self.assertEqual(ctx.get('X-Missing', 'no'), 'no')
        ctx.set('Allow', 'GET')
        self.assertEqual(ctx.response.headers['Allow'], 'GET')

class TestDispatch(TestRouting):

    def test_ignores_unsupported_actions(self):
        users = Resource('users', {'invalid': True, 'show': status(200)})
        app = Application(users.middleware())
        self.assertEqual(self.request(app, '/users/123').status_code, 200)

    def test_new_and_show(self):
        users = Resource('users', {'new': status(500), 'show': status(200)})
        app = Application(users.middleware())
        self.assertEqual(self.request(app, '/users/test').status_code, 200)
        self.assertEqual(self.request(app, '/users/new').status_code, 500)

    def test_show_and_new(self):
        users = Resource('users', {'show': status(200), 'new': status(500)})
        self.assertEqual(users.base, '/users')
        app = Application(users.middleware())
        self.assertEqual(self.request(app, '/users/new').status_code, 500)
        self.assertEqual(self.request(app, '/users/test').status_code, 200)

    def test_nested(self):
        seen = []

        async def show(ctx, next):
            seen.append(dict(ctx.params))
            ctx.status = 200

        forums = Resource('forums', {'index': noop})
        threads = forums.nest(Resource('threads', {'index': noop, 'show': show}))
        self.assertEqual(threads.base, '/forums/:forum/threads')
        app = Application(threads.middleware())
        res = self.request(app, '/forums/54/threads/12')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(seen, [{'forum': '54', 'thread': '12'}])

    def test_methods_override(self):
        users = Resource('users', {'update': status(200)},
            methods={'update': 'PATCH'})
        app = Application(users.middleware())
        self.assertEqual(
            self.request(app, '/users/123', 'PATCH').status_code, 200)
        res = self.request(app, '/users/123', 'PUT')
        self.assertEqual(res.status_code, 405)
        self.assertEqual(res.headers['Allow'], 'PATCH')

    def test_id_override(self):
        seen = []

        async def show(ctx, next):
            seen.append(dict(ctx.params))
            ctx.status = 200

        app = Application(Resource('users', {'show': show},
            id='user_id').middleware())
        self.assertEqual(self.request(app, '/users/123').status_code, 200)
        self.assertEqual(seen, [{'user_id': '123'}])

    def test_middleware_and_action_handlers(self):
        async def pre_request(ctx, next):
            ctx.status = 200
            ctx.body = 'firstMiddleware'
            await next()

        async def second(ctx, next):
            ctx.body += '|secondMiddleware'

        async def third(ctx, next):
            ctx.body += '|never'

        users = Resource('users', pre_request, {'show': [second, third]})
        res = self.request(Application(users.middleware()), '/users/1')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.text, 'firstMiddleware|secondMiddleware')

    def test_middleware_with_custom_id(self):
        seen = []

        async def pre_request(ctx, next):
            ctx.status = 200
            await next()

        async def show(ctx, next):
            seen.append(ctx.params['user_id'])
            ctx.body = 'yo'

        users = Resource('users', pre_request, {'show': show}, id='user_id')
        res = self.request(Application(users.middleware()), '/users/1')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.text, 'yo')
        self.assertEqual(seen, ['1'])

    def test_middleware_short_circuits(self):
        calls = []

        async def guard(ctx, next):
            ctx.status = 200

        async def show(ctx, next):
            calls.append('show')

        users = Resource('users', guard, {'show': show})
        res = self.request(Application(users.middleware()), '/users/1')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(calls, [])

    def test_root_resource(self):
        app = Application(Resource({'index': status(200)}).middleware())
        self.assertEqual(self.request(app, '/').status_code, 200)

    def test_query_string(self):
        app = Application(Resource('users', {'index': status(200)}).middleware())
        self.assertEqual(self.request(app, '/users?foo').status_code, 200)
        self.assertEqual(self.request(app, '/users?foo=bar').status_code, 200)

    def test_options(self):
        async def body(ctx, next):
            ctx.body = 'yo'

        app = Application(Resource('users', {
            'index': status(200),
            'show': body,
            'read': body,
            'update': body,
        }).middleware())
        res = self.request(app, '/users/1', 'OPTIONS')
        self.assertEqual(res.status_code, 204)
        self.assertEqual(res.headers['Allow'], 'GET, PUT')

    def test_method_not_allowed(self):
        app = Application(Resource('users', {
            'index': noop,
            'list': noop,
            'create': noop,
            'show': noop,
        }).middleware())
        res = self.request(app, '/users', 'DELETE')
        self.assertEqual(res.status_code, 405)
        self.assertEqual(res.headers['Allow'], 'GET, POST')

    def test_method_not_allowed_stops_chain(self):
        calls = []

        async def fallback(ctx, next):
            calls.append(ctx.path)

        users = Resource('users', {'index': noop})
        app = Application(users.middleware(), fallback)
        res = self.request(app, '/users', 'DELETE')
        self.assertEqual(res.status_code, 405)
        res = self.request(app, '/users', 'OPTIONS')
        self.assertEqual(res.status_code, 204)
        self.assertEqual(calls, [])

    def test_new_guard_without_new_action(self):
        calls = []

        async def show(ctx, next):
            calls.append(ctx.params)

        app = Application(Resource('users', {'show': show}).middleware())
        res = self.request(app, '/users/new')
        self.assertEqual(res.status_code, 405)
        self.assertEqual(res.headers['Allow'], 'GET')
        self.assertEqual(calls, [])

    def test_lowercase_method(self):
        app = Application(Resource('users', {'index': status(200)}).middleware())
        self.assertEqual(self.request(app, '/users', 'get').status_code, 200)
        res = self.request(app, '/users', 'options')
        self.assertEqual(res.status_code, 204)
        self.assertEqual(res.headers['Allow'], 'GET')

    def test_single_action_per_request(self):
        counter = []

        async def increase_counter(ctx, next):
            counter.append(ctx.path)
            ctx.status = 204

        actions = dict((name, increase_counter) for name in (
            'index', 'new', 'create', 'show', 'edit', 'update', 'destroy'))
        app = Application(Resource('threads', actions).middleware())
        for method, url in [
                ('GET', '/threads'),
                ('GET', '/threads/new'),
                ('POST', '/threads'),
                ('GET', '/threads/1234'),
                ('GET', '/threads/1234/edit'),
                ('PUT', '/threads/1234'),
                ('GET', '/threads/1234')]:
            self.assertEqual(self.request(app, url, method).status_code, 204)
        self.assertEqual(len(counter), 7)

    def test_passes_unmatched_to_next(self):
        users = Resource('users', {'index': status(200)})
        forums = Resource('forums', {'index': status(201)})
        app = Application(users.middleware(), forums.middleware())
        self.assertEqual(self.request(app, '/users').status_code, 200)
        self.assertEqual(self.request(app, '/forums').status_code, 201)
        self.assertEqual(self.request(app, '/threads').status_code, 404)

    def test_action_calls_next(self):
        async def show(ctx, next):
            await next()

        async def fallback(ctx, next):
            ctx.body = 'fallback'

        users = Resource('users', {'show': show})
        app = Application(users.middleware(), fallback)
        self.assertEqual(self.request(app, '/users/1').text, 'fallback')

    def test_sync_handler(self):
        def show(ctx, next):
            ctx.body = 'sync'

        app = Application(Resource('users', {'show': show}).middleware())
        self.assertEqual(self.request(app, '/users/1').text, 'sync')

    def test_handler_errors_propagate(self):
        async def show(ctx, next):
            raise ValueError('boom')

        app = Application(Resource('users', {'show': show}).middleware())
        with self.assertLogs('resourcer.app', 'ERROR'):
            self.assertRaises(ValueError, self.request, app, '/users/1')

    def test_http_exceptions(self):
        async def show(ctx, next):
            raise exc.HTTPForbidden()

        app = Application(Resource('users', {'show': show}).middleware())
        self.assertEqual(self.request(app, '/users/1').status_code, 403)

    def test_use(self):
        app = Application()
        self.assertIs(
            app.use(Resource('users', {'index': status(200)}).middleware()),
            app)
        self.assertEqual(self.request(app, '/users').status_code, 200)

    def test_dispatch_directly(self):
        users = Resource('users', {'show': status(200)})
        ctx = Context(Request.blank('/users/7'))
        asyncio.run(users.middleware()(ctx, None))
        self.assertEqual(ctx.status, 200)
        self.assertEqual(ctx.params, {'user': '7'})

    def test_dispatch_directly_action_calls_next(self):
        async def show(ctx, next):
            result = await next()
            ctx.body = 'after next'
            return result

        users = Resource('users', {'show': show})
        ctx = Context(Request.blank('/users/7'))
        self.assertIsNone(asyncio.run(users.middleware()(ctx, None)))
        self.assertEqual(ctx.body, 'after next')

    def test_dispatch_directly_unmatched(self):
        users = Resource('users', {'show': status(200)})
        ctx = Context(Request.blank('/forums'))
        self.assertIsNone(asyncio.run(users.middleware()(ctx, None)))
        self.assertEqual(ctx.status, 404)

    def test_resolve_errors_become_responses(self):
        users = Resource('users', {'show': status(200)})

        async def resolve(ctx, next):
            route, ctx.params = users.resolve(ctx.path, ctx.method)
            await route.handler(ctx, next)

        app = Application(resolve)
        self.assertEqual(self.request(app, '/users/1').status_code, 200)
        res = self.request(app, '/users/1', 'DELETE')
        self.assertEqual(res.status_code, 405)
        self.assertEqual(res.headers['Allow'], 'GET')
        self.assertEqual(self.request(app, '/forums').status_code, 404)
