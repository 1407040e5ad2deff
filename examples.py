from resourcer import Application, Resource

async def list_forums(ctx, next):
    """ List forums"""
    ctx.body = 'forums'

async def show_forum(ctx, next):
    """ Show forum by ``forum`` id"""
    ctx.body = 'forum %(forum)s' % ctx.params

async def list_threads(ctx, next):
    """ List threads of a forum"""
    ctx.body = 'threads of forum %(forum)s' % ctx.params

async def show_thread(ctx, next):
    """ Show thread"""
    ctx.body = 'thread %(thread)s in forum %(forum)s' % ctx.params

async def log_request(ctx, next):
    """ Mark every thread request"""
    ctx.set('X-Resource', 'threads')
    await next()

forums = Resource('forums', {'index': list_forums, 'show': show_forum})
threads = forums.nest(Resource('threads', log_request, {
    'index': list_threads,
    'show': show_thread,
    }))

app = Application(forums.middleware(), threads.middleware())
