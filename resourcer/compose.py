"""

    resourcer.compose -- middleware pipelines
    =========================================

    A handler (or middleware, there's no difference) is any callable with the
    signature::

        async def handler(ctx, next):
            ...
            await next()

    where ``next`` is a zero-argument coroutine function which runs the rest of
    the pipeline. Plain functions are accepted as well, their return value is
    awaited only if it's awaitable.

"""

import inspect

__all__ = ('compose', 'call_handler', 'call_next')

async def call_handler(handler, ctx, next):
    """ Call ``handler`` and await its result if needed"""
    result = handler(ctx, next)
    if inspect.isawaitable(result):
        result = await result
    return result

async def call_next(next):
    """ Run ``next`` continuation, ``None`` means there's nothing to run"""
    if next is None:
        return None
    result = next()
    if inspect.isawaitable(result):
        result = await result
    return result

def compose(handlers):
    """ Compose a sequence of ``handlers`` into a single handler

    Handlers run in order, each deciding whether to run the rest of the chain
    by awaiting ``next()``. When the last handler calls ``next()`` control is
    passed to the ``next`` given to the composed handler, if any.

    :param handlers:
        a sequence of callables
    :raises TypeError:
        if any of ``handlers`` isn't callable
    """
    handlers = list(handlers)
    for handler in handlers:
        if not callable(handler):
            raise TypeError('handler must be callable, got %r' % (handler,))

    async def composed(ctx, next=None):
        index = -1

        async def dispatch(i):
            nonlocal index
            if i <= index:
                raise RuntimeError('next() called multiple times')
            index = i
            if i == len(handlers):
                return await call_next(next)
            return await call_handler(handlers[i], ctx, lambda: dispatch(i + 1))

        return await dispatch(0)

    composed.handlers = tuple(handlers)
    return composed
