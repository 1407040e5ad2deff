"""

    resourcer.utils -- utility code
    ===============================

"""

import inflection

__all__ = ('cached_property', 'trailing_slash', 'singularize')

class cached_property(object):
    """ Just like ``property`` but computed only once"""

    def __init__(self, func):
        self.func = func
        self.__name__ = func.__name__
        self.__doc__ = func.__doc__

    def __get__(self, obj, cls):
        if obj is None:
            return self
        val = self.func(obj)
        obj.__dict__[self.__name__] = val
        return val

def trailing_slash(path):
    """ Return ``path`` ending with exactly one added ``/``

        >>> trailing_slash('/forums')
        '/forums/'
        >>> trailing_slash('/')
        '/'

    """
    path = path or '/'
    return path if path.endswith('/') else path + '/'

def singularize(name):
    """ Singular form of a resource name, ``forums`` -> ``forum``"""
    return inflection.singularize(name)
