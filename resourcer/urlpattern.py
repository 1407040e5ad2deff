"""

    resourcer.urlpattern -- matching URL against template
    =====================================================

    Templates use Express-style placeholders::

        /forums/:forum              one path segment bound to ``forum``
        /files/:name(\\d+)           segment restricted by a custom group
        /forums/:forum?             optional segment, leading slash included
        /static/*                   anonymous greedy capture

"""

import re

from resourcer.utils import cached_property
from resourcer.exc import (
        InvalidRoutePattern, RouteReversalError, NoURLPatternMatched)

__all__ = ('URLPattern',)

class URLPattern(object):
    """ Compiled URL template

    :param pattern:
        URL template
    :param sensitive:
        match case-sensitively, by default matching ignores case
    :param strict:
        do not tolerate a trailing slash which is absent from the template
    """

    _param_re = re.compile(r"""
        (?P<slash>/)?                       # leading slash
        :(?P<label>\w+)                     # label
        (?P<capture>\(.*?\))?               # optional custom group
        (?P<optional>\?)?                   # optional segment marker
        |
        (?P<star>\*)                        # anonymous capture
        """, re.VERBOSE)

    def __init__(self, pattern, sensitive=False, strict=False):
        self.pattern = pattern
        self.sensitive = sensitive
        self.strict = strict

    @cached_property
    def is_exact(self):
        return self._param_re.search(self.pattern) is None

    @cached_property
    def tokens(self):
        tokens = []
        last = 0
        for m in self._param_re.finditer(self.pattern):
            if m.start() > last:
                tokens.append(('text', self.pattern[last:m.start()]))
            if m.group('star'):
                tokens.append(('star', None))
            else:
                tokens.append(('param', m.group('label'), m.group('slash') or '',
                    m.group('capture'), bool(m.group('optional'))))
            last = m.end()
        if last < len(self.pattern):
            tokens.append(('text', self.pattern[last:]))
        return tokens

    @cached_property
    def params(self):
        """ Parameter names aligned with pattern groups, ``None`` for
        anonymous ones"""
        return [t[1] if t[0] == 'param' else None
            for t in self.tokens if t[0] != 'text']

    @cached_property
    def compiled(self):
        compiled = ''
        for token in self.tokens:
            kind = token[0]
            if kind == 'text':
                compiled += re.escape(token[1])
            elif kind == 'star':
                compiled += '(.*)'
            else:
                _, label, slash, capture, optional = token
                slash = re.escape(slash)
                compiled += '%s(?:%s%s)%s' % (
                    '' if optional else slash,
                    slash if optional else '',
                    capture or '([^/]+?)',
                    '?' if optional else '')
        if not self.strict:
            compiled += '/?'
        try:
            return re.compile(
                compiled, 0 if self.sensitive else re.IGNORECASE)
        except re.error as e:
            raise InvalidRoutePattern(
                "cannot compile '%s': %s" % (self.pattern, e))

    def match(self, path):
        """ Match ``path`` against template

        :return:
            tuple of captured strings, positionally aligned with
            :attr:`params`
        :raises resourcer.exc.NoURLPatternMatched:
            if ``path`` doesn't match
        """
        m = self.compiled.fullmatch(path)
        if not m:
            raise NoURLPatternMatched("no match for '%s' against '%s'" % (
                path, self.compiled.pattern))
        return m.groups()

    def reverse(self, *args):
        if self.is_exact:
            return self.pattern

        args = list(args)
        r = ''
        for token in self.tokens:
            kind = token[0]
            if kind == 'text':
                r += token[1]
            elif kind == 'star':
                r += str(args.pop(0)) if args else ''
            else:
                _, label, slash, capture, optional = token
                if args:
                    r += slash + str(args.pop(0))
                elif not optional:
                    raise RouteReversalError(
                        "not enough params for reversal of '%s' route,"
                        " missing '%s'" % (self.pattern, label))
        return r or '/'

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.pattern)
