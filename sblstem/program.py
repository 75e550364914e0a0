#!/usr/bin/env python
# vim:fileencoding=utf8

# Copyright (c) 2014 Florian Brucker
#
# Permission is hereby granted, free of charge, to any person obtaining
# a copy of this software and associated documentation files (the
# "Software"), to deal in the Software without restriction, including
# without limitation the rights to use, copy, modify, merge, publish,
# distribute, sublicense, and/or sell copies of the Software, and to
# permit persons to whom the Software is furnished to do so, subject to
# the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Base class for rule programs.

A rule program combines the tables and groupings compiled from its
Snowball ``source`` with routines written in Python. Routines are
methods that receive the per-call ``String`` and return ``True`` or
``False``. Routines declared in the source (e.g. side conditions of
table entries) are looked up by name.

Program instances only hold constant data. All state of a stemming
run lives on the ``String`` created for it, so one instance can be
used from several threads at once.
"""

import logging
import threading

from pyparsing import ParseBaseException

from sblstem import grammar
from sblstem.among import DELETE, NOOP, REPLACE
from sblstem.runtime import String
from sblstem.utils import add_line_numbers


__all__ = ['Program', 'fold_case']


logger = logging.getLogger(__name__)

_cache = {}
_cache_lock = threading.Lock()


def compile_source(cls):
    """
    Return the compiled ``Declarations`` of a ``Program`` subclass.

    Each class is compiled only once.
    """
    with _cache_lock:
        try:
            return _cache[cls]
        except KeyError:
            pass
        try:
            declarations = grammar.parse_string(cls.source)
        except (ParseBaseException, ValueError):
            logger.error('Could not compile the tables of %s:\n\n%s',
                         cls.__name__, add_line_numbers(cls.source))
            raise
        logger.debug('Compiled %s: %d groupings, %d tables (%s)',
                     cls.__name__, len(declarations.groupings),
                     len(declarations.tables),
                     ', '.join('%s=%d' % (name, len(table)) for name, table
                               in sorted(declarations.tables.items())))
        _cache[cls] = declarations
        return declarations


def fold_case(word):
    """
    Lower-case ``word`` one character at a time.

    The result has the same length as ``word``. Characters whose lower
    case form has several characters (e.g. ``'İ'``) are mapped to the
    first of them.
    """
    return ''.join(c.lower()[:1] for c in word)


class Program(object):
    """
    A stemmer defined by Snowball tables and Python routines.

    Subclasses set ``source`` and implement ``r_stem``.
    """

    source = ''

    def __init__(self):
        declarations = compile_source(type(self))
        self.groupings = declarations.groupings
        self.tables = declarations.tables
        self.marks = declarations.integers
        for name in declarations.routines:
            if not callable(getattr(self, name, None)):
                raise ValueError('%s does not implement routine %s.' % (
                    type(self).__name__, name))

    def __call__(self, word):
        return self.stem(word)

    def stem(self, word):
        """
        Stem a word.

        The word is lower-cased with ``fold_case`` before the routines run.
        """
        if not word:
            return ''
        return str(self.run(fold_case(word)))

    def run(self, word):
        """
        Run the routines on ``word`` and return the final ``String``.

        No case folding is done.
        """
        s = String(word, self.marks)
        self.r_stem(s)
        logger.debug('%s: %r -> %r', type(self).__name__, word, str(s))
        return s

    def r_stem(self, s):
        raise NotImplementedError

    def among(self, s, name):
        """
        Look up table ``name`` at the cursor and return the ``Outcome``.

        Returns ``None`` if nothing matches. Side conditions of table
        entries are routines of this program.
        """
        table = self.tables[name]
        if table.backward:
            result = s.find_among_b(table, self)
        else:
            result = s.find_among(table, self)
        if not result:
            return None
        return table.outcome(result)

    def apply(self, s, outcome):
        """
        Apply an ``Outcome`` to the current slice of ``s``.

        Returns ``False`` (without changing the slice) if the outcome's
        guard routine fails.
        """
        if outcome.guard is not None and not getattr(self, outcome.guard)(s):
            return False
        if outcome.kind == DELETE:
            s.slice_del()
        elif outcome.kind == REPLACE:
            s.slice_from(outcome.literal)
        elif outcome.kind != NOOP:
            raise ValueError('Unknown outcome kind %r.' % outcome.kind)
        return True
