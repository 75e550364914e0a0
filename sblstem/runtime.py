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
Per-call scan state of the stemming machine.

A ``String`` holds everything a rule program mutates while it stems a
single word: the character buffer, the cursor, the window bounds, the
current slice and the region marks. A new instance is created for
every word, so rule programs never share mutable state.
"""

import collections
import contextlib

from sblstem.among import find_among, find_among_b


__all__ = ['InvariantError', 'String']


class InvariantError(ValueError):
    """
    Raised when the offset bookkeeping of a ``String`` is inconsistent.

    This always indicates a bug in a rule program, never a property of
    the input text.
    """


_Window = collections.namedtuple('_Window', 'attr value')


class String(object):

    def __init__(self, s, marks=()):
        self.chars = list(s)  # Lists are mutable, strings are not
        self.cursor = 0
        self.limit = len(self.chars)
        self.limit_backward = 0
        self.bra = 0
        self.ket = self.limit
        self.marks = dict.fromkeys(marks, 0)

    def __len__(self):
        return len(self.chars)

    def __str__(self):
        return ''.join(self.chars)

    def __repr__(self):
        return ('<String %r cursor=%d limit=%d limit_backward=%d bra=%d '
                'ket=%d marks=%r>' % (str(self), self.cursor, self.limit,
                self.limit_backward, self.bra, self.ket, self.marks))

    def check(self):
        """
        Raise ``InvariantError`` unless all offsets are consistent.
        """
        if not (0 <= self.limit_backward <= self.cursor <= self.limit <=
                len(self.chars)):
            raise InvariantError(
                'Cursor %d outside of window [%d, %d] (length %d).' % (
                self.cursor, self.limit_backward, self.limit,
                len(self.chars)))
        if self.bra > self.ket:
            raise InvariantError('Slice start %d is after its end %d.' % (
                self.bra, self.ket))

    #
    # Cursor movement
    #

    def hop(self, n):
        c = self.cursor + n
        if n < 0 or c > self.limit:
            return False
        self.cursor = c
        return True

    def hop_b(self, n):
        c = self.cursor - n
        if n < 0 or c < self.limit_backward:
            return False
        self.cursor = c
        return True

    def next(self):
        return self.hop(1)

    def next_b(self):
        return self.hop_b(1)

    def eq_s(self, value):
        """
        Check for ``value`` right of the cursor and move past it.
        """
        c = self.cursor + len(value)
        if c > self.limit or self.chars[self.cursor:c] != list(value):
            return False
        self.cursor = c
        return True

    def eq_s_b(self, value):
        """
        Check for ``value`` left of the cursor and move before it.
        """
        c = self.cursor - len(value)
        if c < self.limit_backward or self.chars[c:self.cursor] != list(value):
            return False
        self.cursor = c
        return True

    def tomark(self, value):
        if self.cursor > value or self.limit < value:
            return False
        self.cursor = value
        return True

    def tomark_b(self, value):
        if self.cursor < value or self.limit_backward > value:
            return False
        self.cursor = value
        return True

    def atlimit(self):
        return self.cursor == self.limit

    def atlimit_b(self):
        return self.cursor == self.limit_backward

    def tolimit(self):
        self.cursor = self.limit
        return True

    def tolimit_b(self):
        self.cursor = self.limit_backward
        return True

    def setmark(self, name, value=None):
        """
        Store the cursor (or ``value``) as the region mark ``name``.
        """
        if value is None:
            value = self.cursor
        if not 0 <= value <= len(self.chars):
            raise InvariantError('Mark %s=%d outside of string (length %d).'
                                 % (name, value, len(self.chars)))
        self.marks[name] = value
        return True

    def goto(self, cmd):
        """
        Move forward to the first position where ``cmd`` succeeds.

        The cursor is left in front of the match. If no such position
        exists the cursor is restored and ``False`` is returned.
        """
        start = self.cursor
        while True:
            v = self.cursor
            if cmd():
                self.cursor = v
                return True
            self.cursor = v
            if self.cursor >= self.limit:
                self.cursor = start
                return False
            self.cursor += 1

    def gopast(self, cmd):
        """
        Move forward past the first position where ``cmd`` succeeds.
        """
        start = self.cursor
        while True:
            if cmd():
                return True
            if self.cursor >= self.limit:
                self.cursor = start
                return False
            self.cursor += 1

    def goto_b(self, cmd):
        start = self.cursor
        while True:
            v = self.cursor
            if cmd():
                self.cursor = v
                return True
            self.cursor = v
            if self.cursor <= self.limit_backward:
                self.cursor = start
                return False
            self.cursor -= 1

    def gopast_b(self, cmd):
        start = self.cursor
        while True:
            if cmd():
                return True
            if self.cursor <= self.limit_backward:
                self.cursor = start
                return False
            self.cursor -= 1

    #
    # Groupings
    #

    def in_grouping(self, g):
        return g.test(self)

    def out_grouping(self, g):
        return g.test(self, member=False)

    def in_grouping_b(self, g):
        return g.test(self, backward=True)

    def out_grouping_b(self, g):
        return g.test(self, backward=True, member=False)

    #
    # Rule tables
    #

    def find_among(self, table, routines=None):
        return find_among(self, table, routines)

    def find_among_b(self, table, routines=None):
        return find_among_b(self, table, routines)

    #
    # Windows
    #

    def restrict_to(self, mark, backward=True):
        """
        Narrow the window so that it starts (backward) or ends (forward)
        at ``mark``.

        Returns a token for ``restore`` or ``None`` if the cursor lies
        on the wrong side of ``mark``, in which case nothing is changed.
        """
        if backward:
            if self.cursor < mark or mark < self.limit_backward:
                return None
            token = _Window('limit_backward', self.limit_backward)
            self.limit_backward = mark
        else:
            if self.cursor > mark or mark > self.limit:
                return None
            token = _Window('limit', self.limit)
            self.limit = mark
        return token

    def restore(self, token):
        """
        Undo a ``restrict_to`` call.
        """
        setattr(self, token.attr, token.value)
        self.check()

    @contextlib.contextmanager
    def region(self, mark, backward=True):
        """
        Context manager for ``restrict_to`` and ``restore``.

        Yields ``True`` if the window could be narrowed. The previous
        bound is restored when the block is left, no matter how.
        """
        token = self.restrict_to(mark, backward)
        try:
            yield token is not None
        finally:
            if token is not None:
                self.restore(token)

    def backwards(self, cmd):
        """
        Run ``cmd`` in backward mode on the text right of the cursor.
        """
        self.limit_backward = self.cursor
        self.cursor = self.limit
        try:
            return cmd()
        finally:
            self.cursor = self.limit_backward

    def do(self, cmd):
        """
        Run ``cmd``, keep its edits and restore the cursor.
        """
        v = self.cursor
        cmd()
        self.cursor = v
        return True

    def do_b(self, cmd):
        # In backward mode the cursor is restored relative to ``limit``
        v = self.limit - self.cursor
        cmd()
        self.cursor = self.limit - v
        return True

    def test(self, cmd):
        v = self.cursor
        r = cmd()
        self.cursor = v
        return r

    def test_b(self, cmd):
        v = self.limit - self.cursor
        r = cmd()
        self.cursor = self.limit - v
        return r

    #
    # Slices
    #

    def set_bra(self):
        self.bra = self.cursor
        return True

    def set_ket(self):
        self.ket = self.cursor
        return True

    def replace(self, bra, ket, value):
        """
        Replace ``chars[bra:ket]`` by ``value``.

        Offsets at or after ``ket`` are shifted by the change in length,
        offsets inside the replaced range collapse to ``bra``. Returns
        the change in length.
        """
        if not 0 <= bra <= ket <= len(self.chars):
            raise InvariantError('Invalid slice [%d, %d] (length %d).' % (
                bra, ket, len(self.chars)))
        adjustment = len(value) - (ket - bra)

        def adjust(offset):
            if offset >= ket:
                return offset + adjustment
            if offset > bra:
                return bra
            return offset

        self.chars[bra:ket] = value
        self.cursor = adjust(self.cursor)
        self.limit = adjust(self.limit)
        self.limit_backward = adjust(self.limit_backward)
        self.bra = adjust(self.bra)
        self.ket = adjust(self.ket)
        for name, offset in self.marks.items():
            self.marks[name] = adjust(offset)
        self.check()
        return adjustment

    def slice_check(self):
        if not (0 <= self.bra <= self.ket <= self.limit <= len(self.chars)):
            raise InvariantError('Invalid slice [%d, %d] (limit %d, length '
                                 '%d).' % (self.bra, self.ket, self.limit,
                                 len(self.chars)))

    def slice_from(self, value):
        """
        Replace the current slice by ``value``.
        """
        self.slice_check()
        bra = self.bra
        self.replace(bra, self.ket, value)
        self.bra = bra
        self.ket = bra + len(value)
        return True

    def slice_del(self):
        return self.slice_from('')

    def slice_to(self):
        """
        Return the content of the current slice.
        """
        self.slice_check()
        return ''.join(self.chars[self.bra:self.ket])

    def insert(self, value):
        """
        Insert ``value`` at the cursor.

        Offsets at the cursor, including the cursor itself, move behind
        the inserted text.
        """
        self.replace(self.cursor, self.cursor, value)
        return True
