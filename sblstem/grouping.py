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
Character groupings.

A grouping is a set of characters that is stored as a bit set over the
code point range spanned by its members. Code points outside of that
range are never members.
"""


class Grouping(object):
    """
    An immutable set of characters with cursor-based membership tests.
    """

    def __init__(self, name, chars):
        self.name = name
        self.chars = frozenset(chars)
        if self.chars:
            codes = [ord(c) for c in self.chars]
            self.min = min(codes)
            self.max = max(codes)
            bits = bytearray(((self.max - self.min) >> 3) + 1)
            for code in codes:
                code -= self.min
                bits[code >> 3] |= 1 << (code & 0x7)
            self.bits = bytes(bits)
        else:
            self.min = 0
            self.max = -1
            self.bits = b''

    def __repr__(self):
        return 'Grouping(%r, %r)' % (self.name, ''.join(sorted(self.chars)))

    def __contains__(self, ch):
        code = ord(ch)
        if code < self.min or code > self.max:
            return False
        code -= self.min
        return bool(self.bits[code >> 3] & (1 << (code & 0x7)))

    def __eq__(self, other):
        return (isinstance(other, Grouping) and self.min == other.min and
                self.max == other.max and self.bits == other.bits)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.min, self.max, self.bits))

    def union(self, other, name=None):
        return Grouping(name or self.name, self.chars | other.chars)

    def difference(self, other, name=None):
        return Grouping(name or self.name, self.chars - other.chars)

    def test(self, s, backward=False, member=True):
        """
        Test the character next to the cursor of ``s``.

        In forward mode the character right of the cursor is checked,
        in backward mode the one left of it. If ``member`` is ``False``
        the test succeeds for characters that are not in the grouping.

        On success the cursor moves over the character and ``True`` is
        returned. On failure, or if there is no character left inside
        the current window, the cursor is not changed.
        """
        if backward:
            if s.cursor <= s.limit_backward:
                return False
            ch = s.chars[s.cursor - 1]
        else:
            if s.cursor >= s.limit:
                return False
            ch = s.chars[s.cursor]
        if (ch in self) != member:
            return False
        s.cursor += -1 if backward else 1
        return True
