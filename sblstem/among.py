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
Rule tables and the longest-match lookup (Snowball's ``among``).

A table is a flat, sorted list of ``Among`` entries. Each entry links
to the longest earlier entry whose pattern is a prefix (suffix, for
backward tables) of its own pattern. The lookup first locates the
longest candidate using a binary search and then walks these
back-links towards shorter candidates until one matches and its side
condition holds.
"""

import collections


DELETE = 'delete'
REPLACE = 'replace'
NOOP = 'noop'


Among = collections.namedtuple('Among', 's substring_i result method')

_Outcome = collections.namedtuple('Outcome', 'kind literal guard')


class Outcome(_Outcome):
    """
    What a rule program does with a matched slice.

    ``kind`` is one of ``DELETE``, ``REPLACE`` and ``NOOP``. ``literal``
    is the replacement text for ``REPLACE``. ``guard`` is the name of a
    routine that has to succeed before the edit is applied, or ``None``.
    """

    def __new__(cls, kind, literal='', guard=None):
        if kind not in (DELETE, REPLACE, NOOP):
            raise ValueError('Unknown outcome kind %r.' % kind)
        return super(Outcome, cls).__new__(cls, kind, literal, guard)


class AmongTable(object):
    """
    An immutable rule table.
    """

    def __init__(self, name, entries, outcomes=(), backward=False):
        self.name = name
        self.entries = tuple(entries)
        self.outcomes = tuple(outcomes)
        self.backward = backward

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    def __repr__(self):
        return '<AmongTable %s (%d entries%s)>' % (
            self.name, len(self.entries), ', backward' if self.backward
            else '')

    def outcome(self, result):
        """
        Return the ``Outcome`` for a result returned by the lookup.
        """
        if result == -1:
            return Outcome(NOOP)
        if result < 1 or result > len(self.outcomes):
            raise KeyError('Table %s has no outcome %d.' % (self.name,
                                                            result))
        return self.outcomes[result - 1]


def build_table(name, items, outcomes=(), backward=False):
    """
    Build an ``AmongTable``.

    ``items`` is a sequence of ``(pattern, result, method)`` tuples in
    declaration order. The entries are sorted by code points (of the
    reversed patterns for backward tables) and their back-links are
    computed. Duplicate patterns raise ``ValueError``.
    """
    if backward:
        key = lambda item: item[0][::-1]
    else:
        key = lambda item: item[0]
    items = sorted(items, key=key)
    entries = []
    for index, (s, result, method) in enumerate(items):
        if index and items[index - 1][0] == s:
            raise ValueError('Duplicate pattern %r in table %s.' % (s, name))
        substring_i = -1
        for j in range(index - 1, -1, -1):
            other = items[j][0]
            if (s.endswith(other) if backward else s.startswith(other)):
                substring_i = j
                break
        entries.append(Among(s, substring_i, result, method))
    return AmongTable(name, entries, outcomes, backward)


def _call(routines, name, s):
    if routines is None:
        raise ValueError('No routine provider for side condition %r.' % name)
    return getattr(routines, name)(s)


def find_among(s, table, routines=None):
    """
    Forward longest-match lookup at the cursor of ``s``.

    Returns the result of the matching entry and moves the cursor past
    the match. Returns 0 and leaves the cursor unchanged if nothing
    matches within the window.
    """
    i = 0
    j = len(table)
    c = s.cursor
    l = s.limit
    chars = s.chars
    common_i = 0
    common_j = 0
    first_key_inspected = False
    if not j:
        return 0
    while True:
        k = i + ((j - i) >> 1)
        diff = 0
        common = min(common_i, common_j)
        w = table[k]
        for i2 in range(common, len(w.s)):
            if c + common == l:
                diff = -1
                break
            diff = ord(chars[c + common]) - ord(w.s[i2])
            if diff:
                break
            common += 1
        if diff < 0:
            j = k
            common_j = common
        else:
            i = k
            common_i = common
        if j - i <= 1:
            if i > 0 or j == i or first_key_inspected:
                break
            # The first entry has not been compared yet
            first_key_inspected = True
    while True:
        w = table[i]
        if common_i >= len(w.s):
            s.cursor = c + len(w.s)
            if w.method is None or _call(routines, w.method, s):
                s.cursor = c + len(w.s)
                return w.result
        i = w.substring_i
        if i < 0:
            s.cursor = c
            return 0


def find_among_b(s, table, routines=None):
    """
    Backward longest-match lookup at the cursor of ``s``.

    Like ``find_among`` but compares the text left of the cursor down
    to ``limit_backward`` and moves the cursor to the start of the
    match.
    """
    i = 0
    j = len(table)
    c = s.cursor
    lb = s.limit_backward
    chars = s.chars
    common_i = 0
    common_j = 0
    first_key_inspected = False
    if not j:
        return 0
    while True:
        k = i + ((j - i) >> 1)
        diff = 0
        common = min(common_i, common_j)
        w = table[k]
        for i2 in range(len(w.s) - 1 - common, -1, -1):
            if c - common == lb:
                diff = -1
                break
            diff = ord(chars[c - 1 - common]) - ord(w.s[i2])
            if diff:
                break
            common += 1
        if diff < 0:
            j = k
            common_j = common
        else:
            i = k
            common_i = common
        if j - i <= 1:
            if i > 0 or j == i or first_key_inspected:
                break
            first_key_inspected = True
    while True:
        w = table[i]
        if common_i >= len(w.s):
            s.cursor = c - len(w.s)
            if w.method is None or _call(routines, w.method, s):
                s.cursor = c - len(w.s)
                return w.result
        i = w.substring_i
        if i < 0:
            s.cursor = c
            return 0
