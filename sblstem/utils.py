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
Various utilities.
"""

import math


def add_line_numbers(text, margin="  "):
    """
    Add line numbers to a text.
    """
    lines = text.splitlines()
    if not lines:
        return text
    num_digits = int(math.floor(math.log10(len(lines)))) + 1
    format_str = '%%%dd%s%%s' % (num_digits, margin)
    nums = range(1, len(lines) + 1)
    return '\n'.join(format_str % (n, line) for (n, line) in zip(nums, lines))


def format_state(s):
    """
    Describe the offsets of a ``String`` in a single line.
    """
    marks = ' '.join('%s=%d' % item for item in sorted(s.marks.items()))
    line = 'cursor=%d limit=%d limit_backward=%d bra=%d ket=%d' % (
        s.cursor, s.limit, s.limit_backward, s.bra, s.ket)
    if marks:
        line += ' ' + marks
    return line
