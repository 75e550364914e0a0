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
Module and script for checking stemmers against vocabulary files.

A vocabulary consists of two files with one word per line: the input
words and the expected stems.
"""

import codecs

from sblstem import get_stemmer


def check_files(language, input_filename, output_filename):
    """
    Check a stemmer using test cases from files.

    Returns a tuple ``(passed, failed)``.
    """
    with codecs.open(input_filename, 'r', 'utf8') as f:
        inputs = f.read().splitlines()
    with codecs.open(output_filename, 'r', 'utf8') as f:
        expected = f.read().splitlines()
    if len(inputs) != len(expected):
        raise ValueError('%s has %d lines but %s has %d.' % (
            input_filename, len(inputs), output_filename, len(expected)))
    return check_pairs(language, zip(inputs, expected))


def check_pairs(language, tests):
    """
    Check a stemmer using ``(input, expected)`` tuples.

    Mismatches and a summary are printed. Returns a tuple ``(passed,
    failed)``.
    """
    stemmer = get_stemmer(language)
    passed = 0
    failed = 0
    for case, expected in tests:
        result = stemmer.stem(case)
        if result == expected:
            passed += 1
        else:
            failed += 1
            print("'%s': Expected '%s', got '%s'." % (case, expected, result))
    print("")
    print("%d passed, %d failed." % (passed, failed))
    return passed, failed


if __name__ == '__main__':

    import sys

    if len(sys.argv) != 4:
        sys.stderr.write('Syntax: %s LANGUAGE INPUT OUTPUT\n' % sys.argv[0])
        sys.exit(1)

    passed, failed = check_files(*sys.argv[1:])
    sys.exit(1 if failed else 0)
