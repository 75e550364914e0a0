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

import argparse
import logging
import sys

from sblstem import LANGUAGES, get_stemmer
from sblstem.program import fold_case
from sblstem.utils import format_state


def main(argv=None):
    parser = argparse.ArgumentParser(description='Stem words (one per line)')
    parser.add_argument('infile', help='Input file (default STDIN)', nargs='?',
            type=argparse.FileType('r', encoding='utf8'), default=sys.stdin)
    parser.add_argument('outfile', help='Output file (default STDOUT)',
            nargs='?', type=argparse.FileType('w', encoding='utf8'),
            default=sys.stdout)
    parser.add_argument('-l', '--language', help='Stemmer language',
            choices=sorted(LANGUAGES), default='norwegian')
    parser.add_argument('-t', '--trace', help='Show the final offsets',
            action='store_true')
    parser.add_argument('-v', '--verbose', help='Enable debug logging',
            action='store_true')
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else
                        logging.WARNING)
    stemmer = get_stemmer(args.language)
    for line in args.infile:
        word = line.strip()
        if args.trace and word:
            s = stemmer.run(fold_case(word))
            args.outfile.write('%s\t%s\n' % (s, format_state(s)))
        else:
            args.outfile.write(stemmer.stem(word) + '\n')
    if args.infile is not sys.stdin:
        args.infile.close()
    if args.outfile is not sys.stdout:
        args.outfile.close()

if __name__ == '__main__':
    main()
