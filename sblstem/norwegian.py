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
Norwegian stemmer.

See http://snowball.tartarus.org/algorithms/norwegian/stemmer.html for
a description of the algorithm.
"""

from sblstem.program import Program


__all__ = ['NorwegianStemmer']


class NorwegianStemmer(Program):

    source = """
        routines ( s_ending_or_k )
        integers ( p1 x )
        groupings ( v s_ending )

        stringescapes {}

        /* special characters */

        stringdef ae   hex 'E6'
        stringdef ao   hex 'E5'
        stringdef o/   hex 'F8'

        define v 'aeiouy{ae}{ao}{o/}'

        define s_ending  'bcdfghjlmnoprtvyz'

        backwardmode (

            define main_suffix as among (

                'a' 'e' 'ede' 'ande' 'ende' 'ane' 'ene' 'hetene' 'en' 'heten'
                'ar' 'er' 'heter' 'as' 'es' 'edes' 'endes' 'enes' 'hetenes'
                'ens' 'hetens' 'ers' 'ets' 'et' 'het' 'ast'
                    (delete)
                's'
                    (s_ending_or_k delete)
                'erte' 'ert'
                    (<- 'er')
            )

            define consonant_pair as among ( 'dt' 'vt' )

            define other_suffix as among (
                'leg' 'eleg' 'ig' 'eig' 'lig' 'elig' 'els' 'lov' 'elov'
                'slov' 'hetslov'
                    (delete)
            )
        )
    """

    def __init__(self):
        super(NorwegianStemmer, self).__init__()
        self.v = self.groupings['v']
        self.s_ending = self.groupings['s_ending']

    def r_mark_regions(self, s):
        s.setmark('p1', s.limit)
        c = s.cursor
        if not s.hop(3):
            return False
        s.setmark('x')
        s.cursor = c
        if not s.goto(lambda: s.in_grouping(self.v)):
            return False
        if not s.gopast(lambda: s.out_grouping(self.v)):
            return False
        s.setmark('p1')
        if s.marks['p1'] < s.marks['x']:
            s.setmark('p1', s.marks['x'])
        return True

    def _suffix(self, s, table):
        """
        Find a suffix from ``table`` inside the region and mark it as
        the slice.
        """
        with s.region(s.marks['p1']) as inside:
            if not inside:
                return None
            s.set_ket()
            outcome = self.among(s, table)
            if outcome is None:
                return None
            s.set_bra()
        return outcome

    def r_main_suffix(self, s):
        outcome = self._suffix(s, 'main_suffix')
        if outcome is None:
            return False
        return self.apply(s, outcome)

    def s_ending_or_k(self, s):
        v = s.limit - s.cursor
        if s.in_grouping_b(self.s_ending):
            return True
        s.cursor = s.limit - v
        return s.eq_s_b('k') and s.out_grouping_b(self.v)

    def r_consonant_pair(self, s):
        if not s.test_b(lambda: self._suffix(s, 'consonant_pair') is not None):
            return False
        if not s.next_b():
            return False
        s.set_bra()
        return s.slice_del()

    def r_other_suffix(self, s):
        outcome = self._suffix(s, 'other_suffix')
        if outcome is None:
            return False
        return self.apply(s, outcome)

    def r_stem(self, s):
        s.do(lambda: self.r_mark_regions(s))

        def backward():
            s.do_b(lambda: self.r_main_suffix(s))
            s.do_b(lambda: self.r_consonant_pair(s))
            s.do_b(lambda: self.r_other_suffix(s))
            return True

        return s.backwards(backward)
