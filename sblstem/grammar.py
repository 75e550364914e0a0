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
Snowball grammar and parser for rule tables.

Only the declarative part of the Snowball language is supported:
string escapes and definitions, declarations, grouping definitions and
tables given as ``define name as among (...)``. The routines that use
the tables are written in Python (see ``sblstem.program``).
"""

import re
import threading

from pyparsing import (Group, Keyword, MatchFirst, OneOrMore, Optional,
                       ParseException, ParseFatalException, ParserElement,
                       StringEnd, Suppress, Token, Word, ZeroOrMore,
                       alphanums, alphas, c_style_comment, dbl_slash_comment,
                       one_of, printables)

from sblstem.among import DELETE, NOOP, REPLACE, Outcome, build_table
from sblstem.grouping import Grouping


__all__ = ['Declarations', 'parse_string']


# Grammar elements are in all-caps.


ParserElement.enable_packrat()


#
# PARSER STATE
#

class _State(object):

    def __init__(self):
        self.stringescapes = []   # Left and right string escape chars
        self.stringdefs = {}      # String replacement definitions
        self.reset()

    def reset(self):
        """
        Reset internal parser state.
        """
        self.groupings = []       # Declared grouping names
        self.routines = []        # Declared routine names
        self.integers = []        # Declared integer names
        self.grouping_defs = {}   # Defined groupings by name
        # The string literal parser keeps references to these two
        self.stringescapes[:] = []
        self.stringdefs.clear()

state = _State()

# Parsing uses the module-level state above
_lock = threading.Lock()


class Declarations(object):
    """
    The compiled content of a table source.
    """

    def __init__(self, groupings, tables, routines, integers):
        self.groupings = groupings
        self.tables = tables
        self.routines = routines
        self.integers = integers

    def __repr__(self):
        return '<Declarations groupings=%s tables=%s>' % (
            sorted(self.groupings), sorted(self.tables))


class _TableDefinition(object):

    def __init__(self, name, items, outcomes):
        self.name = name
        self.items = items
        self.outcomes = outcomes
        self.backward = False

    def build(self):
        return build_table(self.name, self.items, self.outcomes,
                           self.backward)


LPAREN = Suppress('(')
RPAREN = Suppress(')')


#
# KEYWORDS
#

keywords = []

def make_keyword(s):
    kw = Keyword(s)
    globals()[s.upper()] = kw
    keywords.append(kw)

for _s in """define as among delete groupings routines integers
backwardmode stringescapes stringdef hex decimal""".split():
    make_keyword(_s)

KEYWORD = MatchFirst(keywords)


#
# NAMES
#

NAME = ~KEYWORD + Word(alphas, alphanums + '_')


#
# DECLARATIONS
#

def make_decl(kw, target):
    declaration = Suppress(kw) + LPAREN + ZeroOrMore(NAME) + RPAREN

    def action(s, loc, tokens):
        declared = state.groupings + state.routines + state.integers
        for name in tokens:
            if name in declared:
                raise ParseFatalException(s, loc, '%s is declared twice.' %
                                          name)
            declared.append(name)
        getattr(state, target).extend(tokens)
        return []

    declaration.set_parse_action(action)
    return declaration

DECLARATION = MatchFirst([
    make_decl(GROUPINGS, 'groupings'),
    make_decl(ROUTINES, 'routines'),
    make_decl(INTEGERS, 'integers'),
])


#
# REFERENCES
#

reference_chars = set(alphanums + '_')

class Reference(Token):
    """
    A reference to a previously declared name.

    This class works like pyparsing's ``Or`` in combination with
    ``Keyword``. However, the list of candidates is read from the
    parser state each time, so declarations made earlier in the same
    source are taken into account.
    """

    def __init__(self, kind):
        """
        Constructor.

        ``kind`` is the name of the list of declared names in the
        parser state (e.g. ``'groupings'``). Matching is done in
        decreasing length of candidates (cf. ``Or``).
        """
        super(Reference, self).__init__()
        self.kind = kind

    def parseImpl(self, instring, loc, doActions=True):
        candidates = sorted(getattr(state, self.kind), key=len, reverse=True)
        for candidate in candidates:
            if instring.startswith(candidate, loc):
                n = len(candidate)
                if (len(instring) == loc + n or instring[loc + n] not in
                        reference_chars):
                    return loc + n, candidate
        raise ParseException(instring, loc, 'Expected one of %s' %
                             ', '.join(candidates), self)


def grouping_lookup_action(s, loc, tokens):
    name = tokens[0]
    try:
        return state.grouping_defs[name]
    except KeyError:
        raise ParseFatalException(s, loc, 'Grouping %s is used before it '
                                  'is defined.' % name)

GROUPING_NAME = Reference('groupings')
GROUPING_REF = Reference('groupings')
GROUPING_REF.set_parse_action(grouping_lookup_action)
ROUTINE_REF = Reference('routines')


#
# STRINGS
#

class StringLiteral(Token):
    """
    String literal that supports dynamically changing escape characters.
    """

    def __init__(self, escape_chars, replacements):
        """
        Constructor.

        ``escape_chars`` is a list containing either two or no
        characters. These characters are the left and right escape
        marker, respectively. You may change the content of the list
        afterwards, the parsing code always uses the latest values.

        ``replacements`` is a dict that maps escape sequences to their
        replacements. Later modifications are taken into account.
        """
        super(StringLiteral, self).__init__()
        self.escape_chars = escape_chars
        self.replacements = replacements

    def parseImpl(self, instring, loc, doActions=True):
        if loc >= len(instring) or instring[loc] != "'":
            raise ParseException(instring, loc, 'Expected "\'"', self)
        # Find next "'" that is not contained in escape chars
        pos = loc + 1
        while True:
            try:
                candidate = instring.index("'", pos)
            except ValueError:
                raise ParseException(instring, loc, 'Runaway string literal',
                                     self)
            if not self.escape_chars:
                break
            left = instring.rfind(self.escape_chars[0], loc, candidate)
            right = instring.rfind(self.escape_chars[1], loc, candidate)
            if right >= left:
                break
            pos = candidate + 1
        s = instring[loc + 1:candidate]
        if self.escape_chars:
            # Replace escape sequences
            left = re.escape(self.escape_chars[0])
            right = re.escape(self.escape_chars[1])
            for k, v in self.replacements.items():
                s = re.sub(left + re.escape(k) + right, lambda m, v=v: v, s)
        return candidate + 1, s


def stringescapes_cmd_action(tokens):
    state.stringescapes[:] = [tokens[0], tokens[1]]
    state.stringdefs["'"] = "'"
    state.stringdefs[tokens[0]] = tokens[0]
    return []

def stringdef_cmd_action(tokens):
    key = tokens[0]
    if len(tokens) == 3:
        mode, value = tokens[1], tokens[2]
    else:
        mode, value = None, tokens[1]
    if mode == 'hex':
        value = ''.join(chr(int(x, 16)) for x in value.split())
    elif mode == 'decimal':
        value = ''.join(chr(int(x)) for x in value.split())
    state.stringdefs[key] = value
    return []

STR_LITERAL = StringLiteral(state.stringescapes, state.stringdefs)

CHAR = Word(printables, exact=1)
STRINGESCAPES_CMD = Suppress(STRINGESCAPES) + CHAR + CHAR
STRINGESCAPES_CMD.set_parse_action(stringescapes_cmd_action)

STRINGDEF_CMD = (Suppress(STRINGDEF) + Word(printables) +
                 Optional(HEX | DECIMAL) + STR_LITERAL)
STRINGDEF_CMD.set_parse_action(stringdef_cmd_action)


#
# GROUPINGS
#

def grouping_def_action(s, loc, tokens):
    tokens = list(reversed(tokens))
    name = tokens.pop()
    if name in state.grouping_defs:
        raise ParseFatalException(s, loc, 'Grouping %s is defined twice.' %
                                  name)
    grouping = Grouping(name, tokens.pop().chars)
    while tokens:
        op = tokens.pop()
        other = tokens.pop()
        if op == '+':
            grouping = grouping.union(other, name)
        else:
            grouping = grouping.difference(other, name)
    state.grouping_defs[name] = grouping
    return []

def char_set_action(tokens):
    return Grouping(None, tokens[0])

CHAR_SET = STR_LITERAL.copy().add_parse_action(char_set_action)
GROUPING_ATOM = GROUPING_REF | CHAR_SET
GROUPING_DEF = (Suppress(DEFINE) + GROUPING_NAME + GROUPING_ATOM +
                ZeroOrMore(one_of('+ -') + GROUPING_ATOM))
GROUPING_DEF.set_parse_action(grouping_def_action)


#
# TABLES
#

def among_cmd_action(tokens):
    guard = None
    outcome = Outcome(NOOP)
    for token in tokens:
        if isinstance(token, Outcome):
            outcome = token
        else:
            guard = token
    return Outcome(outcome.kind, outcome.literal, guard)

def table_def_action(tokens):
    name = tokens[0]
    args = tokens[1]
    has_commands = any(len(arg) > 1 for arg in args)
    items = []
    outcomes = []
    pending = []
    for arg in args:
        pending.extend(arg[0])
        if len(arg) > 1:
            outcomes.append(arg[1])
            items.extend(_among_items(pending, len(outcomes)))
            pending = []
    if pending:
        if has_commands:
            # Strings without a command at the end do nothing
            outcomes.append(Outcome(NOOP))
            items.extend(_among_items(pending, len(outcomes)))
        else:
            items.extend(_among_items(pending, -1))
    return _TableDefinition(name, items, outcomes)

def _among_items(strings, result):
    return [(string[0], result, string[1] if len(string) > 1 else None)
            for string in strings]

CMD_DELETE = Suppress(DELETE).set_parse_action(lambda: Outcome(DELETE))
CMD_REPLACE_SLICE = (Suppress('<-') + STR_LITERAL).set_parse_action(
    lambda t: Outcome(REPLACE, t[0]))
AMONG_CMD = (LPAREN + Optional(ROUTINE_REF) +
             Optional(CMD_DELETE | CMD_REPLACE_SLICE) + RPAREN)
AMONG_CMD.set_parse_action(among_cmd_action)
AMONG_STR = Group(STR_LITERAL + Optional(ROUTINE_REF))
AMONG_ARG = Group(Group(OneOrMore(AMONG_STR)) + Optional(AMONG_CMD))
TABLE_DEF = (Suppress(DEFINE) + NAME + Suppress(AS) + Suppress(AMONG) +
             LPAREN + Group(OneOrMore(AMONG_ARG)) + RPAREN)
TABLE_DEF.set_parse_action(table_def_action)


#
# PROGRAM
#

def backward_section_action(tokens):
    for token in tokens:
        token.backward = True
    return tokens

PROGRAM_ATOM = (DECLARATION | GROUPING_DEF | TABLE_DEF | STRINGESCAPES_CMD |
                STRINGDEF_CMD)
BACKWARD_SECTION = (Suppress(BACKWARDMODE) + LPAREN +
                    ZeroOrMore(PROGRAM_ATOM) + RPAREN)
BACKWARD_SECTION.set_parse_action(backward_section_action)
PROGRAM = ZeroOrMore(PROGRAM_ATOM | BACKWARD_SECTION) + StringEnd()
PROGRAM.ignore(c_style_comment | dbl_slash_comment)


#
# PUBLIC INTERFACE
#

def parse_string(s):
    """
    Parse string containing Snowball table definitions.

    Returns a ``Declarations`` instance. Raises
    ``pyparsing.ParseBaseException`` for malformed code and
    ``ValueError`` for invalid tables.
    """
    with _lock:
        state.reset()
        definitions = PROGRAM.parse_string(s)
        tables = {}
        for definition in definitions:
            if definition.name in tables:
                raise ValueError('Table %s is defined twice.' %
                                 definition.name)
            tables[definition.name] = definition.build()
        undefined = set(state.groupings) - set(state.grouping_defs)
        if undefined:
            raise ValueError('Groupings declared but not defined: %s' %
                             ', '.join(sorted(undefined)))
        return Declarations(dict(state.grouping_defs), tables,
                            tuple(state.routines), tuple(state.integers))
