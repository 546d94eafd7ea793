#  ___________________________________________________________________________
#
#  Pyomo: Python Optimization Modeling Objects
#  Copyright (c) 2008-2025
#  National Technology and Engineering Solutions of Sandia, LLC
#  Under the terms of Contract DE-NA0003525 with National Technology and
#  Engineering Solutions of Sandia, LLC, the U.S. Government retains certain
#  rights in this software.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Lexer and parser for AMPL-style ``.dat`` parameter data.

Only the ``set`` and ``param`` statements (plus the optional ``data;``
and ``end;`` markers) are recognized::

    set J := a b c;
    param n := 3;
    param cost := a 1.5 b 2;
    param dist : 1 2 := a 10 20 b 30 40;

:func:`parse_data_commands` returns the statements as tuples; the
conversion into Python values lives in
:mod:`lpgen.dataportal.process_data`.
"""

__all__ = ['parse_data_commands']

import bisect
import logging

import ply.lex as lex
import ply.yacc as yacc

logger = logging.getLogger(__name__)

_re_number = r'[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?'

## -----------------------------------------------------------
##
## Lexer definitions for tokenizing the input
##
## -----------------------------------------------------------

reserved = {'data': 'DATA', 'set': 'SET', 'param': 'PARAM', 'end': 'END'}

# Token names
tokens = [
    "COMMA",
    "SEMICOLON",
    "COLON",
    "COLONEQ",
    "LPAREN",
    "RPAREN",
    "WORD",
    "QUOTEDSTRING",
    "NUM_VAL",
] + list(reserved.values())

# Ignore space and tab
t_ignore = " \t\r"

# Regular expression rules
t_COMMA = r","
t_COLON = r":"
t_LPAREN = r"\("
t_RPAREN = r"\)"


#
# Notes on PLY tokenization
#   - token functions (beginning with "t_") are prioritized in the order
#     that they are declared in this module
#
def t_newline(t):
    r'[\n]+'
    t.lexer.lineno += len(t.value)
    t.lexer.linepos.extend(t.lexpos + i for i, _ in enumerate(t.value))


# Discard comments
_re_singleline_comment = r'(?:\#[^\n]*)'
_re_multiline_comment = r'(?:/\*(?:[\n]|.)*?\*/)'


@lex.TOKEN('|'.join([_re_singleline_comment, _re_multiline_comment]))
def t_COMMENT(t):
    nlines = t.value.count('\n')
    t.lexer.lineno += nlines
    # Column numbers are never needed inside a comment, so only the
    # *last* newline matters
    lastpos = t.lexpos + t.value.rfind('\n')
    t.lexer.linepos.extend(lastpos for i in range(nlines))


def t_COLONEQ(t):
    r':='
    return t


def t_SEMICOLON(t):
    r';'
    return t


# Numbers must be followed by a delimiter token (EOF is not a concern,
# as valid DAT files always end with a ';').
@lex.TOKEN(_re_number + r'(?=[\s():;,])')
def t_NUM_VAL(t):
    _num = float(t.value)
    if '.' in t.value:
        t.value = _num
    else:
        _int = int(_num)
        t.value = _int if _num == _int else _num
    return t


def t_WORD(t):
    r'[a-zA-Z_][a-zA-Z_0-9\.+\-]*'
    if t.value in reserved:
        t.type = reserved[t.value]  # Check for reserved words
    return t


_re_quoted_str = r'"(?:[^"]|"")*"'


@lex.TOKEN("|".join([_re_quoted_str, _re_quoted_str.replace('"', "'")]))
def t_QUOTEDSTRING(t):
    # Strip the quotes and replace doubled ("escaped") quotation
    # characters with a single character
    t.value = t.value[1:-1].replace(2 * t.value[0], t.value[0])
    return t


# Error handling rule
def t_error(t):
    raise IOError(
        "ERROR: Unexpected character '%s' (line %s, column %s)"
        % (t.value[0], t.lineno, _lex_token_position(t))
    )


def _lex_token_position(t):
    i = bisect.bisect_left(t.lexer.linepos, t.lexpos)
    if i:
        return t.lexpos - t.lexer.linepos[i - 1]
    return t.lexpos


## -----------------------------------------------------------
##
## Yacc grammar for data commands
##
## -----------------------------------------------------------


def p_expr(p):
    '''expr : statements
    |'''
    p[0] = p[1] if len(p) == 2 else []


def p_statements(p):
    '''statements : statements statement
    | statement'''
    if len(p) == 3:
        p[0] = p[1]
        if p[2] is not None:
            p[0].append(p[2])
    elif p[1] is None:
        p[0] = []
    else:
        p[0] = [p[1]]


def p_statement(p):
    '''statement : SET WORD COLONEQ datastar SEMICOLON
    | PARAM WORD COLONEQ datastar SEMICOLON
    | PARAM WORD COLON datastar COLONEQ datastar SEMICOLON
    | DATA SEMICOLON
    | END SEMICOLON
    '''
    stmt = p[1]
    if stmt == 'set':
        p[0] = ('set', p[2], None, p[4], p.lineno(1))
    elif stmt == 'param':
        if len(p) == 6:
            p[0] = ('param', p[2], None, p[4], p.lineno(1))
        else:
            p[0] = ('param', p[2], p[4], p[6], p.lineno(1))
    else:
        # data; and end; carry no values
        p[0] = None


def p_datastar(p):
    '''
    datastar : data
             |
    '''
    p[0] = p[1] if len(p) == 2 else []


def p_data(p):
    '''
    data : data item
         | item
    '''
    if len(p) == 2:
        p[0] = [p[1]]
    else:
        # yacc __getitem__ is expensive: use a local list to avoid a
        # getitem call on p[0]
        tmp_lst = p[1]
        tmp_lst.append(p[2])
        p[0] = tmp_lst


def p_item(p):
    '''
    item : NUM_VAL
         | WORD
         | QUOTEDSTRING
         | LPAREN
         | RPAREN
         | COMMA
    '''
    # Punctuation is tagged so that a quoted "(" is not mistaken for
    # the start of a tuple
    p[0] = (p.slice[1].type, p[1])


def p_error(p):
    if p is None:
        tmp = "Syntax error at end of file."
    else:
        tmp = "Syntax error at token '%s' with value '%s' (line %s, column %s)" % (
            p.type,
            p.value,
            p.lineno,
            _lex_token_position(p),
        )
    raise IOError(tmp)


# --------------------------------------------------------------
# the DAT file lexer and yaccer only need to be
# created once, so have the corresponding objects
# accessible at module scope.
# --------------------------------------------------------------

dat_lexer = None
dat_yaccer = None


def parse_data_commands(data=None, filename=None, debug=0):
    """Parse ``.dat`` text (or the contents of `filename`).

    Returns a list of ``(kind, name, header, items, lineno)`` tuples,
    one per ``set`` / ``param`` statement, where `items` (and the
    optional table `header`) are lists of ``(token_type, value)``
    pairs.  Returns None if neither `data` nor `filename` is given.
    """
    global dat_lexer
    global dat_yaccer

    # if the lexer/yaccer haven't been initialized, do so.
    if dat_lexer is None:
        dat_lexer = lex.lex()
        dat_yaccer = yacc.yacc(debug=debug, write_tables=False)

    if filename is not None:
        if data is not None:
            raise ValueError(
                "parse_data_commands: cannot specify both data and filename arguments"
            )
        with open(filename, 'r') as FILE:
            data = FILE.read()

    if data is None:
        return None

    #
    # Initialize parse object
    #
    dat_lexer.linepos = []
    dat_lexer.lineno = 1
    ans = dat_yaccer.parse(data, lexer=dat_lexer, debug=debug) or []
    logger.debug("Parsed %s data statement(s)", len(ans))
    return ans
