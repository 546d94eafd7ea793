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

"""Convert parsed ``.dat`` statements into parameter values."""

import logging

logger = logging.getLogger(__name__)


def _data_error(msg, name, lineno):
    return ValueError("%s in declaration of '%s' (line %s)" % (msg, name, lineno))


def _group_tuples(items, name, lineno):
    """Return the values in `items`, collapsing ``(a, b)`` into tuples.

    Commas outside parentheses are optional separators.
    """
    ans = []
    it = iter(items)
    for tok, val in it:
        if tok == 'LPAREN':
            members = []
            for tok, val in it:
                if tok == 'RPAREN':
                    break
                if tok == 'LPAREN':
                    raise _data_error("Nested tuple", name, lineno)
                if tok != 'COMMA':
                    members.append(val)
            else:
                raise _data_error("Unterminated tuple", name, lineno)
            ans.append(tuple(members))
        elif tok == 'RPAREN':
            raise _data_error("Unmatched ')'", name, lineno)
        elif tok != 'COMMA':
            ans.append(val)
    return ans


def _process_set(name, items, lineno):
    members = _group_tuples(items, name, lineno)
    seen = set()
    for m in members:
        if m in seen:
            raise _data_error("Duplicate member %r" % (m,), name, lineno)
        seen.add(m)
    return members


def _process_param(name, header, items, lineno):
    values = _group_tuples(items, name, lineno)
    if header is None:
        if len(values) == 1:
            return values[0]
        if len(values) % 2:
            raise _data_error(
                "Expected index/value pairs, found %s items" % (len(values),),
                name,
                lineno,
            )
        ans = {}
        for key, val in zip(values[0::2], values[1::2]):
            if key in ans:
                raise _data_error("Duplicate index %r" % (key,), name, lineno)
            ans[key] = val
        return ans
    #
    # Tabular form: "param p : c1 c2 := r1 v11 v12 r2 v21 v22;"
    #
    columns = _group_tuples(header, name, lineno)
    width = len(columns) + 1
    if not columns or len(values) % width:
        raise _data_error(
            "Table data does not match the %s column(s) of the header"
            % (len(columns),),
            name,
            lineno,
        )
    ans = {}
    for i in range(0, len(values), width):
        row = values[i]
        row = row if type(row) is tuple else (row,)
        for col, val in zip(columns, values[i + 1 : i + width]):
            ans[row + (col if type(col) is tuple else (col,))] = val
    return ans


def process_data(statements, select=None):
    """Build the ``{name: value}`` mapping for parsed statements.

    Sets become lists (in declaration order), scalar parameters become
    numbers/strings and indexed parameters become dicts.  If `select`
    is given, only the named symbols are kept.
    """
    ans = {}
    for kind, name, header, items, lineno in statements:
        if select is not None and name not in select:
            logger.debug("Skipping %s '%s' (not selected)", kind, name)
            continue
        if name in ans:
            raise _data_error("Multiple values", name, lineno)
        if kind == 'set':
            ans[name] = _process_set(name, items, lineno)
        else:
            ans[name] = _process_param(name, header, items, lineno)
    return ans
