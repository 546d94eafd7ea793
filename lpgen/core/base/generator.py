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

"""Generator clause evaluation.

:func:`evaluate_domain` turns the domain of a single generator clause
into a concrete list of values; :func:`expand` produces one
:class:`~lpgen.core.base.env.BindingEnvironment` per element of the
cartesian product of a clause list.  The first clause varies slowest::

    [i <- 1..2, j <- [a, b]]  ->  (1,a) (1,b) (2,a) (2,b)

"""

import logging
import math

from collections.abc import Iterator, Mapping, Sized, Iterable
from numbers import Number

from lpgen.common.errors import InvalidDomain, ModelingError
from lpgen.core.base.var import _index_key
from lpgen.core.expr.nodes import (
    ExpressionNode,
    Filter,
    GeneratorClause,
    RangeDomain,
    as_clause,
)

logger = logging.getLogger(__name__)


def _range_bound(compiler, node, env, which):
    try:
        val = compiler.value(node, env)
    except InvalidDomain:
        raise
    except ModelingError as err:
        raise InvalidDomain(
            "%s bound '%s' of a range domain could not be evaluated: %s"
            % (which, node, err.args[0] if err.args else err)
        ) from err
    if isinstance(val, bool) or not isinstance(val, Number):
        raise InvalidDomain(
            "%s bound '%s' of a range domain is not a number (found %r)"
            % (which, node, val)
        )
    if not math.isfinite(val) or int(val) != val:
        raise InvalidDomain(
            "%s bound '%s' of a range domain is not a finite integer (found %r)"
            % (which, node, val)
        )
    return int(val)


def evaluate_domain(domain, env, compiler):
    """Return the ordered list of values a generator domain ranges over.

    Accepted domains:

    - :class:`RangeDomain` (inclusive integer range; bounds may be
      expressions)
    - Python lists, tuples and ranges (in their own order)
    - Python sets (sorted, so the enumeration order is reproducible)
    - mappings (their keys, in insertion order)
    - any expression that evaluates (through `env`) to one of the above

    Raises :class:`InvalidDomain` for anything else.
    """
    if domain.__class__ is RangeDomain:
        start = _range_bound(compiler, domain.args[0], env, 'Lower')
        stop = _range_bound(compiler, domain.args[1], env, 'Upper')
        return list(range(start, stop + 1))
    if isinstance(domain, ExpressionNode):
        try:
            val = compiler.value(domain, env)
        except InvalidDomain:
            raise
        except ModelingError as err:
            raise InvalidDomain(
                "Domain '%s' could not be evaluated: %s"
                % (domain, err.args[0] if err.args else err)
            ) from err
    else:
        val = domain
    return _as_sequence(val, domain)


def _as_sequence(val, domain):
    if isinstance(val, (str, bytes, Number)) or val is None:
        raise InvalidDomain(
            "Domain '%s' resolved to the scalar %r, not a finite ordered "
            "sequence" % (domain, val)
        )
    if isinstance(val, Mapping):
        return list(val.keys())
    if isinstance(val, (set, frozenset)):
        return sorted(val, key=_index_key)
    if isinstance(val, (list, tuple, range)):
        return list(val)
    if isinstance(val, Iterator) or not (
        isinstance(val, Iterable) and isinstance(val, Sized)
    ):
        raise InvalidDomain(
            "Domain '%s' resolved to a %s, which is not a finite ordered "
            "sequence" % (domain, type(val).__name__)
        )
    return list(val)


def expand(clauses, env, compiler):
    """Yield one environment per combination of the generator `clauses`.

    `clauses` is a sequence of :class:`GeneratorClause` objects (or
    ``(name, domain)`` tuples) and :class:`Filter` objects.  A clause's
    domain may reference the names bound by earlier clauses; a filter
    drops every combination (of the clauses before it) for which its
    condition is false.
    """
    clauses = [as_clause(c) for c in clauses]
    return _expand(clauses, 0, env, compiler)


def _expand(clauses, pos, env, compiler):
    if pos == len(clauses):
        yield env
        return
    c = clauses[pos]
    if c.__class__ is Filter:
        if compiler.condition(c.condition, env):
            yield from _expand(clauses, pos + 1, env, compiler)
        return
    for val in evaluate_domain(c.domain, env, compiler):
        yield from _expand(clauses, pos + 1, env.extend(c.name, val), compiler)


def clause_names(clauses):
    """The names bound by a clause list, in declaration order"""
    return [c.name for c in map(as_clause, clauses) if c.__class__ is GeneratorClause]
