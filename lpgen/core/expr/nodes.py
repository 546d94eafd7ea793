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

"""The closed expression grammar compiled by lpgen.

Expression trees are built from ordinary Python objects: leaves are
created with :func:`param`, :func:`index` and :func:`var`, and interior
nodes come from the arithmetic / comparison operators and the helper
functions at the bottom of this module::

    x = var('x')
    i, j = index('i'), index('j')
    body = equal(gen_sum(x[i, j], clause('j', param('J'))), 1)

``==`` is not overloaded on nodes: use :func:`equal` for equality
constraints and :func:`not_equal` in filters.

"""

import logging

from numbers import Number

logger = logging.getLogger(__name__)


class _WildcardType(object):
    """Marker for an unresolved index in a variable reference"""

    __slots__ = ()

    def __repr__(self):
        return '_'

    def __reduce__(self):
        return 'WILDCARD'


WILDCARD = _WildcardType()

#: Operators accepted by RelationalExpression.  Only the non-strict
#: operators may form constraints; the rest are for generator filters.
RELATIONAL_OPERATORS = ('==', '<=', '>=', '!=', '<', '>')
CONSTRAINT_OPERATORS = ('==', '<=', '>=')


def as_expression(obj):
    """Promote numbers and strings to Constant nodes; pass nodes through"""
    if isinstance(obj, ExpressionNode):
        return obj
    if isinstance(obj, (Number, str)):
        return Constant(obj)
    raise TypeError(
        "Cannot use %r (type %s) in an lpgen expression"
        % (obj, type(obj).__name__)
    )


class ExpressionNode(object):
    """Base class for all expression tree nodes"""

    __slots__ = ('args',)

    def __init__(self, args):
        self.args = tuple(args)

    def nargs(self):
        return len(self.args)

    def __add__(self, other):
        return SumExpression((self, as_expression(other)))

    def __radd__(self, other):
        return SumExpression((as_expression(other), self))

    def __sub__(self, other):
        return SumExpression((self, NegationExpression((as_expression(other),))))

    def __rsub__(self, other):
        return SumExpression((as_expression(other), NegationExpression((self,))))

    def __mul__(self, other):
        return ProductExpression((self, as_expression(other)))

    def __rmul__(self, other):
        return ProductExpression((as_expression(other), self))

    def __truediv__(self, other):
        return DivisionExpression((self, as_expression(other)))

    def __rtruediv__(self, other):
        return DivisionExpression((as_expression(other), self))

    def __neg__(self):
        return NegationExpression((self,))

    def __pos__(self):
        return self

    def __abs__(self):
        return AbsExpression((self,))

    def __le__(self, other):
        return RelationalExpression('<=', self, other)

    def __ge__(self, other):
        return RelationalExpression('>=', self, other)

    def __lt__(self, other):
        return RelationalExpression('<', self, other)

    def __gt__(self, other):
        return RelationalExpression('>', self, other)

    def __bool__(self):
        raise TypeError(
            "Cannot convert the lpgen expression '%s' to bool; expressions "
            "are only evaluated when a model is compiled" % (self,)
        )

    def __repr__(self):
        return str(self)


#
# Leaves
#


class Constant(ExpressionNode):
    __slots__ = ()

    def __init__(self, value):
        super().__init__((value,))

    @property
    def value(self):
        return self.args[0]

    def __str__(self):
        return str(self.value)


class Name(ExpressionNode):
    """Reference to a name resolved through the Binding Environment: an
    external parameter, a generator binding or a well-known constant"""

    __slots__ = ()

    def __init__(self, name):
        super().__init__((name,))

    @property
    def name(self):
        return self.args[0]

    def __getitem__(self, idx):
        return GetItem.build(self, idx)

    def __str__(self):
        return self.name


class GetItem(ExpressionNode):
    """Indexing into parameter data: ``p[a]``, ``p[a, b]`` and ``p[a][b]``"""

    __slots__ = ()

    @classmethod
    def build(cls, base, idx):
        if not isinstance(idx, tuple):
            idx = (idx,)
        return cls((base,) + tuple(as_expression(i) for i in idx))

    @property
    def base(self):
        return self.args[0]

    @property
    def indices(self):
        return self.args[1:]

    def __getitem__(self, idx):
        return GetItem.build(self, idx)

    def __str__(self):
        return '%s[%s]' % (self.base, ', '.join(map(str, self.indices)))


class VarRef(ExpressionNode):
    """Reference to a decision variable (or, with WILDCARD indices, to
    every matching member of a variable family)"""

    __slots__ = ()

    def __init__(self, base, indices=()):
        super().__init__(
            (base,)
            + tuple(i if i is WILDCARD else as_expression(i) for i in indices)
        )

    @property
    def base(self):
        return self.args[0]

    @property
    def indices(self):
        return self.args[1:]

    def has_wildcard(self):
        return any(i is WILDCARD for i in self.indices)

    def __getitem__(self, idx):
        if self.indices:
            raise TypeError("Variable reference %s is already indexed" % (self,))
        if not isinstance(idx, tuple):
            idx = (idx,)
        return VarRef(self.base, idx)

    def __str__(self):
        if not self.indices:
            return self.base
        return '%s[%s]' % (self.base, ', '.join(map(str, self.indices)))


#
# Arithmetic
#


class SumExpression(ExpressionNode):
    __slots__ = ()

    def __init__(self, args):
        # Flatten nested sums so long chains of "+" stay shallow
        flat = []
        for arg in args:
            if arg.__class__ is SumExpression:
                flat.extend(arg.args)
            else:
                flat.append(arg)
        super().__init__(flat)

    def __str__(self):
        ans = str(self.args[0])
        for arg in self.args[1:]:
            if arg.__class__ is NegationExpression:
                ans += ' - ' + str(arg.args[0])
            else:
                ans += ' + ' + str(arg)
        return ans


class NegationExpression(ExpressionNode):
    __slots__ = ()

    def __str__(self):
        return '- (%s)' % (self.args[0],)


class ProductExpression(ExpressionNode):
    __slots__ = ()

    def __str__(self):
        return '(%s)*(%s)' % self.args


class DivisionExpression(ExpressionNode):
    __slots__ = ()

    def __str__(self):
        return '(%s)/(%s)' % self.args


class RelationalExpression(ExpressionNode):
    __slots__ = ('operator',)

    def __init__(self, operator, lhs, rhs):
        if operator not in RELATIONAL_OPERATORS:
            raise ValueError("Unknown relational operator '%s'" % (operator,))
        self.operator = operator
        super().__init__((as_expression(lhs), as_expression(rhs)))

    @property
    def lhs(self):
        return self.args[0]

    @property
    def rhs(self):
        return self.args[1]

    def __str__(self):
        return '%s %s %s' % (self.lhs, self.operator, self.rhs)


#
# Generators and aggregation
#


class RangeDomain(ExpressionNode):
    """Inclusive integer range ``start .. stop``"""

    __slots__ = ()

    def __init__(self, start, stop):
        super().__init__((as_expression(start), as_expression(stop)))

    def __str__(self):
        return '%s..%s' % self.args


class GeneratorClause(object):
    """``name <- domain``: bind `name` to each element of `domain`"""

    __slots__ = ('name', 'domain')

    def __init__(self, name, domain):
        if not isinstance(name, str):
            raise TypeError("Generator names must be strings (got %r)" % (name,))
        self.name = name
        self.domain = domain

    def __str__(self):
        return '%s <- %s' % (self.name, self.domain)

    __repr__ = __str__


class Filter(object):
    """Drop generator combinations for which `condition` is false"""

    __slots__ = ('condition',)

    def __init__(self, condition):
        self.condition = as_expression(condition)

    def __str__(self):
        return 'if %s' % (self.condition,)

    __repr__ = __str__


class GeneratorSum(ExpressionNode):
    """``sum(body for clauses)``"""

    __slots__ = ('clauses',)

    def __init__(self, body, clauses):
        self.clauses = tuple(as_clause(c) for c in clauses)
        super().__init__((as_expression(body),))

    @property
    def body(self):
        return self.args[0]

    def __str__(self):
        return 'sum(%s for %s)' % (self.body, ', '.join(map(str, self.clauses)))


#
# Non-linear primitives (linearized during compilation)
#


class NonlinearPrimitive(ExpressionNode):
    __slots__ = ()
    PRIMITIVE = None

    def __init__(self, args):
        args = tuple(as_expression(a) for a in args)
        if not args:
            raise ValueError("%s() requires at least one argument" % (self.PRIMITIVE,))
        super().__init__(args)

    def __str__(self):
        return '%s(%s)' % (self.PRIMITIVE, ', '.join(map(str, self.args)))


class AbsExpression(NonlinearPrimitive):
    __slots__ = ()
    PRIMITIVE = 'abs'

    def __init__(self, args):
        super().__init__(args)
        if len(self.args) != 1:
            raise ValueError("abs() takes exactly one argument")


class MaxExpression(NonlinearPrimitive):
    __slots__ = ()
    PRIMITIVE = 'max'


class MinExpression(NonlinearPrimitive):
    __slots__ = ()
    PRIMITIVE = 'min'


class AndExpression(NonlinearPrimitive):
    __slots__ = ()
    PRIMITIVE = 'and'


class OrExpression(NonlinearPrimitive):
    __slots__ = ()
    PRIMITIVE = 'or'


#
# Construction helpers
#


def param(name):
    """Reference an external parameter"""
    return Name(name)


def index(name):
    """Reference a generator binding"""
    return Name(name)


def var(base):
    """Reference a variable family; index it with ``[...]``"""
    return VarRef(base)


def irange(start, stop):
    """Inclusive integer range domain"""
    return RangeDomain(start, stop)


def clause(name, domain):
    return GeneratorClause(name, domain)


def where(condition):
    return Filter(condition)


def as_clause(obj):
    """Accept GeneratorClause / Filter objects or ``(name, domain)`` tuples"""
    if isinstance(obj, (GeneratorClause, Filter)):
        return obj
    if isinstance(obj, tuple) and len(obj) == 2 and isinstance(obj[0], str):
        return GeneratorClause(*obj)
    raise TypeError("Expected a generator clause or filter, found %r" % (obj,))


def gen_sum(body, *clauses):
    return GeneratorSum(body, clauses)


def equal(lhs, rhs):
    return RelationalExpression('==', lhs, rhs)


def not_equal(lhs, rhs):
    return RelationalExpression('!=', lhs, rhs)


def absolute(arg):
    return AbsExpression((arg,))


def maximum(*args):
    return MaxExpression(args)


def minimum(*args):
    return MinExpression(args)


def logical_and(*args):
    return AndExpression(args)


def logical_or(*args):
    return OrExpression(args)
