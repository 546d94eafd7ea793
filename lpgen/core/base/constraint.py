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

import math

from lpgen.core.expr.nodes import CONSTRAINT_OPERATORS


class Constraint(object):
    """A normalized constraint ``lhs <operator> rhs``.

    `lhs` is a Polynomial holding every variable term (and no constant
    term); `rhs` is a number, possibly ``inf`` / ``-inf``.  Use
    :meth:`from_difference` to build a normalized constraint from
    ``body <operator> 0``.

    The `id` is assigned by the :class:`~lpgen.core.base.model.Model`
    when the constraint is added to it.

    """

    __slots__ = ('id', 'lhs', 'operator', 'rhs', 'name', 'description')

    def __init__(self, lhs, operator, rhs, name=None, description=None, id=None):
        if operator not in CONSTRAINT_OPERATORS:
            raise ValueError(
                "Constraint operator must be one of %s (got '%s')"
                % (CONSTRAINT_OPERATORS, operator)
            )
        if lhs.constant:
            raise ValueError(
                "Constraint left-hand side must not have a constant term"
            )
        self.id = id
        self.lhs = lhs
        self.operator = operator
        self.rhs = rhs
        self.name = name
        self.description = description

    @classmethod
    def from_difference(cls, body, operator, **kwds):
        """Normalize ``body <operator> 0``"""
        const, body = body.split_constant()
        return cls(body, operator, -const if const else 0, **kwds)

    def is_trivially_satisfied(self):
        """True if the right-hand side is an infinite, non-binding bound"""
        return (self.operator == '<=' and self.rhs == math.inf) or (
            self.operator == '>=' and self.rhs == -math.inf
        )

    def is_constant(self):
        return self.lhs.is_zero()

    def evaluate(self, values, tol=1e-9):
        """Return True if the assignment `values` satisfies the constraint"""
        lhs = self.lhs.evaluate(values)
        if self.operator == '<=':
            return lhs <= self.rhs + tol
        if self.operator == '>=':
            return lhs >= self.rhs - tol
        return abs(lhs - self.rhs) <= tol

    def __eq__(self, other):
        if not isinstance(other, Constraint):
            return NotImplemented
        return (self.lhs, self.operator, self.rhs) == (
            other.lhs, other.operator, other.rhs,
        )

    def __ne__(self, other):
        ans = self.__eq__(other)
        if ans is NotImplemented:
            return ans
        return not ans

    __hash__ = None

    def __str__(self):
        label = self.name or self.id
        expr = '%s %s %s' % (self.lhs, self.operator, self.rhs)
        if label:
            return '%s: %s' % (label, expr)
        return expr

    def __repr__(self):
        return 'Constraint(%s)' % (self,)
