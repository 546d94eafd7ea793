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

"""Canonical sparse representation of linear / quadratic expressions.

A :class:`Polynomial` maps *monomials* to numeric coefficients.  A
monomial is a sorted tuple of zero, one or two
:class:`~lpgen.core.base.var.VariableId` objects: ``()`` is the constant
term, ``(x,)`` a linear term and ``(x, y)`` (with ``x <= y``) a quadratic
term.  Zero coefficients are never stored, so two Polynomials are equal
exactly when they represent the same expression.

All operations return new Polynomials; instances are never modified
after construction.

"""

import logging

from numbers import Number

from lpgen.common.errors import DegreeOverflow, NonConstantDivisor

logger = logging.getLogger(__name__)

#: Highest monomial degree a Polynomial may hold
MAX_DEGREE = 2


def _monomial(vids):
    mono = tuple(sorted(vids))
    if len(mono) > MAX_DEGREE:
        raise DegreeOverflow(
            "Monomial %s has degree %s (the largest supported degree is %s)"
            % ('*'.join(v.name for v in mono), len(mono), MAX_DEGREE)
        )
    return mono


class Polynomial(object):
    """Immutable mapping from monomial to coefficient"""

    __slots__ = ('_terms', '_hash')

    def __init__(self, terms=None):
        data = {}
        if terms:
            items = terms.items() if hasattr(terms, 'items') else terms
            for mono, coef in items:
                if not coef:
                    continue
                mono = _monomial(mono)
                coef = data.get(mono, 0) + coef
                if coef:
                    data[mono] = coef
                else:
                    data.pop(mono, None)
        self._terms = data
        self._hash = None

    @classmethod
    def _from_dict(cls, data):
        # data is already canonical (sorted monomials, no zeros)
        ans = cls.__new__(cls)
        ans._terms = data
        ans._hash = None
        return ans

    @classmethod
    def from_constant(cls, value):
        return cls._from_dict({(): value} if value else {})

    @classmethod
    def from_variable(cls, vid, coef=1):
        return cls._from_dict({(vid,): coef} if coef else {})

    @classmethod
    def zero(cls):
        return cls._from_dict({})

    #
    # Mapping interface
    #

    def items(self):
        return self._terms.items()

    def monomials(self):
        return self._terms.keys()

    def __getitem__(self, mono):
        return self._terms.get(mono, 0)

    def __len__(self):
        return len(self._terms)

    def __iter__(self):
        return iter(self._terms)

    def __contains__(self, mono):
        return mono in self._terms

    #
    # Queries
    #

    def degree(self):
        return max((len(m) for m in self._terms), default=0)

    def is_constant(self):
        return all(not m for m in self._terms)

    def is_zero(self):
        return not self._terms

    def constant_value(self):
        """Return the value of a constant Polynomial.

        Raises :py:class:`ValueError` if the Polynomial references any
        variable.
        """
        if not self.is_constant():
            raise ValueError(
                "Polynomial %s is not constant (references %s)"
                % (self, ', '.join(v.name for v in self.variables()))
            )
        return self._terms.get((), 0)

    def split_constant(self):
        """Return ``(constant, polynomial without its constant term)``"""
        if () not in self._terms:
            return 0, self
        data = dict(self._terms)
        return data.pop(()), Polynomial._from_dict(data)

    @property
    def constant(self):
        """The constant (degree 0) coefficient"""
        return self._terms.get((), 0)

    @property
    def linear(self):
        """dict mapping VariableId to its linear coefficient"""
        return {m[0]: c for m, c in self._terms.items() if len(m) == 1}

    @property
    def quadratic(self):
        """dict mapping (VariableId, VariableId) to the bilinear coefficient"""
        return {m: c for m, c in self._terms.items() if len(m) == 2}

    def variables(self):
        """Sorted list of every VariableId referenced by this Polynomial"""
        return sorted({v for m in self._terms for v in m})

    def evaluate(self, values):
        """Evaluate the Polynomial given a mapping VariableId -> number"""
        ans = 0
        for mono, coef in self._terms.items():
            for v in mono:
                coef *= values[v]
            ans += coef
        return ans

    #
    # Algebra
    #

    def add(self, other):
        if not other._terms:
            return self
        if not self._terms:
            return other
        data = dict(self._terms)
        for mono, coef in other._terms.items():
            coef += data.get(mono, 0)
            if coef:
                data[mono] = coef
            else:
                data.pop(mono, None)
        return Polynomial._from_dict(data)

    def negate(self):
        return Polynomial._from_dict({m: -c for m, c in self._terms.items()})

    def scale(self, k):
        if not k:
            return Polynomial.zero()
        if k == 1:
            return self
        return Polynomial._from_dict({m: k * c for m, c in self._terms.items()})

    def subtract(self, other):
        return self.add(other.negate())

    def multiply(self, other):
        """Polynomial product.

        Raises :py:class:`DegreeOverflow` if any resulting monomial
        would have degree greater than 2.
        """
        if self.is_constant():
            return other.scale(self.constant)
        if other.is_constant():
            return self.scale(other.constant)
        if self.degree() + other.degree() > MAX_DEGREE:
            raise DegreeOverflow(
                "Product of (%s) and (%s) has degree %s"
                % (self, other, self.degree() + other.degree())
            )
        ans = {}
        for m1, c1 in self._terms.items():
            for m2, c2 in other._terms.items():
                mono = _monomial(m1 + m2)
                coef = ans.get(mono, 0) + c1 * c2
                if coef:
                    ans[mono] = coef
                else:
                    ans.pop(mono, None)
        return Polynomial._from_dict(ans)

    def divide(self, divisor):
        """Divide by a constant (number or constant Polynomial)"""
        if isinstance(divisor, Polynomial):
            if not divisor.is_constant():
                raise NonConstantDivisor(
                    "Cannot divide (%s) by the non-constant expression (%s)"
                    % (self, divisor)
                )
            divisor = divisor.constant
        if not divisor:
            raise NonConstantDivisor("Division of (%s) by zero" % (self,))
        return Polynomial._from_dict(
            {m: c / divisor for m, c in self._terms.items()}
        )

    #
    # Operator overloads (numbers are promoted to constant Polynomials)
    #

    @staticmethod
    def _promote(other):
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, Number):
            return Polynomial.from_constant(other)
        return None

    def __add__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, (Polynomial, Number)):
            return NotImplemented
        return self.divide(other)

    def __neg__(self):
        return self.negate()

    #
    # Equality / hashing
    #

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._terms == other._terms

    def __ne__(self, other):
        ans = self.__eq__(other)
        if ans is NotImplemented:
            return ans
        return not ans

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(frozenset(self._terms.items()))
        return self._hash

    def __repr__(self):
        return 'Polynomial(%s)' % (self,)

    def __str__(self):
        if not self._terms:
            return '0'
        parts = []
        for mono in sorted(self._terms, key=lambda m: (len(m), m)):
            coef = self._terms[mono]
            if not mono:
                parts.append(repr(coef))
            elif coef == 1:
                parts.append('*'.join(v.name for v in mono))
            elif coef == -1:
                parts.append('-' + '*'.join(v.name for v in mono))
            else:
                parts.append(repr(coef) + '*' + '*'.join(v.name for v in mono))
        return ' + '.join(parts).replace('+ -', '- ')
