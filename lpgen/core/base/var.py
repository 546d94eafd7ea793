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

import logging
import math

from numbers import Number

from lpgen.common.enums import VarKind, Tightening

logger = logging.getLogger(__name__)


def _index_key(val):
    # Numbers sort before strings; everything else sorts by its repr
    if isinstance(val, Number) and not isinstance(val, bool):
        return (0, val, '')
    if isinstance(val, str):
        return (1, 0, val)
    return (2, 0, repr(val))


def _index_str(val):
    if isinstance(val, bool):
        return str(int(val))
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)


class VariableId(object):
    """Identifier of a decision variable: a family base name plus an
    (optionally empty) tuple of scalar index values.

    VariableIds are hashable and totally ordered, so that monomials
    (sorted tuples of VariableIds) have a canonical form.

    """

    __slots__ = ('base', 'index', '_hash')

    def __init__(self, base, index=()):
        if not isinstance(index, tuple):
            index = (index,)
        object.__setattr__(self, 'base', base)
        object.__setattr__(self, 'index', index)
        object.__setattr__(self, '_hash', hash((base, index)))

    def __setattr__(self, name, value):
        raise AttributeError("VariableId objects are immutable")

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if other.__class__ is not VariableId:
            return NotImplemented
        return self.base == other.base and self.index == other.index

    def __ne__(self, other):
        ans = self.__eq__(other)
        if ans is NotImplemented:
            return ans
        return not ans

    def sort_key(self):
        return (self.base, tuple(map(_index_key, self.index)))

    def __lt__(self, other):
        return self.sort_key() < other.sort_key()

    def __le__(self, other):
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other):
        return self.sort_key() > other.sort_key()

    def __ge__(self, other):
        return self.sort_key() >= other.sort_key()

    @property
    def name(self):
        """The model name: ``base`` or ``base(i,j,...)``"""
        if not self.index:
            return self.base
        return '%s(%s)' % (self.base, ','.join(map(_index_str, self.index)))

    def __str__(self):
        return self.name

    def __repr__(self):
        return 'VariableId(%r, %r)' % (self.base, self.index)


class VariableDecl(object):
    """A declared decision variable.

    Parameters
    ----------
    id: VariableId

    kind: VarKind
        continuous, integer or binary.  Binary variables always have
        bounds [0, 1], regardless of the bounds passed in.

    lb: float, optional
        Lower bound (``None`` or ``-inf`` for unbounded below)

    ub: float, optional
        Upper bound (``None`` or ``inf`` for unbounded above)

    description: str, optional

    auxiliary: Tightening, optional
        Set for variables created by the Linearizer: the direction an
        optimizer must push this variable for it to equal the
        primitive it replaces.  ``None`` for user variables.

    """

    __slots__ = ('id', 'kind', 'lb', 'ub', 'description', 'auxiliary')

    def __init__(
        self, id, kind=VarKind.continuous, lb=None, ub=None, description=None,
        auxiliary=None,
    ):
        kind = VarKind(kind)
        lb = -math.inf if lb is None else lb
        ub = math.inf if ub is None else ub
        if kind is VarKind.binary:
            if (lb, ub) not in ((0, 1), (-math.inf, math.inf)):
                logger.debug(
                    "Binary variable %s: ignoring declared bounds [%s, %s]",
                    id.name, lb, ub,
                )
            lb, ub = 0, 1
        elif lb > ub:
            raise ValueError(
                "Variable %s has lower bound %s greater than upper bound %s"
                % (id.name, lb, ub)
            )
        for slot, val in zip(
            VariableDecl.__slots__,
            (id, kind, lb, ub, description, None if auxiliary is None
             else Tightening(auxiliary)),
        ):
            object.__setattr__(self, slot, val)

    def __setattr__(self, name, value):
        raise AttributeError("VariableDecl objects are immutable")

    @property
    def name(self):
        return self.id.name

    @property
    def bounds(self):
        return self.lb, self.ub

    def is_integer(self):
        return self.kind is not VarKind.continuous

    def is_auxiliary(self):
        return self.auxiliary is not None

    def __repr__(self):
        return 'VariableDecl(%s, %s, [%s, %s])' % (
            self.id.name, self.kind, self.lb, self.ub,
        )
