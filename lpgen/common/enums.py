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

"""Standard :py:class:`enum.Enum` definitions used throughout lpgen.

.. autosummary::

   ObjectiveSense
   VarKind
   Tightening

"""

import enum


class NamedIntEnum(enum.IntEnum):
    """An extended version of :py:class:`enum.IntEnum` that supports
    creating members by name as well as value.

    """

    @classmethod
    def _missing_(cls, value):
        for member in cls:
            if member.name == value:
                return member
        return None

    def __str__(self):
        return self.name


class ObjectiveSense(NamedIntEnum):
    """Flag indicating if an objective is minimizing (1) or maximizing (-1)."""

    minimize = 1
    maximize = -1


class VarKind(NamedIntEnum):
    """Domain of a decision variable."""

    continuous = 0
    integer = 1
    binary = 2


class Tightening(NamedIntEnum):
    """Direction an optimizer must push an auxiliary variable so that it
    attains the value of the primitive it replaces.

    The values are chosen so that an auxiliary variable appearing in the
    objective with coefficient ``c`` is driven in the right direction
    exactly when ``c * sense * tightening >= 0``.

    """

    #: the relaxation is exact; any feasible value is correct
    exact = 0
    #: the variable is only bounded from below (abs, max)
    down = 1
    #: the variable is only bounded from above (min)
    up = -1


minimize = ObjectiveSense.minimize
maximize = ObjectiveSense.maximize
