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

"""Linear reformulations of the non-linear primitives.

Each primitive introduces one auxiliary variable and a small set of
linear constraints, appended to the model immediately:

=========  ===========  =====================================
primitive  auxiliary    constraints
=========  ===========  =====================================
abs(e)     a >= 0       a >= e, a >= -e
max(e...)  m (free)     m >= e_i for every operand
min(e...)  m (free)     m <= e_i for every operand
and(b...)  y binary     y <= b_i, y >= sum(b) - (n - 1)
or(b...)   y binary     y >= b_i, y <= sum(b)
=========  ===========  =====================================

``abs`` / ``max`` only bound the auxiliary variable from below and
``min`` from above; the auxiliary variable equals the primitive only
when the optimizer pushes it toward that bound.  This direction is
recorded on the variable (:class:`~lpgen.common.enums.Tightening`) so
the objective can be checked against it.

"""

import logging

from lpgen.common.enums import Tightening, VarKind
from lpgen.common.errors import NonBinaryOperand
from lpgen.core.base.constraint import Constraint
from lpgen.core.base.var import VariableDecl, VariableId
from lpgen.repn.polynomial import Polynomial

logger = logging.getLogger(__name__)

AUX_PREFIX = '_aux_'


class Linearizer(object):
    """Emit auxiliary variables and constraints into `model`.

    The auxiliary counter belongs to this object, so numbering is
    private to one compilation run; pass `start` to continue the
    numbering of a model that already holds auxiliary variables.  The
    constraints emitted for each auxiliary variable are recorded in
    ``model.defining_constraints``.
    """

    def __init__(self, model, start=0):
        self.model = model
        self._counter = start
        self._handlers = {
            'abs': self._abs,
            'max': self._max,
            'min': self._min,
            'and': self._and,
            'or': self._or,
        }

    @property
    def count(self):
        return self._counter

    @property
    def defining_constraints(self):
        return self.model.defining_constraints

    def rewind(self, count):
        """Reuse auxiliary numbers from `count` on"""
        self._counter = count

    def linearize(self, primitive, operands):
        """Return the Polynomial (a single auxiliary variable) standing in
        for ``primitive(*operands)``"""
        try:
            handler = self._handlers[primitive]
        except KeyError:
            raise ValueError("Unknown non-linear primitive '%s'" % (primitive,))
        if not operands:
            raise ValueError("%s() requires at least one operand" % (primitive,))
        return handler(list(operands))

    def _new_aux(self, primitive, kind, lb, ub, tightening):
        vid = VariableId(AUX_PREFIX + primitive, (self._counter,))
        self._counter += 1
        self.model.add_variable(
            VariableDecl(
                vid,
                kind,
                lb,
                ub,
                description='auxiliary variable for %s()' % (primitive,),
                auxiliary=tightening,
            )
        )
        logger.debug("Introduced auxiliary variable %s for %s()", vid.name, primitive)
        return vid, Polynomial.from_variable(vid)

    def _emit(self, body, operator, aux):
        con = self.model.add_constraint(
            Constraint.from_difference(
                body, operator, description='linearization of %s' % (aux.name,)
            )
        )
        self.defining_constraints.setdefault(aux, []).append(con.id)

    def _abs(self, operands):
        if len(operands) != 1:
            raise ValueError("abs() takes exactly one operand")
        (e,) = operands
        vid, a = self._new_aux('abs', VarKind.continuous, 0, None, Tightening.down)
        self._emit(a - e, '>=', vid)
        self._emit(a + e, '>=', vid)
        return a

    def _max(self, operands):
        vid, m = self._new_aux('max', VarKind.continuous, None, None, Tightening.down)
        for e in operands:
            self._emit(m - e, '>=', vid)
        return m

    def _min(self, operands):
        vid, m = self._new_aux('min', VarKind.continuous, None, None, Tightening.up)
        for e in operands:
            self._emit(m - e, '<=', vid)
        return m

    def _check_binary(self, primitive, operands):
        for e in operands:
            if e.is_constant():
                if e.constant not in (0, 1):
                    raise NonBinaryOperand(
                        "Operand %s of %s() is not 0 or 1" % (e.constant, primitive)
                    )
                continue
            for v in e.variables():
                if not self.model.variable(v).is_integer():
                    logger.warning(
                        "Operand (%s) of %s() references the continuous "
                        "variable %s; the reformulation assumes 0/1 operands",
                        e, primitive, v.name,
                    )

    def _and(self, operands):
        self._check_binary('and', operands)
        vid, y = self._new_aux('and', VarKind.binary, 0, 1, Tightening.exact)
        total = Polynomial.zero()
        for b in operands:
            self._emit(y - b, '<=', vid)
            total = total + b
        self._emit(y - total + (len(operands) - 1), '>=', vid)
        return y

    def _or(self, operands):
        self._check_binary('or', operands)
        vid, y = self._new_aux('or', VarKind.binary, 0, 1, Tightening.exact)
        total = Polynomial.zero()
        for b in operands:
            self._emit(y - b, '>=', vid)
            total = total + b
        self._emit(y - total, '<=', vid)
        return y
