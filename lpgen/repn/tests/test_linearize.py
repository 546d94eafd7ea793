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

import itertools
import logging

import lpgen.common.unittest as unittest
from lpgen.common.enums import Tightening, VarKind
from lpgen.common.errors import NonBinaryOperand
from lpgen.common.log import LoggingIntercept
from lpgen.core.base.model import Model
from lpgen.core.base.var import VariableDecl, VariableId
from lpgen.repn.linearize import Linearizer
from lpgen.repn.polynomial import Polynomial


class TestLinearizer(unittest.TestCase):
    def setUp(self):
        self.model = Model()
        self.x = [VariableId('x', (n,)) for n in range(3)]
        self.b = [VariableId('b', (n,)) for n in range(3)]
        for v in self.x:
            self.model.add_variable(VariableDecl(v))
        for v in self.b:
            self.model.add_variable(VariableDecl(v, VarKind.binary))
        self.lin = Linearizer(self.model)
        self.X = [Polynomial.from_variable(v) for v in self.x]
        self.B = [Polynomial.from_variable(v) for v in self.b]

    def feasible(self, values):
        return all(con.evaluate(values) for con in self.model.constraints.values())

    def aux(self, poly):
        (vid,) = poly.variables()
        return vid

    def test_abs(self):
        a = self.aux(self.lin.linearize('abs', [self.X[0] - self.X[1] + 1]))
        self.assertEqual(a, VariableId('_aux_abs', (0,)))
        decl = self.model.variable(a)
        self.assertEqual(decl.bounds[0], 0)
        self.assertIs(decl.auxiliary, Tightening.down)
        self.assertEqual(decl.description, 'auxiliary variable for abs()')
        self.assertEqual(len(self.model.constraints), 2)
        for u, v in itertools.product(range(-3, 4), repeat=2):
            val = abs(u - v + 1)
            point = {self.x[0]: u, self.x[1]: v}
            # the primitive value is the least feasible auxiliary value
            self.assertTrue(self.feasible({**point, a: val}))
            self.assertTrue(self.feasible({**point, a: val + 2.5}))
            self.assertFalse(self.feasible({**point, a: val - 0.5}))

    def test_max(self):
        m = self.aux(self.lin.linearize('max', self.X + [Polynomial.from_constant(1)]))
        self.assertEqual(m, VariableId('_aux_max', (0,)))
        self.assertIs(self.model.variable(m).auxiliary, Tightening.down)
        self.assertEqual(len(self.model.constraints), 4)
        for vals in itertools.product(range(-2, 3), repeat=3):
            point = dict(zip(self.x, vals))
            val = max(vals + (1,))
            self.assertTrue(self.feasible({**point, m: val}))
            self.assertTrue(self.feasible({**point, m: val + 1}))
            self.assertFalse(self.feasible({**point, m: val - 0.5}))

    def test_min(self):
        m = self.aux(self.lin.linearize('min', self.X[:2]))
        self.assertEqual(m, VariableId('_aux_min', (0,)))
        self.assertIs(self.model.variable(m).auxiliary, Tightening.up)
        for vals in itertools.product(range(-2, 3), repeat=2):
            point = dict(zip(self.x, vals))
            val = min(vals)
            self.assertTrue(self.feasible({**point, m: val}))
            self.assertTrue(self.feasible({**point, m: val - 1}))
            self.assertFalse(self.feasible({**point, m: val + 0.5}))

    def check_logical(self, primitive, func, nargs):
        y = self.aux(self.lin.linearize(primitive, self.B[:nargs]))
        decl = self.model.variable(y)
        self.assertIs(decl.kind, VarKind.binary)
        self.assertIs(decl.auxiliary, Tightening.exact)
        self.assertEqual(len(self.model.constraints), nargs + 1)
        for vals in itertools.product((0, 1), repeat=nargs):
            point = dict(zip(self.b, vals))
            feasible = [
                yv for yv in (0, 1) if self.feasible({**point, y: yv})
            ]
            self.assertEqual(feasible, [int(func(vals))])

    def test_and(self):
        self.check_logical('and', all, 3)

    def test_or(self):
        self.check_logical('or', any, 3)

    def test_single_operand(self):
        self.check_logical('and', all, 1)

    def test_constant_operand(self):
        y = self.aux(
            self.lin.linearize('or', [self.B[0], Polynomial.from_constant(0)])
        )
        for bv in (0, 1):
            feasible = [
                yv for yv in (0, 1)
                if self.feasible({self.b[0]: bv, y: yv})
            ]
            self.assertEqual(feasible, [bv])
        with self.assertRaisesRegex(NonBinaryOperand, "Operand 2 of and\\(\\)"):
            self.lin.linearize('and', [self.B[0], Polynomial.from_constant(2)])

    def test_continuous_operand(self):
        with LoggingIntercept(module='lpgen.repn.linearize') as LOG:
            self.lin.linearize('and', [self.B[0], self.X[1]])
        self.assertIn(
            "references the continuous variable x(1); the reformulation "
            "assumes 0/1 operands",
            LOG.getvalue().replace('\n', ' '),
        )

    def test_numbering(self):
        self.lin.linearize('abs', [self.X[0]])
        self.lin.linearize('max', [self.X[0], self.X[1]])
        y = self.aux(self.lin.linearize('or', [self.B[0], self.B[1]]))
        self.assertEqual(y, VariableId('_aux_or', (2,)))
        self.assertEqual(self.lin.count, 3)
        self.assertEqual(
            [v.name for v in self.model.variables if v.base.startswith('_aux_')],
            ['_aux_abs(0)', '_aux_max(1)', '_aux_or(2)'],
        )
        self.assertEqual(
            self.lin.defining_constraints[VariableId('_aux_abs', (0,))],
            ['c00000000', 'c00000001'],
        )
        self.assertEqual(
            self.model.constraints['c00000002'].description,
            'linearization of _aux_max(1)',
        )
        self.assertEqual(Linearizer(Model(), start=5).count, 5)

    def test_errors(self):
        with self.assertRaisesRegex(ValueError, "Unknown non-linear primitive 'xor'"):
            self.lin.linearize('xor', [self.B[0]])
        with self.assertRaisesRegex(ValueError, "max\\(\\) requires at least one"):
            self.lin.linearize('max', [])
        with self.assertRaisesRegex(ValueError, "abs\\(\\) takes exactly one"):
            self.lin.linearize('abs', self.X[:2])
        self.assertEqual(len(self.model.variables), 6)


if __name__ == "__main__":
    unittest.main()
