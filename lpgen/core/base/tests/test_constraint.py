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

import lpgen.common.unittest as unittest
from lpgen.core.base.constraint import Constraint
from lpgen.core.base.var import VariableId
from lpgen.repn.polynomial import Polynomial

x = VariableId('x')
y = VariableId('y')
X = Polynomial.from_variable(x)
Y = Polynomial.from_variable(y)


class TestConstraint(unittest.TestCase):
    def test_from_difference(self):
        con = Constraint.from_difference(X - Y + 2, '<=')
        self.assertPolynomialEqual(con.lhs, {(x,): 1, (y,): -1})
        self.assertEqual(con.operator, '<=')
        self.assertEqual(con.rhs, -2)
        self.assertIsNone(con.id)
        self.assertIsNone(con.name)

        con = Constraint.from_difference(X, '==', name='fix')
        self.assertEqual(con.rhs, 0)
        self.assertEqual(con.name, 'fix')

    def test_bad_operator(self):
        with self.assertRaisesRegex(ValueError, "got '<'"):
            Constraint(X, '<', 1)

    def test_constant_lhs(self):
        with self.assertRaisesRegex(ValueError, "must not have a constant term"):
            Constraint(X + 1, '<=', 1)

    def test_trivially_satisfied(self):
        self.assertTrue(Constraint(X, '<=', math.inf).is_trivially_satisfied())
        self.assertTrue(Constraint(X, '>=', -math.inf).is_trivially_satisfied())
        self.assertFalse(Constraint(X, '>=', math.inf).is_trivially_satisfied())
        self.assertFalse(Constraint(X, '<=', 5).is_trivially_satisfied())

    def test_is_constant(self):
        self.assertTrue(Constraint(Polynomial.zero(), '<=', 1).is_constant())
        self.assertFalse(Constraint(X, '<=', 1).is_constant())

    def test_evaluate(self):
        con = Constraint(X + Y, '<=', 3)
        self.assertTrue(con.evaluate({x: 1, y: 2}))
        self.assertFalse(con.evaluate({x: 2, y: 2}))
        con = Constraint(X * Y, '==', 6)
        self.assertTrue(con.evaluate({x: 2, y: 3}))
        self.assertFalse(con.evaluate({x: 2, y: 2}))
        self.assertTrue(Constraint(X, '>=', 1).evaluate({x: 1 - 1e-12}))

    def test_equality(self):
        self.assertEqual(Constraint(X, '<=', 1), Constraint(X, '<=', 1, name='c'))
        self.assertNotEqual(Constraint(X, '<=', 1), Constraint(X, '>=', 1))
        self.assertNotEqual(Constraint(X, '<=', 1), Constraint(Y, '<=', 1))
        with self.assertRaises(TypeError):
            hash(Constraint(X, '<=', 1))

    def test_str(self):
        self.assertEqual(str(Constraint(X - Y, '>=', 1, name='c')), 'c: x - y >= 1')
        self.assertEqual(str(Constraint(X, '==', 2, id='c00000003')), 'c00000003: x == 2')
        self.assertEqual(str(Constraint(2 * X, '<=', 4)), '2*x <= 4')


if __name__ == "__main__":
    unittest.main()
