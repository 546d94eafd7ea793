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

import lpgen.common.unittest as unittest
from lpgen.common.errors import DegreeOverflow, NonConstantDivisor
from lpgen.core.base.var import VariableId
from lpgen.repn.polynomial import Polynomial

x = VariableId('x')
y = VariableId('y')
z = VariableId('z')
X = Polynomial.from_variable(x)
Y = Polynomial.from_variable(y)
Z = Polynomial.from_variable(z)


class TestPolynomial(unittest.TestCase):
    def test_construction(self):
        p = Polynomial({(y, x): 2, (x,): 1, (): 3, (z,): 0})
        self.assertPolynomialEqual(p, {(x, y): 2, (x,): 1, (): 3})
        self.assertEqual(p[(x, y)], 2)
        self.assertEqual(p[(z,)], 0)
        self.assertNotIn((z,), p)
        self.assertEqual(len(p), 3)
        self.assertEqual(Polynomial([((x,), 1), ((x,), -1)]), Polynomial.zero())
        self.assertTrue(Polynomial.from_constant(0).is_zero())
        self.assertTrue(Polynomial.from_variable(x, 0).is_zero())

    def test_degree_limit(self):
        with self.assertRaisesRegex(DegreeOverflow, "Monomial x\\*y\\*z has degree 3"):
            Polynomial({(x, y, z): 1})

    def test_queries(self):
        p = 3 * X * Y + 2 * X - 4
        self.assertEqual(p.degree(), 2)
        self.assertFalse(p.is_constant())
        self.assertEqual(p.constant, -4)
        self.assertEqual(p.linear, {x: 2})
        self.assertEqual(p.quadratic, {(x, y): 3})
        self.assertEqual(p.variables(), [x, y])
        self.assertEqual(Polynomial.zero().degree(), 0)
        self.assertTrue(Polynomial.from_constant(5).is_constant())
        self.assertEqual(Polynomial.from_constant(5).constant_value(), 5)
        with self.assertRaisesRegex(ValueError, "is not constant \\(references x\\)"):
            X.constant_value()

    def test_split_constant(self):
        c, rest = (X + 7).split_constant()
        self.assertEqual(c, 7)
        self.assertEqual(rest, X)
        c, rest = X.split_constant()
        self.assertEqual(c, 0)
        self.assertIs(rest, X)

    def test_add_commutative(self):
        p = X + 2 * Y + 1
        q = Y - X + Z * Z
        self.assertEqual(p + q, q + p)
        self.assertPolynomialEqual(p + q, {(y,): 3, (z, z): 1, (): 1})

    def test_add_associative(self):
        p, q, r = X + 1, Y - 2, X * Y
        self.assertEqual((p + q) + r, p + (q + r))

    def test_cancellation(self):
        self.assertTrue((X - X).is_zero())
        self.assertEqual(X + Y - Y, X)
        self.assertEqual((X * Y) - (Y * X), Polynomial.zero())

    def test_multiply_distributes(self):
        p, q, r = X + 1, Y - 2, Z + 3
        self.assertEqual(p * (q + r), p * q + p * r)
        self.assertPolynomialEqual(
            (X + 1) * (X - 1), {(x, x): 1, (): -1}
        )

    def test_multiply_commutative(self):
        self.assertEqual((X + 2) * (Y - 1), (Y - 1) * (X + 2))

    def test_scale(self):
        self.assertEqual(X.scale(0), Polynomial.zero())
        self.assertIs(X.scale(1), X)
        self.assertPolynomialEqual((X + 1).scale(3), {(x,): 3, (): 3})
        self.assertEqual(-(X - 1), 1 - X)

    def test_degree_overflow(self):
        with self.assertRaisesRegex(DegreeOverflow, "has degree 3"):
            (X * Y) * Z
        with self.assertRaises(DegreeOverflow):
            (X * X) * (Y + 1)
        # constants never raise the degree
        self.assertEqual((X * Y * 2).degree(), 2)

    def test_divide(self):
        self.assertPolynomialEqual((2 * X + 4) / 2, {(x,): 1, (): 2})
        self.assertPolynomialEqual(X.divide(Polynomial.from_constant(4)), {(x,): 0.25})
        with self.assertRaisesRegex(
            NonConstantDivisor, "Cannot divide \\(x\\) by the non-constant"
        ):
            X / Y
        with self.assertRaisesRegex(NonConstantDivisor, "Division of \\(x\\) by zero"):
            X / 0

    def test_evaluate(self):
        p = X * Y + 2 * X - 1
        self.assertEqual(p.evaluate({x: 3, y: 4}), 17)
        self.assertEqual(Polynomial.from_constant(2).evaluate({}), 2)

    def test_equality_and_hash(self):
        p = Polynomial({(x,): 1, (y,): 2})
        q = Polynomial({(y,): 2, (x,): 1})
        self.assertEqual(p, q)
        self.assertEqual(hash(p), hash(q))
        self.assertNotEqual(p, X)
        self.assertNotEqual(p, 1)

    def test_unsupported_operand(self):
        with self.assertRaises(TypeError):
            X + 'a'
        with self.assertRaises(TypeError):
            X / 'a'

    def test_str(self):
        self.assertEqual(str(Polynomial.zero()), '0')
        self.assertEqual(str(X - Y), 'x - y')
        self.assertEqual(str(2 * X * Y + X - 3), '-3 + x + 2*x*y')
        self.assertEqual(repr(X * X), 'Polynomial(x*x)')


if __name__ == "__main__":
    unittest.main()
