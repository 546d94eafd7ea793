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

from io import StringIO

import lpgen.common.unittest as unittest
from lpgen.common.enums import ObjectiveSense, VarKind
from lpgen.common.errors import (
    DuplicateVariable,
    ModelFrozenError,
    UnknownVariableFamily,
)
from lpgen.core.base.constraint import Constraint
from lpgen.core.base.model import Model
from lpgen.core.base.var import VariableDecl, VariableId
from lpgen.repn.polynomial import Polynomial


class TestModel(unittest.TestCase):
    def test_variables(self):
        m = Model('m')
        x1 = m.add_variable(VariableDecl(VariableId('x', (1,)))).id
        x2 = m.add_variable(VariableDecl(VariableId('x', (2,)))).id
        y = m.add_variable(VariableDecl(VariableId('y'), VarKind.binary)).id
        self.assertEqual(list(m.variables), [x1, x2, y])
        self.assertEqual(m.family('x'), [x1, x2])
        self.assertEqual(m.families(), ['x', 'y'])
        self.assertTrue(m.has_family('y'))
        self.assertIs(m.variable_by_name('x(2)').id, x2)
        self.assertIs(m.variable(y).kind, VarKind.binary)
        self.assertEqual(m.auxiliary_variables(), [])

    def test_empty_family(self):
        m = Model()
        m.declare_family('z')
        self.assertEqual(m.family('z'), [])
        with self.assertRaisesRegex(
            UnknownVariableFamily, "Variable family 'w' has not been declared"
        ):
            m.family('w')

    def test_duplicate_variable(self):
        m = Model()
        m.add_variable(VariableDecl(VariableId('x', (1,))))
        with self.assertRaisesRegex(
            DuplicateVariable, "Variable x\\(1\\) is declared more than once"
        ):
            m.add_variable(VariableDecl(VariableId('x', (1,))))
        with self.assertRaisesRegex(
            DuplicateVariable, "share the model name 'x\\(1\\)'"
        ):
            m.add_variable(VariableDecl(VariableId('x', ('1',))))

    def test_constraint_ids(self):
        m = Model()
        x = Polynomial.from_variable(VariableId('x'))
        c0 = m.add_constraint(Constraint(x, '<=', 1))
        c1 = m.add_constraint(Constraint(x, '>=', 0, name='lb'))
        self.assertEqual(c0.id, 'c00000000')
        self.assertEqual(c1.id, 'c00000001')
        self.assertEqual(list(m.constraints), ['c00000000', 'c00000001'])
        self.assertIs(m.constraints['c00000001'], c1)

    def test_objective(self):
        m = Model()
        self.assertIs(m.sense, ObjectiveSense.minimize)
        self.assertTrue(m.objective.is_zero())
        x = Polynomial.from_variable(VariableId('x'))
        m.set_objective(x, 'maximize')
        self.assertIs(m.sense, ObjectiveSense.maximize)
        m.set_objective(2 * x)
        self.assertIs(m.sense, ObjectiveSense.maximize)
        self.assertEqual(m.objective, 2 * x)

    def test_frozen(self):
        m = Model()
        self.assertFalse(m.is_frozen())
        self.assertIs(m.freeze(), m)
        self.assertTrue(m.is_frozen())
        x = Polynomial.from_variable(VariableId('x'))
        with self.assertRaisesRegex(
            ModelFrozenError, "Cannot modify a Model that has already been built"
        ):
            m.add_variable(VariableDecl(VariableId('x')))
        with self.assertRaises(ModelFrozenError):
            m.add_constraint(Constraint(x, '<=', 1))
        with self.assertRaises(ModelFrozenError):
            m.set_objective(x)
        with self.assertRaises(ModelFrozenError):
            m.declare_family('z')

    def test_rollback(self):
        m = Model()
        x = m.add_variable(VariableDecl(VariableId('x', (1,)))).id
        m.add_constraint(Constraint(Polynomial.from_variable(x), '<=', 1))
        cp = m.checkpoint()

        m.declare_family('z')
        y = m.add_variable(VariableDecl(VariableId('x', (2,)))).id
        a = m.add_variable(VariableDecl(VariableId('_aux_abs', (0,)))).id
        con = m.add_constraint(Constraint(Polynomial.from_variable(a), '>=', 0))
        m.defining_constraints[a] = [con.id]
        m.set_objective(Polynomial.from_variable(y), 'maximize')

        m.rollback(cp)
        self.assertEqual(list(m.variables), [x])
        self.assertEqual(m.family('x'), [x])
        self.assertEqual(m.families(), ['x'])
        self.assertEqual(list(m.constraints), ['c00000000'])
        self.assertEqual(m.defining_constraints, {})
        self.assertTrue(m.objective.is_zero())
        self.assertIs(m.sense, ObjectiveSense.minimize)
        with self.assertRaises(KeyError):
            m.variable_by_name('x(2)')
        self.assertEqual(
            m.add_constraint(Constraint(Polynomial.from_variable(x), '>=', 0)).id,
            'c00000001',
        )

    def test_copy(self):
        m = Model('m', 'maximize')
        x = m.add_variable(VariableDecl(VariableId('x'))).id
        c0 = m.add_constraint(Constraint(Polynomial.from_variable(x), '<=', 1))
        m.freeze()

        m2 = m.copy()
        self.assertFalse(m2.is_frozen())
        self.assertEqual(m2.name, 'm')
        self.assertIs(m2.sense, ObjectiveSense.maximize)
        self.assertIsNot(m2.constraints['c00000000'], c0)
        self.assertEqual(m2.constraints['c00000000'], c0)
        m2.constraints['c00000000'].name = 'cap'
        self.assertIsNone(c0.name)
        y = m2.add_variable(VariableDecl(VariableId('x', (1,)))).id
        self.assertEqual(m2.family('x'), [x, y])
        self.assertEqual(m.family('x'), [x])
        c1 = m2.add_constraint(Constraint(Polynomial.from_variable(y), '>=', 0))
        self.assertEqual(c1.id, 'c00000001')
        self.assertEqual(len(m.constraints), 1)
        self.assertEqual(m.copy('other').name, 'other')

    def test_pprint(self):
        m = Model('m')
        x = m.add_variable(VariableDecl(VariableId('x'), lb=0)).id
        m.add_constraint(Constraint(Polynomial.from_variable(x), '>=', 1))
        OUT = StringIO()
        m.pprint(OUT)
        self.assertEqual(
            OUT.getvalue(),
            "Model m\n"
            "  minimize: 0\n"
            "  1 Variables:\n"
            "    x : continuous [0, inf]\n"
            "  1 Constraints:\n"
            "    c00000000: x >= 1\n",
        )
        self.assertEqual(repr(m), "Model('m', 1 variables, 1 constraints)")


if __name__ == "__main__":
    unittest.main()
