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
from lpgen.common.enums import (
    ObjectiveSense,
    VarKind,
    Tightening,
    minimize,
    maximize,
)


class TestEnums(unittest.TestCase):
    def test_objective_sense(self):
        self.assertIs(ObjectiveSense('maximize'), maximize)
        self.assertIs(ObjectiveSense(1), minimize)
        self.assertEqual(int(maximize), -1)
        self.assertEqual(str(minimize), 'minimize')
        with self.assertRaises(ValueError):
            ObjectiveSense('maximise')

    def test_var_kind(self):
        self.assertIs(VarKind('binary'), VarKind.binary)
        self.assertIs(VarKind(1), VarKind.integer)
        self.assertEqual(
            [str(k) for k in VarKind], ['continuous', 'integer', 'binary']
        )

    def test_tightening_sign(self):
        # an auxiliary that must be pushed down is pushed down by a
        # positive minimized (or negative maximized) coefficient
        self.assertGreater(1 * minimize * Tightening.down, 0)
        self.assertGreater(-1 * maximize * Tightening.down, 0)
        self.assertLess(1 * minimize * Tightening.up, 0)
        self.assertEqual(5 * maximize * Tightening.exact, 0)


if __name__ == "__main__":
    unittest.main()
