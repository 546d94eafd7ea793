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

import pickle

import lpgen.common.unittest as unittest
from lpgen.core.expr.nodes import (
    WILDCARD,
    AbsExpression,
    AndExpression,
    Constant,
    DivisionExpression,
    Filter,
    GeneratorClause,
    GeneratorSum,
    GetItem,
    MaxExpression,
    Name,
    NegationExpression,
    ProductExpression,
    RangeDomain,
    RelationalExpression,
    SumExpression,
    VarRef,
    absolute,
    as_clause,
    as_expression,
    clause,
    equal,
    gen_sum,
    index,
    irange,
    logical_and,
    logical_or,
    maximum,
    minimum,
    not_equal,
    param,
    var,
    where,
)


class TestLeaves(unittest.TestCase):
    def test_as_expression(self):
        c = as_expression(3)
        self.assertIs(c.__class__, Constant)
        self.assertEqual(c.value, 3)
        self.assertEqual(as_expression('a').value, 'a')
        n = param('N')
        self.assertIs(as_expression(n), n)
        with self.assertRaisesRegex(TypeError, "Cannot use \\[1\\] \\(type list\\)"):
            as_expression([1])

    def test_names(self):
        self.assertIs(param('N').__class__, Name)
        self.assertIs(index('i').__class__, Name)
        self.assertEqual(param('N').name, 'N')
        self.assertEqual(str(index('i')), 'i')

    def test_getitem(self):
        p = param('cost')
        e = p[index('i'), 2]
        self.assertIs(e.__class__, GetItem)
        self.assertIs(e.base, p)
        self.assertEqual(len(e.indices), 2)
        self.assertEqual(str(e), 'cost[i, 2]')
        self.assertEqual(str(p['a']['b']), "cost[a][b]")

    def test_varref(self):
        x = var('x')
        self.assertIs(x.__class__, VarRef)
        self.assertEqual(x.indices, ())
        ref = x[index('i'), WILDCARD]
        self.assertEqual(ref.base, 'x')
        self.assertIs(ref.indices[1], WILDCARD)
        self.assertTrue(ref.has_wildcard())
        self.assertFalse(x[1].has_wildcard())
        self.assertEqual(str(ref), 'x[i, _]')
        with self.assertRaisesRegex(TypeError, "already indexed"):
            ref[1]

    def test_wildcard(self):
        self.assertEqual(repr(WILDCARD), '_')
        self.assertIs(pickle.loads(pickle.dumps(WILDCARD)), WILDCARD)


class TestOperators(unittest.TestCase):
    def test_arithmetic(self):
        x = var('x')
        e = x + 1
        self.assertIs(e.__class__, SumExpression)
        self.assertEqual(str(e), 'x + 1')
        self.assertEqual(str(2 + x), '2 + x')
        self.assertEqual(str(x - 1), 'x - 1')
        self.assertIs((1 - x).args[1].__class__, NegationExpression)
        self.assertIs((2 * x).__class__, ProductExpression)
        self.assertEqual(str(x * 2), '(x)*(2)')
        self.assertIs((x / 2).__class__, DivisionExpression)
        self.assertIs((2 / x).__class__, DivisionExpression)
        self.assertEqual(str(-x), '- (x)')
        self.assertIs(+x, x)
        self.assertIs(abs(x).__class__, AbsExpression)

    def test_flattened_sum(self):
        x = var('x')
        e = x + 1 + x + 2
        self.assertEqual(e.nargs(), 4)
        self.assertEqual(str(e), 'x + 1 + x + 2')

    def test_relations(self):
        x = var('x')
        e = x <= 3
        self.assertIs(e.__class__, RelationalExpression)
        self.assertEqual(e.operator, '<=')
        self.assertEqual(str(e), 'x <= 3')
        self.assertEqual((x >= 1).operator, '>=')
        self.assertEqual((x < 1).operator, '<')
        self.assertEqual((x > 1).operator, '>')
        # reflected comparisons swap the operands
        e = 1 <= x
        self.assertEqual(e.operator, '>=')
        self.assertIs(e.lhs, x)
        self.assertEqual(str(equal(x, 1)), 'x == 1')
        self.assertEqual(not_equal(index('i'), 2).operator, '!=')
        with self.assertRaisesRegex(ValueError, "Unknown relational operator '=<'"):
            RelationalExpression('=<', x, 1)

    def test_no_bool(self):
        x = var('x')
        with self.assertRaisesRegex(TypeError, "Cannot convert the lpgen expression"):
            if x <= 1:
                pass

    def test_bad_operand(self):
        with self.assertRaises(TypeError):
            var('x') + [1]


class TestGenerators(unittest.TestCase):
    def test_range(self):
        r = irange(1, param('N'))
        self.assertIs(r.__class__, RangeDomain)
        self.assertEqual(str(r), '1..N')

    def test_clauses(self):
        c = clause('i', irange(1, 3))
        self.assertIs(c.__class__, GeneratorClause)
        self.assertEqual(str(c), 'i <- 1..3')
        self.assertIs(as_clause(c), c)
        c = as_clause(('j', [1, 2]))
        self.assertEqual((c.name, c.domain), ('j', [1, 2]))
        f = where(index('i') >= 2)
        self.assertIs(f.__class__, Filter)
        self.assertEqual(str(f), 'if i >= 2')
        with self.assertRaisesRegex(TypeError, "Generator names must be strings"):
            clause(1, [1])
        with self.assertRaisesRegex(TypeError, "Expected a generator clause"):
            as_clause(('i', [1], 'extra'))

    def test_gen_sum(self):
        e = gen_sum(
            var('x')[index('i')],
            ('i', irange(1, 3)),
            where(not_equal(index('i'), 2)),
        )
        self.assertIs(e.__class__, GeneratorSum)
        self.assertEqual(len(e.clauses), 2)
        self.assertEqual(str(e), 'sum(x[i] for i <- 1..3, if i != 2)')


class TestPrimitives(unittest.TestCase):
    def test_construction(self):
        x, y = var('x'), var('y')
        self.assertIs(absolute(x - y).__class__, AbsExpression)
        self.assertIs(maximum(x, y, 3).__class__, MaxExpression)
        self.assertEqual(maximum(x, y, 3).nargs(), 3)
        self.assertEqual(str(minimum(x, 1)), 'min(x, 1)')
        self.assertIs(logical_and(x, y).__class__, AndExpression)
        self.assertEqual(str(logical_or(x, y)), 'or(x, y)')
        self.assertEqual(str(absolute(x)), 'abs(x)')

    def test_arity(self):
        with self.assertRaisesRegex(ValueError, "max\\(\\) requires at least one"):
            maximum()
        with self.assertRaisesRegex(ValueError, "abs\\(\\) takes exactly one"):
            AbsExpression((var('x'), var('y')))


if __name__ == "__main__":
    unittest.main()
