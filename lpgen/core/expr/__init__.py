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

from lpgen.core.expr.nodes import (
    WILDCARD,
    ExpressionNode,
    Constant,
    Name,
    GetItem,
    VarRef,
    SumExpression,
    NegationExpression,
    ProductExpression,
    DivisionExpression,
    RelationalExpression,
    RangeDomain,
    GeneratorClause,
    Filter,
    GeneratorSum,
    NonlinearPrimitive,
    AbsExpression,
    MaxExpression,
    MinExpression,
    AndExpression,
    OrExpression,
    as_expression,
    param,
    index,
    var,
    irange,
    clause,
    where,
    gen_sum,
    equal,
    not_equal,
    absolute,
    maximum,
    minimum,
    logical_and,
    logical_or,
)
