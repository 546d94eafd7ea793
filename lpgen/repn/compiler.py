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

"""Compile expression trees into Polynomials and constraints.

The :class:`ExpressionCompiler` walks an expression tree under a
:class:`~lpgen.core.base.env.BindingEnvironment`.  Three entry points
interpret a node in different contexts:

- :meth:`~ExpressionCompiler.compile`: arithmetic context; the result
  is always a :class:`~lpgen.repn.polynomial.Polynomial`
- :meth:`~ExpressionCompiler.value`: data context (indices, domains,
  range bounds); the result is a plain Python value
- :meth:`~ExpressionCompiler.condition`: generator filters; the result
  is a bool

Relations (``<=``, ``>=``, ``==``) are compiled by
:meth:`~ExpressionCompiler.compile_relation` into normalized
:class:`~lpgen.core.base.constraint.Constraint` skeletons that are not
yet owned by the model.

"""

import logging
import math
import operator

from collections.abc import Mapping, Sequence
from numbers import Number

from lpgen.common.errors import (
    DeveloperError,
    InvalidConstraint,
    NonBinaryOperand,
    NonNumericValue,
    ParameterKeyError,
    UnknownVariable,
    UnresolvedIndex,
)
from lpgen.core.base.constraint import Constraint
from lpgen.core.base.generator import expand
from lpgen.core.base.var import VariableId
from lpgen.core.expr.nodes import (
    WILDCARD,
    AbsExpression,
    AndExpression,
    Constant,
    CONSTRAINT_OPERATORS,
    DivisionExpression,
    GeneratorSum,
    GetItem,
    MaxExpression,
    MinExpression,
    Name,
    NegationExpression,
    NonlinearPrimitive,
    OrExpression,
    ProductExpression,
    RangeDomain,
    RelationalExpression,
    SumExpression,
    VarRef,
)
from lpgen.repn.polynomial import Polynomial

logger = logging.getLogger(__name__)

_relational_ops = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
}

# Primitives whose operand list may be given as a wildcard variable
# reference (``max(x[_])`` is ``max(x[1], x[2], ...)``)
_VARIADIC = (MaxExpression, MinExpression, AndExpression, OrExpression)


def _is_scalar(val):
    return isinstance(val, (Number, str)) and not isinstance(val, bool)


def _fold_constant(node, values):
    if node.__class__ is AbsExpression:
        return abs(values[0])
    if node.__class__ is MaxExpression:
        return max(values)
    if node.__class__ is MinExpression:
        return min(values)
    for v in values:
        if v not in (0, 1):
            raise NonBinaryOperand(
                "Operand %s of %s() is not 0 or 1" % (v, node.PRIMITIVE)
            )
    if node.__class__ is AndExpression:
        return int(all(values))
    return int(any(values))


class ExpressionCompiler(object):
    """Compile expression nodes against a model under construction.

    Parameters
    ----------
    model: Model
        The model being built; variable references are resolved
        against its family registry.

    linearizer: Linearizer
        Receives the non-linear primitives (and appends the
        reformulation to `model`).

    """

    def __init__(self, model, linearizer):
        self.model = model
        self.linearizer = linearizer
        self._compile_dispatch = {
            Constant: self._compile_constant,
            Name: self._compile_name,
            GetItem: self._compile_getitem,
            VarRef: self._compile_varref,
            SumExpression: self._compile_sum,
            NegationExpression: self._compile_negation,
            ProductExpression: self._compile_product,
            DivisionExpression: self._compile_division,
            GeneratorSum: self._compile_generator_sum,
            AbsExpression: self._compile_nonlinear,
            MaxExpression: self._compile_nonlinear,
            MinExpression: self._compile_nonlinear,
            AndExpression: self._compile_nonlinear,
            OrExpression: self._compile_nonlinear,
        }

    def _handler(self, node):
        try:
            return self._compile_dispatch[node.__class__]
        except KeyError:
            pass
        for base in node.__class__.__mro__[1:]:
            if base in self._compile_dispatch:
                handler = self._compile_dispatch[node.__class__] = (
                    self._compile_dispatch[base]
                )
                return handler
        if node.__class__ in (RelationalExpression, RangeDomain):
            raise DeveloperError(
                "'%s' (%s) is not valid in an arithmetic expression"
                % (node, node.__class__.__name__)
            )
        raise DeveloperError(
            "Unrecognized expression node %r (type %s)"
            % (node, node.__class__.__name__)
        )

    #
    # Arithmetic context
    #

    def compile(self, node, env):
        """Compile `node` to a Polynomial"""
        if isinstance(node, Number) and not isinstance(node, bool):
            return Polynomial.from_constant(node)
        return self._handler(node)(node, env)

    def _number(self, val, node):
        if isinstance(val, Number) and not isinstance(val, bool):
            return Polynomial.from_constant(val)
        raise NonNumericValue(
            "'%s' evaluates to %r (type %s), which cannot be used in an "
            "arithmetic expression" % (node, val, type(val).__name__)
        )

    def _compile_constant(self, node, env):
        return self._number(node.value, node)

    def _compile_name(self, node, env):
        return self._number(env.lookup(node.name), node)

    def _compile_getitem(self, node, env):
        return self._number(self._getitem(node, env), node)

    def _compile_sum(self, node, env):
        ans = Polynomial.zero()
        for arg in node.args:
            ans = ans.add(self.compile(arg, env))
        return ans

    def _compile_negation(self, node, env):
        return self.compile(node.args[0], env).negate()

    def _compile_product(self, node, env):
        lhs, rhs = (self.compile(arg, env) for arg in node.args)
        return lhs.multiply(rhs)

    def _compile_division(self, node, env):
        lhs, rhs = (self.compile(arg, env) for arg in node.args)
        return lhs.divide(rhs)

    def _compile_generator_sum(self, node, env):
        ans = Polynomial.zero()
        for sub_env in expand(node.clauses, env, self):
            ans = ans.add(self.compile(node.body, sub_env))
        return ans

    def _compile_varref(self, node, env):
        family = self.model.family(node.base)
        indices = node.indices
        if any(i is WILDCARD for i in indices):
            return self._compile_wildcard(node, family, env)
        key = tuple(self._index_value(i, env, node) for i in indices)
        vid = VariableId(node.base, key)
        if vid in self.model.variables:
            return Polynomial.from_variable(self.model.variables[vid].id)
        self._check_arity(node, family, len(key))
        raise UnknownVariable(
            "Variable %s is not a declared member of family '%s'"
            % (vid.name, node.base)
        )

    def _check_arity(self, node, family, nidx):
        arities = {len(vid.index) for vid in family}
        if arities and nidx not in arities:
            raise UnresolvedIndex(
                "Variable family '%s' is indexed by %s value(s), but '%s' "
                "provides %s" % (
                    node.base,
                    ' or '.join(str(a) for a in sorted(arities)),
                    node,
                    nidx,
                )
            )

    def _matching_members(self, node, family, env):
        pattern = [
            i if i is WILDCARD else self._index_value(i, env, node)
            for i in node.indices
        ]
        self._check_arity(node, family, len(pattern))
        return [
            vid
            for vid in family
            if len(vid.index) == len(pattern)
            and all(p is WILDCARD or p == v for p, v in zip(pattern, vid.index))
        ]

    def _compile_wildcard(self, node, family, env):
        ans = Polynomial.zero()
        for vid in self._matching_members(node, family, env):
            ans = ans.add(Polynomial.from_variable(vid))
        return ans

    def _compile_nonlinear(self, node, env):
        operands = []
        for arg in node.args:
            if (
                isinstance(node, _VARIADIC)
                and arg.__class__ is VarRef
                and arg.has_wildcard()
            ):
                family = self.model.family(arg.base)
                operands.extend(
                    Polynomial.from_variable(vid)
                    for vid in self._matching_members(arg, family, env)
                )
            else:
                operands.append(self.compile(arg, env))
        if not operands:
            raise InvalidConstraint(
                "%s() has no operands (the wildcard reference matched no "
                "variables)" % (node.PRIMITIVE,)
            )
        if all(p.is_constant() for p in operands):
            return Polynomial.from_constant(
                _fold_constant(node, [p.constant for p in operands])
            )
        return self.linearizer.linearize(node.PRIMITIVE, operands)

    #
    # Data context
    #

    def value(self, node, env):
        """Evaluate `node` to a concrete Python value"""
        cls = node.__class__
        if cls is Constant:
            return node.value
        if cls is Name:
            return env.lookup(node.name)
        if cls is GetItem:
            return self._getitem(node, env)
        if not isinstance(node, NonlinearPrimitive) or all(
            not isinstance(a, (VarRef, GeneratorSum)) for a in node.args
        ):
            poly = self.compile(node, env)
            if poly.is_constant():
                return poly.constant
            raise UnresolvedIndex(
                "'%s' does not reduce to a constant (it references %s)"
                % (node, ', '.join(v.name for v in poly.variables()))
            )
        raise UnresolvedIndex(
            "'%s' references decision variables and does not reduce to a "
            "constant" % (node,)
        )

    def _index_value(self, idx, env, context):
        if idx is WILDCARD:
            raise UnresolvedIndex(
                "Wildcard index is not allowed in '%s'" % (context,)
            )
        try:
            val = self.value(idx, env)
        except UnresolvedIndex as err:
            raise UnresolvedIndex(
                "Index '%s' of '%s' could not be resolved to a scalar: %s"
                % (idx, context, err.args[0])
            ) from err
        if not _is_scalar(val):
            raise UnresolvedIndex(
                "Index '%s' of '%s' resolved to %r (type %s), not a scalar"
                % (idx, context, val, type(val).__name__)
            )
        return val

    def _getitem(self, node, env):
        data = self.value(node.base, env)
        keys = tuple(self._index_value(i, env, node) for i in node.indices)
        if len(keys) > 1 and isinstance(data, Mapping) and keys in data:
            return data[keys]
        for key in keys:
            data = self._lookup_key(data, key, node)
        return data

    def _lookup_key(self, data, key, node):
        if isinstance(data, Mapping):
            try:
                return data[key]
            except KeyError:
                pass
        elif isinstance(data, Sequence) and not isinstance(data, str):
            if isinstance(key, int) and 0 <= key < len(data):
                return data[key]
        else:
            raise ParameterKeyError(
                "'%s' is not indexable: '%s' evaluates to a %s"
                % (node, node.base, type(data).__name__)
            )
        raise ParameterKeyError(
            "Key %r not found while evaluating '%s'" % (key, node)
        )

    #
    # Filter context
    #

    def condition(self, node, env):
        """Evaluate a generator filter condition to a bool"""
        cls = node.__class__
        if cls is RelationalExpression:
            lhs = self.value(node.lhs, env)
            rhs = self.value(node.rhs, env)
            try:
                return bool(_relational_ops[node.operator](lhs, rhs))
            except TypeError:
                raise NonNumericValue(
                    "Cannot evaluate '%s': %r and %r are not comparable"
                    % (node, lhs, rhs)
                ) from None
        if cls is AndExpression:
            return all(self.condition(arg, env) for arg in node.args)
        if cls is OrExpression:
            return any(self.condition(arg, env) for arg in node.args)
        return bool(self.value(node, env))

    #
    # Relations
    #

    def compile_relation(self, node, env):
        """Compile ``lhs <op> rhs`` into a normalized Constraint"""
        if node.__class__ is not RelationalExpression:
            raise DeveloperError(
                "Expected a relational expression, found '%s' (%s)"
                % (node, node.__class__.__name__)
            )
        if node.operator not in CONSTRAINT_OPERATORS:
            raise InvalidConstraint(
                "Operator '%s' in '%s' cannot be used in a constraint "
                "(only %s are supported)"
                % (node.operator, node, ', '.join(CONSTRAINT_OPERATORS))
            )
        op = node.operator
        lhs_c, lhs_v = self.compile(node.lhs, env).split_constant()
        rhs_c, rhs_v = self.compile(node.rhs, env).split_constant()
        if math.isinf(lhs_c) or math.isinf(rhs_c):
            if op == '==':
                raise InvalidConstraint(
                    "Equality constraint '%s' has an infinite side" % (node,)
                )
            if math.isinf(lhs_c) and math.isinf(rhs_c):
                raise InvalidConstraint(
                    "Constraint '%s' has infinite values on both sides" % (node,)
                )
            if math.isinf(lhs_c):
                # keep the infinite bound on the right-hand side
                lhs_c, lhs_v, rhs_c, rhs_v = rhs_c, rhs_v, lhs_c, lhs_v
                op = '<=' if op == '>=' else '>='
        return Constraint(lhs_v.subtract(rhs_v), op, rhs_c - lhs_c)
