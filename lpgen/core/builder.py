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

"""Materialize variables, constraints and the objective into a Model.

Typical use::

    b = ModelBuilder('assignment', parameters={'W': ['w1', 'w2']})
    x = var('x')
    b.declare_variable_family(
        'x', [('w', param('W')), ('t', irange(1, 2))], kind='binary')
    b.declare_constraint_family(
        [('w', param('W'))],
        equal(gen_sum(x[index('w'), index('t')], ('t', irange(1, 2))), 1),
        name_template='one_task_{w}',
    )
    b.set_objective(x[WILDCARD, 1], 'maximize')
    model = b.build()

"""

import logging
import re

from numbers import Number

from lpgen.common.config import Bool, ConfigDict, ConfigValue, In, InEnum
from lpgen.common.enums import ObjectiveSense, Tightening, VarKind
from lpgen.common.errors import (
    DuplicateConstraintName,
    ModelingError,
    NonLinearObjective,
    NonNumericValue,
    UnboundName,
    UnsoundLinearization,
)
from lpgen.core.base.env import BindingEnvironment
from lpgen.core.base.generator import clause_names, expand
from lpgen.core.base.model import Model
from lpgen.core.base.param import register_parameters
from lpgen.core.base.var import VariableDecl, VariableId, _index_str
from lpgen.core.expr.nodes import ExpressionNode, RelationalExpression, as_clause
from lpgen.repn.compiler import ExpressionCompiler
from lpgen.repn.linearize import Linearizer

logger = logging.getLogger(__name__)

_placeholder_re = re.compile(r'\{([A-Za-z_][A-Za-z0-9_]*)\}')


def _format_bindings(env):
    bindings = env.generator_bindings() if env is not None else {}
    if not bindings:
        return 'None'
    return ', '.join('%s=%r' % kv for kv in bindings.items())


class _FamilyContext(object):
    """Log and annotate errors raised while expanding one family.

    On error, everything the family added to the model (including
    auxiliary variables and their constraints) is discarded.
    """

    def __init__(self, builder, kind, family):
        self.builder = builder
        self.kind = kind
        self.family = family
        self.env = None

    def __enter__(self):
        self.checkpoint = self.builder._checkpoint()
        return self

    def __exit__(self, et, ev, tb):
        if ev is None or not isinstance(ev, Exception):
            return False
        self.builder._rollback(self.checkpoint)
        index = _format_bindings(self.env)
        logger.error(
            "Rule failed when generating %s '%s' with index %s:\n%s: %s",
            self.kind,
            self.family,
            index,
            type(ev).__name__,
            ev.args[0] if ev.args else '',
        )
        if isinstance(ev, ModelingError):
            ev.add_context(
                "generating %s '%s' with index %s" % (self.kind, self.family, index)
            )
        return False


class ModelBuilder(object):
    """Compile a declarative model definition into a :class:`Model`.

    Parameters
    ----------
    name: str
        The model name (written to the LP file header)

    parameters: dict, optional
        External parameter data, visible to every expression by name

    schema: dict, optional
        Key types used to coerce parameter keys once at registration
        (see :func:`~lpgen.core.base.param.register_parameters`)

    **options:
        Values for the entries declared in :attr:`CONFIG`

    """

    CONFIG = ConfigDict('model builder')
    CONFIG.declare(
        'unsound_linearization',
        ConfigValue(
            default='warn',
            domain=In(['ignore', 'warn', 'error']),
            description='Action when an auxiliary variable is used unsoundly',
            doc="""
            abs() and max() auxiliary variables are only bounded from
            below (min() from above).  If the objective or a constraint
            can push one of them away from that bound, the compiled model
            no longer computes the primitive exactly.  'warn' logs a
            warning, 'error' raises UnsoundLinearization, and 'ignore'
            does nothing.""",
        ),
    )
    CONFIG.declare(
        'check_duplicate_constraint_names',
        ConfigValue(
            default=True,
            domain=Bool,
            description='Raise DuplicateConstraintName for repeated names',
        ),
    )
    CONFIG.declare(
        'sense',
        ConfigValue(
            default=ObjectiveSense.minimize,
            domain=InEnum(ObjectiveSense),
            description='Default objective sense',
        ),
    )

    def __init__(self, name='unknown', parameters=None, schema=None, **options):
        self.config = self.CONFIG(options)
        self.model = Model(name, self.config.sense)
        self.env = BindingEnvironment.root(register_parameters(parameters, schema))
        self.linearizer = Linearizer(self.model)
        self.compiler = ExpressionCompiler(self.model, self.linearizer)
        self._constraint_names = {}

    @classmethod
    def modify(cls, model, parameters=None, schema=None, **options):
        """Return a builder that extends a copy of a built `model`.

        The copy keeps the variable, name and linearization registries
        of `model`, so new constraints can reference its variables, and
        auxiliary numbering continues after the last auxiliary variable.
        `model` itself is left unchanged.
        """
        options.setdefault('sense', model.sense)
        ans = cls(model.name, parameters, schema, **options)
        ans.model = model.copy()
        ans.model.sense = ans.config.sense
        start = max(
            (v.id.index[0] + 1 for v in ans.model.auxiliary_variables()), default=0
        )
        ans.linearizer = Linearizer(ans.model, start)
        ans.compiler = ExpressionCompiler(ans.model, ans.linearizer)
        for con in ans.model.constraints.values():
            if con.name is not None:
                ans._constraint_names.setdefault(con.name, con.id)
        logger.debug(
            "Modifying model '%s': %s variables, %s constraints",
            model.name,
            len(model.variables),
            len(model.constraints),
        )
        return ans

    def _checkpoint(self):
        return self.model.checkpoint(), self.linearizer.count

    def _rollback(self, checkpoint):
        state, count = checkpoint
        self.model.rollback(state)
        self.linearizer.rewind(count)
        self._constraint_names = {
            name: cid
            for name, cid in self._constraint_names.items()
            if cid in self.model.constraints
        }

    #
    # Variables
    #

    def declare_variable_family(
        self, base, clauses=(), kind=VarKind.continuous, bounds=(None, None),
        description=None,
    ):
        """Declare one variable per combination of `clauses`.

        The index of each member is the tuple of the values bound by the
        generator clauses (in clause order).  `bounds` may hold numbers,
        ``None`` (unbounded) or expressions evaluated per combination.
        Returns the list of declared VariableIds.
        """
        clauses = [as_clause(c) for c in clauses]
        names = clause_names(clauses)
        kind = VarKind(kind)
        ids = []
        with _FamilyContext(self, 'variable family', base) as ctx:
            self.model.declare_family(base)
            for env in expand(clauses, self.env, self.compiler):
                ctx.env = env
                lb, ub = (self._bound(b, env) for b in bounds)
                decl = VariableDecl(
                    VariableId(base, tuple(env.lookup(n) for n in names)),
                    kind,
                    lb,
                    ub,
                    description=self._substitute(description, env),
                )
                ids.append(self.model.add_variable(decl).id)
        logger.debug("Declared %s member(s) of variable family '%s'", len(ids), base)
        return ids

    def declare_variable(
        self, name, kind=VarKind.continuous, bounds=(None, None), description=None
    ):
        """Declare a scalar variable; returns its VariableId"""
        return self.declare_variable_family(
            name, (), kind, bounds, description
        )[0]

    def _bound(self, bound, env):
        if bound is None:
            return None
        if isinstance(bound, ExpressionNode):
            bound = self.compiler.value(bound, env)
        if isinstance(bound, bool) or not isinstance(bound, Number):
            raise NonNumericValue("Variable bound %r is not a number" % (bound,))
        return bound

    #
    # Constraints
    #

    def declare_constraint_family(
        self, clauses, body, name_template=None, description=None, family=None
    ):
        """Compile `body` once per combination of `clauses`.

        The stored name of each constraint is `name_template` with every
        ``{name}`` placeholder replaced by the value bound to `name`.
        Without a template, members of a named `family` are called
        ``<family>_<v1>_<v2>...``; otherwise constraints are only known
        by their id.  Returns the list of created constraints.
        """
        clauses = [as_clause(c) for c in clauses]
        names = clause_names(clauses)
        ans = []
        with _FamilyContext(
            self, 'constraint family', family or name_template or body
        ) as ctx:
            for env in expand(clauses, self.env, self.compiler):
                ctx.env = env
                con = self.compiler.compile_relation(body, env)
                if name_template is not None:
                    con.name = self._substitute(name_template, env)
                elif family is not None:
                    con.name = '_'.join(
                        [family] + [_index_str(env.lookup(n)) for n in names]
                    )
                con.description = self._substitute(description, env)
                ans.append(self._add_constraint(con))
        logger.debug(
            "Generated %s constraint(s) for '%s'",
            len(ans),
            family or name_template or body,
        )
        return ans

    def add_constraint(self, body, name=None, description=None):
        """Add a single constraint"""
        return self.declare_constraint_family((), body, name, description)[0]

    def _add_constraint(self, con):
        if con.name is not None and self.config.check_duplicate_constraint_names:
            if con.name in self._constraint_names:
                raise DuplicateConstraintName(
                    "Constraint name '%s' is already used by constraint %s"
                    % (con.name, self._constraint_names[con.name])
                )
        self.model.add_constraint(con)
        if con.name is not None:
            self._constraint_names.setdefault(con.name, con.id)
        return con

    def _substitute(self, template, env):
        if template is None:
            return None

        def _repl(match):
            val = env.lookup(match.group(1))
            if not isinstance(val, (Number, str)):
                raise UnboundName(
                    "Placeholder '{%s}' in '%s' refers to a %s, not a scalar"
                    % (match.group(1), template, type(val).__name__)
                )
            return _index_str(val)

        return _placeholder_re.sub(_repl, template)

    #
    # Objective
    #

    def set_objective(self, expr, sense=None):
        """Compile `expr` and make it the model objective"""
        if sense is not None:
            sense = ObjectiveSense(sense)
        with _FamilyContext(self, 'objective', expr):
            if isinstance(expr, RelationalExpression):
                raise NonLinearObjective(
                    "The objective must be an expression, not the relation '%s'"
                    % (expr,)
                )
            poly = self.compiler.compile(expr, self.env)
        self.model.set_objective(poly, sense)
        return poly

    def add_to_objective(self, expr):
        """Compile `expr` and add it to the current objective"""
        with _FamilyContext(self, 'objective', expr):
            if isinstance(expr, RelationalExpression):
                raise NonLinearObjective(
                    "The objective must be an expression, not the relation '%s'"
                    % (expr,)
                )
            poly = self.compiler.compile(expr, self.env)
        self.model.set_objective(self.model.objective + poly)
        return self.model.objective

    #
    # Finalization
    #

    def build(self):
        """Validate the linearizations and return the frozen Model"""
        if not self.model.is_frozen():
            self._check_linearizations()
            self.model.freeze()
            logger.debug(
                "Built model '%s': %s variables, %s constraints",
                self.model.name,
                len(self.model.variables),
                len(self.model.constraints),
            )
        return self.model

    def _check_linearizations(self):
        policy = self.config.unsound_linearization
        if policy == 'ignore':
            return
        for vid, reason in self.unsound_linearizations():
            msg = (
                "Auxiliary variable %s (%s) may not equal the value of the "
                "primitive it replaces: %s"
                % (vid.name, self.model.variables[vid].description, reason)
            )
            if policy == 'error':
                raise UnsoundLinearization(msg)
            logger.warning(msg)

    def unsound_linearizations(self):
        """List of ``(VariableId, reason)`` for every auxiliary variable
        that the objective or a constraint can push away from its tight
        value.  An auxiliary variable inside a bilinear term is always
        reported, since the direction it is pushed depends on the value
        of the other factor."""
        model = self.model
        ans = []

        def _quadratic(poly, where):
            for mono in poly.quadratic:
                for vid in sorted(set(mono)):
                    tight = model.variables[vid].auxiliary
                    if tight is None or tight is Tightening.exact:
                        continue
                    ans.append((vid, "it appears in a quadratic term of %s" % where))

        for vid, coef in model.objective.linear.items():
            tight = model.variables[vid].auxiliary
            if tight is None or tight is Tightening.exact:
                continue
            if coef * model.sense * tight < 0:
                ans.append(
                    (
                        vid,
                        "the objective (%s) pushes it %s"
                        % (model.sense, 'up' if tight is Tightening.down else 'down'),
                    )
                )
        _quadratic(model.objective, 'the objective')
        for con in model.constraints.values():
            _quadratic(con.lhs, 'constraint %s' % (con.name or con.id,))
            for vid, coef in con.lhs.linear.items():
                tight = model.variables[vid].auxiliary
                if tight is None or tight is Tightening.exact:
                    continue
                if con.id in self.linearizer.defining_constraints.get(vid, ()):
                    continue
                if con.operator == '==':
                    bounds_from = 'both sides'
                elif (con.operator == '<=') == (coef > 0):
                    bounds_from = 'above'
                else:
                    bounds_from = 'below'
                if bounds_from == 'both sides' or (
                    (bounds_from == 'below') == (tight is Tightening.down)
                ):
                    ans.append(
                        (
                            vid,
                            "constraint %s bounds it from %s"
                            % (con.name or con.id, bounds_from),
                        )
                    )
        return ans
