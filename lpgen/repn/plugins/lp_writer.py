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

import logging
from io import StringIO
from operator import itemgetter

from lpgen.common.config import (
    Bool,
    ConfigBlock,
    ConfigValue,
    NonNegativeInt,
    PositiveFloat,
)
from lpgen.common.enums import ObjectiveSense
from lpgen.common.timing import TicTocTimer
from lpgen.core.base.label import LPFileLabeler
from lpgen.core.base.symbol_map import SymbolMap

logger = logging.getLogger(__name__)
inf = float('inf')

#: SymbolMap keys for the writer-generated rows and columns
OBJECTIVE = '__objective__'
ONE_VAR_CONSTANT = 'ONE_VAR_CONSTANT'
ONE_VAR_CONSTANT_ROW = 'c_e_ONE_VAR_CONSTANT'

_operator_symbol = {'<=': '<=', '>=': '>=', '==': '='}


def ftoa(val, infinity=1e30):
    """Format a number for the LP file.

    Integral values are written without a decimal point; infinite values
    are replaced by the (signed) `infinity` sentinel.
    """
    if val != val:
        raise ValueError("Cannot write NaN to an LP file")
    if val in (inf, -inf):
        val = infinity if val > 0 else -infinity
    if isinstance(val, bool):
        val = int(val)
    if isinstance(val, int):
        return str(val)
    val = float(val)
    if val.is_integer() and abs(val) < 1e15:
        return str(int(val))
    return repr(val)


class LPWriterInfo(object):
    """Return type for LPWriter.write()

    Attributes
    ----------
    symbol_map: SymbolMap

        The :py:class:`SymbolMap` bimap between row/column labels and
        model objects (VariableIds and constraint ids).

    """

    def __init__(self, symbol_map):
        self.symbol_map = symbol_map


class LPWriter(object):
    CONFIG = ConfigBlock('lpwriter')
    CONFIG.declare(
        'show_section_timing',
        ConfigValue(
            default=False,
            domain=Bool,
            description='Print timing after writing each section of the LP file',
        ),
    )
    CONFIG.declare(
        'skip_trivial_constraints',
        ConfigValue(
            default=False,
            domain=Bool,
            description='Skip writing constraints whose body is constant',
        ),
    )
    CONFIG.declare(
        'infinity',
        ConfigValue(
            default=1e30,
            domain=PositiveFloat,
            description='Finite value written in place of infinite bounds',
            doc="""
            LP readers do not accept a symbol for infinity.  Infinite
            variable bounds and constraint right-hand sides are written
            as this (signed) value.""",
        ),
    )
    CONFIG.declare(
        'labeler_seed',
        ConfigValue(
            default=0,
            domain=NonNegativeInt,
            description='Seed for the random suffixes of colliding labels',
        ),
    )
    CONFIG.declare(
        'allow_quadratic_objective',
        ConfigValue(
            default=True,
            domain=Bool,
            description='If True, allow quadratic terms in the model objective',
        ),
    )
    CONFIG.declare(
        'allow_quadratic_constraint',
        ConfigValue(
            default=True,
            domain=Bool,
            description='If True, allow quadratic terms in the model constraints',
        ),
    )

    def __init__(self):
        self.config = self.CONFIG()

    def __call__(self, model, filename=None, **options):
        if filename is None:
            filename = model.name + ".lp"
        with open(filename, 'w', newline='') as FILE:
            info = self.write(model, FILE, **options)
        return filename, info.symbol_map

    def write(self, model, ostream, **options):
        """Write a model in LP format.

        Returns
        -------
        LPWriterInfo

        Parameters
        ----------
        model: Model
            The (built) model to write out.

        ostream: io.TextIOBase
            The text output stream where the LP "file" will be written.
            Could be an opened file or a io.StringIO.

        """
        config = self.config(options)
        if not model.is_frozen():
            logger.warning(
                "Writing model '%s' before ModelBuilder.build() was called; "
                "linearizations have not been checked",
                model.name,
            )
        return _LPWriter_impl(ostream, config).write(model)


class _LPWriter_impl(object):
    def __init__(self, ostream, config):
        self.ostream = ostream
        self.config = config
        self.symbol_map = None
        self.one_var_constant_used = False

    def write(self, model):
        timing_logger = logging.getLogger('lpgen.common.timing.writer')
        timer = TicTocTimer(logger=timing_logger)
        timing_level = (
            logging.INFO if self.config.show_section_timing else logging.DEBUG
        )

        ostream = self.ostream
        infinity = self.config.infinity

        labeler = LPFileLabeler(self.config.labeler_seed)
        self.symbol_map = SymbolMap(labeler)
        getSymbol = self.symbol_map.getSymbol

        # Reserve the writer-generated names before labeling the model
        for key in (OBJECTIVE, ONE_VAR_CONSTANT, ONE_VAR_CONSTANT_ROW):
            labeler(key, 'obj' if key is OBJECTIVE else key)

        self.var_order = {ONE_VAR_CONSTANT: -1}
        for i, vid in enumerate(model.variables):
            self.var_order[vid] = i
            getSymbol(vid)

        timer.toc('Initialized column order', level=timing_level)

        ostream.write(f"\\* Source lpgen model name={model.name} *\\\n\n")

        #
        # Process objective
        #
        objective = model.objective
        if objective.quadratic and not self.config.allow_quadratic_objective:
            raise ValueError(
                f"Model objective ({model.name}) contains quadratic terms "
                "and allow_quadratic_objective is False"
            )
        ostream.write(
            "Minimize\n" if model.sense == ObjectiveSense.minimize else "Maximize\n"
        )
        ostream.write(f"{getSymbol(OBJECTIVE, labeler, 'obj')}:\n")
        linear = objective.linear
        if objective.constant or not (linear or objective.quadratic):
            # Not all LP readers accept constants in the objective (and
            # most reject an empty objective): write the constant as the
            # coefficient of a variable fixed to 1.
            linear[ONE_VAR_CONSTANT] = objective.constant
        self.write_expression(ostream, linear, objective.quadratic, True)
        timer.toc('Objective', level=timing_level)

        ostream.write("\nSubject To\n")

        #
        # Tabulate constraints
        #
        skip_trivial_constraints = self.config.skip_trivial_constraints
        have_nontrivial = False
        for con in model.constraints.values():
            if con.is_trivially_satisfied():
                continue
            lhs = con.lhs
            if lhs.quadratic and not self.config.allow_quadratic_constraint:
                raise ValueError(
                    f"Model constraint ({con.name or con.id}) contains quadratic "
                    "terms and allow_quadratic_constraint is False"
                )
            linear = lhs.linear
            if linear or lhs.quadratic:
                have_nontrivial = True
            else:
                if skip_trivial_constraints and con.evaluate({}):
                    continue
                # Trivially infeasible constraints are deferred to the
                # solver; the LHS still needs a variable.
                linear[ONE_VAR_CONSTANT] = 0

            label = getSymbol(con.id, labeler, con.name or con.id)
            ostream.write(f'\n{label}:\n')
            self.write_expression(ostream, linear, lhs.quadratic, False)
            ostream.write(
                f'{_operator_symbol[con.operator]} {ftoa(con.rhs, infinity)}\n'
            )
        timer.toc('Constraints', level=timing_level)

        if not have_nontrivial:
            # Some solvers fail on an LP file without constraints
            self.one_var_constant_used = True
            ostream.write(f'\n{getSymbol(ONE_VAR_CONSTANT_ROW)}:\n')
            self.write_expression(ostream, {ONE_VAR_CONSTANT: 1}, None, False)
            ostream.write('= 1\n')

        ostream.write("\nBounds\n")

        general_vars = []
        for vid, decl in model.variables.items():
            v_symbol = getSymbol(vid)
            if decl.is_integer():
                general_vars.append(v_symbol)
            lb, ub = decl.bounds
            if lb == -inf and ub == inf:
                ostream.write(f" {v_symbol} free\n")
            else:
                ostream.write(
                    f" {ftoa(lb, infinity)} <= {v_symbol} <= {ftoa(ub, infinity)}\n"
                )
        if self.one_var_constant_used:
            ostream.write(f" 1 <= {getSymbol(ONE_VAR_CONSTANT)} <= 1\n")

        if general_vars:
            ostream.write("General\n")
            for v_symbol in general_vars:
                ostream.write(f" {v_symbol}\n")

        timer.toc("Wrote variable bounds and domains", level=timing_level)

        ostream.write("End\n")

        info = LPWriterInfo(self.symbol_map)
        timer.toc("Generated LP representation", delta=False, level=timing_level)
        return info

    def write_expression(self, ostream, linear, quadratic, is_objective):
        getSymbol = self.symbol_map.getSymbol
        getVarOrder = self.var_order.__getitem__
        infinity = self.config.infinity

        if ONE_VAR_CONSTANT in linear:
            self.one_var_constant_used = True

        for vid, coef in sorted(linear.items(), key=lambda x: getVarOrder(x[0])):
            if coef < 0:
                ostream.write(f'{ftoa(coef, infinity)} {getSymbol(vid)}\n')
            else:
                ostream.write(f'+{ftoa(coef, infinity)} {getSymbol(vid)}\n')

        if quadratic:

            def _normalize_constraint(data):
                (vid1, vid2), coef = data
                c1 = getVarOrder(vid1)
                c2 = getVarOrder(vid2)
                if c2 < c1:
                    col = c2, c1
                    sym = f' {getSymbol(vid2)} * {getSymbol(vid1)}\n'
                elif c1 == c2:
                    col = c1, c1
                    sym = f' {getSymbol(vid1)} ^ 2\n'
                else:
                    col = c1, c2
                    sym = f' {getSymbol(vid1)} * {getSymbol(vid2)}\n'
                if coef < 0:
                    return col, ftoa(coef, infinity) + sym
                else:
                    return col, f'+{ftoa(coef, infinity)}{sym}'

            if is_objective:
                #
                # Times 2 because LP format requires /2 for all the
                # quadratic terms /of the objective only/.
                #
                def _normalize_objective(data):
                    vids, coef = data
                    return _normalize_constraint((vids, 2 * coef))

                _normalize = _normalize_objective
            else:
                _normalize = _normalize_constraint

            ostream.write('+ [\n')
            quadratic = sorted(map(_normalize, quadratic.items()), key=itemgetter(0))
            ostream.write(''.join(map(itemgetter(1), quadratic)))
            if is_objective:
                ostream.write("] / 2\n")
            else:
                ostream.write("]\n")


def write_lp(model, ostream=None, **options):
    """Write `model` in LP format and return ``(text, symbol_map)``

    With an `ostream` the text is written there and the returned text is
    None.
    """
    buf = StringIO() if ostream is None else ostream
    info = LPWriter().write(model, buf, **options)
    return (buf.getvalue() if ostream is None else None), info.symbol_map
