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

from lpgen.version import version, version_info, __version__

from lpgen.common.enums import ObjectiveSense, VarKind, minimize, maximize
from lpgen.common.errors import LpgenException, ModelingError
from lpgen.core.expr import (
    WILDCARD,
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
from lpgen.core.base import Model, VariableId, VariableDecl, Constraint, SymbolMap
from lpgen.repn import Polynomial
from lpgen.core.builder import ModelBuilder
from lpgen.repn.plugins.lp_writer import LPWriter, write_lp
from lpgen.dataportal import DataPortal
