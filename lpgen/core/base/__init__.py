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

from lpgen.core.base.var import VariableId, VariableDecl
from lpgen.core.base.constraint import Constraint
from lpgen.core.base.env import BindingEnvironment
from lpgen.core.base.param import register_parameters
from lpgen.core.base.generator import expand, evaluate_domain
from lpgen.core.base.model import Model
from lpgen.core.base.label import LPFileLabeler, lp_label_from_name
from lpgen.core.base.symbol_map import SymbolMap
