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

import copy
import logging
import sys

from lpgen.common.enums import ObjectiveSense
from lpgen.common.errors import (
    DuplicateVariable,
    ModelFrozenError,
    UnknownVariableFamily,
)
from lpgen.repn.polynomial import Polynomial

logger = logging.getLogger(__name__)


class Model(object):
    """A compiled mathematical program.

    Holds the variable declarations (in declaration order), the
    constraints (in creation order, keyed by their ``c00000000``-style
    id), the objective Polynomial and its sense.  Alongside the model
    proper, it keeps the registries needed to resolve references during
    compilation and to map solver output back to variables:

    - the variable *family* registry: base name -> member VariableIds
    - the name registry: model name (``x(1,2)``) -> VariableId
    - the linearization registry: auxiliary VariableId -> ids of the
      constraints that define it

    A Model is built incrementally by the
    :class:`~lpgen.core.builder.ModelBuilder` and frozen when returned
    by :meth:`~lpgen.core.builder.ModelBuilder.build`.

    """

    def __init__(self, name='unknown', sense=ObjectiveSense.minimize):
        self.name = name
        self.sense = ObjectiveSense(sense)
        self.variables = {}
        self.constraints = {}
        self.objective = Polynomial.zero()
        self._families = {}
        self._names = {}
        #: auxiliary VariableId -> ids of the constraints defining it
        self.defining_constraints = {}
        self._constraint_count = 0
        self._frozen = False

    def _check_mutable(self):
        if self._frozen:
            raise ModelFrozenError()

    def freeze(self):
        self._frozen = True
        return self

    def is_frozen(self):
        return self._frozen

    def copy(self, name=None):
        """Return an unfrozen copy of this model.

        Variable declarations and the objective are immutable and shared;
        constraints are copied so the new model can rename them freely.
        """
        ans = Model(self.name if name is None else name, self.sense)
        ans.variables = dict(self.variables)
        ans.constraints = {
            cid: copy.copy(con) for cid, con in self.constraints.items()
        }
        ans.objective = self.objective
        ans._families = {base: list(ids) for base, ids in self._families.items()}
        ans._names = dict(self._names)
        ans._constraint_count = self._constraint_count
        ans.defining_constraints = {
            vid: list(cids) for vid, cids in self.defining_constraints.items()
        }
        return ans

    def checkpoint(self):
        """Opaque state token for :meth:`rollback`"""
        return (
            len(self.variables),
            len(self.constraints),
            self._constraint_count,
            set(self._families),
            self.objective,
            self.sense,
        )

    def rollback(self, checkpoint):
        """Discard everything added since `checkpoint` was taken"""
        if self._frozen:
            return
        nvars, ncons, count, families, objective, sense = checkpoint
        for vid in list(self.variables)[nvars:]:
            del self.variables[vid]
            del self._names[vid.name]
            self._families[vid.base].remove(vid)
            self.defining_constraints.pop(vid, None)
        for cid in list(self.constraints)[ncons:]:
            del self.constraints[cid]
        for base in list(self._families):
            if base not in families:
                del self._families[base]
        self._constraint_count = count
        self.objective = objective
        self.sense = sense

    #
    # Variables
    #

    def add_variable(self, decl):
        self._check_mutable()
        vid = decl.id
        if vid in self.variables:
            raise DuplicateVariable(
                "Variable %s is declared more than once" % (vid.name,)
            )
        if vid.name in self._names:
            raise DuplicateVariable(
                "Variables %r and %r share the model name '%s'"
                % (self._names[vid.name], vid, vid.name)
            )
        self.variables[vid] = decl
        self._names[vid.name] = vid
        self._families.setdefault(vid.base, []).append(vid)
        return decl

    def declare_family(self, base):
        """Register `base` as a (possibly empty) variable family"""
        self._check_mutable()
        self._families.setdefault(base, [])

    def has_family(self, base):
        return base in self._families

    def family(self, base):
        """Ordered list of the VariableIds declared for `base`"""
        try:
            return self._families[base]
        except KeyError:
            raise UnknownVariableFamily(
                "Variable family '%s' has not been declared" % (base,)
            ) from None

    def families(self):
        return list(self._families)

    def variable(self, vid):
        return self.variables[vid]

    def variable_by_name(self, name):
        """Return the VariableDecl whose model name is `name`"""
        return self.variables[self._names[name]]

    def auxiliary_variables(self):
        return [v for v in self.variables.values() if v.is_auxiliary()]

    #
    # Constraints
    #

    def add_constraint(self, con):
        """Assign the next constraint id to `con` and store it"""
        self._check_mutable()
        con.id = 'c%08d' % (self._constraint_count,)
        self._constraint_count += 1
        self.constraints[con.id] = con
        return con

    #
    # Objective
    #

    def set_objective(self, poly, sense=None):
        self._check_mutable()
        self.objective = poly
        if sense is not None:
            self.sense = ObjectiveSense(sense)

    #
    # Reporting
    #

    def pprint(self, ostream=None):
        if ostream is None:
            ostream = sys.stdout
        ostream.write("Model %s\n" % (self.name,))
        ostream.write("  %s: %s\n" % (self.sense, self.objective))
        ostream.write("  %s Variables:\n" % (len(self.variables),))
        for decl in self.variables.values():
            ostream.write(
                "    %s : %s [%s, %s]\n" % (decl.name, decl.kind, decl.lb, decl.ub)
            )
        ostream.write("  %s Constraints:\n" % (len(self.constraints),))
        for con in self.constraints.values():
            ostream.write("    %s\n" % (con,))

    def __repr__(self):
        return 'Model(%r, %s variables, %s constraints)' % (
            self.name, len(self.variables), len(self.constraints),
        )
