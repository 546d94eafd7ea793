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

import math

from lpgen.common.errors import NameConflict, UnboundName

#: Names visible in every model unless a parameter redefines them
WELL_KNOWN_CONSTANTS = {'inf': math.inf, 'infinity': math.inf}

_CONSTANT = 'constant'
_PARAMETER = 'parameter'
_GENERATOR = 'generator'


class BindingEnvironment(object):
    """Persistent, layered mapping of names to values.

    Each environment holds one layer of bindings and a reference to its
    parent.  :meth:`extend` never modifies an environment: it returns a
    child whose new binding shadows the parent, so the parent remains
    valid for the next generator combination.

    The bottom layers are created by :meth:`root`: the well-known
    constants, then the external parameters.  Generator bindings may
    shadow constants and each other, but never a parameter.

    """

    __slots__ = ('_bindings', '_parent', '_kind', '_parameters')

    def __init__(self, bindings, parent=None, kind=_GENERATOR):
        self._bindings = bindings
        self._parent = parent
        self._kind = kind
        if kind == _PARAMETER:
            self._parameters = bindings
        elif parent is not None:
            self._parameters = parent._parameters
        else:
            self._parameters = {}

    @classmethod
    def root(cls, parameters=None):
        """Environment holding the well-known constants and `parameters`"""
        env = cls(dict(WELL_KNOWN_CONSTANTS), kind=_CONSTANT)
        return cls(dict(parameters or {}), env, kind=_PARAMETER)

    def extend(self, name, value):
        """Return a new environment in which `name` is bound to `value`"""
        return self.extend_many({name: value})

    def extend_many(self, bindings):
        """Return a new environment with one layer holding `bindings`"""
        for name in bindings:
            if name in self._parameters:
                raise NameConflict(
                    "Generator binding '%s' would shadow the external "
                    "parameter of the same name" % (name,)
                )
        return BindingEnvironment(dict(bindings), self)

    def lookup(self, name):
        env = self
        while env is not None:
            if name in env._bindings:
                return env._bindings[name]
            env = env._parent
        raise UnboundName("Name '%s' is not bound in this context" % (name,))

    def __contains__(self, name):
        env = self
        while env is not None:
            if name in env._bindings:
                return True
            env = env._parent
        return False

    def is_parameter(self, name):
        return name in self._parameters

    def generator_bindings(self):
        """dict of the visible generator bindings (outermost first)"""
        layers = []
        env = self
        while env is not None and env._kind == _GENERATOR:
            layers.append(env._bindings)
            env = env._parent
        ans = {}
        for layer in reversed(layers):
            ans.update(layer)
        return ans

    def __repr__(self):
        return 'BindingEnvironment(%s)' % (self.generator_bindings(),)
