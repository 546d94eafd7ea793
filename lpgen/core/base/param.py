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

"""External parameter data.

Parameter values are plain Python data: scalars, sequences, and
(possibly nested) mappings.  When a *schema* is supplied, mapping keys
are coerced to the declared key types once, when the parameters are
registered, so every later lookup is an exact dictionary access::

    register_parameters(
        {'cost': {'a': 1.5}, 'dist': {'a': {'1': 3}}},
        schema={'cost': str, 'dist': (str, int)},
    )

A schema entry is either a single key type (applied to the top-level
keys) or a tuple of key types (one per nesting level).

"""

import logging

from collections.abc import Mapping

logger = logging.getLogger(__name__)


def _coerce_keys(name, data, key_types, level=0):
    if not key_types:
        return data
    if not isinstance(data, Mapping):
        raise ValueError(
            "Parameter '%s': schema declares %s level(s) of keys, but the "
            "data at level %s is a %s, not a mapping"
            % (name, level + len(key_types), level, type(data).__name__)
        )
    cast, rest = key_types[0], key_types[1:]
    ans = {}
    for key, val in data.items():
        try:
            new_key = cast(key)
        except (TypeError, ValueError) as err:
            raise ValueError(
                "Parameter '%s': cannot coerce key %r to %s: %s"
                % (name, key, getattr(cast, '__name__', cast), err)
            ) from None
        if new_key in ans:
            raise ValueError(
                "Parameter '%s': keys %r and %r coerce to the same key %r"
                % (name, _find_key(data, cast, new_key), key, new_key)
            )
        ans[new_key] = _coerce_keys(name, val, rest, level + 1)
    return ans


def _find_key(data, cast, target):
    return next(k for k in data if cast(k) == target)


def register_parameters(data=None, schema=None):
    """Return a new dict of parameters with schema key coercion applied"""
    data = dict(data or {})
    schema = dict(schema or {})
    unknown = set(schema) - set(data)
    if unknown:
        raise ValueError(
            "Parameter schema references undefined parameter(s): %s"
            % (', '.join(sorted(unknown)),)
        )
    ans = {}
    for name, val in data.items():
        if not isinstance(name, str):
            raise ValueError("Parameter names must be strings (got %r)" % (name,))
        key_types = schema.get(name, ())
        if not isinstance(key_types, tuple):
            key_types = (key_types,)
        ans[name] = _coerce_keys(name, val, key_types)
    logger.debug("Registered %s parameter(s)", len(ans))
    return ans
