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

__all__ = ['DataPortal']

import logging

from lpgen.common.config import ConfigBlock, ConfigValue, ListOf
from lpgen.common.log import is_debug_set
from lpgen.dataportal.parse_datacmds import parse_data_commands
from lpgen.dataportal.process_data import process_data

logger = logging.getLogger(__name__)


class DataPortal(object):
    """
    An object that loads external parameter data from ``.dat`` text.

    The loaded data is organized as ``data[symbol] -> value``, the form
    accepted by :class:`~lpgen.core.builder.ModelBuilder` (and
    :func:`~lpgen.core.base.param.register_parameters`) as parameters.

    Args:
        filename (str): A ``.dat`` file from which data is loaded.
            Default is :const:`None`.
        data (str): ``.dat`` text from which data is loaded.
            Default is :const:`None`.
        data_dict (dict): A dictionary used to initialize the data
            in this object.  Default is :const:`None`.

    Other keyword arguments are values for the :attr:`CONFIG` entries.
    """

    CONFIG = ConfigBlock('dataportal')
    CONFIG.declare(
        'select',
        ConfigValue(
            default=None,
            domain=ListOf(str),
            description='Names of the symbols to load (default: all)',
        ),
    )

    def __init__(self, filename=None, data=None, data_dict=None, **kwds):
        self.config = self.CONFIG(kwds)
        self._data = dict(data_dict) if data_dict is not None else {}
        if filename is not None or data is not None:
            self.load(filename=filename, data=data)

    def load(self, filename=None, data=None, **kwds):
        """
        Import data from a ``.dat`` file (or text), adding it to the
        symbols already held by this object.
        """
        config = self.config(kwds)
        if is_debug_set(logger):
            logger.debug("Loading data from %s...", filename or 'text')
        statements = parse_data_commands(data=data, filename=filename)
        if statements is None:
            return
        new_data = process_data(statements, config.select)
        for name in new_data:
            if name in self._data:
                raise ValueError(
                    "Symbol '%s' was already loaded into this DataPortal" % (name,)
                )
        self._data.update(new_data)

    def data(self, name=None):
        """
        Return the data associated with a symbol, or the full
        ``{symbol: value}`` dict if `name` is None.
        """
        if name is None:
            return self._data
        try:
            return self._data[name]
        except KeyError:
            raise KeyError("Unknown data for symbol '%s'" % (name,)) from None

    def __getitem__(self, name):
        return self.data(name)

    def __contains__(self, name):
        return name in self._data

    def __len__(self):
        return len(self._data)

    def keys(self):
        return self._data.keys()

    def values(self):
        return self._data.values()

    def items(self):
        return self._data.items()
