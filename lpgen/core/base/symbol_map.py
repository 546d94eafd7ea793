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


class SymbolMap(object):
    """
    A bidirectional map between model objects and the labels written
    for them to a solver input file.

    The LP writer registers every variable (by :class:`VariableId`) and
    every constraint (by constraint id) it emits, so that a solution
    reader can map the labels in a solver's output back onto the model.

    Attributes
    ----------
    byObject : dict
        maps (object) to (string label)
    bySymbol : dict
        maps (string label) to (object)
    default_labeler:
        used to compute a string label from an object
    """

    class UnknownSymbol:
        pass

    def __init__(self, labeler=None):
        self.byObject = {}
        self.bySymbol = {}
        self.default_labeler = labeler

    def __len__(self):
        return len(self.bySymbol)

    def addSymbol(self, obj, symb):
        """
        Add a symbol for a given object

        This method assumes that objects and symbol names will not conflict.
        """
        nSymbols = len(self.byObject) + 1
        self.byObject[obj] = symb
        self.bySymbol[symb] = obj
        if nSymbols != len(self.bySymbol):
            raise RuntimeError(
                "SymbolMap.addSymbol(): duplicate symbol.  "
                "SymbolMap likely in an inconsistent state"
            )
        if len(self.byObject) != len(self.bySymbol):
            raise RuntimeError(
                "SymbolMap.addSymbol(): duplicate object.  "
                "SymbolMap likely in an inconsistent state"
            )

    def getSymbol(self, obj, labeler=None, *args):
        """
        Return the symbol for an object.  If it has not already been cached
        in the symbol map, then create it.
        """
        if obj in self.byObject:
            return self.byObject[obj]
        symbol = (labeler or self.default_labeler or str)(obj, *args)
        if symbol in self.bySymbol:
            if obj == self.bySymbol[symbol]:
                return symbol
            raise RuntimeError(
                "Duplicate symbol '%s' already associated with "
                "'%s' (conflicting object: '%s')"
                % (symbol, self.bySymbol[symbol], obj)
            )
        self.bySymbol[symbol] = obj
        self.byObject[obj] = symbol
        return symbol

    def getObject(self, symbol):
        """
        Return the object corresponding to a symbol
        """
        return self.bySymbol.get(symbol, SymbolMap.UnknownSymbol)

    def unsanitize(self, symbol):
        """Return the model name of the object written as `symbol`

        Variables map back to their model name (e.g. ``x(1,2)``);
        constraints to their constraint id.  Raises KeyError for labels
        this map never issued.
        """
        try:
            obj = self.bySymbol[symbol]
        except KeyError:
            raise KeyError(
                "Label '%s' was not issued by this symbol map" % (symbol,)
            ) from None
        return getattr(obj, 'name', obj)
