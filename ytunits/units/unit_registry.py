"""
A registry for units that can be added to and modified.


"""

#-----------------------------------------------------------------------------
# Copyright (c) 2013, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
#-----------------------------------------------------------------------------

import threading
from hashlib import md5

from ytunits.units.dimensions import Dimensions, PowerProduct
from ytunits.units.unit_lookup_table import \
    default_unit_symbol_lut, \
    latex_prefixes, \
    prefixable_units, \
    unit_prefixes
from ytunits.utilities.exceptions import \
    SymbolAlreadyDefinedError, \
    UnitParseError
from ytunits.utilities.logger import ytLogger as mylog


class UnitRegistry:
    """
    A lookup table of unit symbols.

    Each entry maps a symbol to a ``(base_value, dimensions, latex)`` tuple.
    Entries are only ever added, never modified or removed, so readers never
    need to lock: a symbol is either absent or fully defined. Writers
    serialize on a re-entrant lock.

    """

    def __init__(self, add_default_symbols=True, lut=None):
        self._lock = threading.RLock()
        self.lut = {}
        self.unit_objs = {}
        self.prefixable_units = set()

        if add_default_symbols:
            self.lut.update(default_unit_symbol_lut)
            self.prefixable_units.update(prefixable_units)

        if lut:
            for symbol, entry in lut.items():
                self.add(symbol, *entry)

    def __getitem__(self, key):
        return self.lut[key]

    def __contains__(self, item):
        try:
            _lookup_unit_symbol(item, self)
        except UnitParseError:
            return False
        return True

    def __getstate__(self):
        return {"lut": self.lut, "prefixable_units": self.prefixable_units}

    def __setstate__(self, state):
        self._lock = threading.RLock()
        self.lut = dict(state["lut"])
        self.prefixable_units = set(state["prefixable_units"])
        self.unit_objs = {}

    def add(self, symbol, base_value, dimensions, tex_repr=None,
            prefixable=False):
        """
        Add a symbol to this registry.

        Parameters
        ----------
        symbol : str
            The name of the new unit.
        base_value : float
            The value of one of the new unit in base (cgs) units.
        dimensions : Dimensions
            The dimensionality of the new unit.
        tex_repr : str, optional
            A LaTeX representation; defaults to ``\\rm{symbol}``.
        prefixable : bool
            Whether SI prefixes may be prepended to the symbol.

        """
        if not isinstance(symbol, str) or not symbol.isidentifier():
            raise UnitParseError(symbol, "unit symbols must be identifiers")

        try:
            base_value = float(base_value)
        except (TypeError, ValueError):
            raise UnitParseError(
                symbol, f"base_value must be a float, got a {type(base_value)}"
            ) from None

        dimensions = _validate_dimensions(symbol, dimensions)

        if tex_repr is None:
            tex_repr = r"\rm{" + symbol.replace("_", r"\ ") + "}"

        with self._lock:
            if symbol in self.lut:
                raise SymbolAlreadyDefinedError(symbol)
            self.lut[symbol] = (base_value, dimensions, tex_repr)
            if prefixable:
                self.prefixable_units.add(symbol)
        mylog.debug("Added unit symbol %s (%s %s)", symbol, base_value,
                    dimensions)

    def keys(self):
        """
        Print out the units contained in the lookup table.

        """
        return self.lut.keys()

    @property
    def unit_system_id(self):
        """
        A name for the code unit system of this registry, derived from the
        values and dimensions of its ``code_*`` and ``unitary`` symbols.

        """
        hash_data = ",".join(
            f"{k}:{self.lut[k][0]!r}:{self.lut[k][1]}" for k in sorted(self.lut)
            if k.startswith("code_") or k == "unitary"
        )
        return "code-" + md5(hash_data.encode("utf-8")).hexdigest()[:12]

    def _cache_unit(self, key, unit):
        with self._lock:
            return self.unit_objs.setdefault(key, unit)

    def lookup(self, symbol):
        """
        Return the ``(base_value, dimensions, latex)`` tuple for a symbol,
        resolving SI prefixes.

        """
        return _lookup_unit_symbol(symbol, self)

    def parse(self, unit_string):
        """
        Parse a unit expression against this registry and return a Unit.

        """
        from ytunits.units.unit_object import Unit
        return Unit(unit_string, registry=self)

    def _as_unit(self, unit):
        from ytunits.units.unit_object import Unit
        if isinstance(unit, Unit):
            return unit
        return Unit(unit, registry=self)

    def dimension_of(self, unit):
        return self._as_unit(unit).dimensions

    def are_commensurate(self, unit1, unit2):
        return self._as_unit(unit1).same_dimensions_as(self._as_unit(unit2))

    def conversion_factor(self, from_unit, to_unit):
        """
        The number a value in *from_unit* is multiplied by to express it in
        *to_unit*. Raises IncommensurableUnitsError when the dimensions
        differ.

        """
        from ytunits.units.unit_object import get_conversion_factor
        return get_conversion_factor(self._as_unit(from_unit),
                                     self._as_unit(to_unit))

    def list_same_dimensions(self, unit):
        """
        Return the symbols in this registry that share the dimensions of
        *unit*.

        """
        dims = self.dimension_of(unit)
        return sorted(k for k, v in list(self.lut.items()) if v[1] == dims)


def _validate_dimensions(symbol, dims):
    if isinstance(dims, Dimensions):
        return dims
    if isinstance(dims, PowerProduct):
        try:
            return Dimensions(dims.terms)
        except ValueError as err:
            raise UnitParseError(symbol, str(err)) from None
    raise UnitParseError(
        symbol, f"dimensions must be a Dimensions object, got a {type(dims)}"
    )


def _lookup_unit_symbol(symbol_str, registry):
    """
    Searches for the unit data tuple corresponding to the given symbol.

    Parameters
    ----------
    symbol_str : str
        The unit symbol to look up.
    registry : UnitRegistry
        The registry holding the symbol table.

    """
    lut = registry.lut
    if symbol_str in lut:
        # lookup successful, return the tuple directly
        return lut[symbol_str]

    # could still be a known symbol with a prefix
    possible_prefix = symbol_str[:1]
    symbol_wo_prefix = symbol_str[1:]
    if possible_prefix in unit_prefixes and \
       symbol_wo_prefix in registry.prefixable_units and \
       symbol_wo_prefix in lut:
        base_value, dims, latex = lut[symbol_wo_prefix]
        prefix_value = unit_prefixes[possible_prefix]
        if possible_prefix in latex_prefixes:
            latex = latex_prefixes[possible_prefix] + latex
        else:
            latex = latex.replace("{" + symbol_wo_prefix + "}",
                                  "{" + symbol_str + "}")
        # don't forget to account for the prefix value!
        return (base_value * prefix_value, dims, latex)

    # no dice
    raise UnitParseError(symbol_str, "unknown unit symbol")


default_unit_registry = UnitRegistry()
