"""
Unit system class.

"""

#-----------------------------------------------------------------------------
# Copyright (c) 2015, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
#-----------------------------------------------------------------------------

import threading

from ytunits.units import dimensions
from ytunits.units.unit_object import Unit
from ytunits.units.unit_registry import default_unit_registry
from ytunits.utilities.exceptions import \
    IncommensurableUnitsError, \
    MissingMKSCurrent, \
    UnitSystemAlreadyDefinedError, \
    UnknownUnitSystemError
from ytunits.utilities.logger import ytLogger as mylog

unit_system_registry = {}
_registry_lock = threading.RLock()

cmks = dimensions.current_mks


class UnitSystemConstants:
    """
    A class to facilitate conversions of physical constants into a given unit
    system specified by *name*.

    """
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return "Physical constants in %s units." % self.name

    def __str__(self):
        return self.name

    def __dir__(self):
        from ytunits.units import physical_constants
        return [p for p in dir(physical_constants) if not p.startswith("_")]

    def __getattr__(self, item):
        from ytunits.units import physical_constants
        from ytunits.units.yt_array import YTQuantity
        const = getattr(physical_constants, item, None)
        if not isinstance(const, YTQuantity):
            raise AttributeError(item)
        return const.in_base(self.name)


class UnitSystem:
    """
    Create a UnitSystem for facilitating conversions to a default set of units.

    Parameters
    ----------
    name : string
        The name of the unit system. Will be used as the key in the
        *unit_system_registry* dict to reference the unit system by.
        Names are unique: registering a second system under a taken name
        raises UnitSystemAlreadyDefinedError.
    length_unit : string or Unit
        The base length unit of this unit system.
    mass_unit : string or Unit
        The base mass unit of this unit system.
    time_unit : string or Unit
        The base time unit of this unit system.
    temperature_unit : string or Unit, optional
        The base temperature unit of this unit system. Defaults to "K".
    angle_unit : string or Unit, optional
        The base angle unit of this unit system. Defaults to "radian".
    current_mks_unit : string or Unit, optional
        The base current unit of this unit system. Defaults to "A". A
        system constructed with ``None`` cannot express current dimensions.
    registry : UnitRegistry, optional
        The registry the unit symbols are looked up in.

    """
    def __init__(self, name, length_unit, mass_unit, time_unit,
                 temperature_unit="K", angle_unit="radian",
                 current_mks_unit="A", registry=None):
        if registry is None:
            registry = default_unit_registry
        self.registry = registry
        self._lock = threading.RLock()
        self.units_map = {
            dimensions.length: length_unit,
            dimensions.mass: mass_unit,
            dimensions.time: time_unit,
            dimensions.temperature: temperature_unit,
            dimensions.angle: angle_unit,
            dimensions.current_mks: current_mks_unit,
        }
        for k, v in self.units_map.items():
            if v is not None:
                self.units_map[k] = self._validated_unit(k, v)
        self.base_units = self.units_map.copy()
        self._dims = []
        self.name = name
        self.constants = UnitSystemConstants(self.name)
        with _registry_lock:
            if name in unit_system_registry:
                raise UnitSystemAlreadyDefinedError(name)
            unit_system_registry[name] = self
        mylog.debug("Registered unit system %s", name)

    def _validated_unit(self, key, value):
        unit = Unit(value, registry=self.registry)
        if unit.dimensions != key:
            raise IncommensurableUnitsError(unit, key)
        return unit

    def _key(self, key):
        if isinstance(key, str):
            name = key
            try:
                key = dimensions.get_dimension(key)
            except KeyError:
                raise KeyError(f"Unknown dimension {name!r}") from None
            if name not in self._dims:
                self._dims.append(name)
        return key

    def __getitem__(self, key):
        key = self._key(key)
        um = self.units_map
        if key not in um or um[key] is None:
            unit = _get_system_unit(self, key)
            with self._lock:
                if um.get(key) is None:
                    um[key] = unit
        return um[key]

    def __setitem__(self, key, value):
        key = self._key(key)
        if self.units_map[cmks] is None and key.power_of("current_mks") != 0:
            raise MissingMKSCurrent(self.name, key)
        unit = self._validated_unit(key, value)
        with self._lock:
            self.units_map[key] = unit

    def __str__(self):
        return self.name

    def __repr__(self):
        repr = "%s Unit System\n" % self.name
        repr += " Base Units:\n"
        for dim in self.base_units:
            if self.base_units[dim] is not None:
                repr += "  %s: %s\n" % (str(dim).strip("()"),
                                        self.base_units[dim])
        repr += " Other Units:\n"
        for key in self._dims:
            dim = dimensions.get_dimension(key)
            if dim not in self.base_units:
                repr += "  %s: %s\n" % (key, self.units_map[dim])
        return repr[:-1]


def _get_system_unit(unit_system, dims):
    """
    Compose the base units of *unit_system* into a unit with dimensions
    *dims*.

    """
    unit = Unit("", registry=unit_system.registry)
    for name, power in dims.terms:
        base = unit_system.base_units[dimensions.get_dimension(name)]
        if base is None:
            raise MissingMKSCurrent(unit_system.name, dims)
        unit = unit * base ** power
    return unit


def get_unit_system(unit_system):
    """
    Look up a unit system by name. UnitSystem instances are returned as is.

    """
    if isinstance(unit_system, UnitSystem):
        return unit_system
    try:
        return unit_system_registry[str(unit_system)]
    except KeyError:
        raise UnknownUnitSystemError(
            unit_system, known=list(unit_system_registry)) from None


def create_code_unit_system(unit_registry, current_mks_unit=None):
    """
    Build the ``code`` unit system of a dataset from the ``code_*`` symbols
    of its unit registry. Registries with the same code units share one
    system.

    """
    name = unit_registry.unit_system_id
    with _registry_lock:
        if name in unit_system_registry:
            return unit_system_registry[name]
        return _new_code_unit_system(name, unit_registry, current_mks_unit)


def _new_code_unit_system(name, unit_registry, current_mks_unit):
    code_unit_system = UnitSystem(
        name=name,
        length_unit="code_length",
        mass_unit="code_mass",
        time_unit="code_time",
        temperature_unit="code_temperature",
        current_mks_unit=current_mks_unit,
        registry=unit_registry,
    )
    code_unit_system["velocity"] = "code_velocity"
    if current_mks_unit:
        code_unit_system["magnetic_field_mks"] = "code_magnetic"
    else:
        code_unit_system["magnetic_field_cgs"] = "code_magnetic"
    code_unit_system["pressure"] = "code_pressure"
    return code_unit_system


cgs_unit_system = UnitSystem("cgs", "cm", "g", "s", current_mks_unit=None)
cgs_unit_system["energy"] = "erg"
cgs_unit_system["specific_energy"] = "erg/g"
cgs_unit_system["pressure"] = "dyne/cm**2"
cgs_unit_system["force"] = "dyne"
cgs_unit_system["magnetic_field_cgs"] = "gauss"
cgs_unit_system["charge_cgs"] = "esu"
cgs_unit_system["current_cgs"] = "statA"
cgs_unit_system["power"] = "erg/s"

mks_unit_system = UnitSystem("mks", "m", "kg", "s")
mks_unit_system["energy"] = "J"
mks_unit_system["specific_energy"] = "J/kg"
mks_unit_system["pressure"] = "Pa"
mks_unit_system["force"] = "N"
mks_unit_system["magnetic_field_mks"] = "T"
mks_unit_system["charge_mks"] = "C"
mks_unit_system["frequency"] = "Hz"
mks_unit_system["power"] = "W"
mks_unit_system["electric_potential_mks"] = "V"
mks_unit_system["resistance_mks"] = "ohm"

base_unit_system = UnitSystem("base", "cm", "g", "s")

imperial_unit_system = UnitSystem("imperial", "ft", "lbm", "s",
                                  temperature_unit="R")
imperial_unit_system["force"] = "lbf"
imperial_unit_system["energy"] = "ft*lbf"
imperial_unit_system["pressure"] = "lbf/ft**2"

galactic_unit_system = UnitSystem("galactic", "kpc", "Msun", "Myr")
galactic_unit_system["energy"] = "keV"
galactic_unit_system["magnetic_field_cgs"] = "uG"

solar_unit_system = UnitSystem("solar", "AU", "Mearth", "yr")

geometrized_unit_system = UnitSystem("geometrized", "l_geom", "m_geom",
                                     "t_geom")

planck_unit_system = UnitSystem("planck", "l_pl", "m_pl", "t_pl",
                                temperature_unit="T_pl")
planck_unit_system["energy"] = "E_pl"
planck_unit_system["charge_cgs"] = "q_pl"
