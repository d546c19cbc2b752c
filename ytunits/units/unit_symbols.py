"""
A place to statically create unit quantities.


"""

#-----------------------------------------------------------------------------
# Copyright (c) 2013, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
#-----------------------------------------------------------------------------

from ytunits.units.unit_object import Unit

#
# meter
#

fm = femtometer = Unit("fm")
pm = picometer = Unit("pm")
nm = nanometer = Unit("nm")
um = micrometer = Unit("um")
mm = millimeter = Unit("mm")
cm = centimeter = Unit("cm")
m = meter = Unit("m")
km = kilometer = Unit("km")
Mm = Megameter = megameter = Unit("Mm")

#
# parsec
#

pc = parsec = Unit("pc")
kpc = kiloparsec = Unit("kpc")
Mpc = mpc = megaparsec = Unit("Mpc")
Gpc = gpc = Gigaparsec = gigaparsec = Unit("Gpc")

#
# gram
#

mg = milligram = Unit("mg")
g = gram = Unit("g")
kg = kilogram = Unit("kg")

#
# second
#

fs = femtoseconds = Unit("fs")
ps = picosecond = Unit("ps")
ns = nanosecond = Unit("ns")
ms = millisecond = Unit("ms")
s = second = Unit("s")

#
# minute
#

min = minute = Unit("min")

#
# hr
#

hr = hour = Unit("hr")

#
# day
#

day = Unit("day")

#
# year
#

yr = year = Unit("yr")
kyr = kiloyear = Unit("kyr")
Myr = Megayear = megayear = Unit("Myr")
Gyr = Gigayear = gigayear = Unit("Gyr")

#
# Misc CGS
#

dyne = dyn = Unit("dyne")
erg = ergs = Unit("erg")

#
# Misc SI
#

N = Newton = newton = Unit("N")
J = Joule = joule = Unit("J")
W = Watt = watt = Unit("W")
Hz = Hertz = hertz = Unit("Hz")
Pa = Pascal = pascal = Unit("Pa")

#
# Imperial units
#

ft = foot = Unit("ft")
mile = Unit("mile")
lbf = pound_force = Unit("lbf")
lbm = pound_mass = Unit("lbm")

#
# Solar units
#

Msun = Unit("Msun")
Rsun = solar_radius = Unit("Rsun")
rsun = Unit("rsun")
Lsun = lsun = solar_luminosity = Unit("Lsun")
Tsun = Unit("Tsun")
Zsun = Unit("Zsun")
Mjup = mjup = Unit("Mjup")
Mearth = Unit("Mearth")

#
# Misc Astronomical
#

AU = au = astronomical_unit = Unit("AU")
ly = light_year = Unit("ly")
Jy = Jansky = jansky = Unit("Jy")

#
# Physical units
#

eV = electron_volt = Unit("eV")
keV = kilo_electron_volt = Unit("keV")
MeV = mega_electron_volt = Unit("MeV")
GeV = giga_electron_volt = Unit("GeV")
atomic_mass_unit = Unit("amu")
angstrom = Unit("angstrom")
electron_mass = Unit("me")

#
# Angle units
#

deg = degree = Unit("degree")
rad = radian = Unit("radian")
arcsec = arcsecond = Unit("arcsec")
arcmin = arcminute = Unit("arcmin")
mas = milliarcsecond = Unit("mas")
sr = steradian = Unit("steradian")

#
# Temperature
#

K = Kelvin = kelvin = Unit("K")
R = Rankine = rankine = Unit("R")

#
# Electromagnetic
#

esu = statC = Unit("esu")
gauss = Unit("gauss")
statA = Unit("statA")
A = ampere = Unit("A")
C = coulomb = Unit("C")
T = tesla = Unit("T")
V = volt = Unit("V")
ohm = Unit("ohm")

#
# Dimensionless
#

dimensionless = Unit("dimensionless")


class _SymbolContainer:
    """A container for units to associate with a dataset.

    This object is usually accessed on a Dataset instance via
    ``ds.units.unit_symbols``.

    Parameters
    ----------
    registry : UnitRegistry instance
        A unit registry to associate with units accessed on this object.

    Example
    -------

    >>> ds = ytunits.load_uniform_grid(...)
    >>> code_mass = ds.units.code_mass
    >>> (12 * code_mass).to("Msun")
    >>> code_mass.registry is ds.unit_registry
    True
    """

    def __init__(self, registry):
        self._registry = registry
        self._cache = {}

    def __dir__(self):
        ret = [u for u, v in globals().items()
               if not u.startswith("_") and isinstance(v, Unit)]
        ret += list(self._registry.keys())
        ret += object.__dir__(self)
        return list(set(ret))

    def __getattr__(self, item):
        if item in self._cache:
            return self._cache[item]
        symbol = globals().get(item)
        if isinstance(symbol, Unit):
            ret = Unit(symbol, registry=self._registry)
        elif item in self._registry:
            ret = Unit(item, registry=self._registry)
        else:
            raise AttributeError(item)
        self._cache[item] = ret
        return ret
