"""
Test unit systems.

"""

# ----------------------------------------------------------------------------
# Copyright (c) 2015, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
# ----------------------------------------------------------------------------

import numpy as np
from numpy.testing import assert_allclose, assert_almost_equal, assert_raises

from ytunits.loaders import load_uniform_grid
from ytunits.testing import fake_random_ds
from ytunits.units import dimensions
from ytunits.units.unit_object import Unit
from ytunits.units.unit_systems import \
    UnitSystem, \
    create_code_unit_system, \
    get_unit_system, \
    unit_system_registry
from ytunits.units.yt_array import YTArray, YTQuantity
from ytunits.utilities.exceptions import \
    IncommensurableUnitsError, \
    MissingMKSCurrent, \
    UnitSystemAlreadyDefinedError, \
    UnknownUnitSystemError


def test_unit_systems():
    goofy_unit_system = UnitSystem("goofy", "ly", "lbm", "hr", temperature_unit="R",
                                   angle_unit="arcsec", current_mks_unit="mA")
    assert goofy_unit_system["temperature"] == Unit("R")
    assert goofy_unit_system[dimensions.solid_angle] == Unit("arcsec**2")
    assert goofy_unit_system["energy"] == Unit("lbm*ly**2/hr**2")
    goofy_unit_system["energy"] = "eV"
    assert goofy_unit_system["energy"] == Unit("eV")
    assert goofy_unit_system["magnetic_field_mks"] == Unit("lbm/(hr**2*mA)")
    assert "goofy" in unit_system_registry
    assert get_unit_system("goofy") is goofy_unit_system
    assert get_unit_system(goofy_unit_system) is goofy_unit_system


def test_unit_system_names_are_unique():
    mks = get_unit_system("mks")
    assert_raises(UnitSystemAlreadyDefinedError, UnitSystem,
                  "mks", "cm", "g", "s")
    assert get_unit_system("mks") is mks
    assert mks["length"] == Unit("m")
    assert_raises(UnitSystemAlreadyDefinedError, UnitSystem,
                  "cgs", "m", "kg", "s")
    assert get_unit_system("cgs")["length"] == Unit("cm")

    # datasets with the same code units share a code unit system
    ds1 = fake_random_ds(16, length_unit=3.0, unit_system="code")
    ds2 = fake_random_ds(16, length_unit=3.0, unit_system="code")
    assert ds1.unit_registry.unit_system_id == \
        ds2.unit_registry.unit_system_id
    assert ds2.unit_system is ds1.unit_system
    assert create_code_unit_system(ds2.unit_registry) is ds1.unit_system


def test_builtin_unit_systems():
    for name in ("cgs", "mks", "imperial", "galactic", "solar",
                 "geometrized", "planck"):
        assert name in unit_system_registry

    cgs = get_unit_system("cgs")
    assert cgs["length"] == Unit("cm")
    assert cgs["energy"] == Unit("erg")
    assert cgs["pressure"] == Unit("dyne/cm**2")
    assert cgs[dimensions.velocity] == Unit("cm/s")

    mks = get_unit_system("mks")
    assert mks["energy"] == Unit("J")
    assert mks["density"] == Unit("kg/m**3")
    assert mks["magnetic_field_mks"] == Unit("T")

    galactic = get_unit_system("galactic")
    assert galactic["length"] == Unit("kpc")
    assert galactic["energy"] == Unit("keV")
    assert galactic["velocity"] == Unit("kpc/Myr")

    imperial = get_unit_system("imperial")
    assert imperial["force"] == Unit("lbf")
    assert imperial["density"] == Unit("lbm/ft**3")


def test_bad_unit_systems():
    assert_raises(UnknownUnitSystemError, get_unit_system, "not_a_system")
    # base units must carry the dimension they stand for
    assert_raises(IncommensurableUnitsError, UnitSystem, "bad", "g", "g", "s")

    cgs = get_unit_system("cgs")
    assert_raises(KeyError, cgs.__getitem__, "not_a_dimension")
    assert_raises(IncommensurableUnitsError, cgs.__setitem__, "energy", "cm")
    # the cgs system has no base current unit
    assert_raises(MissingMKSCurrent, cgs.__getitem__, "magnetic_field_mks")
    assert_raises(MissingMKSCurrent, cgs.__setitem__, "current_mks", "A")


def test_in_base():
    q = YTQuantity(1.0, "Msun/kpc**3")
    dens_mks = q.in_base("mks")
    assert dens_mks.units == Unit("kg/m**3")
    assert_allclose(dens_mks.v, q.in_units("kg/m**3").v)

    E = YTArray([1.0, 2.0], "erg/s")
    assert E.in_base("galactic").units == Unit("Msun*kpc**2/Myr**3")
    assert E.in_base("mks").units == Unit("W")
    assert_raises(UnknownUnitSystemError, E.in_base, "not_a_system")


def test_system_constants():
    G = get_unit_system("mks").constants.G
    assert G.units == Unit("m**3/(kg*s**2)")
    assert_allclose(G.v, 6.674e-11, rtol=1e-3)
    assert_raises(AttributeError, getattr,
                  get_unit_system("cgs").constants, "not_a_constant")


def test_code_unit_system():
    ds = fake_random_ds(16, length_unit=10.0, unit_system="code")
    us = ds.unit_system
    assert us is unit_system_registry[ds.unit_registry.unit_system_id]
    assert str(us["length"]) == "code_length"
    assert str(us["velocity"]) == "code_velocity"
    assert str(us["pressure"]) == "code_pressure"
    assert us["density"] == ds.unit_registry.parse("code_mass/code_length**3")

    length = ds.quan(5.0, "cm").in_base(us)
    assert str(length.units) == "code_length"
    assert_almost_equal(length.v, 0.5)

    # two datasets with different code units have their own systems
    ds2 = fake_random_ds(16, length_unit=2.0, unit_system="code")
    assert ds2.unit_system is not us
    assert ds2.unit_registry.unit_system_id != ds.unit_registry.unit_system_id


def test_magnetic_code_units():

    sqrt4pi = np.sqrt(4.0 * np.pi)
    ddims = (16,) * 3
    data = {"density": (np.random.uniform(size=ddims), "g/cm**3")}

    ds1 = load_uniform_grid(
        data, ddims, magnetic_unit=(sqrt4pi, "gauss"), unit_system="cgs"
    )

    assert_allclose(ds1.magnetic_unit.value, sqrt4pi)
    assert str(ds1.magnetic_unit.units) == "gauss"

    mucu = ds1.magnetic_unit.to("code_magnetic")
    assert_allclose(mucu.value, 1.0)
    assert str(mucu.units) == "code_magnetic"
    assert str(ds1.unit_system) == "cgs"

    ds2 = load_uniform_grid(data, ddims, magnetic_unit=(1.0, "T"), unit_system="mks")

    mucu = ds2.magnetic_unit.to("code_magnetic")
    assert_allclose(mucu.value, 1.0)
    assert str(mucu.units) == "code_magnetic"
    assert_allclose(ds2.magnetic_unit.in_base("mks").value, 1.0)

    # code units of an mks magnetic unit carry a current
    ds3 = load_uniform_grid(data, ddims, magnetic_unit=(1.0, "T"), unit_system="code")
    assert str(ds3.unit_system["magnetic_field_mks"]) == "code_magnetic"
    ds4 = load_uniform_grid(data, ddims, unit_system="code")
    assert str(ds4.unit_system["magnetic_field_cgs"]) == "code_magnetic"
    assert_raises(MissingMKSCurrent, ds4.unit_system.__getitem__, "current_mks")
