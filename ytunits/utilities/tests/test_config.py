import os

import pytest

from ytunits.config import _register_configured_unit_systems, ytcfg
from ytunits.units.unit_object import Unit
from ytunits.units.unit_systems import unit_system_registry
from ytunits.utilities import configure
from ytunits.utilities.configure import YTConfig
from ytunits.utilities.exceptions import UnitSystemAlreadyDefinedError

_DUMMY_CFG_TOML = """[ytunits]
log_level = 49
default_unit_system = "mks"
boolean_stuff = true

[ytunits.internals]
chunk_size = 3
"""


def test_defaults():
    assert ytcfg.get("ytunits", "default_unit_system") == "cgs"
    assert ytcfg["ytunits", "internals", "within_pytest"] is True
    assert "ytunits" in ytcfg
    assert not ytcfg.has_section("not_a_section")


def test_read_and_write(temp_dir):
    fname = os.path.join(temp_dir, "ytunits.toml")
    with open(fname, mode="w") as f:
        f.write(_DUMMY_CFG_TOML)

    cfg = YTConfig(defaults={"ytunits": {"log_level": 20}})
    assert cfg.read([fname, "does_not_exist.toml"]) == [fname]
    assert cfg.files_read == [fname]
    assert cfg.get("ytunits", "log_level") == 49
    assert cfg.get("ytunits", "default_unit_system") == "mks"
    assert cfg.get("ytunits", "boolean_stuff") is True
    assert cfg.get("ytunits", "internals", "chunk_size") == 3

    out = os.path.join(temp_dir, "nested", "out.toml")
    with pytest.warns(UserWarning):
        cfg.write(out)
    cfg2 = YTConfig()
    cfg2.read(out)
    assert cfg2.get("ytunits", "internals", "chunk_size") == 3


def test_invalid_toml(temp_dir):
    fname = os.path.join(temp_dir, "broken.toml")
    with open(fname, mode="w") as f:
        f.write("[ytunits\nlog_level = ")
    cfg = YTConfig()
    with pytest.warns(UserWarning, match="invalid TOML"):
        assert cfg.read(fname) == []


def test_type_errors():
    cfg = YTConfig(defaults={"ytunits": {"log_level": 20}})
    cfg["ytunits", "log_level"] = 30
    assert cfg["ytunits", "log_level"] == 30
    # the type of an entry is fixed by its first value
    with pytest.raises(TypeError):
        cfg["ytunits", "log_level"] = "debug"
    with pytest.raises(KeyError):
        cfg.get("ytunits", "foo")

    cfg.set("ytunits", "foo", "bar", 10)
    assert cfg.get("ytunits", "foo", "bar") == 10
    cfg.remove("ytunits", "foo", "bar")
    with pytest.raises(KeyError):
        cfg.get("ytunits", "foo", "bar")

    assert cfg.remove_section("ytunits")
    assert not cfg.remove_section("ytunits")


def test_config_helpers(temp_dir):
    fname = os.path.join(temp_dir, "ytunits.toml")
    configure.set_config("ytunits", "internals.verbose", "True", fname)
    assert configure.get_config("ytunits", "internals.verbose") is True
    configure.set_config("ytunits", "data_dir", "~/ytunits-data", fname)
    assert configure.get_config("ytunits", "data_dir") == os.path.expanduser(
        "~/ytunits-data"
    )
    configure.set_config("ytunits", "chunk_size", "64", fname)
    assert configure.get_config("ytunits", "chunk_size") == 64

    cfg = YTConfig()
    cfg.read(fname)
    assert cfg.get("ytunits", "chunk_size") == 64

    configure.rm_config("ytunits", "chunk_size", fname)
    cfg = YTConfig()
    cfg.read(fname)
    with pytest.raises(KeyError):
        cfg.get("ytunits", "chunk_size")
    configure.rm_config("ytunits", "data_dir", fname)
    configure.rm_config("ytunits", "internals.verbose", fname)


def test_configured_unit_systems():
    cfg = YTConfig()
    cfg.update(
        {
            "ytunits": {
                "unit_systems": {
                    "lab": {
                        "length_unit": "mm",
                        "mass_unit": "mg",
                        "time_unit": "ms",
                    }
                }
            }
        }
    )
    _register_configured_unit_systems(cfg)
    lab = unit_system_registry["lab"]
    assert lab["velocity"] == Unit("mm/ms")
    assert lab["temperature"] == Unit("K")

    # no unit_systems table is fine
    _register_configured_unit_systems(YTConfig())

    bad = YTConfig()
    bad.update(
        {
            "ytunits": {
                "unit_systems": {
                    "broken": {
                        "length_unit": "cm",
                        "mass_unit": "g",
                        "time_unit": "s",
                        "speed_unit": "km/s",
                    }
                }
            }
        }
    )
    with pytest.raises(KeyError):
        _register_configured_unit_systems(bad)
    assert "broken" not in unit_system_registry

    # configured tables cannot replace a registered system
    clash = YTConfig()
    clash.update(
        {
            "ytunits": {
                "unit_systems": {
                    "cgs": {"length_unit": "m", "mass_unit": "kg", "time_unit": "s"}
                }
            }
        }
    )
    with pytest.raises(UnitSystemAlreadyDefinedError):
        _register_configured_unit_systems(clash)
    assert unit_system_registry["cgs"]["length"] == Unit("cm")
