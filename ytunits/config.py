import os

from ytunits.utilities.configure import YTConfig, config_dir, configuration_callbacks

ytcfg_defaults = {}

ytcfg_defaults["ytunits"] = dict(
    colored_logs=False,
    suppress_stream_logging=False,
    stdout_stream_logging=False,
    log_level=20,
    default_unit_system="cgs",
    internals=dict(
        within_pytest=False,
    ),
)


CONFIG_DIR = config_dir()


_global_config_file = YTConfig.get_global_config_file()
_local_config_file = YTConfig.get_local_config_file()

# Load the config
ytcfg = YTConfig()
ytcfg.update(ytcfg_defaults, metadata={"source": "defaults"})

# Try loading the local config first, otherwise fall back to global config
if os.path.exists(_local_config_file):
    ytcfg.read(_local_config_file)
elif os.path.exists(_global_config_file):
    ytcfg.read(_global_config_file)


_unit_system_keys = (
    "length_unit",
    "mass_unit",
    "time_unit",
    "temperature_unit",
    "angle_unit",
    "current_mks_unit",
)


def _register_configured_unit_systems(ytcfg: YTConfig) -> None:
    # [ytunits.unit_systems.<name>] tables declare extra unit systems
    from ytunits.units.unit_systems import UnitSystem
    from ytunits.utilities.logger import ytLogger as mylog

    try:
        systems = ytcfg.get("ytunits", "unit_systems")
    except KeyError:
        return
    for name, node in systems.sections():
        kwargs = node.as_dict()
        unknown = set(kwargs) - set(_unit_system_keys)
        if unknown:
            raise KeyError(
                f"Unknown keys {sorted(unknown)} in unit system {name!r}"
            )
        UnitSystem(name, **kwargs)
        mylog.debug("Loaded unit system %s from configuration", name)


configuration_callbacks.append(_register_configured_unit_systems)


def _setup_postinit_configuration():
    """This is meant to be run last in ytunits.__init__"""
    for callback in configuration_callbacks:
        callback(ytcfg)
