"""
ytunits is a toolkit for unit-aware analysis of volumetric data.

Arrays carry their units through numpy operations, datasets carry their own
code units, and data containers fetch fields from an analysis engine.

"""
from ._version import __version__, version_info  # isort: skip
import ytunits.units as units
import ytunits.units.physical_constants as physical_constants
from ytunits.data_objects.api import Dataset
from ytunits.engine import NativeAnalysisEngine
from ytunits.funcs import is_sequence
from ytunits.loaders import load, load_uniform_grid
from ytunits.units import (
    Unit,
    UnitRegistry,
    YTArray,
    YTQuantity,
    uconcatenate,
    ucross,
    udot,
    uhstack,
    uhypot,
    uintersect1d,
    umaximum,
    uminimum,
    unorm,
    ustack,
    uunion1d,
    uvstack,
)
from ytunits.utilities.logger import set_log_level, ytLogger as mylog

from ytunits.config import _setup_postinit_configuration, ytcfg
from ytunits.units.unit_systems import UnitSystem, unit_system_registry

_setup_postinit_configuration()
