from ytunits.units import dimensions  # NOQA: F401
from ytunits.units.physical_constants import *
from ytunits.units.physical_constants import _ConstantContainer
from ytunits.units.unit_object import Unit  # NOQA: F401
from ytunits.units.unit_registry import UnitRegistry  # NOQA: F401
from ytunits.units.unit_symbols import *
from ytunits.units.unit_symbols import _SymbolContainer
from ytunits.units.unit_systems import UnitSystem, unit_system_registry  # NOQA: F401
from ytunits.units.yt_array import YTArray, YTQuantity  # NOQA: F401
from ytunits.units._numpy_wrapper_functions import (  # NOQA: F401
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


class UnitContainer:
    """A container for units and constants to associate with a dataset

    This object is usually accessed on a Dataset instance via ``ds.units``.

    Parameters
    ----------
    registry : UnitRegistry instance
        A unit registry to associate with units and constants accessed
        on this object.

    Example
    -------

    >>> ds = ytunits.load_uniform_grid(...)
    >>> code_mass = ds.units.code_mass
    >>> (12 * code_mass).to("Msun")
    >>> code_mass.registry is ds.unit_registry
    True
    >>> ds.units.newtons_constant
    6.67384e-08 cm**3/(g*s**2)

    """

    def __init__(self, registry):
        self.unit_symbols = _SymbolContainer(registry)
        self.physical_constants = _ConstantContainer(registry)

    def __dir__(self):
        all_dir = self.unit_symbols.__dir__() + self.physical_constants.__dir__()
        all_dir += object.__dir__(self)
        return list(set(all_dir))

    def __getattr__(self, item):
        pc = self.physical_constants
        us = self.unit_symbols
        ret = getattr(us, item, None)
        if ret is None:
            ret = getattr(pc, item, None)
        if ret is None:
            raise AttributeError(item)
        return ret
