import functools
from numbers import Number as numeric_type

import numpy as np

from ytunits.units import UnitContainer, dimensions
from ytunits.units.unit_registry import UnitRegistry
from ytunits.units.unit_systems import create_code_unit_system, get_unit_system
from ytunits.units.yt_array import YTArray, YTQuantity
from ytunits.utilities.logger import ytLogger as mylog
from ytunits.utilities.object_registries import data_object_registry


def _base_value(quantity):
    # value of a quantity in the registry's base units
    return float(quantity.d) * quantity.units.base_value


class Dataset:
    """
    A loaded dataset, backed by an engine handle.

    The dataset owns a private unit registry holding the ``code_*`` units
    derived from the engine's parameters, so arrays created through
    :attr:`arr` and :attr:`quan` (and every field read from a data container)
    can be converted to and from code units.

    Parameters
    ----------
    handle : object
        The engine's opaque handle to the loaded data.
    engine : NativeAnalysisEngine
        The engine that produced *handle*.
    unit_system : str or UnitSystem
        The unit system derived quantities are reported in. ``"code"``
        selects the dataset's own code unit system.
    """

    default_fluid_type = "gas"
    default_units = {
        "length_unit": "cm",
        "time_unit": "s",
        "mass_unit": "g",
        "velocity_unit": "cm/s",
        "magnetic_unit": "gauss",
        "temperature_unit": "K",
    }
    axis_name = {0: "x", 1: "y", 2: "z"}
    axis_id = {0: 0, 1: 1, 2: 2, "x": 0, "y": 1, "z": 2, "X": 0, "Y": 1, "Z": 2}
    # image-plane axes for each line-of-sight axis
    x_axis = {0: 1, 1: 2, 2: 0}
    y_axis = {0: 2, 1: 0, 2: 1}

    def __init__(self, handle, engine, unit_system="cgs"):
        self.handle = handle
        self.engine = engine
        self.basename = getattr(handle, "name", str(handle))
        self._parse_parameter_file()
        self.unit_registry = UnitRegistry()
        self.set_code_units()
        self._assign_unit_system(unit_system)
        self._set_derived_attrs()
        self.print_key_parameters()
        self._setup_classes()

    def __repr__(self):
        return f"{self.__class__.__name__}: {self.basename}"

    def __str__(self):
        return self.basename

    def _parse_parameter_file(self):
        params = self.engine.get_parameters(self.handle)
        self._code_unit_parameters = {
            key: params.get(key) for key in self.default_units
        }
        self.parameters = dict(params.get("parameters") or {})
        self._domain_left_edge = np.array(params["domain_left_edge"], "float64")
        self._domain_right_edge = np.array(params["domain_right_edge"], "float64")
        self.domain_dimensions = np.array(params["domain_dimensions"], "int64")
        self.dimensionality = int(params["dimensionality"])
        self.periodicity = tuple(params.get("periodicity", (True, True, True)))
        self._current_time = float(params.get("current_time", 0.0))
        self.current_redshift = float(params.get("current_redshift", 0.0))
        self.max_level = int(params.get("max_level", 0))

    def _set_code_unit_attributes(self):
        for attr, cgs_unit in self.default_units.items():
            unit = self._code_unit_parameters.get(attr)
            if unit is None:
                continue
            elif isinstance(unit, str):
                uq = self.quan(1.0, unit)
            elif isinstance(unit, numeric_type):
                uq = self.quan(unit, cgs_unit)
            elif isinstance(unit, YTQuantity):
                uq = self.quan(unit)
            elif isinstance(unit, tuple):
                uq = self.quan(unit[0], unit[1])
            else:
                raise RuntimeError(f"{attr} ({unit}) is invalid.")
            setattr(self, attr, uq)
        for attr in ("length_unit", "mass_unit", "time_unit"):
            if not hasattr(self, attr):
                setattr(self, attr, self.quan(1.0, self.default_units[attr]))
        if not hasattr(self, "velocity_unit"):
            self.velocity_unit = self.length_unit / self.time_unit
        if not hasattr(self, "magnetic_unit"):
            self.magnetic_unit = np.sqrt(
                4 * np.pi * self.mass_unit / (self.time_unit**2 * self.length_unit)
            ).in_units("gauss")
        if not hasattr(self, "temperature_unit"):
            self.temperature_unit = self.quan(1.0, "K")

    def set_code_units(self):
        """
        Add the ``code_*`` symbols of this dataset to its unit registry.
        """
        self._set_code_unit_attributes()

        registry = self.unit_registry
        length = _base_value(self.length_unit)
        mass = _base_value(self.mass_unit)
        time = _base_value(self.time_unit)
        velocity = _base_value(self.velocity_unit)
        registry.add("code_length", length, dimensions.length)
        registry.add("code_mass", mass, dimensions.mass)
        registry.add("code_time", time, dimensions.time)
        registry.add("code_velocity", velocity, dimensions.velocity)
        registry.add(
            "code_temperature", _base_value(self.temperature_unit), dimensions.temperature
        )
        registry.add("code_density", mass / length**3, dimensions.density)
        registry.add("code_pressure", mass / (length * time**2), dimensions.pressure)
        registry.add("code_specific_energy", velocity**2, dimensions.specific_energy)
        registry.add("code_metallicity", 1.0, dimensions.dimensionless)
        # Defining code units for magnetic fields is tricky because
        # they have different dimensions in different unit systems
        mag_dims = self.magnetic_unit.units.dimensions
        if mag_dims == dimensions.magnetic_field_mks:
            self._magnetic_current_mks = True
        elif mag_dims == dimensions.magnetic_field_cgs:
            self._magnetic_current_mks = False
        else:
            raise RuntimeError(f"magnetic_unit ({self.magnetic_unit}) is invalid.")
        registry.add("code_magnetic", _base_value(self.magnetic_unit), mag_dims)
        width = (self._domain_right_edge - self._domain_left_edge).max()
        registry.add("unitary", float(width) * length, dimensions.length)

    def _assign_unit_system(self, unit_system):
        current_mks_unit = "A" if self._magnetic_current_mks else None
        us = create_code_unit_system(
            self.unit_registry, current_mks_unit=current_mks_unit
        )
        if unit_system != "code":
            us = get_unit_system(unit_system)
        self._unit_system_name = str(unit_system)
        self.unit_system = us

    def _set_derived_attrs(self):
        self.domain_left_edge = self.arr(self._domain_left_edge, "code_length")
        self.domain_right_edge = self.arr(self._domain_right_edge, "code_length")
        self.domain_width = self.domain_right_edge - self.domain_left_edge
        self.domain_center = 0.5 * (self.domain_right_edge + self.domain_left_edge)
        self.current_time = self.quan(self._current_time, "code_time")

    def print_key_parameters(self):
        for a in [
            "current_time",
            "domain_dimensions",
            "domain_left_edge",
            "domain_right_edge",
        ]:
            v = getattr(self, a)
            mylog.info("Parameters: %-25s = %s", a, v)

    def _setup_classes(self):
        self.object_types = []
        for name, cls in sorted(data_object_registry.items()):
            self._add_object_class(name, cls)
        self.object_types.sort()

    def _add_object_class(self, name, base):
        self.object_types.append(name)
        obj = functools.partial(base, ds=self)
        obj.__doc__ = base.__doc__
        setattr(self, name, obj)

    @property
    def field_list(self):
        return self.engine.field_list(self.handle)

    @property
    def derived_field_list(self):
        return self.engine.derived_field_list(self.handle)

    def get_smallest_dx(self):
        """
        Returns (in code units) the smallest cell size in the simulation.
        """
        value, units = self.engine.get_smallest_dx(self.handle)
        return self.quan(value, units).in_units("code_length")

    def print_stats(self):
        """
        Prints out (stdout) relevant information about the simulation
        """
        header = "{:>14}\t{:>14}".format("dimensions", "# cells")
        print(header)
        print(f"{len(header.expandtabs()) * '-'}")
        print(
            "{:>14}\t{:>14}".format(
                "x".join(str(d) for d in self.domain_dimensions),
                int(np.prod(self.domain_dimensions)),
            )
        )
        print("\n")
        print(f"z = {self.current_redshift:0.8f}")
        print(
            "t = %0.8e = %0.8e s = %0.8e years"
            % (
                self.current_time.in_units("code_time"),
                self.current_time.in_units("s"),
                self.current_time.in_units("yr"),
            )
        )
        print("\nSmallest Cell:")
        dx = self.get_smallest_dx()
        for item in ("Mpc", "pc", "AU", "cm"):
            print(f"\tWidth: {dx.in_units(item):0.3e}")

    def _find_extremum(self, field, ext, source=None):
        """
        Find the extremum value of a field in a data object (source) and its
        position.

        Returns
        -------
        val, coords

        val: YTQuantity
            extremum value detected

        coords: YTArray
            its position in code_length
        """
        ext = ext.lower()
        if source is None:
            source = self.all_data()
        method = {
            "min": source.quantities.min_location,
            "max": source.quantities.max_location,
        }[ext]
        val, x1, x2, x3 = method(field)
        coords = [x1, x2, x3]
        mylog.info("%s value is %0.5e at %0.16f %0.16f %0.16f", ext, val, *coords)
        coords = self.arr(coords, dtype="float64").to("code_length")
        return val, coords

    def find_max(self, field, source=None):
        """
        Returns (value, location) of the maximum of a given field.

        This is a wrapper around _find_extremum
        """
        mylog.debug("Searching for maximum value of %s", field)
        return self._find_extremum(field, "max", source=source)

    def find_min(self, field, source=None):
        """
        Returns (value, location) for the minimum of a given field.

        This is a wrapper around _find_extremum
        """
        mylog.debug("Searching for minimum value of %s", field)
        return self._find_extremum(field, "min", source=source)

    _units = None
    _unit_system_id = None

    @property
    def units(self):
        current_uid = self.unit_registry.unit_system_id
        if self._units is not None and self._unit_system_id == current_uid:
            return self._units
        self._unit_system_id = current_uid
        self._units = UnitContainer(self.unit_registry)
        return self._units

    _arr = None

    @property
    def arr(self):
        """Converts an array into a :class:`ytunits.units.yt_array.YTArray`

        The returned YTArray will be dimensionless by default, but can be
        cast to arbitrary units using the ``input_units`` argument.

        Examples
        --------

        >>> a = ds.arr([1, 2, 3], "cm")
        >>> b = ds.arr([4, 5, 6], "m")
        >>> a + b
        YTArray([401., 502., 603.]) cm

        Arrays returned by this function know about the dataset's code units

        >>> a = ds.arr(np.ones(5), "code_length")
        >>> a.in_units("Mpc")
        """
        if self._arr is not None:
            return self._arr
        self._arr = functools.partial(YTArray, registry=self.unit_registry)
        return self._arr

    _quan = None

    @property
    def quan(self):
        """Converts a scalar into a :class:`ytunits.units.yt_array.YTQuantity`

        Quantities created this way automatically know about the dataset's
        code units.

        Examples
        --------

        >>> a = ds.quan(1, "cm")
        >>> b = ds.quan(2, "m")
        >>> a + b
        201.0 cm
        """
        if self._quan is not None:
            return self._quan
        self._quan = functools.partial(YTQuantity, registry=self.unit_registry)
        return self._quan
