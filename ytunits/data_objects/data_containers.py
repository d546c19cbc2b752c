import abc
from typing import Tuple

import numpy as np

from ytunits.funcs import is_sequence, iter_fields
from ytunits.units.yt_array import YTArray, YTQuantity
from ytunits.utilities.exceptions import YTException, YTFieldNotFound
from ytunits.utilities.logger import ytLogger as mylog
from ytunits.utilities.object_registries import data_object_registry


class YTDataContainer(abc.ABC):
    """
    Generic YTDataContainer container.  By itself, will attempt to
    read fields (through the dataset's engine) and deal with passing back
    and forth field parameters.
    """

    _con_args: Tuple[str, ...] = ()
    _skip_add = False

    def __init__(self, ds, field_parameters):
        """
        Typically this is never called directly, but only due to inheritance.
        It associates a :class:`~ytunits.data_objects.static_output.Dataset`
        with the class, sets its initial set of fields, and the remainder of
        the arguments are passed as field_parameters.
        """
        # ds is typically set in the new object type created in
        # Dataset._add_object_class but it can also be passed as a parameter to the
        # constructor, in which case it will override the default.
        # This code ensures it is never not set.
        if ds is not None:
            self.ds = ds
        else:
            if not hasattr(self, "ds"):
                raise RuntimeError(
                    "Error: ds must be set either through class type "
                    "or parameter to the constructor"
                )

        mylog.debug("Appending object to %s (type: %s)", self.ds, type(self))
        self.field_data = {}
        self._default_field_parameters = {
            "center": self.ds.arr(np.zeros(3, dtype="float64"), "cm"),
            "bulk_velocity": self.ds.arr(np.zeros(3, dtype="float64"), "cm/s"),
            "normal": self.ds.arr([0.0, 0.0, 1.0], ""),
        }
        if field_parameters is None:
            field_parameters = {}
        self._set_default_field_parameters()
        for key, val in field_parameters.items():
            self.set_field_parameter(key, val)

    def __init_subclass__(cls, *args, **kwargs):
        super().__init_subclass__(*args, **kwargs)
        if hasattr(cls, "_type_name") and not cls._skip_add:
            data_object_registry[cls._type_name] = cls

    def _set_default_field_parameters(self):
        self.field_parameters = {}
        for k, v in self._default_field_parameters.items():
            self.set_field_parameter(k, v)

    def _first_matching_field(self, field):
        for ftype, fname in self.ds.derived_field_list:
            if fname == field:
                return (ftype, fname)

        raise YTFieldNotFound(field, self.ds)

    def _set_center(self, center):
        if center is None:
            self.center = None
            return
        elif isinstance(center, YTArray):
            self.center = self.ds.arr(center.astype("float64"))
            self.center.convert_to_units("code_length")
        elif isinstance(center, (list, tuple, np.ndarray)):
            if isinstance(center[0], YTQuantity):
                self.center = self.ds.arr([c.copy() for c in center], dtype="float64")
                self.center.convert_to_units("code_length")
            else:
                self.center = self.ds.arr(center, "code_length", dtype="float64")
        elif isinstance(center, str):
            if center.lower() in ("c", "center"):
                self.center = self.ds.domain_center
            elif center.lower() in ("max", "m"):
                self.center = self.ds.find_max(("gas", "density"))[1]
            elif center.startswith("max_"):
                field = self._first_matching_field(center[4:])
                self.center = self.ds.find_max(field)[1]
            elif center.lower() == "min":
                self.center = self.ds.find_min(("gas", "density"))[1]
            elif center.startswith("min_"):
                field = self._first_matching_field(center[4:])
                self.center = self.ds.find_min(field)[1]
            else:
                raise YTException(
                    f"Unknown center specification {center!r}, expected 'c', "
                    "'center', 'max', 'min', 'max_<field>' or 'min_<field>'."
                )
        else:
            self.center = self.ds.arr(center, "code_length", dtype="float64")

        if self.center.ndim > 1:
            mylog.debug("Removing singleton dimensions from 'center'.")
            self.center = np.squeeze(self.center)
            if self.center.ndim > 1:
                msg = (
                    "center array must be 1 dimensional, supplied center has "
                    f"{self.center.ndim} dimensions with shape {self.center.shape}."
                )
                raise YTException(msg)

        self.set_field_parameter("center", self.center)

    def get_field_parameter(self, name, default=None):
        """
        This is typically only used by derived field functions, but
        it returns parameters used to generate fields.
        """
        if name in self.field_parameters:
            return self.field_parameters[name]
        else:
            return default

    def set_field_parameter(self, name, val):
        """
        Here we set up dictionaries that get passed up and down and ultimately
        to derived fields.
        """
        self.field_parameters[name] = val

    def has_field_parameter(self, name):
        """
        Checks if a field parameter is set.
        """
        return name in self.field_parameters

    def get_field_parameters(self):
        return self.field_parameters.copy()

    def clear_data(self):
        """
        Clears out all data from the YTDataContainer instance, freeing memory.
        """
        self.field_data.clear()

    def has_key(self, key):
        """
        Checks if a data field already exists.
        """
        return key in self.field_data

    def keys(self):
        return self.field_data.keys()

    def _reshape_vals(self, arr):
        return arr

    def __getitem__(self, key):
        """
        Returns a single field.  Will add if necessary.
        """
        f = self._determine_fields([key])[0]
        if f not in self.field_data:
            self.get_data(f)
        return self.field_data[f]

    def __setitem__(self, key, val):
        """
        Sets a field to be some other value.
        """
        self.field_data[key] = val

    def __delitem__(self, key):
        """
        Deletes a field
        """
        if key not in self.field_data:
            key = self._determine_fields(key)[0]
        del self.field_data[key]

    @abc.abstractmethod
    def get_data(self, fields=None):
        pass

    def __repr__(self):
        # We'll do this the slow way to be clear what's going on
        s = f"{self.__class__.__name__} ({self.ds}): "
        for i in self._con_args:
            try:
                s += ", {}={}".format(
                    i,
                    getattr(self, i).in_base(unit_system=self.ds.unit_system),
                )
            except AttributeError:
                s += f", {i}={getattr(self, i)}"
        return s

    def _tupleize_field(self, field, known):
        if is_sequence(field) and not isinstance(field, str):
            try:
                ftype, fname = field
            except ValueError:
                raise YTFieldNotFound(field, self.ds) from None
            return ftype, fname
        if (self.ds.default_fluid_type, field) in known:
            return self.ds.default_fluid_type, field
        return self._first_matching_field(field)

    def _determine_fields(self, fields):
        known = set(self.ds.field_list) | set(self.ds.derived_field_list)
        explicit_fields = []
        for field in iter_fields(fields):
            ftype, fname = self._tupleize_field(field, known)
            if (ftype, fname) not in known:
                raise YTFieldNotFound((ftype, fname), self.ds)
            explicit_fields.append((ftype, fname))
        return explicit_fields

    # Shorthands for the derived quantities of the container

    def _compute_extrema(self, field):
        if self._extrema_cache is None:
            self._extrema_cache = {}
        if field not in self._extrema_cache:
            mi, ma = self.quantities.extrema(field)
            self._extrema_cache[field] = (mi, ma)
        return self._extrema_cache[field]

    _extrema_cache = None

    def max(self, field):
        r"""Compute the maximum of a field.

        Examples
        --------

        >>> max_temp = reg.max(("gas", "temperature"))
        """
        rv = tuple(self._compute_extrema(f)[1] for f in iter_fields(field))
        if len(rv) == 1:
            return rv[0]
        return rv

    def min(self, field):
        r"""Compute the minimum of a field.

        Examples
        --------

        >>> min_temp = reg.min(("gas", "temperature"))
        """
        rv = tuple(self._compute_extrema(f)[0] for f in iter_fields(field))
        if len(rv) == 1:
            return rv[0]
        return rv

    def sum(self, field):
        r"""Compute the sum of a field.

        Examples
        --------

        >>> total_vol = reg.sum(("index", "cell_volume"))
        """
        return self.quantities.total_quantity(field)

    def mean(self, field, weight=None):
        r"""Compute the mean of a field, optionally weighted by another field.

        Examples
        --------

        >>> avg_rho = reg.mean(("gas", "density"), weight=("gas", "cell_mass"))
        """
        if weight is None:
            weight = ("index", "cell_volume")
        return self.quantities.weighted_average_quantity(field, weight)
