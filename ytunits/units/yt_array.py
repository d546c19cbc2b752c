"""
YTArray class.



"""

#-----------------------------------------------------------------------------
# Copyright (c) 2013, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
#-----------------------------------------------------------------------------

from fractions import Fraction
from numbers import Number as numeric_type

import numpy as np
from numpy import \
    add, subtract, multiply, divide, logaddexp, logaddexp2, true_divide, \
    floor_divide, negative, power, remainder, mod, absolute, rint, \
    sign, conj, exp, exp2, log, log2, log10, expm1, log1p, sqrt, square, \
    reciprocal, sin, cos, tan, arcsin, arccos, arctan, arctan2, \
    hypot, sinh, cosh, tanh, arcsinh, arccosh, arctanh, deg2rad, rad2deg, \
    bitwise_and, bitwise_or, bitwise_xor, invert, left_shift, right_shift, \
    greater, greater_equal, less, less_equal, not_equal, equal, logical_and, \
    logical_or, logical_xor, logical_not, maximum, minimum, isreal, \
    iscomplex, isfinite, isinf, isnan, signbit, copysign, nextafter, modf, \
    ldexp, frexp, fmod, floor, ceil, trunc, fabs, fmax, fmin, cbrt, \
    positive, float_power, spacing

from ytunits.units import dimensions
from ytunits.units.unit_object import Unit
from ytunits.utilities.exceptions import \
    DimensionMismatchError, \
    ExternalBufferWriteError, \
    IncommensurableUnitsError, \
    InvalidUnitOperation, \
    LengthMismatchError, \
    YTInvalidUnitEquivalence
from ytunits.utilities.on_demand_imports import _h5py as h5py

NULL_UNIT = Unit()


def ensure_unitless(func):
    def wrapped(unit, unit2=None):
        if not unit.is_dimensionless or \
           (unit2 is not None and not unit2.is_dimensionless):
            raise InvalidUnitOperation(
                "This operation is only defined for unitless quantities. "
                "Received unit (%s)" % unit
                )
        return func(unit)
    return wrapped


def sqrt_unit(unit):
    return unit**Fraction(1, 2)


def cbrt_unit(unit):
    return unit**Fraction(1, 3)


def multiply_units(unit1, unit2):
    return unit1 * unit2


def preserve_units(unit1, unit2=None):
    return unit1


def power_unit(unit, power):
    return unit**power


def square_unit(unit):
    return unit*unit


def divide_units(unit1, unit2):
    return unit1/unit2


def reciprocal_unit(unit):
    return unit**-1


def passthrough_unit(unit, unit2=None):
    return unit


def return_without_unit(unit, unit2=None):
    return None


@ensure_unitless
def unitless(unit):
    return NULL_UNIT


def sign_unit(unit):
    return NULL_UNIT


def arctan2_unit(unit1, unit2):
    return NULL_UNIT


def comparison_unit(unit1, unit2=None):
    return None


trigonometric_operators = (sin, cos, tan)

# operands of these are brought to the unit of the first one
same_unit_operators = (preserve_units, comparison_unit, arctan2_unit,
                       unitless)

# reductions that keep the unit of their input
unit_preserving_reductions = (add, maximum, minimum, fmax, fmin)

_op_names = {
    add: "addition",
    subtract: "subtraction",
    multiply: "multiplication",
    divide: "division",
    floor_divide: "floor division",
    remainder: "modulus",
    power: "power",
    hypot: "hypot",
    maximum: "maximum",
    minimum: "minimum",
    greater: "greater than",
    greater_equal: "greater than or equal",
    less: "less than",
    less_equal: "less than or equal",
    equal: "equal",
    not_equal: "not equal",
}


def _raw(obj):
    if isinstance(obj, YTArray):
        return obj.view(np.ndarray)
    if isinstance(obj, (list, tuple)):
        return np.asarray(obj)
    return obj


def _coerce_input(obj):
    # lists like [4*cm, 5*cm] become YTArrays
    if isinstance(obj, (list, tuple)) and len(obj) > 0 and \
       any(isinstance(o, YTArray) for o in obj):
        return YTArray(obj)
    return obj


def _check_shapes(ufunc, obj1, obj2):
    shape1 = np.shape(obj1)
    shape2 = np.shape(obj2)
    # only bare scalars broadcast against arrays
    if shape1 and shape2 and shape1 != shape2:
        raise LengthMismatchError(_op_names.get(ufunc, ufunc.__name__),
                                  shape1, shape2)


def _scale(values, factor):
    if factor == 1.0:
        return values
    return np.multiply(values, factor)


def _build(values, units, cls=None):
    values = np.asarray(values)
    if cls is None:
        cls = YTQuantity if values.ndim == 0 else YTArray
    obj = values.view(cls)
    obj.units = units
    return obj


class YTArray(np.ndarray):
    """
    An ndarray subclass that attaches a symbolic unit object to the array data.

    Parameters
    ----------

    input_array : iterable
        A tuple, list, or array to attach units to
    input_units : String unit specification or unit symbol object
        The units of the array. Powers must be specified using python
        syntax (cm**3, not cm^3).
    registry : A UnitRegistry object
        The registry to create units from. If input_units is already associated
        with a unit registry and this is specified, this will be used instead of
        the registry associated with the unit object.
    dtype : data-type
        The dtype of the array data. Integer data is promoted to float64.

    Examples
    --------

    >>> from ytunits import YTArray
    >>> a = YTArray([1, 2, 3], 'cm')
    >>> b = YTArray([4, 5, 6], 'm')
    >>> a + b
    YTArray([401., 502., 603.]) cm
    >>> b + a
    YTArray([4.01, 5.02, 6.03]) m

    NumPy ufuncs will pass through units where appropriate.

    >>> import numpy as np
    >>> a = YTArray(np.arange(8) - 4, 'g/cm**3')
    >>> np.abs(a)
    YTArray([4., 3., 2., 1., 0., 1., 2., 3.]) g/cm**3

    and strip them when it would be annoying to deal with them.

    >>> np.log10(a / YTArray(1, 'g/cm**3'))
    YTArray([       nan,        nan,        nan,        nan,       -inf,
             0.        , 0.30103   , 0.47712125]) dimensionless

    """
    _ufunc_registry = {
        add: preserve_units,
        subtract: preserve_units,
        multiply: multiply_units,
        divide: divide_units,
        logaddexp: unitless,
        logaddexp2: unitless,
        true_divide: divide_units,
        floor_divide: divide_units,
        negative: passthrough_unit,
        positive: passthrough_unit,
        power: power_unit,
        float_power: power_unit,
        remainder: preserve_units,
        mod: preserve_units,
        fmod: preserve_units,
        absolute: passthrough_unit,
        fabs: passthrough_unit,
        rint: passthrough_unit,
        sign: sign_unit,
        conj: passthrough_unit,
        exp: unitless,
        exp2: unitless,
        log: unitless,
        log2: unitless,
        log10: unitless,
        expm1: unitless,
        log1p: unitless,
        sqrt: sqrt_unit,
        cbrt: cbrt_unit,
        square: square_unit,
        reciprocal: reciprocal_unit,
        sin: unitless,
        cos: unitless,
        tan: unitless,
        sinh: unitless,
        cosh: unitless,
        tanh: unitless,
        arcsin: unitless,
        arccos: unitless,
        arctan: unitless,
        arctan2: arctan2_unit,
        arcsinh: unitless,
        arccosh: unitless,
        arctanh: unitless,
        hypot: preserve_units,
        deg2rad: unitless,
        rad2deg: unitless,
        bitwise_and: return_without_unit,
        bitwise_or: return_without_unit,
        bitwise_xor: return_without_unit,
        invert: return_without_unit,
        left_shift: passthrough_unit,
        right_shift: passthrough_unit,
        greater: comparison_unit,
        greater_equal: comparison_unit,
        less: comparison_unit,
        less_equal: comparison_unit,
        not_equal: comparison_unit,
        equal: comparison_unit,
        logical_and: comparison_unit,
        logical_or: comparison_unit,
        logical_xor: comparison_unit,
        logical_not: return_without_unit,
        maximum: preserve_units,
        minimum: preserve_units,
        fmax: preserve_units,
        fmin: preserve_units,
        isreal: return_without_unit,
        iscomplex: return_without_unit,
        isfinite: return_without_unit,
        isinf: return_without_unit,
        isnan: return_without_unit,
        signbit: return_without_unit,
        copysign: preserve_units,
        nextafter: preserve_units,
        modf: passthrough_unit,
        ldexp: passthrough_unit,
        frexp: return_without_unit,
        floor: passthrough_unit,
        ceil: passthrough_unit,
        trunc: passthrough_unit,
        spacing: passthrough_unit,
        }

    _external = False

    def __new__(cls, input_array, input_units=None, registry=None, dtype=None,
                bypass_validation=False):
        if bypass_validation:
            return _build(input_array, input_units, cls)

        if isinstance(input_array, YTArray):
            ret = input_array.view(cls)
            if dtype is not None and ret.dtype != dtype:
                ret = ret.astype(dtype)
            if input_units is None:
                if registry is not None and \
                   registry is not input_array.units.registry:
                    ret.units = Unit(input_array.units, registry=registry)
                return ret
            new_units = Unit(input_units, registry=registry)
            if new_units == ret.units:
                ret.units = new_units
                return ret
            return ret.in_units(new_units)

        if isinstance(input_array, (list, tuple)) and len(input_array) > 0 \
           and isinstance(input_array[0], YTArray):
            first_units = input_array[0].units
            values = [
                v.in_units(first_units).ndarray_view()
                if isinstance(v, YTArray) else v for v in input_array
            ]
            ret = YTArray(np.array(values, dtype=dtype), first_units,
                          registry=registry)
            if input_units is not None:
                ret = ret.in_units(Unit(input_units, registry=registry))
            return ret

        # Input array is an already formed ndarray instance
        # We first cast to be our class type
        obj = np.asarray(input_array, dtype=dtype)
        if dtype is None and obj.dtype.kind in "iu":
            obj = obj.astype(np.float64)
        obj = obj.view(cls)

        # Check units type
        if input_units is None:
            # Nothing provided. Make dimensionless...
            units = Unit(registry=registry)
        elif isinstance(input_units, Unit):
            if registry is not None and registry is not input_units.registry:
                units = Unit(input_units, registry=registry)
            else:
                units = input_units
        else:
            # units kwarg set, but it's not a Unit object.
            # don't handle all the cases here, let the Unit class handle if
            # it's a str.
            units = Unit(input_units, registry=registry)

        # Attach the units
        obj.units = units

        return obj

    def __array_finalize__(self, obj):
        if obj is None:
            return
        self.units = getattr(obj, 'units', NULL_UNIT)
        self._external = self.base is not None and \
            getattr(obj, '_external', False)

    def __repr__(self):
        return super().__repr__()+' '+self.units.__repr__()

    def __str__(self):
        return str(self.view(np.ndarray)) + ' ' + str(self.units)

    def __format__(self, format_spec):
        return "{} {}".format(self.d.__format__(format_spec), self.units)

    #
    # Start unit conversion methods
    #

    def _unit_repr_check_same(self, units):
        """
        Takes a Unit object, or string of known unit symbol, and check that it
        is compatible with this quantity. Returns Unit object.

        """
        # let Unit() handle units arg if it's not already a Unit obj.
        if not isinstance(units, Unit):
            units = Unit(units, registry=self.units.registry)

        if not self.units.same_dimensions_as(units):
            raise IncommensurableUnitsError(self.units, units)

        return units

    def convert_to_units(self, units):
        """
        Convert the array and units to the given units.

        Parameters
        ----------
        units : Unit object or str
            The units you want to convert to.

        """
        self._check_writable("unit conversion")
        new_units = self._unit_repr_check_same(units)
        conversion_factor = self.units.get_conversion_factor(new_units)

        values = self.view(np.ndarray)
        values *= conversion_factor
        self.units = new_units

        return self

    def convert_to_base(self, unit_system="cgs"):
        """
        Convert the array and units to the equivalent base units in
        the specified unit system.

        Parameters
        ----------
        unit_system : string or UnitSystem, optional
            The unit system to be used in the conversion. If not specified,
            the default base units of cgs are used.

        Examples
        --------
        >>> E = YTQuantity(2.5, "erg/s")
        >>> E.convert_to_base(unit_system="galactic")
        """
        return self.convert_to_units(
            self.units.get_base_equivalent(unit_system))

    def convert_to_cgs(self):
        """
        Convert the array and units to the equivalent cgs units.

        """
        return self.convert_to_units(self.units.get_cgs_equivalent())

    def convert_to_mks(self):
        """
        Convert the array and units to the equivalent mks units.

        """
        return self.convert_to_units(self.units.get_mks_equivalent())

    def in_units(self, units, equivalence=None, **kwargs):
        """
        Creates a copy of this array with the data in the supplied units, and
        returns it.

        Optionally, an equivalence can be specified to convert to an
        equivalent quantity which is not in the same dimensions.

        Parameters
        ----------
        units : Unit object or string
            The units you want to get a new quantity in.
        equivalence : string, optional
            The equivalence you wish to use. To see which equivalencies are
            supported for this unitful quantity, try the
            :meth:`list_equivalencies` method. Default: None

        Returns
        -------
        YTArray

        """
        if equivalence is not None:
            return self.to_equivalent(units, equivalence, **kwargs)
        new_units = self._unit_repr_check_same(units)
        conversion_factor = self.units.get_conversion_factor(new_units)

        return _build(self.ndarray_view() * conversion_factor, new_units)

    def to(self, units, equivalence=None, **kwargs):
        """
        An alias for YTArray.in_units().

        See the docstrings of that function for details.
        """
        return self.in_units(units, equivalence=equivalence, **kwargs)

    def in_base(self, unit_system="cgs"):
        """
        Creates a copy of this array with the data in the specified unit
        system, and returns it in that system's base units.

        Parameters
        ----------
        unit_system : string or UnitSystem, optional
            The unit system to be used in the conversion. If not specified,
            the default base units of cgs are used.

        Examples
        --------
        >>> E = YTQuantity(2.5, "erg/s")
        >>> E_new = E.in_base(unit_system="galactic")
        """
        return self.in_units(self.units.get_base_equivalent(unit_system))

    def in_cgs(self):
        """
        Creates a copy of this array with the data in the equivalent cgs units,
        and returns it.

        Returns
        -------
        Quantity object with data converted to cgs units.

        """
        return self.in_units(self.units.get_cgs_equivalent())

    def in_mks(self):
        """
        Creates a copy of this array with the data in the equivalent mks units,
        and returns it.

        Returns
        -------
        Quantity object with data converted to mks units.

        """
        return self.in_units(self.units.get_mks_equivalent())

    def to_equivalent(self, unit, equiv, **kwargs):
        """
        Convert a YTArray or YTQuantity to an equivalent, e.g., something that
        is related by only a constant factor but not in the same units.

        Parameters
        ----------
        unit : string
            The unit that you wish to convert to.
        equiv : string
            The equivalence you wish to use. To see which equivalencies are
            supported for this unitful quantity, try the
            :meth:`list_equivalencies` method.

        Examples
        --------
        >>> a = YTArray(1.0e7,"K")
        >>> a.to_equivalent("keV", "thermal")
        """
        from ytunits.units.equivalencies import equivalence_registry
        new_units = Unit(unit, registry=self.units.registry)
        if equiv not in equivalence_registry:
            raise YTInvalidUnitEquivalence(equiv, self.units, unit)
        this_equiv = equivalence_registry[equiv]()
        old_dims = self.units.dimensions
        new_dims = new_units.dimensions
        if old_dims in this_equiv.dims and new_dims in this_equiv.dims:
            return this_equiv.convert(self, new_dims, **kwargs).in_units(
                new_units)
        raise YTInvalidUnitEquivalence(equiv, self.units, unit)

    def list_equivalencies(self):
        """
        Lists the possible equivalencies associated with this YTArray or
        YTQuantity.
        """
        from ytunits.units.equivalencies import equivalence_registry
        for k, v in equivalence_registry.items():
            if self.has_equivalent(k):
                print(v())

    def has_equivalent(self, equiv):
        """
        Check to see if this YTArray or YTQuantity has an equivalent unit in
        *equiv*.
        """
        from ytunits.units.equivalencies import equivalence_registry
        try:
            this_equiv = equivalence_registry[equiv]
        except KeyError:
            raise KeyError("No such equivalence \"%s\"." % equiv) from None
        return self.units.dimensions in this_equiv.dims

    def ndarray_view(self):
        """
        Returns a view into the array, but as an ndarray rather than ytarray.

        Returns
        -------
        View of this array's data.
        """
        return self.view(np.ndarray)

    def to_ndarray(self):
        """
        Creates a copy of this array with the unit information stripped

        """
        return np.array(self.view(np.ndarray))

    @property
    def value(self):
        """Get a copy of the array data as a numpy ndarray"""
        return self.to_ndarray()

    v = value

    @property
    def d(self):
        """Get a view of the array data."""
        return self.ndarray_view()

    #
    # Externally owned data
    #

    @classmethod
    def from_buffer(cls, buffer, units, registry=None, dtype=None):
        """
        Wrap *buffer* without copying it. The result is marked as external
        and is read-only: in-place conversions, item assignment and ufunc
        outputs raise ExternalBufferWriteError, and :meth:`get_array` hands
        out copies, so the owner of the buffer stays in control of its data.

        """
        if isinstance(buffer, np.ndarray):
            data = buffer if dtype is None else buffer.astype(dtype,
                                                              copy=False)
        else:
            data = np.frombuffer(buffer, dtype=dtype or np.float64)
        ret = data.view(cls)
        ret.flags.writeable = False
        ret.units = Unit(units, registry=registry)
        ret._external = True
        return ret

    @property
    def is_external(self):
        return self._external

    def _check_writable(self, operation):
        if self._external:
            raise ExternalBufferWriteError(operation)

    def get_array(self):
        """
        Return the data as a plain ndarray: an owned copy when this array
        wraps an external buffer, a view otherwise.

        """
        if self._external:
            return np.array(self.view(np.ndarray))
        return self.view(np.ndarray)

    #
    # HDF5 I/O
    #

    def write_hdf5(self, filename, dataset_name=None, info=None,
                   group_name=None):
        r"""Writes a YTArray to hdf5 file.

        Parameters
        ----------
        filename: string
            The filename to create and write a dataset to

        dataset_name: string
            The name of the dataset to create in the file.

        info: dictionary
            A dictionary of supplementary info to write to append as attributes
            to the dataset.

        group_name: string
            An optional group to write the arrays to. If not specified, the
            arrays are datasets at the top level by default.

        Examples
        --------
        >>> a = YTArray([1,2,3], 'cm')
        >>> myinfo = {'field':'dinosaurs', 'type':'field_data'}
        >>> a.write_hdf5('test_array_data.h5', dataset_name='dinosaurs',
        ...              info=myinfo)
        """
        if info is None:
            info = {}

        info['units'] = str(self.units)

        if dataset_name is None:
            dataset_name = 'array_data'

        with h5py.File(filename, mode="a") as f:
            if group_name is not None:
                if group_name in f:
                    g = f[group_name]
                else:
                    g = f.create_group(group_name)
            else:
                g = f
            if dataset_name in g.keys():
                d = g[dataset_name]
                # Overwrite without deleting if we can get away with it.
                if d.shape == self.shape and d.dtype == self.dtype:
                    d[...] = self.d
                    for k in list(d.attrs.keys()):
                        del d.attrs[k]
                else:
                    del g[dataset_name]
                    d = g.create_dataset(dataset_name, data=self.d)
            else:
                d = g.create_dataset(dataset_name, data=self.d)

            for k, v in info.items():
                d.attrs[k] = v

    @classmethod
    def from_hdf5(cls, filename, dataset_name=None, group_name=None):
        r"""Attempts read in and convert a dataset in an hdf5 file into a
        YTArray.

        Parameters
        ----------
        filename: string
        The filename to of the hdf5 file.

        dataset_name: string
            The name of the dataset to read from.  If the dataset has a units
            attribute, attempt to infer units as well.

        group_name: string
            An optional group to read the arrays from. If not specified, the
            arrays are datasets at the top level by default.

        """
        if dataset_name is None:
            dataset_name = 'array_data'

        with h5py.File(filename, mode="r") as f:
            if group_name is not None:
                g = f[group_name]
            else:
                g = f
            dataset = g[dataset_name]
            data = dataset[...]
            units = dataset.attrs.get('units', '')
        if isinstance(units, bytes):
            units = units.decode("utf-8")
        return cls(data, units)

    #
    # Start operation methods
    #

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        out = kwargs.pop("out", None)
        if out is not None:
            for o in out:
                if isinstance(o, YTArray):
                    o._check_writable(f"{ufunc.__name__} in place")
            kwargs["out"] = tuple(_raw(o) for o in out)
        inputs = tuple(_coerce_input(i) for i in inputs)

        if method == "__call__" and ufunc in self._ufunc_registry:
            if len(inputs) == 1:
                out_arr, unit = self._unary_ufunc(ufunc, inputs[0], kwargs)
            elif len(inputs) == 2:
                out_arr, unit = self._binary_ufunc(ufunc, inputs[0],
                                                   inputs[1], kwargs)
            else:
                raise InvalidUnitOperation(
                    f"{ufunc.__name__} with {len(inputs)} operands is not "
                    "supported.")
        elif method in ("reduce", "accumulate", "reduceat") and \
                ufunc in unit_preserving_reductions:
            unit = getattr(inputs[0], "units", NULL_UNIT)
            out_arr = getattr(ufunc, method)(*[_raw(i) for i in inputs],
                                             **kwargs)
        elif ufunc.nin == 3 and method == "__call__":
            # clip: bounds are converted to the unit of the data
            unit = getattr(inputs[0], "units", NULL_UNIT)
            raw_inputs = [_raw(inputs[0])]
            for i in inputs[1:]:
                if isinstance(i, YTArray):
                    i = i.in_units(unit).ndarray_view()
                raw_inputs.append(i)
            out_arr = ufunc(*raw_inputs, **kwargs)
        else:
            return getattr(ufunc, method)(*[_raw(i) for i in inputs],
                                          **kwargs)

        return self._wrap_ufunc_output(out_arr, unit, out)

    def _unary_ufunc(self, ufunc, inp, kwargs):
        unit_operator = self._ufunc_registry[ufunc]
        u = getattr(inp, "units", NULL_UNIT)
        values = _raw(inp)
        if unit_operator is unitless:
            if ufunc in trigonometric_operators and \
               u.dimensions == dimensions.angle:
                values = _scale(values, u.base_value)
                unit = NULL_UNIT
            else:
                unit = unit_operator(u)
                values = _scale(values, u.base_value)
        else:
            unit = unit_operator(u)
        return ufunc(values, **kwargs), unit

    def _binary_ufunc(self, ufunc, inp1, inp2, kwargs):
        unit_operator = self._ufunc_registry[ufunc]
        op_name = _op_names.get(ufunc, ufunc.__name__)
        u1 = getattr(inp1, "units", None)
        u2 = getattr(inp2, "units", None)
        _check_shapes(ufunc, inp1, inp2)
        v1 = _raw(inp1)
        v2 = _raw(inp2)
        fold = 1.0

        if unit_operator is power_unit:
            if u2 is not None:
                if not u2.is_dimensionless:
                    raise DimensionMismatchError(op_name, u2)
                v2 = _scale(v2, u2.base_value)
            if u1 is None:
                unit = NULL_UNIT
            else:
                exponents = np.unique(np.asarray(v2))
                if exponents.size == 1:
                    unit = u1**exponents.item()
                elif u1.is_dimensionless:
                    v1 = _scale(v1, u1.base_value)
                    unit = NULL_UNIT
                else:
                    raise InvalidUnitOperation(
                        f"Cannot raise ({u1}) to an array of different "
                        "exponents.")
        elif unit_operator in same_unit_operators:
            if (u1 is None or u2 is None) and \
               unit_operator is comparison_unit and \
               not (u2 if u1 is None else u1).is_dimensionless:
                # plain numbers are compared in the unit of a dimensional
                # operand, and as pure numbers against dimensionless ones
                unit = None
            else:
                if u1 is None:
                    u1 = NULL_UNIT
                if u2 is None:
                    u2 = NULL_UNIT
                if not u1.same_dimensions_as(u2):
                    raise DimensionMismatchError(op_name, u1, u2)
                if unit_operator is unitless:
                    unit = unit_operator(u1, u2)
                    v1 = _scale(v1, u1.base_value)
                    v2 = _scale(v2, u2.base_value)
                else:
                    v2 = _scale(v2, u2.base_value / u1.base_value)
                    unit = unit_operator(u1, u2)
        elif unit_operator in (multiply_units, divide_units):
            if u1 is None:
                unit = unit_operator(NULL_UNIT, u2)
            elif u2 is None:
                unit = u1
            elif u1.same_dimensions_as(u2) and not u1.is_dimensionless:
                v2 = _scale(v2, u2.base_value / u1.base_value)
                if unit_operator is multiply_units:
                    unit = u1 * u1
                else:
                    unit = NULL_UNIT
            else:
                unit = unit_operator(u1, u2)
                if unit.is_dimensionless and not unit.expr.is_one:
                    fold = unit.base_value
                    unit = NULL_UNIT
        else:
            unit = unit_operator(u1 or NULL_UNIT, u2 or NULL_UNIT)

        out_arr = ufunc(v1, v2, **kwargs)
        if fold != 1.0:
            if isinstance(out_arr, np.ndarray):
                out_arr *= fold
            else:
                out_arr = out_arr * fold
        return out_arr, unit

    def _wrap_ufunc_output(self, out_arr, unit, out):
        if out is not None:
            for o in out:
                if isinstance(o, YTArray):
                    o.units = NULL_UNIT if unit is None else unit
            return out[0] if len(out) == 1 else out
        if unit is None:
            return out_arr
        if isinstance(out_arr, tuple):
            return tuple(_build(o, unit) for o in out_arr)
        return _build(out_arr, unit)

    def ptp(self, axis=None, keepdims=False):
        """Range of values (maximum - minimum) along an axis."""
        return self.max(axis=axis, keepdims=keepdims) - \
            self.min(axis=axis, keepdims=keepdims)

    #
    # End operation methods
    #

    def __getitem__(self, item):
        ret = super().__getitem__(item)
        if np.ndim(ret) == 0:
            return _build(ret, self.units, YTQuantity)
        return ret

    def __setitem__(self, item, value):
        self._check_writable("item assignment")
        values = self.view(np.ndarray)
        value = _coerce_input(value)
        if isinstance(value, YTArray):
            if not value.units.same_dimensions_as(self.units):
                raise DimensionMismatchError("assignment", self.units,
                                             value.units)
            new_values = value.in_units(self.units).ndarray_view()
        else:
            new_values = np.asarray(value)
        target_shape = np.shape(values[item])
        if new_values.shape not in ((), target_shape):
            try:
                broadcast = np.broadcast_shapes(new_values.shape,
                                                target_shape)
            except ValueError:
                broadcast = None
            if broadcast != target_shape:
                raise LengthMismatchError("assignment", target_shape,
                                          new_values.shape)
        values[item] = new_values

    def __reduce__(self):
        """Pickle reduction method

        See the documentation for the standard library pickle module:
        http://docs.python.org/2/library/pickle.html

        Unit metadata is encoded in the zeroth element of third element of the
        returned tuple, itself a tuple used to restore the state of the ndarray.
        This is always defined for numpy arrays.
        """
        np_ret = list(super().__reduce__())
        np_ret[2] = (np_ret[2], self.units)
        return tuple(np_ret)

    def __setstate__(self, state):
        """Pickle setstate method

        This is called inside pickle.read() and restores the unit data from the
        metadata extracted in __reduce__ and then serialized by pickle.
        """
        np_state, units = state
        super().__setstate__(np_state)
        self.units = units


class YTQuantity(YTArray):
    """
    A scalar associated with a unit. Quantities are immutable: in-place
    operators return new objects.

    Parameters
    ----------

    input_scalar : an integer or floating point scalar
        The scalar to attach units to
    input_units : String unit specification or unit symbol object
        The units of the quantity. Powers must be specified using python syntax
        (cm**3, not cm^3).
    registry : A UnitRegistry object
        The registry to create units from. If input_units is already associated
        with a unit registry and this is specified, this will be used instead
        of the registry associated with the unit object.
    dtype : data-type
        The dtype of the array data.

    Examples
    --------

    >>> from ytunits import YTQuantity
    >>> a = YTQuantity(1, 'cm')
    >>> b = YTQuantity(2, 'm')
    >>> a + b
    201.0 cm
    >>> b + a
    2.01 m

    """
    def __new__(cls, input_scalar, input_units=None, registry=None,
                dtype=None, bypass_validation=False):
        if bypass_validation:
            return _build(input_scalar, input_units, cls)
        if not isinstance(input_scalar, (numeric_type, np.number, np.ndarray)):
            raise RuntimeError('Quantity values must be numeric')
        if np.size(input_scalar) != 1:
            raise RuntimeError('YTQuantity instances must be scalars')
        ret = YTArray.__new__(cls, input_scalar, input_units, registry,
                              dtype=dtype)
        if ret.shape != ():
            ret = _build(ret.ndarray_view().reshape(()), ret.units, cls)
        return ret

    @property
    def value(self):
        """Get the data as a Python scalar"""
        return self.view(np.ndarray).item()

    v = value

    def __repr__(self):
        return str(self)

    def __setitem__(self, item, value):
        raise TypeError("YTQuantity objects are immutable")

    def convert_to_units(self, units):
        raise TypeError("YTQuantity objects are immutable, use in_units "
                        "instead of convert_to_units")

    # in-place operators return new quantities

    def __iadd__(self, other):
        return self + other

    def __isub__(self, other):
        return self - other

    def __imul__(self, other):
        return self * other

    def __itruediv__(self, other):
        return self / other

    def __ifloordiv__(self, other):
        return self // other

    def __imod__(self, other):
        return self % other

    def __ipow__(self, other):
        return self ** other
