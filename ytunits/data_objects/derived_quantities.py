from ytunits.funcs import camelcase_to_underscore, iter_fields
from ytunits.utilities.object_registries import derived_quantity_registry


class DerivedQuantity:
    """
    A reduction over the cells of a data container, evaluated by the
    dataset's engine under the name ``_engine_name``.
    """

    _engine_name = None

    def __init__(self, data_source):
        self.data_source = data_source

    def __init_subclass__(cls, *args, **kwargs):
        super().__init_subclass__(*args, **kwargs)
        if cls.__name__ != "DerivedQuantity":
            derived_quantity_registry[cls.__name__] = cls

    def _compute(self, *args, **kwargs):
        ds = self.data_source.ds
        values = ds.engine.compute_derived(
            self.data_source.selector, self._engine_name, *args, **kwargs
        )
        return [ds.quan(value, units) for value, units in values]

    def _fields(self, fields):
        return self.data_source._determine_fields(list(iter_fields(fields)))

    def __call__(self, *args, **kwargs):
        """Calculate results for the derived quantity"""
        raise NotImplementedError


class DerivedQuantityCollection:
    def __new__(cls, data_source, *args, **kwargs):
        inst = object.__new__(cls)
        inst.data_source = data_source
        for f in inst.keys():
            setattr(inst, camelcase_to_underscore(f), inst[f])
        return inst

    def __getitem__(self, key):
        dq = derived_quantity_registry[key]
        # Instantiate here, so we can pass it the data object
        return dq(self.data_source)

    def keys(self):
        return derived_quantity_registry.keys()


class WeightedAverageQuantity(DerivedQuantity):
    r"""
    Calculates the weight average of a field or fields.

    Returns a YTQuantity for each field requested; if one,
    it returns a single YTQuantity, if many, it returns a list of YTQuantities
    in order of the listed fields.

    Where f is the field and w is the weight, the weighted average is
    Sum_i(f_i \* w_i) / Sum_i(w_i).

    Examples
    --------

    >>> ad = ds.all_data()
    >>> print(
    ...     ad.quantities.weighted_average_quantity(
    ...         [("gas", "density"), ("gas", "temperature")], ("gas", "cell_mass")
    ...     )
    ... )
    """

    _engine_name = "weighted_average_quantity"

    def __call__(self, fields, weight):
        weight = self._fields(weight)[0]
        rv = [self._compute(field, weight)[0] for field in self._fields(fields)]
        if len(rv) == 1:
            rv = rv[0]
        return rv


class TotalQuantity(DerivedQuantity):
    r"""
    Calculates the sum of the field or fields.

    Examples
    --------

    >>> ad = ds.all_data()
    >>> print(ad.quantities.total_quantity([("gas", "cell_mass")]))
    """

    _engine_name = "total_quantity"

    def __call__(self, fields):
        rv = [self._compute(field)[0] for field in self._fields(fields)]
        if len(rv) == 1:
            rv = rv[0]
        return rv


class TotalMass(TotalQuantity):
    r"""
    Calculates the total mass of the gas in the object.

    Examples
    --------

    >>> ad = ds.all_data()
    >>> print(ad.quantities.total_mass())
    """

    def __call__(self):
        return super().__call__(("gas", "cell_mass"))


class Extrema(DerivedQuantity):
    r"""
    Calculates the min and max value of a field or list of fields.
    Returns a YTArray for each field requested.  If one, a single YTArray
    is returned, if many, a list of YTArrays in order of field list is
    returned.  The first element of each YTArray is the minimum of the
    field and the second is the maximum of the field.

    Parameters
    ----------
    fields
        The field or list of fields over which the extrema are to be
        calculated.
    non_zero : bool
        If True, only positive values are considered in the calculation.
        Default: False

    Examples
    --------

    >>> ad = ds.all_data()
    >>> print(ad.quantities.extrema([("gas", "density"), ("gas", "temperature")]))
    """

    _engine_name = "extrema"

    def __call__(self, fields, non_zero=False):
        rv = []
        for field in self._fields(fields):
            mi, ma = self._compute(field, non_zero=non_zero)
            rv.append(self.data_source.ds.arr([mi, ma]))
        if len(rv) == 1:
            rv = rv[0]
        return rv


class MaxLocation(DerivedQuantity):
    r"""
    Calculates the maximum value plus the x, y, and z position of the maximum.

    Examples
    --------

    >>> ad = ds.all_data()
    >>> print(ad.quantities.max_location(("gas", "density")))
    """

    _engine_name = "max_location"

    def __call__(self, field):
        return self._compute(self._fields(field)[0])


class MinLocation(DerivedQuantity):
    r"""
    Calculates the minimum value plus the x, y, and z position of the minimum.

    Examples
    --------

    >>> ad = ds.all_data()
    >>> print(ad.quantities.min_location(("gas", "density")))
    """

    _engine_name = "min_location"

    def __call__(self, field):
        return self._compute(self._fields(field)[0])
