import abc

from ytunits.data_objects.data_containers import YTDataContainer
from ytunits.data_objects.derived_quantities import DerivedQuantityCollection
from ytunits.funcs import fix_axis, iter_fields
from ytunits.units.yt_array import YTArray
from ytunits.utilities.logger import ytLogger as mylog


class YTSelectionContainer(YTDataContainer, abc.ABC):
    _selector = None
    _data_source = None
    _dimensionality: int

    def __init__(self, ds, field_parameters, data_source=None):
        super().__init__(ds, field_parameters)
        self._data_source = data_source
        if data_source is not None:
            if data_source.ds is not self.ds:
                raise RuntimeError(
                    "Attempted to construct a DataContainer with a data_source "
                    "from a different Dataset",
                    ds,
                    data_source.ds,
                )
            if data_source._dimensionality < self._dimensionality:
                raise RuntimeError(
                    "Attempted to construct a DataContainer with a data_source "
                    "of lower dimensionality (%u vs %u)"
                    % (data_source._dimensionality, self._dimensionality)
                )
            self.field_parameters.update(data_source.field_parameters)
        self.quantities = DerivedQuantityCollection(self)

    def _selection_args(self):
        # constructor arguments as plain floats in code units
        args = []
        for name in self._con_args:
            value = getattr(self, name)
            if isinstance(value, YTArray):
                if value.units.same_dimensions_as(self.ds.domain_width.units):
                    value = value.in_units("code_length")
                value = value.d
            args.append(value)
        return tuple(args)

    @property
    def selector(self):
        """The engine's selection backing this container."""
        if self._selector is not None:
            return self._selector
        source = None
        if self._data_source is not None:
            source = self._data_source.selector
        self._selector = self.ds.engine.create_selection(
            self.ds.handle,
            self._type_name,
            self._selection_args(),
            field_parameters=self.field_parameters,
            data_source=source,
        )
        return self._selector

    def get_data(self, fields=None):
        if fields is None:
            return
        for field in self._determine_fields(fields):
            if field in self.field_data:
                continue
            buffer, units = self.ds.engine.fetch_field(self.selector, field)
            mylog.debug("Read field %s (%s) for %s", field, units, self)
            arr = YTArray.from_buffer(buffer, units, registry=self.ds.unit_registry)
            self.field_data[field] = self._reshape_vals(arr)

    def __iter__(self):
        return iter(self.field_data)


class YTSelectionContainer0D(YTSelectionContainer):
    _dimensionality = 0

    def __init__(self, ds, field_parameters=None, data_source=None):
        super().__init__(ds, field_parameters, data_source)


class YTSelectionContainer1D(YTSelectionContainer):
    _dimensionality = 1

    def __init__(self, ds, field_parameters=None, data_source=None):
        super().__init__(ds, field_parameters, data_source)


class YTSelectionContainer2D(YTSelectionContainer):
    _key_fields = ["px", "py", "pdx", "pdy"]
    _dimensionality = 2
    """
    Prepares the YTSelectionContainer2D, normal to *axis*.  If *axis* is 4, we are not
    aligned with any axis.
    """

    def __init__(self, axis, ds, field_parameters=None, data_source=None):
        super().__init__(ds, field_parameters, data_source)
        # We need the ds, which will exist by now, for fix_axis.
        self.axis = fix_axis(axis, self.ds)
        self.set_field_parameter("axis", axis)


class YTSelectionContainer3D(YTSelectionContainer):
    """
    Returns an instance of YTSelectionContainer3D, or prepares one.  Usually only
    used as a base class.  Note that *center* is supplied, but only used
    for fields and quantities that require it.
    """

    _key_fields = ["x", "y", "z", "dx", "dy", "dz"]
    _dimensionality = 3

    def __init__(self, center, ds, field_parameters=None, data_source=None):
        super().__init__(ds, field_parameters, data_source)
        self._set_center(center)

    def cut_region(self, field_cuts, field_parameters=None, locals=None):
        """
        Return a YTCutRegion, where the a cell is identified as being inside
        the cut region based on the value of one or more fields.

        Parameters
        ----------
        field_cuts : list of strings
           A list of conditionals that will be evaluated. In the namespace
           available, these conditionals will have access to 'obj' which is a
           data object of unknown shape, and they must generate a boolean array.
           For instance, conditionals = ["obj[('gas', 'temperature')] < 1e3"]
        field_parameters : dictionary
           A dictionary of field parameters to be used when applying the field
           cuts.
        locals : dictionary
            A dictionary of local variables to use when defining the cut region.

        Examples
        --------
        To find the total mass of hot gas with temperature greater than 10^6 K
        in your volume:

        >>> ad = ds.all_data()
        >>> cr = ad.cut_region(["obj[('gas', 'temperature')] > 1e6"])
        >>> print(cr.quantities.total_quantity(("gas", "cell_mass")).in_units("Msun"))
        """
        if locals is None:
            locals = {}
        cr = self.ds.cut_region(
            self,
            list(iter_fields(field_cuts)),
            field_parameters=field_parameters,
            locals=locals,
        )
        return cr
