import numpy as np

from ytunits.data_objects.selection_objects.data_selection_objects import (
    YTSelectionContainer,
    YTSelectionContainer2D,
    YTSelectionContainer3D,
)
from ytunits.data_objects.static_output import Dataset
from ytunits.funcs import is_sequence, validate_axis, validate_object
from ytunits.units.yt_array import YTArray


class YTProj(YTSelectionContainer2D):
    """
    A projection of one or more fields along an axis, optionally weighted.

    Parameters
    ----------
    field : string or list of strings
        The fields to be projected.
    axis : int or char
        The axis along which to project.  Can be 0, 1, or 2 for x, y, z.
    weight_field : string, optional
        If supplied, the field being projected will be multiplied by this
        weight value before being integrated, and at the conclusion of the
        projection the resultant values will be divided by the projected
        `weight_field`.
    center : array_like, optional
        The 'center' supplied to fields that use it.
    data_source : YTSelectionContainer, optional
        If specified, this will be the data source used for selecting regions
        to project.
    method : string, optional
        The method of projection: "integrate", "sum", "max" or "min".

    Examples
    --------

    >>> prj = ds.proj(("gas", "density"), 0)
    >>> print(prj[("gas", "density")])
    """

    _key_fields = YTSelectionContainer2D._key_fields + ["weight_field"]
    _type_name = "proj"
    _con_args = ("axis", "field", "weight_field")
    _methods = ("integrate", "sum", "max", "min")

    def __init__(
        self,
        field,
        axis,
        weight_field=None,
        center=None,
        ds=None,
        data_source=None,
        method="integrate",
        field_parameters=None,
    ):
        validate_axis(ds, axis)
        validate_object(ds, Dataset)
        validate_object(field_parameters, dict)
        validate_object(data_source, YTSelectionContainer)
        if method not in self._methods:
            raise NotImplementedError(method)
        super().__init__(axis, ds, field_parameters, data_source)
        self.method = method
        self._set_center(center)
        self.field = self._determine_fields(field)
        if weight_field is None:
            self.weight_field = weight_field
        else:
            self.weight_field = self._determine_fields(weight_field)[0]

    def _selection_args(self):
        return (self.axis, tuple(self.field), self.weight_field, self.method)


class YTCoveringGrid(YTSelectionContainer3D):
    """A 3D region with all data extracted to a single, specified
    resolution.  Left edge should align with a cell boundary, but
    defaults to the closest cell boundary.

    Parameters
    ----------
    level : int
        The resolution level data to which data will be gridded. Level
        0 is the root grid dx for that dataset.
    left_edge : array_like
        The left edge of the region to be extracted.  Specify units by supplying
        a YTArray, otherwise code length units are assumed.
    dims : array_like
        Number of cells along each axis of resulting covering_grid
    fields : array_like, optional
        A list of fields that you'd like pre-generated for your object
    data_source :
        An existing data object to intersect with the covering grid.

    Examples
    --------
    >>> cube = ds.covering_grid(2, left_edge=[0.0, 0.0, 0.0], dims=[128, 128, 128])
    """

    _type_name = "covering_grid"
    _con_args = ("level", "left_edge", "ActiveDimensions")
    _refine_by = 2

    def __init__(
        self,
        level,
        left_edge,
        dims,
        fields=None,
        ds=None,
        field_parameters=None,
        *,
        data_source=None,
    ):
        if field_parameters is None:
            center = None
        else:
            center = field_parameters.get("center", None)
        super().__init__(center, ds, field_parameters, data_source=data_source)

        self.level = level
        self.left_edge = self._sanitize_edge(left_edge)
        self.ActiveDimensions = self._sanitize_dims(dims)

        rdx = self.ds.domain_dimensions * self._refine_by**level
        self.base_dds = self.ds.domain_width / self.ds.domain_dimensions
        self.dds = self.ds.domain_width / rdx.astype("float64")
        self.right_edge = self.left_edge + self.ActiveDimensions * self.dds
        self.global_startindex = np.rint(
            ((self.left_edge - self.ds.domain_left_edge) / self.dds).d
        ).astype("int64")
        self.get_data(fields)

    def get_global_startindex(self):
        r"""Get the global start index of the covering grid."""
        return self.global_startindex

    def _sanitize_dims(self, dims):
        if not is_sequence(dims):
            dims = [dims] * len(self.ds.domain_left_edge)
        if len(dims) != len(self.ds.domain_left_edge):
            raise RuntimeError(
                "Length of dims must match the dimensionality of the dataset"
            )
        return np.array(dims, dtype="int32")

    def _sanitize_edge(self, edge):
        if not is_sequence(edge):
            edge = [edge] * len(self.ds.domain_left_edge)
        if len(edge) != len(self.ds.domain_left_edge):
            raise RuntimeError(
                "Length of edges must match the dimensionality of the dataset"
            )
        if isinstance(edge, YTArray):
            return YTArray(edge, registry=self.ds.unit_registry).to("code_length")
        return self.ds.arr(edge, "code_length", dtype="float64")

    def _reshape_vals(self, arr):
        if len(arr.shape) == 3:
            return arr
        return arr.reshape(self.ActiveDimensions, order="C")

    @property
    def shape(self):
        return tuple(self.ActiveDimensions.tolist())
