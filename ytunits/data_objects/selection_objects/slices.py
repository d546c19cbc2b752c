import numpy as np

from ytunits.data_objects.selection_objects.data_selection_objects import (
    YTSelectionContainer,
    YTSelectionContainer2D,
)
from ytunits.data_objects.static_output import Dataset
from ytunits.funcs import (
    fix_length,
    validate_3d_array,
    validate_axis,
    validate_center,
    validate_float,
    validate_object,
)


def _unit_vectors(normal, north_vector=None):
    # orthonormal (east, north, normal) triad; north is projected into the plane
    normal = np.asarray(normal, dtype="float64")
    normal = normal / np.sqrt(np.dot(normal, normal))
    if north_vector is None:
        north_vector = np.zeros(3)
        north_vector[np.argmin(np.abs(normal))] = 1.0
    north_vector = np.asarray(north_vector, dtype="float64")
    north_vector = north_vector - np.dot(north_vector, normal) * normal
    norm = np.sqrt(np.dot(north_vector, north_vector))
    if norm == 0:
        raise ValueError("north_vector must not be parallel to the normal.")
    north_vector = north_vector / norm
    east_vector = np.cross(north_vector, normal)
    return east_vector, north_vector, normal


class YTSlice(YTSelectionContainer2D):
    """
    This is a data object corresponding to a slice through the simulation
    domain.

    Parameters
    ----------
    axis : int or char
        The axis along which to slice.  Can be 0, 1, or 2 for x, y, z.
    coord : float
        The coordinate along the axis at which to slice.  This is in
        "domain" coordinates.
    center : array_like, optional
        The 'center' supplied to fields that use it.  Note that this does
        not have to have `coord` as one value.  optional.
    ds: ~ytunits.data_objects.static_output.Dataset, optional
        An optional dataset to use rather than self.ds
    field_parameters : dictionary
         A dictionary of field parameters than can be accessed by derived
         fields.
    data_source: optional
        Draw the selection from the provided data source rather than
        all data associated with the data_set

    Examples
    --------

    >>> slice = ds.slice(0, 0.25)
    >>> print(slice[("gas", "density")])
    """

    _top_node = "/Slices"
    _type_name = "slice"
    _con_args = ("axis", "coord")

    def __init__(
        self, axis, coord, center=None, ds=None, field_parameters=None, data_source=None
    ):
        validate_axis(ds, axis)
        validate_float(coord)
        # center is an optional parameter
        if center is not None:
            validate_center(center)
        validate_object(ds, Dataset)
        validate_object(field_parameters, dict)
        validate_object(data_source, YTSelectionContainer)
        YTSelectionContainer2D.__init__(self, axis, ds, field_parameters, data_source)
        self._set_center(center)
        self.coord = fix_length(coord, self.ds)


class YTCuttingPlane(YTSelectionContainer2D):
    """
    This is a data object corresponding to an oblique slice through the
    simulation domain.

    Parameters
    ----------
    normal : array_like
        The vector that defines the desired plane.  For instance, the
        angular momentum of a sphere.
    center : array_like
        The center of the cutting plane, where the normal vector is anchored.
    north_vector: array_like, optional
        An optional vector to describe the north-facing direction in the resulting
        plane.
    ds: ~ytunits.data_objects.static_output.Dataset, optional
        An optional dataset to use rather than self.ds
    field_parameters : dictionary
         A dictionary of field parameters than can be accessed by derived
         fields.
    data_source: optional
        Draw the selection from the provided data source rather than
        all data associated with the data_set

    Examples
    --------

    >>> cp = ds.cutting([0.1, 0.2, -0.9], [0.5, 0.42, 0.6])
    >>> print(cp[("gas", "density")])
    """

    _plane = None
    _top_node = "/CuttingPlanes"
    _key_fields = YTSelectionContainer2D._key_fields + ["pz", "pdz"]
    _type_name = "cutting"
    _con_args = ("normal", "center")

    def __init__(
        self,
        normal,
        center,
        north_vector=None,
        ds=None,
        field_parameters=None,
        data_source=None,
    ):
        validate_3d_array(normal)
        validate_center(center)
        if north_vector is not None:
            validate_3d_array(north_vector)
        validate_object(ds, Dataset)
        validate_object(field_parameters, dict)
        validate_object(data_source, YTSelectionContainer)
        YTSelectionContainer2D.__init__(self, 4, ds, field_parameters, data_source)
        self._set_center(center)
        # Let's set up our plane equation
        # ax + by + cz + d = 0
        self._x_vec, self._y_vec, self._norm_vec = _unit_vectors(normal, north_vector)
        self._d = -1.0 * np.dot(self._norm_vec, self.center.d)
        self.set_field_parameter("cp_x_vec", self._x_vec)
        self.set_field_parameter("cp_y_vec", self._y_vec)
        self.set_field_parameter("cp_z_vec", self._norm_vec)

    @property
    def normal(self):
        return self._norm_vec
