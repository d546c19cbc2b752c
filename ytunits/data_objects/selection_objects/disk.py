import numpy as np

from ytunits.data_objects.selection_objects.data_selection_objects import (
    YTSelectionContainer,
    YTSelectionContainer3D,
)
from ytunits.data_objects.static_output import Dataset
from ytunits.funcs import (
    fix_length,
    validate_3d_array,
    validate_center,
    validate_float,
    validate_object,
)


class YTDisk(YTSelectionContainer3D):
    """
    By providing a *center*, a *normal*, a *radius* and a *height* we
    can define a cylinder of any proportion.  Only cells whose centers are
    within the cylinder will be selected.

    Parameters
    ----------
    center : array_like
        coordinate to which the normal, radius, and height all reference
    normal : array_like
        the normal vector defining the direction of lengthwise part of the
        cylinder
    radius : float
        the radius of the cylinder
    height : float
        the distance from the midplane of the cylinder to the top and
        bottom planes
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

    >>> c = [0.5, 0.5, 0.5]
    >>> disk = ds.disk(c, [1, 0, 0], (1, "kpc"), (10, "kpc"))
    """

    _type_name = "disk"
    _con_args = ("center", "_norm_vec", "radius", "height")

    def __init__(
        self,
        center,
        normal,
        radius,
        height,
        ds=None,
        field_parameters=None,
        data_source=None,
    ):
        validate_center(center)
        validate_3d_array(normal)
        validate_float(radius)
        validate_float(height)
        validate_object(ds, Dataset)
        validate_object(field_parameters, dict)
        validate_object(data_source, YTSelectionContainer)
        YTSelectionContainer3D.__init__(self, center, ds, field_parameters, data_source)
        normal = np.asarray(normal, dtype="float64")
        self._norm_vec = normal / np.sqrt(np.dot(normal, normal))
        self.set_field_parameter("normal", self._norm_vec)
        self.set_field_parameter("center", self.center)
        self.height = fix_length(height, self.ds)
        self.radius = fix_length(radius, self.ds)
        self.set_field_parameter("height", self.height)
        self.set_field_parameter("radius", self.radius)
