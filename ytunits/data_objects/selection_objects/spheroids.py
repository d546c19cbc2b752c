from ytunits.data_objects.selection_objects.data_selection_objects import (
    YTSelectionContainer,
    YTSelectionContainer3D,
)
from ytunits.data_objects.static_output import Dataset
from ytunits.funcs import (
    fix_length,
    validate_center,
    validate_float,
    validate_object,
)
from ytunits.utilities.exceptions import YTSphereTooSmall


class YTSphere(YTSelectionContainer3D):
    """
    A sphere of points defined by a *center* and a *radius*.

    Parameters
    ----------
    center : array_like
        The center of the sphere.
    radius : float, width specifier, or YTQuantity
        The radius of the sphere. If passed a float,
        that will be interpreted in code units. Also
        accepts a (radius, unit) tuple or YTQuantity
        instance with units attached.

    Examples
    --------

    >>> c = [0.5, 0.5, 0.5]
    >>> sphere = ds.sphere(c, (1.0, "kpc"))
    """

    _type_name = "sphere"
    _con_args = ("center", "radius")

    def __init__(
        self, center, radius, ds=None, field_parameters=None, data_source=None
    ):
        validate_center(center)
        validate_float(radius)
        validate_object(ds, Dataset)
        validate_object(field_parameters, dict)
        validate_object(data_source, YTSelectionContainer)
        super().__init__(center, ds, field_parameters, data_source)
        # Unpack the radius, if necessary
        radius = fix_length(radius, self.ds)
        smallest_dx = self.ds.get_smallest_dx()
        if radius < smallest_dx:
            raise YTSphereTooSmall(
                self.ds,
                radius.in_units("code_length"),
                smallest_dx.in_units("code_length"),
            )
        self.set_field_parameter("radius", radius)
        self.set_field_parameter("center", self.center)
        self.radius = radius

    def _get_bbox(self):
        """
        Return the minimum bounding box for the sphere.
        """
        return -self.radius + self.center, self.radius + self.center
