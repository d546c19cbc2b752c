from ytunits.data_objects.selection_objects.data_selection_objects import (
    YTSelectionContainer,
    YTSelectionContainer0D,
)
from ytunits.data_objects.static_output import Dataset
from ytunits.funcs import validate_3d_array, validate_object
from ytunits.units import YTArray


class YTPoint(YTSelectionContainer0D):
    """
    A 0-dimensional object defined by a single point

    Parameters
    ----------
    p: array_like
        A point defined within the domain. Only the cell containing it is
        selected.
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
    >>> point = ds.point(c)
    """

    _type_name = "point"
    _con_args = ("p",)

    def __init__(self, p, ds=None, field_parameters=None, data_source=None):
        validate_3d_array(p)
        validate_object(ds, Dataset)
        validate_object(field_parameters, dict)
        validate_object(data_source, YTSelectionContainer)
        super().__init__(ds, field_parameters, data_source)
        if isinstance(p, YTArray):
            # we pass p through ds.arr to ensure code units are attached
            self.p = self.ds.arr(p).to("code_length")
        else:
            self.p = self.ds.arr(p, "code_length", dtype="float64")
