import numpy as np
from more_itertools import always_iterable

from ytunits.data_objects.selection_objects.data_selection_objects import (
    YTSelectionContainer,
    YTSelectionContainer3D,
)
from ytunits.data_objects.static_output import Dataset
from ytunits.funcs import validate_object, validate_sequence


class YTCutRegion(YTSelectionContainer3D):
    """
    This is a data object designed to allow individuals to apply logical
    operations to fields and filter as a result of those cuts.

    Parameters
    ----------
    data_source : YTSelectionContainer3D
        The object to which cuts will be applied.
    conditionals : list of strings
        A list of conditionals that will be evaluated.  In the namespace
        available, these conditionals will have access to 'obj' which is a data
        object of unknown shape, and they must generate a boolean array.  For
        instance, conditionals = ["obj[('gas', 'temperature')] < 1e3"]

    Examples
    --------

    >>> sp = ds.sphere("max", (1.0, "Mpc"))
    >>> cr = ds.cut_region(sp, ["obj[('gas', 'temperature')] < 1e3"])
    """

    _type_name = "cut_region"
    _con_args = ("base_object", "conditionals")

    def __init__(
        self,
        data_source,
        conditionals,
        ds=None,
        field_parameters=None,
        locals=None,
    ):
        if locals is None:
            locals = {}
        validate_object(data_source, YTSelectionContainer)
        validate_sequence(conditionals)
        for condition in conditionals:
            validate_object(condition, str)
        validate_object(ds, Dataset)
        validate_object(field_parameters, dict)

        self.conditionals = list(always_iterable(conditionals))
        if isinstance(data_source, YTCutRegion):
            # If the source is also a cut region, add its conditionals
            # and set the source to be its source.
            # Preserve order of conditionals.
            self.conditionals = data_source.conditionals + self.conditionals
            data_source = data_source.base_object

        super().__init__(
            data_source.center, ds, field_parameters, data_source=data_source
        )
        self.base_object = data_source
        self.locals = locals

    def _cond_ind(self):
        ind = None
        obj = self.base_object
        locals = self.locals.copy()
        if "obj" in locals:
            raise RuntimeError(
                '"obj" has been defined in the "locals" ; '
                "this is not supported, please rename the variable."
            )
        locals["obj"] = obj
        for cond in self.conditionals:
            res = np.asarray(eval(cond, locals), dtype="bool")
            if ind is None:
                ind = res
            else:
                np.logical_and(res, ind, ind)
        return ind

    def _selection_args(self):
        return (self._cond_ind(),)
