from numbers import Number as numeric_type

import numpy as np

from ytunits.frontends.stream.data_structures import StreamHandler
from ytunits.funcs import is_sequence
from ytunits.units.yt_array import YTArray
from ytunits.utilities.exceptions import YTInconsistentGridFieldShapeGridDims
from ytunits.utilities.logger import ytLogger as mylog

_cgs_code_units = ("cm", "g", "s", "cm/s", "gauss")


def process_data(data, grid_dims=None):
    new_data, field_units = {}, {}
    for field, val in data.items():
        # val is a data array
        if isinstance(val, np.ndarray):
            # val is a YTArray
            if isinstance(val, YTArray):
                field_units[field] = str(val.units)
                new_data[field] = val.d.copy()
            # val is a numpy array
            else:
                field_units[field] = ""
                new_data[field] = val.copy()

        # val is a tuple of (data, units)
        elif isinstance(val, tuple) and len(val) == 2:
            if not isinstance(field, (str, tuple)):
                raise RuntimeError(
                    "The data dict appears to be invalid.\nField name is not a string!"
                )
            if not isinstance(val[0], np.ndarray):
                raise RuntimeError(
                    "The data dict appears to be invalid.\nField data is not an ndarray!"
                )
            if not isinstance(val[1], str):
                raise RuntimeError(
                    "The data dict appears to be invalid.\n"
                    "Unit specification is not a string!"
                )
            field_units[field] = val[1]
            new_data[field] = np.array(val[0])

        # val is a list of data to be turned into an array
        elif is_sequence(val):
            field_units[field] = ""
            new_data[field] = np.asarray(val)

        else:
            raise RuntimeError(
                "The data dict appears to be invalid. "
                "The data dictionary must map from field "
                "names to (numpy array, unit spec) tuples. "
            )

    data = new_data

    # At this point, we have arrays for all our fields
    new_data = {}
    for field in data:
        if isinstance(field, tuple):
            new_field = field
        else:
            new_field = ("stream", field)
            mylog.debug("Reassigning '%s' to '%s'", field, new_field)
        new_data[new_field] = data[field]
        field_units[new_field] = field_units.pop(field)
    data = new_data

    # Sanity checking that all fields have the same dimensions.
    if grid_dims is not None:
        g_shapes = [(field, data[field].shape) for field in data]
        if any(shape != grid_dims for _, shape in g_shapes):
            raise YTInconsistentGridFieldShapeGridDims(g_shapes, grid_dims)
    return field_units, data


def _normalize_code_unit(unit, cgs_unit):
    # code units become (value, unit string) pairs, or None to be derived
    if unit is None:
        return None
    if isinstance(unit, str):
        return (1.0, unit)
    if isinstance(unit, YTArray):
        return (float(unit.d), str(unit.units))
    if isinstance(unit, numeric_type):
        return (float(unit), cgs_unit)
    if isinstance(unit, tuple) and len(unit) == 2:
        return (float(unit[0]), str(unit[1]))
    raise RuntimeError(f"Code unit {unit!r} is invalid.")


def uniform_grid_handler(
    data,
    domain_dimensions,
    length_unit=None,
    bbox=None,
    sim_time=0.0,
    mass_unit=None,
    time_unit=None,
    velocity_unit=None,
    magnetic_unit=None,
    periodicity=(True, True, True),
    parameters=None,
):
    """
    Validate a dict of uniform grid data and wrap it in a StreamHandler.
    Arguments are those of :func:`ytunits.loaders.load_uniform_grid`.
    """
    domain_dimensions = np.array(domain_dimensions)
    if bbox is None:
        bbox = np.array([[0.0, 1.0], [0.0, 1.0], [0.0, 1.0]], "float64")
    bbox = np.asarray(bbox, dtype="float64")
    domain_left_edge = np.array(bbox[:, 0], "float64")
    domain_right_edge = np.array(bbox[:, 1], "float64")
    # First we fix our field names, apply units to data
    # and check for consistency of field shapes
    field_units, data = process_data(data, grid_dims=tuple(domain_dimensions))

    if length_unit is None:
        length_unit = "cm"
    if mass_unit is None:
        mass_unit = "g"
    if time_unit is None:
        time_unit = "s"
    code_units = tuple(
        _normalize_code_unit(unit, cgs_unit)
        for unit, cgs_unit in zip(
            (length_unit, mass_unit, time_unit, velocity_unit, magnetic_unit),
            _cgs_code_units,
        )
    )

    return StreamHandler(
        domain_left_edge,
        domain_right_edge,
        domain_dimensions,
        data,
        field_units,
        code_units,
        simulation_time=sim_time,
        periodicity=periodicity,
        parameters=parameters,
    )
