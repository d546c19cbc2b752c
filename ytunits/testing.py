from functools import wraps
from importlib.util import find_spec

import numpy as np
from numpy.random import RandomState

from ytunits.funcs import is_sequence
from ytunits.units.yt_array import YTArray, YTQuantity
from ytunits.utilities.exceptions import (
    DimensionMismatchError,
    IncommensurableUnitsError,
)


def _check_field_unit_args_helper(args: dict, default_args: dict):
    values = list(args.values())
    keys = list(args.keys())
    if all(v is None for v in values):
        for key in keys:
            args[key] = default_args[key]
    elif None in values:
        raise ValueError(
            "Error in creating a fake dataset:"
            f" either all or none of the following arguments need to specified: {keys}."
        )
    elif any(len(v) != len(values[0]) for v in values):
        raise ValueError(
            "Error in creating a fake dataset:"
            f" all the following arguments must have the same length: {keys}."
        )
    return list(args.values())


_fake_random_ds_default_fields = ("density", "velocity_x", "velocity_y", "velocity_z")
_fake_random_ds_default_units = ("g/cm**3", "cm/s", "cm/s", "cm/s")
_fake_random_ds_default_negative = (False, False, False, False)


def fake_random_ds(
    ndims,
    peak_value=1.0,
    fields=None,
    units=None,
    negative=False,
    length_unit=1.0,
    unit_system="cgs",
    bbox=None,
):
    from ytunits.loaders import load_uniform_grid

    prng = RandomState(0x4D3D3D3)
    if not is_sequence(ndims):
        ndims = [ndims, ndims, ndims]
    else:
        assert len(ndims) == 3
    if not is_sequence(negative):
        if fields:
            negative = [negative for f in fields]
        else:
            negative = None

    fields, units, negative = _check_field_unit_args_helper(
        {
            "fields": fields,
            "units": units,
            "negative": negative,
        },
        {
            "fields": _fake_random_ds_default_fields,
            "units": _fake_random_ds_default_units,
            "negative": _fake_random_ds_default_negative,
        },
    )

    offsets = []
    for n in negative:
        if n:
            offsets.append(0.5)
        else:
            offsets.append(0.0)
    data = {}
    for field, offset, u in zip(fields, offsets, units):
        v = (prng.random_sample(ndims) - offset) * peak_value
        data[field] = (v, u)
    ug = load_uniform_grid(
        data,
        ndims,
        length_unit=length_unit,
        unit_system=unit_system,
        bbox=bbox,
    )
    return ug


def requires_module(*module_names):
    """
    Decorator that skips a test function unless every named module can be
    imported.

    >>> from ytunits.testing import requires_module
    >>> @requires_module("h5py")
    ... def test_hdf5_output(): ...
    """
    # note: import pytest here so that it is not a hard requirement for
    # importing ytunits.testing
    import pytest

    def deco(func):
        missing = [name for name in module_names if find_spec(name) is None]

        # note that order between these two decorators matters
        @pytest.mark.skipif(
            missing,
            reason=f"missing requirement(s): {', '.join(missing)}",
        )
        @wraps(func)
        def inner_func(*args, **kwargs):
            return func(*args, **kwargs)

        return inner_func

    return deco


def assert_allclose_units(actual, desired, rtol=1e-7, atol=0, **kwargs):
    """Raise an error if two objects are not equal up to desired tolerance

    This is a wrapper for :func:`numpy.testing.assert_allclose` that also
    verifies unit consistency

    Parameters
    ----------
    actual : array-like
        Array obtained (possibly with attached units)
    desired : array-like
        Array to compare with (possibly with attached units)
    rtol : float, optional
        Relative tolerance, defaults to 1e-7
    atol : float or quantity, optional
        Absolute tolerance. If units are attached, they must be consistent
        with the units of ``actual`` and ``desired``. If no units are attached,
        assumes the same units as ``desired``. Defaults to zero.

    Notes
    -----
    Also accepts additional keyword arguments accepted by
    :func:`numpy.testing.assert_allclose`, see the documentation of that
    function for details.

    """
    from numpy.testing import assert_allclose

    act = YTArray(actual)
    des = YTArray(desired)

    try:
        des = des.in_units(act.units)
    except (IncommensurableUnitsError, DimensionMismatchError) as e:
        raise AssertionError(
            f"Units of actual ({act.units}) and desired ({des.units}) "
            "do not have equivalent dimensions"
        ) from e

    rt = YTArray(rtol)
    if not rt.units.is_dimensionless:
        raise AssertionError(f"Units of rtol ({rt.units}) are not dimensionless")

    if isinstance(atol, YTArray):
        at = atol
    else:
        at = YTQuantity(atol, des.units)

    try:
        at = at.in_units(act.units)
    except (IncommensurableUnitsError, DimensionMismatchError) as e:
        raise AssertionError(
            f"Units of atol ({at.units}) and actual ({act.units}) "
            "do not have equivalent dimensions"
        ) from e

    # units have been validated, so we strip units before calling numpy
    # to avoid spurious errors
    act = np.asarray(act.value)
    des = np.asarray(des.value)
    rt = rt.value
    at = at.value

    return assert_allclose(act, des, rt, at, **kwargs)
