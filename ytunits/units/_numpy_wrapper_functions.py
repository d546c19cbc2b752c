# This module is not part of the public namespace `ytunits.units`.
# It is home to unit-preserving wrappers around numpy functions that do not
# dispatch through ufuncs.

import numpy as np

from ytunits.units.yt_array import YTArray, YTQuantity


def _validate_numpy_wrapper_units(v, arrs):
    if not any(isinstance(a, YTArray) for a in arrs):
        return v
    if not all(isinstance(a, YTArray) for a in arrs):
        raise RuntimeError("Not all of your arrays are YTArrays.")
    a1 = arrs[0]
    if not all(a.units == a1.units for a in arrs[1:]):
        raise RuntimeError("Your arrays must have identical units.")
    return YTArray(np.asarray(v), a1.units)


def _raw_values(arrs):
    return [a.ndarray_view() if isinstance(a, YTArray) else a for a in arrs]


def uconcatenate(arrs, axis=0):
    """Concatenate a sequence of arrays.

    This wrapper around numpy.concatenate preserves units. All input arrays
    must have the same units.  See the documentation of numpy.concatenate for
    full details.

    Examples
    --------
    >>> from ytunits.units import cm
    >>> A = [1, 2, 3]*cm
    >>> B = [2, 3, 4]*cm
    >>> uconcatenate((A, B))
    YTArray([1., 2., 3., 2., 3., 4.]) cm

    """
    v = np.concatenate(_raw_values(arrs), axis=axis)
    v = _validate_numpy_wrapper_units(v, arrs)
    return v


def ucross(arr1, arr2, registry=None, axisa=-1, axisb=-1, axisc=-1, axis=None):
    """Applies the cross product to two YT arrays.

    This wrapper around numpy.cross preserves units.
    See the documentation of numpy.cross for full
    details.
    """
    v = np.cross(arr1.d, arr2.d, axisa=axisa, axisb=axisb, axisc=axisc,
                 axis=axis)
    units = arr1.units * arr2.units
    arr = YTArray(v, units, registry=registry)
    return arr


def uintersect1d(arr1, arr2, assume_unique=False):
    """Find the sorted unique elements of the two input arrays.

    A wrapper around numpy.intersect1d that preserves units.  All input arrays
    must have the same units.  See the documentation of numpy.intersect1d for
    full details.

    Examples
    --------
    >>> from ytunits.units import cm
    >>> A = [1, 2, 3]*cm
    >>> B = [2, 3, 4]*cm
    >>> uintersect1d(A, B)
    YTArray([2., 3.]) cm

    """
    v = np.intersect1d(*_raw_values([arr1, arr2]),
                       assume_unique=assume_unique)
    v = _validate_numpy_wrapper_units(v, [arr1, arr2])
    return v


def uunion1d(arr1, arr2):
    """Find the union of two arrays.

    A wrapper around numpy.union1d that preserves units.  All input arrays
    must have the same units.  See the documentation of numpy.union1d for
    full details.

    Examples
    --------
    >>> from ytunits.units import cm
    >>> A = [1, 2, 3]*cm
    >>> B = [2, 3, 4]*cm
    >>> uunion1d(A, B)
    YTArray([1., 2., 3., 4.]) cm

    """
    v = np.union1d(*_raw_values([arr1, arr2]))
    v = _validate_numpy_wrapper_units(v, [arr1, arr2])
    return v


def unorm(data, ord=None, axis=None, keepdims=False):
    """Matrix or vector norm that preserves units

    This is a wrapper around np.linalg.norm that preserves units. See
    the documentation for that function for descriptions of the keyword
    arguments.

    Examples
    --------
    >>> from ytunits.units import km
    >>> data = [1, 2, 3]*km
    >>> print(unorm(data))
    3.7416573867739413 km
    """
    norm = np.linalg.norm(data.d, ord=ord, axis=axis, keepdims=keepdims)
    if norm.shape == ():
        return YTQuantity(norm, data.units)
    return YTArray(norm, data.units)


def udot(op1, op2):
    """Matrix or vector dot product that preserves units

    This is a wrapper around np.dot that preserves units.

    Examples
    --------
    >>> from ytunits.units import km, s
    >>> a = np.eye(2)*km
    >>> b = (np.ones((2, 2)) * 2)*s
    >>> print(udot(a, b))
    [[2. 2.]
     [2. 2.]] km*s
    """
    dot = np.dot(op1.d, op2.d)
    units = op1.units * op2.units
    if dot.shape == ():
        return YTQuantity(dot, units)
    return YTArray(dot, units)


def uvstack(arrs):
    """Stack arrays in sequence vertically (row wise) while preserving units

    This is a wrapper around np.vstack that preserves units.

    Examples
    --------
    >>> from ytunits.units import km
    >>> a = [1, 2, 3]*km
    >>> b = [2, 3, 4]*km
    >>> print(uvstack([a, b]))
    [[1. 2. 3.]
     [2. 3. 4.]] km
    """
    v = np.vstack(_raw_values(arrs))
    v = _validate_numpy_wrapper_units(v, arrs)
    return v


def uhstack(arrs):
    """Stack arrays in sequence horizontally while preserving units

    This is a wrapper around np.hstack that preserves units.

    Examples
    --------
    >>> from ytunits.units import km
    >>> a = [1, 2, 3]*km
    >>> b = [2, 3, 4]*km
    >>> print(uhstack([a, b]))
    [1. 2. 3. 2. 3. 4.] km
    """
    v = np.hstack(_raw_values(arrs))
    v = _validate_numpy_wrapper_units(v, arrs)
    return v


def ustack(arrs, axis=0):
    """Join a sequence of arrays along a new axis while preserving units

    The axis parameter specifies the index of the new axis in the
    dimensions of the result. For example, if ``axis=0`` it will be the
    first dimension and if ``axis=-1`` it will be the last dimension.

    This is a wrapper around np.stack that preserves units. See the
    documentation for np.stack for full details.

    Examples
    --------
    >>> from ytunits.units import km
    >>> a = [1, 2, 3]*km
    >>> b = [2, 3, 4]*km
    >>> print(ustack([a, b]))
    [[1. 2. 3.]
     [2. 3. 4.]] km
    """
    v = np.stack(_raw_values(arrs), axis=axis)
    v = _validate_numpy_wrapper_units(v, arrs)
    return v


def uhypot(a, b, c=None):
    """Elementwise hypotenuse of two or three arrays, in the unit of *a*.

    Examples
    --------
    >>> from ytunits.units import cm, m
    >>> print(uhypot(3*cm, 0.04*m))
    5.0 cm
    """
    ret = np.hypot(a, b)
    if c is not None:
        ret = np.hypot(ret, c)
    return ret


def _reduce_to_quantity(func, name, arr, axis):
    if not isinstance(arr, YTArray):
        arr = YTArray(arr)
    if arr.size == 0:
        raise ValueError(f"{name} of an empty array is undefined")
    ret = func(arr.ndarray_view(), axis=axis)
    if np.ndim(ret) == 0:
        return YTQuantity(ret, arr.units)
    return YTArray(ret, arr.units)


def umaximum(arr, axis=None):
    """Largest element of *arr*, keeping its unit.

    Examples
    --------
    >>> from ytunits import YTArray
    >>> umaximum(YTArray([3, 1, 2], "g"))
    3.0 g
    """
    return _reduce_to_quantity(np.max, "maximum", arr, axis)


def uminimum(arr, axis=None):
    """Smallest element of *arr*, keeping its unit."""
    return _reduce_to_quantity(np.min, "minimum", arr, axis)

