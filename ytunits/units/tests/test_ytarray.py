"""
Test ndarray subclass that handles symbolic units.




"""

# ----------------------------------------------------------------------------
# Copyright (c) 2013, yt Development Team.
#
# Distributed under the terms of the Modified BSD License.
#
# The full license is in the file COPYING.txt, distributed with this software.
# ----------------------------------------------------------------------------

import copy
import operator
import pickle

import numpy as np
import pytest
from numpy.testing import \
    assert_almost_equal, \
    assert_array_equal, \
    assert_equal, \
    assert_raises

from ytunits.testing import \
    assert_allclose_units, \
    fake_random_ds, \
    requires_module
from ytunits.units.unit_object import Unit
from ytunits.units.unit_symbols import cm, m, g, degree
from ytunits.units.yt_array import YTArray, YTQuantity
from ytunits.utilities.exceptions import \
    DimensionMismatchError, \
    ExternalBufferWriteError, \
    IncommensurableUnitsError, \
    InvalidUnitOperation, \
    LengthMismatchError, \
    MissingMKSCurrent, \
    YTInvalidUnitEquivalence


def operate_and_compare(a, b, op, answer):
    result = op(a, b)
    assert_allclose_units(result, answer)
    assert result.units == answer.units


def test_addition():
    """
    Test addition of two YTArrays

    """

    # Same units
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = YTArray([4, 5, 6], 'cm')
    a3 = [4*cm, 5*cm, 6*cm]
    answer = YTArray([5, 7, 9], 'cm')

    operate_and_compare(a1, a2, operator.add, answer)
    operate_and_compare(a2, a1, operator.add, answer)
    operate_and_compare(a1, a3, operator.add, answer)
    operate_and_compare(a3, a1, operator.add, answer)
    operate_and_compare(a2, a1, np.add, answer)
    operate_and_compare(a1, a2, np.add, answer)

    # different units
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = YTArray([4, 5, 6], 'm')
    a3 = [4*m, 5*m, 6*m]
    answer1 = YTArray([401, 502, 603], 'cm')
    answer2 = YTArray([4.01, 5.02, 6.03], 'm')

    operate_and_compare(a1, a2, operator.add, answer1)
    operate_and_compare(a2, a1, operator.add, answer2)
    operate_and_compare(a1, a3, operator.add, answer1)
    operate_and_compare(a3, a1, operator.add, answer2)

    # Test dimensionless quantities
    a1 = YTArray([1, 2, 3])
    a2 = np.array([4, 5, 6])
    a3 = [4, 5, 6]
    answer = YTArray([5, 7, 9])

    operate_and_compare(a1, a2, operator.add, answer)
    operate_and_compare(a2, a1, operator.add, answer)
    operate_and_compare(a1, a3, operator.add, answer)
    operate_and_compare(a3, a1, operator.add, answer)

    # Catch the different dimensions error
    a1 = YTArray([1, 2, 3], 'm')
    a2 = YTArray([4, 5, 6], 'kg')

    assert_raises(DimensionMismatchError, operator.add, a1, a2)
    assert_raises(DimensionMismatchError, operator.iadd, a1, a2)
    assert_raises(DimensionMismatchError, operator.add, a1, 1)


def test_subtraction():
    """
    Test subtraction of two YTArrays

    """
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = YTArray([4, 5, 6], 'm')
    answer1 = YTArray([-399, -498, -597], 'cm')
    answer2 = YTArray([3.99, 4.98, 5.97], 'm')

    operate_and_compare(a1, a2, operator.sub, answer1)
    operate_and_compare(a2, a1, operator.sub, answer2)
    operate_and_compare(a1, a2, np.subtract, answer1)

    # (a + b) - b recovers a, in the units of a
    operate_and_compare(a1 + a2, a2, operator.sub, a1)

    assert_raises(DimensionMismatchError, operator.sub, a1,
                  YTArray([1, 2, 3], 'g'))


def test_multiplication():
    """
    Test multiplication of two YTArrays

    """

    # Same units
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = YTArray([4, 5, 6], 'cm')
    answer = YTArray([4, 10, 18], 'cm**2')

    operate_and_compare(a1, a2, operator.mul, answer)
    operate_and_compare(a2, a1, operator.mul, answer)
    operate_and_compare(a1, a2, np.multiply, answer)

    # different units, same dimension
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = YTArray([4, 5, 6], 'm')
    answer1 = YTArray([400, 1000, 1800], 'cm**2')
    answer2 = YTArray([.04, .10, .18], 'm**2')

    operate_and_compare(a1, a2, operator.mul, answer1)
    operate_and_compare(a2, a1, operator.mul, answer2)

    # different dimensions
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = YTArray([4, 5, 6], 'g')
    answer = YTArray([4, 10, 18], 'cm*g')

    operate_and_compare(a1, a2, operator.mul, answer)
    operate_and_compare(a2, a1, operator.mul, answer)

    # One dimensionless, one unitful
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = np.array([4, 5, 6])
    answer = YTArray([4, 10, 18], 'cm')

    operate_and_compare(a1, a2, operator.mul, answer)
    operate_and_compare(a2, a1, operator.mul, answer)

    # Unit symbols attach units to plain numbers
    operate_and_compare(np.array([4, 5, 6]), cm, operator.mul,
                        YTArray([4, 5, 6], 'cm'))
    assert isinstance(4*g, YTQuantity)
    assert_equal(4*g, YTQuantity(4, 'g'))


def test_division():
    """
    Test division of two YTArrays

    """

    # Same units
    a1 = YTArray([1., 2., 3.], 'cm')
    a2 = YTArray([4., 5., 6.], 'cm')
    answer = YTArray([0.25, 0.4, 0.5])

    operate_and_compare(a1, a2, operator.truediv, answer)
    operate_and_compare(a1, a2, np.divide, answer)

    # different units, same dimension
    a1 = YTArray([1., 2., 3.], 'cm')
    a2 = YTArray([4., 5., 6.], 'm')
    answer1 = YTArray([.0025, .004, .005])
    answer2 = YTArray([400, 250, 200])

    operate_and_compare(a1, a2, operator.truediv, answer1)
    operate_and_compare(a2, a1, operator.truediv, answer2)

    # different dimensions
    a1 = YTArray([1., 2., 3.], 'cm')
    a2 = YTArray([4., 5., 6.], 'g')
    answer1 = YTArray([0.25, 0.4, 0.5], 'cm/g')
    answer2 = YTArray([4, 2.5, 2], 'g/cm')

    operate_and_compare(a1, a2, operator.truediv, answer1)
    operate_and_compare(a2, a1, operator.truediv, answer2)

    # One dimensionless, one unitful
    a1 = YTArray([1., 2., 3.], 'cm')
    a2 = np.array([4., 5., 6.])
    answer1 = YTArray([0.25, 0.4, 0.5], 'cm')
    answer2 = YTArray([4, 2.5, 2], '1/cm')

    operate_and_compare(a1, a2, operator.truediv, answer1)
    operate_and_compare(a2, a1, operator.truediv, answer2)


def test_dimensionless_collapse():
    q = YTQuantity(1, "km") / YTQuantity(1, "m")
    assert q.units.is_dimensionless
    assert q.units.expr.is_one
    assert_almost_equal(q.v, 1000.0)

    # mixed units with cancelling dimensions fold into the value
    q = YTQuantity(2, "cm") * YTQuantity(3, "1/m")
    assert q.units.expr.is_one
    assert_almost_equal(q.v, 0.06)

    # multiplying by a dimensionless value leaves the unit alone
    r = q * YTQuantity(5, "g")
    assert r.units == Unit("g")
    assert str(r.units) == "g"


def test_power():
    """
    Test power operator ensure units are correct.

    """

    from ytunits.units import dimensions

    cm_arr = YTArray([1, 2, 3], 'cm')

    assert_equal(cm_arr**3, YTArray([1, 8, 27], 'cm**3'))
    assert_equal((cm_arr**3).units.dimensions, dimensions.length**3)
    assert_equal((cm_arr**0.5).units, Unit('cm**0.5'))
    assert_equal(cm_arr**YTQuantity(2), YTArray([1, 4, 9], 'cm**2'))

    assert_raises(DimensionMismatchError, operator.pow, cm_arr,
                  YTQuantity(2, 'g'))
    assert_raises(InvalidUnitOperation, operator.pow, cm_arr,
                  np.array([1, 2, 3]))

    # sqrt of a quantity halves its powers
    assert np.sqrt(YTQuantity(4, "cm**2")) == YTQuantity(2, "cm")
    assert_equal(np.sqrt(YTQuantity(4, "cm**2")).units, Unit("cm"))


def test_comparisons():
    """
    Test numpy ufunc comparison operators for unit consistency.

    """
    a1 = YTArray([1, 2, 3], 'cm')
    a2 = YTArray([2, 1, 3], 'cm')
    a3 = YTArray([.02, .01, .03], 'm')
    dimless = np.array([2, 1, 3])

    ops = (
        np.less,
        np.less_equal,
        np.greater,
        np.greater_equal,
        np.equal,
        np.not_equal
    )

    answers = (
        [True, False, False],
        [True, False, True],
        [False, True, False],
        [False, True, True],
        [False, False, True],
        [True, True, False],
    )

    for op, answer in zip(ops, answers):
        assert_array_equal(op(a1, a2), answer)
        assert_array_equal(op(a1, a3), answer)
        # plain numbers are compared in the unit of the array
        assert_array_equal(op(a1, dimless), answer)
        assert not isinstance(op(a1, a2), YTArray)

    assert_raises(DimensionMismatchError, np.less, a1,
                  YTArray([1, 2, 3], 'g'))

    assert YTQuantity(1, 'm') == YTQuantity(100, 'cm')
    assert YTQuantity(1, 'm') > YTQuantity(99, 'cm')

    # plain numbers are pure numbers next to dimensionless units, as in
    # arithmetic
    ratio = YTQuantity(100, 'cm/m')
    assert ratio == 1
    assert 1 == ratio
    assert ratio < 2
    assert ratio + 1 == 2
    assert_array_equal(YTArray([50., 100.], 'cm/m') >= 1, [False, True])


def test_unit_conversions():
    """
    Test operations that convert to different units or cast to ndarray

    """
    km = YTQuantity(1, 'km')
    km_in_cm = km.in_units('cm')
    assert_equal(km_in_cm.units, Unit('cm'))
    assert_almost_equal(km_in_cm.v, 1e5)
    assert_equal(km.in_cgs().units, Unit('cm'))
    assert_equal(km.in_mks().v, 1e3)
    assert_equal(km.in_base("mks").units, Unit('m'))
    assert_equal(km.to('m'), YTQuantity(1000, 'm'))

    arr = YTArray([1, 2, 3], 'km')
    assert_equal(arr.in_units('m').v, [1000, 2000, 3000])
    assert_equal(arr.in_units(arr.units), arr)

    ret = arr.convert_to_units('m')
    assert ret is arr
    assert_equal(arr.v, [1000, 2000, 3000])
    assert_equal(arr.units, Unit('m'))

    arr.convert_to_cgs()
    assert_equal(arr.units, Unit('cm'))
    arr.convert_to_mks()
    assert_equal(arr.units, Unit('m'))
    arr.convert_to_base("galactic")
    assert_equal(arr.units, Unit('kpc'))

    assert_raises(IncommensurableUnitsError, arr.in_units, 'g')
    assert_raises(IncommensurableUnitsError, arr.convert_to_units, 's')

    # cgs has no current base unit
    assert_raises(MissingMKSCurrent, YTQuantity(1, 'A').in_cgs)
    assert_equal(YTQuantity(1, 'A').in_mks().units, Unit('A'))

    # Angles
    assert_almost_equal(np.sin(YTQuantity(90, 'degree')).v, 1.0)
    assert_almost_equal(np.cos(YTArray([0, 180], 'degree')).v, [1.0, -1.0])
    assert_almost_equal((180*degree).in_units('radian').v, np.pi)


def test_ytarray_ufuncs():
    a = YTArray([1., 4., 9.], 'cm**2')
    assert_equal(np.sqrt(a).units, Unit('cm'))
    assert_equal(np.square(YTArray([1, 2], 'g')).units, Unit('g**2'))
    assert_equal(np.reciprocal(YTArray([1., 2.], 's')).units, Unit('1/s'))
    assert_equal(np.negative(a).units, a.units)
    assert_equal(np.absolute(-a), a)
    assert_array_equal(np.isnan(a), [False, False, False])
    assert not isinstance(np.isnan(a), YTArray)

    # transcendental functions need dimensionless input
    assert_raises(InvalidUnitOperation, np.exp, a)
    assert_raises(InvalidUnitOperation, np.log10, a)
    assert_almost_equal(np.log10(YTArray([10., 100.])).v, [1, 2])
    assert_almost_equal(np.exp(YTQuantity(1, 'm') / YTQuantity(100, 'cm')).v,
                        np.e)

    # clip brings its bounds to the unit of the data
    clipped = np.clip(YTArray([1., 50., 300.], 'cm'), YTQuantity(0.1, 'm'),
                      YTQuantity(2, 'm'))
    assert_equal(clipped, YTArray([10, 50, 200], 'cm'))


def test_reductions():
    a = YTArray([3., 1., 2.], 'g')
    assert isinstance(a.sum(), YTQuantity)
    assert_equal(a.sum(), YTQuantity(6, 'g'))
    assert_equal(a.max(), YTQuantity(3, 'g'))
    assert_equal(a.min(), YTQuantity(1, 'g'))
    assert_equal(a.mean(), YTQuantity(2, 'g'))
    assert_equal(a.ptp(), YTQuantity(2, 'g'))
    assert_equal(np.cumsum(a).units, Unit('g'))
    assert_equal(a.sum().units, Unit('g'))


def test_selecting():
    """
    Test slicing of two YTArrays

    """
    a = YTArray(np.arange(10), 'cm')
    a_slice = a[:3]
    a_fancy_index = a[[1, 1, 3, 5]]
    a_array_fancy_index = a[np.array([[1, 1], [3, 5]])]
    a_boolean_index = a[a > 5]
    a_selection = a[1]

    assert_array_equal(a_slice, YTArray([0, 1, 2], 'cm'))
    assert_equal(a_slice.units, a.units)
    assert_array_equal(a_fancy_index, YTArray([1, 1, 3, 5], 'cm'))
    assert_equal(a_fancy_index.units, a.units)
    assert_array_equal(a_array_fancy_index, YTArray([[1, 1, ], [3, 5]], 'cm'))
    assert_equal(a_array_fancy_index.units, a.units)
    assert_array_equal(a_boolean_index, YTArray([6, 7, 8, 9], 'cm'))
    assert_equal(a_boolean_index.units, a.units)
    assert isinstance(a_selection, YTQuantity)
    assert_equal(a_selection.units, a.units)

    # .base points to the original array for a numpy view.  If it is not a
    # view, .base is None.
    assert a_slice.base is a

    s = YTArray([10, 20, 30], 's')
    assert s[1] == YTQuantity(20, 's')
    assert_equal(s[0:2].v, [10, 20])
    assert_equal(s[-1], YTQuantity(30, 's'))


def test_setitem():
    a = YTArray([1., 2., 3.], 'cm')
    a[0] = YTQuantity(1, 'm')
    assert_equal(a.v, [100., 2., 3.])
    a[1:] = 7
    assert_equal(a.v, [100., 7., 7.])
    assert_raises(DimensionMismatchError, a.__setitem__, 0,
                  YTQuantity(1, 'g'))
    assert_raises(LengthMismatchError, a.__setitem__, slice(0, 2),
                  np.array([1., 2., 3.]))


def test_shape_mismatch():
    a = YTArray([1., 2., 3.], 'cm')
    b = YTArray([1., 2., 3., 4.], 'cm')
    assert_raises(LengthMismatchError, operator.add, a, b)
    assert_raises(LengthMismatchError, operator.mul, a, b)
    assert_raises(LengthMismatchError, operator.add, a,
                  YTArray([1.], 'cm'))
    assert_raises(LengthMismatchError, operator.sub,
                  YTArray(np.ones((2, 3)), 'cm'), a)
    assert_raises(LengthMismatchError, operator.lt, a, np.ones(2))
    # scalars still broadcast
    assert_equal((a + YTQuantity(1, 'cm')).v, [2., 3., 4.])
    assert_equal((a * 2).v, [2., 4., 6.])


def test_iteration():
    """
    Test that iterating over a YTArray returns a sequence of YTQuantity
    instances
    """
    a = np.arange(3)
    b = YTArray(np.arange(3), 'cm')
    for ia, ib, in zip(a, b):
        assert_equal(ia, ib.value)
        assert_equal(ib.units, b.units)


def test_fix_length():
    """
    Test fixing the length of an array. Used in spheres and other data objects
    """
    from ytunits.funcs import fix_length

    ds = fake_random_ds(16, length_unit=1.2)
    length = ds.quan(1.0, 'code_length')
    new_length = fix_length(length, ds=ds)
    assert_almost_equal(new_length.in_units("cm").v, 1.2)
    assert_equal(str(fix_length(0.5, ds).units), "code_length")
    assert_almost_equal(fix_length((1.2, 'cm'), ds).v, 1.0)
    assert_almost_equal(fix_length(YTQuantity(2.4, 'cm'), ds).v, 2.0)


def test_quantity():
    q = YTQuantity(3, 'cm')
    assert_equal(q.value, 3.0)
    assert isinstance(q.v, float)
    assert_equal(repr(q), '3.0 cm')
    assert_equal(str(q), '3.0 cm')
    assert_equal(f"{q:.2f}", '3.00 cm')

    assert_raises(RuntimeError, YTQuantity, 'a', 'cm')
    assert_raises(RuntimeError, YTQuantity, [1, 2], 'cm')
    assert_raises(TypeError, q.convert_to_units, 'm')
    with pytest.raises(TypeError):
        q[()] = 4

    # in-place operators return new quantities
    q2 = q
    q2 += YTQuantity(1, 'm')
    assert_equal(q, YTQuantity(3, 'cm'))
    assert_equal(q2, YTQuantity(103, 'cm'))

    q3 = q
    q3 *= 2
    assert_equal(q, YTQuantity(3, 'cm'))
    assert_equal(q3, YTQuantity(6, 'cm'))


def test_equivalencies():
    T = YTQuantity(1.0e7, 'K')
    E = T.to_equivalent('keV', 'thermal')
    assert_almost_equal(E.v, 0.8617, decimal=3)
    assert_equal(E.units, Unit('keV'))
    assert_almost_equal(T.in_units('keV', equivalence='thermal').v, E.v)
    assert_almost_equal(E.to_equivalent('K', 'thermal').v, 1.0e7, decimal=-1)

    assert T.has_equivalent('thermal')
    assert not T.has_equivalent('spectral')
    assert_raises(KeyError, T.has_equivalent, 'not_an_equivalence')
    assert_raises(YTInvalidUnitEquivalence, T.to_equivalent, 'cm', 'thermal')
    assert_raises(YTInvalidUnitEquivalence, T.to_equivalent, 'keV', 'nonexistent')


def test_pickle():
    ds = fake_random_ds(16)
    test_data = [
        ds.quan(12.0, 'code_length'),
        ds.arr([1, 2, 3], 'code_length'),
        YTQuantity(1.0, 'cm'),
        YTArray([1, 2, 3], 'g/cm**3'),
    ]
    for data in test_data:
        loaded = pickle.loads(pickle.dumps(data))
        assert_array_equal(data.v, loaded.v)
        assert_equal(data.units, loaded.units)
        assert_equal(data.units.base_value, loaded.units.base_value)
        assert_equal(data.units.dimensions, loaded.units.dimensions)


def test_copy():
    quan = YTQuantity(1, 'g')
    arr = YTArray([1, 2, 3], 'cm')

    assert_equal(copy.copy(quan), quan)
    assert_array_equal(copy.copy(arr), arr)

    assert_equal(copy.deepcopy(quan), quan)
    assert_array_equal(copy.deepcopy(arr), arr)

    assert_equal(quan.copy(), quan)
    assert_array_equal(arr.copy(), arr)
    assert_equal(arr.copy().units, arr.units)

    c = arr.copy()
    c[0] = YTQuantity(5, 'cm')
    assert_equal(arr[0], YTQuantity(1, 'cm'))


def test_external_buffers():
    buf = np.arange(4.0)
    a = YTArray.from_buffer(buf, 'g')
    assert a.is_external
    assert np.shares_memory(a, buf)
    assert_equal(a.units, Unit('g'))

    # external data is never written through
    assert buf.flags.writeable
    assert not a.flags.writeable
    assert_raises(ExternalBufferWriteError, a.convert_to_units, 'kg')
    assert_raises(ExternalBufferWriteError, a.__setitem__, 0, 1.)
    assert_array_equal(buf, np.arange(4.0))
    c = a.copy()
    assert not c.is_external
    c.convert_to_units('kg')
    assert_array_equal(a.v, np.arange(4.0))

    # views of an external array stay external
    assert a[1:].is_external

    owned = a.get_array()
    assert not isinstance(owned, YTArray)
    assert not np.shares_memory(owned, buf)
    assert_array_equal(owned, buf)

    b = YTArray([1., 2.], 'g')
    assert not b.is_external
    assert np.shares_memory(b.get_array(), b)

    # arithmetic results own their data
    assert not (a * 2).is_external

    raw = np.arange(3.0).tobytes()
    c = YTArray.from_buffer(raw, 'cm')
    assert_array_equal(c.v, [0., 1., 2.])
    assert c.is_external


def test_registry_rebinding():
    ds = fake_random_ds(16, length_unit=2.0)
    a = YTArray([1., 2.], 'cm')
    b = YTArray(a, registry=ds.unit_registry)
    assert b.units.registry is ds.unit_registry
    assert np.shares_memory(a, b)
    assert_almost_equal(b.in_units('code_length').v, [0.5, 1.0])


@requires_module("h5py")
def test_h5_io(temp_dir):
    ds = fake_random_ds(16)

    warr = ds.arr(np.random.random((256, 256)), 'code_length')

    warr.write_hdf5('test.h5')

    iarr = YTArray.from_hdf5('test.h5')

    assert_array_equal(warr.v, iarr.v)

    warr.write_hdf5('test.h5', dataset_name="test_dset", group_name='/arrays/test_group',
                    info={'field': 'dinosaurs'})

    giarr = YTArray.from_hdf5('test.h5', dataset_name="test_dset",
                              group_name='/arrays/test_group')

    assert_array_equal(warr.v, giarr.v)

    # write a dataset with the same name and a different shape
    YTArray([1., 2.], 'g').write_hdf5('test.h5')
    assert_equal(YTArray.from_hdf5('test.h5'), YTArray([1., 2.], 'g'))
