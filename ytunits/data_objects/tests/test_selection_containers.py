import numpy as np
import pytest
from numpy.testing import assert_almost_equal, assert_array_equal, assert_equal

from ytunits.loaders import load_uniform_grid
from ytunits.testing import fake_random_ds
from ytunits.units.unit_symbols import cm
from ytunits.units.yt_array import YTArray, YTQuantity
from ytunits.utilities.exceptions import (
    YTDataSelectorNotImplemented,
    YTSphereTooSmall,
)


def _positions(ds):
    ad = ds.all_data()
    return np.array([ad["index", ax].d for ax in "xyz"])


def test_all_data():
    ds = fake_random_ds(16)
    ad = ds.all_data()
    assert ad["gas", "density"].size == 16**3
    assert_array_equal(ad.left_edge.d, [0.0, 0.0, 0.0])
    assert_array_equal(ad.right_edge.d, [1.0, 1.0, 1.0])
    assert_equal(ad.selector.size, 16**3)


def test_point():
    ds = fake_random_ds(16)
    p = ds.point([0.51, 0.52, 0.53])
    dens = p["gas", "density"]
    assert dens.shape == (1,)
    assert_almost_equal(p["index", "x"].d, [8.5 / 16])

    ad = ds.all_data()
    ind = np.ravel_multi_index((8, 8, 8), (16, 16, 16))
    assert_array_equal(dens.d, ad["gas", "density"].d[ind : ind + 1])

    # a point with units
    p = ds.point(YTArray([5.1, 5.2, 5.3], "mm"))
    assert_array_equal(p["gas", "density"].d, dens.d)

    # outside the domain nothing is selected
    p = ds.point([1.5, 0.5, 0.5])
    assert p["gas", "density"].size == 0


def test_region():
    ds = fake_random_ds(16)
    reg = ds.region([0.5] * 3, [0.25] * 3, [0.75] * 3)
    assert reg["gas", "density"].size == 8**3
    x = reg["index", "x"].d
    assert (x > 0.25).all() and (x < 0.75).all()

    # edges with units are converted to code length
    ds = fake_random_ds(16, length_unit=2)
    reg1 = ds.region([1, 1, 1] * cm, [0, 0, 0] * cm, [2, 2, 2] * cm)
    reg2 = ds.region([0.5] * 3, [0, 0, 0], [1, 1, 1])
    assert_array_equal(reg1["gas", "density"], reg2["gas", "density"])
    assert_array_equal(reg1._get_bbox()[1].in_units("cm").d, [2, 2, 2])


def test_sphere():
    ds = fake_random_ds(16)
    sp = ds.sphere([0.5, 0.5, 0.5], 0.25)
    pos = _positions(ds)
    r2 = ((pos - 0.5) ** 2).sum(axis=0)
    assert_equal(sp["gas", "density"].size, (r2 <= 0.25**2).sum())
    assert_array_equal(
        sp["gas", "density"].d, ds.all_data()["gas", "density"].d[r2 <= 0.25**2]
    )

    # radius given with units
    sp2 = ds.sphere([0.5, 0.5, 0.5], (2.5, "mm"))
    assert_equal(sp2["gas", "density"].size, sp["gas", "density"].size)
    sp3 = ds.sphere([0.5, 0.5, 0.5], YTQuantity(0.25, "cm"))
    assert_equal(sp3["gas", "density"].size, sp["gas", "density"].size)

    le, re = sp._get_bbox()
    assert_almost_equal(le.d, [0.25] * 3)
    assert_almost_equal(re.d, [0.75] * 3)

    with pytest.raises(YTSphereTooSmall):
        ds.sphere([0.5, 0.5, 0.5], 0.01)


def test_sphere_periodicity():
    ds = fake_random_ds(16)
    # a sphere centred on a corner wraps around every periodic axis
    sp = ds.sphere([0.0, 0.0, 0.0], 0.25)
    pos = _positions(ds)
    d = pos - np.round(pos)
    r2 = (d**2).sum(axis=0)
    assert_equal(sp["gas", "density"].size, (r2 <= 0.25**2).sum())
    x = sp["index", "x"].d
    assert (x < 0.25).any() and (x > 0.75).any()

    dens = np.random.random((16, 16, 16))
    ds = load_uniform_grid(
        {"density": dens}, dens.shape, periodicity=(False, False, False)
    )
    sp = ds.sphere([0.0, 0.0, 0.0], 0.25)
    r2 = (pos**2).sum(axis=0)
    assert_equal(sp["gas", "density"].size, (r2 <= 0.25**2).sum())


def test_disk():
    ds = fake_random_ds(16)
    disk = ds.disk([0.5, 0.5, 0.5], [0, 0, 2], 0.25, 0.1)
    assert_array_equal(disk._norm_vec, [0, 0, 1])
    pos = _positions(ds) - 0.5
    inside = (np.abs(pos[2]) <= 0.1) & (pos[0] ** 2 + pos[1] ** 2 <= 0.25**2)
    assert_equal(disk["gas", "density"].size, inside.sum())
    z = np.unique(disk["index", "z"].d)
    assert_equal(z.size, 4)

    # tilted disks are selected in their own frame
    disk = ds.disk([0.5, 0.5, 0.5], [1, 1, 0], (2.5, "mm"), (1.0, "mm"))
    n = np.array([1.0, 1.0, 0.0]) / np.sqrt(2)
    h = np.tensordot(n, pos, axes=1)
    r = pos - np.outer(n, h)
    inside = (np.abs(h) <= 0.1) & ((r * r).sum(axis=0) <= 0.25**2)
    assert_equal(disk["gas", "density"].size, inside.sum())
    assert_almost_equal(disk.get_field_parameter("height").v, 0.1)


def test_slice():
    ds = fake_random_ds(16)
    for axis in range(3):
        slc = ds.slice(axis, 0.5)
        assert_equal(slc["gas", "density"].size, 16 * 16)
        coords = slc["index", "xyz"[axis]].d
        assert_almost_equal(coords, np.full(256, 8.5 / 16))
        assert slc.axis == axis
    slc = ds.slice("z", (3.0, "mm"))
    assert slc.axis == 2
    assert_almost_equal(slc.coord.v, 0.3)
    assert_almost_equal(np.unique(slc["index", "z"].d), [4.5 / 16])

    with pytest.raises(TypeError):
        ds.slice(4, 0.5)


def test_ortho_ray():
    ds = fake_random_ds(16)
    for axis in range(3):
        ray = ds.ortho_ray(axis, (0.3, 0.6))
        assert_equal(ray["gas", "density"].size, 16)
        px_ax = ds.x_axis[axis]
        py_ax = ds.y_axis[axis]
        assert_almost_equal(np.unique(ray["index", "xyz"[px_ax]].d), [4.5 / 16])
        assert_almost_equal(np.unique(ray["index", "xyz"[py_ax]].d), [9.5 / 16])

    ray = ds.ortho_ray("x", (YTQuantity(3, "mm"), YTQuantity(6, "mm")))
    assert_almost_equal(ray.coords[0].v, 0.3)
    assert str(ray.coords[1].units) == "code_length"
    assert ray._dimensionality == 1


def test_cut_region():
    ds = fake_random_ds(16)
    ad = ds.all_data()
    dens = ad["gas", "density"].d

    cr = ad.cut_region(["obj[('gas', 'density')] > 0.5"])
    assert_equal(cr["gas", "density"].size, (dens > 0.5).sum())
    assert (cr["gas", "density"].d > 0.5).all()

    # conditions can be chained, and refer to local variables
    cr2 = cr.cut_region(["obj[('gas', 'density')] < limit"], locals={"limit": 0.75})
    assert cr2.conditionals == [
        "obj[('gas', 'density')] > 0.5",
        "obj[('gas', 'density')] < limit",
    ]
    assert cr2.base_object is ad
    assert_equal(cr2["gas", "density"].size, ((dens > 0.5) & (dens < 0.75)).sum())

    # multiple conditions on a nested container
    sp = ds.sphere([0.5] * 3, 0.3)
    cr3 = ds.cut_region(
        sp,
        [
            "obj[('gas', 'velocity_x')] > obj.ds.quan(0.5, 'cm/s')",
            "obj[('gas', 'density')] < 0.5",
        ],
    )
    vx = sp["gas", "velocity_x"].d
    sdens = sp["gas", "density"].d
    assert_equal(cr3["gas", "density"].size, ((vx > 0.5) & (sdens < 0.5)).sum())
    assert_array_equal(cr3.center.d, sp.center.d)

    bad = ad.cut_region(["obj[('gas', 'density')] > 0.5"], locals={"obj": 1})
    with pytest.raises(RuntimeError):
        bad["gas", "density"]
    with pytest.raises(TypeError):
        ad.cut_region([1])


def test_nested_data_sources():
    ds = fake_random_ds(16)
    reg = ds.region([0.5] * 3, [0.0] * 3, [0.5, 1.0, 1.0])
    sp = ds.sphere([0.5] * 3, 0.3, data_source=reg)
    pos = _positions(ds)
    r2 = ((pos - 0.5) ** 2).sum(axis=0)
    inside = (r2 <= 0.3**2) & (pos[0] < 0.5)
    assert_equal(sp["gas", "density"].size, inside.sum())

    slc = ds.slice(2, 0.5, data_source=sp)
    assert slc["gas", "density"].size <= 256

    other = fake_random_ds(16)
    with pytest.raises(RuntimeError):
        ds.sphere([0.5] * 3, 0.3, data_source=other.all_data())
    with pytest.raises(RuntimeError):
        ds.sphere([0.5] * 3, 0.3, data_source=ds.slice(0, 0.5))


def test_unsupported_selectors():
    ds = fake_random_ds(16)

    ray = ds.ray([0.1, 0.2, 0.3], [0.9, 0.8, 0.7])
    assert_almost_equal(ray.vec.d, [0.8, 0.6, 0.4])
    assert_almost_equal(ray.center.d, [0.1, 0.2, 0.3])
    with pytest.raises(YTDataSelectorNotImplemented):
        ray["gas", "density"]

    cut = ds.cutting([0, 0, 2], [0.5, 0.5, 0.5])
    assert_array_equal(cut.normal, [0, 0, 1])
    assert_almost_equal(cut._d, -0.5)
    with pytest.raises(YTDataSelectorNotImplemented):
        cut["gas", "density"]

    assert not ds.engine.supports_selection("ray")
    assert ds.engine.supports_selection("sphere")


def test_cutting_plane_vectors():
    ds = fake_random_ds(16)
    cut = ds.cutting([1, 1, 1], [0.5, 0.5, 0.5])
    vecs = np.array([cut._x_vec, cut._y_vec, cut._norm_vec])
    assert_almost_equal(vecs @ vecs.T, np.eye(3))
    assert_almost_equal(np.cross(cut._x_vec, cut._y_vec), cut._norm_vec)
    assert cut.axis == 4

    cut = ds.cutting([0, 0, 1], [0.5, 0.5, 0.5], north_vector=[0, 1, 0])
    assert_almost_equal(cut._y_vec, [0, 1, 0])
    assert_almost_equal(cut._x_vec, [1, 0, 0])
    assert_array_equal(cut.get_field_parameter("cp_z_vec"), [0, 0, 1])

    with pytest.raises(ValueError):
        ds.cutting([0, 0, 1], [0.5, 0.5, 0.5], north_vector=[0, 0, 3])


def test_projection():
    ds = fake_random_ds(16)
    prj = ds.proj(("gas", "density"), 0)
    assert prj.field == [("gas", "density")]
    assert prj.weight_field is None
    assert prj.method == "integrate"
    prj = ds.proj("density", "z", weight_field="density", method="max")
    assert prj.weight_field == ("gas", "density")
    assert prj.axis == 2
    with pytest.raises(YTDataSelectorNotImplemented):
        prj["gas", "density"]

    with pytest.raises(NotImplementedError):
        ds.proj(("gas", "density"), 0, method="median")


def test_covering_grid():
    ds = fake_random_ds(16)
    cg = ds.covering_grid(0, [0.0, 0.0, 0.0], [16, 16, 16])
    assert cg.shape == (16, 16, 16)
    assert_almost_equal(cg.dds.d, [1.0 / 16] * 3)
    assert_almost_equal(cg.right_edge.d, [1.0] * 3)
    assert_array_equal(cg.get_global_startindex(), [0, 0, 0])
    with pytest.raises(YTDataSelectorNotImplemented):
        cg["gas", "density"]

    cg = ds.covering_grid(1, YTArray([2.5, 2.5, 2.5], "mm"), 8)
    assert_almost_equal(cg.left_edge.d, [0.25] * 3)
    assert_almost_equal(cg.dds.d, [1.0 / 32] * 3)
    assert_array_equal(cg.ActiveDimensions, [8, 8, 8])
    assert_array_equal(cg.get_global_startindex(), [8, 8, 8])
    assert_almost_equal(cg.right_edge.d, [0.5] * 3)

    with pytest.raises(RuntimeError):
        ds.covering_grid(0, [0.0, 0.0], [16, 16, 16])
    with pytest.raises(RuntimeError):
        ds.covering_grid(0, [0.0, 0.0, 0.0], [16, 16])
    with pytest.raises(YTDataSelectorNotImplemented):
        ds.covering_grid(0, [0.0] * 3, [16] * 3, fields=[("gas", "density")])
