import numpy as np
import pytest
from numpy.testing import assert_array_equal, assert_equal

from ytunits.frontends.stream.api import (
    StreamEngine,
    StreamHandler,
    StreamSelection,
    process_data,
    uniform_grid_handler,
)
from ytunits.units.yt_array import YTArray
from ytunits.utilities.exceptions import (
    YTDataSelectorNotImplemented,
    YTException,
    YTFieldNotFound,
    YTInconsistentGridFieldShapeGridDims,
)


def _handler(**kwargs):
    prng = np.random.RandomState(0x4D3D3D3)
    data = {
        "density": prng.random_sample((8, 8, 8)),
        "temperature": (prng.random_sample((8, 8, 8)), "K"),
    }
    return uniform_grid_handler(data, (8, 8, 8), **kwargs)


def test_process_data():
    arr = np.ones((4, 4, 4))
    field_units, data = process_data(
        {
            "density": arr,
            "velocity_x": YTArray(arr, "km/s"),
            "temperature": (arr, "K"),
            ("gas", "pressure"): (arr, "dyne/cm**2"),
            "metallicity": arr.tolist(),
        },
        grid_dims=(4, 4, 4),
    )
    assert set(data) == {
        ("stream", "density"),
        ("stream", "velocity_x"),
        ("stream", "temperature"),
        ("gas", "pressure"),
        ("stream", "metallicity"),
    }
    assert field_units["stream", "density"] == ""
    assert field_units["stream", "velocity_x"] == "km/s"
    assert field_units["stream", "temperature"] == "K"
    assert field_units["gas", "pressure"] == "dyne/cm**2"
    assert isinstance(data["stream", "metallicity"], np.ndarray)
    # plain and unit-bearing arrays are copied
    assert not isinstance(data["stream", "velocity_x"], YTArray)
    assert not np.shares_memory(data["stream", "density"], arr)
    assert not np.shares_memory(data["stream", "temperature"], arr)
    assert not np.shares_memory(data["gas", "pressure"], arr)


@pytest.mark.parametrize(
    "data",
    [
        {1: (np.ones(3), "cm")},
        {"density": ([1.0, 2.0, 3.0], "g/cm**3")},
        {"density": (np.ones(3), 1)},
        {"density": 1.0},
    ],
)
def test_process_data_invalid(data):
    with pytest.raises(RuntimeError):
        process_data(data)


def test_inconsistent_shapes():
    data = {"density": np.ones((8, 8, 8)), "temperature": np.ones((8, 8, 4))}
    with pytest.raises(YTInconsistentGridFieldShapeGridDims) as err:
        uniform_grid_handler(data, (8, 8, 8))
    assert "(8, 8, 4)" in str(err.value)


def test_handler_geometry():
    bbox = np.array([[0.0, 1.0], [-1.5, 1.5], [1.0, 2.5]])
    handle = _handler(bbox=bbox, periodicity=(True, False, False))
    assert isinstance(handle, StreamHandler)
    assert_array_equal(handle.domain_left_edge, [0.0, -1.5, 1.0])
    assert_array_equal(handle.domain_right_edge, [1.0, 1.5, 2.5])
    assert_array_equal(handle.dds, [0.125, 0.375, 0.1875])
    assert handle.num_cells == 512
    assert handle.dimensionality == 3
    assert handle.periodicity == (True, False, False)
    x, y, z = handle.cell_centers()
    assert_equal(x.size, 512)
    assert_equal(x.min(), 0.0625)
    assert_equal(y.max(), 1.5 - 0.1875)
    assert repr(handle) == "UniformGridData"

    flat = uniform_grid_handler({"density": np.ones((8, 8, 1))}, (8, 8, 1))
    assert flat.dimensionality == 2
    line = uniform_grid_handler({"density": np.ones((8, 1, 1))}, (8, 1, 1))
    assert line.dimensionality == 1


def test_field_units():
    handle = _handler()
    assert handle.get_field_units(("stream", "density")) == "code_mass/code_length**3"
    assert handle.get_field_units(("stream", "temperature")) == "K"
    handle = uniform_grid_handler({"random": np.ones((2, 2, 2))}, (2, 2, 2))
    assert handle.get_field_units(("stream", "random")) == ""


def test_code_units():
    handle = _handler(
        length_unit=(1.0, "kpc"),
        mass_unit=YTArray(2.0, "Msun"),
        time_unit=3.0,
        magnetic_unit="T",
    )
    length, mass, time, velocity, magnetic = handle.code_units
    assert length == (1.0, "kpc")
    assert mass == (2.0, "Msun")
    assert time == (3.0, "s")
    assert velocity is None
    assert magnetic == (1.0, "T")
    with pytest.raises(RuntimeError):
        _handler(length_unit=[1.0, 2.0, 3.0])


def test_engine_parameters():
    engine = StreamEngine()
    handle = _handler(sim_time=2.5, parameters={"gamma": 5.0 / 3.0})
    params = engine.get_parameters(handle)
    assert params["current_time"] == 2.5
    assert params["parameters"] == {"gamma": 5.0 / 3.0}
    assert params["length_unit"] == (1.0, "cm")
    assert params["max_level"] == 0
    assert_array_equal(params["domain_dimensions"], [8, 8, 8])

    assert engine.field_list(handle) == [
        ("stream", "density"),
        ("stream", "temperature"),
    ]
    derived = engine.derived_field_list(handle)
    assert ("gas", "density") in derived
    assert ("gas", "cell_mass") in derived
    assert ("index", "cell_volume") in derived
    value, units = engine.get_smallest_dx(handle)
    assert value == 0.125
    assert units == "code_length"


def test_selections():
    engine = StreamEngine()
    handle = _handler()
    assert engine.supports_selection("sphere")
    assert not engine.supports_selection("proj")

    ad = engine.create_selection(handle, "all_data", ())
    assert isinstance(ad, StreamSelection)
    assert ad.mask is None
    assert ad.size == 512
    assert repr(ad) == "StreamSelection(all_data, 512 cells)"

    sp = engine.create_selection(handle, "sphere", ([0.5, 0.5, 0.5], 0.25))
    assert sp.size == sp.mask.sum()
    values, units = engine.fetch_field(sp, ("stream", "density"))
    assert values.size == sp.size
    assert units == "code_mass/code_length**3"

    # nesting intersects the masks
    reg = engine.create_selection(
        handle, "region", ([0.5] * 3, [0.0] * 3, [0.5, 1.0, 1.0])
    )
    nested = engine.create_selection(
        handle, "sphere", ([0.5, 0.5, 0.5], 0.25), data_source=reg
    )
    assert_array_equal(nested.mask, sp.mask & reg.mask)

    with pytest.raises(YTDataSelectorNotImplemented):
        engine.create_selection(handle, "proj", (0, (), None, "integrate"))
    with pytest.raises(YTException):
        engine.create_selection(handle, "cut_region", (np.ones(512, "bool"),))
    with pytest.raises(YTException):
        engine.create_selection(
            handle, "cut_region", (np.ones(10, "bool"),), data_source=ad
        )
    with pytest.raises(YTFieldNotFound):
        engine.fetch_field(ad, ("stream", "pressure"))


def test_periodic_sphere():
    engine = StreamEngine()
    handle = _handler()
    sp = engine.create_selection(handle, "sphere", ([0.0, 0.0, 0.0], 0.2))
    x, y, z = (c[sp.mask] for c in handle.cell_centers())
    # the eight corner cells of the domain all wrap into the sphere
    assert sp.size == 8
    assert_array_equal(np.unique(x), [0.0625, 0.9375])

    handle = _handler(periodicity=(False, False, False))
    sp = engine.create_selection(handle, "sphere", ([0.0, 0.0, 0.0], 0.2))
    assert sp.size == 1


def test_derived_quantities():
    engine = StreamEngine()
    handle = _handler()
    ad = engine.create_selection(handle, "all_data", ())
    dens = handle.fields["stream", "density"].ravel()
    (mi, _), (ma, _) = engine.compute_derived(ad, "extrema", ("stream", "density"))
    assert (mi, ma) == (dens.min(), dens.max())
    ((total, units),) = engine.compute_derived(
        ad, "total_quantity", ("gas", "cell_mass")
    )
    assert units == "(code_mass/code_length**3)*code_length**3"
    assert np.isclose(total, dens.sum() / 512)
