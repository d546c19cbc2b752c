import numpy as np

from ytunits.engine import NativeAnalysisEngine
from ytunits.frontends.stream.data_structures import StreamHandler
from ytunits.frontends.stream.definitions import uniform_grid_handler
from ytunits.frontends.stream.fields import index_fields
from ytunits.utilities.exceptions import YTException, YTFieldNotFound
from ytunits.utilities.logger import ytLogger as mylog

_index_field_units = dict(index_fields)

# in-plane axes of a slice or ray along the key axis
x_axis = {0: 1, 1: 2, 2: 0}
y_axis = {0: 2, 1: 0, 2: 1}


class StreamSelection:
    """
    The cells of a StreamHandler picked out by a data container. ``mask`` is
    a boolean array over the flattened grid, or None for every cell.
    """

    def __init__(self, handle, type_name, mask=None):
        self.handle = handle
        self.type_name = type_name
        self.mask = mask

    @property
    def size(self):
        if self.mask is None:
            return self.handle.num_cells
        return int(self.mask.sum())

    def __repr__(self):
        return f"StreamSelection({self.type_name}, {self.size} cells)"


class StreamEngine(NativeAnalysisEngine):
    """
    An engine over uniform grids of numpy data held in memory.
    """

    _engine_name = "stream"
    _selection_types = (
        "all_data",
        "point",
        "region",
        "sphere",
        "disk",
        "slice",
        "ortho_ray",
        "cut_region",
    )
    _derived_quantities = (
        "extrema",
        "min_location",
        "max_location",
        "total_quantity",
        "weighted_average_quantity",
    )

    def load(self, filename, **kwargs):
        """
        Return a handle for in-memory data. *filename* may already be a
        StreamHandler, a dict of field arrays, or the path of an ``.npz``
        file whose arrays are the fields. Remaining keyword arguments are
        those of :func:`ytunits.loaders.load_uniform_grid`.
        """
        if isinstance(filename, StreamHandler):
            return filename
        if isinstance(filename, dict):
            data = filename
        else:
            with np.load(filename) as npz:
                data = {key: npz[key] for key in npz.files}
            mylog.debug("Read %s fields from %s", len(data), filename)
        domain_dimensions = kwargs.pop("domain_dimensions", None)
        if domain_dimensions is None:
            first = next(iter(data.values()))
            if isinstance(first, tuple):
                first = first[0]
            domain_dimensions = np.shape(first)
        return uniform_grid_handler(data, domain_dimensions, **kwargs)

    def get_parameters(self, handle):
        length_unit, mass_unit, time_unit, velocity_unit, magnetic_unit = (
            handle.code_units
        )
        return {
            "length_unit": length_unit,
            "mass_unit": mass_unit,
            "time_unit": time_unit,
            "velocity_unit": velocity_unit,
            "magnetic_unit": magnetic_unit,
            "temperature_unit": None,
            "domain_left_edge": handle.domain_left_edge.copy(),
            "domain_right_edge": handle.domain_right_edge.copy(),
            "domain_dimensions": handle.domain_dimensions.copy(),
            "dimensionality": handle.dimensionality,
            "periodicity": handle.periodicity,
            "current_time": handle.simulation_time,
            "current_redshift": 0.0,
            "max_level": 0,
            "parameters": handle.parameters.copy(),
        }

    def field_list(self, handle):
        return sorted(handle.get_fields())

    def derived_field_list(self, handle):
        fields = set(handle.get_fields())
        fields.update(("gas", fname) for _, fname in handle.get_fields())
        fields.update(("index", fname) for fname in _index_field_units)
        if self._density_field(handle) is not None:
            fields.add(("gas", "cell_mass"))
        return sorted(fields)

    def _density_field(self, handle):
        for field in handle.get_fields():
            if field[1] == "density":
                return field
        return None

    def _resolve_field(self, handle, field):
        if isinstance(field, str):
            candidates = [("stream", field), ("gas", field), ("index", field)]
        else:
            candidates = [tuple(field)]
        for ftype, fname in candidates:
            if (ftype, fname) in handle.fields:
                return "data", (ftype, fname)
            if ftype == "gas":
                for stored in handle.get_fields():
                    if stored[1] == fname:
                        return "data", stored
                if fname == "cell_mass" and self._density_field(handle):
                    return "cell_mass", ("gas", fname)
            if ftype == "index" and fname in _index_field_units:
                return "index", (ftype, fname)
        raise YTFieldNotFound(field, handle)

    def _full_field(self, handle, field):
        kind, field = self._resolve_field(handle, field)
        if kind == "data":
            return handle.fields[field].reshape(-1), handle.get_field_units(field)
        if kind == "cell_mass":
            density, units = self._full_field(handle, self._density_field(handle))
            volume, _ = self._full_field(handle, ("index", "cell_volume"))
            if units == "":
                return density * volume, "code_length**3"
            return density * volume, f"({units})*code_length**3"
        fname = field[1]
        if fname in ("x", "y", "z"):
            values = handle.cell_centers()["xyz".index(fname)]
        elif fname in ("dx", "dy", "dz"):
            values = handle.cell_widths()["xyz".index(fname[1])]
        else:
            values = np.full(handle.num_cells, np.prod(handle.dds))
        return values, _index_field_units[fname]

    def fetch_field(self, selection, field):
        values, units = self._full_field(selection.handle, field)
        if selection.mask is not None:
            values = values[selection.mask]
        mylog.debug(
            "Fetched %s over %s cells of %s",
            field,
            values.size,
            selection.handle,
        )
        return values, units

    #
    # Selections
    #

    def create_selection(
        self, handle, type_name, args, field_parameters=None, data_source=None
    ):
        self._check_selection_type(type_name)
        selector = getattr(self, f"_select_{type_name}")
        if type_name == "cut_region":
            if data_source is None:
                raise YTException("A cut region requires a data source.")
            mask = selector(handle, data_source, *args)
        else:
            mask = selector(handle, *args)
            if data_source is not None and data_source.mask is not None:
                mask = data_source.mask if mask is None else mask & data_source.mask
        return StreamSelection(handle, type_name, mask)

    def _distances(self, handle, center):
        # vectors from center to every cell centre, nearest image on periodic axes
        positions = handle.cell_centers()
        width = handle.domain_width
        d = []
        for i in range(3):
            di = positions[i] - center[i]
            if handle.periodicity[i]:
                di = di - width[i] * np.round(di / width[i])
            d.append(di)
        return np.array(d)

    def _select_all_data(self, handle):
        return None

    def _select_point(self, handle, point):
        point = np.asarray(point, dtype="float64")
        mask = np.zeros(handle.num_cells, dtype="bool")
        ind = np.floor((point - handle.domain_left_edge) / handle.dds).astype("int64")
        if np.any(ind < 0) or np.any(ind >= handle.domain_dimensions):
            return mask
        mask[np.ravel_multi_index(tuple(ind), tuple(handle.domain_dimensions))] = True
        return mask

    def _select_region(self, handle, center, left_edge, right_edge):
        positions = handle.cell_centers()
        mask = np.ones(handle.num_cells, dtype="bool")
        for i in range(3):
            mask &= (positions[i] >= left_edge[i]) & (positions[i] < right_edge[i])
        return mask

    def _select_sphere(self, handle, center, radius):
        d = self._distances(handle, center)
        return (d * d).sum(axis=0) <= radius * radius

    def _select_disk(self, handle, center, normal, radius, height):
        normal = np.asarray(normal, dtype="float64")
        normal = normal / np.sqrt((normal * normal).sum())
        d = self._distances(handle, center)
        h = np.tensordot(normal, d, axes=1)
        r = d - np.outer(normal, h)
        return (np.abs(h) <= height) & ((r * r).sum(axis=0) <= radius * radius)

    def _contains(self, handle, axis, coord):
        positions = handle.cell_centers()[axis]
        half = 0.5 * handle.dds[axis]
        return (positions - half <= coord) & (coord < positions + half)

    def _select_slice(self, handle, axis, coord):
        return self._contains(handle, axis, coord)

    def _select_ortho_ray(self, handle, axis, coords):
        px, py = coords
        return self._contains(handle, x_axis[axis], px) & self._contains(
            handle, y_axis[axis], py
        )

    def _select_cut_region(self, handle, data_source, conditions):
        # conditions holds one boolean per cell of the data source
        conditions = np.asarray(conditions, dtype="bool")
        if data_source.mask is None:
            source = np.ones(handle.num_cells, dtype="bool")
        else:
            source = data_source.mask.copy()
        if conditions.size != source.sum():
            raise YTException(
                f"Cut region conditions select from {conditions.size} cells, "
                f"but the data source holds {int(source.sum())}."
            )
        source[source] = conditions
        return source

    #
    # Derived quantities
    #

    def compute_derived(self, selection, name, *args, **kwargs):
        self._check_derived_quantity(name)
        return getattr(self, f"_quantity_{name}")(selection, *args, **kwargs)

    def _quantity_extrema(self, selection, field, non_zero=False):
        values, units = self.fetch_field(selection, field)
        if non_zero:
            values = values[values > 0]
        if values.size == 0:
            return [(np.nan, units), (np.nan, units)]
        return [(values.min(), units), (values.max(), units)]

    def _sample_location(self, selection, field, func):
        values, units = self.fetch_field(selection, field)
        if values.size == 0:
            return [(np.nan, units)] + [
                (np.nan, _index_field_units[ax]) for ax in "xyz"
            ]
        ind = func(values)
        rv = [(values[ind], units)]
        for ax in "xyz":
            pos, pos_units = self.fetch_field(selection, ("index", ax))
            rv.append((pos[ind], pos_units))
        return rv

    def _quantity_max_location(self, selection, field):
        return self._sample_location(selection, field, np.argmax)

    def _quantity_min_location(self, selection, field):
        return self._sample_location(selection, field, np.argmin)

    def _quantity_total_quantity(self, selection, field):
        values, units = self.fetch_field(selection, field)
        return [(values.sum(dtype="float64"), units)]

    def _quantity_weighted_average_quantity(self, selection, field, weight):
        values, units = self.fetch_field(selection, field)
        w, _ = self.fetch_field(selection, weight)
        return [((values * w).sum() / w.sum(), units)]

    def get_smallest_dx(self, handle):
        return handle.dds.min(), "code_length"
