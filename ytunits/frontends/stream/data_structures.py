import numpy as np

from ytunits.frontends.stream.fields import known_field_units


class StreamHandler:
    """
    Holds a uniform grid of in-memory data and everything needed to describe
    it: field arrays and units, domain geometry and the code units the data
    are expressed in.
    """

    name = "UniformGridData"

    def __init__(
        self,
        domain_left_edge,
        domain_right_edge,
        domain_dimensions,
        fields,
        field_units,
        code_units,
        simulation_time=0.0,
        periodicity=(True, True, True),
        parameters=None,
    ):
        self.domain_left_edge = np.array(domain_left_edge, dtype="float64")
        self.domain_right_edge = np.array(domain_right_edge, dtype="float64")
        self.domain_dimensions = np.array(domain_dimensions, dtype="int64")
        self.fields = fields
        self.field_units = field_units
        self.code_units = code_units
        self.simulation_time = simulation_time
        self.periodicity = tuple(bool(p) for p in periodicity)
        self.refine_by = 2
        if np.all(self.domain_dimensions[1:] == 1):
            self.dimensionality = 1
        elif self.domain_dimensions[2] == 1:
            self.dimensionality = 2
        else:
            self.dimensionality = 3
        if parameters is None:
            self.parameters = {}
        else:
            self.parameters = parameters.copy()
        self._cell_centers = None

    @property
    def domain_width(self):
        return self.domain_right_edge - self.domain_left_edge

    @property
    def dds(self):
        return self.domain_width / self.domain_dimensions

    @property
    def num_cells(self):
        return int(np.prod(self.domain_dimensions))

    def get_fields(self):
        return list(self.fields)

    def get_field_units(self, field):
        units = self.field_units.get(field, "")
        if units == "":
            units = known_field_units.get(field[1], "")
        return units

    def cell_centers(self):
        """Flattened x, y and z coordinates of every cell centre."""
        if self._cell_centers is None:
            axes = [
                le + (np.arange(n) + 0.5) * d
                for le, n, d in zip(
                    self.domain_left_edge, self.domain_dimensions, self.dds
                )
            ]
            grids = np.meshgrid(*axes, indexing="ij")
            self._cell_centers = tuple(g.ravel() for g in grids)
        return self._cell_centers

    def cell_widths(self):
        return tuple(np.full(self.num_cells, d) for d in self.dds)

    def __repr__(self):
        return self.name
