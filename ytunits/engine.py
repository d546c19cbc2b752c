"""
The capability boundary between the data-object layer and the analysis
backend that owns indexing, I/O and selection.

A :class:`NativeAnalysisEngine` hands out opaque handles (one per loaded
dataset) and opaque selections (one per data container). The data-object
layer never looks inside either; it only ever gets plain buffers paired with
unit strings back, and attaches the units itself.

"""

import abc

from ytunits.utilities.exceptions import (
    YTDataSelectorNotImplemented,
    YTDerivedQuantityNotImplemented,
)
from ytunits.utilities.object_registries import engine_registry


class NativeAnalysisEngine(abc.ABC):
    """
    Abstract interface to an analysis backend.

    Subclasses declaring an ``_engine_name`` are registered in
    ``engine_registry`` and can be requested by name from
    :func:`ytunits.loaders.load`.

    ``get_parameters`` must return a dict with the keys

    * ``length_unit``, ``mass_unit``, ``time_unit``: ``(value, unit)``
      tuples giving one code unit in physical units,
    * ``velocity_unit``, ``magnetic_unit``, ``temperature_unit``: the same,
      or ``None`` to derive them,
    * ``domain_left_edge``, ``domain_right_edge``: sequences in code length,
    * ``domain_dimensions``, ``dimensionality``, ``periodicity``,
    * ``current_time`` (code time), ``current_redshift``, ``max_level``,
    * ``parameters``: a free-form dict of simulation parameters.

    Fields are ``(field_type, field_name)`` tuples.
    """

    _engine_name = None
    _selection_types = ()
    _derived_quantities = ()

    def __init_subclass__(cls, *args, **kwargs):
        super().__init_subclass__(*args, **kwargs)
        if cls._engine_name is not None:
            engine_registry[cls._engine_name] = cls

    @abc.abstractmethod
    def load(self, filename, **kwargs):
        """Open a dataset and return an opaque handle to it."""

    @abc.abstractmethod
    def get_parameters(self, handle):
        pass

    @abc.abstractmethod
    def field_list(self, handle):
        """The on-disk fields of the dataset."""

    @abc.abstractmethod
    def derived_field_list(self, handle):
        """Every field the engine can produce, on-disk fields included."""

    @abc.abstractmethod
    def create_selection(
        self, handle, type_name, args, field_parameters=None, data_source=None
    ):
        """
        Build the selection backing a data container of type *type_name*.

        *args* are the container's constructor arguments, already
        normalised to plain floats in code units. *data_source* is the
        selection of the container this one is nested in, if any.
        Unsupported types raise :class:`YTDataSelectorNotImplemented`.
        """

    @abc.abstractmethod
    def fetch_field(self, selection, field):
        """Return ``(buffer, units)`` for *field* over *selection*."""

    @abc.abstractmethod
    def compute_derived(self, selection, name, *args, **kwargs):
        """
        Evaluate the derived quantity *name* over *selection* and return a
        list of ``(value, units)`` pairs.
        """

    @abc.abstractmethod
    def get_smallest_dx(self, handle):
        """Return ``(value, units)`` for the finest cell width."""

    def supports_selection(self, type_name):
        return type_name in self._selection_types

    def _check_selection_type(self, type_name):
        if not self.supports_selection(type_name):
            raise YTDataSelectorNotImplemented(type_name, self)

    def _check_derived_quantity(self, name):
        if name not in self._derived_quantities:
            raise YTDerivedQuantityNotImplemented(name, self)

    def __repr__(self):
        return f"{self.__class__.__name__}()"
