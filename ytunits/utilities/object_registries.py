# These are the registries self-registering objects land in.

from typing import TYPE_CHECKING, Dict, Type

if TYPE_CHECKING:
    from ytunits.data_objects.data_containers import YTDataContainer
    from ytunits.data_objects.derived_quantities import DerivedQuantity
    from ytunits.engine import NativeAnalysisEngine

derived_quantity_registry: Dict[str, Type["DerivedQuantity"]] = {}
data_object_registry: Dict[str, Type["YTDataContainer"]] = {}
engine_registry: Dict[str, Type["NativeAnalysisEngine"]] = {}
