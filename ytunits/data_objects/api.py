from . import construction_data_containers as __cdc, selection_objects as __sdc
from .data_containers import YTDataContainer
from .derived_quantities import DerivedQuantity, DerivedQuantityCollection
from .static_output import Dataset
