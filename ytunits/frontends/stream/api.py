from .data_structures import StreamHandler
from .definitions import process_data, uniform_grid_handler
from .engine import StreamEngine, StreamSelection
from .fields import index_fields, known_other_fields
