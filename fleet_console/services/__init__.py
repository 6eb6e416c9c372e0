from .column_selector import ColumnSelector
from .expiry import classify_expiry
from .field_registry import UnknownEntityError, describe, entity_types, get_entity
from .grid_controller import EXPORT_CHANNELS, GridController
from .pagination import paginate
from .record_access import resolve
from .search import filter_records
from .sorting import sort_records
from .value_formatter import format_for_display, format_for_export

__all__ = [
    "ColumnSelector",
    "classify_expiry",
    "UnknownEntityError",
    "describe",
    "entity_types",
    "get_entity",
    "EXPORT_CHANNELS",
    "GridController",
    "paginate",
    "resolve",
    "filter_records",
    "sort_records",
    "format_for_display",
    "format_for_export",
]
