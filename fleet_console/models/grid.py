from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple


PAGE_SIZES: Tuple[int, ...] = (5, 10, 25, 50, 100)
DEFAULT_PAGE_SIZE = 10


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    STATUS = "status"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class FieldDescriptor:
    key: str
    label: str
    type: FieldType = FieldType.TEXT
    accessor: Optional[str] = None  # dot path, e.g. "vehicles.reg_number"

    @property
    def path(self) -> str:
        """Lookup path used against a record (accessor wins over key)."""
        return self.accessor or self.key


@dataclass(frozen=True)
class EntityGrid:
    """Static grid configuration for one entity page."""
    entity_type: str
    title: str
    endpoint: str
    fields: Tuple[FieldDescriptor, ...]
    default_fields: Tuple[str, ...] = ()
    search_fields: Optional[Tuple[str, ...]] = None  # None => every own field
    status_colors: Mapping[str, str] = field(default_factory=dict)
    expiry_field: Optional[str] = None

    def field_for(self, key: str) -> Optional[FieldDescriptor]:
        for f in self.fields:
            if f.key == key:
                return f
        return None


@dataclass(frozen=True)
class SortState:
    key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC


@dataclass(frozen=True)
class PageState:
    page_size: int = DEFAULT_PAGE_SIZE
    current_index: int = 1

    def __post_init__(self):
        if self.page_size not in PAGE_SIZES:
            raise ValueError(f"page_size must be one of {PAGE_SIZES}, got {self.page_size}")
        if self.current_index < 1:
            raise ValueError("current_index must be >= 1")

    def with_page_size(self, page_size: int) -> "PageState":
        return PageState(page_size=page_size, current_index=1)

    def with_index(self, current_index: int) -> "PageState":
        return replace(self, current_index=max(1, current_index))

    def first_page(self) -> "PageState":
        return replace(self, current_index=1)


@dataclass(frozen=True)
class Badge:
    label: str
    color: str

    def __str__(self):
        return self.label


@dataclass
class Page:
    items: list
    total_pages: int
    current_index: int
    start_index: int  # zero-based offset of items[0] in the full sequence
    total_count: int


@dataclass
class GridRow:
    number: int
    record: Mapping[str, Any]
    cells: list


@dataclass
class GridPage:
    """Everything the table template (or JSON endpoint) needs for one page."""
    entity_type: str
    title: str
    headers: Sequence[str]
    fields: Sequence[FieldDescriptor]
    rows: Sequence[GridRow]
    current_index: int
    total_pages: int
    page_size: int
    filtered_count: int
    total_count: int
    sort: SortState
    search_term: str
    expiry_filter: Optional[str]
    column_summary: str


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    mimetype: str
    content: bytes
