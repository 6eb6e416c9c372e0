from .grid import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZES,
    Badge,
    EntityGrid,
    ExportArtifact,
    FieldDescriptor,
    FieldType,
    GridPage,
    GridRow,
    Page,
    PageState,
    SortDirection,
    SortState,
)
