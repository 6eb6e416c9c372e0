# fleet_console/services/grid_controller.py
"""
One controller per entity page (per request). It owns the fetched record
collection plus the UI-session state (search term, expiry filter, sort, page,
selected columns) and derives both the visible page and the export artifacts
from the same filtered + sorted sequence.

Invariant: any change to the filter predicate or the column selection
resets the page index to 1. A stale index is also clamped on every render.
"""
from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Any, Dict, Iterable, List, Mapping, Optional

from fleet_console.models.grid import (
    EntityGrid,
    ExportArtifact,
    GridPage,
    GridRow,
    PageState,
    SortDirection,
    SortState,
)
from fleet_console.services.column_selector import ColumnSelector
from fleet_console.services.expiry import DEFAULT_WINDOW_DAYS, EXPIRY_BUCKETS, classify_expiry
from fleet_console.services.exports import (
    CSV_MIMETYPE,
    PDF_MIMETYPE,
    XLSX_MIMETYPE,
    ExportError,
    ExportTable,
    build_csv,
    build_export_rows,
    build_pdf,
    build_workbook,
    export_filename,
    render_print_document,
)
from fleet_console.services.pagination import paginate
from fleet_console.services.record_access import resolve
from fleet_console.services.search import filter_records
from fleet_console.services.sorting import sort_records
from fleet_console.services.value_formatter import format_for_display

EXPORT_CHANNELS = ("xlsx", "csv", "pdf")


class GridController:
    def __init__(
        self,
        entity: EntityGrid,
        records: Optional[Iterable[Mapping[str, Any]]] = None,
        *,
        tz: Optional[tzinfo] = None,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
        expiry_window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        self.entity = entity
        self.tz = tz
        self.now = now or datetime.now(tz)
        self.today = today or self.now.date()
        self.expiry_window_days = expiry_window_days

        self._records: List[Mapping[str, Any]] = list(records or [])
        self.search_term = ""
        self.expiry_filter: Optional[str] = None
        self.sort_state = SortState()
        self.page_state = PageState()
        self.columns = ColumnSelector(entity.fields, entity.default_fields or None)

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------
    @property
    def records(self) -> List[Mapping[str, Any]]:
        return list(self._records)

    def replace_records(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Full replacement after a (re)fetch."""
        self._records = list(records or [])
        self.page_state = self.page_state.first_page()

    def set_search(self, term: Optional[str]) -> None:
        term = (term or "").strip()
        if term != self.search_term:
            self.search_term = term
            self.page_state = self.page_state.first_page()

    def set_expiry_filter(self, bucket: Optional[str]) -> None:
        if bucket and (not self.entity.expiry_field or bucket not in EXPIRY_BUCKETS):
            bucket = None
        if bucket != self.expiry_filter:
            self.expiry_filter = bucket or None
            self.page_state = self.page_state.first_page()

    def set_sort(self, key: Optional[str], direction: SortDirection = SortDirection.ASC) -> None:
        if key and self.entity.field_for(key) is None:
            key = None
        self.sort_state = SortState(key=key or None, direction=direction)

    def toggle_sort(self, key: str) -> None:
        """Same column flips direction; a new column starts ascending."""
        if self.sort_state.key == key:
            direction = SortDirection.ASC if self.sort_state.descending else SortDirection.DESC
            self.set_sort(key, direction)
        else:
            self.set_sort(key, SortDirection.ASC)

    def set_page_size(self, page_size: int) -> None:
        self.page_state = self.page_state.with_page_size(page_size)

    def go_to_page(self, index: int) -> None:
        self.page_state = self.page_state.with_index(index)

    def toggle_column(self, key: str) -> bool:
        selected = self.columns.toggle(key)
        self.page_state = self.page_state.first_page()
        return selected

    def select_all_columns(self) -> None:
        self.columns.select_all()
        self.page_state = self.page_state.first_page()

    def deselect_all_columns(self) -> None:
        self.columns.deselect_all()
        self.page_state = self.page_state.first_page()

    def set_columns(self, selector: ColumnSelector) -> None:
        self.columns = selector
        self.page_state = self.page_state.first_page()

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def _bucket(self, record: Mapping[str, Any]) -> Optional[str]:
        return classify_expiry(
            self.today,
            resolve(record, self.entity.expiry_field),
            self.expiry_window_days,
        )

    def _record_sort(self) -> SortState:
        """Sort state keyed by the lookup path of the chosen field (accessor wins over key)."""
        field = self.entity.field_for(self.sort_state.key) if self.sort_state.key else None
        if field is None:
            return self.sort_state
        return SortState(key=field.path, direction=self.sort_state.direction)

    def filtered_records(self) -> List[Mapping[str, Any]]:
        """Search + expiry filter, then sort. Feeds both the table and exports."""
        rows = self._records
        if self.expiry_filter:
            rows = [r for r in rows if self._bucket(r) == self.expiry_filter]
        rows = filter_records(rows, self.search_term, self.entity.search_fields)
        return sort_records(rows, self._record_sort())

    def expiry_summary(self) -> Dict[str, int]:
        """Counts per expiry bucket over the unfiltered collection (KPI cards)."""
        counts = {"total": len(self._records)}
        counts.update({bucket: 0 for bucket in EXPIRY_BUCKETS})
        if not self.entity.expiry_field:
            return counts
        for r in self._records:
            bucket = self._bucket(r)
            if bucket:
                counts[bucket] += 1
        return counts

    def visible_page(self) -> GridPage:
        fields = self.columns.selected_fields
        page = paginate(self.filtered_records(), self.page_state)
        # remember the clamped index so follow-up navigation starts from it
        self.page_state = self.page_state.with_index(page.current_index)

        rows = []
        for offset, record in enumerate(page.items):
            cells = [
                format_for_display(
                    f.key,
                    resolve(record, f.path),
                    f.type,
                    tz=self.tz,
                    status_colors=self.entity.status_colors,
                )
                for f in fields
            ]
            rows.append(GridRow(number=page.start_index + offset + 1, record=record, cells=cells))

        return GridPage(
            entity_type=self.entity.entity_type,
            title=self.entity.title,
            headers=["No"] + [f.label for f in fields] + ["Actions"],
            fields=fields,
            rows=rows,
            current_index=page.current_index,
            total_pages=page.total_pages,
            page_size=self.page_state.page_size,
            filtered_count=page.total_count,
            total_count=len(self._records),
            sort=self.sort_state,
            search_term=self.search_term,
            expiry_filter=self.expiry_filter,
            column_summary=self.columns.summary(),
        )

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------
    def export_table(self) -> ExportTable:
        return build_export_rows(self.filtered_records(), self.columns.selected_fields, self.tz)

    def export(self, channel: str) -> ExportArtifact:
        """Build a complete downloadable artifact; raises ExportError, never returns a partial file."""
        if channel not in EXPORT_CHANNELS:
            raise ValueError(f"Unsupported export format: {channel}")

        table = self.export_table()
        if channel == "xlsx":
            content = build_workbook(table.with_actions(), self.entity.title)
            mimetype = XLSX_MIMETYPE
        elif channel == "csv":
            content = build_csv(table.with_actions())
            mimetype = CSV_MIMETYPE
        else:
            content = build_pdf(table, f"{self.entity.title} Report", self.now)
            mimetype = PDF_MIMETYPE

        return ExportArtifact(
            filename=export_filename(self.entity.entity_type, channel, self.today),
            mimetype=mimetype,
            content=content,
        )

    def print_document(self) -> str:
        """Printable HTML (no Actions column). Needs an application context."""
        return render_print_document(
            self.export_table(),
            f"{self.entity.title} Report",
            self.now,
            self.entity.status_colors,
        )


__all__ = ["GridController", "EXPORT_CHANNELS", "ExportError"]
