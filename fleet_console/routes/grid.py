# fleet_console/routes/grid.py
from __future__ import annotations

from io import BytesIO
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flask import (
    Blueprint,
    Response,
    abort,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    send_file,
    url_for,
)

from fleet_console.models.grid import PAGE_SIZES, Badge, SortDirection
from fleet_console.services.column_selector import ColumnSelector
from fleet_console.services.expiry import EXPIRY_BUCKETS
from fleet_console.services.exports import ExportError
from fleet_console.services.field_registry import UnknownEntityError, entity_types, get_entity
from fleet_console.services.grid_controller import EXPORT_CHANNELS, GridController
from fleet_console.services.pagination import page_state_from_args
from fleet_console.services.record_source import RecordSourceError

grid_bp = Blueprint("grid", __name__)

EXPORT_FAILED_MESSAGE = "Export failed, please try again"

# Query-string keys that make up the grid state
STATE_ARGS = ("q", "expiry", "sort", "dir", "size", "page", "fields", "cols")


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _display_tz() -> Optional[ZoneInfo]:
    name = current_app.config.get("DISPLAY_TIMEZONE")
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        current_app.logger.warning("Unknown DISPLAY_TIMEZONE %r, falling back to UTC offsets as-is", name)
        return None


def _fetch_records(entity):
    source = current_app.extensions["record_source"]
    try:
        return source.list(entity.entity_type)
    except RecordSourceError as e:
        current_app.logger.exception("Failed to fetch %s: %s", entity.entity_type, e)
        flash(f"Could not load {entity.title.lower()}. Please try again.", "error")
        return []


def _build_controller(entity_type: str) -> GridController:
    """Fresh controller for this request: fetch records, then apply query-string state."""
    try:
        entity = get_entity(entity_type)
    except UnknownEntityError:
        abort(404)

    controller = GridController(
        entity,
        _fetch_records(entity),
        tz=_display_tz(),
        expiry_window_days=current_app.config.get("EXPIRY_WINDOW_DAYS", 30),
    )

    args = request.args
    controller.set_search(args.get("q"))
    controller.set_expiry_filter(args.get("expiry"))

    # "cols" marks an explicit selection, which may legitimately be empty
    if "cols" in args or "fields" in args:
        controller.set_columns(ColumnSelector.from_request_keys(entity.fields, args.getlist("fields")))

    direction = SortDirection.DESC if args.get("dir") == "desc" else SortDirection.ASC
    controller.set_sort(args.get("sort"), direction)

    page_state = page_state_from_args(args.get("size"), args.get("page"))
    controller.set_page_size(page_state.page_size)
    controller.go_to_page(page_state.current_index)
    return controller


def _state_args(**overrides) -> dict:
    """Current grid query-string state with overrides applied (None removes a key)."""
    state = {}
    for key in STATE_ARGS:
        values = request.args.getlist(key)
        if not values:
            continue
        state[key] = values if key == "fields" else values[0]
    for key, value in overrides.items():
        if value is None:
            state.pop(key, None)
        else:
            state[key] = value
    return state


def _cell_json(cell):
    if isinstance(cell, Badge):
        return {"label": cell.label, "color": cell.color}
    return cell


# -----------------------------------------------------------------------------
# Page routes
# -----------------------------------------------------------------------------
@grid_bp.get("/")
def index():
    entities = [get_entity(t) for t in entity_types()]
    return render_template("index.html", entities=entities)


@grid_bp.get("/grid/<entity_type>")
def grid_page(entity_type: str):
    controller = _build_controller(entity_type)
    page = controller.visible_page()

    def grid_url(**overrides):
        return url_for("grid.grid_page", entity_type=entity_type, **_state_args(**overrides))

    def sort_url(key):
        if page.sort.key == key and not page.sort.descending:
            direction = "desc"
        else:
            direction = "asc"
        return grid_url(sort=key, dir=direction, page=None)

    def export_url(channel):
        return url_for("grid.export_grid", entity_type=entity_type, channel=channel, **_state_args(page=None))

    return render_template(
        "grid.html",
        entity=controller.entity,
        page=page,
        registry=controller.columns.registry,
        selected_keys=set(controller.columns.selected_keys),
        page_sizes=PAGE_SIZES,
        expiry_buckets=EXPIRY_BUCKETS if controller.entity.expiry_field else (),
        expiry_summary=controller.expiry_summary() if controller.entity.expiry_field else None,
        grid_url=grid_url,
        sort_url=sort_url,
        export_url=export_url,
        export_channels=EXPORT_CHANNELS,
        print_url=url_for("grid.print_grid", entity_type=entity_type, **_state_args(page=None)),
        all_fields_url=grid_url(fields=[f.key for f in controller.entity.fields], cols="1", page=None),
        no_fields_url=grid_url(fields=None, cols="1", page=None),
    )


# -----------------------------------------------------------------------------
# GET /grid/<entity_type>/export/<channel>
# Full filtered + sorted set (not just the current page)
# -----------------------------------------------------------------------------
@grid_bp.get("/grid/<entity_type>/export/<channel>")
def export_grid(entity_type: str, channel: str):
    if channel not in EXPORT_CHANNELS:
        abort(404)
    controller = _build_controller(entity_type)

    try:
        artifact = controller.export(channel)
    except ExportError as e:
        current_app.logger.exception("Failed to export %s as %s: %s", entity_type, channel, e)
        flash(EXPORT_FAILED_MESSAGE, "error")
        return redirect(url_for("grid.grid_page", entity_type=entity_type, **_state_args()))

    current_app.logger.info("Exported %s as %s (%s)", entity_type, channel, artifact.filename)
    return send_file(
        BytesIO(artifact.content),
        mimetype=artifact.mimetype,
        as_attachment=True,
        download_name=artifact.filename,
    )


@grid_bp.get("/grid/<entity_type>/print")
def print_grid(entity_type: str):
    controller = _build_controller(entity_type)
    try:
        html = controller.print_document()
    except ExportError as e:
        current_app.logger.exception("Failed to build print view for %s: %s", entity_type, e)
        flash(EXPORT_FAILED_MESSAGE, "error")
        return redirect(url_for("grid.grid_page", entity_type=entity_type, **_state_args()))
    return Response(html, mimetype="text/html")


# -----------------------------------------------------------------------------
# GET /api/grid/<entity_type>
# Visible page as JSON (same state arguments as the HTML page)
# -----------------------------------------------------------------------------
@grid_bp.get("/api/grid/<entity_type>")
def grid_page_json(entity_type: str):
    controller = _build_controller(entity_type)
    page = controller.visible_page()

    payload = {
        "entity_type": page.entity_type,
        "title": page.title,
        "headers": list(page.headers),
        "columns": [f.key for f in page.fields],
        "column_summary": page.column_summary,
        "rows": [
            {"number": row.number, "cells": [_cell_json(c) for c in row.cells]}
            for row in page.rows
        ],
        "current_page": page.current_index,
        "total_pages": page.total_pages,
        "page_size": page.page_size,
        "filtered_count": page.filtered_count,
        "total_count": page.total_count,
        "sort": {"key": page.sort.key, "direction": page.sort.direction.value},
        "search": page.search_term,
        "expiry": page.expiry_filter,
    }
    if controller.entity.expiry_field:
        payload["expiry_summary"] = controller.expiry_summary()
    return jsonify(payload), 200
