# tests/routes/test_grid_routes.py
import io
from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from fleet_console.services.exports import ExportError

VEHICLES = [
    {"id": 1, "reg_number": "GR-100", "status": "active", "year": 2019, "color": "White"},
    {"id": 2, "reg_number": "AS-200", "status": "maintenance", "year": 2021, "color": "Silver"},
    {"id": 3, "reg_number": "GT-300", "status": None, "year": 2020, "color": "Black"},
]


@pytest.fixture
def seeded(record_source):
    record_source.records_by_entity = {
        "vehicles": VEHICLES,
        "roadworthy": [
            {"id": 1, "vehicle_number": "GR-100", "date_expired": "2000-01-01"},
            {"id": 2, "vehicle_number": "AS-200", "date_expired": "2999-01-01"},
        ],
    }
    return record_source


def today_stamp():
    return datetime.now(timezone.utc).date().isoformat()


def test_index_lists_entities(client):
    response = client.get("/")

    assert response.status_code == 200
    assert b"/grid/vehicles" in response.data


def test_grid_page_renders_rows(client, seeded):
    response = client.get("/grid/vehicles")
    body = response.data.decode()

    assert response.status_code == 200
    assert "GR-100" in body
    assert "Showing 1 to 3 of 3 entries" in body
    assert seeded.calls == ["vehicles"]


def test_unknown_entity_is_404(client):
    assert client.get("/grid/spaceships").status_code == 404
    assert client.get("/api/grid/spaceships").status_code == 404


def test_fetch_failure_shows_message_and_empty_state(client, record_source):
    record_source.fail = True
    body = client.get("/grid/vehicles").data.decode()

    assert "Could not load vehicles. Please try again." in body
    assert "No vehicles found." in body


def test_search_query_filters_rows(client, seeded):
    body = client.get("/grid/vehicles?q=silver").data.decode()

    assert "AS-200" in body
    assert "GR-100" not in body


def test_csv_export_download(client, seeded):
    response = client.get("/grid/vehicles/export/csv?sort=year&dir=desc&fields=reg_number&fields=year&cols=1")
    lines = response.data.decode("utf-8").splitlines()

    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert f"vehicles-{today_stamp()}.csv" in response.headers["Content-Disposition"]
    assert lines == [
        '"No","Registration Number","Year","Actions"',
        '"1","AS-200","2021",""',
        '"2","GT-300","2020",""',
        '"3","GR-100","2019",""',
    ]


def test_xlsx_export_download(client, seeded):
    response = client.get("/grid/vehicles/export/xlsx")
    ws = load_workbook(io.BytesIO(response.data)).active

    assert response.status_code == 200
    assert f"vehicles-{today_stamp()}.xlsx" in response.headers["Content-Disposition"]
    assert ws["A1"].value == "No"
    assert ws.max_row == 4


def test_pdf_export_download(client, seeded):
    response = client.get("/grid/vehicles/export/pdf")

    assert response.status_code == 200
    assert response.mimetype == "application/pdf"
    assert response.data.startswith(b"%PDF")


def test_unknown_export_channel_is_404(client, seeded):
    assert client.get("/grid/vehicles/export/docx").status_code == 404


def test_export_failure_redirects_with_message(client, seeded, monkeypatch):
    def explode(table):
        raise ExportError("disk full")

    monkeypatch.setattr("fleet_console.services.grid_controller.build_csv", explode)

    response = client.get("/grid/vehicles/export/csv?q=gr")
    assert response.status_code == 302
    assert "/grid/vehicles" in response.headers["Location"]
    assert "q=gr" in response.headers["Location"]

    body = client.get(response.headers["Location"]).data.decode()
    assert "Export failed, please try again" in body


def test_print_view_has_no_actions_column(client, seeded):
    response = client.get("/grid/vehicles/print")
    body = response.data.decode()

    assert response.status_code == 200
    assert response.mimetype == "text/html"
    assert "Vehicles Report" in body
    assert "<th>Actions</th>" not in body
    assert "window.print()" in body


def test_json_api_page(client, seeded):
    data = client.get("/api/grid/vehicles?sort=reg_number&size=5").get_json()

    assert data["entity_type"] == "vehicles"
    assert data["headers"][0] == "No"
    assert data["headers"][-1] == "Actions"
    assert data["page_size"] == 5
    assert data["total_count"] == 3
    assert data["sort"] == {"key": "reg_number", "direction": "asc"}
    assert [row["number"] for row in data["rows"]] == [1, 2, 3]

    status_idx = data["columns"].index("status")
    reg_idx = data["columns"].index("reg_number")
    assert data["rows"][0]["cells"][reg_idx] == "AS-200"
    assert data["rows"][0]["cells"][status_idx] == {"label": "Maintenance", "color": "orange"}
    assert data["rows"][1]["cells"][status_idx] == {"label": "Active", "color": "green"}
    assert data["rows"][2]["cells"][status_idx] == "-"


def test_json_api_empty_column_selection(client, seeded):
    data = client.get("/api/grid/vehicles?cols=1").get_json()

    assert data["columns"] == []
    assert data["headers"] == ["No", "Actions"]
    assert data["column_summary"].startswith("0 of ")


def test_json_api_stale_page_is_clamped(client, seeded):
    data = client.get("/api/grid/vehicles?size=5&page=9").get_json()

    assert data["current_page"] == 1
    assert data["total_pages"] == 1


def test_json_api_expiry_summary_and_filter(client, seeded):
    data = client.get("/api/grid/roadworthy?expiry=expired").get_json()

    assert data["expiry_summary"]["total"] == 2
    assert data["expiry_summary"]["expired"] == 1
    assert data["filtered_count"] == 1
    assert data["expiry"] == "expired"
