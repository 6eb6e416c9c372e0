import pytest
from fleet_console import create_app
from fleet_console.services.record_source import RecordSourceError


class StubRecordSource:
    """In-memory stand-in for the fleet API."""

    def __init__(self, records_by_entity=None, fail=False):
        self.records_by_entity = records_by_entity or {}
        self.fail = fail
        self.calls = []

    def list(self, entity_type):
        self.calls.append(entity_type)
        if self.fail:
            raise RecordSourceError(f"Failed to load {entity_type}")
        return [dict(r) for r in self.records_by_entity.get(entity_type, [])]


@pytest.fixture
def record_source():
    return StubRecordSource()


@pytest.fixture
def test_app(record_source):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DISPLAY_TIMEZONE": "UTC",
        "FLEET_API_BASE_URL": "http://fleet.test",
    })
    app.extensions["record_source"] = record_source

    with app.app_context():
        yield app


@pytest.fixture
def client(test_app):
    return test_app.test_client()
