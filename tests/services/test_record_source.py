# tests/services/test_record_source.py
import pytest
import requests

from fleet_console.services.record_source import RecordSource, RecordSourceError


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.bad_json:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def test_list_hits_entity_endpoint_with_auth():
    session = FakeSession(FakeResponse([{"id": 1}]))
    source = RecordSource("http://fleet.test/", token="abc", timeout=5, session=session)

    assert source.list("spare-part-requests") == [{"id": 1}]
    call = session.calls[0]
    assert call["url"] == "http://fleet.test/api/spare-part-request"
    assert call["headers"]["Authorization"] == "Bearer abc"
    assert call["timeout"] == 5


def test_data_envelope_is_unwrapped_and_junk_dropped():
    session = FakeSession(FakeResponse({"data": [{"id": 1}, "junk", None]}))

    assert RecordSource("http://fleet.test", session=session).list("vehicles") == [{"id": 1}]


def test_no_token_means_no_auth_header():
    session = FakeSession(FakeResponse([]))
    RecordSource("http://fleet.test", session=session).list("vehicles")

    assert "Authorization" not in session.calls[0]["headers"]


@pytest.mark.parametrize("session", [
    FakeSession(error=requests.ConnectionError("refused")),
    FakeSession(FakeResponse(status_code=500)),
    FakeSession(FakeResponse(bad_json=True)),
    FakeSession(FakeResponse({"message": "nope"})),
])
def test_failures_raise_record_source_error(session):
    with pytest.raises(RecordSourceError):
        RecordSource("http://fleet.test", session=session).list("vehicles")
