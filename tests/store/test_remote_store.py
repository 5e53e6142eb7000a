from __future__ import annotations

import pytest
import requests

from absence_tracker.absences.model import NewAbsence
from absence_tracker.core.enums import AbsenceType
from absence_tracker.core.exceptions import NotFound, TransportError
from absence_tracker.store.remote_store import RemoteDataStore


class FakeResponse:
    def __init__(self, status_code: int, payload=None, text: str = "", reason: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls = []

    def request(self, method, url, *, json=None, params=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "params": params, "timeout": timeout})
        res = self._responses.pop(0)
        if isinstance(res, Exception):
            raise res
        return res


ABSENCE_JSON = {
    "id": "a1",
    "employeeId": "e1",
    "date": "2025-01-15",
    "type": "Retard",
    "startTime": "09:00",
    "endTime": "09:20",
    "notes": None,
}


def test_list_employees_parses_payload():
    session = FakeSession(FakeResponse(200, [{"id": "e1", "name": "Alice", "role": "Dev"}]))
    store = RemoteDataStore("http://api.local/api/", session=session, timeout=3)

    employees = store.list_employees()

    assert [e.name for e in employees] == ["Alice"]
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://api.local/api/employees"
    assert session.calls[0]["timeout"] == 3


def test_create_employee_posts_json_body():
    session = FakeSession(FakeResponse(201, {"id": "e9", "name": "Zoé", "role": "RH"}))
    store = RemoteDataStore("http://api.local", session=session)

    emp = store.create_employee(name="Zoé", role="RH")

    assert emp.id == "e9"
    assert session.calls[0]["json"] == {"name": "Zoé", "role": "RH"}


def test_non_2xx_raises_transport_error_with_server_message():
    session = FakeSession(FakeResponse(400, {"error": "invalid employeeId"}))
    store = RemoteDataStore("http://api.local", session=session)
    new = NewAbsence("ghost", "2025-01-15", AbsenceType.LATE, "09:00", "09:20")

    with pytest.raises(TransportError) as info:
        store.create_absence(new)

    assert info.value.status == 400
    assert info.value.message == "invalid employeeId"
    assert session.calls[0]["json"]["type"] == "Retard"


def test_non_json_error_body_uses_text():
    session = FakeSession(FakeResponse(500, None, text="boom"))
    with pytest.raises(TransportError) as info:
        RemoteDataStore("http://api.local", session=session).list_absences()
    assert (info.value.status, info.value.message) == (500, "boom")


def test_204_yields_no_payload():
    session = FakeSession(FakeResponse(204))
    store = RemoteDataStore("http://api.local", session=session)
    assert store.delete_absence("a1") is None
    assert session.calls[0]["method"] == "DELETE"
    assert session.calls[0]["url"] == "http://api.local/absences/a1"


def test_404_on_mutation_maps_to_not_found():
    session = FakeSession(FakeResponse(404, {"error": "Employé non trouvé"}))
    store = RemoteDataStore("http://api.local", session=session)
    with pytest.raises(NotFound) as info:
        store.update_employee("x", name="A", role="B")
    assert isinstance(info.value.__cause__, TransportError)


def test_list_absences_sends_employee_filter():
    session = FakeSession(FakeResponse(200, [ABSENCE_JSON]))
    store = RemoteDataStore("http://api.local", session=session)

    (rec,) = store.list_absences("e1")

    assert session.calls[0]["params"] == {"employeeId": "e1"}
    assert rec.type is AbsenceType.LATE
    assert rec.notes is None


def test_network_failure_is_transport_error():
    session = FakeSession(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(TransportError) as info:
        RemoteDataStore("http://api.local", session=session).list_employees()
    assert info.value.status is None


def test_malformed_payload_is_transport_error():
    session = FakeSession(FakeResponse(200, [{"id": "e1"}]))
    with pytest.raises(TransportError):
        RemoteDataStore("http://api.local", session=session).list_employees()


def test_ping():
    session = FakeSession(FakeResponse(200, {"ok": True}))
    assert RemoteDataStore("http://api.local", session=session).ping() is True
    assert session.calls[0]["url"] == "http://api.local/health"


def test_ping_tolerates_non_object_payload():
    for payload in ([{"ok": True}], "ok"):
        session = FakeSession(FakeResponse(200, payload))
        assert RemoteDataStore("http://api.local", session=session).ping() is False
