from __future__ import annotations

import json

import pytest

from absence_tracker.absences.model import NewAbsence
from absence_tracker.container import build_container
from absence_tracker.core.enums import AbsenceType
from absence_tracker.core.exceptions import NotFound, TransportError
from absence_tracker.main import create_app
from absence_tracker.store.remote_store import RemoteDataStore


@pytest.fixture
def container(tmp_path):
    return build_container(api_url=None, data_dir=str(tmp_path / "data"))


@pytest.fixture
def client(container):
    app = create_app(container)
    app.config["TESTING"] = True
    return app.test_client()


ABSENCE = {
    "employeeId": "1",
    "date": "2025-01-15",
    "type": "Maladie",
    "startTime": "09:00",
    "endTime": "10:30",
    "notes": "Grippe",
}


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_employee_crud(client):
    res = client.post("/api/employees", json={"name": "Zoé", "role": "RH"})
    assert res.status_code == 201
    emp = res.get_json()
    assert emp["id"] and emp["name"] == "Zoé"

    res = client.put(f"/api/employees/{emp['id']}", json={"name": "Zoé B.", "role": "RH"})
    assert res.status_code == 200
    assert res.get_json() == {"id": emp["id"], "name": "Zoé B.", "role": "RH"}

    res = client.delete(f"/api/employees/{emp['id']}")
    assert res.status_code == 204
    assert res.data == b""
    assert emp["id"] not in {e["id"] for e in client.get("/api/employees").get_json()}


def test_missing_fields_are_400(client):
    assert client.post("/api/employees", json={"name": "A"}).status_code == 400
    assert client.put("/api/employees/1", json={"role": "B"}).status_code == 400
    res = client.post("/api/absences", json={"employeeId": "1"})
    assert res.status_code == 400
    assert "date" in res.get_json()["error"]


def test_unknown_ids_are_404(client):
    assert client.put("/api/employees/nope", json={"name": "A", "role": "B"}).status_code == 404
    assert client.delete("/api/employees/nope").status_code == 404
    assert client.delete("/api/absences/nope").status_code == 404


def test_absence_lifecycle_and_cascade(client):
    res = client.post("/api/absences", json=ABSENCE)
    assert res.status_code == 201
    created = res.get_json()
    assert created["employeeId"] == "1" and created["id"]

    client.post("/api/absences", json={**ABSENCE, "employeeId": "2"})
    listed = client.get("/api/absences?employeeId=1").get_json()
    assert [a["id"] for a in listed] == [created["id"]]

    assert client.delete("/api/employees/1").status_code == 204
    remaining = client.get("/api/absences").get_json()
    assert all(a["employeeId"] != "1" for a in remaining)
    assert len(remaining) == 1


def test_invalid_employee_reference_is_400(client):
    res = client.post("/api/absences", json={**ABSENCE, "employeeId": "ghost"})
    assert res.status_code == 400


def test_inverted_time_range_is_400(client):
    res = client.post("/api/absences", json={**ABSENCE, "startTime": "23:00", "endTime": "01:00"})
    assert res.status_code == 400


def test_non_text_notes_are_400(client):
    res = client.post("/api/absences", json={**ABSENCE, "notes": 123})
    assert res.status_code == 400
    assert "notes" in res.get_json()["error"]


def test_stats_with_corrupt_stored_absence_is_500(tmp_path, client):
    stored = {**ABSENCE, "id": "x", "startTime": "10:00", "endTime": "09:00"}
    (tmp_path / "data").mkdir(exist_ok=True)
    (tmp_path / "data" / "absences.json").write_text(json.dumps([stored]), encoding="utf-8")
    res = client.get("/api/stats")
    assert res.status_code == 500
    assert "Absence x" in res.get_json()["error"]


def test_stats_and_csv_export(client):
    client.post("/api/absences", json=ABSENCE)
    client.post("/api/absences", json={**ABSENCE, "date": "2025-02-01", "notes": "a, b"})

    stats = client.get("/api/stats?start=2025-01-01&end=2025-01-31").get_json()
    assert stats["durations"]["total_minutes"] == 90
    assert stats["byEmployee"] == [["Alice Dubois", 1]]

    res = client.get("/api/absences/export.csv?type=Maladie")
    assert res.status_code == 200
    assert res.mimetype == "text/csv"
    assert "export-absences-" in res.headers["Content-Disposition"]
    text = res.data.decode("utf-8")
    assert text.startswith("\ufeffEmployé,Date,Type")
    lines = text.split("\n")
    assert lines[1].startswith("Alice Dubois,2025-02-01,Maladie,09:00,10:30,")
    assert lines[1].endswith('"a, b"')

    assert client.get("/api/absences/export.csv?type=Vacances").status_code == 400


class FlaskClientSession:
    """requests.Session stand-in routing calls to a Flask test client."""

    def __init__(self, client, base_url):
        self._client = client
        self._base_url = base_url

    def request(self, method, url, *, json=None, params=None, headers=None, timeout=None):
        path = url[len(self._base_url):]
        res = self._client.open(path, method=method, json=json, query_string=params)
        return _Response(res)


class _Response:
    def __init__(self, res):
        self.status_code = res.status_code
        self.text = res.get_data(as_text=True)
        self.reason = res.status
        self._res = res

    def json(self):
        data = self._res.get_json(silent=True)
        if data is None:
            raise ValueError("no json")
        return data


def test_remote_store_speaks_the_api_contract(client):
    base = "http://testserver/api"
    remote = RemoteDataStore(base, session=FlaskClientSession(client, "http://testserver"))

    emp = remote.create_employee(name="Zoé", role="RH")
    assert emp in remote.list_employees()

    rec = remote.create_absence(NewAbsence(emp.id, "2025-01-15", AbsenceType.LATE, "09:00", "09:20"))
    assert remote.list_absences(emp.id) == [rec]

    with pytest.raises(TransportError) as info:
        remote.create_absence(NewAbsence("ghost", "2025-01-15", AbsenceType.LATE, "09:00", "09:20"))
    assert info.value.status == 400

    remote.delete_employee(emp.id)
    assert remote.list_absences(emp.id) == []
    with pytest.raises(NotFound):
        remote.delete_employee(emp.id)
    assert remote.ping() is True
