from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import requests

from ..absences.model import AbsenceRecord, NewAbsence
from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import NotFound, PersistenceError, TransportError
from ..employees.model import Employee
from .base import DataStore

logger = logging.getLogger(__name__)


class RemoteDataStore(DataStore):
    """Backend talking JSON to the CRUD HTTP surface.

    Validation, referential checks and the delete cascade are the server's
    job; any non-2xx answer surfaces as TransportError(status, message).
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_API_TIMEOUT,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = float(timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _request(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            res = self._session.request(
                method,
                url,
                json=json,
                params=params,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TransportError(None, str(exc)) from exc

        if not 200 <= res.status_code < 300:
            raise TransportError(res.status_code, _error_message(res))
        if res.status_code == 204:
            return None
        try:
            return res.json()
        except ValueError as exc:
            raise TransportError(res.status_code, "Response body is not valid JSON") from exc

    def _parse(self, parser, payload):
        try:
            return parser(payload)
        except PersistenceError as exc:
            raise TransportError(200, f"Unexpected payload: {exc}") from exc

    def list_employees(self) -> Sequence[Employee]:
        data = self._request("GET", "/employees")
        return [self._parse(Employee.from_dict, d) for d in data or []]

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        for e in self.list_employees():
            if e.id == employee_id:
                return e
        return None

    def create_employee(self, *, name: str, role: str) -> Employee:
        data = self._request("POST", "/employees", json={"name": name, "role": role})
        return self._parse(Employee.from_dict, data)

    def update_employee(self, employee_id: str, *, name: str, role: str) -> Employee:
        try:
            data = self._request("PUT", f"/employees/{employee_id}", json={"name": name, "role": role})
        except TransportError as exc:
            raise _not_found_or(exc, f"Employee {employee_id} not found")
        return self._parse(Employee.from_dict, data)

    def delete_employee(self, employee_id: str) -> None:
        try:
            self._request("DELETE", f"/employees/{employee_id}")
        except TransportError as exc:
            raise _not_found_or(exc, f"Employee {employee_id} not found")

    def list_absences(self, employee_id: Optional[str] = None) -> Sequence[AbsenceRecord]:
        params = {"employeeId": employee_id} if employee_id else None
        data = self._request("GET", "/absences", params=params)
        return [self._parse(AbsenceRecord.from_dict, d) for d in data or []]

    def create_absence(self, new: NewAbsence) -> AbsenceRecord:
        data = self._request("POST", "/absences", json=new.to_dict())
        return self._parse(AbsenceRecord.from_dict, data)

    def delete_absence(self, absence_id: str) -> None:
        try:
            self._request("DELETE", f"/absences/{absence_id}")
        except TransportError as exc:
            raise _not_found_or(exc, f"Absence {absence_id} not found")

    def ping(self) -> bool:
        data = self._request("GET", "/health")
        return isinstance(data, dict) and bool(data.get("ok"))


def _error_message(res) -> str:
    try:
        body = res.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return (res.text or "").strip() or str(res.reason or "")


def _not_found_or(exc: TransportError, message: str) -> Exception:
    if exc.status == 404:
        not_found = NotFound(message)
        not_found.__cause__ = exc
        return not_found
    return exc
