from __future__ import annotations

import os
from datetime import datetime

import pytest

os.environ.setdefault("APP_ENV", "testing")

from absence_tracker.absences.service import AbsenceTrackerService
from absence_tracker.store.document_store import JsonDocumentStore
from absence_tracker.store.local_store import LocalDataStore


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 20, 10, 0, 0)


@pytest.fixture
def documents(tmp_path) -> JsonDocumentStore:
    return JsonDocumentStore(tmp_path / "data")


@pytest.fixture
def local_store(documents) -> LocalDataStore:
    return LocalDataStore(documents)


@pytest.fixture
def tracker(local_store) -> AbsenceTrackerService:
    return AbsenceTrackerService(local_store)
