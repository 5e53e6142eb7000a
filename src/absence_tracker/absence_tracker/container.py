from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .absences.service import AbsenceTrackerService
from .core.constants import DEFAULT_API_TIMEOUT
from .core.enums import BackendKind
from .database.connection import DBConfig, DatabaseConnection
from .stats.service import DashboardService
from .store.base import DataStore
from .store.document_store import JsonDocumentStore
from .store.local_store import LocalDataStore
from .store.mysql_store import MySQLDataStore
from .store.remote_store import RemoteDataStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    backend: BackendKind
    store: DataStore

    tracker: AbsenceTrackerService
    dashboard: DashboardService


def _wire(backend: BackendKind, store: DataStore) -> Container:
    tracker = AbsenceTrackerService(store)
    return Container(backend=backend, store=store, tracker=tracker, dashboard=DashboardService(tracker))


def build_container(
    *,
    api_url: Optional[str],
    data_dir: str,
    api_timeout: float = DEFAULT_API_TIMEOUT,
    session: Any = None,
) -> Container:
    """Pick the backend once: remote when an API URL is configured, local otherwise."""

    if api_url:
        logger.info("using remote backend at %s", api_url)
        return _wire(BackendKind.REMOTE, RemoteDataStore(api_url, session=session, timeout=api_timeout))

    logger.info("using local document store in %s", data_dir)
    return _wire(BackendKind.LOCAL, LocalDataStore(JsonDocumentStore(data_dir)))


def build_container_from_settings(settings: Any) -> Container:
    return build_container(
        api_url=getattr(settings, "API_URL", "") or None,
        data_dir=getattr(settings, "DATA_DIR"),
        api_timeout=float(getattr(settings, "API_TIMEOUT", DEFAULT_API_TIMEOUT)),
    )


def build_server_container(*, db_config: dict) -> Container:
    """Container for the HTTP surface itself, backed by MySQL."""

    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return _wire(BackendKind.MYSQL, MySQLDataStore(conn))
