from __future__ import annotations

from enum import Enum


class AbsenceType(str, Enum):
    """Absence reason categories, stored by their display value."""

    SICKNESS = "Maladie"
    PAID_LEAVE = "Congés Payés"
    PERSONAL = "Personnel"
    UNJUSTIFIED = "Non Justifiée"
    LATE = "Retard"


class BackendKind(str, Enum):
    """Which persistence mechanism backs the data store."""

    LOCAL = "local"
    REMOTE = "remote"
    MYSQL = "mysql"
