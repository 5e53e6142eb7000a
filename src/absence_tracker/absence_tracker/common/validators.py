from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..core.enums import AbsenceType
from ..core.exceptions import ValidationError

_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_iso_date(value: Optional[str], field_name: str = "date") -> str:
    value = require_non_empty(value, field_name)
    try:
        if not _ISO_DATE_RE.fullmatch(value):
            raise ValueError(value)
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}") from None
    return value


def require_absence_type(value) -> AbsenceType:
    if isinstance(value, AbsenceType):
        return value
    try:
        return AbsenceType(require_non_empty(value, "type"))
    except ValueError:
        allowed = ", ".join(t.value for t in AbsenceType)
        raise ValidationError(f"type must be one of: {allowed}") from None


def optional_text(value: object, field_name: str) -> Optional[str]:
    """Blank or missing -> None; anything that is not text is refused."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value.strip() or None
