from __future__ import annotations

import secrets
import time
import uuid
from typing import Callable, Optional


def fallback_id() -> str:
    """Timestamp + two random components, truncated to 32 hex chars.

    Higher collision probability than a UUID; only for environments without one.
    """

    raw = format(time.time_ns(), "x") + secrets.token_hex(8) + secrets.token_hex(8)
    return raw[:32]


def generate_id(uuid_factory: Optional[Callable[[], uuid.UUID]] = uuid.uuid4) -> str:
    if uuid_factory is not None:
        return str(uuid_factory())
    return fallback_id()
