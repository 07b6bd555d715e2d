# cloudhire/utils/ids.py
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any, Optional

_BASE36 = string.digits + string.ascii_lowercase
_STRIP_CHARS = " \t\r\n\"'"


def normalize_id(raw: Any) -> Optional[str]:
    """
    Normalize an id coming from a query string, path segment or body.

    Surrounding whitespace and wrapping quote characters are removed in any
    combination, so ' "id123" ', '"id123"' and 'id123' all resolve to 'id123'.
    Returns None when nothing usable is left.
    """
    if raw is None:
        return None
    value = str(raw).strip(_STRIP_CHARS)
    return value or None


def random_base36(length: int = 7) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def now_ms() -> int:
    return int(time.time() * 1000)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def generate_job_id() -> str:
    # {millisecond-timestamp}_{7-char base36}
    return f"{now_ms()}_{random_base36()}"


def generate_application_id() -> str:
    return f"app_{now_ms()}_{random_base36()}"
