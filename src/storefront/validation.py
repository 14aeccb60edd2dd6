"""Client-side validation for storefront form submissions.

Forms are submitted as dictionaries of raw field values. These helpers collect
field errors; ``raise_if_errors`` turns them into a ``ValidationRejection`` so
the page can show a notification without ever calling the backend.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Optional

from src.integrations.errors import ValidationRejection


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Dict[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(value: str, errors: Dict[str, str], field: str = "email") -> str:
    value = _strip(value)
    if not value:
        add_error(errors, field, "Email is required")
        return value
    if not _EMAIL_RE.match(value):
        add_error(errors, field, "Email is not valid")
    return value


def coerce_float(value: Any) -> float:
    """Numeric form input; anything unparseable becomes 0."""
    try:
        return float(_strip(value))
    except ValueError:
        return 0.0


def coerce_int(value: Any) -> int:
    """Id form input; accepts "3" and "3.0", anything else becomes 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    number = coerce_float(value)
    return int(number) if number.is_integer() else 0


def validate_choice(value: Any, allowed: Iterable[Any], errors: Dict[str, str], field: str, message: str) -> Any:
    if value not in set(allowed):
        add_error(errors, field, message)
    return value


def raise_if_errors(errors: Dict[str, str], message: Optional[str] = None) -> None:
    """Raise with the first field error as the message unless one is given."""
    if errors:
        raise ValidationRejection(message=message or next(iter(errors.values())), field_errors=errors)
