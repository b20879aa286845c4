from __future__ import annotations

"""
Visitor records and the editable draft.

The wire format of the visitors collection uses camelCase keys
(`checkInTime`, `checkOutTime`); Python code uses snake_case attributes.
The mapping between the two lives here and nowhere else.

Timestamps are kept as the strings the server sent (array-encoded values
are turned into ISO strings). `format_timestamp` renders them in the user's
locale for display only; `use_user_locale` must run once at startup.
"""

from dataclasses import dataclass, fields
from datetime import datetime
import locale
import logging
from typing import Any, Dict, List, Mapping, Optional

from .errors import InvalidResponseError

logger = logging.getLogger(__name__)


# Wire name -> attribute name, in form order
EDITABLE_FIELDS: Dict[str, str] = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "purpose": "purpose",
    "checkInTime": "check_in_time",
    "checkOutTime": "check_out_time",
}

REQUIRED_FIELDS = ("name", "email", "phone", "purpose")

FIELD_LABELS: Dict[str, str] = {
    "name": "Name",
    "email": "Email",
    "phone": "Phone",
    "purpose": "Purpose",
    "checkInTime": "Check-in Time",
    "checkOutTime": "Check-out Time",
}


@dataclass(frozen=True)
class Visitor:
    """A visitor record as stored by the server. `id` is server-assigned."""

    id: Any
    name: str = ""
    email: str = ""
    phone: str = ""
    purpose: str = ""
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Visitor":
        if not isinstance(data, Mapping):
            raise InvalidResponseError(f"Expected a visitor object, got {type(data).__name__}")
        if data.get("id") is None:
            raise InvalidResponseError("Visitor record without an id")
        return cls(
            id=data["id"],
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            phone=str(data.get("phone") or ""),
            purpose=str(data.get("purpose") or ""),
            check_in_time=_coerce_timestamp(data.get("checkInTime")),
            check_out_time=_coerce_timestamp(data.get("checkOutTime")),
        )

    def to_api(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id}
        for wire, attr in EDITABLE_FIELDS.items():
            out[wire] = getattr(self, attr)
        return out


@dataclass
class VisitorDraft:
    """In-progress form values. All fields are plain strings."""

    name: str = ""
    email: str = ""
    phone: str = ""
    purpose: str = ""
    check_in_time: str = ""
    check_out_time: str = ""

    @classmethod
    def from_visitor(cls, visitor: Visitor) -> "VisitorDraft":
        return cls(**{attr: getattr(visitor, attr) or "" for attr in EDITABLE_FIELDS.values()})

    def set(self, name: str, value: str) -> None:
        """Set a field by its input name (wire name or attribute name)."""
        attr = resolve_field(name)
        setattr(self, attr, "" if value is None else str(value))

    def get(self, name: str) -> str:
        return getattr(self, resolve_field(name))

    def to_payload(self) -> Dict[str, str]:
        """Request body for create/update. Never includes an id."""
        return {wire: getattr(self, attr) for wire, attr in EDITABLE_FIELDS.items()}

    def missing_required(self) -> List[str]:
        """Wire names of required fields that are blank."""
        return [name for name in REQUIRED_FIELDS if not self.get(name).strip()]

    def is_empty(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self))


def resolve_field(name: str) -> str:
    """Map an input name to a `VisitorDraft` attribute, raising KeyError if unknown."""
    if name in EDITABLE_FIELDS:
        return EDITABLE_FIELDS[name]
    if name in EDITABLE_FIELDS.values():
        return name
    raise KeyError(f"Unknown visitor field: {name!r}")


def _coerce_timestamp(value: Any) -> Optional[str]:
    """Normalize a wire timestamp to a string, or None when absent.

    Jackson-style arrays (`[2024, 5, 1, 9, 0]`) become ISO strings; any other
    non-string value is kept as its `str()`.
    """
    if value is None or value == "" or value == []:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and 3 <= len(value) <= 7 and all(isinstance(p, int) for p in value):
        parts = list(value)
        if len(parts) == 7:
            # Jackson sends nanoseconds
            parts[6] = parts[6] // 1000
        try:
            return datetime(*parts).isoformat()
        except ValueError:
            pass
    return str(value)


def _parse_timestamp(value: str) -> Optional[datetime]:
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def format_timestamp(value: Optional[str]) -> str:
    """Render a timestamp-like string in the current locale.

    Empty values render as `-`; values that do not parse are shown unchanged.
    """
    if not value:
        return "-"
    parsed = _parse_timestamp(str(value))
    if parsed is None:
        return str(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%x %X")


def use_user_locale() -> Optional[str]:
    """Switch LC_TIME to the user's environment locale so `%x %X` follows it.

    Returns the locale name, or None when the environment names a locale
    that is not installed (the C locale stays in effect).
    """
    try:
        return locale.setlocale(locale.LC_TIME, "")
    except locale.Error as e:
        logger.warning("Could not apply the environment locale for timestamps: %s", e)
        return None
