"""VisaAppointment: the upstream event a notification is rendered from.

Text fields come from scraped sources and are treated as untrusted; escaping
happens at render time, never here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from appointment_notifier.exceptions import InvalidEventError

_REQUIRED_TEXT_FIELDS = (
    "status",
    "center",
    "country_code",
    "mission_code",
    "visa_category",
    "visa_type",
)


def _parse_timestamp(value: Any) -> datetime:
    """Parse datetime, ISO-8601 string or epoch milliseconds into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        raise InvalidEventError("last_checked_at must be a timestamp", field="last_checked_at")
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OSError, OverflowError, ValueError) as exc:
            raise InvalidEventError(
                f"last_checked_at out of range: {value!r}", field="last_checked_at"
            ) from exc
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidEventError(
                f"last_checked_at is not ISO-8601: {value!r}", field="last_checked_at"
            ) from exc
    else:
        raise InvalidEventError("last_checked_at is required", field="last_checked_at")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True, slots=True)
class VisaAppointment:
    """A newly observed appointment slot, as reported by the upstream tracker."""

    status: str
    center: str
    """Application center (location label)."""
    country_code: str
    """Applicant country, e.g. 'tr'."""
    mission_code: str
    """Destination mission, e.g. 'de'."""
    visa_category: str
    visa_type: str
    tracking_count: int
    """How many times the tracker has seen this slot."""
    last_checked_at: datetime
    """Aware datetime of the most recent check."""
    last_available_date: str | None = None
    """Free-form date string from the source; rendered verbatim when present."""
    id: str | None = None
    """Upstream identifier, used for log correlation only."""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> VisaAppointment:
        """Build an event from an upstream JSON-like mapping.

        Raises:
            InvalidEventError: a required field is missing, empty or mistyped.
        """
        texts: dict[str, str] = {}
        for name in _REQUIRED_TEXT_FIELDS:
            value = payload.get(name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidEventError(f"{name} is required", field=name)
            texts[name] = value

        tracking_count = payload.get("tracking_count")
        if isinstance(tracking_count, bool) or not isinstance(tracking_count, int):
            raise InvalidEventError("tracking_count must be an integer", field="tracking_count")

        last_available = payload.get("last_available_date")
        if last_available is not None and not isinstance(last_available, str):
            raise InvalidEventError(
                "last_available_date must be a string", field="last_available_date"
            )

        raw_id = payload.get("id")
        return cls(
            **texts,
            tracking_count=tracking_count,
            last_checked_at=_parse_timestamp(payload.get("last_checked_at")),
            last_available_date=last_available or None,
            id=str(raw_id) if raw_id is not None else None,
        )
