# -*- coding: utf-8 -*-
"""HTML message renderer for new appointment notifications (Telegram-style)."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from appointment_notifier.exceptions import ConfigurationError
from appointment_notifier.models import VisaAppointment

DEFAULT_TIMEZONE = "Europe/Istanbul"
NO_INFORMATION = "Bilgi Yok"

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# tr-TR abbreviated month names (medium date style).
_TR_MONTHS = (
    "Oca", "Şub", "Mar", "Nis", "May", "Haz",
    "Tem", "Ağu", "Eyl", "Eki", "Kas", "Ara",
)


def escape_html(text: str) -> str:
    """Escape the five markup-significant characters for Telegram HTML mode."""
    return text.translate(_HTML_ESCAPES)


def format_tr_datetime(value: datetime) -> str:
    """Format as tr-TR medium date + medium time, e.g. '5 Oca 2025 14:30:00'."""
    return (
        f"{value.day} {_TR_MONTHS[value.month - 1]} {value.year} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


class AppointmentMessageRenderer:
    """Render a VisaAppointment into the fixed bold-label HTML template."""

    def __init__(self, timezone: str = DEFAULT_TIMEZONE) -> None:
        try:
            self._zone = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown time zone: {timezone!r}") from exc
        self.timezone = timezone

    def render(self, event: VisaAppointment) -> str:
        """Return the notification text for one appointment."""
        country = escape_html(event.country_code.upper())
        mission = escape_html(event.mission_code.upper())
        if event.last_available_date:
            available = escape_html(event.last_available_date)
        else:
            available = NO_INFORMATION
        last_checked = format_tr_datetime(event.last_checked_at.astimezone(self._zone))

        return "\n".join(
            [
                "<b>YENİ RANDEVU</b>",
                "",
                f"<b>Durum:</b> {escape_html(event.status)}",
                f"<b>Merkez:</b> {escape_html(event.center)}",
                f"<b>Ülke/Misyon:</b> {country} -> {mission}",
                f"<b>Kategori:</b> {escape_html(event.visa_category)}",
                f"<b>Tip:</b> {escape_html(event.visa_type)}",
                f"<b>Son Müsait Tarih:</b> {available}",
                f"<b>Takip Sayısı:</b> {event.tracking_count}",
                f"<b>Son Kontrol:</b> {escape_html(last_checked)}",
            ]
        )
