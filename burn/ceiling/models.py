"""
Ceiling releases and per-job ceiling records.

A release is a dated, signed adjustment to a job's contractual hour ceiling.
Releases may be negative or fractional; several may share a date.
"""

import math
import uuid
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from burn.core import ValidationError


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def parse_record_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Decode a stored date.

    Plain ``YYYY-MM-DD`` strings are taken as-is. Full ISO-8601 timestamps
    (older files) are converted to local time and floored to the calendar day.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _local_day(value)
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "T" not in text:
        return date.fromisoformat(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _local_day(datetime.fromisoformat(text))


def _local_day(moment: datetime) -> date:
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def parse_hours(text: Union[str, float, int]) -> float:
    """Parse user-entered ceiling hours. Raises ValidationError if not numeric."""
    if isinstance(text, bool):
        raise ValidationError(f"Ceiling hours must be a number: {text!r}")
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        try:
            value = float(str(text).strip().replace(",", ""))
        except ValueError:
            raise ValidationError(f"Ceiling hours must be a number: {text!r}") from None
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"Ceiling hours must be a finite number: {text!r}")
    return value


def is_valid_pop(start: Optional[date], end: Optional[date]) -> bool:
    """True only when both PoP dates are set and start <= end."""
    return start is not None and end is not None and start <= end


def pop_validation_message(start: Optional[date], end: Optional[date]) -> Optional[str]:
    """User-facing reason the PoP is invalid, or None when it is valid."""
    if start is None or end is None:
        return "Set both PoP Start and PoP End."
    if start > end:
        return "PoP Start must be on or before PoP End."
    return None


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CeilingRelease:
    date: date
    hours: float
    note: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()).upper())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "hours": self.hours,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CeilingRelease":
        day = parse_record_date(data["date"])
        if day is None:
            raise ValueError("Ceiling release is missing its date")
        note = data.get("note")
        return cls(
            id=str(data.get("id") or uuid.uuid4()).upper(),
            date=day,
            hours=float(data["hours"]),
            note=note if note else None,
        )


def sort_releases(releases: List[CeilingRelease]) -> List[CeilingRelease]:
    """Releases ordered by date ascending; same-date releases keep their order."""
    return sorted(releases, key=lambda r: r.date)


@dataclass
class CeilingRecord:
    pop_start: Optional[date] = None
    pop_end: Optional[date] = None
    releases: List[CeilingRelease] = field(default_factory=list)

    def __post_init__(self):
        self.releases = sort_releases(list(self.releases))

    @property
    def has_valid_pop(self) -> bool:
        return is_valid_pop(self.pop_start, self.pop_end)

    @property
    def total_hours(self) -> float:
        return sum(r.hours for r in self.releases)

    def get_release(self, release_id: str) -> Optional[CeilingRelease]:
        for r in self.releases:
            if r.id == release_id.upper():
                return r
        return None

    def add_release(
        self, day: date, hours: Union[str, float], note: Optional[str] = None
    ) -> CeilingRelease:
        release = CeilingRelease(date=day, hours=parse_hours(hours), note=note or None)
        self.releases = sort_releases(self.releases + [release])
        return release

    def update_release(
        self,
        release_id: str,
        *,
        day: Optional[date] = None,
        hours: Union[str, float, None] = None,
        note: Optional[str] = None,
    ) -> CeilingRelease:
        """Edit one release in place. An empty-string note clears it."""
        current = self.get_release(release_id)
        if current is None:
            raise KeyError(release_id)
        changes: Dict[str, Any] = {}
        if day is not None:
            changes["date"] = day
        if hours is not None:
            changes["hours"] = parse_hours(hours)
        if note is not None:
            changes["note"] = note or None
        updated = replace(current, **changes)
        self.releases = sort_releases(
            [updated if r.id == current.id else r for r in self.releases]
        )
        return updated

    def remove_release(self, release_id: str) -> bool:
        before = len(self.releases)
        self.releases = [r for r in self.releases if r.id != release_id.upper()]
        return len(self.releases) < before

    def set_pop(self, start: Optional[date], end: Optional[date]) -> None:
        message = pop_validation_message(start, end)
        if message and start is not None and end is not None:
            raise ValidationError(message)
        self.pop_start = start
        self.pop_end = end

    def to_dict(self) -> Dict[str, Any]:
        return {
            "popStart": self.pop_start.isoformat() if self.pop_start else None,
            "popEnd": self.pop_end.isoformat() if self.pop_end else None,
            "releases": [r.to_dict() for r in sort_releases(self.releases)],
        }

    @classmethod
    def from_data(cls, data: Any) -> "CeilingRecord":
        """
        Decode a stored record.

        Accepts the current object shape and the legacy bare list of releases,
        which carries no PoP dates.
        """
        if isinstance(data, list):
            return cls(releases=[CeilingRelease.from_dict(r) for r in data])
        if not isinstance(data, dict):
            raise ValueError("Ceiling record must be an object or a list of releases")
        return cls(
            pop_start=parse_record_date(data.get("popStart")),
            pop_end=parse_record_date(data.get("popEnd")),
            releases=[CeilingRelease.from_dict(r) for r in data.get("releases") or []],
        )
