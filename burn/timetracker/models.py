"""
Timesheet API records.

The API returns each collection as an object keyed by string ids
(``{"results": {"jobcodes": {"17": {...}}}}``); these records are the
decoded values.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class JobCode:
    id: int
    name: str
    parent_id: Optional[int] = None
    active: Optional[bool] = None

    @property
    def is_root(self) -> bool:
        return not self.parent_id

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "JobCode":
        parent = data.get("parent_id")
        active = data.get("active")
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            parent_id=int(parent) if parent is not None else None,
            active=bool(active) if active is not None else None,
        )


@dataclass(frozen=True)
class TimesheetEntry:
    id: int
    user_id: int
    jobcode_id: int
    duration: float  # seconds

    @property
    def hours(self) -> float:
        return self.duration / SECONDS_PER_HOUR

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TimesheetEntry":
        return cls(
            id=int(data["id"]),
            user_id=int(data["user_id"]),
            jobcode_id=int(data["jobcode_id"]),
            duration=float(data["duration"]),
        )


@dataclass(frozen=True)
class User:
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        """Explicit display name, else "First Last"; None when both are blank."""
        if self.name:
            return self.name
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            name=data.get("name"),
        )


@dataclass
class JobNode:
    """One node of the job forest shown by ``burn timetracker jobs``."""

    id: int
    name: str
    children: List["JobNode"] = field(default_factory=list)

    def walk(self, depth: int = 0):
        """Yield (depth, node) depth-first, parents before children."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)
