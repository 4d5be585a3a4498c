"""
Shared test fixtures for Burn.

Provides an isolated config.yaml, a temporary ceiling store, a CLI runner,
and a fake timesheet client for offline chart generation.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple

import pytest
import yaml

from burn.ceiling.store import CeilingStore
from burn.core import config as config_module
from burn.timetracker.models import JobCode, TimesheetEntry, User


@pytest.fixture
def burn_config(tmp_path, monkeypatch):
    """Point config.yaml at a temp file with API settings and a temp ceiling dir."""
    cfg = {
        "timesheets": {
            "api_url": "https://api.example.test/v1",
            "api_token": "test-token",
            "timeout": 5,
        },
        "ceiling": {"directory": str(tmp_path / "ceiling")},
        "projection": {"hours_per_day": 8},
        "logging": {"level": "WARNING"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")

    monkeypatch.setattr(config_module, "CONFIG_PATH", path)
    monkeypatch.setattr(config_module, "_config_cache", None)
    config_module.BURN_PATHS.reset()
    yield path
    config_module.BURN_PATHS.reset()


@pytest.fixture
def ceiling_store(tmp_path):
    """CeilingStore writing under a temp directory."""
    return CeilingStore(tmp_path / "ceiling")


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


class FakeTimesheetClient:
    """In-memory stand-in for TimesheetClient; records every timesheet query."""

    def __init__(
        self,
        entries_by_month: Optional[Dict[str, List[TimesheetEntry]]] = None,
        users: Optional[Dict[int, User]] = None,
        jobcodes: Optional[Dict[int, JobCode]] = None,
    ):
        self.entries_by_month = entries_by_month or {}
        self.users = users or {}
        self.jobcodes = jobcodes or {}
        self.calls: List[Tuple[date, date, Optional[List[int]]]] = []

    def fetch_timesheets(self, start, end, jobcode_ids=None):
        self.calls.append((start, end, jobcode_ids))
        return list(self.entries_by_month.get(f"{start.year:04d}-{start.month:02d}", []))

    def fetch_users(self):
        return dict(self.users)

    def fetch_jobcodes(self):
        return dict(self.jobcodes)


def make_entry(entry_id: int, user_id: int, hours: float, jobcode_id: int = 42) -> TimesheetEntry:
    return TimesheetEntry(id=entry_id, user_id=user_id, jobcode_id=jobcode_id, duration=hours * 3600)


@pytest.fixture
def fake_client():
    """Fake client with 160 h logged in January 2025 by two users."""
    return FakeTimesheetClient(
        entries_by_month={
            "2025-01": [make_entry(1, 7, 100.0), make_entry(2, 8, 60.0)],
        },
        users={
            7: User(id=7, first_name="Dana", last_name="Reyes"),
            8: User(id=8, name="alex kim"),
        },
    )
