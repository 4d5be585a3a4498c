"""
Timesheet API Client

Read-only access to the remote time-tracking REST API: job codes, users,
and timesheet entries.

Authentication: static bearer token from config.yaml.

Usage:
    client = TimesheetClient.from_config()
    codes = client.fetch_jobcodes()
    entries = client.fetch_timesheets(date(2025, 1, 1), date(2025, 1, 31), [42])

Every failure (connection error, non-200 status, malformed payload) is raised
as TransportError. Nothing is retried here.
"""

from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import requests

from burn.core import TransportError, get_logger
from burn.core.config import get_timesheet_settings
from burn.timetracker.models import JobCode, TimesheetEntry, User

logger = get_logger("burn.timetracker.client")

T = TypeVar("T")

# Safety stop for paginated collections
MAX_PAGES = 1000


class TimesheetClient:
    """Client for the ``jobcodes``, ``users`` and ``timesheets`` endpoints."""

    def __init__(self, base_url: str, token: str, timeout: float = 30):
        self.base_url = base_url.strip().rstrip("/")
        self.token = token
        self.timeout = timeout

    @classmethod
    def from_config(cls) -> "TimesheetClient":
        """Create client from the config.yaml timesheets section."""
        settings = get_timesheet_settings()
        return cls(settings["api_url"], settings["api_token"], settings["timeout"])

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.strip('/')}"

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        url = self._url(path)
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = requests.get(
                url, headers=self.headers, params=params, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code != 200:
            raise TransportError(f"{url} returned HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TransportError(f"{url} returned a non-JSON body") from exc

        if not isinstance(payload, dict):
            raise TransportError(f"{url} returned an unexpected payload")
        return payload

    def _collect(
        self,
        path: str,
        collection: str,
        decode: Callable[[Dict[str, Any]], T],
        params: Optional[Dict[str, str]] = None,
    ) -> List[T]:
        """
        Fetch every page of ``results.<collection>`` and decode each record.

        Pages are followed while the payload reports ``"more": true``.
        """
        records: List[T] = []
        page = 1
        while True:
            query = dict(params or {})
            if page > 1:
                query["page"] = str(page)
            payload = self._get(path, query or None)
            try:
                raw = payload["results"][collection]
                items = raw.values() if isinstance(raw, dict) else raw
                records.extend(decode(item) for item in items)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                raise TransportError(
                    f"Malformed '{collection}' payload from {self._url(path)}: {exc!r}"
                ) from exc

            if not payload.get("more") or page >= MAX_PAGES:
                break
            page += 1
        return records

    # --- Endpoints ---

    def fetch_jobcodes(self) -> Dict[int, JobCode]:
        """All job codes keyed by integer id."""
        codes = self._collect("jobcodes", "jobcodes", JobCode.from_api)
        logger.debug("Fetched %d job codes", len(codes))
        return {jc.id: jc for jc in codes}

    def fetch_users(self) -> Dict[int, User]:
        """All users keyed by integer id."""
        users = self._collect("users", "users", User.from_api)
        logger.debug("Fetched %d users", len(users))
        return {u.id: u for u in users}

    def fetch_timesheets(
        self,
        start: date,
        end: date,
        jobcode_ids: Optional[Iterable[int]] = None,
    ) -> List[TimesheetEntry]:
        """Timesheet entries dated within [start, end], optionally per job code."""
        params = {
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
        }
        ids = list(jobcode_ids or [])
        if ids:
            params["jobcode_ids"] = ",".join(str(i) for i in ids)
        entries = self._collect("timesheets", "timesheets", TimesheetEntry.from_api, params)
        logger.debug("Fetched %d timesheets for %s..%s", len(entries), start, end)
        return entries
