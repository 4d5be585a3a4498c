"""
Ceiling Record Persistence

One JSON file per job (``job_<id>.json``) under the configured ceiling
directory:

    {
      "popEnd": "2025-12-31",
      "popStart": "2025-01-01",
      "releases": [
        {"date": "2025-01-15", "hours": 100.0, "id": "...", "note": null}
      ]
    }

Older files hold a bare list of releases; they load with no PoP dates.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from burn.ceiling.models import CeilingRecord, CeilingRelease, sort_releases
from burn.core import PersistenceError, get_logger
from burn.core.config import BURN_PATHS

logger = get_logger("burn.ceiling.store")


class CeilingStore:
    """Reads and writes per-job ceiling records."""

    def __init__(self, directory: Optional[Path] = None):
        self._directory = Path(directory) if directory is not None else None

    @property
    def directory(self) -> Path:
        if self._directory is None:
            self._directory = BURN_PATHS.ceiling_dir
        return self._directory

    def file_path(self, job_id: int) -> Path:
        return self.directory / f"job_{int(job_id)}.json"

    def load_record(self, job_id: int) -> CeilingRecord:
        """
        Load the record for a job; a missing file is an empty record.

        Raises:
            PersistenceError: If the file cannot be read or decoded.
        """
        path = self.file_path(job_id)
        if not path.exists():
            return CeilingRecord()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return CeilingRecord.from_data(data)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise PersistenceError(f"Could not read ceiling record {path}: {exc}") from exc

    def save_record(self, job_id: int, record: CeilingRecord) -> Path:
        """
        Write the full record (PoP + releases sorted by date), replacing atomically.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        path = self.file_path(job_id)
        payload = json.dumps(record.to_dict(), indent=2, sort_keys=True)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.stem}.", suffix=".tmp", dir=str(path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise PersistenceError(f"Could not write ceiling record {path}: {exc}") from exc

        logger.info(
            "Saved ceiling record for job %s (%d releases)", job_id, len(record.releases)
        )
        return path

    def save_releases(self, job_id: int, releases: List[CeilingRelease]) -> Path:
        """Replace a job's releases while keeping any stored PoP dates."""
        try:
            record = self.load_record(job_id)
        except PersistenceError as exc:
            logger.warning("Existing record unreadable, PoP not preserved: %s", exc)
            record = CeilingRecord()
        record.releases = sort_releases(list(releases))
        return self.save_record(job_id, record)

    def job_ids(self) -> List[int]:
        """Ids of jobs that have a stored record."""
        if not self.directory.exists():
            return []
        ids = []
        for path in self.directory.glob("job_*.json"):
            suffix = path.stem[len("job_"):]
            if suffix.isdigit():
                ids.append(int(suffix))
        return sorted(ids)


def load_record_or_empty(store: CeilingStore, job_id: int) -> CeilingRecord:
    """Load a job's record, falling back to an empty one if it is unreadable."""
    try:
        return store.load_record(job_id)
    except PersistenceError as exc:
        logger.warning("%s; continuing with an empty ceiling record", exc)
        return CeilingRecord()
