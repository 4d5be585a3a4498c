"""
Failure types surfaced by Burn.

Every failure the engine reports to its caller is a BurnError subclass.
The ``kind`` attribute lets callers branch without isinstance chains.
"""


class BurnError(Exception):
    """Base class for all Burn failures."""

    kind = "error"


class ConfigurationError(BurnError):
    """Missing or malformed configuration (config.yaml, API settings)."""

    kind = "configuration"


class ValidationError(BurnError, ValueError):
    """User-correctable input problem, reported before any fetch occurs."""

    kind = "validation"


class TransportError(BurnError):
    """A timesheet API request failed or returned an undecodable payload."""

    kind = "transport"


class PersistenceError(BurnError):
    """A ceiling record could not be read or written."""

    kind = "persistence"
