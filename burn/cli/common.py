"""Helpers shared by the CLI sub-commands."""

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

import typer

from burn.core import BurnError, ValidationError


def parse_date_option(value: Optional[str], label: str) -> Optional[date]:
    """Parse a YYYY-MM-DD option value; None passes through."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{label} must be a date in YYYY-MM-DD form: {value!r}") from None


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report any BurnError as 'Error: ...' and exit with status 1."""
    try:
        yield
    except BurnError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
