"""
Output formatters for CLI display.

Fixed-width tables for the terminal, JSON for scripting.
"""

import json
from dataclasses import asdict, is_dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence


def format_json(result: Any) -> str:
    """Serialize a result object (``to_dict()``, dataclass or dict) as indented JSON."""
    return json.dumps(_to_dict(result), indent=2, default=_json_default)


def format_hours(value: Optional[float]) -> str:
    """Render an hour total the way the chart footer does ("1,234.5 h")."""
    if value is None:
        return "-"
    return f"{value:,.1f} h"


def format_table(headers: Sequence[str], rows: List[Sequence[Any]]) -> str:
    """Render rows as a fixed-width text table, right-aligning numbers."""
    cells = [[_cell(v) for v in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, text in enumerate(row):
            widths[i] = max(widths[i], len(text))

    numeric = [
        bool(rows) and all(isinstance(r[i], (int, float)) or r[i] is None for r in rows)
        for i in range(len(headers))
    ]

    def _line(values: Sequence[str]) -> str:
        parts = []
        for i, text in enumerate(values):
            parts.append(text.rjust(widths[i]) if numeric[i] else text.ljust(widths[i]))
        return "  " + "  ".join(parts).rstrip()

    lines = [_line(headers), "  " + "  ".join(chr(9472) * w for w in widths)]
    lines.extend(_line(row) for row in cells)
    return "\n".join(lines)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def _to_dict(result: Any) -> Dict:
    if hasattr(result, "to_dict"):
        return result.to_dict()
    elif is_dataclass(result):
        return asdict(result)
    elif isinstance(result, dict):
        return result
    return {"value": str(result)}


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
