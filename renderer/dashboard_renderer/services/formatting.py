"""
Formatting helpers for metric values and deltas shown in the KPI strip.
"""

from __future__ import annotations

import re
from typing import Any, Optional

_NUMBER_DECIMALS_RE = re.compile(r"number:(\d+)")

DELTA_ARROWS = {"up": "▲", "down": "▼"}
FLAT_ARROW = "■"


def as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def format_number(value: float, decimals: int = 0, thousands: str = " ") -> str:
    return f"{value:,.{decimals}f}".replace(",", thousands)


def format_metric_value(value: Any, fmt: str | None = "number") -> str:
    numeric = as_number(value)
    if numeric is None:
        return "" if value is None else str(value)

    fmt = str(fmt or "number")
    if fmt.startswith("number"):
        match = _NUMBER_DECIMALS_RE.search(fmt)
        return format_number(numeric, int(match.group(1)) if match else 0)
    if fmt == "currency":
        return format_number(numeric, 2)
    if fmt == "percent":
        return format_number(numeric * 100, 1, thousands=",") + "%"
    return str(value)


def format_delta(value: Any) -> str:
    numeric = as_number(value)
    if numeric is None:
        return "" if value is None else str(value)
    return format_number(numeric * 100, 1, thousands=",") + "%"


def delta_arrow(direction: Any) -> str:
    return DELTA_ARROWS.get(str(direction or "").lower(), FLAT_ARROW)
