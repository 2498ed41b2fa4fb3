from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import unquote

from dashboard_renderer.domain import PropertyRecord, SelectionResult

PROPERTY_PREFIX = "properties/"

_DIGITS_RE = re.compile(r"^\d+$")


def canonicalize_property_token(token: str | None) -> str:
    """``"77"`` -> ``"properties/77"``; ``"properties%2F77"`` -> ``"properties/77"``."""
    decoded = unquote(str(token or "")).strip()
    if _DIGITS_RE.match(decoded):
        return f"{PROPERTY_PREFIX}{decoded}"
    return decoded


def resolve_selection(
    persisted: str | None,
    properties: Sequence[PropertyRecord],
    forwarded_hint: str | None = None,
) -> SelectionResult:
    forwarded = canonicalize_property_token(forwarded_hint)
    if forwarded:
        return SelectionResult(token=forwarded, write_through=True)

    stored = canonicalize_property_token(persisted)
    if stored:
        return SelectionResult(token=stored)

    if properties:
        return SelectionResult(token=canonicalize_property_token(properties[0].propertyId))
    return SelectionResult(token="")
