"""Group non-KPI cards into titled sections.

A card's section comes from the leading segment of its title, cut at the
first ``•``, ``:`` or ``-``:

    "Acquisition • ROAS"   -> "acquisition"
    "Acquisition: Spend"   -> "acquisition"
    "Methodology"          -> "methodology"
    ""                     -> "other"

Sections sort by the producer's priority map (missing keys get
``DEFAULT_SECTION_PRIORITY``), ties broken alphabetically, so the order is
reproducible even without hints.
"""

from __future__ import annotations

import re
from functools import reduce
from typing import Any, Iterable, Mapping, Sequence

from dashboard_renderer.domain import KeyedCard, Section
from dashboard_renderer.services.card_classifier import order_by_declared

FALLBACK_SECTION = "other"
DEFAULT_SECTION_PRIORITY = 9999

_SECTION_PREFIX_RE = re.compile(r"^\s*([^•:\-]+)\s*[•:\-]")


def section_key_for_title(title: Any) -> str:
    text = "" if title is None else str(title)
    if text == "":
        return FALLBACK_SECTION
    match = _SECTION_PREFIX_RE.match(text)
    if match:
        key = match.group(1).strip().lower()
    else:
        key = text.strip().lower()
    return key or FALLBACK_SECTION


def section_key(card: KeyedCard | dict[str, Any]) -> str:
    payload = card.card if isinstance(card, KeyedCard) else card
    return section_key_for_title(payload.get("title"))


def _bucket(
    buckets: dict[str, tuple[KeyedCard, ...]], card: KeyedCard
) -> dict[str, tuple[KeyedCard, ...]]:
    key = section_key(card)
    return {**buckets, key: buckets.get(key, ()) + (card,)}


def bucket_cards(cards: Iterable[KeyedCard]) -> dict[str, tuple[KeyedCard, ...]]:
    """Bucket cards by section key; keys keep first-encountered order."""
    return reduce(_bucket, cards, {})


def sort_section_keys(keys: Iterable[str], priority: Mapping[str, int]) -> list[str]:
    return sorted(keys, key=lambda key: (priority.get(key.lower(), DEFAULT_SECTION_PRIORITY), key))


def take_explanation(
    key: str, explanations: Mapping[str, str], printed: frozenset[str]
) -> tuple[str | None, frozenset[str]]:
    """Return the section's explanation unless one was already emitted for ``key``."""
    text = explanations.get(key.lower())
    if not text or key in printed:
        return None, printed
    return text, printed | {key}


def group_sections(
    cards: Iterable[KeyedCard],
    order: Sequence[str],
    priority: Mapping[str, int],
    explanations: Mapping[str, str],
    printed: frozenset[str] = frozenset(),
) -> tuple[tuple[Section, ...], frozenset[str]]:
    buckets = bucket_cards(cards)
    sections: list[Section] = []
    for key in sort_section_keys(buckets, priority):
        explanation, printed = take_explanation(key, explanations, printed)
        sections.append(
            Section(
                key=key,
                explanation=explanation,
                cards=order_by_declared(buckets[key], order),
            )
        )
    return tuple(sections), printed
