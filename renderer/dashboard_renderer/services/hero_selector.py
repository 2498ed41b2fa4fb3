from __future__ import annotations

from typing import Iterable, Sequence

from dashboard_renderer.domain import KeyedCard

HERO_TYPE = "chart"


def select_hero(others: Iterable[KeyedCard], order: Sequence[str]) -> KeyedCard | None:
    """Pick the chart promoted above the sections.

    Only ids named in the declared order are considered. A chart card that the
    producer left out of the declared order is never promoted, even when it is
    the only chart on the dashboard; it stays in its section instead.
    """
    charts: dict[str, KeyedCard] = {}
    for card in others:
        if card.has_id and card.type == HERO_TYPE:
            charts.setdefault(card.key, card)
    for card_id in order:
        if card_id in charts:
            return charts[card_id]
    return None


def without_hero(cards: Iterable[KeyedCard], hero: KeyedCard | None) -> tuple[KeyedCard, ...]:
    if hero is None:
        return tuple(cards)
    return tuple(card for card in cards if card.position != hero.position)
