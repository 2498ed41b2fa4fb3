from __future__ import annotations

import sys
from typing import Any, Iterable, Sequence

from dashboard_renderer.domain import CardPartition, KeyedCard

KPI_TYPE = "metric"
PLACEHOLDER_PREFIX = "card_"
UNRANKED = sys.maxsize


def _card_id(card: Any) -> str:
    if not isinstance(card, dict):
        return ""
    raw = card.get("id")
    if raw is None or isinstance(raw, (dict, list)):
        return ""
    return str(raw)


def key_cards(cards: Iterable[Any]) -> tuple[KeyedCard, ...]:
    """Attach an ordering key to every card.

    Cards without an id get a ``card_<n>`` placeholder that does not collide
    with any real id or any other placeholder in the same list. Placeholders
    never match a declared order token. Non-object entries are dropped.
    """
    card_list = [card for card in cards if isinstance(card, dict)]
    taken = {_card_id(card) for card in card_list} - {""}
    keyed: list[KeyedCard] = []
    counter = 0
    for position, card in enumerate(card_list):
        key = _card_id(card)
        has_id = bool(key)
        if not has_id:
            key = f"{PLACEHOLDER_PREFIX}{counter}"
            while key in taken:
                counter += 1
                key = f"{PLACEHOLDER_PREFIX}{counter}"
            taken.add(key)
            counter += 1
        keyed.append(KeyedCard(key=key, position=position, card=card, has_id=has_id))
    return tuple(keyed)


def declared_order(dashboard: dict[str, Any], keyed: Sequence[KeyedCard]) -> tuple[str, ...]:
    layout = dashboard.get("layout") if isinstance(dashboard.get("layout"), dict) else {}
    raw_order = layout.get("cards_order")
    if isinstance(raw_order, list):
        return tuple(str(item) for item in raw_order if isinstance(item, (str, int)) and not isinstance(item, bool))
    return tuple(card.key for card in keyed)


def rank_index(order: Sequence[str]) -> dict[str, int]:
    ranks: dict[str, int] = {}
    for idx, card_id in enumerate(order):
        ranks.setdefault(card_id, idx)
    return ranks


def order_by_declared(cards: Iterable[KeyedCard], order: Sequence[str]) -> tuple[KeyedCard, ...]:
    # sorted() is stable: unranked cards keep their encountered order.
    ranks = rank_index(order)
    return tuple(sorted(cards, key=lambda card: ranks.get(card.declared_id, UNRANKED)))


def is_kpi(card: KeyedCard) -> bool:
    return card.type == KPI_TYPE


def classify_cards(cards: Iterable[KeyedCard], order: Sequence[str]) -> CardPartition:
    card_list = tuple(cards)
    kpis = tuple(card for card in card_list if is_kpi(card))
    others = tuple(card for card in card_list if not is_kpi(card))
    return CardPartition(kpis=order_kpis(kpis, order), others=others)


def order_kpis(kpis: Iterable[KeyedCard], order: Sequence[str]) -> tuple[KeyedCard, ...]:
    return order_by_declared(kpis, order)
