from __future__ import annotations

import logging
from typing import Any

from dashboard_renderer.domain import RenderModel, WrapperMetadata
from dashboard_renderer.services.card_classifier import classify_cards, declared_order, key_cards
from dashboard_renderer.services.card_view import card_view
from dashboard_renderer.services.hero_selector import select_hero, without_hero
from dashboard_renderer.services.section_grouper import group_sections, section_key, take_explanation
from dashboard_renderer.services.shape_resolver import validate_dashboard

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 12
DEFAULT_MODE = "dark"
DEFAULT_ACCENT = "#27E1FF"


def build_render_model(dashboard: Any, metadata: WrapperMetadata | None = None) -> RenderModel:
    """KPI strip, optional hero chart, then sections.

    Raises ``DashboardSchemaError`` before any ordering work when ``dashboard``
    is not a valid dashboard object.
    """
    dashboard = validate_dashboard(dashboard)
    metadata = metadata or WrapperMetadata()

    keyed = key_cards(dashboard["cards"])
    order = declared_order(dashboard, keyed)

    partition = classify_cards(keyed, order)
    hero = select_hero(partition.others, order)

    hero_explanation: str | None = None
    printed: frozenset[str] = frozenset()
    if hero is not None:
        hero_explanation, printed = take_explanation(section_key(hero), metadata.section_explanations, printed)

    sections, _ = group_sections(
        without_hero(partition.others, hero),
        order,
        metadata.section_order,
        metadata.section_explanations,
        printed,
    )
    logger.debug(
        "render model: kpis=%s hero=%s sections=%s",
        len(partition.kpis),
        hero.key if hero else None,
        [section.key for section in sections],
    )
    return RenderModel(
        kpi_cards=partition.kpis,
        hero_card=hero,
        hero_explanation=hero_explanation,
        sections=sections,
    )


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def dashboard_meta(dashboard: dict[str, Any]) -> dict[str, Any]:
    theme = _as_dict(dashboard.get("theme"))
    layout = _as_dict(dashboard.get("layout"))
    try:
        columns = int(layout.get("columns", DEFAULT_COLUMNS))
    except (TypeError, ValueError):
        columns = DEFAULT_COLUMNS
    filters = dashboard.get("filters") if isinstance(dashboard.get("filters"), list) else []
    return {
        "version": str(dashboard.get("version")),
        "user_question": str(dashboard.get("user_question") or ""),
        "theme": {
            "accent": str(theme.get("accent") or DEFAULT_ACCENT),
            "mode": str(theme.get("mode") or DEFAULT_MODE).lower(),
            "brand": str(theme.get("brand") or ""),
        },
        "period": _as_dict(dashboard.get("period")),
        "filters": [row for row in filters if isinstance(row, dict)],
        "columns": columns,
        "agent_summary": str(dashboard.get("agent_summary") or ""),
    }


def serialize_render_model(model: RenderModel) -> dict[str, Any]:
    return {
        "kpi_cards": [card_view(card) for card in model.kpi_cards],
        "hero_card": card_view(model.hero_card) if model.hero_card else None,
        "hero_explanation": model.hero_explanation,
        "sections": [
            {
                "key": section.key,
                "title": section.title,
                "explanation": section.explanation,
                "cards": [card_view(card) for card in section.cards],
            }
            for section in model.sections
        ],
    }
