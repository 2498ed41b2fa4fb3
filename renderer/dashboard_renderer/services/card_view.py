from __future__ import annotations

import re
from typing import Any

from dashboard_renderer.domain import KeyedCard
from dashboard_renderer.services.formatting import delta_arrow, format_delta, format_metric_value

MIN_COL_SPAN = 1
MAX_COL_SPAN = 12

_DOM_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_-]")


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def col_span(card: dict[str, Any]) -> int:
    raw = _as_dict(card.get("layout")).get("colSpan", MAX_COL_SPAN)
    try:
        span = int(raw)
    except (TypeError, ValueError):
        span = 0
    return max(MIN_COL_SPAN, min(MAX_COL_SPAN, span))


def dom_id(key: str) -> str:
    return _DOM_UNSAFE_RE.sub("_", key)


def chart_config(keyed: KeyedCard) -> dict[str, Any]:
    card = keyed.card
    return {
        "id": dom_id(keyed.key),
        "viz": card.get("viz") or "line",
        "series": _as_list(card.get("series")),
        "compare_series": _as_list(card.get("compare_series")),
    }


def _metric_view(card: dict[str, Any]) -> dict[str, Any]:
    metric = _as_dict(card.get("metric"))
    delta = _as_dict(metric.get("delta"))
    view: dict[str, Any] = {
        "value": metric.get("value"),
        "display_value": format_metric_value(metric.get("value"), metric.get("format") or "number"),
        "unit": str(metric.get("unit") or ""),
        "annotation": str(metric.get("annotation") or ""),
        "delta": None,
    }
    if delta.get("value") is not None:
        view["delta"] = {
            "value": delta["value"],
            "display_value": format_delta(delta["value"]),
            "direction": str(delta.get("direction") or "").lower(),
            "arrow": delta_arrow(delta.get("direction")),
            "vs": str(delta.get("vs") or ""),
        }
    return view


def _table_view(card: dict[str, Any]) -> dict[str, Any]:
    columns = [str(col) for col in _as_list(card.get("columns"))]
    rows: list[list[str]] = []
    for row in _as_list(card.get("rows")):
        if isinstance(row, list):
            rows.append(["" if cell is None else str(cell) for cell in row])
        elif isinstance(row, dict):
            rows.append(["" if row.get(col) is None else str(row.get(col)) for col in columns])
        else:
            # Scalar rows span the whole table.
            rows.append(["" if row is None else str(row)])
    return {"columns": columns, "rows": rows}


def _insight_view(card: dict[str, Any]) -> dict[str, Any]:
    items = []
    for item in _as_list(card.get("items")):
        item = _as_dict(item)
        items.append({"emoji": str(item.get("emoji") or "💡"), "text": str(item.get("text") or "")})
    return {"items": items}


def _callout_view(card: dict[str, Any]) -> dict[str, Any]:
    return {
        "variant": str(card.get("variant") or "info").lower(),
        "body": str(card.get("body") or ""),
    }


def card_view(keyed: KeyedCard) -> dict[str, Any]:
    card = keyed.card
    card_type = keyed.type or "unknown"
    view: dict[str, Any] = {
        "key": keyed.key,
        "dom_id": dom_id(keyed.key),
        "type": card_type,
        "title": str(card.get("title") or card_type[:1].upper() + card_type[1:]),
        "subtitle": str(card.get("subtitle") or ""),
        "col_span": col_span(card),
        "agent_summary": str(card.get("agent_summary") or "").strip(),
        "card": card,
    }
    if card_type == "metric":
        view["metric"] = _metric_view(card)
    elif card_type == "chart":
        view["chart"] = chart_config(keyed)
    elif card_type == "table":
        view["table"] = _table_view(card)
    elif card_type == "insight":
        view["insight"] = _insight_view(card)
    elif card_type == "callout":
        view["callout"] = _callout_view(card)
    return view
