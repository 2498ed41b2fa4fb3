"""Locate the canonical dashboard object inside an arbitrarily wrapped payload.

Producers wrap the same dashboard in different envelopes: a bare dashboard,
a list whose first item carries a ``json`` or ``dashboard`` key, or an object
keyed by ``dashboard``/``json``/``data``/``body``. Resolution is an ordered
chain of small predicate-and-extract rules. A second step runs only when the
first result is still a versionless object holding a ``json`` container. There
is no recursive search: the first rule that matches wins.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from dashboard_renderer.domain import ResolvedPayload, WrapperMetadata
from dashboard_renderer.errors import DashboardSchemaError

logger = logging.getLogger(__name__)

CONTAINER_KEYS = ("dashboard", "json", "data", "body")
LIST_ITEM_KEYS = ("json", "dashboard")
FORWARDED_PROPERTY_KEYS = ("selectedProperty", "propertyFull", "propertyId")

UnwrapRule = Callable[[Any], Any]


def is_dashboard(value: Any) -> bool:
    return isinstance(value, dict) and value.get("version") is not None and isinstance(value.get("cards"), list)


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _first_list_item(value: Any) -> Any:
    if not isinstance(value, list) or not value:
        return None
    first = value[0]
    if isinstance(first, dict):
        for key in LIST_ITEM_KEYS:
            if _is_container(first.get(key)):
                return first[key]
    return first


def _first_container_key(value: Any) -> Any:
    if not isinstance(value, dict):
        return None
    for key in CONTAINER_KEYS:
        if _is_container(value.get(key)):
            return value[key]
    return None


_UNWRAP_RULES: tuple[UnwrapRule, ...] = (
    _first_list_item,
    _first_container_key,
)


def unwrap_once(value: Any) -> Any:
    """Apply the first matching unwrap rule, or return ``value`` unchanged."""
    if is_dashboard(value):
        return value
    for rule in _UNWRAP_RULES:
        extracted = rule(value)
        if extracted is not None:
            return extracted
    return value


def _needs_json_unwrap(value: Any) -> bool:
    return isinstance(value, dict) and value.get("version") is None and _is_container(value.get("json"))


def candidate_container(payload: Any) -> dict[str, Any]:
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        return payload[0]
    if isinstance(payload, dict):
        return payload
    return {}


def _text_field(container: dict[str, Any], key: str) -> str:
    output = container.get("output")
    if isinstance(output, dict) and isinstance(output.get(key), str):
        return output[key]
    if isinstance(container.get(key), str):
        return container[key]
    return ""


def resolve_payload(payload: Any) -> ResolvedPayload:
    container = candidate_container(payload)
    answer = _text_field(container, "answer")
    whatsnext = _text_field(container, "whatsnext")

    dashboard = unwrap_once(container)
    if _needs_json_unwrap(dashboard):
        dashboard = unwrap_once(dashboard)

    logger.debug("resolved payload: dashboard=%s answer=%s", is_dashboard(dashboard), bool(answer))
    return ResolvedPayload(
        dashboard=dashboard,
        answer=answer,
        whatsnext=whatsnext,
        original=payload,
        container=container,
    )


def validate_dashboard(value: Any) -> dict[str, Any]:
    if not is_dashboard(value):
        raise DashboardSchemaError()
    return value


def _as_priority(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _normalize_key(key: Any) -> str:
    return str(key).strip().lower()


def _forwarded_property(container: dict[str, Any]) -> str:
    # First present key wins, even when it holds an empty string.
    for key in FORWARDED_PROPERTY_KEYS:
        value = container.get(key)
        if value is None:
            continue
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
        return ""
    return ""


def extract_wrapper_metadata(resolved: ResolvedPayload) -> WrapperMetadata:
    container = resolved.container
    output = container.get("output") if isinstance(container.get("output"), dict) else {}
    raw_order = output.get("order") if isinstance(output.get("order"), dict) else {}
    raw_explanations = output.get("explanations") if isinstance(output.get("explanations"), dict) else {}

    return WrapperMetadata(
        answer=resolved.answer,
        whatsnext=resolved.whatsnext,
        section_order={_normalize_key(k): _as_priority(v) for k, v in raw_order.items()},
        section_explanations={
            _normalize_key(k): "" if v is None else str(v) for k, v in raw_explanations.items()
        },
        forwarded_property=_forwarded_property(container),
    )
