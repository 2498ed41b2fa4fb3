from __future__ import annotations

import json
import logging
from typing import Any

from dashboard_proxy.config import settings
from dashboard_proxy.errors import WebhookOutputError
from dashboard_proxy.services.http import HttpResult, post_json, preview

logger = logging.getLogger(__name__)


def _loads(text: str | None) -> Any:
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def call_webhook(
    question: str,
    dashboard: Any,
    property_id: str,
    property_full: str,
) -> HttpResult:
    payload = {
        "question": question,
        "dashboard": dashboard,
        "propertyId": property_id,
        "propertyFull": property_full,
    }
    return post_json(settings.n8n_webhook, payload)


def parse_webhook_output(body: str | None) -> dict[str, Any]:
    """Unwrap the automation reply into the wrapper the renderer expects.

    The reply may be the wrapper itself, an object whose ``body`` is the wrapper
    as a JSON string, or an n8n ``{"items": [{"json": wrapper}]}`` envelope.
    The wrapper must carry the dashboard under ``json``.
    """
    parsed = _loads(body)
    if isinstance(parsed, dict) and isinstance(parsed.get("body"), str):
        parsed = _loads(parsed["body"])
    if isinstance(parsed, dict) and "json" not in parsed:
        items = parsed.get("items")
        if isinstance(items, list) and items and isinstance(items[0], dict) and isinstance(items[0].get("json"), dict):
            parsed = items[0]["json"]

    if not isinstance(parsed, dict):
        raise WebhookOutputError(
            "Webhook returned non-JSON / invalid JSON.",
            {"raw_webhook_body_head": preview(body)},
        )
    if "json" not in parsed:
        raise WebhookOutputError(
            "Webhook JSON missing 'json' (dashboard).",
            {"parsed_keys": list(parsed.keys())},
        )
    logger.debug("webhook wrapper keys=%s", list(parsed.keys()))
    return parsed
