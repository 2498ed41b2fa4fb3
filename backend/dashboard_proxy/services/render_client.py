from __future__ import annotations

import json
from typing import Any

from dashboard_proxy.config import settings
from dashboard_proxy.errors import ProxyError
from dashboard_proxy.services.http import HttpResult, post_json, preview


def renderer_headers(selection_cookie_value: str = "") -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if settings.render_key:
        headers["X-Render-Key"] = settings.render_key
    if selection_cookie_value:
        # Only the selection cookie is forwarded; other browser cookies stay here.
        headers["Cookie"] = f"{settings.selection_cookie}={selection_cookie_value}"
    return headers


def request_render(wrapper: dict[str, Any], selection_cookie_value: str = "") -> HttpResult:
    return post_json(
        f"{settings.renderer_url.rstrip('/')}/render",
        wrapper,
        headers=renderer_headers(selection_cookie_value),
        timeout=settings.timeout_sec,
    )


def _is_render_model(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("sections"), list)


def parse_render_output(result: HttpResult) -> dict[str, Any]:
    try:
        parsed = json.loads(result.body or "")
    except ValueError:
        parsed = None
    # Some stacks wrap the reply as {"body": "<json>"}.
    if not _is_render_model(parsed) and isinstance(parsed, dict) and isinstance(parsed.get("body"), str):
        try:
            parsed = json.loads(parsed["body"])
        except ValueError:
            parsed = None
    if not _is_render_model(parsed):
        raise ProxyError(
            502,
            "Renderer did not return a render model.",
            {"renderer_body_head": preview(result.body)},
        )
    return parsed
