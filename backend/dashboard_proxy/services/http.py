from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import requests

from dashboard_proxy.config import settings

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/html;q=0.9, */*;q=0.1",
}


@dataclass
class HttpResult:
    status_code: int
    body: str | None
    error: str = ""
    url: str = ""

    @property
    def failed(self) -> bool:
        return self.body is None or self.status_code >= 400

    def info(self) -> dict[str, Any]:
        return {"url": self.url, "http_code": self.status_code}


def preview(text: str | None, limit: int | None = None) -> str:
    limit = settings.log_preview_chars if limit is None else limit
    raw = str(text or "")
    return raw[:limit]


def post_json(
    url: str,
    payload: Any,
    *,
    headers: dict[str, str] | None = None,
    timeout: int | None = None,
) -> HttpResult:
    """POST ``payload`` as JSON; transport failures come back as a result, not an exception."""
    body = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    merged = {**DEFAULT_HEADERS, "User-Agent": settings.user_agent, **(headers or {})}
    try:
        resp = requests.post(
            url,
            data=body.encode("utf-8"),
            headers=merged,
            timeout=timeout or settings.timeout_sec,
            verify=settings.ssl_verify,
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        return HttpResult(status_code=0, body=None, error=str(exc), url=url)
    return HttpResult(status_code=resp.status_code, body=resp.text, url=resp.url or url)
