from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import requests

from dashboard_renderer.domain import PropertyRecord
from dashboard_renderer.services.property_normalizer import normalize_properties, properties_document
from dashboard_renderer.storage import read_text_if_exists, safe_json_loads, write_json

logger = logging.getLogger(__name__)

MSG_OK = "OK"
MSG_INVALID_FILE = "Property file exists but is empty or invalid."
MSG_NOT_JSON = "Webhook did not return JSON."
MSG_EMPTY = "No properties found in response."
MSG_NOT_CONFIGURED = "Properties webhook URL is not configured."


class PropertyCache(Protocol):
    def exists(self) -> bool:
        ...

    def read(self) -> Any:
        ...

    def write(self, document: dict[str, Any]) -> None:
        ...

    @property
    def name(self) -> str:
        ...


class FilePropertyCache:
    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return self.path.name

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> Any:
        return safe_json_loads(read_text_if_exists(self.path))

    def write(self, document: dict[str, Any]) -> None:
        write_json(self.path, document)


@dataclass
class PropertyLoad:
    ok: bool
    properties: list[PropertyRecord] = field(default_factory=list)
    message: str = ""
    refreshed: bool = False


def _fetch(url: str, timeout: int) -> tuple[int, str | None, str]:
    try:
        resp = requests.get(
            url,
            headers={"Accept": "application/json, */*;q=0.1"},
            timeout=timeout,
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        return 0, None, str(exc)
    return resp.status_code, resp.text, ""


def fetch_and_save_properties(url: str, cache: PropertyCache, *, timeout: int = 30) -> PropertyLoad:
    if not url:
        return PropertyLoad(ok=False, message=MSG_NOT_CONFIGURED, refreshed=True)

    code, body, err = _fetch(url, timeout)
    if body is None or code >= 400:
        logger.warning("property refresh failed code=%s err=%s", code, err)
        return PropertyLoad(ok=False, message=f"Failed to fetch properties ({code}): {err}", refreshed=True)

    parsed = safe_json_loads(body)
    if not parsed:
        return PropertyLoad(ok=False, message=MSG_NOT_JSON, refreshed=True)

    records = normalize_properties(parsed)
    if not records:
        return PropertyLoad(ok=False, message=MSG_EMPTY, refreshed=True)

    try:
        cache.write(properties_document(records))
    except OSError:
        logger.exception("could not persist property cache %s", cache.name)
        return PropertyLoad(
            ok=False,
            properties=records,
            message=f"Could not write to {cache.name}. Check permissions.",
            refreshed=True,
        )

    logger.info("property cache refreshed with %s properties", len(records))
    return PropertyLoad(ok=True, properties=records, message=MSG_OK, refreshed=True)


def load_properties(
    cache: PropertyCache,
    *,
    refresh: bool = False,
    webhook_url: str = "",
    timeout: int = 30,
) -> PropertyLoad:
    """Read the cached property list, refreshing it first when asked or when absent."""
    if refresh or not cache.exists():
        return fetch_and_save_properties(webhook_url, cache, timeout=timeout)

    records = normalize_properties(cache.read())
    if not records:
        return PropertyLoad(ok=False, message=MSG_INVALID_FILE)
    return PropertyLoad(ok=True, properties=records)
