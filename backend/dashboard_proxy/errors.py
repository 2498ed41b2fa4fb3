from __future__ import annotations

from typing import Any


class ProxyError(Exception):
    def __init__(self, status_code: int, message: str, debug: dict[str, Any] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.debug = debug or {}


class WebhookOutputError(ValueError):
    def __init__(self, message: str, debug: dict[str, Any] | None = None):
        super().__init__(message)
        self.debug = debug or {}
