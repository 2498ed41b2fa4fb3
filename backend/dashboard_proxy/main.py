from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from dashboard_proxy.config import settings
from dashboard_proxy.errors import ProxyError, WebhookOutputError
from dashboard_proxy.services.http import preview
from dashboard_proxy.services.property_ids import extract_property_id
from dashboard_proxy.services.render_client import parse_render_output, request_render
from dashboard_proxy.services.webhook_client import call_webhook, parse_webhook_output

logger = logging.getLogger("dashboard_proxy")

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _configure_runtime_logging() -> None:
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.getLogger("dashboard_proxy").setLevel(level)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@app.on_event("startup")
def on_startup():
    _configure_runtime_logging()


def _format_debug_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError):
    logger.warning("RESPOND_ERROR %s: %s %s", exc.status_code, exc.message, _format_debug_value(exc.debug))
    text = exc.message
    if settings.debug_browser and exc.debug:
        lines = [f"{key}: {_format_debug_value(value)}" for key, value in exc.debug.items()]
        text = f"{exc.message}\n\n--- debug (short) ---\n" + "\n".join(lines) + "\n"
    return PlainTextResponse(text, status_code=exc.status_code)


def _health_text() -> str:
    return f"OK {datetime.now(timezone.utc).isoformat()}"


@app.get("/health", response_class=PlainTextResponse)
def health():
    return _health_text()


@app.get("/", response_class=PlainTextResponse)
def ping(ping: str = Query(default="")):
    if not ping:
        raise ProxyError(400, "Use POST /api/ask, or GET /?ping=1 for a health check.")
    logger.info("HEALTHCHECK")
    return _health_text()


def _require_configuration() -> None:
    if not settings.n8n_webhook or not settings.renderer_url:
        raise ProxyError(503, "Missing required settings (N8N_WEBHOOK and/or RENDERER_URL).")


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


@app.post("/api/ask")
async def ask(request: Request):
    _require_configuration()

    raw = (await request.body()).decode("utf-8", errors="replace")
    logger.info("INCOMING %s", {"method": request.method, "uri": str(request.url.path), "raw_len": len(raw)})
    try:
        body = json.loads(raw) if raw.strip() else None
    except ValueError:
        body = None
    body = body if isinstance(body, dict) else {}

    question = _as_text(body.get("question"))
    dashboard = body.get("dashboard")
    property_full = _as_text(body.get("propertyFull"))
    property_id = _as_text(body.get("propertyId"))
    if not property_id and property_full:
        property_id = extract_property_id(property_full)

    cookie_value = request.cookies.get(settings.selection_cookie, "")
    if not property_id and cookie_value:
        property_id = extract_property_id(cookie_value)
    logger.info(
        "PROPERTY_CTX %s",
        {"cookieGaProp": cookie_value, "propertyFull": property_full, "propertyId": property_id},
    )

    if not question:
        raise ProxyError(400, "Missing 'question' in JSON body.", {"received_head": raw[:300]})

    webhook = call_webhook(question, dashboard, property_id, property_full or cookie_value)
    logger.info(
        "WEBHOOK_RESULT %s",
        {"code": webhook.status_code, "err": webhook.error, "body_head": preview(webhook.body)},
    )
    if webhook.failed:
        raise ProxyError(
            502,
            f"Webhook error ({webhook.status_code}).",
            {"error": webhook.error, "info": webhook.info(), "body_head": preview(webhook.body)},
        )

    try:
        wrapper = parse_webhook_output(webhook.body)
    except WebhookOutputError as exc:
        raise ProxyError(502, str(exc), exc.debug) from exc

    rendered = request_render(wrapper, cookie_value)
    logger.info(
        "RENDER_RESULT %s",
        {"code": rendered.status_code, "err": rendered.error, "body_head": preview(rendered.body)},
    )
    if rendered.failed:
        raise ProxyError(
            502,
            f"Render error ({rendered.status_code}).",
            {"error": rendered.error, "info": rendered.info(), "renderer_reply_head": preview(rendered.body)},
        )

    return JSONResponse(parse_render_output(rendered), headers={"Cache-Control": "no-store"})
