from __future__ import annotations

import logging
import secrets
from pathlib import Path
from typing import Any
from urllib.parse import unquote

from fastapi import Depends, FastAPI, Form, Header, HTTPException, Query, Request, Response
from fastapi.responses import RedirectResponse
from starlette.datastructures import UploadFile

from dashboard_renderer.config import settings
from dashboard_renderer.errors import DashboardSchemaError
from dashboard_renderer.schemas import PropertiesOut, PropertyOut, RenderOut
from dashboard_renderer.services.property_selection import resolve_selection
from dashboard_renderer.services.property_source import FilePropertyCache, PropertyCache, load_properties
from dashboard_renderer.services.render_model import build_render_model, dashboard_meta, serialize_render_model
from dashboard_renderer.services.sample_dashboard import sample_dashboard
from dashboard_renderer.services.shape_resolver import extract_wrapper_metadata, resolve_payload
from dashboard_renderer.storage import read_text_if_exists, safe_json_loads

logger = logging.getLogger("dashboard_renderer")

EXAMPLE_FILE = "example.json"
UPLOAD_FIELDS = ("file", "jsonfile")
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")

app = FastAPI(title=settings.app_name)


def _configure_runtime_logging() -> None:
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.getLogger("dashboard_renderer").setLevel(level)


@app.on_event("startup")
def on_startup():
    _configure_runtime_logging()


@app.get("/health")
def health():
    return {"status": "ok"}


def get_property_cache() -> PropertyCache:
    return FilePropertyCache(settings.prop_file)


def require_render_key(x_render_key: str | None = Header(default=None)) -> None:
    expected = settings.render_key
    if not expected:
        return
    if not x_render_key or not secrets.compare_digest(x_render_key, expected):
        raise HTTPException(status_code=401, detail="Missing or invalid render key")


def _read_local_input(name: str | None) -> str | None:
    if not name:
        return None
    # Only bare file names inside the input directory are served.
    return read_text_if_exists(settings.input_dir / Path(name).name)


async def _read_json_input(request: Request) -> tuple[str | None, bool]:
    """Return the raw dashboard text and whether the built-in sample must be used.

    Sources, first non-blank wins: ``?file=``, an uploaded ``file``/``jsonfile``,
    a ``json`` form or query field, the raw body, then ``example.json``. None
    of them present means the built-in sample is rendered.
    """
    text = _read_local_input(request.query_params.get("file"))
    if text and text.strip():
        return text, False

    content_type = request.headers.get("content-type", "")
    is_form = request.method == "POST" and content_type.startswith(FORM_CONTENT_TYPES)
    form_json: str | None = None
    if is_form:
        form = await request.form()
        for field_name in UPLOAD_FIELDS:
            upload = form.get(field_name)
            if isinstance(upload, UploadFile):
                raw = (await upload.read()).decode("utf-8", errors="replace")
                if raw.strip():
                    return raw, False
        value = form.get("json")
        form_json = value if isinstance(value, str) else None

    for candidate in (form_json, request.query_params.get("json")):
        if candidate and candidate.strip():
            return candidate, False

    if not is_form:
        body = (await request.body()).decode("utf-8", errors="replace")
        if body.strip():
            return body, False

    example = read_text_if_exists(settings.input_dir / EXAMPLE_FILE)
    if example and example.strip():
        return example, False
    return None, True


def _build_properties(
    request: Request,
    response: Response,
    cache: PropertyCache,
    *,
    refresh: bool,
    forwarded_hint: str = "",
) -> PropertiesOut:
    loaded = load_properties(
        cache,
        refresh=refresh,
        webhook_url=settings.prop_webhook_url,
        timeout=settings.prop_timeout,
    )
    selection = resolve_selection(
        request.cookies.get(settings.selection_cookie),
        loaded.properties,
        forwarded_hint,
    )
    if selection.write_through:
        response.set_cookie(
            settings.selection_cookie,
            selection.token,
            max_age=settings.selection_cookie_max_age,
            path="/",
        )
    return PropertiesOut(
        properties=[PropertyOut(**record.as_dict(), label=record.label) for record in loaded.properties],
        message=loaded.message,
        refreshed=loaded.refreshed,
        selected_property=selection.token,
    )


@app.api_route("/render", methods=["GET", "POST"], response_model=RenderOut)
async def render_dashboard(
    request: Request,
    response: Response,
    refresh: str | None = Query(default=None),
    cache: PropertyCache = Depends(get_property_cache),
    _: None = Depends(require_render_key),
):
    raw, use_sample = await _read_json_input(request)
    payload: Any = sample_dashboard() if use_sample else safe_json_loads(raw)
    if not isinstance(payload, (dict, list)):
        logger.info("dashboard input is not a JSON object, rendering sample dashboard")
        payload, use_sample = sample_dashboard(), True

    resolved = resolve_payload(payload)
    metadata = extract_wrapper_metadata(resolved)
    try:
        model = build_render_model(resolved.dashboard, metadata)
    except DashboardSchemaError as exc:
        logger.warning("rejected dashboard payload: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    properties = _build_properties(
        request,
        response,
        cache,
        refresh=refresh == "1",
        forwarded_hint=metadata.forwarded_property,
    )
    return RenderOut(
        **serialize_render_model(model),
        is_fallback=use_sample,
        dashboard=dashboard_meta(resolved.dashboard),
        answer=metadata.answer,
        whatsnext=metadata.whatsnext,
        properties=properties,
        context=resolved.original,
    )


@app.get("/properties", response_model=PropertiesOut)
def list_properties(
    request: Request,
    response: Response,
    refresh: str | None = Query(default=None),
    cache: PropertyCache = Depends(get_property_cache),
    _: None = Depends(require_render_key),
):
    return _build_properties(request, response, cache, refresh=refresh == "1")


@app.post("/property")
def select_property(request: Request, property_token: str = Form(..., alias="property")):
    # Accepts "properties%2F250097593" or "properties/250097593".
    selected = unquote(property_token)
    redirect = RedirectResponse(url=str(request.url_for("render_dashboard")), status_code=303)
    redirect.set_cookie(
        settings.selection_cookie,
        selected,
        max_age=settings.selection_cookie_max_age,
        path="/",
    )
    return redirect
