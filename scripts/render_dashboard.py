#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dashboard_renderer.errors import DashboardSchemaError
from dashboard_renderer.services.render_model import build_render_model, serialize_render_model
from dashboard_renderer.services.shape_resolver import extract_wrapper_metadata, resolve_payload
from dashboard_renderer.storage import safe_json_loads


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve an agent dashboard payload and print its render model.")
    parser.add_argument("input", type=Path, help="Path to the webhook payload or dashboard JSON.")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Optional output JSON path.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if not args.input.exists():
        print(f"Input not found: {args.input}")
        return 1

    payload = safe_json_loads(args.input.read_text(encoding="utf-8"))
    if not isinstance(payload, (dict, list)):
        print(f"Input is not a JSON object or list: {args.input}")
        return 1

    resolved = resolve_payload(payload)
    metadata = extract_wrapper_metadata(resolved)
    try:
        model = build_render_model(resolved.dashboard, metadata)
    except DashboardSchemaError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    report = {
        "answer": metadata.answer,
        "whatsnext": metadata.whatsnext,
        **serialize_render_model(model),
    }
    print(json.dumps(report, indent=2, ensure_ascii=False))
    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Wrote render model to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
