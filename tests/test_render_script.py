import importlib.util
import json
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "render_dashboard.py"


@pytest.fixture
def script():
    found = importlib.util.spec_from_file_location("render_dashboard_script", SCRIPT)
    module = importlib.util.module_from_spec(found)
    found.loader.exec_module(module)
    return module


def test_script_writes_render_model(script, tmp_path, monkeypatch, dashboard):
    src = tmp_path / "payload.json"
    out = tmp_path / "out" / "model.json"
    src.write_text(json.dumps([{"output": {"answer": "A"}, "json": dashboard}]), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["render_dashboard.py", str(src), "--out", str(out)])

    assert script.main() == 0
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["answer"] == "A"
    assert [card["key"] for card in report["kpi_cards"]] == ["kpi_b", "kpi_a"]


def test_script_rejects_invalid_dashboard(script, tmp_path, monkeypatch):
    src = tmp_path / "payload.json"
    src.write_text(json.dumps({"json": {"version": "1.0"}}), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["render_dashboard.py", str(src)])
    assert script.main() == 2
