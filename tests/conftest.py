import json

import pytest
from fastapi.testclient import TestClient

from dashboard_renderer.config import settings as renderer_settings
from dashboard_renderer.main import app as renderer_app, get_property_cache
from dashboard_renderer.services.property_source import FilePropertyCache


class FakeResponse:
    def __init__(self, status_code=200, text="", url="http://fake.local/"):
        self.status_code = status_code
        self.text = text
        self.url = url


@pytest.fixture
def dashboard():
    return {
        "version": "1.0",
        "layout": {"columns": 12, "cards_order": ["kpi_b", "kpi_a", "trend", "tbl", "note"]},
        "cards": [
            {"id": "kpi_a", "type": "metric", "title": "Acquisition • ROAS", "metric": {"value": 4.2, "format": "number:1"}},
            {"id": "kpi_b", "type": "Metric", "title": "Ads • Spend", "metric": {"value": 6240.5, "format": "currency"}},
            {"id": "tbl", "type": "table", "title": "Ads • Top Campaigns", "columns": ["campaign"], "rows": [["Brand"]]},
            {"id": "trend", "type": "chart", "title": "Engagement • Sessions", "series": []},
            {"id": "note", "type": "callout", "title": "Methodology", "body": "GA4 revenue."},
        ],
    }


@pytest.fixture
def property_cache(tmp_path):
    return FilePropertyCache(tmp_path / "ga_properties.json")


@pytest.fixture
def renderer_client(tmp_path, property_cache, monkeypatch):
    input_dir = tmp_path / "inputs"
    input_dir.mkdir()
    monkeypatch.setattr(renderer_settings, "input_dir", input_dir)
    monkeypatch.setattr(renderer_settings, "render_key", None)
    monkeypatch.setattr(renderer_settings, "prop_webhook_url", "")
    renderer_app.dependency_overrides[get_property_cache] = lambda: property_cache
    yield TestClient(renderer_app)
    renderer_app.dependency_overrides.clear()


@pytest.fixture
def cached_properties(property_cache):
    property_cache.write(
        {
            "accounts_and_properties": [
                {"accountId": "1", "propertyId": "properties/111", "displayName": "Site A"},
                {"accountId": "1", "propertyId": "properties/222", "displayName": "Site B"},
            ]
        }
    )
    return property_cache


@pytest.fixture
def fake_response():
    def _make(status_code=200, payload=None, text=None, url="http://fake.local/"):
        body = text if text is not None else json.dumps(payload)
        return FakeResponse(status_code=status_code, text=body, url=url)

    return _make
