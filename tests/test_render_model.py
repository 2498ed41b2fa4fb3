import pytest

from dashboard_renderer.domain import WrapperMetadata
from dashboard_renderer.errors import DashboardSchemaError
from dashboard_renderer.services.card_classifier import key_cards
from dashboard_renderer.services.card_view import card_view, col_span, dom_id
from dashboard_renderer.services.formatting import delta_arrow, format_delta, format_metric_value
from dashboard_renderer.services.render_model import build_render_model, dashboard_meta, serialize_render_model
from dashboard_renderer.services.sample_dashboard import sample_dashboard


def test_render_model_layout(dashboard):
    model = build_render_model(dashboard)

    assert [card.key for card in model.kpi_cards] == ["kpi_b", "kpi_a"]
    assert model.hero_card.key == "trend"
    assert [section.key for section in model.sections] == ["ads", "methodology"]
    assert [card.key for card in model.sections[0].cards] == ["tbl"]


def test_hero_stays_out_of_sections(dashboard):
    model = build_render_model(dashboard)
    section_keys = [card.key for section in model.sections for card in section.cards]
    assert "trend" not in section_keys


def test_undeclared_chart_is_not_promoted():
    dash = {
        "version": "1",
        "layout": {"cards_order": ["c1"]},
        "cards": [
            {"id": "c1", "type": "chart", "title": "Engagement • A"},
            {"id": "c2", "type": "chart", "title": "Engagement • B"},
        ],
    }
    model = build_render_model(dash)
    assert model.hero_card.key == "c1"
    assert [card.key for card in model.sections[0].cards] == ["c2"]

    dash["cards"] = dash["cards"][1:]
    model = build_render_model(dash)
    assert model.hero_card is None
    assert [card.key for card in model.sections[0].cards] == ["c2"]


def test_missing_cards_order_uses_card_order():
    dash = {
        "version": "1",
        "cards": [
            {"id": "m", "type": "metric"},
            {"type": "chart", "title": "Trend"},
            {"id": "c", "type": "chart", "title": "Trend: second"},
        ],
    }
    model = build_render_model(dash)
    assert model.hero_card.key == "c"
    assert [card.position for card in model.sections[0].cards] == [1]


def test_card_without_id_never_matches_declared_token():
    dash = {
        "version": "1",
        "layout": {"cards_order": ["card_0"]},
        "cards": [{"type": "chart", "title": "Traffic • Sessions"}],
    }
    model = build_render_model(dash)
    assert model.hero_card is None
    assert [card.key for card in model.sections[0].cards] == ["card_0"]


def test_hero_explanation_is_not_repeated(dashboard):
    metadata = WrapperMetadata(
        section_order={"methodology": 1},
        section_explanations={"engagement": "Traffic story.", "methodology": "How we count."},
    )
    dashboard["cards"].append({"id": "eng2", "type": "table", "title": "Engagement • Pages"})
    model = build_render_model(dashboard, metadata)

    assert model.hero_explanation == "Traffic story."
    assert [section.key for section in model.sections] == ["methodology", "ads", "engagement"]
    explanations = {section.key: section.explanation for section in model.sections}
    assert explanations == {"methodology": "How we count.", "ads": None, "engagement": None}


def test_schema_error_produces_no_model():
    with pytest.raises(DashboardSchemaError):
        build_render_model({"version": "1.0"})
    with pytest.raises(DashboardSchemaError):
        build_render_model(None)


def test_serialized_model_carries_presentation_fields(dashboard):
    data = serialize_render_model(build_render_model(dashboard))

    assert data["hero_card"]["chart"] == {"id": "trend", "viz": "line", "series": [], "compare_series": []}
    assert data["kpi_cards"][0]["metric"]["display_value"] == "6 240.50"
    assert data["sections"][1]["title"] == "Methodology"
    assert data["sections"][1]["cards"][0]["callout"] == {"variant": "info", "body": "GA4 revenue."}
    assert data["sections"][0]["cards"][0]["table"] == {"columns": ["campaign"], "rows": [["Brand"]]}


def test_dashboard_meta_defaults():
    meta = dashboard_meta({"version": 1, "cards": [], "theme": {"mode": "LIGHT"}})
    assert meta["version"] == "1"
    assert meta["columns"] == 12
    assert meta["theme"] == {"accent": "#27E1FF", "mode": "light", "brand": ""}
    assert meta["filters"] == []


def test_sample_dashboard_renders():
    model = build_render_model(sample_dashboard())
    assert [card.key for card in model.kpi_cards] == ["kpi_roas", "kpi_conv", "kpi_spend"]
    assert model.hero_card.key == "ts_perf"
    assert [section.key for section in model.sections] == ["acquisition", "ads", "methodology"]


def test_sample_dashboard_is_a_fresh_copy():
    first = sample_dashboard()
    first["cards"].clear()
    assert sample_dashboard()["cards"]


@pytest.mark.parametrize(
    "value, fmt, expected",
    [
        (4.2, "number:1", "4.2"),
        (1256, "number", "1 256"),
        (6240.5, "currency", "6 240.50"),
        (0.123, "percent", "12.3%"),
        ("n/a", "number", "n/a"),
        ("12", "number", "12"),
        (None, "number", ""),
        (5, "custom", "5"),
    ],
)
def test_format_metric_value(value, fmt, expected):
    assert format_metric_value(value, fmt) == expected


def test_delta_formatting():
    assert format_delta(0.35) == "35.0%"
    assert format_delta(-0.05) == "-5.0%"
    assert delta_arrow("UP") == "▲"
    assert delta_arrow("down") == "▼"
    assert delta_arrow(None) == "■"


def test_card_view_helpers():
    assert col_span({"layout": {"colSpan": 30}}) == 12
    assert col_span({"layout": {"colSpan": 0}}) == 1
    assert col_span({}) == 12
    assert dom_id("kpi roas/1") == "kpi_roas_1"

    view = card_view(key_cards([{"id": "i", "type": "insight", "items": [{"text": "Up"}]}])[0])
    assert view["title"] == "Insight"
    assert view["insight"]["items"] == [{"emoji": "💡", "text": "Up"}]


def test_table_rows_are_normalized():
    card = {"id": "t", "type": "table", "columns": ["a", "b"], "rows": [{"a": 1}, "note", [1, None]]}
    view = card_view(key_cards([card])[0])
    assert view["table"]["rows"] == [["1", ""], ["note"], ["1", ""]]
