import pytest

from dashboard_renderer.errors import DashboardSchemaError
from dashboard_renderer.services.shape_resolver import (
    extract_wrapper_metadata,
    resolve_payload,
    unwrap_once,
    validate_dashboard,
)


def test_output_wrapper_answer_and_json_dashboard():
    payload = {"output": {"answer": "A", "whatsnext": "B"}, "json": {"version": "1.0", "cards": []}}
    resolved = resolve_payload(payload)

    assert resolved.answer == "A"
    assert resolved.whatsnext == "B"
    assert resolved.dashboard["version"] == "1.0"
    assert resolved.original is payload
    assert resolved.container is payload


def test_list_wrapping_resolves_same_dashboard():
    inner = {"version": "1.0", "cards": [{"id": "x", "type": "metric"}]}
    wrapped = resolve_payload([{"json": inner}])
    bare = resolve_payload(inner)

    assert wrapped.dashboard == bare.dashboard == inner
    assert wrapped.container == {"json": inner}


def test_bare_dashboard_is_returned_as_is():
    dash = {"version": "2", "cards": [], "json": {"version": "other", "cards": []}}
    assert resolve_payload(dash).dashboard is dash


@pytest.mark.parametrize("key", ["dashboard", "json", "data", "body"])
def test_object_container_keys(key):
    dash = {"version": "1.0", "cards": []}
    assert resolve_payload({key: dash}).dashboard is dash


def test_container_key_precedence():
    first = {"version": "dashboard", "cards": []}
    second = {"version": "data", "cards": []}
    assert resolve_payload({"data": second, "dashboard": first}).dashboard is first


def test_answer_falls_back_to_top_level_fields():
    resolved = resolve_payload({"answer": "top", "whatsnext": "next", "output": {"answer": 3}})
    assert resolved.answer == "top"
    assert resolved.whatsnext == "next"


def test_two_unwrap_steps_at_most():
    dash = {"version": "1.0", "cards": []}
    assert resolve_payload({"json": {"json": dash}}).dashboard is dash
    # A third layer is not unwrapped.
    assert resolve_payload({"json": {"json": {"json": dash}}}).dashboard == {"json": dash}


def test_second_unwrap_step_only_follows_json():
    dash = {"version": "1.0", "cards": []}
    assert resolve_payload({"data": {"json": dash}}).dashboard is dash
    assert resolve_payload({"data": {"dashboard": dash}}).dashboard == {"dashboard": dash}
    assert resolve_payload({"body": {"data": dash}}).dashboard == {"data": dash}
    with pytest.raises(DashboardSchemaError):
        validate_dashboard(resolve_payload({"data": {"dashboard": dash}}).dashboard)


def test_list_item_with_dashboard_key():
    dash = {"version": "1.0", "cards": []}
    assert unwrap_once([{"dashboard": dash}]) is dash


def test_list_item_without_known_key_uses_item():
    item = {"foo": 1}
    assert unwrap_once([item]) is item


def test_unmatched_value_is_unchanged():
    value = {"foo": {"bar": 1}}
    assert unwrap_once(value) is value
    assert resolve_payload(value).dashboard is value


def test_scalar_payload_has_empty_container():
    resolved = resolve_payload("nope")
    assert resolved.container == {}
    assert resolved.answer == ""


def test_validate_dashboard_requires_cards_list():
    with pytest.raises(DashboardSchemaError):
        validate_dashboard({"version": "1.0"})
    with pytest.raises(DashboardSchemaError):
        validate_dashboard({"version": "1.0", "cards": {"a": 1}})
    with pytest.raises(DashboardSchemaError):
        validate_dashboard({"cards": []})
    assert validate_dashboard({"version": 1, "cards": []}) == {"version": 1, "cards": []}


def test_wrapper_metadata_normalizes_keys():
    payload = [
        {
            "output": {
                "answer": "A",
                "order": {" Acquisition ": "2", "ADS": 1, "broken": "x"},
                "explanations": {"Acquisition": "Paid traffic."},
            },
            "selectedProperty": "123",
            "json": {"version": "1.0", "cards": []},
        }
    ]
    metadata = extract_wrapper_metadata(resolve_payload(payload))

    assert metadata.answer == "A"
    assert dict(metadata.section_order) == {"acquisition": 2, "ads": 1, "broken": 0}
    assert dict(metadata.section_explanations) == {"acquisition": "Paid traffic."}
    assert metadata.forwarded_property == "123"


def test_forwarded_property_precedence():
    metadata = extract_wrapper_metadata(resolve_payload({"propertyFull": "properties/9", "propertyId": "1"}))
    assert metadata.forwarded_property == "properties/9"

    metadata = extract_wrapper_metadata(resolve_payload({"propertyId": 42}))
    assert metadata.forwarded_property == "42"
