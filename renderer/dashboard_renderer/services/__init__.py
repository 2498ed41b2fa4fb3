from dashboard_renderer.services.card_classifier import classify_cards, order_kpis
from dashboard_renderer.services.hero_selector import select_hero
from dashboard_renderer.services.property_normalizer import normalize_properties
from dashboard_renderer.services.property_selection import canonicalize_property_token, resolve_selection
from dashboard_renderer.services.render_model import build_render_model
from dashboard_renderer.services.section_grouper import group_sections, section_key
from dashboard_renderer.services.shape_resolver import extract_wrapper_metadata, resolve_payload, validate_dashboard

__all__ = [
    "build_render_model",
    "canonicalize_property_token",
    "classify_cards",
    "extract_wrapper_metadata",
    "group_sections",
    "normalize_properties",
    "order_kpis",
    "resolve_payload",
    "resolve_selection",
    "section_key",
    "select_hero",
    "validate_dashboard",
]
