from __future__ import annotations

import copy
from typing import Any

_SAMPLE_DASHBOARD: dict[str, Any] = {
    "version": "1.0",
    "user_question": "Show me last 14 days GA + Ads, compare to previous period, highlight what's driving ROAS.",
    "theme": {"mode": "dark", "accent": "#27E1FF", "brand": "Intelligent Dashboard"},
    "period": {"start": "2025-08-09", "end": "2025-08-22", "compare": {"type": "previous_period"}},
    "filters": [
        {"field": "country", "operator": "in", "value": ["DK"]},
        {"field": "device", "operator": "=", "value": "mobile"},
    ],
    "layout": {
        "columns": 12,
        "cards_order": ["kpi_roas", "kpi_conv", "kpi_spend", "ts_perf", "tbl_campaigns", "insights", "note"],
    },
    "cards": [
        {
            "id": "kpi_roas",
            "type": "metric",
            "title": "Acquisition • ROAS",
            "subtitle": "Revenue / Ad Spend",
            "metric": {
                "value": 4.2,
                "unit": "x",
                "format": "number:1",
                "delta": {"value": 0.35, "direction": "up", "vs": "previous_period"},
                "annotation": "Above target (3.5x).",
            },
            "layout": {"colSpan": 3},
            "agent_summary": "",
        },
        {
            "id": "kpi_conv",
            "type": "metric",
            "title": "Acquisition • Conversions",
            "subtitle": "Purchases (GA4)",
            "metric": {
                "value": 1256,
                "unit": "",
                "format": "number",
                "delta": {"value": 0.12, "direction": "up", "vs": "previous_period"},
            },
            "layout": {"colSpan": 3},
            "agent_summary": "",
        },
        {
            "id": "kpi_spend",
            "type": "metric",
            "title": "Ads • Spend",
            "subtitle": "Google Ads",
            "metric": {
                "value": 6240.50,
                "unit": "DKK",
                "format": "currency",
                "delta": {"value": -0.05, "direction": "down", "vs": "previous_period"},
            },
            "layout": {"colSpan": 3},
            "agent_summary": "",
        },
        {
            "id": "ts_perf",
            "type": "chart",
            "title": "Engagement • Sessions vs Conversions",
            "subtitle": "Daily trend",
            "viz": "area",
            "series": [
                {"label": "Sessions", "axis": "left", "data": [["2025-08-09", 2450], ["2025-08-10", 2590], ["2025-08-11", 2700]]},
                {"label": "Conversions", "axis": "right", "data": [["2025-08-09", 110], ["2025-08-10", 124], ["2025-08-11", 133]]},
            ],
            "compare_series": [
                {
                    "label": "Sessions (prev)",
                    "axis": "left",
                    "style": "dashed",
                    "data": [["2025-07-26", 2300], ["2025-07-27", 2400], ["2025-07-28", 2550]],
                }
            ],
            "layout": {"colSpan": 12},
            "agent_summary": "",
        },
        {
            "id": "tbl_campaigns",
            "type": "table",
            "title": "Ads • Top Campaigns",
            "columns": ["campaign", "clicks", "impressions", "ctr", "cpc", "cost", "conversions", "cpa", "roas"],
            "rows": [
                ["Brand - DK", 1200, 120000, "1.0%", "DKK 5.20", "DKK 6,240", 140, "DKK 44.57", "6.1x"],
                ["Shopping - DK", 980, 101500, "0.97%", "DKK 4.80", "DKK 4,704", 132, "DKK 35.64", "7.7x"],
                ["Prospecting - UK", 650, 140300, "0.46%", "DKK 8.10", "DKK 5,265", 31, "DKK 169.84", "1.2x"],
            ],
            "layout": {"colSpan": 12},
            "agent_summary": "",
        },
        {
            "id": "insights",
            "type": "insight",
            "title": "Acquisition • What’s happening?",
            "items": [
                {"emoji": "💡", "text": "DK Shopping improved CVR by 6% while CPC fell 18%."},
                {"emoji": "⚠️", "text": "Prospecting - UK CPA is 2.3x target; consider pausing."},
            ],
            "layout": {"colSpan": 12},
            "agent_summary": "",
        },
        {
            "id": "note",
            "type": "callout",
            "title": "Methodology",
            "variant": "info",
            "body": "Revenue: GA4 purchase revenue. Spend: Google Ads cost. Period: last 14 days vs previous.",
            "layout": {"colSpan": 12},
            "agent_summary": "",
        },
    ],
    "agent_summary": "ROAS improved by 0.35 vs previous period. CPC down, CVR up on Shopping.",
}


def sample_dashboard() -> dict[str, Any]:
    return copy.deepcopy(_SAMPLE_DASHBOARD)
