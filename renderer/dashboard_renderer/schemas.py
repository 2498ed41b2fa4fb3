from typing import Any

from pydantic import BaseModel, Field


class PropertyOut(BaseModel):
    accountId: str = ""
    propertyId: str = ""
    displayName: str = ""
    label: str = ""


class PropertiesOut(BaseModel):
    properties: list[PropertyOut] = Field(default_factory=list)
    message: str = ""
    refreshed: bool = False
    selected_property: str = ""


class SectionOut(BaseModel):
    key: str
    title: str
    explanation: str | None = None
    cards: list[dict[str, Any]] = Field(default_factory=list)


class RenderModelOut(BaseModel):
    kpi_cards: list[dict[str, Any]] = Field(default_factory=list)
    hero_card: dict[str, Any] | None = None
    hero_explanation: str | None = None
    sections: list[SectionOut] = Field(default_factory=list)


class DashboardMetaOut(BaseModel):
    version: str
    user_question: str = ""
    theme: dict[str, str] = Field(default_factory=dict)
    period: dict[str, Any] = Field(default_factory=dict)
    filters: list[dict[str, Any]] = Field(default_factory=list)
    columns: int = 12
    agent_summary: str = ""


class RenderOut(RenderModelOut):
    is_fallback: bool = False
    dashboard: DashboardMetaOut
    answer: str = ""
    whatsnext: str = ""
    properties: PropertiesOut = Field(default_factory=PropertiesOut)
    context: Any = None
