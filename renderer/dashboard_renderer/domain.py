from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _frozen_map(values: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class WrapperMetadata:
    answer: str = ""
    whatsnext: str = ""
    section_order: Mapping[str, int] = field(default_factory=_frozen_map)
    section_explanations: Mapping[str, str] = field(default_factory=_frozen_map)
    forwarded_property: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "section_order", _frozen_map(self.section_order))
        object.__setattr__(self, "section_explanations", _frozen_map(self.section_explanations))


@dataclass(frozen=True)
class ResolvedPayload:
    dashboard: Any
    answer: str
    whatsnext: str
    original: Any
    container: dict[str, Any]


@dataclass(frozen=True)
class KeyedCard:
    """A card paired with its ordering key and its position in the source list."""

    key: str
    position: int
    card: dict[str, Any]
    has_id: bool = True

    @property
    def declared_id(self) -> str | None:
        return self.key if self.has_id else None

    @property
    def type(self) -> str:
        return str(self.card.get("type") or "").lower()


@dataclass(frozen=True)
class CardPartition:
    kpis: tuple[KeyedCard, ...]
    others: tuple[KeyedCard, ...]


@dataclass(frozen=True)
class Section:
    key: str
    explanation: str | None
    cards: tuple[KeyedCard, ...]

    @property
    def title(self) -> str:
        return self.key[:1].upper() + self.key[1:]


@dataclass(frozen=True)
class RenderModel:
    kpi_cards: tuple[KeyedCard, ...]
    hero_card: KeyedCard | None
    hero_explanation: str | None
    sections: tuple[Section, ...]


@dataclass(frozen=True)
class PropertyRecord:
    accountId: str = ""
    propertyId: str = ""
    displayName: str = ""

    @property
    def label(self) -> str:
        return self.displayName.strip() or self.propertyId

    def as_dict(self) -> dict[str, str]:
        return {
            "accountId": self.accountId,
            "propertyId": self.propertyId,
            "displayName": self.displayName,
        }


@dataclass(frozen=True)
class SelectionResult:
    token: str
    write_through: bool = False
