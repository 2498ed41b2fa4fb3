from __future__ import annotations

from typing import Any, Callable, Iterable

from dashboard_renderer.domain import PropertyRecord


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def _record(item: dict[str, Any], account_id: str | None = None) -> PropertyRecord:
    property_id = item.get("propertyId")
    if property_id is None:
        property_id = item.get("name")
    return PropertyRecord(
        accountId=_as_text(item.get("accountId")) if account_id is None else account_id,
        propertyId=_as_text(property_id),
        displayName=_as_text(item.get("displayName")),
    )


def _flat_records(items: Iterable[Any]) -> list[PropertyRecord]:
    return [_record(item) for item in items if isinstance(item, dict)]


def _from_accounts_and_properties(raw: Any) -> list[PropertyRecord] | None:
    if not isinstance(raw, dict) or not isinstance(raw.get("accounts_and_properties"), list):
        return None
    return _flat_records(raw["accounts_and_properties"])


def _from_accounts(raw: Any) -> list[PropertyRecord] | None:
    if not isinstance(raw, dict) or not isinstance(raw.get("accounts"), list):
        return None
    out: list[PropertyRecord] = []
    for account in raw["accounts"]:
        if not isinstance(account, dict) or not isinstance(account.get("properties"), list):
            continue
        account_id = _as_text(account.get("accountId"))
        out.extend(
            _record(prop, account_id=account_id)
            for prop in account["properties"]
            if isinstance(prop, dict)
        )
    return out


def _from_bare_list(raw: Any) -> list[PropertyRecord] | None:
    if not isinstance(raw, list):
        return None
    return _flat_records(raw)


_SHAPES: tuple[Callable[[Any], list[PropertyRecord] | None], ...] = (
    _from_accounts_and_properties,
    _from_accounts,
    _from_bare_list,
)


def normalize_properties(raw: Any) -> list[PropertyRecord]:
    """Flatten any of the accepted property payload shapes; unknown shapes yield []."""
    for shape in _SHAPES:
        records = shape(raw)
        if records is not None:
            return records
    return []


def properties_document(records: Iterable[PropertyRecord]) -> dict[str, list[dict[str, str]]]:
    return {"accounts_and_properties": [record.as_dict() for record in records]}
