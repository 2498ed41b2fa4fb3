import re
from urllib.parse import unquote

_NON_DIGIT_RE = re.compile(r"\D+")


def extract_property_id(raw: str | None) -> str:
    """``"properties%2F123"`` or ``"properties/123"`` -> ``"123"``."""
    raw = str(raw or "")
    if not raw:
        return ""
    last = unquote(raw).split("/")[-1].strip()
    return _NON_DIGIT_RE.sub("", last) or last
