"""Numeric coercion, date and markup helpers shared by the fetchers."""
import re
import time
from datetime import datetime, timedelta
from typing import Any

_NUMBER_RE = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_INT_RE = re.compile(r"^\s*[-+]?\d+")
_TAG_RE = re.compile(r"<[^>]+>")
_ENTITY_RE = re.compile(r"&[a-z]+;")

DATE_FORMAT = "%Y%m%d"


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).replace(",", "")


def to_float(value: Any) -> float:
    """
    Parse the leading number of an upstream field.

    Thousands separators are removed first. Exchange placeholders such as
    "-" or "--" and missing values all come back as 0.0.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if value == value else 0.0
    m = _NUMBER_RE.match(_clean(value))
    return float(m.group(0)) if m else 0.0


def to_int(value: Any) -> int:
    """Parse the leading integer of an upstream field, defaulting to 0."""
    if isinstance(value, float):
        return int(value) if value == value else 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    m = _INT_RE.match(_clean(value))
    return int(m.group(0)) if m else 0


def derive_change(price: float, prev: float) -> tuple[float, float]:
    """Return (change, change_pct) of a price against its previous close."""
    change = round(price - prev, 2)
    change_pct = round(change / prev * 100, 2) if prev > 0 else 0
    return change, change_pct


def now_ms() -> int:
    """Response timestamp in epoch milliseconds."""
    return int(time.time() * 1000)


def today_str() -> str:
    return datetime.now().strftime(DATE_FORMAT)


def prev_trading_day(date_str: str) -> str:
    """Previous weekday before date_str (YYYYMMDD). Holidays are not known."""
    d = datetime.strptime(date_str, DATE_FORMAT) - timedelta(days=1)
    while d.weekday() >= 5:
        d -= timedelta(days=1)
    return d.strftime(DATE_FORMAT)


def extract_cdata(block: str, tag: str) -> str:
    m = re.search(rf"<{tag}(?:\s[^>]*)?><!\[CDATA\[(.*?)\]\]></{tag}>", block, re.DOTALL)
    return m.group(1).strip() if m else ""


def extract_plain(block: str, tag: str) -> str:
    m = re.search(rf"<{tag}(?:\s[^>]*)?>(.*?)</{tag}>", block, re.DOTALL)
    return m.group(1).strip() if m else ""


def extract_tag(block: str, tag: str) -> str:
    """Text of the first <tag>, unwrapping a CDATA section when present."""
    m = re.search(
        rf"<{tag}(?:\s[^>]*)?>(?:<!\[CDATA\[(.*?)\]\]>|(.*?))</{tag}>", block, re.DOTALL
    )
    if not m:
        return ""
    return (m.group(1) or m.group(2) or "").strip()


def strip_html(text: str) -> str:
    return _ENTITY_RE.sub(" ", _TAG_RE.sub("", text or "")).strip()
