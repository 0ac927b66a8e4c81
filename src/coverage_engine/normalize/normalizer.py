"""Canonicalisation of raw account and outbound field values.

Every helper is a pure function of its input.  Unknown values are kept
(title-cased country, ``"Other / Unknown"`` industry, pass-through deal stage)
rather than dropped, and unparseable numbers become ``None`` instead of zero.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Tuple

from .tables import COUNTRY_REGIONS, INDUSTRY_RULES, OTHER_INDUSTRY, UNKNOWN_REGION

_WS = re.compile(r"\s+")
_WORD_START = re.compile(r"(^|\s)(\S)")
_CLOSED_WON = re.compile(r"closed won", re.IGNORECASE)
_CLOSED_LOST = re.compile(r"closed lost", re.IGNORECASE)
_TRUE = re.compile(r"^true$", re.IGNORECASE)
_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def normalize_country(raw: str | None) -> Tuple[str, str]:
    """Return ``(canonical_country, region)`` for a free-text location."""

    value = (raw or "").strip()
    hit = COUNTRY_REGIONS.get(value.lower())
    if hit is not None:
        return hit
    collapsed = _WS.sub(" ", value)
    name = _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), collapsed)
    return name, UNKNOWN_REGION


def bucket_industry(raw: str | None) -> str:
    """Map free-text industry onto one of the broad industry buckets."""

    value = (raw or "").strip()
    if not value:
        return OTHER_INDUSTRY
    lc = value.lower()
    for bucket, keywords in INDUSTRY_RULES:
        if any(term in lc for term in keywords):
            return bucket
    return OTHER_INDUSTRY


def normalize_deal_stage(raw: str | None) -> Tuple[str, Optional[bool]]:
    """Return ``(stage, won)``.

    Closed won and closed lost both collapse to the ``"Closed"`` stage; the
    outcome only survives in ``won`` (``None`` when unknown).
    """

    stage = (raw or "").strip()
    if _CLOSED_WON.search(stage):
        return "Closed", True
    if _CLOSED_LOST.search(stage):
        return "Closed", False
    return stage, None


def normalize_domain(raw: str | None) -> str:
    """Trim, lowercase and strip a single leading ``www.``."""

    value = (raw or "").strip().lower()
    return value[4:] if value.startswith("www.") else value


def clean_name(raw: str | None) -> str:
    return _WS.sub(" ", (raw or "").strip())


def to_number(raw: Any) -> Optional[float]:
    """Parse a numeric field; blanks, garbage and non-finite values give ``None``."""

    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        # plain decimal or exponent notation only; float() also takes "1_000"
        if not _NUMBER.match(text):
            return None
        value = float(text)
    if not math.isfinite(value):
        return None
    return value


def parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return bool(_TRUE.match(str(raw or "").strip()))


def parse_won(raw: Any) -> Optional[bool]:
    """Decode the tri-state ``deal_won`` column (``"True"``/``"False"``/blank)."""

    if raw is None or isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def format_won(won: Optional[bool]) -> str:
    if won is None:
        return ""
    return "True" if won else "False"


def parse_iso_date(raw: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime string.

    Returns ``None`` for anything that is not well formed.  Plain dates are
    interpreted as midnight.
    """

    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        if "T" in text or " " in text:
            parsed = datetime.fromisoformat(text)
        else:
            d = date.fromisoformat(text)
            parsed = datetime(d.year, d.month, d.day)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed


__all__ = [
    "normalize_country",
    "bucket_industry",
    "normalize_deal_stage",
    "normalize_domain",
    "clean_name",
    "to_number",
    "parse_bool",
    "parse_won",
    "format_won",
    "parse_iso_date",
]
