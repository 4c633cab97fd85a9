"""
Value Coercion

Loose-JSON helpers used when reading drafts produced by the extraction
service (where any field may be null, a string, a number or a list) and
when applying reviewer edits.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional


def as_str(value: Any) -> str:
    """Coerce to a stripped string; None becomes ''."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(s for s in (as_str(v) for v in value) if s)
    if isinstance(value, dict):
        return ""
    return str(value).strip()


def as_optional_float(value: Any) -> Optional[float]:
    """
    Parse a price-like value as a decimal.

    Currency symbols and thousands separators are dropped
    ("$1,299.00" → 1299.0). Unparseable, empty or non-finite input
    (NaN, Infinity) gives None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return None
    else:
        cleaned = re.sub(r'[^\d.\-]', '', str(value))
        if not cleaned:
            return None
        try:
            parsed = float(Decimal(cleaned))
        except InvalidOperation:
            return None
    return parsed if math.isfinite(parsed) else None


def as_float(value: Any, default: float = 0.0) -> float:
    parsed = as_optional_float(value)
    return default if parsed is None else parsed


def as_int(value: Any, default: int = 0) -> int:
    parsed = as_optional_float(value)
    return default if parsed is None else int(parsed)


def as_str_list(value: Any) -> List[str]:
    """
    Coerce to a list of non-empty strings.

    A plain string is split on commas; None gives [].
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(',') if part.strip()]
    if isinstance(value, (list, tuple, set)):
        return [s for s in (as_str(v) for v in value) if s]
    text = as_str(value)
    return [text] if text else []


def as_optional_str_list(value: Any) -> Optional[List[str]]:
    """Like as_str_list but keeps None (facets are independently nullable)."""
    if value is None:
        return None
    return as_str_list(value)


def as_dict(value: Any) -> dict:
    return dict(value) if isinstance(value, dict) else {}


def coerce_like(current: Any, value: Any) -> Any:
    """
    Coerce an edited value to the type of the field's current value.

    Used by the review session so that a form string such as "12.50"
    lands in a float field as 12.5.
    """
    if isinstance(current, bool):
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "y")
        return bool(value)
    if isinstance(current, int):
        return as_int(value, default=current)
    if isinstance(current, float):
        return as_float(value, default=current)
    if isinstance(current, list):
        return as_str_list(value)
    if isinstance(current, dict):
        return as_dict(value)
    if current is None:
        return value
    return as_str(value)
