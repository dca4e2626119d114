"""
Value normalizers shared by the filter translator and the listing sorter.

Listing data and facet selections come from the UI and from the backend, so
every value is treated as untrusted: helpers here coerce instead of raising.
"""

import math
import numbers
from typing import Any, Iterable, List, Optional


def is_number(value: Any) -> bool:
    """Return True for real numbers, excluding bools and NaN."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(value)


def to_number(value: Any, default: float = 0) -> float:
    """Coerce a number or numeric string, falling back to ``default``.

    Args:
        value: Value to coerce
        default: Returned when the value is missing or not numeric

    Returns:
        The numeric value (ints stay ints)
    """
    if is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            parsed = float(text)
        except ValueError:
            return default
        if math.isnan(parsed):
            return default
        return parsed
    return default


def to_token_list(value: Any) -> List[Any]:
    """Normalize a facet value into an ordered list of distinct tokens.

    A single string or integer counts as one token; lists, tuples and sets
    are flattened in iteration order. ``None``, empty strings and non-finite
    floats are dropped.
    Anything else yields an empty list.
    """
    if value is None:
        return []
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        items: Iterable[Any] = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        return []

    tokens: List[Any] = []
    for item in items:
        if item is None or item == "" or isinstance(item, bool):
            continue
        if not isinstance(item, (str, int, float)):
            continue
        if isinstance(item, float) and not math.isfinite(item):
            continue
        if item not in tokens:
            tokens.append(item)
    return tokens


def get_field(record: Any, name: str) -> Optional[Any]:
    """Read ``name`` from a mapping or an object; missing means None."""
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)
