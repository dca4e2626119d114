"""
Client-side listing sorter.

Listing prices arrive either as numbers or as Vietnamese display strings such
as "836 triệu" (million) or "1,2 tỷ" (billion). This module reduces them to
comparable integers and reorders listing records without mutating them.
"""

import logging
import re
from typing import Any, List, Optional, Union

from listing_engine.models import SortKey
from listing_engine.normalize import get_field, is_number, to_number


logger = logging.getLogger(__name__)

MILLION = 1_000_000
BILLION = 1_000_000_000

_NUMERIC_CHARS = re.compile(r'[^0-9.,\-]')
_NON_DIGITS = re.compile(r'[^0-9]')
_LEADING_INT = re.compile(r'^-?[0-9]+')


def _parse_leading_int(text: str) -> Optional[Union[int, float]]:
    """Parse the integer at the start of ``text``, None when there is none."""
    match = _LEADING_INT.match(text)
    if not match:
        return None
    digits = match.group(0)
    try:
        return int(digits)
    except ValueError:
        # Past the interpreter's digit limit; keep the magnitude
        return float(digits)


def parse_price(value: Any) -> Union[int, float]:
    """Reduce a listing price to a number.

    Dots and commas are always thousand separators, so "1.5 tỷ" reads as
    15 billion. When no unit word is present the digits of the raw string
    are used as-is.

    Args:
        value: Number, price string, or None

    Returns:
        Parsed price; 0 when nothing numeric can be read
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return 0
    if is_number(value):
        return value
    if not isinstance(value, str):
        return 0

    text = value.lower()
    numeric = _NUMERIC_CHARS.sub('', text).replace(',', '').replace('.', '')
    amount = _parse_leading_int(numeric)

    if 'tri' in text:
        return (amount or 0) * MILLION
    if 't' in text and ('ỷ' in text or 'ty' in text or 'tỷ' in text):
        return (amount or 0) * BILLION

    return _parse_leading_int(_NON_DIGITS.sub('', text)) or 0


def parse_year(value: Any) -> Union[int, float]:
    """Listing year as a number; missing or unreadable years count as 0."""
    return to_number(value, 0)


def _price_key(record: Any) -> Union[int, float]:
    return parse_price(get_field(record, 'price'))


def _year_key(record: Any) -> Union[int, float]:
    return parse_year(get_field(record, 'year'))


# key -> (sort key function, descending)
_ORDERINGS = {
    SortKey.PRICE_LOW: (_price_key, False),
    SortKey.PRICE_HIGH: (_price_key, True),
    SortKey.YEAR_NEW: (_year_key, True),
    SortKey.YEAR_OLD: (_year_key, False),
}


def _resolve_key(key: Any) -> SortKey:
    if isinstance(key, SortKey):
        return key
    try:
        return SortKey(key)
    except (ValueError, TypeError):
        return SortKey.DEFAULT


def sort_listings(records: Any, key: Any = SortKey.DEFAULT) -> List[Any]:
    """Return a reordered copy of ``records``.

    Ties keep their input order. Unknown keys return the records in their
    original order.

    Args:
        records: List of listing records (dicts or objects)
        key: SortKey or its string value

    Returns:
        New list; empty when ``records`` is not a list
    """
    if not isinstance(records, (list, tuple)):
        return []

    ordering = _ORDERINGS.get(_resolve_key(key))
    if ordering is None:
        return list(records)

    key_func, descending = ordering
    # sorted() is stable in both directions
    return sorted(records, key=key_func, reverse=descending)


class ListingSorter:
    """Sorts listing records, remembering the last result per input.

    The memo holds a single entry keyed by the identity of the records list
    and the sort key. Record lists are replaced wholesale on every fetch,
    never mutated in place, so identity is enough to detect new data.
    """

    def __init__(self):
        self._memo_key: Optional[SortKey] = None
        self._memo_source: Optional[Any] = None
        self._memo_result: List[Any] = []

    def sort(self, records: Any, key: Any = SortKey.DEFAULT) -> List[Any]:
        """Sorted copy of ``records``; see sort_listings."""
        sort_key = _resolve_key(key)
        if self._memo_source is records and self._memo_key is sort_key:
            return list(self._memo_result)

        result = sort_listings(records, sort_key)
        logger.debug(f"Sorted {len(result)} listings by {sort_key.value}")

        self._memo_key = sort_key
        self._memo_source = records
        self._memo_result = result
        return list(result)

    def invalidate(self) -> None:
        self._memo_key = None
        self._memo_source = None
        self._memo_result = []
