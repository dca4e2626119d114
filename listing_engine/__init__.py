"""
Car listing engine.

Shared filter translation, listing sorting and debounced fetching for the
marketplace listing pages.
"""

from listing_engine.filtering import FilterTranslator, translate
from listing_engine.models import (
    PRICE_MAX,
    PRICE_MIN,
    FacetSelection,
    ListingPage,
    ListingView,
    PriceRange,
    SortKey,
)
from listing_engine.sorting import ListingSorter, parse_price, sort_listings

__all__ = [
    'PRICE_MAX',
    'PRICE_MIN',
    'FacetSelection',
    'FilterTranslator',
    'ListingPage',
    'ListingSorter',
    'ListingView',
    'PriceRange',
    'SortKey',
    'parse_price',
    'sort_listings',
    'translate',
]
