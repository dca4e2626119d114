"""
Sorting module for car listings.

This module orders fetched listing records by price or year, parsing
locale-formatted price strings along the way.
"""

from .listing_sorter import ListingSorter, parse_price, parse_year, sort_listings

__all__ = ['ListingSorter', 'parse_price', 'parse_year', 'sort_listings']
