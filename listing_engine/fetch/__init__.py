"""Listing API client"""

from .listing_client import ListingClient

__all__ = ["ListingClient"]
