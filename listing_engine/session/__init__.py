"""Per-page listing session"""

from .listing_session import ListingSession

__all__ = ["ListingSession"]
