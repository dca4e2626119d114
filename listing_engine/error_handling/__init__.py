"""Error handling module with retry logic for listing fetches."""

from .error_handler import ErrorHandler, ListingFetchError

__all__ = ['ErrorHandler', 'ListingFetchError']
