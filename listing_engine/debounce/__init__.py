"""Debouncing for filter-driven listing fetches."""

from .debouncer import DebouncedTask

__all__ = ['DebouncedTask']
