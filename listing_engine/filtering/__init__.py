"""
Filtering module for car listings.

This module translates the facet selection of a listing page into backend
query parameters and provides the selectable values for each facet.
"""

from .facet_fields import DEFAULT_FACET_FIELDS, FacetField, MatchMode, fields_for
from .facet_options import FALLBACK_OPTIONS, FacetOptions
from .filter_translator import FilterTranslator, translate

__all__ = [
    'DEFAULT_FACET_FIELDS',
    'FacetField',
    'MatchMode',
    'fields_for',
    'FALLBACK_OPTIONS',
    'FacetOptions',
    'FilterTranslator',
    'translate',
]
