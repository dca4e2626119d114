"""
Facet selection to query parameter translation.

This module turns the filter state of a listing page into the query
parameters understood by the cars listing endpoint.
"""

import logging
from typing import Any, Optional, Sequence

from listing_engine.filtering.facet_fields import DEFAULT_FACET_FIELDS, FacetField, MatchMode
from listing_engine.models import PRICE_MAX, PRICE_MIN, FacetSelection, PriceRange, QueryParams
from listing_engine.normalize import to_token_list


logger = logging.getLogger(__name__)


class FilterTranslator:
    """Translates a FacetSelection into backend query parameters.

    Exact-match facets are sent only when a single value is selected, since
    the backend compares them with equality. Regex facets are joined into one
    '|' alternation. Price bounds are sent only when they narrow the range.

    Attributes:
        fields: Facets this translator emits
        price_min: Lower bound treated as "no minimum"
        price_max: Upper bound treated as "no maximum"
    """

    def __init__(
        self,
        fields: Sequence[FacetField] = DEFAULT_FACET_FIELDS,
        price_min: int = PRICE_MIN,
        price_max: int = PRICE_MAX
    ):
        self.fields = tuple(fields)
        self.price_min = price_min
        self.price_max = price_max

    def translate(self, selection: Any) -> QueryParams:
        """Build query parameters for a selection.

        Args:
            selection: FacetSelection, a UI filter-state dict, or None

        Returns:
            New dict of parameters; empty when nothing constrains the query
        """
        if selection is None:
            return {}
        if not isinstance(selection, FacetSelection):
            selection = FacetSelection.from_dict(selection)

        params: QueryParams = {}
        for facet in self.fields:
            values = to_token_list(getattr(selection, facet.attribute, None))
            if facet.mode is MatchMode.SINGLE:
                if len(values) == 1:
                    params[facet.param] = values[0]
            elif values:
                params[facet.param] = "|".join(str(value) for value in values)

        params.update(self._price_params(selection.price_range))

        logger.debug(f"Translated filters to query params: {params}")
        return params

    def _price_params(self, price_range: Optional[PriceRange]) -> QueryParams:
        price_range = PriceRange.from_value(price_range)
        low = min(max(price_range.min, self.price_min), self.price_max)
        high = max(min(price_range.max, self.price_max), self.price_min)

        params: QueryParams = {}
        if low > self.price_min:
            params["minPrice"] = low
        if high < self.price_max:
            params["maxPrice"] = high
        return params


_default_translator = FilterTranslator()


def translate(selection: Any) -> QueryParams:
    """Translate with the full facet list used by the public listing page."""
    return _default_translator.translate(selection)
