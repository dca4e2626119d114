"""
Data models for the car listing engine.

This module defines the facet selection owned by a listing page, the sort and
view enumerations, and the pagination envelope returned by the listing API.
"""

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from listing_engine.normalize import is_number, to_number, to_token_list


PRICE_MIN = 0
PRICE_MAX = 20_000_000_000
PRICE_STEP = 10_000

# Backend field name -> value; a missing key means "no constraint"
QueryParams = Dict[str, Union[str, int, float]]


class SortKey(str, Enum):
    """Supported client-side listing orderings."""
    DEFAULT = "default"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
    YEAR_NEW = "year_new"
    YEAR_OLD = "year_old"


class ListingView(str, Enum):
    """Listing pages that share the filter/sort engine."""
    PUBLIC = "public"
    APPROVED = "approved"
    WAITLIST = "waitlist"


@dataclass
class PriceRange:
    """Selected price bounds, in VND.

    Attributes:
        min: Lower bound, PRICE_MIN when unconstrained
        max: Upper bound, PRICE_MAX when unconstrained
    """
    min: Union[int, float] = PRICE_MIN
    max: Union[int, float] = PRICE_MAX

    @classmethod
    def from_value(cls, value: Any) -> 'PriceRange':
        """Build a range from a PriceRange or ``{min, max}`` mapping.

        Missing or non-numeric bounds fall back to the full range.
        """
        if isinstance(value, PriceRange):
            low, high = value.min, value.max
        elif isinstance(value, dict):
            low, high = value.get("min"), value.get("max")
        else:
            return cls()
        return cls(
            min=to_number(low, PRICE_MIN),
            max=to_number(high, PRICE_MAX),
        )

    def is_full_range(self) -> bool:
        return self.min <= PRICE_MIN and self.max >= PRICE_MAX


# camelCase keys used by the UI layer
_FACET_ALIASES = {
    "bodyTypes": "body_types",
    "fuelTypes": "fuel_types",
    "priceRange": "price_range",
}


@dataclass
class FacetSelection:
    """Currently chosen filter values for one listing page.

    Every facet holds distinct tokens in the order the user picked them.

    Attributes:
        statuses: New/Used inventory status
        years: Model years
        brands: Makes, sent as an OR-regex
        models: Models of the selected brand(s)
        body_types: Sedan, SUV, ...
        transmissions: Automatic/Manual
        fuel_types: Gasoline, Electric, ...
        drivetrains: FWD, AWD, ...
        colors: Exterior colours
        cities: Dealer cities
        seats: Seat counts
        price_range: Selected price bounds
    """
    statuses: List[str] = field(default_factory=list)
    years: List[Union[str, int]] = field(default_factory=list)
    brands: List[str] = field(default_factory=list)
    models: List[str] = field(default_factory=list)
    body_types: List[str] = field(default_factory=list)
    transmissions: List[str] = field(default_factory=list)
    fuel_types: List[str] = field(default_factory=list)
    drivetrains: List[str] = field(default_factory=list)
    colors: List[str] = field(default_factory=list)
    cities: List[str] = field(default_factory=list)
    seats: List[Union[str, int]] = field(default_factory=list)
    price_range: PriceRange = field(default_factory=PriceRange)

    @classmethod
    def facet_names(cls) -> List[str]:
        """Names of the multi-value facets (everything but the price range)."""
        return [f.name for f in fields(cls) if f.name != "price_range"]

    @classmethod
    def from_dict(cls, data: Any) -> 'FacetSelection':
        """Create a selection from a UI filter-state dictionary.

        Accepts both the camelCase shape used by the UI (``bodyTypes``,
        ``priceRange``) and snake_case keys. Malformed values become empty
        facets; this never raises.

        Args:
            data: Dictionary containing filter state

        Returns:
            FacetSelection instance
        """
        if isinstance(data, FacetSelection):
            return data.copy()
        selection = cls()
        if not isinstance(data, dict):
            return selection

        for key, value in data.items():
            name = _FACET_ALIASES.get(key, key)
            if name == "price_range":
                selection.price_range = PriceRange.from_value(value)
            elif name in cls.facet_names():
                setattr(selection, name, to_token_list(value))
        return selection

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {name: list(getattr(self, name)) for name in self.facet_names()}
        data["price_range"] = {"min": self.price_range.min, "max": self.price_range.max}
        return data

    def copy(self) -> 'FacetSelection':
        return FacetSelection(
            **{name: list(getattr(self, name)) for name in self.facet_names()},
            price_range=PriceRange(self.price_range.min, self.price_range.max),
        )

    def toggle(self, facet: str, value: Any) -> None:
        """Add ``value`` to a facet, or remove it when already selected.

        Raises:
            KeyError: If ``facet`` is not a facet name
        """
        values = self._facet(facet)
        if value in values:
            self.deselect(facet, value)
        else:
            self.select(facet, value)

    def select(self, facet: str, value: Any) -> None:
        """Add ``value`` unless already selected; raises KeyError for an unknown facet."""
        values = self._facet(facet)
        if value is None or value == "" or value in values:
            return
        values.append(value)

    def deselect(self, facet: str, value: Any) -> None:
        """Remove ``value``; raises KeyError for an unknown facet."""
        values = self._facet(facet)
        if value in values:
            values.remove(value)
        # Models are only meaningful for a selected brand
        if facet == "brands" and not values:
            self.models.clear()

    def clear(self, facet: Optional[str] = None) -> None:
        """Reset one facet, or every facet and the price range when None.

        Raises:
            KeyError: If ``facet`` is given and is not a facet name
        """
        if facet is None:
            for name in self.facet_names():
                getattr(self, name).clear()
            self.price_range = PriceRange()
            return
        if facet == "price_range":
            self.price_range = PriceRange()
            return
        self._facet(facet).clear()
        if facet == "brands":
            self.models.clear()

    def set_price_range(
        self,
        min_price: Optional[Union[int, float]] = None,
        max_price: Optional[Union[int, float]] = None,
        step: int = PRICE_STEP
    ) -> None:
        """Move one or both slider handles.

        The handles never cross: the lower bound stays at least ``step``
        below the upper bound, and both stay within PRICE_MIN..PRICE_MAX.
        """
        current = self.price_range
        low, high = current.min, current.max
        if is_number(min_price):
            low = max(PRICE_MIN, min(min_price, high - step))
        if is_number(max_price):
            high = min(PRICE_MAX, max(max_price, low + step))
        self.price_range = PriceRange(min=low, max=high)

    def active_count(self) -> int:
        """Number of selected tokens across all facets."""
        return sum(len(getattr(self, name)) for name in self.facet_names())

    def _facet(self, facet: str) -> list:
        name = _FACET_ALIASES.get(facet, facet)
        if name not in self.facet_names():
            raise KeyError(f"Unknown facet: {facet}")
        return getattr(self, name)


class Pagination(BaseModel):
    """Pagination block of a listing response."""
    current_page: int = Field(default=1, alias="currentPage")
    total_pages: int = Field(default=1, alias="totalPages")
    total_items: int = Field(default=0, alias="totalItems")
    items_per_page: int = Field(default=12, alias="itemsPerPage")

    class Config:
        populate_by_name = True


class ListingPage(BaseModel):
    """One page of listing records as returned by the listing API."""
    data: List[Dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @classmethod
    def from_response(cls, payload: Any) -> 'ListingPage':
        """Parse a ``{data, pagination}`` envelope without trusting its shape.

        Non-dict records are dropped; unreadable pagination counters fall
        back to their defaults.
        """
        if not isinstance(payload, dict):
            return cls()

        records = payload.get("data")
        if not isinstance(records, list):
            records = []
        records = [record for record in records if isinstance(record, dict)]

        raw = payload.get("pagination")
        pagination = Pagination()
        if isinstance(raw, dict):
            values = {}
            for name, info in Pagination.model_fields.items():
                value = raw.get(info.alias, raw.get(name))
                number = to_number(value, None) if value is not None else None
                if number is not None and math.isfinite(number):
                    values[name] = int(number)
            pagination = Pagination(**values)

        return cls(data=records, pagination=pagination)
