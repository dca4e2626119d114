"""
Facet field table.

Each listing page translates the same FacetSelection; the only thing that
differs between pages is which facets they expose, so the translator is
parameterized by a tuple of FacetField entries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class MatchMode(Enum):
    """How the backend matches a facet parameter."""
    # Exact equality: sent only when exactly one value is selected
    SINGLE = "single"
    # Case-insensitive regex: all values joined with '|'
    ANY_OF = "any_of"


@dataclass(frozen=True)
class FacetField:
    """Maps a FacetSelection attribute to a backend query parameter.

    Attributes:
        attribute: FacetSelection attribute name
        param: Backend query parameter name
        mode: Cardinality rule applied during translation
    """
    attribute: str
    param: str
    mode: MatchMode


DEFAULT_FACET_FIELDS: Tuple[FacetField, ...] = (
    FacetField("statuses", "status", MatchMode.SINGLE),
    FacetField("years", "year", MatchMode.SINGLE),
    FacetField("seats", "seats", MatchMode.SINGLE),
    FacetField("brands", "make", MatchMode.ANY_OF),
    FacetField("models", "model", MatchMode.ANY_OF),
    FacetField("body_types", "body_type", MatchMode.ANY_OF),
    FacetField("transmissions", "transmission", MatchMode.ANY_OF),
    FacetField("fuel_types", "fuel_type", MatchMode.ANY_OF),
    FacetField("drivetrains", "drivetrain", MatchMode.ANY_OF),
    FacetField("colors", "exterior_color", MatchMode.ANY_OF),
    FacetField("cities", "city", MatchMode.ANY_OF),
)


def fields_for(*attributes: str) -> Tuple[FacetField, ...]:
    """Subset of DEFAULT_FACET_FIELDS for a page exposing fewer facets.

    Raises:
        KeyError: If an attribute has no entry in DEFAULT_FACET_FIELDS
    """
    by_attribute = {f.attribute: f for f in DEFAULT_FACET_FIELDS}
    missing = [name for name in attributes if name not in by_attribute]
    if missing:
        raise KeyError(f"Unknown facet attribute(s): {', '.join(missing)}")
    return tuple(by_attribute[name] for name in attributes)
