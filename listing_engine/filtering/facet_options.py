"""
Available filter values for the facet panel.

The filters endpoint only reports values present in verified listings, so an
empty catalogue would leave the panel blank; the lists below match the
listing schema enums and are used whenever the backend returns nothing.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


STATUS_OPTIONS = ["New", "Used"]

FALLBACK_OPTIONS: Dict[str, List[str]] = {
    "seats": ["2", "4", "5", "7"],
    "fuel_types": ["Gasoline", "Diesel", "Electric", "Hybrid", "Plug-in Hybrid"],
    "drivetrains": ["FWD", "RWD", "AWD", "4WD"],
    "transmissions": ["Automatic", "Manual"],
    "body_types": ["Sedan", "SUV", "Truck", "Coupe", "Hatchback", "Van", "Wagon", "Convertible"],
    "colors": ["Black", "White", "Silver", "Gray", "Blue", "Red"],
}

# Response keys of GET /api/filters/all
_RESPONSE_KEYS = {
    "brands": "brands",
    "body_types": "bodyTypes",
    "transmissions": "transmissions",
    "fuel_types": "fuelTypes",
    "drivetrains": "drivetrains",
    "seats": "seats",
    "colors": "colors",
}


def with_fallback(values: Any, facet: str) -> List[Any]:
    """Return ``values`` when it is a non-empty list, else the facet's fallback."""
    if isinstance(values, list) and values:
        return list(values)
    return list(FALLBACK_OPTIONS.get(facet, []))


@dataclass
class FacetOptions:
    """Selectable values per facet, keyed like FacetSelection attributes."""
    statuses: List[str] = field(default_factory=lambda: list(STATUS_OPTIONS))
    years: List[Any] = field(default_factory=list)
    brands: List[str] = field(default_factory=list)
    models: List[str] = field(default_factory=list)
    body_types: List[str] = field(default_factory=lambda: with_fallback(None, "body_types"))
    transmissions: List[str] = field(default_factory=lambda: with_fallback(None, "transmissions"))
    fuel_types: List[str] = field(default_factory=lambda: with_fallback(None, "fuel_types"))
    drivetrains: List[str] = field(default_factory=lambda: with_fallback(None, "drivetrains"))
    colors: List[str] = field(default_factory=lambda: with_fallback(None, "colors"))
    cities: List[str] = field(default_factory=list)
    seats: List[Any] = field(default_factory=lambda: with_fallback(None, "seats"))

    @classmethod
    def from_response(cls, payload: Any) -> 'FacetOptions':
        """Build options from a ``{data: {...}}`` filters response.

        Brands have no fallback; every other catalogue falls back to the
        built-in lists when missing or empty.
        """
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            data = {}

        options = cls()
        for attribute, key in _RESPONSE_KEYS.items():
            values = data.get(key)
            if attribute == "brands":
                options.brands = [v for v in values if v] if isinstance(values, list) else []
            else:
                setattr(options, attribute, with_fallback(values, attribute))
        return options
