"""Tests for facet option catalogues."""

from listing_engine.filtering import FALLBACK_OPTIONS, FacetOptions


def test_defaults_use_fallbacks():
    options = FacetOptions()

    assert options.statuses == ["New", "Used"]
    assert options.seats == ["2", "4", "5", "7"]
    assert options.drivetrains == ["FWD", "RWD", "AWD", "4WD"]
    assert options.brands == []


def test_response_values_override_fallbacks():
    options = FacetOptions.from_response({
        "data": {
            "brands": ["BMW", None, "Toyota"],
            "bodyTypes": ["SUV"],
            "fuelTypes": [],
            "seats": [4, 7],
        }
    })

    assert options.brands == ["BMW", "Toyota"]
    assert options.body_types == ["SUV"]
    assert options.fuel_types == FALLBACK_OPTIONS["fuel_types"]
    assert options.seats == [4, 7]
    assert options.colors == FALLBACK_OPTIONS["colors"]


def test_missing_response_falls_back():
    options = FacetOptions.from_response(None)

    assert options == FacetOptions()


def test_fallback_lists_are_not_shared():
    options = FacetOptions()
    options.colors.append("Green")

    assert "Green" not in FALLBACK_OPTIONS["colors"]
    assert "Green" not in FacetOptions().colors
