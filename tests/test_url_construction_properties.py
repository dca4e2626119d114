"""
Property-based tests for URL construction.

These tests verify universal properties that should hold for all listing URL
construction operations across randomly generated inputs.
"""

import re
from urllib.parse import parse_qs, urlparse

import pytest
from hypothesis import given, settings, strategies as st
from listing_engine.filtering import translate
from listing_engine.models import FacetSelection, ListingView
from listing_engine.url_builder import ListingURLBuilder


# Strategy for generating facet values, including Vietnamese city names
facet_values = st.text(
    alphabet=st.characters(
        whitelist_categories=('L', 'N', 'Zs'),
        max_codepoint=0x1EFF
    ) | st.sampled_from(['-', '_', '.', '(', ')', '+', '&', '=']),
    min_size=1,
    max_size=30
).filter(lambda s: s.strip() == s and s != "")

pages = st.integers(min_value=1, max_value=500)
limits = st.integers(min_value=1, max_value=100)


@given(
    brands=st.lists(facet_values, min_size=1, max_size=4, unique=True),
    cities=st.lists(facet_values, max_size=3, unique=True),
    page=pages,
    limit=limits
)
@settings(max_examples=100)
def test_valid_url_encoding(brands, cities, page, limit):
    """
    **Feature: car-listing-engine, Property 13: Valid URL encoding**

    For any translated selection, the listing URL carries every parameter
    URL-encoded and decodes back to the translated values.
    """
    params = translate(FacetSelection(brands=brands, cities=cities))
    builder = ListingURLBuilder("https://cars.example")

    url = builder.build_listing_url(params, page=page, limit=limit)
    parsed = urlparse(url)

    assert parsed.scheme == "https"
    assert parsed.netloc == "cars.example"
    assert parsed.path == "/api/cars"

    safe_pattern = re.compile(r'^[A-Za-z0-9\-_.~+&=%]*$')
    assert safe_pattern.match(parsed.query), \
        f"Query string contains unencoded special characters: {parsed.query}"

    decoded = parse_qs(parsed.query, keep_blank_values=True)
    assert decoded["make"] == ["|".join(brands)]
    if cities:
        assert decoded["city"] == ["|".join(cities)]
    else:
        assert "city" not in decoded
    assert decoded["page"] == [str(page)]
    assert decoded["limit"] == [str(limit)]


@given(view=st.sampled_from(list(ListingView)), page=pages)
@settings(max_examples=50)
def test_view_endpoint_selection(view, page):
    """
    **Feature: car-listing-engine, Property 14: View endpoints**

    Admin views read the admin endpoint with the matching verified flag; the
    public view never sends one.
    """
    url = ListingURLBuilder().build_listing_url({}, view=view, page=page)
    parsed = urlparse(url)
    params = parse_qs(parsed.query)

    if view is ListingView.PUBLIC:
        assert parsed.path == "/api/cars"
        assert "verified" not in params
    else:
        assert parsed.path == "/api/cars/admin/all"
        expected = "true" if view is ListingView.APPROVED else "false"
        assert params["verified"] == [expected]


def test_numeric_params_are_stringified():
    url = ListingURLBuilder("http://api/").build_listing_url({"minPrice": 100, "year": 2022})

    assert url == "http://api/api/cars?minPrice=100&year=2022&page=1&limit=12"


def test_page_and_limit_floor_at_one():
    url = ListingURLBuilder("http://api").build_listing_url(None, page=0, limit=-3)

    assert url.endswith("?page=1&limit=1")


def test_view_accepts_string_value():
    url = ListingURLBuilder("http://api").build_listing_url({}, view="waitlist")

    assert "/api/cars/admin/all?verified=false" in url


def test_unknown_view_raises():
    with pytest.raises(ValueError):
        ListingURLBuilder().build_listing_url({}, view="sold")


def test_filter_catalogue_urls():
    builder = ListingURLBuilder("http://api")

    assert builder.build_filters_url() == "http://api/api/filters/all"
    assert builder.build_models_url("Mercedes Benz") == "http://api/api/filters/models/Mercedes%20Benz"
    assert builder.build_models_url("A/B") == "http://api/api/filters/models/A%2FB"
