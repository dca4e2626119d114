"""
Tests for the listing API client.

The aiohttp session is replaced by a scripted fake so no network is used.
"""

import asyncio
import json
from urllib.parse import parse_qs, urlparse

import aiohttp
import pytest
from listing_engine.config import FetchConfig, RetryConfig
from listing_engine.error_handling import ListingFetchError
from listing_engine.fetch import ListingClient
from listing_engine.filtering import FALLBACK_OPTIONS
from listing_engine.models import ListingView


class FakeResponse:
    def __init__(self, status=200, payload=None, body=None):
        self.status = status
        self._payload = payload
        self._body = body if body is not None else json.dumps(payload)

    async def text(self):
        return self._body

    async def json(self, content_type="application/json"):
        return json.loads(self._body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """Returns scripted responses (or raises scripted errors) in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.closed = False

    def get(self, url, headers=None):
        self.requests.append((url, headers))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self):
        self.closed = True


def make_client(*responses, token=None, max_retries=3):
    session = FakeSession(*responses)
    client = ListingClient(
        config=FetchConfig(base_url="http://api", page_limit=12, access_token=token),
        retry_config=RetryConfig(max_retries=max_retries, initial_delay_seconds=0),
        session=session,
    )
    return client, session


ENVELOPE = {
    "success": True,
    "data": [{"_id": "1", "price": "836 triệu", "year": 2021}],
    "pagination": {"currentPage": 1, "totalPages": 3, "totalItems": 25, "itemsPerPage": 12},
}


@pytest.mark.asyncio
async def test_fetch_listings_sends_translated_params():
    client, session = make_client(FakeResponse(payload=ENVELOPE))

    page = await client.fetch_listings({"make": "Tesla|BMW", "minPrice": 100}, page=2)

    url, headers = session.requests[0]
    parsed = urlparse(url)
    assert parsed.path == "/api/cars"
    assert parse_qs(parsed.query) == {
        "make": ["Tesla|BMW"],
        "minPrice": ["100"],
        "page": ["2"],
        "limit": ["12"],
    }
    assert "Authorization" not in headers
    assert page.data == ENVELOPE["data"]
    assert page.pagination.total_pages == 3


@pytest.mark.asyncio
async def test_admin_views_send_verified_flag_and_token():
    client, session = make_client(FakeResponse(payload=ENVELOPE), token="secret")

    await client.fetch_listings({}, view=ListingView.WAITLIST)

    url, headers = session.requests[0]
    assert "/api/cars/admin/all?" in url
    assert parse_qs(urlparse(url).query)["verified"] == ["false"]
    assert headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_server_errors_are_retried():
    client, session = make_client(
        FakeResponse(status=503, body="busy"),
        aiohttp.ClientConnectionError("reset"),
        FakeResponse(payload=ENVELOPE),
    )

    page = await client.fetch_listings({})

    assert len(session.requests) == 3
    assert len(page.data) == 1


@pytest.mark.asyncio
async def test_client_error_raises_without_retry():
    client, session = make_client(FakeResponse(status=404, body="not found"))

    with pytest.raises(ListingFetchError) as exc_info:
        await client.fetch_listings({})

    assert exc_info.value.status == 404
    assert len(session.requests) == 1


@pytest.mark.asyncio
async def test_invalid_json_raises_fetch_error():
    client, _ = make_client(FakeResponse(body="<html>"), max_retries=1)

    with pytest.raises(ListingFetchError):
        await client.fetch_listings({})


@pytest.mark.asyncio
async def test_timeouts_raise_fetch_error():
    client, _ = make_client(asyncio.TimeoutError(), max_retries=1)

    with pytest.raises(ListingFetchError) as exc_info:
        await client.fetch_listings({})

    assert exc_info.value.status is None


@pytest.mark.asyncio
async def test_facet_options_fall_back_on_failure():
    client, _ = make_client(FakeResponse(status=500, body="boom"), max_retries=1)

    options = await client.fetch_facet_options()

    assert options.brands == []
    assert options.seats == FALLBACK_OPTIONS["seats"]


@pytest.mark.asyncio
async def test_fetch_models():
    client, session = make_client(FakeResponse(payload={"data": ["Vios", None, "Camry"]}))

    assert await client.fetch_models("Toyota") == ["Vios", "Camry"]
    assert session.requests[0][0] == "http://api/api/filters/models/Toyota"
    assert await client.fetch_models("") == []


@pytest.mark.asyncio
async def test_injected_session_is_not_closed():
    client, session = make_client()

    async with client:
        pass

    assert not session.closed


@pytest.mark.asyncio
async def test_owned_session_is_created_and_closed():
    client = ListingClient(FetchConfig(base_url="http://api"))

    async with client:
        owned = client._session
        assert isinstance(owned, aiohttp.ClientSession)

    assert owned.closed
