"""
Listing API client - fetches pages of car listings and the facet catalogue
from the marketplace backend.
"""

import asyncio
import logging
from typing import Any, List, Optional

import aiohttp

from listing_engine.config.engine_config import FetchConfig, RetryConfig
from listing_engine.error_handling.error_handler import ErrorHandler, ListingFetchError
from listing_engine.filtering.facet_options import FacetOptions
from listing_engine.models import ListingPage, ListingView, QueryParams
from listing_engine.url_builder import ListingURLBuilder


logger = logging.getLogger(__name__)


class ListingClient:
    """
    Async client for the cars listing endpoints.

    Reuses one aiohttp session for all requests; call close() (or use the
    client as an async context manager) when done.
    """

    def __init__(
        self,
        config: Optional[FetchConfig] = None,
        retry_config: Optional[RetryConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.config = config or FetchConfig()
        self.url_builder = ListingURLBuilder(self.config.base_url)
        self.error_handler = ErrorHandler(retry_config)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _ensure_session(self):
        """Ensure we have an open session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            )
            self._owns_session = True

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.config.access_token:
            headers["Authorization"] = f"Bearer {self.config.access_token}"
        return headers

    async def _get_json(self, url: str) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            ListingFetchError: On network errors, non-200 answers or bad JSON
        """
        await self._ensure_session()
        try:
            async with self._session.get(url, headers=self._headers()) as response:
                if response.status != 200:
                    body = await response.text()
                    raise ListingFetchError(
                        f"Listing API returned {response.status}: {body[:200]}",
                        url=url,
                        status=response.status,
                    )
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ListingFetchError(f"Listing API request failed: {e}", url=url) from e
        except ValueError as e:
            raise ListingFetchError(f"Listing API returned invalid JSON: {e}", url=url) from e

    async def fetch_listings(
        self,
        params: Optional[QueryParams] = None,
        view: ListingView = ListingView.PUBLIC,
        page: int = 1,
        limit: Optional[int] = None
    ) -> ListingPage:
        """
        Fetch one page of listings matching translated filter params.

        Args:
            params: Query parameters from the filter translator
            view: Listing view (public, approved, waitlist)
            page: 1-based page number
            limit: Records per page (default: configured page limit)

        Returns:
            Parsed listing page

        Raises:
            ListingFetchError: If the request fails after retries
        """
        url = self.url_builder.build_listing_url(
            params,
            view=view,
            page=page,
            limit=limit or self.config.page_limit
        )
        logger.info(f"Fetching listings: {url}")

        payload = await self.error_handler.retry_with_backoff(self._get_json, url)
        listing_page = ListingPage.from_response(payload)

        logger.info(
            f"Fetched {len(listing_page.data)} listings "
            f"(page {listing_page.pagination.current_page}/{listing_page.pagination.total_pages})"
        )
        return listing_page

    async def fetch_facet_options(self) -> FacetOptions:
        """
        Fetch the selectable values for each facet.

        Falls back to the built-in option lists when the catalogue request
        fails, so the filter panel is never empty.
        """
        url = self.url_builder.build_filters_url()
        try:
            payload = await self.error_handler.retry_with_backoff(self._get_json, url)
        except ListingFetchError as e:
            logger.error(f"Error fetching filters: {e}")
            payload = None
        return FacetOptions.from_response(payload)

    async def fetch_models(self, brand: str) -> List[str]:
        """Models available for ``brand``; empty for a blank brand or on failure."""
        if not brand:
            return []
        url = self.url_builder.build_models_url(brand)
        try:
            payload = await self.error_handler.retry_with_backoff(self._get_json, url)
        except ListingFetchError as e:
            logger.error(f"Error fetching models for {brand}: {e}")
            return []
        models = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(models, list):
            return []
        return [model for model in models if model]
