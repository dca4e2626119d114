"""
Listing session - coordinates filter translation, debounced fetching,
result caching and client-side sorting for one listing page.
"""

import asyncio
import logging
from typing import Any, List, Optional

from listing_engine.config.engine_config import EngineSettings
from listing_engine.debounce.debouncer import DebouncedTask
from listing_engine.error_handling.error_handler import ListingFetchError
from listing_engine.fetch.listing_client import ListingClient
from listing_engine.filtering.filter_translator import FilterTranslator
from listing_engine.models import FacetSelection, ListingPage, ListingView, QueryParams, SortKey
from listing_engine.sorting.listing_sorter import ListingSorter


logger = logging.getLogger(__name__)


class ListingSession:
    """
    State of one mounted listing page.

    Filter changes are debounced into fetches. Every fetch gets a generation
    number; starting a new fetch cancels the previous one, and a response is
    applied only if nothing newer has been applied already.

    Attributes:
        client: Listing API client
        view: Which listing page this session backs
        selection: Current facet selection
        sort_key: Current client-side ordering
        records: Records of the last applied fetch, in server order
        page: Current 1-based page
        total_pages: Page count of the last applied fetch
        last_error: Error of the last failed fetch, None after a success
    """

    def __init__(
        self,
        client: ListingClient,
        view: ListingView = ListingView.PUBLIC,
        translator: Optional[FilterTranslator] = None,
        settings: Optional[EngineSettings] = None
    ):
        self.client = client
        self.view = ListingView(view)
        self.translator = translator or FilterTranslator()
        self.settings = settings or EngineSettings()
        self.sorter = ListingSorter()

        self.selection = FacetSelection()
        self.sort_key = SortKey.DEFAULT
        self.records: List[Any] = []
        self.page = 1
        self.total_pages = 1
        self.last_error: Optional[ListingFetchError] = None

        self._generation = 0
        self._applied_generation = 0
        self._inflight: Optional[asyncio.Task] = None
        self._debouncer = DebouncedTask(self.refresh, delay_ms=self.settings.debounce.delay_ms)

    @property
    def query_params(self) -> QueryParams:
        """Backend parameters for the current selection."""
        return self.translator.translate(self.selection)

    @property
    def sorted_records(self) -> List[Any]:
        """Current records in the selected client-side order."""
        return self.sorter.sort(self.records, self.sort_key)

    def update_selection(self, selection: Any = None, immediate: bool = False) -> Optional[asyncio.Task]:
        """
        Replace the selection (or keep the mutated one) and schedule a fetch.

        Filter changes always restart at page 1.

        Args:
            selection: New FacetSelection or UI filter dict; None keeps the
                current selection, for callers that mutated it in place
            immediate: Fetch now instead of after the debounce window

        Returns:
            The fetch task when ``immediate`` is set, else None
        """
        if selection is not None:
            self.selection = FacetSelection.from_dict(selection)
        self.page = 1
        logger.debug(f"Filter change on {self.view.value} (immediate={immediate})")
        return self._debouncer.trigger(immediate=immediate)

    def toggle(self, facet: str, value: Any) -> Optional[asyncio.Task]:
        """Toggle one facet value; checkbox clicks apply immediately.

        Raises:
            KeyError: If ``facet`` is not a facet name
        """
        self.selection.toggle(facet, value)
        return self.update_selection(immediate=True)

    def set_price_range(
        self,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        immediate: bool = False
    ) -> Optional[asyncio.Task]:
        """Move the price slider; pass ``immediate`` on pointer release."""
        self.selection.set_price_range(min_price, max_price)
        return self.update_selection(immediate=immediate)

    def clear_filters(self) -> Optional[asyncio.Task]:
        self.selection.clear()
        return self.update_selection(immediate=True)

    def set_sort_key(self, key: Any) -> None:
        """Change the ordering; unknown keys fall back to server order."""
        try:
            self.sort_key = SortKey(key)
        except (ValueError, TypeError):
            self.sort_key = SortKey.DEFAULT

    async def go_to_page(self, page: int) -> None:
        self.page = max(1, min(int(page), max(1, self.total_pages)))
        self._debouncer.cancel()
        await self.refresh()

    async def refresh(self) -> None:
        """Fetch the current page for the current selection."""
        self._generation += 1
        generation = self._generation

        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        task = asyncio.ensure_future(
            self.client.fetch_listings(
                self.query_params,
                view=self.view,
                page=self.page,
                limit=self.settings.fetch.page_limit,
            )
        )
        self._inflight = task

        try:
            listing_page = await task
        except asyncio.CancelledError:
            if task.cancelled() and generation < self._generation:
                logger.debug(f"Fetch generation {generation} superseded")
                return
            raise
        except ListingFetchError as e:
            self._apply_error(generation, e)
            return

        self._apply(generation, listing_page)

    async def close(self) -> None:
        """Cancel pending work; the client is left open for its owner."""
        self._debouncer.cancel()
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        await self._debouncer.drain()

    def _apply(self, generation: int, listing_page: ListingPage) -> None:
        if generation < self._applied_generation:
            logger.warning(f"Discarding stale listings from fetch generation {generation}")
            return
        self._applied_generation = generation
        self.records = listing_page.data
        self.total_pages = max(1, listing_page.pagination.total_pages)
        self.last_error = None

    def _apply_error(self, generation: int, error: ListingFetchError) -> None:
        if generation < self._applied_generation:
            return
        logger.error(f"Failed to fetch {self.view.value} listings: {error}")
        self._applied_generation = generation
        self.records = []
        self.total_pages = 1
        self.last_error = error
