"""
URL construction module for the car listing API.

This module builds listing and filter-catalogue URLs with properly encoded
query parameters.
"""

from urllib.parse import urlencode, quote
from typing import Dict, Optional, Tuple

from listing_engine.models import ListingView, QueryParams


class ListingURLBuilder:
    """Constructs listing API URLs with encoded parameters.

    Each listing view reads from its own endpoint; the approved and waitlist
    views share the admin endpoint and differ by the ``verified`` flag.
    """

    VIEW_ENDPOINTS: Dict[ListingView, Tuple[str, Dict[str, str]]] = {
        ListingView.PUBLIC: ("/api/cars", {}),
        ListingView.APPROVED: ("/api/cars/admin/all", {"verified": "true"}),
        ListingView.WAITLIST: ("/api/cars/admin/all", {"verified": "false"}),
    }
    FILTERS_PATH = "/api/filters/all"
    MODELS_PATH = "/api/filters/models"

    def __init__(self, base_url: str = "http://localhost:5000"):
        self.base_url = base_url.rstrip("/")

    def build_listing_url(
        self,
        params: Optional[QueryParams] = None,
        view: ListingView = ListingView.PUBLIC,
        page: int = 1,
        limit: int = 12
    ) -> str:
        """Construct a listing URL for one page of results.

        Args:
            params: Translated filter parameters
            view: Listing view the URL is for
            page: 1-based page number
            limit: Records per page

        Returns:
            Complete listing URL with encoded parameters

        Examples:
            >>> builder = ListingURLBuilder("https://cars.example")
            >>> builder.build_listing_url({"make": "Tesla|BMW"}, page=2)
            'https://cars.example/api/cars?make=Tesla%7CBMW&page=2&limit=12'
        """
        path, view_params = self.VIEW_ENDPOINTS[ListingView(view)]

        query = dict(params or {})
        query.update(view_params)
        query["page"] = str(max(1, int(page)))
        query["limit"] = str(max(1, int(limit)))

        return f"{self.base_url}{path}?{urlencode(query)}"

    def build_filters_url(self) -> str:
        """URL of the facet options catalogue."""
        return f"{self.base_url}{self.FILTERS_PATH}"

    def build_models_url(self, brand: str) -> str:
        """URL listing the models of ``brand``."""
        return f"{self.base_url}{self.MODELS_PATH}/{quote(brand, safe='')}"
