"""
HTTP client for the Property Manager API.

Used by frontends and scripts that consume the REST API:
1. Base URL is configuration (PROPERTY_API_URL), passed in, never global
2. Pagination metadata is read from the X-Total-Count / X-Page / X-Page-Size headers
3. Non-2xx responses and connection failures surface as ApiError
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import requests

from property_manager.domain.property import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    Paging,
    PropertyFilters,
)
from property_manager.infra.config import api_base_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

# first page, ellipsis, current page, ellipsis, last page
MIN_PAGE_WINDOW = 5


class ApiError(Exception):
    """Request failed: non-2xx status or no response at all (status_code None)."""

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class ApiNotFoundError(ApiError):
    pass


@dataclass(frozen=True)
class PropertyListPage:
    """One page of the listing plus the metadata sent in headers."""

    properties: list[dict[str, Any]] = field(default_factory=list)
    total_count: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class PropertyApiClient:
    """
    Thin client over the properties endpoints.

    Properties are returned as the JSON objects the API sends
    (``id``, ``idOwner``, ``name``, ``address``, ``price``, ``image``).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = (base_url or api_base_url()).rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def list_properties(
        self,
        filters: PropertyFilters | None = None,
        paging: Paging | None = None,
    ) -> PropertyListPage:
        """
        Fetch one page of properties.

        Args:
            filters: Optional name/address/price constraints
            paging: Optional page and page size (server defaults otherwise)

        Returns:
            PropertyListPage with metadata from the response headers
        """
        response = self._request("GET", "/properties", params=_query_params(filters, paging))

        return PropertyListPage(
            properties=response.json(),
            total_count=_int_header(response, "X-Total-Count", 0),
            page=_int_header(response, "X-Page", DEFAULT_PAGE),
            page_size=_int_header(response, "X-Page-Size", DEFAULT_PAGE_SIZE),
        )

    def get_property(self, property_id: str) -> dict[str, Any]:
        return self._request("GET", f"/properties/{property_id}").json()

    def create_property(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/properties", json=payload).json()

    def update_property(self, property_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/properties/{property_id}", json=payload).json()

    def delete_property(self, property_id: str) -> None:
        self._request("DELETE", f"/properties/{property_id}")

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._base_url}{path}"
        headers = {"Accept": "application/json"}

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning(
                "Property API unreachable",
                extra={"method": method, "url": url, "error_type": type(exc).__name__},
            )
            raise ApiError(f"Could not reach property API at {url}") from exc

        if response.ok:
            return response

        detail = _error_detail(response)
        message = f"API Error: {response.status_code} {response.reason}"
        if response.status_code == 404:
            raise ApiNotFoundError(message, status_code=404, detail=detail)
        raise ApiError(message, status_code=response.status_code, detail=detail)


def page_window(current_page: int, total_pages: int, max_pages: int = 7) -> list[int | None]:
    """
    Page numbers for a pagination control; None marks an ellipsis.

    The first and last pages are always shown. With 20 pages and 7 slots:

        page_window(1, 20)  -> [1, 2, 3, 4, 5, None, 20]
        page_window(10, 20) -> [1, None, 9, 10, 11, None, 20]
        page_window(19, 20) -> [1, None, 16, 17, 18, 19, 20]

    Raises:
        ValueError: If max_pages is below MIN_PAGE_WINDOW
    """
    if max_pages < MIN_PAGE_WINDOW:
        raise ValueError(f"max_pages must be at least {MIN_PAGE_WINDOW}, got {max_pages}")

    if total_pages <= max_pages:
        return list(range(1, total_pages + 1))

    edge = max_pages - 2  # pages shown next to a single ellipsis
    middle = max_pages - 4  # pages shown between two ellipses

    if current_page <= edge - 1:
        return [*range(1, edge + 1), None, total_pages]

    if current_page >= total_pages - (edge - 2):
        return [1, None, *range(total_pages - edge + 1, total_pages + 1)]

    start = current_page - middle // 2
    return [1, None, *range(start, start + middle), None, total_pages]


def _query_params(filters: PropertyFilters | None, paging: Paging | None) -> dict[str, str]:
    params: dict[str, str] = {}

    if filters is not None:
        if filters.name_pattern:
            params["name"] = filters.name_pattern
        if filters.address_pattern:
            params["address"] = filters.address_pattern
        if filters.min_price is not None:
            params["minPrice"] = str(filters.min_price)
        if filters.max_price is not None:
            params["maxPrice"] = str(filters.max_price)

    if paging is not None:
        params["page"] = str(paging.page)
        params["pageSize"] = str(paging.page_size)

    return params


def _int_header(response: requests.Response, name: str, default: int) -> int:
    try:
        return int(response.headers.get(name, default))
    except ValueError:
        return default


def _error_detail(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
