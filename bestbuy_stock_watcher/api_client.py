"""HTTP client for querying Best Buy product availability."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from ._redact import redact_secrets
from .config import HEADERS, Config
from .exceptions import FetchError
from .models import ProductAvailability

logger = logging.getLogger(__name__)

SHOW_FIELDS = "sku,name,onlineAvailability,url"
MAX_PAGE_SIZE = 100


class AvailabilityFetcher(Protocol):
    def fetch(self, identifiers: Sequence[str]) -> List[ProductAvailability]: ...


def _parse_product(raw: Dict[str, Any]) -> Optional[ProductAvailability]:
    sku = raw.get("sku")
    if sku is None or sku == "":
        logger.warning("Skipping product record without a SKU: %s", raw)
        return None
    return ProductAvailability(
        identifier=str(sku),
        name=raw.get("name") or "Unknown Product",
        available=bool(raw.get("onlineAvailability", False)),
        url=raw.get("url") or "",
    )


class BestBuyAPIClient:
    """Query the Best Buy Products API for a batch of SKUs."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else Config.BEST_BUY_KEY
        self.base_url = (base_url or Config.BEST_BUY_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS)

    def _products_url(self, identifiers: Sequence[str]) -> str:
        return f"{self.base_url}/products(sku%20in({','.join(identifiers)}))"

    def _fetch_page(self, identifiers: Sequence[str]) -> List[Dict[str, Any]]:
        url = self._products_url(identifiers)
        params = {
            "show": SHOW_FIELDS,
            "apiKey": self.api_key,
            "format": "json",
            "pageSize": str(len(identifiers)),
        }
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            detail = redact_secrets(str(exc), [self.api_key])
            raise FetchError(f"Failed to connect to Best Buy API: {type(exc).__name__}: {detail}") from None

        if not response.ok:
            raise FetchError(
                f"Best Buy API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(f"Failed to decode products JSON: {exc}", response.status_code) from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("products"), list):
            raise FetchError("Unexpected products payload from Best Buy API", response.status_code)
        return payload["products"]  # type: ignore[no-any-return]

    def fetch(self, identifiers: Sequence[str]) -> List[ProductAvailability]:
        """Return availability for ``identifiers`` in request order.

        SKUs the API does not return are left out of the result. Raises
        ``FetchError`` on any transport, status or decode failure.
        """
        if not identifiers:
            return []

        by_sku: Dict[str, ProductAvailability] = {}
        for start in range(0, len(identifiers), MAX_PAGE_SIZE):
            batch = identifiers[start:start + MAX_PAGE_SIZE]
            for raw in self._fetch_page(batch):
                if not isinstance(raw, dict):
                    logger.warning("Skipping malformed product record: %r", raw)
                    continue
                product = _parse_product(raw)
                if product is not None:
                    by_sku[product.identifier] = product

        missing = [sku for sku in identifiers if sku not in by_sku]
        if missing:
            logger.warning("Best Buy API returned no data for SKUs: %s", ", ".join(missing))
        logger.info("Fetched availability for %s/%s SKUs", len(by_sku), len(identifiers))
        return [by_sku[sku] for sku in identifiers if sku in by_sku]
