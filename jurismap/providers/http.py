"""HTTP boundary provider for GeoJSON endpoints (ArcGIS FeatureServer, open data portals)."""
from typing import Any, Dict, List, Optional

import requests

from jurismap.core.config import HTTP_TIMEOUT
from jurismap.providers.geojson import GeoJSONDictProvider
from jurismap.utils.logging import log_structured


class HTTPGeoJSONProvider(GeoJSONDictProvider):
    """Fetches a FeatureCollection over HTTP on every (re)load."""

    def __init__(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: float = HTTP_TIMEOUT,
        coordinate_order: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize HTTP provider.

        Args:
            url: GeoJSON endpoint
            params: Query string parameters
            timeout: Request timeout in seconds
            coordinate_order: Axis order of the payload
            session: Optional requests session (connection reuse, tests)
        """
        super().__init__({}, name=f"GeoJSON endpoint {url}", coordinate_order=coordinate_order)
        self.url = url
        self.params = params or {}
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_records(self) -> List[Dict[str, Any]]:
        """Download the collection and map its features."""
        response = self.session.get(
            self.url,
            params=self.params,
            timeout=self.timeout,
            headers={"Accept": "application/geo+json, application/json"},
        )
        response.raise_for_status()
        self.data = response.json()

        log_structured(
            "info",
            "Fetched boundary payload",
            url=self.url,
            features=len(self.data.get("features") or []),
        )
        return super().fetch_records()
