"""Client for the Digital Twins management API (types and spaces)."""
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import httpx

from facility_topology.errors import DigitalTwinsRequestError, InvalidInputError
from facility_topology.spaces.catalog import TypeCatalog, types_query
from facility_topology.spaces.hierarchy import build_hierarchy
from facility_topology.spaces.models import Space, SpaceRecord

logger = logging.getLogger(__name__)

API_PATH = "api/v1.0/"
SPACES_PATH = "spaces"
TYPES_PATH = "types"


class TopologyClient:
    """Resolves space types, fetches spaces and returns them as a hierarchy."""

    def __init__(
        self,
        *,
        base_url: str,
        access_token: Optional[str] = None,
        basic_auth: Optional[Tuple[str, str]] = None,
        timeout: float = 30.0,
        space_filter: str = "",
    ) -> None:
        if not base_url:
            raise ValueError("Management API base URL must be provided")
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.access_token = access_token
        self.basic_auth = basic_auth
        self.timeout = timeout
        self.space_filter = space_filter
        self._type_catalog: Optional[TypeCatalog] = None

    @property
    def type_catalog(self) -> Optional[TypeCatalog]:
        return self._type_catalog

    def invalidate_type_catalog(self) -> None:
        """Forget previously resolved type ids so the next call re-queries from scratch."""
        self._type_catalog = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _auth(self) -> Optional[httpx.BasicAuth]:
        if self.access_token or not self.basic_auth:
            return None
        username, password = self.basic_auth
        return httpx.BasicAuth(username, password)

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            auth=self._auth(),
            timeout=self.timeout,
        )

    async def get_spaces(self) -> List[Space]:
        async with self._create_client() as client:
            catalog = await self.resolve_type_catalog(client)
            records = await self.fetch_space_records(client)
        logger.info("Building hierarchy from %s space records", len(records))
        return build_hierarchy(records, catalog)

    async def resolve_type_catalog(self, client: httpx.AsyncClient) -> TypeCatalog:
        entries = await self._get_json(client, f"{API_PATH}{TYPES_PATH}?{types_query()}")
        if not isinstance(entries, list):
            raise InvalidInputError("Types response must be a JSON array")
        base = self._type_catalog or TypeCatalog()
        catalog = base.merged(entries).validate()
        self._type_catalog = catalog
        logger.debug("Resolved space type ids: %s", dict(catalog.ids_by_name))
        return catalog

    async def fetch_space_records(self, client: httpx.AsyncClient) -> List[SpaceRecord]:
        payload = await self._get_json(client, f"{API_PATH}{SPACES_PATH}?{self.space_filter}")
        if not isinstance(payload, list):
            raise InvalidInputError("Spaces response must be a JSON array")
        return [SpaceRecord.from_payload(entry) for entry in payload]

    async def _get_json(self, client: httpx.AsyncClient, request_uri: str) -> Any:
        logger.debug("GET %s%s", self.base_url, request_uri)
        response = await client.get(request_uri)
        if not response.is_success:
            raise DigitalTwinsRequestError(response.status_code, response.text, request_uri)
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidInputError(f"Digital Twins returned a non-JSON body for {request_uri}") from exc
