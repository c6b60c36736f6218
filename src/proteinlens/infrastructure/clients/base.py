"""Shared plumbing for the httpx-based catalog clients."""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ...config import ClientConfig
from ...core.errors import CatalogError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class CatalogClient:
    """
    Base class wrapping one ``httpx.AsyncClient``.

    A client passed in by the caller is borrowed and never closed here;
    otherwise one is created and owned by this instance. Every failure
    (transport error, non-2xx status, undecodable body) surfaces as
    CatalogError. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        config: Optional[ClientConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or ClientConfig()
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self._config.timeout,
            headers={"User-Agent": self._config.user_agent},
            follow_redirects=True,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        url = self._url(path)
        logger.debug(f"GET {url} {params or ''}")
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            raise CatalogError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            raise CatalogError(
                f"{url} returned HTTP {response.status_code}", status_code=response.status_code
            )
        return response

    async def _get_text(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        response = await self._get(path, params)
        return response.text

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._get(path, params)
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise CatalogError(f"{response.url} returned a body that is not JSON") from e

    @staticmethod
    def _validate(model: Type[M], data: Any, source: str) -> M:
        """Validate a decoded body against a wire model."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Unexpected response shape from {source}: {e}") from e
