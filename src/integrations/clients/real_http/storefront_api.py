"""
Storefront REST HTTP Client.

Purpose:
- Builds absolute URLs against the configured backend origin
- Classifies each response (JSON vs non-JSON, ok vs error)
- Normalizes every failure into a FetchResult so callers never see an exception

Usage:
- Wrapped by SessionFetcher for calls that need a logged-in identity
- Used directly by AppStateStore for catalog listings, login and registration

Important:
- Collection fetches degrade to an empty result on any failure; declare that
  per call with fetch_collection / empty_on_failure, never by path.
- No retries and, unless configured, no timeout.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import httpx

from src.error_handler import ErrorHandler
from src.integrations.contracts.storefront import FetchResult
from src.integrations.errors import ApiError, NetworkFailure, ProtocolMismatchError, StorefrontError
from src.utils.config_loader import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 100


def extract_error_detail(payload: Any, fallback: str = "") -> str:
    """Human-readable message from a FastAPI-style ``detail`` field."""
    detail = payload.get("detail") if isinstance(payload, dict) else None
    if detail is None or detail == "":
        return fallback or "Unknown API Error"
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict) and first.get("msg"):
            return str(first["msg"])
    return "Unknown API Error"


class StorefrontApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("STOREFRONT_API_BASE_URL", "") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self.error_handler = error_handler or ErrorHandler()

    @classmethod
    def from_config(cls, config, transport: Optional[httpx.AsyncBaseTransport] = None) -> "StorefrontApiClient":
        return cls(
            base_url=config.api.base_url,
            timeout_seconds=config.api.timeout_seconds,
            transport=transport,
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport)

    async def fetch_data(
        self,
        path: str,
        *,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        json_body: Any = None,
        form: Optional[Dict[str, str]] = None,
        empty_on_failure: bool = False,
    ) -> FetchResult:
        url = self.url_for(path)
        kwargs: Dict[str, Any] = {"headers": headers or {}}
        if json_body is not None:
            kwargs["json"] = json_body
        elif form is not None:
            kwargs["data"] = form

        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
            return self._classify(path, response, empty_on_failure)
        except httpx.TransportError as exc:
            error: StorefrontError = NetworkFailure(f"Network error for {path}: {exc}")
        except StorefrontError as exc:
            error = exc

        self.error_handler.handle_exception(error, {"path": path, "method": method})
        if empty_on_failure:
            return FetchResult.empty(error)
        return FetchResult.failed(error)

    async def fetch_collection(self, path: str, **kwargs: Any) -> FetchResult:
        return await self.fetch_data(path, empty_on_failure=True, **kwargs)

    async def request(self, path: str, **options: Any) -> Any:
        """Parsed JSON, [] for a degraded collection fetch, or None on failure."""
        result = await self.fetch_data(path, **options)
        return result.value

    def _classify(self, path: str, response: httpx.Response, empty_on_failure: bool) -> FetchResult:
        content_type = response.headers.get("content-type")

        if not content_type or "application/json" not in content_type:
            if response.is_success and empty_on_failure:
                logger.warning("Received non-JSON response for %s, returning empty list.", path)
                return FetchResult.empty()
            snippet = response.text[:SNIPPET_LENGTH]
            raise ProtocolMismatchError(
                f"API returned unexpected content type ({content_type or 'none'}) for {path}. "
                f"Full content: {snippet}...",
                snippet=snippet,
                content_type=content_type,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProtocolMismatchError(
                f"API returned malformed JSON for {path}: {exc}",
                snippet=response.text[:SNIPPET_LENGTH],
                content_type=content_type,
            ) from exc

        if not response.is_success:
            logger.error("API Error: %s", data)
            message = extract_error_detail(data, fallback=response.reason_phrase)
            raise ApiError(message, status_code=response.status_code, payload=data if isinstance(data, dict) else {})

        return FetchResult.success(data)

    async def check_api_health(self) -> bool:
        """True when GET / answers with any successful status."""
        try:
            async with self._client() as client:
                response = await client.get(self.url_for("/"))
        except httpx.TransportError as exc:
            logger.warning("Health check failed for %s: %s", self.base_url, exc)
            return False
        return response.is_success
