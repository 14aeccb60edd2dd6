"""
Session fetcher for calls that require a logged-in identity.

The backend contract for this client is unauthenticated: the credential is
accepted for interface symmetry but never sent (see ``forwards_credential``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from src.integrations.clients.real_http.storefront_api import StorefrontApiClient
from src.integrations.contracts.storefront import FetchResult
from src.utils.busy import BusyCounter

logger = logging.getLogger(__name__)


class SessionFetcher:
    forwards_credential = False

    def __init__(self, api: StorefrontApiClient, busy: Optional[BusyCounter] = None) -> None:
        self.api = api
        self.busy = busy or BusyCounter()

    async def authed_request(
        self,
        path: str,
        credential: Optional[str] = None,
        *,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        json_body: Any = None,
    ) -> FetchResult:
        merged: Dict[str, str] = {"Content-Type": "application/json"}
        merged.update(headers or {})
        # Authorization header intentionally omitted: mock session.
        if credential and not self.forwards_credential:
            logger.debug("Credential accepted but not forwarded for %s %s", method, path)

        with self.busy:
            return await self.api.fetch_data(path, method=method, headers=merged, json_body=json_body)
