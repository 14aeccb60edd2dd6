"""
Real HTTP integration clients.

These clients communicate with the storefront REST backend via httpx:
- StorefrontApiClient: URL building, response classification, failure normalization
- SessionFetcher: mock-credential wrapper that also drives the busy counter

Important:
- Results are returned as FetchResult (src/integrations/contracts/storefront.py)
- No client raises on backend or network failure; callers check the result status
"""

from .session import SessionFetcher
from .storefront_api import StorefrontApiClient, extract_error_detail

__all__ = ["SessionFetcher", "StorefrontApiClient", "extract_error_detail"]
