"""
Storefront application layer.

This package wires together:
- integrations.clients.real_http (HTTP client + session fetcher)
- storefront.state_store (single owned application state)
- storefront.router (view -> page mapping)
- storefront.pages / storefront.components (view models)
"""

from .router import ViewRouter
from .state_store import AppStateStore

__all__ = ["AppStateStore", "ViewRouter"]
