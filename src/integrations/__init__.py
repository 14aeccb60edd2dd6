"""
Integrations layer.
This package contains all code used to communicate with the storefront REST backend:
- catalog listings (categories, products)
- mock session (token exchange, /users/me)
- cart, orders and the admin CRUD endpoints

Key rule:
- Pages MUST NOT call httpx directly.
- Pages go through the store's session fetcher (src/integrations/clients/real_http/session.py),
  which wraps the HTTP client (src/integrations/clients/real_http/storefront_api.py).
"""

from .contracts.storefront import (
    CartEstimate,
    CartItem,
    Category,
    FetchResult,
    FetchStatus,
    Notification,
    NotificationKind,
    Order,
    OrderStatus,
    Product,
    User,
    View,
    parse_record,
    parse_records,
)
from .errors import (
    ApiError,
    NetworkFailure,
    ProtocolMismatchError,
    StorefrontError,
    ValidationRejection,
)

__all__ = [
    # contracts
    "CartEstimate", "CartItem", "Category", "FetchResult", "FetchStatus",
    "Notification", "NotificationKind", "Order", "OrderStatus", "Product",
    "User", "View", "parse_record", "parse_records",
    # errors
    "ApiError", "NetworkFailure", "ProtocolMismatchError", "StorefrontError",
    "ValidationRejection",
]
