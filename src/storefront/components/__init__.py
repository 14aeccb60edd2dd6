"""
Render helpers shared by the storefront pages.
"""

from .navbar import navbar
from .notification import inline_error, notification_banner
from .product_card import product_card

__all__ = ["navbar", "inline_error", "notification_banner", "product_card"]
