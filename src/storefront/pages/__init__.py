"""
Storefront pages.

Each page owns its page-local state (cart items, form drafts, order lists),
issues requests through the store's session fetcher and renders a view model.
"""

from .admin import AdminCategoryManager, AdminDashboardPage, AdminProductManager
from .auth import AuthPage
from .cart import CartPage
from .orders import UserOrdersPage
from .shop import ShopPage, filter_products

__all__ = [
    "AdminCategoryManager", "AdminDashboardPage", "AdminProductManager",
    "AuthPage", "CartPage", "UserOrdersPage", "ShopPage", "filter_products",
]
