"""
View router - Maps the store's current view to a page and renders the app shell
"""

import logging
from typing import Dict, Optional

from src.integrations.contracts.storefront import View
from src.storefront.components.navbar import navbar
from src.storefront.components.notification import notification_banner
from src.storefront.pages.admin import AdminDashboardPage, ConfirmCallback
from src.storefront.pages.auth import AuthPage
from src.storefront.pages.cart import CartPage
from src.storefront.pages.orders import UserOrdersPage
from src.storefront.pages.shop import ShopPage

logger = logging.getLogger(__name__)


def connection_error_panel(base_url: str) -> Dict:
    return {
        "type": "connection_error",
        "title": "Backend Connection Failed",
        "message": "The application cannot connect to the API server.",
        "action_required": f"Please ensure your FastAPI server is running on {base_url}.",
    }


class ViewRouter:
    def __init__(self, store, confirm: Optional[ConfirmCallback] = None):
        self.store = store
        self.pages = {
            View.SHOP: ShopPage(store),
            View.AUTH: AuthPage(store),
            View.USER_ORDERS: UserOrdersPage(store),
            View.ADMIN_DASHBOARD: AdminDashboardPage(store, confirm=confirm),
            View.CART: CartPage(store),
        }

    def page_for(self, view: View):
        """Pure lookup; unknown tags fall back to the shop"""
        return self.pages.get(view, self.pages[View.SHOP])

    @property
    def current_page(self):
        return self.page_for(self.store.view)

    async def navigate(self, view: View):
        """Switch view and run the page's fetch-on-mount hook"""
        self.store.set_view(view)
        logger.debug("Navigated to %s", self.store.view.value)
        if self.store.api_healthy:
            await self.current_page.on_mount()

    def render_view(self) -> Dict:
        if not self.store.api_healthy:
            return connection_error_panel(self.store.api.base_url)
        return self.current_page.render()

    def render(self) -> Dict:
        return {
            "navbar": navbar(self.store.current_user),
            "notification": notification_banner(self.store.notification),
            "view": self.store.view.value,
            "loading": self.store.loading,
            "page": self.render_view(),
        }
