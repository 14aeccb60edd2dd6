"""
Cart page - Current user's cart, display estimate and checkout.
"""

import logging
from typing import Dict, List, Optional

from src.integrations.contracts.storefront import (
    CartEstimate,
    CartItem,
    NotificationKind,
    Order,
    User,
    parse_record,
    parse_records,
)
from src.storefront.components.notification import inline_error

logger = logging.getLogger(__name__)


class CartPage:
    def __init__(self, store):
        self.store = store
        self.cart_items: List[CartItem] = []
        # Id of the user the items were fetched for; None means stale.
        self.loaded_for: Optional[int] = None
        store.subscribe_identity(self._on_identity_change)

    @property
    def unit_price(self) -> float:
        return self.store.config.cart.placeholder_unit_price

    async def on_mount(self):
        await self.sync_identity()

    def _on_identity_change(self, user: Optional[User]):
        self.cart_items = []
        self.loaded_for = None

    @property
    def is_stale(self) -> bool:
        user = self.store.current_user
        return user is None or self.loaded_for != user.id

    async def sync_identity(self):
        """Refetch for the current identity, clear when there is none"""
        user = self.store.current_user
        if not user:
            self.cart_items = []
            self.loaded_for = None
            return
        await self.fetch_cart()

    async def fetch_cart(self):
        user = self.store.current_user
        if not user:
            return
        result = await self.store.authed_request(f"/cart/{user.id}")
        if result.ok:
            self.cart_items = parse_records(result.value, CartItem)
            self.loaded_for = user.id

    def estimate(self) -> CartEstimate:
        # Placeholder price only; the backend prices the real order.
        count = sum(item.quantity for item in self.cart_items)
        return CartEstimate(
            item_count=len(self.cart_items),
            unit_price=self.unit_price,
            subtotal=round(count * self.unit_price, 2),
        )

    async def checkout(self) -> Optional[Order]:
        if self.is_stale:
            await self.sync_identity()
        if not self.cart_items:
            self.store.notify("Your cart is empty!", NotificationKind.INFO)
            return None

        result = await self.store.authed_request("/orders/create", method="POST")
        if not result.ok or not result.value:
            return None

        order = parse_record(result.value, Order)
        if order is None:
            return None
        self.cart_items = []
        logger.info("Order %s placed", order.id)
        self.store.notify(
            f"Order #{order.id} placed successfully! Total: ${order.total_amount:.2f}.",
            NotificationKind.SUCCESS,
        )
        return order

    def render(self) -> Dict:
        store = self.store
        if not store.current_user:
            return {"type": "cart", "notice": inline_error("Please log in to view your shopping cart.")}

        estimate = self.estimate()
        if store.loading:
            message = "Loading cart..."
        elif not self.cart_items:
            message = "Your cart is currently empty. Start shopping!"
        else:
            message = None

        return {
            "type": "cart",
            "title": "Your Shopping Cart",
            "heading": f"Items ({len(self.cart_items)})",
            "items": [
                {
                    "id": item.id,
                    "label": f"Product ID: {item.product_id}",
                    "quantity": item.quantity,
                    "line_estimate": f"${item.quantity * self.unit_price:.2f}",
                }
                for item in self.cart_items
            ],
            "message": message,
            "estimate": {"label": estimate.label, "subtotal": f"${estimate.subtotal:.2f}"},
            "actions": [
                {
                    "type": "checkout",
                    "label": "Proceed to Checkout",
                    "disabled": not self.cart_items or store.loading,
                }
            ],
        }
