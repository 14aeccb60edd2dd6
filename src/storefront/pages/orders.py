"""
Orders page - Read-only order history for the logged-in user.
"""

from typing import Dict, List, Optional

from src.integrations.contracts.storefront import Order, User, parse_records
from src.storefront.components.notification import inline_error


def order_row(order: Order, include_user: bool = False) -> Dict:
    row = {
        "id": order.id,
        "label": f"Order #{order.id}",
        "status": order.status,
        "status_color": "yellow" if order.is_pending else "green",
        "placed": order.order_date.date().isoformat() if order.order_date else None,
        "total": f"${order.total_amount:.2f}",
    }
    if include_user:
        row["user_id"] = order.user_id
    return row


class UserOrdersPage:
    def __init__(self, store):
        self.store = store
        self.orders: List[Order] = []
        store.subscribe_identity(self._on_identity_change)

    def _on_identity_change(self, user: Optional[User]):
        self.orders = []

    async def on_mount(self):
        if self.store.current_user:
            await self.refresh()

    async def refresh(self):
        user = self.store.current_user
        if not user:
            return
        result = await self.store.authed_request(f"/orders/user/{user.id}")
        if result.ok:
            self.orders = parse_records(result.value, Order)

    def render(self) -> Dict:
        store = self.store
        user = store.current_user
        if not user:
            return {"type": "user_orders", "notice": inline_error("Please log in to view your orders.")}

        if store.loading:
            message = "Loading order history..."
        elif not self.orders:
            message = "You haven't placed any orders yet."
        else:
            message = None

        return {
            "type": "user_orders",
            "title": "My Orders",
            "heading": f"Order History for {user.username}",
            "orders": [order_row(o) for o in self.orders],
            "message": message,
            "actions": [
                {
                    "type": "refresh",
                    "label": "Refreshing..." if store.loading else "Refresh My Order History",
                    "disabled": store.loading,
                }
            ],
        }
