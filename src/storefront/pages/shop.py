"""
Shop page - Catalog grid with category filter and add-to-cart.
"""

import logging
from typing import Dict, List, Optional

from src.integrations.contracts.storefront import NotificationKind, Product
from src.storefront.components.product_card import product_card

logger = logging.getLogger(__name__)


def filter_products(products: List[Product], category_id: Optional[int]) -> List[Product]:
    """Strict equality on category id; None keeps every product in order."""
    if category_id is None:
        return list(products)
    return [p for p in products if p.category_id == category_id]


class ShopPage:
    def __init__(self, store):
        self.store = store

    async def on_mount(self):
        return None

    def select_category(self, category_id: Optional[int]):
        self.store.select_category(category_id)

    def displayed_products(self) -> List[Product]:
        return filter_products(self.store.products, self.store.selected_category_id)

    async def add_to_cart(self, product_id: int) -> Optional[Dict]:
        if not self.store.current_user:
            self.store.notify("Please log in to add items to your cart.", NotificationKind.ERROR)
            return None

        result = await self.store.authed_request(
            "/cart/add",
            method="POST",
            json_body={"product_id": product_id, "quantity": 1},
        )

        data = result.value
        if data:
            quantity = data.get("quantity") if isinstance(data, dict) else None
            self.store.notify(
                f"Added product {product_id} to cart! (Current quantity: {quantity})",
                NotificationKind.SUCCESS,
            )
        else:
            logger.warning("Add to cart failed for product %s", product_id)
        return data

    def render(self) -> Dict:
        store = self.store
        selected = store.selected_category_id
        displayed = self.displayed_products()

        filters = [{"label": f"All ({len(store.products)})", "category_id": None, "active": selected is None}]
        filters.extend(
            {"label": c.name, "category_id": c.id, "active": selected == c.id}
            for c in store.categories
        )

        if store.loading and not store.products:
            message = "Loading products..."
        elif not displayed:
            message = "No products found in this selection. (Check backend data/logs)"
        else:
            message = None

        is_authenticated = store.current_user is not None
        return {
            "type": "shop",
            "title": "Our Latest Collection",
            "filters": filters,
            "products": [product_card(p, is_authenticated) for p in displayed],
            "message": message,
        }
