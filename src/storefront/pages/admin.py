"""
Admin dashboard - Category and product CRUD plus every customer's orders.

Every successful mutation refreshes the catalog and replaces the notification.
Deletes go through the injected ``confirm`` callback first.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from src.integrations.contracts.storefront import Category, NotificationKind, Order, Product, parse_records
from src.integrations.errors import ValidationRejection
from src.storefront.components.notification import inline_error
from src.storefront.pages.orders import order_row
from src.storefront.validation import coerce_float, coerce_int, raise_if_errors, require_str, validate_choice

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]


def _deny(message: str) -> bool:
    return False


class AdminCategoryManager:
    def __init__(self, store, confirm: ConfirmCallback):
        self.store = store
        self.confirm = confirm
        self.new_category_name = ""
        self.editing_category: Optional[Category] = None
        self.edit_name = ""

    async def add_category(self, name: Optional[str] = None) -> Optional[Dict]:
        if name is not None:
            self.new_category_name = name
        errors: Dict[str, str] = {}
        category_name = require_str({"name": self.new_category_name}, "name", errors, label="Category name")
        try:
            raise_if_errors(errors)
        except ValidationRejection as exc:
            self.store.notify(exc.message, NotificationKind.ERROR)
            return None

        result = await self.store.authed_request("/categories/", method="POST", json_body={"name": category_name})
        data = result.value
        if result.ok and data:
            self.new_category_name = ""
            await self.store.refresh_catalog()
            self.store.notify(f"Category '{data.get('name')}' added successfully.", NotificationKind.SUCCESS)
        return data

    def start_edit(self, category: Category):
        self.editing_category = category
        self.edit_name = category.name

    def cancel_edit(self):
        self.editing_category = None
        self.edit_name = ""

    async def update_category(self, name: Optional[str] = None) -> Optional[Dict]:
        if name is not None:
            self.edit_name = name
        if not self.editing_category or not self.edit_name.strip():
            return None

        result = await self.store.authed_request(
            f"/categories/{self.editing_category.id}",
            method="PUT",
            json_body={"name": self.edit_name.strip()},
        )
        data = result.value
        if result.ok and data:
            self.cancel_edit()
            await self.store.refresh_catalog()
            self.store.notify(
                f"Category ID {data.get('id')} updated to '{data.get('name')}'.",
                NotificationKind.SUCCESS,
            )
        return data

    async def delete_category(self, category_id: int, name: str) -> bool:
        if not self.confirm(f'Are you sure you want to delete category "{name}"? This action cannot be undone.'):
            logger.info("Delete of category %s cancelled", category_id)
            return False

        result = await self.store.authed_request(f"/categories/{category_id}", method="DELETE")
        if not result.ok:
            return False
        await self.store.refresh_catalog()
        self.store.notify(f"Category {name} deleted successfully.", NotificationKind.SUCCESS)
        return True

    def render(self) -> Dict:
        busy = self.store.loading or self.editing_category is not None
        view: Dict[str, Any] = {
            "title": "Category Management",
            "create_form": {
                "value": self.new_category_name,
                "placeholder": "New Category Name",
                "submit": {"label": "Adding..." if self.store.loading else "Add Category", "disabled": busy},
            },
            "categories": [
                {
                    "id": c.id,
                    "label": f"{c.name} (ID: {c.id})",
                    "actions": [
                        {"type": "edit", "label": "Edit", "disabled": busy},
                        {"type": "delete", "label": "Delete", "disabled": busy},
                    ],
                }
                for c in self.store.categories
            ],
        }
        if not self.store.categories:
            view["message"] = "No categories found."
        if self.editing_category is not None:
            view["edit_form"] = {
                "heading": f"Editing Category ID: {self.editing_category.id}",
                "value": self.edit_name,
                "actions": [
                    {"type": "save", "label": "Save Changes", "disabled": self.store.loading},
                    {"type": "cancel", "label": "Cancel"},
                ],
            }
        return view


class AdminProductManager:
    def __init__(self, store, confirm: ConfirmCallback):
        self.store = store
        self.confirm = confirm
        self.form: Dict[str, Any] = self._initial_form()
        self.is_editing = False
        self.selected_product_id: Optional[int] = None

    def _initial_form(self) -> Dict[str, Any]:
        return {
            "name": "",
            "description": "",
            "price": 0.0,
            "image_url": self.store.config.admin.default_image_url,
            "category_id": None,
        }

    def handle_change(self, name: str, value: Any):
        if name == "price":
            self.form[name] = coerce_float(value)
        elif name == "category_id":
            self.form[name] = coerce_int(value)
        else:
            self.form[name] = value

    def update_form(self, values: Dict[str, Any]):
        for name, value in values.items():
            self.handle_change(name, value)

    def start_edit(self, product: Product):
        self.form = {
            "name": product.name,
            "description": product.description or "",
            "price": float(product.price),
            "image_url": product.image_url or "",
            "category_id": product.category_id,
        }
        self.selected_product_id = product.id
        self.is_editing = True

    def cancel_edit(self):
        self.form = self._initial_form()
        self.selected_product_id = None
        self.is_editing = False

    async def submit(self) -> Optional[Dict]:
        method = "PUT" if self.is_editing else "POST"
        path = f"/products/{self.selected_product_id}" if self.is_editing else "/products/"

        errors: Dict[str, str] = {}
        validate_choice(
            self.form.get("category_id"),
            (c.id for c in self.store.categories),
            errors,
            "category_id",
            "Error: Please select a valid Category ID.",
        )
        require_str(self.form, "name", errors, label="Product name")
        try:
            raise_if_errors(errors)
        except ValidationRejection as exc:
            self.store.notify(exc.message, NotificationKind.ERROR)
            return None

        result = await self.store.authed_request(path, method=method, json_body=dict(self.form))
        data = result.value
        if result.ok and data:
            self.cancel_edit()
            await self.store.refresh_catalog()
            verb = "Created" if method == "POST" else "Updated"
            self.store.notify(f"{verb} product: {data.get('name')}.", NotificationKind.SUCCESS)
        return data

    async def delete_product(self, product_id: int, name: str) -> bool:
        if not self.confirm(f'Are you sure you want to delete product "{name}"? This action cannot be undone.'):
            logger.info("Delete of product %s cancelled", product_id)
            return False

        result = await self.store.authed_request(f"/products/{product_id}", method="DELETE")
        if not result.ok:
            return False
        await self.store.refresh_catalog()
        self.store.notify(f"Product {name} deleted successfully.", NotificationKind.SUCCESS)
        return True

    def render(self) -> Dict:
        busy = self.store.loading or self.is_editing
        view: Dict[str, Any] = {
            "title": "Product Management",
            "form": {
                "heading": f"Editing Product ID: {self.selected_product_id}" if self.is_editing else "Add New Product",
                "values": dict(self.form),
                "category_options": [{"value": c.id, "label": f"{c.name} (ID: {c.id})"} for c in self.store.categories],
                "submit": {
                    "label": "Save Product Changes" if self.is_editing else "Create New Product",
                    "disabled": self.store.loading,
                },
            },
            "products": [
                {
                    "id": p.id,
                    "label": f"{p.name} - ${p.price:.2f} (ID: {p.id})",
                    "actions": [
                        {"type": "edit", "label": "Edit", "disabled": busy},
                        {"type": "delete", "label": "Delete", "disabled": busy},
                    ],
                }
                for p in self.store.products
            ],
        }
        if self.is_editing:
            view["form"]["cancel"] = {"label": "Cancel Edit"}
        if not self.store.products:
            view["message"] = "No products found. Please ensure the backend is running and the database is seeded."
        return view


class AdminDashboardPage:
    def __init__(self, store, confirm: Optional[ConfirmCallback] = None):
        self.store = store
        confirm = confirm or _deny
        self.categories = AdminCategoryManager(store, confirm)
        self.products = AdminProductManager(store, confirm)
        self.all_orders: List[Order] = []

    @property
    def is_admin(self) -> bool:
        user = self.store.current_user
        return bool(user and user.is_admin)

    async def on_mount(self):
        # Always refetch: the startup fetch may predate backend seeding.
        await self.store.refresh_catalog()
        await self.fetch_all_orders()

    async def fetch_all_orders(self):
        if not self.is_admin:
            return
        result = await self.store.authed_request("/orders")
        if result.ok:
            self.all_orders = parse_records(result.value, Order)

    def render(self) -> Dict:
        if not self.is_admin:
            return {
                "type": "admin_dashboard",
                "notice": inline_error("Access Denied: Administrator privileges required."),
            }

        loading = self.store.loading
        return {
            "type": "admin_dashboard",
            "title": "Admin Dashboard",
            "category_manager": self.categories.render(),
            "product_manager": self.products.render(),
            "orders": {
                "title": "All Customer Orders",
                "rows": [order_row(o, include_user=True) for o in self.all_orders],
                "message": None if self.all_orders else "No orders found.",
                "actions": [
                    {"type": "refresh", "label": "Loading..." if loading else "Refresh All Orders", "disabled": loading}
                ],
            },
        }
