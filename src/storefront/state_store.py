"""
Application state store for the storefront client
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from src.integrations.clients.real_http.session import SessionFetcher
from src.integrations.clients.real_http.storefront_api import StorefrontApiClient
from src.integrations.contracts.storefront import (
    Category,
    FetchResult,
    Notification,
    NotificationKind,
    Product,
    User,
    View,
    parse_record,
    parse_records,
)
from src.utils.busy import BusyCounter
from src.utils.config_loader import StorefrontConfig

logger = logging.getLogger(__name__)


class AppStateStore:
    """Single owned state container; pages receive it by reference."""

    def __init__(self, api: StorefrontApiClient, config: Optional[StorefrontConfig] = None,
                 busy: Optional[BusyCounter] = None):
        self.api = api
        self.config = config or StorefrontConfig()
        self.busy = busy or BusyCounter()
        self.session = SessionFetcher(api, self.busy)

        self._identity_listeners: List[Callable[[Optional[User]], None]] = []
        self._current_user: Optional[User] = None

        self.view: View = View.SHOP
        self.products: List[Product] = []
        self.categories: List[Category] = []
        self.selected_category_id: Optional[int] = None
        self.notification: Optional[Notification] = None
        self.api_healthy: bool = True

    @property
    def loading(self) -> bool:
        return self.busy.busy

    # --- Identity ------------------------------------------------------------

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @current_user.setter
    def current_user(self, user: Optional[User]):
        previous_id = self._current_user.id if self._current_user else None
        self._current_user = user
        if previous_id != (user.id if user else None):
            logger.debug("Identity changed from %s to %s", previous_id, user.id if user else None)
            for listener in self._identity_listeners:
                listener(user)

    def subscribe_identity(self, listener: Callable[[Optional[User]], None]) -> None:
        """Call listener(user) whenever the logged-in identity changes"""
        self._identity_listeners.append(listener)

    # --- Notifications -------------------------------------------------------

    def notify(self, text: str, kind: NotificationKind = NotificationKind.INFO):
        """Replace the live notification"""
        self.notification = Notification(text=text, kind=NotificationKind(kind))

    def dismiss_notification(self):
        self.notification = None

    # --- Navigation ----------------------------------------------------------

    def set_view(self, view: View):
        self.view = View(view)

    def select_category(self, category_id: Optional[int]):
        self.selected_category_id = category_id

    # --- Fetching ------------------------------------------------------------

    async def authed_request(self, path: str, **options: Any) -> FetchResult:
        """Session fetcher bound to the mock token"""
        return await self.session.authed_request(path, self.config.api.mock_token, **options)

    async def refresh_catalog(self):
        """Fetch categories and products concurrently; each snapshot replaces the old one"""
        with self.busy:
            cat_result, prod_result = await asyncio.gather(
                self.api.fetch_collection("/categories"),
                self.api.fetch_collection("/products"),
            )
        self.categories = parse_records(cat_result.value, Category)
        self.products = parse_records(prod_result.value, Product)
        logger.info("Catalog refreshed: %d categories, %d products", len(self.categories), len(self.products))

    async def fetch_user(self) -> Optional[User]:
        """Resolve the current session identity"""
        result = await self.authed_request("/users/me")
        user = parse_record(result.value, User) if result.ok else None
        self.current_user = user
        return user

    async def initialize(self):
        """Health check, then catalog and identity. Runs once on mount."""
        healthy = await self.api.check_api_health()
        if not healthy:
            self.api_healthy = False
            self.notify(
                f"API connection failed. Please ensure the FastAPI backend is running on {self.api.base_url}.",
                NotificationKind.ERROR,
            )
            return
        self.api_healthy = True

        await self.refresh_catalog()

        user = await self.fetch_user()
        if not user:
            self.notify(
                "Initial user fetch failed. Check backend logs for /users/me or mock user creation error.",
                NotificationKind.ERROR,
            )

    # --- Authentication ------------------------------------------------------

    async def login(self, username: str, password: str):
        """Mock login against the token endpoint"""
        with self.busy:
            result = await self.api.fetch_data(
                "/token",
                method="POST",
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                form={"username": username, "password": password},
            )

            data = result.value
            if isinstance(data, dict) and "access_token" in data:
                user = await self.fetch_user()
                if user:
                    self.notify(f"Welcome, {user.username}! (Mock Login)", NotificationKind.SUCCESS)
                    self.set_view(View.SHOP)
            elif result.is_failed:
                self.notify(
                    "Login failed due to network error, or the backend /token endpoint failed.",
                    NotificationKind.ERROR,
                )
            else:
                logger.warning("Login response carried no access token: %s", data)

    async def register(self, username: str, email: str, password: str):
        """Create a user account"""
        payload: Dict[str, str] = {"username": username, "email": email, "password": password}
        with self.busy:
            result = await self.api.fetch_data(
                "/users/",
                method="POST",
                headers={"Content-Type": "application/json"},
                json_body=payload,
            )

        data = result.value
        if result.ok and data:
            created = data.get("username", username) if isinstance(data, dict) else username
            self.notify(f"User {created} registered successfully! Please log in.", NotificationKind.SUCCESS)
            self.set_view(View.AUTH)
        elif result.is_failed:
            self.notify(
                "Registration failed due to a network or unexpected API error. Check the console for details.",
                NotificationKind.ERROR,
            )

    def logout(self):
        """Purely local: no request is issued"""
        self.current_user = None
        self.notify("Logged out successfully.", NotificationKind.INFO)
        self.set_view(View.SHOP)
