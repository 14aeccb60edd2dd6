import pytest

from src.integrations.contracts.storefront import CartItem, NotificationKind, User
from src.storefront.pages.cart import CartPage


@pytest.fixture
def logged_in(store):
    store.current_user = User(id=1, username="admin", is_admin=True)
    return store


@pytest.mark.asyncio
async def test_mount_fetches_current_users_cart(logged_in, backend):
    backend.carts[1] = [{"id": 5, "product_id": 2, "quantity": 3}]
    page = CartPage(logged_in)

    await page.on_mount()

    assert page.cart_items == [CartItem(id=5, product_id=2, quantity=3)]
    assert backend.paths() == ["/cart/1"]


@pytest.mark.asyncio
async def test_mount_without_identity_clears_items(store, backend):
    page = CartPage(store)
    page.cart_items = [CartItem(id=5, product_id=2, quantity=3)]

    await page.on_mount()

    assert page.cart_items == []
    assert backend.calls == []


def test_estimate_uses_placeholder_price(logged_in):
    page = CartPage(logged_in)
    page.cart_items = [
        CartItem(id=1, product_id=1, quantity=2),
        CartItem(id=2, product_id=4, quantity=1),
    ]

    estimate = page.estimate()

    assert estimate.item_count == 2
    assert estimate.unit_price == 10.0
    assert estimate.subtotal == 30.0
    assert "Est." in estimate.label


@pytest.mark.asyncio
async def test_empty_checkout_makes_no_request(logged_in, backend):
    page = CartPage(logged_in)
    await page.on_mount()
    backend.calls.clear()

    order = await page.checkout()

    assert order is None
    assert backend.calls == []
    assert logged_in.notification.text == "Your cart is empty!"
    assert logged_in.notification.kind == NotificationKind.INFO


@pytest.mark.asyncio
async def test_checkout_clears_cart_and_shows_server_total(logged_in, backend):
    backend.carts[1] = [
        {"id": 5, "product_id": 2, "quantity": 1},
        {"id": 6, "product_id": 3, "quantity": 2},
    ]
    page = CartPage(logged_in)
    await page.on_mount()

    order = await page.checkout()

    # Server total uses real prices, not the 10.00 placeholder.
    assert order.total_amount == 440.0
    assert page.cart_items == []
    assert logged_in.notification.text == f"Order #{order.id} placed successfully! Total: $440.00."
    assert ("POST", "/orders/create") in backend.calls
    assert backend.paths().count("/cart/1") == 1


@pytest.mark.asyncio
async def test_failed_checkout_keeps_cart(logged_in, backend):
    backend.carts[1] = [{"id": 9, "product_id": 1, "quantity": 1}]
    page = CartPage(logged_in)
    await page.on_mount()
    # Emptied elsewhere: the backend refuses the order.
    backend.carts[1] = []

    order = await page.checkout()

    assert order is None
    assert len(page.cart_items) == 1
    assert logged_in.notification is None


def test_render_requires_login(store):
    view = CartPage(store).render()
    assert view["notice"]["message"] == "Please log in to view your shopping cart."


def test_render_shows_estimate_and_disabled_checkout(logged_in):
    page = CartPage(logged_in)

    view = page.render()

    assert view["estimate"] == {"label": "Subtotal (Mock Est.)", "subtotal": "$0.00"}
    assert view["actions"][0]["disabled"] is True
    assert view["message"] == "Your cart is currently empty. Start shopping!"


@pytest.mark.asyncio
async def test_checkout_loads_cart_that_was_never_fetched(logged_in, backend):
    backend.carts[1] = [{"id": 5, "product_id": 2, "quantity": 1}]
    page = CartPage(logged_in)

    order = await page.checkout()

    assert order is not None
    assert backend.paths() == ["/cart/1", "/orders/create"]
    assert logged_in.notification.kind == NotificationKind.SUCCESS


@pytest.mark.asyncio
async def test_identity_change_drops_previous_users_cart(store, backend):
    backend.carts[1] = [{"id": 5, "product_id": 2, "quantity": 3}]
    page = CartPage(store)
    await store.fetch_user()
    await page.on_mount()
    assert len(page.cart_items) == 1

    store.logout()
    assert page.cart_items == []
    assert page.is_stale

    backend.me_id = 2
    await store.login("jane", "pw")

    assert store.current_user.username == "jane"
    assert page.cart_items == []
    assert page.render()["message"] == "Your cart is currently empty. Start shopping!"


@pytest.mark.asyncio
async def test_same_identity_keeps_loaded_cart(logged_in, backend):
    backend.carts[1] = [{"id": 5, "product_id": 2, "quantity": 3}]
    page = CartPage(logged_in)
    await page.on_mount()

    logged_in.current_user = User(id=1, username="admin", is_admin=True)

    assert len(page.cart_items) == 1
    assert page.is_stale is False
