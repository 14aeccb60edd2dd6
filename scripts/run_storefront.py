#!/usr/bin/env python3
"""
Interactive terminal storefront.

Connects to the storefront backend, runs the startup sequence (health check,
catalog, mock user) and then renders the current view after every command.

Usage (from repo root):
  python scripts/run_storefront.py
  python scripts/run_storefront.py --base-url http://127.0.0.1:8000 --yes
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import shlex
import sys
from pathlib import Path
from typing import Dict, List

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

from src.integrations.clients.real_http.storefront_api import StorefrontApiClient
from src.integrations.contracts.storefront import View
from src.storefront.router import ViewRouter
from src.storefront.state_store import AppStateStore
from src.utils.config_loader import load_storefront_config

CHAT_EXIT = frozenset({"quit", "exit", "q"})

VIEW_ALIASES = {
    "shop": View.SHOP,
    "auth": View.AUTH,
    "login": View.AUTH,
    "cart": View.CART,
    "orders": View.USER_ORDERS,
    "admin": View.ADMIN_DASHBOARD,
}

HELP = """
Commands:
  view <shop|auth|cart|orders|admin>     switch page
  category <id|all>                      filter the shop
  add <product_id>                       add one unit to the cart
  login <username> <password>            mock login
  register <username> <email> <password> create an account
  logout                                 forget the current user
  checkout                               place an order from the cart
  refresh                                refetch data for the current page
  dismiss                                close the notification
  cat-add <name>                         admin: create category
  cat-edit <id> <name>                   admin: rename category
  cat-delete <id>                        admin: delete category
  prod-new key=value ...                 admin: create product (name, description, price, image_url, category_id)
  prod-edit <id> key=value ...           admin: update product
  prod-delete <id>                       admin: delete product
  help                                   show this text
  quit                                   leave
"""


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


def parse_fields(tokens: List[str]) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for token in tokens:
        if "=" not in token:
            raise ValueError(f"Expected key=value, got {token!r}")
        key, value = token.split("=", 1)
        fields[key.strip()] = value
    return fields


def find_by_id(records, record_id: int):
    for record in records:
        if record.id == record_id:
            return record
    return None


async def dispatch(router: ViewRouter, command: str, args: List[str]) -> None:
    store = router.store
    pages = router.pages
    admin = pages[View.ADMIN_DASHBOARD]

    if command == "view":
        view = VIEW_ALIASES.get(args[0].lower()) if args else None
        if view is None:
            print(f"Unknown view. Choose one of: {', '.join(VIEW_ALIASES)}")
            return
        await router.navigate(view)
    elif command == "category":
        value = args[0] if args else "all"
        pages[View.SHOP].select_category(None if value.lower() == "all" else int(value))
    elif command == "add":
        await pages[View.SHOP].add_to_cart(int(args[0]))
    elif command == "login":
        await pages[View.AUTH].submit_login({"username": args[0], "password": args[1]})
    elif command == "register":
        await pages[View.AUTH].submit_register({"username": args[0], "email": args[1], "password": args[2]})
    elif command == "logout":
        store.logout()
    elif command == "checkout":
        cart = pages[View.CART]
        # Items may have been added from the shop since the cart was loaded.
        await cart.sync_identity()
        await cart.checkout()
    elif command == "refresh":
        if store.view == View.CART:
            await pages[View.CART].fetch_cart()
        elif store.view == View.USER_ORDERS:
            await pages[View.USER_ORDERS].refresh()
        elif store.view == View.ADMIN_DASHBOARD:
            await admin.fetch_all_orders()
        else:
            await store.refresh_catalog()
    elif command == "dismiss":
        store.dismiss_notification()
    elif command == "cat-add":
        await admin.categories.add_category(" ".join(args))
    elif command == "cat-edit":
        category = find_by_id(store.categories, int(args[0]))
        if category is None:
            print(f"No category with id {args[0]}")
            return
        admin.categories.start_edit(category)
        await admin.categories.update_category(" ".join(args[1:]))
    elif command == "cat-delete":
        category = find_by_id(store.categories, int(args[0]))
        name = category.name if category else args[0]
        await admin.categories.delete_category(int(args[0]), name)
    elif command == "prod-new":
        admin.products.cancel_edit()
        admin.products.update_form(parse_fields(args))
        await admin.products.submit()
    elif command == "prod-edit":
        product = find_by_id(store.products, int(args[0]))
        if product is None:
            print(f"No product with id {args[0]}")
            return
        admin.products.start_edit(product)
        admin.products.update_form(parse_fields(args[1:]))
        await admin.products.submit()
    elif command == "prod-delete":
        product = find_by_id(store.products, int(args[0]))
        name = product.name if product else args[0]
        await admin.products.delete_product(int(args[0]), name)
    else:
        print(f"Unknown command {command!r}. Type 'help'.")


def make_confirm(assume_yes: bool):
    def confirm(message: str) -> bool:
        if assume_yes:
            return True
        return input(f"{message} [y/N] ").strip().lower() in ("y", "yes")

    return confirm


async def main() -> int:
    parser = argparse.ArgumentParser(description="Terminal storefront client")
    parser.add_argument("--config", type=Path, default=None, help="Path to storefront_config.yml")
    parser.add_argument("--base-url", default=None, help="Override the backend origin")
    parser.add_argument("--yes", action="store_true", help="Confirm admin deletes without prompting")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    config = load_storefront_config(args.config)
    if args.base_url:
        config.api.base_url = args.base_url

    store = AppStateStore(StorefrontApiClient.from_config(config), config=config)
    router = ViewRouter(store, confirm=make_confirm(args.yes))

    await store.initialize()
    print_stage(f"VIEW: {store.view.value}", router.render())
    print(HELP)

    while True:
        try:
            line = await asyncio.to_thread(input, "storefront> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            print(f"Could not parse command: {exc}")
            continue
        if not tokens:
            continue
        command, rest = tokens[0].lower(), tokens[1:]
        if command in CHAT_EXIT:
            return 0
        if command == "help":
            print(HELP)
            continue

        try:
            await dispatch(router, command, rest)
        except (IndexError, ValueError) as exc:
            print(f"Bad arguments for {command!r}: {exc}. Type 'help'.")
            continue

        print_stage(f"VIEW: {store.view.value}", router.render())


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
