"""
Navigation bar: links depend on the current identity
"""
from typing import Dict, List, Optional

from src.integrations.contracts.storefront import User, View

BRAND = "SHOE-APP"


def navbar(current_user: Optional[User]) -> Dict:
    links: List[Dict] = [{'label': 'Shop', 'view': View.SHOP.value}]

    if current_user:
        links.append({'label': 'Cart', 'view': View.CART.value})
        links.append({'label': 'My Orders', 'view': View.USER_ORDERS.value})

    # Admin link is only offered to administrators.
    if current_user and current_user.is_admin:
        links.append({'label': 'Admin', 'view': View.ADMIN_DASHBOARD.value, 'highlight': True})

    if current_user:
        links.append({'label': f"Logout ({current_user.username})", 'action': 'logout'})
    else:
        links.append({'label': 'Login / Register', 'view': View.AUTH.value})

    return {
        'type': 'navbar',
        'brand': {'label': BRAND, 'view': View.SHOP.value},
        'links': links,
    }
