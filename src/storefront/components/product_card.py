"""
Generate product cards for the shop grid
"""
from typing import Dict

from src.integrations.contracts.storefront import Product

FALLBACK_IMAGE_URL = "https://placehold.co/400x300/4f46e5/ffffff?text=SHOE"


def product_card(product: Product, is_authenticated: bool) -> Dict:
    """Render one product card"""
    return {
        'product_id': product.id,
        'name': product.name,
        'description': product.description or "",
        'price': f"${product.price:.2f}",
        'image_url': product.image_url or FALLBACK_IMAGE_URL,
        'category_label': f"Category ID: {product.category_id}",
        'actions': [
            {
                'type': 'add_to_cart',
                'label': 'Add to Cart' if is_authenticated else 'Login to Buy',
                'icon': '🛒',
                'disabled': not is_authenticated,
                'primary': True,
            }
        ],
    }
