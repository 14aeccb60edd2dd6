"""
Utility modules for the storefront client
"""
from .config_loader import StorefrontConfig, load_storefront_config
from .busy import BusyCounter

__all__ = [
    'StorefrontConfig',
    'load_storefront_config',
    'BusyCounter',
]
