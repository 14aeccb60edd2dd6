"""
Configuration loader for the storefront client
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:8000"
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "storefront_config.yml"


class ApiConfig(BaseModel):
    """Backend connection settings"""

    base_url: str = DEFAULT_BASE_URL
    # None means no timeout at all, matching the browser fetch it replaces.
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    mock_token: str = "MOCK_TOKEN"


class CartConfig(BaseModel):
    """Cart display settings"""

    placeholder_unit_price: float = Field(default=10.0, ge=0.0)


class AdminConfig(BaseModel):
    """Admin console defaults"""

    default_image_url: str = "https://placehold.co/400x300/e0e7ff/1f2937?text=NEW+SHOE"


class StorefrontConfig(BaseModel):
    """Complete storefront configuration"""

    api: ApiConfig = Field(default_factory=ApiConfig)
    cart: CartConfig = Field(default_factory=CartConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)


def load_storefront_config(config_path: Optional[Path] = None) -> StorefrontConfig:
    """
    Load and validate storefront configuration from YAML file

    Environment variables (also read from a local .env file) win over the file:
    STOREFRONT_API_BASE_URL and STOREFRONT_API_TIMEOUT.

    Args:
        config_path: Path to config file. Defaults to config/storefront_config.yml

    Returns:
        Validated StorefrontConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    api_data = dict(data.get("api") or {})
    base_url = os.getenv("STOREFRONT_API_BASE_URL", "").strip()
    if base_url:
        api_data["base_url"] = base_url
    timeout = os.getenv("STOREFRONT_API_TIMEOUT", "").strip()
    if timeout:
        api_data["timeout_seconds"] = timeout
    data["api"] = api_data

    try:
        config = StorefrontConfig(**data)
        logger.info("Successfully loaded storefront config from %s", config_path)
        return config
    except ValidationError as e:
        logger.error("Storefront config validation failed: %s", e)
        raise
