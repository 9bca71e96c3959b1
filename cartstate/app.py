"""Composition root: wire settings, logging, service adapter and store."""
from pathlib import Path
from typing import Optional

from cartstate.cart.store import CartService, CartStore
from cartstate.config import CartSettings, load_settings
from cartstate.logging import configure_logging
from cartstate.services.cart_client import HttpCartService


def create_cart_store(
    settings: Optional[CartSettings] = None,
    service: Optional[CartService] = None,
    env_file: str | Path | None = None,
) -> CartStore:
    """
    Build a fresh CartStore for one session.

    Args:
        settings: Cart API settings (loaded from `env_file` and the environment if omitted)
        service: Cart service to use instead of the HTTP adapter
        env_file: Optional .env file read before the environment

    Returns:
        CartStore with empty items, zero total and idle status
    """
    if settings is None:
        settings = load_settings(env_file)
    configure_logging(settings.log_level)
    if service is None:
        service = HttpCartService(settings)
    return CartStore(service)
