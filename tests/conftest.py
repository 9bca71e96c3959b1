"""Pytest configuration and fixtures"""
import os

# Keep tests independent from the developer's environment
os.environ.setdefault("CART_API_URL", "https://cart.test/api")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

from cartstate.cart import CartItem, CartStore, EmptyResponse, ItemsResponse  # noqa: E402
from cartstate.cart.models import CartState, CartStatus  # noqa: E402
from cartstate.cart.totals import calculate_total  # noqa: E402


@pytest.fixture
def sample_items():
    """Two items: one identified by entity ID, one by product ID only."""
    return (
        CartItem(entity_id="a", product_id="prod-a", price="10", quantity="2"),
        CartItem(product_id="prod-b", price=5.5, quantity=1, extra={"name": "Mug"}),
    )


@pytest.fixture
def mock_cart_service():
    """Mock cart service returning empty responses by default"""
    service = AsyncMock()
    service.get_cart = AsyncMock(return_value=ItemsResponse(items=()))
    service.add_to_cart = AsyncMock(return_value=EmptyResponse())
    service.update_cart_item = AsyncMock(return_value=EmptyResponse())
    service.remove_from_cart = AsyncMock(return_value=EmptyResponse())
    return service


@pytest.fixture
def store(mock_cart_service):
    """Fresh store over the mock service"""
    return CartStore(mock_cart_service)


@pytest.fixture
def seeded_store(mock_cart_service, sample_items):
    """Store that already fetched `sample_items`"""
    state = CartState(
        items=sample_items,
        total=calculate_total(sample_items),
        status=CartStatus.SUCCEEDED,
    )
    return CartStore(mock_cart_service, initial_state=state)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo configure_logging() calls made by a test"""
    import logging
    from cartstate.logging import PACKAGE_LOGGER

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(package_logger.handlers), package_logger.level
    yield
    package_logger.handlers = handlers
    package_logger.setLevel(level)
