"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import AsyncMock, Mock

# Set test environment variables
os.environ.setdefault("STOREFRONT_API_URL", "https://shop.test/api")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from storefront.cart import CartItem, CartStore, InMemoryCartService


@pytest.fixture
def sample_items():
    """Two cart lines: id 1 (qty 2) and id 2 (qty 1)"""
    return [
        CartItem(id=1, product_id=101, quantity=2),
        CartItem(id=2, product_id=102, quantity=1),
    ]


@pytest.fixture
def mock_service(sample_items):
    """Mock remote cart service"""
    service = Mock()

    service.get_cart_items = AsyncMock(return_value=list(sample_items))
    service.add_to_cart = AsyncMock(return_value=CartItem(id=3, product_id=103, quantity=1))
    service.update_cart_item = AsyncMock(return_value=CartItem(id=1, product_id=101, quantity=5))
    service.remove_from_cart = AsyncMock(return_value=None)
    service.clear_cart = AsyncMock(return_value=None)

    return service


@pytest.fixture
def store(mock_service):
    """Empty cart store backed by the mock service"""
    return CartStore(mock_service)


@pytest.fixture
def memory_service(sample_items):
    """In-memory backend seeded with sample items"""
    return InMemoryCartService(items=sample_items)


@pytest.fixture
def recorded_states(store):
    """Snapshots emitted by the store, in order"""
    states = []
    store.subscribe(states.append)
    return states
