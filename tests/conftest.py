"""Shared test fixtures."""

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

import catalogue.infrastructure.gateway as gateway_module
from catalogue.catalog.models import Product


@pytest.fixture(autouse=True)
def reset_gateway():
    """Reset the global gateway before and after each test."""
    gateway_module._gateway = None
    yield
    gateway_module._gateway = None


@pytest.fixture
def make_product() -> Callable[..., Product]:
    """Factory for products with only the fields a test cares about."""

    def _make(product_id: str = "p1", **fields: Any) -> Product:
        return Product(id=product_id, **fields)

    return _make


@pytest.fixture
def sample_products() -> list[Product]:
    """A small catalogue covering every category plus an uncategorized item."""
    return [
        Product(
            id="win1",
            name="Premium Sliding Window",
            description="Two-track sliding window with mesh",
            model="GLA-WIN-001",
            category="windows",
            rating=4.8,
            reviews=120,
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
        Product(
            id="door1",
            name="Folding Door",
            description="Bi-fold patio door",
            model="VIS-DOO-001",
            category="doors",
            rating=4.2,
            reviews=40,
            created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        ),
        Product(
            id="win2",
            name="casement window",
            description="Outward opening casement",
            model="SKY-WIN-002",
            category="windows",
            rating=4.8,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        Product(
            id="misc1",
            name="Aluminium Sealant",
            category=None,
        ),
        Product(
            id="rail1",
            name="Glass Railing",
            description="Frameless balcony railing",
            category="railings",
            rating=3.9,
            created_at=datetime(2024, 4, 1, tzinfo=timezone.utc),
        ),
    ]
