"""Shared fixtures for API tests."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from catalogue.api.dependencies import get_service
from catalogue.application.catalogue_service import CatalogueService
from catalogue.infrastructure.config import settings
from catalogue.infrastructure.gateway import InMemoryProductGateway
from catalogue.main import app


@pytest.fixture
def gateway() -> InMemoryProductGateway:
    """In-memory store with a few products."""
    return InMemoryProductGateway(
        [
            {
                "name": "Premium Sliding Window",
                "description": "Two-track sliding window",
                "model": "GLA-WIN-001",
                "category": "windows",
                "rating": 4.8,
                "reviews": 120,
                "specifications": {"Material": "Aluminium"},
                "createdAt": datetime(2024, 3, 1, tzinfo=timezone.utc),
            },
            {
                "name": "Folding Door",
                "category": "doors",
                "rating": 4.2,
                "createdAt": datetime(2024, 2, 1, tzinfo=timezone.utc),
            },
            {
                "name": "casement window",
                "category": "windows",
                "rating": 4.9,
                "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
            },
        ]
    )


@pytest.fixture
def client(gateway: InMemoryProductGateway):
    """Create test client backed by the in-memory store."""
    app.dependency_overrides[get_service] = lambda: CatalogueService(gateway)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get admin authentication headers."""
    return {"Authorization": f"Bearer {settings.admin_api_key}"}
