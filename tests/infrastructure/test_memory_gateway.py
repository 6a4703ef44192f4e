"""Tests for the in-memory product gateway and gateway selection."""

from datetime import datetime, timezone

import pytest

import catalogue.infrastructure.gateway as gateway_module
from catalogue.catalog.models import ImageAsset
from catalogue.infrastructure.config import settings
from catalogue.infrastructure.firestore_client import FirestoreProductGateway
from catalogue.infrastructure.gateway import (
    InMemoryProductGateway,
    StoreError,
    close_gateway,
    get_gateway,
    image_object_name,
)


def test_image_object_name() -> None:
    """Object names live under products/ with a millisecond prefix."""
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert image_object_name("door.jpg", now) == "products/1704067200000_door.jpg"


class TestInMemoryProductGateway:
    """Tests for InMemoryProductGateway."""

    @pytest.mark.asyncio
    async def test_list_newest_first(self) -> None:
        """Products are listed by creation time, newest first."""
        gateway = InMemoryProductGateway(
            [
                {"name": "Old", "createdAt": datetime(2023, 1, 1, tzinfo=timezone.utc)},
                {"name": "New", "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc)},
            ]
        )
        products = await gateway.list_products()
        assert [p.name for p in products] == ["New", "Old"]

    @pytest.mark.asyncio
    async def test_create_assigns_delimiter_free_id(self) -> None:
        """Created ids never contain a hyphen."""
        gateway = InMemoryProductGateway()
        product_id = await gateway.create_product({"name": "Door"})
        assert "-" not in product_id
        assert gateway.get_document(product_id) == {"name": "Door"}

    @pytest.mark.asyncio
    async def test_update_merges_fields(self) -> None:
        """Updates overwrite only the given fields."""
        gateway = InMemoryProductGateway()
        product_id = await gateway.create_product({"name": "Door", "rating": 4.0})
        await gateway.update_product(product_id, {"rating": 4.8})
        assert gateway.get_document(product_id) == {"name": "Door", "rating": 4.8}

    @pytest.mark.asyncio
    async def test_update_missing_product(self) -> None:
        """Updating an unknown product fails with 404."""
        with pytest.raises(StoreError) as exc_info:
            await InMemoryProductGateway().update_product("nope", {"name": "x"})
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        """Deleted products disappear; deleting twice fails."""
        gateway = InMemoryProductGateway()
        product_id = await gateway.create_product({"name": "Door"})
        await gateway.delete_product(product_id)
        assert await gateway.list_products() == []
        with pytest.raises(StoreError):
            await gateway.delete_product(product_id)

    @pytest.mark.asyncio
    async def test_images(self) -> None:
        """Images can be uploaded and deleted once."""
        gateway = InMemoryProductGateway()
        url = await gateway.upload_image(ImageAsset("door.jpg", "image/jpeg", b"jpeg"))
        assert url.startswith("memory://products/")
        assert url.endswith("_door.jpg")
        assert gateway.has_image(url)
        await gateway.delete_image(url)
        assert not gateway.has_image(url)
        with pytest.raises(StoreError):
            await gateway.delete_image(url)


class TestGetGateway:
    """Tests for gateway selection."""

    def test_memory_backend_is_seeded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The memory backend starts with the demo catalogue."""
        monkeypatch.setattr(settings, "store_backend", "memory")
        monkeypatch.setattr(settings, "demo_products_per_category", 2)
        gateway = get_gateway()
        assert isinstance(gateway, InMemoryProductGateway)
        assert get_gateway() is gateway

    def test_firestore_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The firestore backend uses the configured project."""
        monkeypatch.setattr(settings, "store_backend", "firestore")
        monkeypatch.setattr(settings, "firebase_project_id", "demo-project")
        gateway = get_gateway()
        assert isinstance(gateway, FirestoreProductGateway)
        assert gateway.project_id == "demo-project"

    @pytest.mark.asyncio
    async def test_close_gateway_resets_singleton(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Closing forgets the instance."""
        monkeypatch.setattr(settings, "store_backend", "memory")
        get_gateway()
        await close_gateway()
        assert gateway_module._gateway is None
