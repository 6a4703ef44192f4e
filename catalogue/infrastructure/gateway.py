"""Product store gateway.

Defines the contract the catalogue consumes from the external document
store and blob storage, plus an in-memory implementation used for local
development and tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

import structlog

from catalogue.catalog.models import ImageAsset, Product

logger = structlog.get_logger()


class StoreError(Exception):
    """Error from a product store call."""

    def __init__(
        self, operation: str, message: str, status_code: int | None = None
    ) -> None:
        self.operation = operation
        self.message = message
        self.status_code = status_code
        super().__init__(f"[{operation}] {message}")


class ProductGateway(ABC):
    """Read/write access to the product store.

    Every method performs a single request against the store. Failures
    raise StoreError; nothing is retried.
    """

    @abstractmethod
    async def list_products(self) -> list[Product]:
        """List every product, newest first."""

    @abstractmethod
    async def create_product(self, document: dict[str, Any]) -> str:
        """Create a product document and return its new id."""

    @abstractmethod
    async def update_product(self, product_id: str, document: dict[str, Any]) -> None:
        """Overwrite the given fields of an existing product."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> None:
        """Delete a product document."""

    @abstractmethod
    async def upload_image(self, asset: ImageAsset) -> str:
        """Upload an image and return its download URL."""

    @abstractmethod
    async def delete_image(self, url: str) -> None:
        """Delete a previously uploaded image."""

    async def close(self) -> None:
        """Release any held resources."""


def image_object_name(filename: str, now: datetime | None = None) -> str:
    """Get the storage object name for an uploaded image.

    Example:
        "window.jpg" -> "products/1718000000000_window.jpg"
    """
    moment = now or datetime.now(timezone.utc)
    return f"products/{int(moment.timestamp() * 1000)}_{filename}"


class InMemoryProductGateway(ProductGateway):
    """In-memory product store.

    Holds documents and image bytes in dictionaries. Ids are hex UUIDs so
    they never contain the slug delimiter.
    """

    URL_PREFIX = "memory://"

    def __init__(self, documents: list[dict[str, Any]] | None = None) -> None:
        """Initialize store, optionally with initial documents.

        Args:
            documents: Product documents to preload.
        """
        self._documents: dict[str, dict[str, Any]] = {}
        self._images: dict[str, ImageAsset] = {}
        for document in documents or []:
            self._documents[uuid4().hex] = dict(document)

    async def list_products(self) -> list[Product]:
        products = [
            Product.from_document(product_id, document)
            for product_id, document in self._documents.items()
        ]
        return sorted(products, key=lambda p: p.created_at_value, reverse=True)

    async def create_product(self, document: dict[str, Any]) -> str:
        product_id = uuid4().hex
        self._documents[product_id] = dict(document)
        logger.debug("Product document created", product_id=product_id)
        return product_id

    async def update_product(self, product_id: str, document: dict[str, Any]) -> None:
        if product_id not in self._documents:
            raise StoreError("update_product", f"Product not found: {product_id}", 404)
        self._documents[product_id].update(document)

    async def delete_product(self, product_id: str) -> None:
        if product_id not in self._documents:
            raise StoreError("delete_product", f"Product not found: {product_id}", 404)
        del self._documents[product_id]

    async def upload_image(self, asset: ImageAsset) -> str:
        url = f"{self.URL_PREFIX}{image_object_name(asset.filename)}"
        self._images[url] = asset
        return url

    async def delete_image(self, url: str) -> None:
        if url not in self._images:
            raise StoreError("delete_image", f"Image not found: {url}", 404)
        del self._images[url]

    def get_document(self, product_id: str) -> dict[str, Any] | None:
        """Get a stored document (for inspection)."""
        document = self._documents.get(product_id)
        return dict(document) if document is not None else None

    def has_image(self, url: str) -> bool:
        """Check whether an image is stored."""
        return url in self._images


# Global gateway instance
_gateway: ProductGateway | None = None


def create_gateway() -> ProductGateway:
    """Create the gateway selected by ``settings.store_backend``.

    Returns:
        Configured gateway.
    """
    from catalogue.infrastructure.config import settings

    if settings.store_backend == "firestore":
        from catalogue.infrastructure.firestore_client import FirestoreProductGateway

        return FirestoreProductGateway(
            project_id=settings.firebase_project_id,
            storage_bucket=settings.firebase_storage_bucket,
            collection=settings.products_collection,
            api_key=settings.firebase_api_key,
            auth_token=settings.firebase_auth_token,
            timeout=settings.store_timeout,
        )

    from catalogue.catalog.generator import GeneratorConfig, ProductGenerator

    documents = ProductGenerator(
        GeneratorConfig(
            seed=settings.demo_seed,
            products_per_category=settings.demo_products_per_category,
        )
    ).generate_list()
    return InMemoryProductGateway(documents)


def get_gateway() -> ProductGateway:
    """Get the product gateway singleton.

    Returns:
        ProductGateway instance.
    """
    global _gateway
    if _gateway is None:
        _gateway = create_gateway()
        logger.info(
            "Product gateway initialized",
            backend=type(_gateway).__name__,
        )
    return _gateway


async def close_gateway() -> None:
    """Close and forget the gateway singleton."""
    global _gateway
    if _gateway is not None:
        await _gateway.close()
        _gateway = None
