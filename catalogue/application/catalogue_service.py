"""Catalogue application service.

Loads product snapshots through the store gateway, runs the pure catalogue
functions over them, and performs admin writes. Gateway failures are turned
into result objects; callers check ``success`` instead of catching errors.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog

from catalogue.catalog.errors import ERROR_MESSAGES, ErrorCode
from catalogue.catalog.generator import GeneratorConfig, ProductGenerator
from catalogue.catalog.models import Category, ImageAsset, Product, ProductDraft
from catalogue.catalog.query import CatalogueQuery, query_products
from catalogue.catalog.resolver import extract_product_id, find_product, resolve_product
from catalogue.catalog.taxonomy import (
    ALL_CATEGORY_ID,
    ALL_CATEGORY_NAME,
    aggregate_categories,
    find_category,
)
from catalogue.infrastructure.gateway import ProductGateway, StoreError, get_gateway

logger = structlog.get_logger()


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class ListProductsResult:
    """Result of loading the product snapshot."""

    products: list[Product] = field(default_factory=list)
    success: bool = True
    error_code: ErrorCode | None = None
    error: str | None = None


@dataclass
class CategoriesResult:
    """Result of deriving category facets."""

    categories: list[Category] = field(default_factory=list)
    success: bool = True
    error_code: ErrorCode | None = None
    error: str | None = None


@dataclass
class BrowseResult:
    """Result of a catalogue listing request.

    Attributes:
        query: Normalised query that was applied.
        products: Products to display.
        categories: Category facets for the whole snapshot.
        heading: Name of the selected category (None if it has no facet).
        total: Size of the whole snapshot.
    """

    query: CatalogueQuery
    products: list[Product] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    heading: str | None = None
    total: int = 0
    success: bool = True
    error_code: ErrorCode | None = None
    error: str | None = None


@dataclass
class ResolveProductResult:
    """Result of looking up a product by slug."""

    product: Product | None = None
    success: bool = True
    error_code: ErrorCode | None = None
    error: str | None = None


@dataclass
class WriteProductResult:
    """Result of an admin write."""

    product_id: str | None = None
    image_url: str | None = None
    success: bool = True
    error_code: ErrorCode | None = None
    error: str | None = None


def _failure(result_type: type, code: ErrorCode, message: str | None = None, **kwargs):
    """Build a failed result of the given type."""
    return result_type(
        success=False,
        error_code=code,
        error=message or ERROR_MESSAGES[code],
        **kwargs,
    )


# ============================================================================
# Catalogue Service
# ============================================================================


class CatalogueService:
    """Service for catalogue browsing and administration.

    Example usage:
        service = CatalogueService(get_gateway())
        result = await service.browse(CatalogueQuery.create(search="sliding"))
        if result.success:
            for product in result.products:
                print(product.name)
    """

    def __init__(self, gateway: ProductGateway, request_id: str | None = None) -> None:
        """Initialize service.

        Args:
            gateway: Product store gateway.
            request_id: Request ID for log correlation.
        """
        self.gateway = gateway
        self.request_id = request_id
        self._log = logger.bind(request_id=request_id) if request_id else logger

    # ------------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------------

    async def load_products(self) -> ListProductsResult:
        """Load the full product snapshot.

        Returns:
            Products newest first, or FETCH_FAILED.
        """
        try:
            products = await self.gateway.list_products()
        except StoreError as e:
            self._log.error(
                "Failed to fetch products",
                operation=e.operation,
                status_code=e.status_code,
                error=e.message,
            )
            return _failure(ListProductsResult, ErrorCode.FETCH_FAILED)

        return ListProductsResult(products=products)

    async def get_categories(self) -> CategoriesResult:
        """Get category facets for the current snapshot."""
        loaded = await self.load_products()
        if not loaded.success:
            return _failure(CategoriesResult, ErrorCode.FETCH_FAILED, loaded.error)
        return CategoriesResult(categories=aggregate_categories(loaded.products))

    async def browse(self, query: CatalogueQuery) -> BrowseResult:
        """Get the listing for a catalogue query.

        Args:
            query: Category, search and sort parameters.

        Returns:
            Displayed products plus facets for the whole snapshot.
        """
        loaded = await self.load_products()
        if not loaded.success:
            return _failure(BrowseResult, ErrorCode.FETCH_FAILED, loaded.error, query=query)

        categories = aggregate_categories(loaded.products)
        products = query_products(loaded.products, query)

        if query.category == ALL_CATEGORY_ID:
            heading: str | None = ALL_CATEGORY_NAME
        else:
            selected = find_category(categories, query.category)
            heading = selected.name if selected else None

        self._log.debug(
            "Catalogue browsed",
            category=query.category,
            search=query.search,
            sort=query.sort.value,
            matched=len(products),
            total=len(loaded.products),
        )

        return BrowseResult(
            query=query,
            products=products,
            categories=categories,
            heading=heading,
            total=len(loaded.products),
        )

    async def get_product_by_slug(self, slug: str) -> ResolveProductResult:
        """Resolve a product detail URL.

        The slug is checked before anything is fetched.

        Args:
            slug: Product slug.

        Returns:
            The product, or INVALID_SLUG / NOT_FOUND / FETCH_FAILED.
        """
        if extract_product_id(slug) is None:
            return _failure(ResolveProductResult, ErrorCode.INVALID_SLUG)

        loaded = await self.load_products()
        if not loaded.success:
            return _failure(ResolveProductResult, ErrorCode.FETCH_FAILED, "Failed to load product details")

        lookup = resolve_product(slug, loaded.products)
        if lookup.error is not None:
            self._log.info("Product not resolved", slug=slug, error_code=lookup.error.value)
            return _failure(ResolveProductResult, lookup.error)

        return ResolveProductResult(product=lookup.product)

    # ------------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------------

    async def create_product(
        self,
        draft: ProductDraft,
        image: ImageAsset | None,
    ) -> WriteProductResult:
        """Create a product.

        The image is uploaded first. If the document cannot be created the
        uploaded image is removed again.

        Args:
            draft: Product fields.
            image: Product image (required).

        Returns:
            New product id and image URL, or WRITE_FAILED.
        """
        if image is None:
            return _failure(WriteProductResult, ErrorCode.WRITE_FAILED, "No image selected")

        try:
            image_url = await self.gateway.upload_image(image)
        except StoreError as e:
            self._log.error("Image upload failed", filename=image.filename, error=e.message)
            return _failure(WriteProductResult, ErrorCode.WRITE_FAILED, e.message)

        now = datetime.now(timezone.utc)
        document = {
            **draft.to_document(),
            "image": image_url,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            product_id = await self.gateway.create_product(document)
        except StoreError as e:
            self._log.error("Product creation failed", name=draft.name, error=e.message)
            await self._discard_image(image_url)
            return _failure(WriteProductResult, ErrorCode.WRITE_FAILED, e.message)

        self._log.info("Product created", product_id=product_id, name=draft.name)
        return WriteProductResult(product_id=product_id, image_url=image_url)

    async def _current_product(self, product_id: str) -> ResolveProductResult:
        """Look up a product by id in a fresh snapshot."""
        loaded = await self.load_products()
        if not loaded.success:
            return _failure(ResolveProductResult, ErrorCode.FETCH_FAILED, loaded.error)

        product = find_product(loaded.products, product_id)
        if product is None:
            return _failure(ResolveProductResult, ErrorCode.NOT_FOUND)
        return ResolveProductResult(product=product)

    async def update_product(
        self,
        product_id: str,
        draft: ProductDraft,
        image: ImageAsset | None = None,
    ) -> WriteProductResult:
        """Update a product, optionally replacing its image.

        The previous image is deleted once the replacement has been saved.

        Args:
            product_id: Product to update.
            draft: New product fields.
            image: Replacement image, if any.

        Returns:
            Product id and current image URL, or NOT_FOUND / FETCH_FAILED /
            WRITE_FAILED.
        """
        current = await self._current_product(product_id)
        if not current.success or current.product is None:
            return _failure(
                WriteProductResult, current.error_code, current.error, product_id=product_id
            )
        previous_image_url = current.product.image

        document = {**draft.to_document(), "updatedAt": datetime.now(timezone.utc)}

        image_url = None
        if image is not None:
            try:
                image_url = await self.gateway.upload_image(image)
            except StoreError as e:
                self._log.error("Image upload failed", product_id=product_id, error=e.message)
                return _failure(WriteProductResult, ErrorCode.WRITE_FAILED, e.message)
            document["image"] = image_url

        try:
            await self.gateway.update_product(product_id, document)
        except StoreError as e:
            self._log.error("Product update failed", product_id=product_id, error=e.message)
            if image_url:
                await self._discard_image(image_url)
            return _failure(WriteProductResult, ErrorCode.WRITE_FAILED, e.message, product_id=product_id)

        if image_url and previous_image_url:
            await self._discard_image(previous_image_url)

        self._log.info("Product updated", product_id=product_id, image_replaced=image_url is not None)
        return WriteProductResult(product_id=product_id, image_url=image_url or previous_image_url)

    async def delete_product(self, product_id: str) -> WriteProductResult:
        """Delete a product and then its image.

        Args:
            product_id: Product to delete.

        Returns:
            Deleted product id, or NOT_FOUND / FETCH_FAILED / WRITE_FAILED.
        """
        current = await self._current_product(product_id)
        if not current.success or current.product is None:
            return _failure(
                WriteProductResult, current.error_code, current.error, product_id=product_id
            )
        image_url = current.product.image

        try:
            await self.gateway.delete_product(product_id)
        except StoreError as e:
            self._log.error("Product deletion failed", product_id=product_id, error=e.message)
            return _failure(WriteProductResult, ErrorCode.WRITE_FAILED, e.message, product_id=product_id)

        if image_url:
            await self._discard_image(image_url)

        self._log.info("Product deleted", product_id=product_id)
        return WriteProductResult(product_id=product_id)

    async def seed_catalogue(
        self,
        mode: str = "small",
        clear_existing: bool = False,
    ) -> dict[str, Any]:
        """Seed the store with the demo catalogue.

        Args:
            mode: Catalogue size ("small" or "full").
            clear_existing: Whether to delete existing products first.

        Returns:
            Seeding result with counts.

        Raises:
            StoreError: If the store rejects a call; seeding stops there.
        """
        config = GeneratorConfig.full() if mode == "full" else GeneratorConfig.small()

        deleted = 0
        if clear_existing:
            for product in await self.gateway.list_products():
                await self.gateway.delete_product(product.id)
                deleted += 1

        documents = ProductGenerator(config).generate_list()
        for document in documents:
            await self.gateway.create_product(document)

        self._log.info("Catalogue seeded", mode=mode, deleted=deleted, created=len(documents))
        return {
            "mode": mode,
            "deleted": deleted,
            "products_created": len(documents),
            "categories_used": len({d["category"] for d in documents}),
        }

    async def _discard_image(self, url: str) -> None:
        """Delete an image, logging instead of failing."""
        try:
            await self.gateway.delete_image(url)
        except StoreError as e:
            self._log.warning("Image cleanup failed", image_url=url, error=e.message)


def get_catalogue_service(request_id: str | None = None) -> CatalogueService:
    """Get catalogue service instance.

    Args:
        request_id: Request ID for correlation.

    Returns:
        CatalogueService bound to the configured gateway.
    """
    return CatalogueService(get_gateway(), request_id=request_id)
