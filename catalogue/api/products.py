"""Catalogue API endpoints.

Public endpoints for browsing the catalogue, listing category facets and
viewing a product by its URL slug.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from catalogue.api.dependencies import get_service, raise_for_result
from catalogue.api.schemas import (
    CategoryListResponse,
    CategorySchema,
    EnquiryLinksSchema,
    ErrorResponse,
    ProductDetailResponse,
    ProductListResponse,
    ProductSchema,
)
from catalogue.application.catalogue_service import CatalogueService
from catalogue.catalog.enquiry import build_enquiry_links
from catalogue.catalog.query import CatalogueQuery
from catalogue.catalog.taxonomy import known_categories

router = APIRouter(tags=["Catalogue"])


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/products",
    response_model=ProductListResponse,
    responses={502: {"model": ErrorResponse}},
    summary="Browse products",
    description="List products filtered by category and search text, in the requested order.",
)
async def list_products(
    service: Annotated[CatalogueService, Depends(get_service)],
    category: Annotated[str | None, Query(description="Category id or 'all'")] = None,
    search: Annotated[str | None, Query(description="Search in name, description and model")] = None,
    sort: Annotated[str | None, Query(description="name, rating or newest")] = None,
) -> ProductListResponse:
    """Browse the catalogue.

    Unknown sort keys fall back to ordering by name.

    Args:
        service: Catalogue service.
        category: Category filter.
        search: Search text.
        sort: Sort key.

    Returns:
        Matching products plus category facets.
    """
    query = CatalogueQuery.create(category=category, search=search, sort=sort)
    result = await service.browse(query)
    raise_for_result(result)

    return ProductListResponse(
        items=[ProductSchema.from_product(p) for p in result.products],
        count=len(result.products),
        total=result.total,
        category=query.category,
        category_name=result.heading,
        search=query.search,
        sort=query.sort.value,
        categories=[CategorySchema.from_category(c) for c in result.categories],
    )


@router.get(
    "/categories",
    response_model=CategoryListResponse,
    responses={502: {"model": ErrorResponse}},
    summary="List category facets",
    description="Category facets with product counts for the current catalogue.",
)
async def list_categories(
    service: Annotated[CatalogueService, Depends(get_service)],
) -> CategoryListResponse:
    """List category facets."""
    result = await service.get_categories()
    raise_for_result(result)

    return CategoryListResponse(
        categories=[CategorySchema.from_category(c) for c in result.categories],
        total=len(result.categories),
    )


@router.get(
    "/categories/known",
    response_model=CategoryListResponse,
    summary="List known categories",
    description="The fixed category table offered when creating products.",
)
async def list_known_categories() -> CategoryListResponse:
    """List the fixed category table."""
    categories = known_categories()
    return CategoryListResponse(
        categories=[CategorySchema.from_category(c) for c in categories],
        total=len(categories),
    )


@router.get(
    "/products/{slug}",
    response_model=ProductDetailResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Get product details",
    description="Resolve a product from its URL slug (readable name followed by the id).",
)
async def get_product(
    slug: str,
    service: Annotated[CatalogueService, Depends(get_service)],
) -> ProductDetailResponse:
    """Get a product by slug.

    Args:
        slug: Product slug, e.g. "premium-sliding-window-abc123".
        service: Catalogue service.

    Returns:
        Product details with enquiry links.

    Raises:
        HTTPException: 400 for a malformed slug, 404 if no product matches.
    """
    result = await service.get_product_by_slug(slug)
    raise_for_result(result)

    product = result.product
    schema = ProductSchema.from_product(product)
    return ProductDetailResponse(
        product=schema,
        links=EnquiryLinksSchema.from_links(build_enquiry_links(product, schema.slug)),
    )
