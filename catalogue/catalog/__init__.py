"""Catalogue data-derivation and query layer.

Provides category facets, search/filter/sort over a product snapshot,
and product resolution from URL slugs. Everything here is pure and
operates on read-only snapshots.
"""

from catalogue.catalog.errors import ERROR_MESSAGES, ErrorCode
from catalogue.catalog.models import Category, ImageAsset, Product, ProductDraft
from catalogue.catalog.query import (
    CatalogueQuery,
    SortKey,
    filter_products,
    query_products,
    sort_products,
)
from catalogue.catalog.resolver import (
    ProductLookup,
    build_slug,
    extract_product_id,
    resolve_product,
)
from catalogue.catalog.taxonomy import (
    ALL_CATEGORY_ID,
    aggregate_categories,
    category_name,
    is_categorized,
    known_categories,
)

__all__ = [
    # Models
    "Category",
    "ImageAsset",
    "Product",
    "ProductDraft",
    # Errors
    "ERROR_MESSAGES",
    "ErrorCode",
    # Taxonomy
    "ALL_CATEGORY_ID",
    "aggregate_categories",
    "category_name",
    "is_categorized",
    "known_categories",
    # Query
    "CatalogueQuery",
    "SortKey",
    "filter_products",
    "query_products",
    "sort_products",
    # Resolver
    "ProductLookup",
    "build_slug",
    "extract_product_id",
    "resolve_product",
]
