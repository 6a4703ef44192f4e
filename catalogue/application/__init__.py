"""Application layer module.

Contains the catalogue service, which orchestrates the pure catalogue
functions and the product store gateway.
"""

from catalogue.application.catalogue_service import (
    BrowseResult,
    CatalogueService,
    CategoriesResult,
    ListProductsResult,
    ResolveProductResult,
    WriteProductResult,
    get_catalogue_service,
)

__all__ = [
    "BrowseResult",
    "CatalogueService",
    "CategoriesResult",
    "ListProductsResult",
    "ResolveProductResult",
    "WriteProductResult",
    "get_catalogue_service",
]
