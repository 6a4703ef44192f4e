"""Catalogue query engine.

Filters a product snapshot by category and search text, then orders it.
All functions are pure: they return new lists and never mutate their input.
"""

import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from catalogue.catalog.models import Product
from catalogue.catalog.taxonomy import ALL_CATEGORY_ID


class SortKey(str, Enum):
    """Supported listing orders."""

    NAME = "name"
    RATING = "rating"
    NEWEST = "newest"

    @classmethod
    def parse(cls, value: "str | SortKey | None") -> "SortKey":
        """Parse a sort key, falling back to NAME for unknown values."""
        if isinstance(value, SortKey):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.NAME


@dataclass(frozen=True)
class CatalogueQuery:
    """User-controlled listing parameters.

    Attributes:
        category: Category id, or "all" for every category.
        search: Free-text search (empty matches everything).
        sort: Listing order.
    """

    category: str = ALL_CATEGORY_ID
    search: str = ""
    sort: SortKey = SortKey.NAME

    @classmethod
    def create(
        cls,
        category: str | None = None,
        search: str | None = None,
        sort: str | SortKey | None = None,
    ) -> "CatalogueQuery":
        """Create a query, normalising missing or unknown values.

        Args:
            category: Category id (None or empty means "all").
            search: Search text (None means no search).
            sort: Sort key name (unknown values mean "name").

        Returns:
            Normalised query.
        """
        return cls(
            category=category or ALL_CATEGORY_ID,
            search=search or "",
            sort=SortKey.parse(sort),
        )


def matches_category(product: Product, category: str) -> bool:
    """Check the category filter."""
    return category == ALL_CATEGORY_ID or product.category == category


def matches_search(product: Product, search: str) -> bool:
    """Check the case-insensitive substring search on name, description and model."""
    if not search:
        return True
    needle = search.casefold()
    return any(
        needle in (text or "").casefold()
        for text in (product.name, product.description, product.model)
    )


def filter_products(
    products: Sequence[Product],
    category: str = ALL_CATEGORY_ID,
    search: str = "",
) -> list[Product]:
    """Filter products by category and search text.

    Args:
        products: Product snapshot.
        category: Category id or "all".
        search: Search text.

    Returns:
        Matching products in input order.
    """
    return [
        p for p in products
        if matches_category(p, category) and matches_search(p, search)
    ]


def _name_key(product: Product) -> tuple[str, str]:
    """Collation key: accent-folded name first, then the plain casefolded name."""
    name = (product.name or "").casefold()
    folded = "".join(
        ch for ch in unicodedata.normalize("NFKD", name)
        if unicodedata.category(ch) != "Mn"
    )
    return folded, name


def sort_products(
    products: Sequence[Product],
    sort: str | SortKey | None = SortKey.NAME,
) -> list[Product]:
    """Order products. The sort is stable for equal keys.

    Args:
        products: Products to order.
        sort: Sort key; unknown values fall back to name.

    Returns:
        New ordered list.
    """
    key = SortKey.parse(sort)

    if key == SortKey.RATING:
        return sorted(products, key=lambda p: p.rating_value, reverse=True)
    if key == SortKey.NEWEST:
        return sorted(products, key=lambda p: p.created_at_value, reverse=True)
    return sorted(products, key=_name_key)


def query_products(products: Sequence[Product], query: CatalogueQuery) -> list[Product]:
    """Apply a catalogue query to a product snapshot.

    Args:
        products: Product snapshot.
        query: Listing parameters.

    Returns:
        Products to display, filtered then sorted.
    """
    filtered = filter_products(products, category=query.category, search=query.search)
    return sort_products(filtered, query.sort)
