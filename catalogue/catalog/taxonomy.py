"""Category facets for the catalogue.

The catalogue uses a small fixed set of category ids. Facets are derived
from a product snapshot every time it changes:

    all            - All Products (every product)
    windows        - Aluminium Windows
    doors          - Doors & Frames
    ...

Products without a category count towards "all" only. "all" is reserved:
a product stored under that category id is treated as uncategorized.
"""

from collections.abc import Iterable, Sequence

from catalogue.catalog.models import Category, Product

ALL_CATEGORY_ID = "all"
ALL_CATEGORY_NAME = "All Products"

CATEGORY_NAMES: dict[str, str] = {
    "windows": "Aluminium Windows",
    "doors": "Doors & Frames",
    "railings": "Railings & Balustrades",
    "curtain-walls": "Curtain Walls",
    "roofing": "Roofing Systems",
}


def category_name(category_id: str) -> str:
    """Get display name for a category id.

    Unknown ids fall back to the id with its first character capitalized.

    Args:
        category_id: Category id.

    Returns:
        Display name.
    """
    if category_id == ALL_CATEGORY_ID:
        return ALL_CATEGORY_NAME
    if category_id in CATEGORY_NAMES:
        return CATEGORY_NAMES[category_id]
    return category_id[:1].upper() + category_id[1:]


def is_categorized(product: Product) -> bool:
    """Check whether a product belongs to a real category facet."""
    return bool(product.category) and product.category != ALL_CATEGORY_ID


def known_categories() -> list[Category]:
    """Get the fixed category table (without counts).

    Returns:
        Categories offered by the admin form.
    """
    return [Category(id=cid, name=name) for cid, name in CATEGORY_NAMES.items()]


def aggregate_categories(products: Sequence[Product]) -> list[Category]:
    """Derive category facets with counts from a product snapshot.

    The first entry is always the synthetic "all" bucket. It is followed by
    one entry per distinct category, in first-seen order. Products with no
    category, or with the reserved "all" id, only count towards the bucket.

    Args:
        products: Product snapshot (may be empty).

    Returns:
        List of category facets.
    """
    counts: dict[str, int] = {}
    for product in products:
        if not is_categorized(product):
            continue
        counts[product.category] = counts.get(product.category, 0) + 1

    facets = [Category(id=ALL_CATEGORY_ID, name=ALL_CATEGORY_NAME, count=len(products))]
    facets.extend(
        Category(id=cid, name=category_name(cid), count=count)
        for cid, count in counts.items()
    )
    return facets


def find_category(categories: Iterable[Category], category_id: str) -> Category | None:
    """Find a facet by id.

    Args:
        categories: Facets to search.
        category_id: Category id.

    Returns:
        Matching facet, or None.
    """
    for category in categories:
        if category.id == category_id:
            return category
    return None
