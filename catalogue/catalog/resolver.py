"""Product detail resolution from URL slugs.

A product URL looks like ``/product/premium-sliding-window-abc123``: a
readable prefix followed by the product id as the last hyphen-delimited
token. A slug without any hyphen is taken to be the id itself.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from catalogue.catalog.errors import ErrorCode
from catalogue.catalog.models import Product

SLUG_DELIMITER = "-"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class ProductLookup:
    """Outcome of resolving a slug.

    Exactly one of ``product`` and ``error`` is set.
    """

    product: Product | None = None
    error: ErrorCode | None = None
    product_id: str | None = None

    @property
    def found(self) -> bool:
        """Whether a product was resolved."""
        return self.product is not None


def extract_product_id(slug: str) -> str | None:
    """Extract the product id from a slug.

    Args:
        slug: URL slug.

    Returns:
        The trailing token, or None when the slug is empty or ends with
        the delimiter.
    """
    if not slug:
        return None
    product_id = slug.rsplit(SLUG_DELIMITER, 1)[-1]
    return product_id or None


def find_product(products: Sequence[Product], product_id: str) -> Product | None:
    """Find a product by id.

    Ids are unique in a consistent store; if they are not, the first match
    in input order wins.
    """
    return next((p for p in products if p.id == product_id), None)


def resolve_product(slug: str, products: Sequence[Product]) -> ProductLookup:
    """Resolve a slug to a product.

    Args:
        slug: URL slug.
        products: Product snapshot.

    Returns:
        Lookup with the product, or with INVALID_SLUG / NOT_FOUND.
    """
    product_id = extract_product_id(slug)
    if product_id is None:
        return ProductLookup(error=ErrorCode.INVALID_SLUG)

    product = find_product(products, product_id)
    if product is None:
        return ProductLookup(error=ErrorCode.NOT_FOUND, product_id=product_id)

    return ProductLookup(product=product, product_id=product_id)


def build_slug(product: Product) -> str:
    """Build the URL slug for a product.

    Example:
        Product(id="abc123", name="Premium Sliding Window")
        -> "premium-sliding-window-abc123"
    """
    prefix = _NON_ALNUM.sub(SLUG_DELIMITER, (product.name or "").lower()).strip(SLUG_DELIMITER)
    return f"{prefix or 'product'}{SLUG_DELIMITER}{product.id}"
