"""Catalogue data model.

Products are owned by the external store. The core only reads them, so
``Product`` is immutable and every optional field is explicit.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Product:
    """A catalogue product as stored in the document store.

    Attributes:
        id: Store-assigned unique identifier.
        name: Product name (None when absent).
        description: Long description (None when absent).
        model: Manufacturer model code (None when absent).
        category: Category id, e.g. "windows" (None when uncategorized).
        image: Download URL of the product image.
        badge: Optional short label ("New", "Bestseller").
        rating: Average rating 0.0-5.0 (None when absent).
        reviews: Number of reviews (None when absent).
        features: Feature bullet points in display order.
        applications: Application areas in display order.
        specifications: Attribute name to value, in display order.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: str
    name: str | None = None
    description: str | None = None
    model: str | None = None
    category: str | None = None
    image: str | None = None
    badge: str | None = None
    rating: float | None = None
    reviews: int | None = None
    features: tuple[str, ...] = ()
    applications: tuple[str, ...] = ()
    specifications: dict[str, str] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def rating_value(self) -> float:
        """Rating used for ordering and display (0 when absent)."""
        return self.rating if self.rating is not None else 0.0

    @property
    def review_count(self) -> int:
        """Review count used for display (0 when absent)."""
        return self.reviews if self.reviews is not None else 0

    @property
    def created_at_value(self) -> datetime:
        """Creation time used for ordering (epoch when absent, UTC when naive)."""
        if self.created_at is None:
            return EPOCH
        if self.created_at.tzinfo is None:
            return self.created_at.replace(tzinfo=timezone.utc)
        return self.created_at

    @classmethod
    def from_document(cls, product_id: str, data: dict[str, Any]) -> "Product":
        """Build a product from a loosely-typed store document.

        Args:
            product_id: Document id.
            data: Decoded document fields.

        Returns:
            Product instance.
        """
        return cls(
            id=product_id,
            name=_text(data.get("name")),
            description=_text(data.get("description")),
            model=_text(data.get("model")),
            category=_text(data.get("category")) or None,
            image=_text(data.get("image")) or None,
            badge=_text(data.get("badge")) or None,
            rating=_number(data.get("rating")),
            reviews=_count(data.get("reviews")),
            features=_strings(data.get("features")),
            applications=_strings(data.get("applications")),
            specifications=_specifications(data.get("specifications")),
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation using the store's field names.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "model": self.model,
            "category": self.category,
            "image": self.image,
            "badge": self.badge,
            "rating": self.rating,
            "reviews": self.reviews,
            "features": list(self.features),
            "applications": list(self.applications),
            "specifications": dict(self.specifications),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class ProductDraft:
    """Writable product fields submitted by the admin form.

    Defaults mirror a blank upload form. ``image`` is filled in by the
    catalogue service once the asset has been uploaded.
    """

    name: str = ""
    category: str = ""
    model: str = ""
    rating: float = 4.5
    reviews: int = 0
    badge: str = ""
    description: str = ""
    specifications: dict[str, str] = field(default_factory=dict)
    features: list[str] = field(default_factory=list)
    applications: list[str] = field(default_factory=list)

    def to_document(self) -> dict[str, Any]:
        """Convert to store document fields (without timestamps or image)."""
        return {
            "name": self.name,
            "category": self.category,
            "model": self.model,
            "rating": float(self.rating),
            "reviews": int(self.reviews),
            "badge": self.badge,
            "description": self.description,
            "specifications": dict(self.specifications),
            "features": list(self.features),
            "applications": list(self.applications),
        }


@dataclass(frozen=True)
class ImageAsset:
    """An image file to upload to blob storage."""

    filename: str
    content_type: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class Category:
    """A category facet derived from a product snapshot.

    Attributes:
        id: Category id ("all" for the synthetic bucket).
        name: Display name.
        count: Number of products in this category.
    """

    id: str
    name: str
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, "name": self.name, "count": self.count}


# ============================================================================
# Normalisation helpers
# ============================================================================


def parse_timestamp(value: Any) -> datetime | None:
    """Interpret a stored timestamp.

    Accepts datetimes, ISO-8601 strings (with or without "Z") and epoch
    milliseconds. Naive values are taken as UTC.

    Args:
        value: Raw stored value.

    Returns:
        Timezone-aware datetime, or None when absent or unparseable.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def _number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _count(value: Any) -> int | None:
    number = _number(value)
    if number is None:
        return None
    return max(0, int(number))


def _strings(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


def _specifications(value: Any) -> dict[str, str]:
    if isinstance(value, dict):
        return {str(key): "" if val is None else str(val) for key, val in value.items()}

    # Older documents store specifications as "Key: Value" lines
    specs: dict[str, str] = {}
    for line in _strings(value):
        key, _, val = line.partition(":")
        if key.strip():
            specs[key.strip()] = val.strip()
    return specs
