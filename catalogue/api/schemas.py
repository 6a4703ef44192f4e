"""API schemas for the catalogue API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from catalogue.catalog.enquiry import EnquiryLinks
from catalogue.catalog.models import Category, Product, ProductDraft
from catalogue.catalog.resolver import build_slug


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Category Schemas
# ============================================================================


class CategorySchema(BaseModel):
    """A category facet."""

    id: str = Field(..., description="Category identifier ('all' for every product)")
    name: str = Field(..., description="Display name")
    count: int = Field(..., ge=0, description="Number of products in the category")

    @classmethod
    def from_category(cls, category: Category) -> "CategorySchema":
        """Convert a Category to its schema."""
        return cls(id=category.id, name=category.name, count=category.count)


class CategoryListResponse(BaseModel):
    """List of category facets."""

    categories: list[CategorySchema] = Field(..., description="Category facets")
    total: int = Field(..., description="Number of facets")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """A catalogue product."""

    id: str = Field(..., description="Product identifier")
    slug: str = Field(..., description="URL slug of the product detail page")
    name: str | None = Field(default=None, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    model: str | None = Field(default=None, description="Model code")
    category: str | None = Field(default=None, description="Category identifier")
    image: str | None = Field(default=None, description="Image download URL")
    badge: str | None = Field(default=None, description="Short label")
    rating: float = Field(default=0.0, description="Average rating (0 when unrated)")
    reviews: int = Field(default=0, description="Number of reviews")
    features: list[str] = Field(default_factory=list, description="Feature list")
    applications: list[str] = Field(default_factory=list, description="Application areas")
    specifications: dict[str, str] = Field(
        default_factory=dict, description="Technical specifications"
    )
    created_at: datetime | None = Field(default=None, description="When the product was created")
    updated_at: datetime | None = Field(default=None, description="When the product was last updated")

    @classmethod
    def from_product(cls, product: Product) -> "ProductSchema":
        """Convert a Product to its schema."""
        return cls(
            id=product.id,
            slug=build_slug(product),
            name=product.name,
            description=product.description,
            model=product.model,
            category=product.category,
            image=product.image,
            badge=product.badge,
            rating=product.rating_value,
            reviews=product.review_count,
            features=list(product.features),
            applications=list(product.applications),
            specifications=dict(product.specifications),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListResponse(BaseModel):
    """Catalogue listing for a category, search and sort."""

    items: list[ProductSchema] = Field(..., description="Products to display")
    count: int = Field(..., description="Number of products displayed")
    total: int = Field(..., description="Number of products in the catalogue")
    category: str = Field(..., description="Selected category")
    category_name: str | None = Field(default=None, description="Selected category's name")
    search: str = Field(default="", description="Applied search text")
    sort: str = Field(..., description="Applied sort order")
    categories: list[CategorySchema] = Field(..., description="Category facets")


class EnquiryLinksSchema(BaseModel):
    """Contact links for a product."""

    share: str = Field(..., description="Public URL of the product page")
    call: str = Field(..., description="tel: link")
    whatsapp: str = Field(..., description="WhatsApp chat link with a prefilled message")
    email: str = Field(..., description="mailto: link for a quote request")

    @classmethod
    def from_links(cls, links: EnquiryLinks) -> "EnquiryLinksSchema":
        """Convert EnquiryLinks to its schema."""
        return cls(share=links.share, call=links.call, whatsapp=links.whatsapp, email=links.email)


class ProductDetailResponse(BaseModel):
    """Product detail page data."""

    product: ProductSchema = Field(..., description="The product")
    links: EnquiryLinksSchema = Field(..., description="Enquiry links")


# ============================================================================
# Admin Schemas
# ============================================================================


class ProductWriteRequest(BaseModel):
    """Product fields submitted by the admin form."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    category: str = Field(..., min_length=1, max_length=100, description="Category identifier")
    model: str = Field(default="", max_length=100, description="Model code")
    rating: float = Field(default=4.5, ge=0, le=5, description="Rating 0-5")
    reviews: int = Field(default=0, ge=0, description="Number of reviews")
    badge: str = Field(default="", max_length=50, description="Short label")
    description: str = Field(default="", description="Product description")
    specifications: dict[str, str] = Field(
        default_factory=dict, description="Technical specifications"
    )
    features: list[str] = Field(default_factory=list, description="Feature list")
    applications: list[str] = Field(default_factory=list, description="Application areas")

    @field_validator("name", "category")
    @classmethod
    def not_blank(cls, value: str) -> str:
        """Reject whitespace-only values."""
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("features", "applications")
    @classmethod
    def drop_blank_items(cls, values: list[str]) -> list[str]:
        """Drop empty entries."""
        return [v.strip() for v in values if v.strip()]

    @field_validator("specifications")
    @classmethod
    def drop_blank_keys(cls, values: dict[str, str]) -> dict[str, str]:
        """Drop specifications without a name."""
        return {k.strip(): v.strip() for k, v in values.items() if k.strip()}

    def to_draft(self) -> ProductDraft:
        """Convert to a ProductDraft."""
        return ProductDraft(
            name=self.name,
            category=self.category,
            model=self.model,
            rating=self.rating,
            reviews=self.reviews,
            badge=self.badge,
            description=self.description,
            specifications=dict(self.specifications),
            features=list(self.features),
            applications=list(self.applications),
        )


class ProductWriteResponse(BaseModel):
    """Result of an admin write."""

    product_id: str = Field(..., description="Product identifier")
    image_url: str | None = Field(default=None, description="Current image URL")
    status: str = Field(..., description="created, updated or deleted")
