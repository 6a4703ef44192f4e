"""Enquiry links shown on the product detail page.

Builds the share URL and the call, WhatsApp and e-mail quote links for a
product from the configured contact details.
"""

from dataclasses import dataclass
from urllib.parse import quote

from catalogue.catalog.models import Product
from catalogue.infrastructure.config import Settings, settings as default_settings


@dataclass(frozen=True)
class EnquiryLinks:
    """Contact links for a product."""

    share: str
    call: str
    whatsapp: str
    email: str


def product_url(slug: str, site_url: str) -> str:
    """Get the public URL of a product detail page."""
    return f"{site_url.rstrip('/')}/product/{slug}"


def build_enquiry_links(
    product: Product,
    slug: str,
    settings: Settings | None = None,
) -> EnquiryLinks:
    """Build enquiry links for a product.

    Args:
        product: Product being viewed.
        slug: Product slug.
        settings: Settings with site and contact details.

    Returns:
        Enquiry links.
    """
    cfg = settings or default_settings
    url = product_url(slug, cfg.site_url)

    message = (
        f"Hi, I'm interested in this product: {url}. "
        "Could you please provide more information?"
    )
    whatsapp_number = "".join(ch for ch in cfg.contact_whatsapp if ch.isdigit())

    subject = f"Quote Request for {product.name or 'Product'}"
    body = (
        "Hello,\n\n"
        "I would like to request a quote for the following product:\n\n"
        f"Product: {product.name or 'N/A'}\n"
        f"Model: {product.model or 'N/A'}\n"
        f"Category: {product.category or 'N/A'}\n\n"
        "Please provide pricing and availability information.\n\n"
        "Thank you!"
    )

    return EnquiryLinks(
        share=url,
        call=f"tel:{cfg.contact_phone}",
        whatsapp=f"https://wa.me/{whatsapp_number}?text={quote(message, safe='')}",
        email=f"mailto:{cfg.contact_email}?subject={quote(subject, safe='')}&body={quote(body, safe='')}",
    )
