"""Tests for product enquiry links."""

from urllib.parse import parse_qs, urlsplit

from catalogue.catalog.enquiry import build_enquiry_links, product_url
from catalogue.infrastructure.config import Settings


def make_settings() -> Settings:
    return Settings(
        site_url="https://shop.example.com/",
        contact_phone="+911234567890",
        contact_whatsapp="+91 12345 67890",
        contact_email="sales@example.com",
    )


class TestProductUrl:
    """Tests for product_url."""

    def test_trailing_slash_is_ignored(self) -> None:
        """Site URLs with or without a trailing slash give the same link."""
        assert product_url("door-1", "https://a.test/") == "https://a.test/product/door-1"
        assert product_url("door-1", "https://a.test") == "https://a.test/product/door-1"


class TestBuildEnquiryLinks:
    """Tests for build_enquiry_links."""

    def test_share_and_call(self, make_product) -> None:
        """Share points at the detail page and call dials the phone."""
        links = build_enquiry_links(make_product("d1", name="Door"), "door-d1", make_settings())
        assert links.share == "https://shop.example.com/product/door-d1"
        assert links.call == "tel:+911234567890"

    def test_whatsapp_message(self, make_product) -> None:
        """WhatsApp uses the digits of the number and mentions the product URL."""
        links = build_enquiry_links(make_product("d1", name="Door"), "door-d1", make_settings())
        parts = urlsplit(links.whatsapp)
        assert parts.netloc == "wa.me"
        assert parts.path == "/911234567890"
        text = parse_qs(parts.query)["text"][0]
        assert "https://shop.example.com/product/door-d1" in text

    def test_email_quote_request(self, make_product) -> None:
        """The mail link carries a quote request for the product."""
        product = make_product("d1", name="Door", model="DR-1", category="doors")
        links = build_enquiry_links(product, "door-d1", make_settings())
        parts = urlsplit(links.email)
        assert parts.scheme == "mailto"
        assert parts.path == "sales@example.com"
        query = parse_qs(parts.query)
        assert query["subject"] == ["Quote Request for Door"]
        assert "Model: DR-1" in query["body"][0]
        assert "Category: doors" in query["body"][0]

    def test_missing_fields_use_placeholders(self, make_product) -> None:
        """Absent details fall back to generic text."""
        links = build_enquiry_links(make_product("x"), "product-x", make_settings())
        query = parse_qs(urlsplit(links.email).query)
        assert query["subject"] == ["Quote Request for Product"]
        assert "Product: N/A" in query["body"][0]
