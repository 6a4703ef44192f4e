"""Catalogue error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """Failure kinds surfaced to the presentation layer."""

    FETCH_FAILED = "FETCH_FAILED"
    INVALID_SLUG = "INVALID_SLUG"
    NOT_FOUND = "NOT_FOUND"
    WRITE_FAILED = "WRITE_FAILED"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.FETCH_FAILED: "Failed to load products. Please try again later.",
    ErrorCode.INVALID_SLUG: "Invalid product URL",
    ErrorCode.NOT_FOUND: "Product not found",
    ErrorCode.WRITE_FAILED: "Failed to save product",
}
