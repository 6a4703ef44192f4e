"""Shared API dependencies and error mapping."""

from fastapi import HTTPException, Request, status

from catalogue.application.catalogue_service import CatalogueService, get_catalogue_service
from catalogue.catalog.errors import ErrorCode

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.FETCH_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.INVALID_SLUG: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.WRITE_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def get_service(request: Request) -> CatalogueService:
    """Get catalogue service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    return get_catalogue_service(request_id=request_id)


def raise_for_result(result) -> None:
    """Raise an HTTPException for a failed service result.

    Args:
        result: Any service result with ``success``, ``error_code`` and ``error``.

    Raises:
        HTTPException: If the result is a failure.
    """
    if result.success:
        return

    code = result.error_code or ErrorCode.FETCH_FAILED
    raise HTTPException(
        status_code=ERROR_STATUS.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail={
            "error_code": code.value,
            "message": result.error,
        },
    )
