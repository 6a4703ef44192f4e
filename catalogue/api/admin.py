"""Admin API endpoints.

Create, update and delete catalogue products. Requests are multipart
forms carrying the product fields as a JSON ``product`` field and the
image as an ``image`` file. All paths require the admin API key.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError

from catalogue.api.dependencies import get_service, raise_for_result
from catalogue.api.schemas import ErrorResponse, ProductWriteRequest, ProductWriteResponse
from catalogue.application.catalogue_service import CatalogueService
from catalogue.catalog.models import ImageAsset

router = APIRouter(prefix="/admin/products", tags=["Admin"])


# ============================================================================
# Converters
# ============================================================================


def parse_product_form(payload: str) -> ProductWriteRequest:
    """Parse the JSON product field of an admin form.

    Raises:
        HTTPException: 422 with per-field details if the payload is invalid.
    """
    try:
        return ProductWriteRequest.model_validate_json(payload)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error_code": "VALIDATION_ERROR",
                "message": "Invalid product data",
                "details": [
                    {
                        "field": ".".join(str(part) for part in error["loc"]) or None,
                        "message": error["msg"],
                    }
                    for error in e.errors()
                ],
            },
        ) from e


async def read_image(upload: UploadFile | None) -> ImageAsset | None:
    """Read an uploaded image file.

    Raises:
        HTTPException: 422 if the file is not an image.
    """
    if upload is None:
        return None

    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error_code": "VALIDATION_ERROR",
                "message": f"Unsupported image type: {content_type or 'unknown'}",
                "details": [{"field": "image", "message": "must be an image"}],
            },
        )

    return ImageAsset(
        filename=upload.filename or "image",
        content_type=content_type,
        data=await upload.read(),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductWriteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Create product",
    description="Upload the image and create a product listing.",
)
async def create_product(
    service: Annotated[CatalogueService, Depends(get_service)],
    product: Annotated[str, Form(description="Product fields as JSON")],
    image: Annotated[UploadFile | None, File(description="Product image")] = None,
) -> ProductWriteResponse:
    """Create a product.

    Args:
        service: Catalogue service.
        product: Product fields as JSON.
        image: Product image (required).

    Returns:
        New product id and image URL.
    """
    request = parse_product_form(product)
    asset = await read_image(image)
    if asset is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error_code": "VALIDATION_ERROR",
                "message": "No image selected",
                "details": [{"field": "image", "message": "required"}],
            },
        )

    result = await service.create_product(request.to_draft(), asset)
    raise_for_result(result)

    return ProductWriteResponse(
        product_id=result.product_id,
        image_url=result.image_url,
        status="created",
    )


@router.put(
    "/{product_id}",
    response_model=ProductWriteResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Replace a product's fields and optionally its image.",
)
async def update_product(
    product_id: str,
    service: Annotated[CatalogueService, Depends(get_service)],
    product: Annotated[str, Form(description="Product fields as JSON")],
    image: Annotated[UploadFile | None, File(description="Replacement image")] = None,
) -> ProductWriteResponse:
    """Update a product.

    Args:
        product_id: Product to update.
        service: Catalogue service.
        product: Product fields as JSON.
        image: Optional replacement image.

    Returns:
        Product id and current image URL.
    """
    request = parse_product_form(product)
    asset = await read_image(image)

    result = await service.update_product(product_id, request.to_draft(), asset)
    raise_for_result(result)

    return ProductWriteResponse(
        product_id=product_id,
        image_url=result.image_url,
        status="updated",
    )


@router.delete(
    "/{product_id}",
    response_model=ProductWriteResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Delete product",
    description="Delete a product listing and its image.",
)
async def delete_product(
    product_id: str,
    service: Annotated[CatalogueService, Depends(get_service)],
) -> ProductWriteResponse:
    """Delete a product."""
    result = await service.delete_product(product_id)
    raise_for_result(result)

    return ProductWriteResponse(product_id=product_id, status="deleted")
