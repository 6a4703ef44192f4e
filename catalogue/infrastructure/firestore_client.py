"""Firestore and Firebase Storage gateway.

Talks to the hosted store over its REST APIs using httpx. Product documents
live in a Firestore collection; product images live in a Firebase Storage
bucket under ``products/``.
"""

from typing import Any
from urllib.parse import quote, unquote, urlparse

import httpx
import structlog

from catalogue.catalog.models import ImageAsset, Product
from catalogue.infrastructure.firestore_codec import decode_fields, document_id, encode_fields
from catalogue.infrastructure.gateway import ProductGateway, StoreError, image_object_name

logger = structlog.get_logger()

FIRESTORE_URL = "https://firestore.googleapis.com/v1"
STORAGE_URL = "https://firebasestorage.googleapis.com/v0"


class FirestoreProductGateway(ProductGateway):
    """Product gateway backed by Firestore and Firebase Storage.

    Example usage:
        gateway = FirestoreProductGateway(
            project_id="my-project",
            storage_bucket="my-project.appspot.com",
        )
        products = await gateway.list_products()
        await gateway.close()
    """

    def __init__(
        self,
        project_id: str,
        storage_bucket: str,
        collection: str = "products",
        api_key: str | None = None,
        auth_token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize gateway.

        Args:
            project_id: Firebase project id.
            storage_bucket: Storage bucket name.
            collection: Firestore collection holding products.
            api_key: Web API key sent as the ``key`` query parameter.
            auth_token: Bearer token for authenticated writes.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.project_id = project_id
        self.storage_bucket = storage_bucket
        self.collection = collection
        self.api_key = api_key
        self.auth_token = auth_token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def documents_url(self) -> str:
        """Base URL of the project's documents."""
        return f"{FIRESTORE_URL}/projects/{self.project_id}/databases/(default)/documents"

    @property
    def bucket_url(self) -> str:
        """Base URL of the storage bucket's objects."""
        return f"{STORAGE_URL}/b/{self.storage_bucket}/o"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {}
            if self.auth_token:
                headers["Authorization"] = f"Bearer {self.auth_token}"
            params = {"key": self.api_key} if self.api_key else {}
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                params=params,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and raise StoreError on failure.

        Args:
            operation: Gateway operation name, for errors and logs.
            method: HTTP method.
            url: Request URL.
            **kwargs: Passed to ``httpx.AsyncClient.request``.

        Returns:
            Successful response.

        Raises:
            StoreError: On transport errors or non-2xx responses.
        """
        client = await self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Store request timed out", operation=operation, url=url)
            raise StoreError(operation, "Request timed out") from e
        except httpx.RequestError as e:
            logger.warning("Store request failed", operation=operation, url=url, error=str(e))
            raise StoreError(operation, f"Request failed: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                "Store returned error",
                operation=operation,
                status_code=response.status_code,
                error=message,
            )
            raise StoreError(operation, message, response.status_code)

        return response

    # ------------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------------

    async def list_products(self) -> list[Product]:
        """List every product, newest first.

        Returns:
            Products ordered by ``createdAt`` descending.

        Raises:
            StoreError: On API error.
        """
        query = {
            "structuredQuery": {
                "from": [{"collectionId": self.collection}],
                "orderBy": [
                    {"field": {"fieldPath": "createdAt"}, "direction": "DESCENDING"}
                ],
            }
        }
        response = await self._request(
            "list_products", "POST", f"{self.documents_url}:runQuery", json=query
        )

        products = []
        try:
            for entry in response.json():
                document = entry.get("document")
                if not document:
                    continue
                products.append(
                    Product.from_document(
                        document_id(document["name"]),
                        decode_fields(document.get("fields", {})),
                    )
                )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Malformed query response", error=str(e))
            raise StoreError("list_products", f"Malformed response: {e}") from e

        logger.debug("Fetched products", count=len(products))
        return products

    async def create_product(self, document: dict[str, Any]) -> str:
        """Create a product document.

        Args:
            document: Product fields.

        Returns:
            Store-assigned product id.

        Raises:
            StoreError: On API error.
        """
        response = await self._request(
            "create_product",
            "POST",
            f"{self.documents_url}/{self.collection}",
            json={"fields": encode_fields(document)},
        )
        try:
            product_id = document_id(response.json()["name"])
        except (ValueError, KeyError, TypeError) as e:
            raise StoreError("create_product", f"Malformed response: {e}") from e
        logger.info("Product created", product_id=product_id)
        return product_id

    async def update_product(self, product_id: str, document: dict[str, Any]) -> None:
        """Overwrite the given fields of an existing product.

        Fields not present in ``document`` are left untouched.

        Raises:
            StoreError: On API error, including a missing product (404).
        """
        params = [("updateMask.fieldPaths", field) for field in document]
        params.append(("currentDocument.exists", "true"))
        await self._request(
            "update_product",
            "PATCH",
            f"{self.documents_url}/{self.collection}/{product_id}",
            params=params,
            json={"fields": encode_fields(document)},
        )
        logger.info("Product updated", product_id=product_id)

    async def delete_product(self, product_id: str) -> None:
        """Delete a product document.

        Raises:
            StoreError: On API error, including a missing product (404).
        """
        await self._request(
            "delete_product",
            "DELETE",
            f"{self.documents_url}/{self.collection}/{product_id}",
            params={"currentDocument.exists": "true"},
        )
        logger.info("Product deleted", product_id=product_id)

    # ------------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------------

    async def upload_image(self, asset: ImageAsset) -> str:
        """Upload an image to the storage bucket.

        Args:
            asset: Image to upload.

        Returns:
            Tokenised download URL.

        Raises:
            StoreError: On API error.
        """
        name = image_object_name(asset.filename)
        response = await self._request(
            "upload_image",
            "POST",
            self.bucket_url,
            params={"name": name},
            content=asset.data,
            headers={"Content-Type": asset.content_type},
        )
        data = response.json()
        url = self.download_url(data.get("name", name), data.get("downloadTokens"))
        logger.info("Image uploaded", object_name=name, size=len(asset.data))
        return url

    async def delete_image(self, url: str) -> None:
        """Delete an image by its download URL.

        Raises:
            StoreError: If the URL is not an object in this bucket, or on API error.
        """
        name = self.object_name_from_url(url)
        if name is None:
            raise StoreError("delete_image", f"Not an object in bucket {self.storage_bucket}: {url}")
        await self._request(
            "delete_image",
            "DELETE",
            f"{self.bucket_url}/{quote(name, safe='')}",
        )
        logger.info("Image deleted", object_name=name)

    def download_url(self, name: str, token: str | None = None) -> str:
        """Build the public download URL of an object."""
        url = f"{self.bucket_url}/{quote(name, safe='')}?alt=media"
        if token:
            # Several tokens may be comma separated; any of them works
            url += f"&token={token.split(',')[0]}"
        return url

    def object_name_from_url(self, url: str) -> str | None:
        """Extract the object name from a download URL of this bucket.

        Returns:
            Object name, or None when the URL points elsewhere.
        """
        path = urlparse(url).path
        prefix = f"/v0/b/{self.storage_bucket}/o/"
        if not path.startswith(prefix) or len(path) == len(prefix):
            return None
        return unquote(path[len(prefix):])


def _error_message(response: httpx.Response) -> str:
    """Extract the error message from a Google API error response."""
    try:
        return str(response.json()["error"]["message"])
    except (ValueError, KeyError, TypeError):
        return response.text or f"HTTP {response.status_code}"
