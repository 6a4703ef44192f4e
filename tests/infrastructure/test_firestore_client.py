"""Tests for the Firestore gateway against a mocked transport."""

import json
from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest

from catalogue.catalog.models import ImageAsset
from catalogue.infrastructure.firestore_client import FirestoreProductGateway
from catalogue.infrastructure.gateway import StoreError

DOCUMENTS = "/v1/projects/demo/databases/(default)/documents"


def make_gateway(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> FirestoreProductGateway:
    return FirestoreProductGateway(
        project_id="demo",
        storage_bucket="demo.appspot.com",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def stored_document(product_id: str, name: str, created_at: str) -> dict:
    return {
        "document": {
            "name": f"projects/demo/databases/(default)/documents/products/{product_id}",
            "fields": {
                "name": {"stringValue": name},
                "category": {"stringValue": "windows"},
                "rating": {"doubleValue": 4.5},
                "reviews": {"integerValue": "9"},
                "createdAt": {"timestampValue": created_at},
            },
        }
    }


class TestListProducts:
    """Tests for list_products."""

    @pytest.mark.asyncio
    async def test_runs_ordered_query(self) -> None:
        """Listing runs a createdAt-descending query and decodes documents."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[
                    stored_document("b2", "New Window", "2024-02-01T00:00:00Z"),
                    stored_document("a1", "Old Window", "2024-01-01T00:00:00Z"),
                    {"readTime": "2024-03-01T00:00:00Z"},
                ],
            )

        gateway = make_gateway(handler)
        products = await gateway.list_products()
        await gateway.close()

        assert [p.id for p in products] == ["b2", "a1"]
        assert products[0].reviews == 9
        assert products[0].created_at == datetime(2024, 2, 1, tzinfo=timezone.utc)

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == f"{DOCUMENTS}:runQuery"
        body = json.loads(request.content)
        assert body["structuredQuery"]["from"] == [{"collectionId": "products"}]
        assert body["structuredQuery"]["orderBy"][0]["direction"] == "DESCENDING"

    @pytest.mark.asyncio
    async def test_credentials_are_sent(self) -> None:
        """API key and bearer token are attached to every request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        gateway = make_gateway(handler, api_key="k1", auth_token="t1")
        await gateway.list_products()
        await gateway.close()

        assert seen[0].url.params["key"] == "k1"
        assert seen[0].headers["Authorization"] == "Bearer t1"

    @pytest.mark.asyncio
    async def test_error_response(self) -> None:
        """Error bodies become StoreError messages."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"message": "Missing permissions"}})

        gateway = make_gateway(handler)
        with pytest.raises(StoreError) as exc_info:
            await gateway.list_products()
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Missing permissions"
        assert exc_info.value.operation == "list_products"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Transport timeouts become StoreError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        gateway = make_gateway(handler)
        with pytest.raises(StoreError) as exc_info:
            await gateway.list_products()
        assert exc_info.value.message == "Request timed out"
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        """Connection failures become StoreError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        gateway = make_gateway(handler)
        with pytest.raises(StoreError) as exc_info:
            await gateway.list_products()
        assert exc_info.value.message.startswith("Request failed")


class TestMalformedResponses:
    """Tests for successful responses with unusable bodies."""

    @pytest.mark.asyncio
    async def test_non_json_query_body(self) -> None:
        """A body that is not JSON is a store failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>maintenance</html>")

        gateway = make_gateway(handler)
        with pytest.raises(StoreError) as exc_info:
            await gateway.list_products()
        assert exc_info.value.operation == "list_products"
        assert exc_info.value.message.startswith("Malformed response")

    @pytest.mark.asyncio
    async def test_document_without_name(self) -> None:
        """Documents missing their resource name are a store failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"document": {"fields": {}}}])

        gateway = make_gateway(handler)
        with pytest.raises(StoreError):
            await gateway.list_products()

    @pytest.mark.asyncio
    async def test_create_without_name(self) -> None:
        """A create response without the new document name is a store failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        gateway = make_gateway(handler)
        with pytest.raises(StoreError) as exc_info:
            await gateway.create_product({"name": "Door"})
        assert exc_info.value.operation == "create_product"


class TestWrites:
    """Tests for document writes."""

    @pytest.mark.asyncio
    async def test_create_product(self) -> None:
        """Creation posts encoded fields and returns the new id."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"name": "projects/demo/databases/(default)/documents/products/newid"},
            )

        gateway = make_gateway(handler)
        product_id = await gateway.create_product({"name": "Door", "reviews": 0})

        assert product_id == "newid"
        assert seen[0].url.path == f"{DOCUMENTS}/products"
        assert json.loads(seen[0].content) == {
            "fields": {"name": {"stringValue": "Door"}, "reviews": {"integerValue": "0"}}
        }

    @pytest.mark.asyncio
    async def test_update_product_uses_field_mask(self) -> None:
        """Updates patch only the given fields of an existing document."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        gateway = make_gateway(handler)
        await gateway.update_product("abc", {"name": "Door", "rating": 4.0})

        request = seen[0]
        assert request.method == "PATCH"
        assert request.url.path == f"{DOCUMENTS}/products/abc"
        assert request.url.params.get_list("updateMask.fieldPaths") == ["name", "rating"]
        assert request.url.params["currentDocument.exists"] == "true"

    @pytest.mark.asyncio
    async def test_update_missing_product(self) -> None:
        """A missing document surfaces as a 404 StoreError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": {"message": "No document to update"}})

        gateway = make_gateway(handler)
        with pytest.raises(StoreError) as exc_info:
            await gateway.update_product("abc", {"name": "Door"})
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_product(self) -> None:
        """Deletion requires the document to exist."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        gateway = make_gateway(handler)
        await gateway.delete_product("abc")
        assert seen[0].method == "DELETE"
        assert seen[0].url.params["currentDocument.exists"] == "true"


class TestImages:
    """Tests for image storage."""

    @pytest.mark.asyncio
    async def test_upload_image(self) -> None:
        """Uploads post the bytes and return a tokenised download URL."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"name": request.url.params["name"], "downloadTokens": "tok1,tok2"},
            )

        gateway = make_gateway(handler)
        url = await gateway.upload_image(ImageAsset("door.jpg", "image/jpeg", b"jpeg-bytes"))

        request = seen[0]
        assert request.url.path == "/v0/b/demo.appspot.com/o"
        assert request.url.params["name"].startswith("products/")
        assert request.headers["Content-Type"] == "image/jpeg"
        assert request.content == b"jpeg-bytes"
        assert url.endswith("?alt=media&token=tok1")
        assert gateway.object_name_from_url(url) == request.url.params["name"]

    @pytest.mark.asyncio
    async def test_delete_image(self) -> None:
        """Images are deleted by their object name."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        gateway = make_gateway(handler)
        await gateway.delete_image(gateway.download_url("products/1_door.jpg", "tok"))
        assert seen[0].method == "DELETE"
        assert seen[0].url.path == "/v0/b/demo.appspot.com/o/products/1_door.jpg"

    @pytest.mark.asyncio
    async def test_delete_foreign_image(self) -> None:
        """URLs outside the bucket are rejected without a request."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        gateway = make_gateway(handler)
        with pytest.raises(StoreError):
            await gateway.delete_image("https://picsum.photos/seed/1/400/300")

    def test_object_name_from_url(self) -> None:
        """Only download URLs of this bucket yield object names."""
        gateway = make_gateway(lambda request: httpx.Response(200))
        url = "https://firebasestorage.googleapis.com/v0/b/demo.appspot.com/o/products%2F1_a.jpg?alt=media"
        assert gateway.object_name_from_url(url) == "products/1_a.jpg"
        other = "https://firebasestorage.googleapis.com/v0/b/other.appspot.com/o/products%2F1_a.jpg"
        assert gateway.object_name_from_url(other) is None
