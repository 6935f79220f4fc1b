"""
Shopify Client Tests

Admin API client against httpx.MockTransport: status mapping, retry on
429 and timeouts, and the catalog service adapter used by the publish gate
(product create plus collection assignment).
"""

import asyncio
import json
import pytest
from unittest.mock import patch

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import httpx

from merchstudio.integrations.shopify_client import (
    ShopifyAuthError,
    ShopifyCatalogService,
    ShopifyClient,
    ShopifyError,
    ShopifyNotFoundError,
    ShopifyRateLimitError,
    ShopifyValidationError,
    numeric_collection_id,
)

BASE_URL = "https://techno-dog.myshopify.com/admin/api/2025-01"


def make_client(handler):
    return ShopifyClient(base_url=BASE_URL, access_token="shpat_test", transport=httpx.MockTransport(handler))


class TestConfiguration:

    def test_reads_environment(self):
        with patch.dict(os.environ, {"SHOPIFY_ADMIN_BASE_URL": BASE_URL + "/", "SHOPIFY_ACCESS_TOKEN": "tok"}):
            client = ShopifyClient()
        assert client.base_url == BASE_URL
        assert client.is_configured

    def test_unconfigured_request_raises(self):
        with patch.dict(os.environ, {"SHOPIFY_ADMIN_BASE_URL": "", "SHOPIFY_ACCESS_TOKEN": ""}):
            client = ShopifyClient()
        with pytest.raises(ShopifyError):
            asyncio.run(client.get_shop())

    def test_health_check_unconfigured(self):
        with patch.dict(os.environ, {"SHOPIFY_ADMIN_BASE_URL": "", "SHOPIFY_ACCESS_TOKEN": ""}):
            client = ShopifyClient()
        result = asyncio.run(client.health_check())
        assert result.ok is False
        assert result.configured is False


class TestCreateProduct:

    def test_posts_wrapped_product(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["token"] = request.headers["X-Shopify-Access-Token"]
            seen["body"] = request.content
            return httpx.Response(
                201,
                json={"product": {"id": 8123, "handle": "acid-tee"}},
                headers={"X-Shopify-Shop-Api-Call-Limit": "3/40"},
            )

        client = make_client(handler)
        body = asyncio.run(client.create_product({"title": "Acid Tee"}))

        assert seen["method"] == "POST"
        assert seen["url"] == BASE_URL + "/products.json"
        assert seen["token"] == "shpat_test"
        assert b'"product"' in seen["body"]
        assert body["product"]["id"] == 8123
        assert client.last_rate_limit.remaining == 37


class TestErrorMapping:

    @pytest.mark.parametrize("status,error_type", [
        (401, ShopifyAuthError),
        (403, ShopifyAuthError),
        (404, ShopifyNotFoundError),
        (422, ShopifyValidationError),
        (500, ShopifyError),
    ])
    def test_status_codes(self, status, error_type):
        client = make_client(lambda request: httpx.Response(status, json={"errors": "nope"}))
        with pytest.raises(error_type) as exc_info:
            asyncio.run(client.get_shop())
        assert exc_info.value.status_code == status

    def test_non_json_error_body(self):
        client = make_client(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))
        with pytest.raises(ShopifyError) as exc_info:
            asyncio.run(client.get_shop())
        assert exc_info.value.response_body == {"raw": "<html>Bad Gateway</html>"}


class TestRetry:

    def test_rate_limit_then_success(self):
        responses = [
            httpx.Response(429, json={"errors": "Throttled"}, headers={"Retry-After": "0"}),
            httpx.Response(200, json={"shop": {"name": "techno.dog"}}),
        ]
        calls = []

        def handler(request):
            calls.append(request)
            return responses[len(calls) - 1]

        body = asyncio.run(make_client(handler).get_shop())
        assert len(calls) == 2
        assert body["shop"]["name"] == "techno.dog"

    def test_rate_limit_exhausted(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(429, json={"errors": "Throttled"}, headers={"Retry-After": "0"})

        with pytest.raises(ShopifyRateLimitError):
            asyncio.run(make_client(handler).get_shop())
        assert len(calls) == ShopifyClient.MAX_RETRIES

    def test_timeout_retried_then_raised(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ReadTimeout("slow", request=request)

        with patch.object(ShopifyClient, "RETRY_BACKOFF", 0):
            with pytest.raises(ShopifyError) as exc_info:
                asyncio.run(make_client(handler).get_shop())

        assert "timeout" in str(exc_info.value).lower()
        assert len(calls) == ShopifyClient.MAX_RETRIES

    def test_connection_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ShopifyError):
            asyncio.run(make_client(handler).get_shop())
        assert len(calls) == 1


class TestHealthCheck:

    def test_ok(self):
        client = make_client(lambda request: httpx.Response(
            200, json={"shop": {"name": "techno.dog", "myshopify_domain": "techno-dog.myshopify.com"}},
        ))
        result = asyncio.run(client.health_check())
        assert result.ok is True
        assert result.shop == "techno.dog"
        assert result.api_version == "2025-01"

    def test_auth_error(self):
        client = make_client(lambda request: httpx.Response(401, json={"errors": "Invalid API key"}))
        result = asyncio.run(client.health_check())
        assert result.ok is False
        assert result.auth_error is True


class TestCatalogService:

    def test_success(self):
        client = make_client(lambda request: httpx.Response(201, json={"product": {"id": 77, "handle": "acid-tee"}}))
        result = asyncio.run(ShopifyCatalogService(client).create_product({"title": "Acid Tee"}))
        assert result.id == "77"
        assert result.handle == "acid-tee"
        assert result.error is None

    def test_shopify_error_becomes_result_error(self):
        client = make_client(lambda request: httpx.Response(422, json={"errors": {"title": ["can't be blank"]}}))
        result = asyncio.run(ShopifyCatalogService(client).create_product({"title": ""}))
        assert result.id is None
        assert "Validation error" in result.error

    def test_missing_id(self):
        client = make_client(lambda request: httpx.Response(201, json={"product": {"handle": "acid-tee"}}))
        result = asyncio.run(ShopifyCatalogService(client).create_product({"title": "Acid Tee"}))
        assert result.error == "Shopify response did not include a product id"


class TestCollections:

    def test_collection_ids_become_collects(self):
        requests = []

        def handler(request):
            requests.append(request)
            if request.url.path.endswith("/products.json"):
                return httpx.Response(201, json={"product": {"id": 77, "handle": "acid-tee"}})
            return httpx.Response(201, json={"collect": {"id": 1}})

        product = {"title": "Acid Tee", "collection_ids": ["gid://shopify/Collection/4101", "4102"]}
        result = asyncio.run(ShopifyCatalogService(make_client(handler)).create_product(product))

        assert result.id == "77"
        assert result.warnings == []
        assert [r.url.path.rsplit("/", 1)[-1] for r in requests] == ["products.json", "collects.json", "collects.json"]
        created = json.loads(requests[0].content)["product"]
        assert "collection_ids" not in created
        collects = [json.loads(r.content)["collect"] for r in requests[1:]]
        assert collects == [
            {"product_id": 77, "collection_id": 4101},
            {"product_id": 77, "collection_id": 4102},
        ]
        # Caller's payload is left as it was
        assert product["collection_ids"] == ["gid://shopify/Collection/4101", "4102"]

    def test_failed_collect_is_a_warning(self):
        def handler(request):
            if request.url.path.endswith("/products.json"):
                return httpx.Response(201, json={"product": {"id": 77}})
            return httpx.Response(404, json={"errors": "Not Found"})

        product = {"title": "Acid Tee", "collection_ids": ["999", "summer-drop"]}
        result = asyncio.run(ShopifyCatalogService(make_client(handler)).create_product(product))

        assert result.id == "77"
        assert result.error is None
        assert len(result.warnings) == 2
        assert "Resource not found" in result.warnings[0]
        assert "summer-drop" in result.warnings[1]

    def test_no_collections_no_collects(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(201, json={"product": {"id": 77}})

        asyncio.run(ShopifyCatalogService(make_client(handler)).create_product({"title": "Acid Tee"}))
        assert len(requests) == 1

    @pytest.mark.parametrize("raw,expected", [
        ("gid://shopify/Collection/4101", 4101),
        ("4102", 4102),
        ("summer-drop", None),
        ("", None),
    ])
    def test_numeric_collection_id(self, raw, expected):
        assert numeric_collection_id(raw) == expected


# Run tests
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
