"""
Admin Endpoint Tests

HTTP surface over the studio core: key handling (fail closed), catalog
browsing, variant preview and compliance checks.
"""

import pytest
from unittest.mock import patch

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import httpx
from fastapi.testclient import TestClient

from merchstudio.compliance import RULE_COUNT
from merchstudio.draft import BrandIdentity, SelectArchetype, SelectBrand, SetSelection, UpdateCopy
from merchstudio.draft.reducer import reduce_all, start_draft
from merchstudio.integrations.shopify_client import ShopifyClient
from merchstudio.server import app

ADMIN_KEY = "admin-test-key"
OWNER_KEY = "owner-test-key"
BASE = "/api/v1/admin/studio"

KEYS = {"ADMIN_API_KEY": ADMIN_KEY, "STUDIO_OWNER_API_KEY": OWNER_KEY}


@pytest.fixture
def client():
    with patch.dict(os.environ, KEYS):
        yield TestClient(app)


def admin_headers(key=ADMIN_KEY):
    return {"X-Admin-API-Key": key}


class TestAuth:

    def test_missing_key(self, client):
        response = client.get(f"{BASE}/archetypes")
        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid admin API key"

    def test_wrong_key(self, client):
        response = client.get(f"{BASE}/archetypes", headers=admin_headers("nope"))
        assert response.status_code == 403

    def test_not_configured_blocks_everything(self):
        with patch.dict(os.environ, {"ADMIN_API_KEY": "", "STUDIO_OWNER_API_KEY": ""}):
            response = TestClient(app).get(f"{BASE}/archetypes", headers=admin_headers())
        assert response.status_code == 403
        assert response.json()["detail"] == "Admin access not configured"

    def test_root_is_public(self, client):
        assert client.get("/").json()["service"] == "merchstudio"


class TestCatalogEndpoints:

    def test_health_probes_shop(self, client):
        shop = ShopifyClient(
            base_url="https://techno-dog.myshopify.com/admin/api/2025-01",
            access_token="shpat_test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"shop": {"name": "techno.dog"}})),
        )
        with patch("merchstudio.admin.get_shopify_client", return_value=shop):
            body = client.get(f"{BASE}/health", headers=admin_headers()).json()
        assert body["status"] == "healthy"
        assert body["compliance_rules"] == RULE_COUNT
        assert body["shopify"]["shop"] == "techno.dog"
        assert body["shopify"]["api_version"] == "2025-01"

    def test_health_degraded_without_shopify(self, client):
        with patch.dict(os.environ, {"SHOPIFY_ADMIN_BASE_URL": "", "SHOPIFY_ACCESS_TOKEN": ""}):
            shop = ShopifyClient()
        with patch("merchstudio.admin.get_shopify_client", return_value=shop):
            body = client.get(f"{BASE}/health", headers=admin_headers()).json()
        assert body["status"] == "degraded"
        assert body["shopify"]["configured"] is False

    def test_list_by_category(self, client):
        response = client.get(f"{BASE}/archetypes", params={"category": "drinkware"}, headers=admin_headers())
        assert response.status_code == 200
        assert {a["id"] for a in response.json()} == {"mug", "tumbler"}

    def test_archetype_detail_youth(self, client):
        response = client.get(f"{BASE}/archetypes/hoodie", params={"gender": "youth"}, headers=admin_headers())
        body = response.json()
        assert body["sizes"] == ["YS", "YM", "YL", "YXL"]
        assert [d["name"] for d in body["dimensions"]] == ["Size", "Color"]

    def test_unknown_archetype(self, client):
        response = client.get(f"{BASE}/archetypes/spaceship", headers=admin_headers())
        assert response.status_code == 404

    def test_guideline(self, client):
        body = client.get(f"{BASE}/guidelines/techno-doggies", headers=admin_headers()).json()
        assert body["has_mascots"] is True
        assert any(m["id"] == "dj-dog" for m in body["mascots"])

    def test_unknown_brand(self, client):
        response = client.get(f"{BASE}/guidelines/acme", headers=admin_headers())
        assert response.status_code == 422


class TestVariantPreview:

    def test_hoodie_matrix(self, client):
        response = client.post(f"{BASE}/variants/preview", headers=admin_headers(), json={
            "archetype_id": "hoodie",
            "selection": {"Size": ["S", "M"], "Color": ["Black", "White"]},
        })
        assert response.status_code == 200
        body = response.json()
        assert body["variant_count"] == 4
        assert body["price"] == "75.00"
        assert body["variants"][0]["title"] == "S / Black"
        assert [o["name"] for o in body["options"]] == ["Size", "Color"]

    def test_material_changes_price(self, client):
        response = client.post(f"{BASE}/variants/preview", headers=admin_headers(), json={
            "archetype_id": "hoodie",
            "material_id": "fleece-luxury",
            "selection": {"Size": ["M"]},
        })
        assert response.json()["price"] == "135.00"

    def test_unknown_archetype(self, client):
        response = client.post(f"{BASE}/variants/preview", headers=admin_headers(), json={"archetype_id": "spaceship"})
        assert response.status_code == 404

    def test_invalid_margin(self, client):
        response = client.post(f"{BASE}/variants/preview", headers=admin_headers(), json={
            "archetype_id": "t-shirt",
            "margin_pct": "100",
            "selection": {"Size": ["M"]},
        })
        assert response.status_code == 422

    def test_value_outside_dimension(self, client):
        response = client.post(f"{BASE}/variants/preview", headers=admin_headers(), json={
            "archetype_id": "t-shirt",
            "selection": {"Size": ["XXXXL"]},
        })
        assert response.status_code == 422


class TestComplianceEndpoint:

    @pytest.fixture
    def draft_json(self):
        draft = reduce_all(start_draft(), [
            SelectBrand(brand=BrandIdentity.TECHNO_DOG),
            SelectArchetype(archetype_id="t-shirt"),
            SetSelection(dimension="Size", values=["M"]),
            UpdateCopy(title="Acid Tee"),
        ])
        return draft.model_dump(mode="json")

    def test_clean_draft(self, client, draft_json):
        response = client.post(f"{BASE}/compliance/validate", headers=admin_headers(), json={"draft": draft_json})
        assert response.status_code == 200
        body = response.json()
        assert len(body["items"]) == RULE_COUNT
        assert body["fail_count"] == 0

    def test_owner_key_downgrades_custom_design(self, client, draft_json):
        draft_json["custom_design"] = True

        as_admin = client.post(f"{BASE}/compliance/validate", headers=admin_headers(), json={"draft": draft_json})
        as_owner = client.post(f"{BASE}/compliance/validate", headers=admin_headers(OWNER_KEY), json={"draft": draft_json})

        admin_items = {i["id"]: i for i in as_admin.json()["items"]}
        owner_items = {i["id"]: i for i in as_owner.json()["items"]}
        assert admin_items["custom-design"]["status"] == "fail"
        assert owner_items["custom-design"]["status"] == "warn"


# Run tests
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
