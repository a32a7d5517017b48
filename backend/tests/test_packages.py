"""
Vitrine Backend: Pricing Package Tests
========================================
"""

import uuid

import pytest

from vitrine.catalog import DEFAULT_PACKAGES, default_package_rows, whatsapp_link


class TestCatalog:
    def test_default_rows_have_links_and_positions(self):
        rows = default_package_rows()

        assert [row["position"] for row in rows] == [0, 1, 2]
        assert rows[0]["cta_link"].startswith("https://wa.me/")
        assert "I%20am%20interested%20in%20the%20Basic%20Package" in rows[0]["cta_link"]

    def test_default_rows_do_not_share_feature_lists(self):
        rows = default_package_rows()
        rows[0]["features"].append("extra")
        assert "extra" not in DEFAULT_PACKAGES[0]["features"]

    def test_whatsapp_link_quotes_text(self):
        assert whatsapp_link("hi there", number="123") == "https://wa.me/123?text=hi%20there"


class TestPackageRoutes:
    @pytest.mark.asyncio
    async def test_seed_once(self, test_client):
        first = await test_client.post("/api/packages/seed")
        second = await test_client.post("/api/packages/seed")

        assert first.status_code == 201
        assert first.json()["message"] == "Packages seeded"
        assert second.status_code == 400
        assert second.json()["message"] == "Packages already seeded"

        listing = await test_client.get("/api/packages")
        assert len(listing.json()) == 3

    @pytest.mark.asyncio
    async def test_list_keeps_catalog_order(self, test_client):
        await test_client.post("/api/packages/seed")

        packages = (await test_client.get("/api/packages")).json()

        assert [p["name"] for p in packages] == [p["name"] for p in DEFAULT_PACKAGES]
        assert packages[2]["price"] == "Contact us"
        assert packages[0]["features"] == DEFAULT_PACKAGES[0]["features"]

    @pytest.mark.asyncio
    async def test_empty_catalog(self, test_client):
        response = await test_client.get("/api/packages")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, test_client, auth_headers):
        await test_client.post("/api/packages/seed")
        basic = (await test_client.get("/api/packages")).json()[0]

        response = await test_client.put(
            f"/api/packages/{basic['id']}",
            json={"price": "30,000"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["price"] == "30,000"
        assert updated["name"] == basic["name"]
        assert updated["features"] == basic["features"]
        assert updated["cta_link"] == basic["cta_link"]

        reread = (await test_client.get("/api/packages")).json()[0]
        assert reread["price"] == "30,000"

    @pytest.mark.asyncio
    async def test_update_features_replaces_list(self, test_client, auth_headers):
        await test_client.post("/api/packages/seed")
        basic = (await test_client.get("/api/packages")).json()[0]

        response = await test_client.put(
            f"/api/packages/{basic['id']}",
            json={"features": ["Landing page"]},
            headers=auth_headers,
        )

        assert response.json()["features"] == ["Landing page"]

    @pytest.mark.asyncio
    async def test_update_rejects_null_name(self, test_client, auth_headers):
        await test_client.post("/api/packages/seed")
        basic = (await test_client.get("/api/packages")).json()[0]

        response = await test_client.put(
            f"/api/packages/{basic['id']}", json={"name": None}, headers=auth_headers
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_unknown_package_is_404(self, test_client, auth_headers):
        response = await test_client.put(
            f"/api/packages/{uuid.uuid4()}", json={"price": "1"}, headers=auth_headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_requires_token(self, test_client):
        response = await test_client.put(f"/api/packages/{uuid.uuid4()}", json={"price": "1"})
        assert response.status_code == 401
