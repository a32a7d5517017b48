"""
Vitrine Backend: Page Resolver Tests
======================================

The catch-all route: admin page, clean URLs, static assets, 404s.
"""

import pytest

from vitrine.exceptions import NotFoundError
from vitrine.routes.pages import (
    AdminPageMatcher,
    CleanUrlMatcher,
    PageResolver,
    StaticAssetMatcher,
    safe_join,
)


@pytest.fixture
def roots(tmp_path):
    site = tmp_path / "site"
    public = tmp_path / "public"
    (public / "uploads").mkdir(parents=True)
    site.mkdir()
    (site / "index.html").write_text("index")
    (site / "admin.html").write_text("admin")
    (site / "services.html").write_text("services")
    (site / "app.js").write_text("js")
    (public / "uploads" / "a.png").write_bytes(b"png")
    (tmp_path / "secret.txt").write_text("secret")
    return site.resolve(), public.resolve()


@pytest.fixture
def resolver(roots):
    site, public = roots
    return PageResolver(
        [
            AdminPageMatcher(site, "/admin", "admin.html"),
            CleanUrlMatcher(site, "index.html"),
            StaticAssetMatcher([public, site]),
        ]
    )


class TestPageResolver:
    def test_admin_path(self, resolver, roots):
        assert resolver.resolve("/admin") == roots[0] / "admin.html"

    def test_clean_url_to_html_page(self, resolver, roots):
        assert resolver.resolve("/services") == roots[0] / "services.html"
        assert resolver.resolve("/services/") == roots[0] / "services.html"

    def test_clean_url_falls_back_to_index(self, resolver, roots):
        assert resolver.resolve("/") == roots[0] / "index.html"
        assert resolver.resolve("/no-such-page") == roots[0] / "index.html"

    def test_asset_from_public_root_first(self, resolver, roots):
        assert resolver.resolve("/uploads/a.png") == roots[1] / "uploads" / "a.png"

    def test_asset_from_site_root(self, resolver, roots):
        assert resolver.resolve("/app.js") == roots[0] / "app.js"

    def test_missing_asset_is_not_found(self, resolver):
        with pytest.raises(NotFoundError, match="File not found"):
            resolver.resolve("/missing.css")

    def test_traversal_is_not_found(self, resolver):
        with pytest.raises(NotFoundError):
            resolver.resolve("/../secret.txt")

    def test_safe_join_rejects_empty_path(self, roots):
        assert safe_join(roots[0], "/") is None

    def test_safe_join_rejects_nul_byte(self, roots):
        assert safe_join(roots[0], "/foo\x00bar.html") is None

    def test_clean_url_with_nul_byte_serves_index(self, resolver, roots):
        assert resolver.resolve("/foo\x00bar") == roots[0] / "index.html"


class TestPageRoutes:
    @pytest.mark.asyncio
    async def test_home_page(self, test_client, site_files):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert "home" in response.text

    @pytest.mark.asyncio
    async def test_clean_url(self, test_client, site_files):
        response = await test_client.get("/about")
        assert response.status_code == 200
        assert "about us" in response.text

    @pytest.mark.asyncio
    async def test_unknown_page_serves_index(self, test_client, site_files):
        response = await test_client.get("/pricing")
        assert response.status_code == 200
        assert "home" in response.text

    @pytest.mark.asyncio
    async def test_admin_page(self, test_client, site_files):
        response = await test_client.get("/admin")
        assert response.status_code == 200
        assert "admin dashboard" in response.text

    @pytest.mark.asyncio
    async def test_stylesheet(self, test_client, site_files):
        response = await test_client.get("/style.css")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")

    @pytest.mark.asyncio
    async def test_missing_asset_is_404(self, test_client, site_files):
        response = await test_client.get("/missing.js")
        assert response.status_code == 404
        assert response.json()["message"] == "File not found"

    @pytest.mark.asyncio
    async def test_api_routes_take_precedence(self, test_client, site_files):
        response = await test_client.get("/api/packages")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_encoded_nul_byte_serves_index(self, test_client, site_files):
        response = await test_client.get("/foo%00bar")
        assert response.status_code == 200
        assert "home" in response.text

    @pytest.mark.asyncio
    async def test_wrong_method_uses_error_envelope(self, test_client, site_files):
        response = await test_client.post("/about")

        assert response.status_code == 405
        body = response.json()
        assert body["error"] == "method_not_allowed"
        assert body["message"] == "Method Not Allowed"
        assert "request_id" in body
        assert "detail" not in body
