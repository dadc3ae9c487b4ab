"""Tests for the CORS origin policy and preflight handling."""

import json
from types import SimpleNamespace

import pytest
from sanic.response import json as json_response

from storefront.middleware.cors_middleware import CorsConfigurationError, CorsMiddleware
from storefront.support import Config


def fake_request(method="GET", path="/api/products", **headers):
    return SimpleNamespace(
        method=method,
        path=path,
        headers={k.lower().replace("_", "-"): v for k, v in headers.items()},
        ctx=SimpleNamespace(),
        cookies={},
    )


@pytest.fixture
def production_cors():
    return CorsMiddleware(
        allowed_origins=["https://shop.example.com", "https://*.replit.dev"],
        reflect_origin=False,
    )


class TestOriginPolicy:

    @pytest.mark.asyncio
    async def test_development_reflects_any_origin(self):
        cors = CorsMiddleware(reflect_origin=True)
        request = fake_request(origin="http://localhost:5173")

        assert await cors.before_request(request) is None
        response = await cors.after_response(request, json_response({}))

        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
        assert response.headers["Access-Control-Allow-Credentials"] == "true"
        assert response.headers["Vary"] == "Origin"

    @pytest.mark.asyncio
    async def test_production_allows_listed_origin(self, production_cors):
        request = fake_request(origin="https://shop.example.com")

        assert await production_cors.before_request(request) is None
        response = await production_cors.after_response(request, json_response({}))

        assert response.headers["Access-Control-Allow-Origin"] == "https://shop.example.com"

    @pytest.mark.asyncio
    async def test_production_allows_wildcard_subdomain(self, production_cors):
        request = fake_request(origin="https://abc-123.replit.dev")
        assert await production_cors.before_request(request) is None

    @pytest.mark.asyncio
    async def test_production_rejects_unknown_origin(self, production_cors):
        request = fake_request(origin="https://evil.example.org")

        response = await production_cors.before_request(request)

        assert response.status == 403
        body = json.loads(response.body)
        assert body["code"] == "CORS_ORIGIN_NOT_ALLOWED"
        assert body["message"] == "Not allowed by CORS"

    @pytest.mark.asyncio
    async def test_request_without_origin_passes(self, production_cors):
        request = fake_request()

        assert await production_cors.before_request(request) is None
        response = await production_cors.after_response(request, json_response({}))

        assert "Access-Control-Allow-Origin" not in response.headers

    def test_wildcard_with_credentials_is_rejected(self):
        with pytest.raises(CorsConfigurationError):
            CorsMiddleware(allowed_origins=["*"], allow_credentials=True)

    def test_wildcard_allowed_when_reflecting(self):
        cors = CorsMiddleware(allowed_origins=["*"], allow_credentials=True, reflect_origin=True)
        assert cors.is_origin_allowed("https://anything.example")

    def test_trailing_slash_in_config_is_ignored(self):
        cors = CorsMiddleware(allowed_origins=["https://shop.example.com/"])
        assert cors.is_origin_allowed("https://shop.example.com")


class TestPreflight:

    @pytest.mark.asyncio
    async def test_preflight_short_circuits_with_200(self, production_cors):
        request = fake_request(
            method="OPTIONS",
            origin="https://shop.example.com",
            access_control_request_method="POST",
        )

        response = await production_cors.before_request(request)

        assert response.status == 200
        assert "POST" in response.headers["Access-Control-Allow-Methods"]
        assert "content-type" in response.headers["Access-Control-Allow-Headers"]
        assert response.headers["Access-Control-Max-Age"] == "86400"

    @pytest.mark.asyncio
    async def test_plain_options_is_not_a_preflight(self, production_cors):
        request = fake_request(method="OPTIONS", origin="https://shop.example.com")
        assert await production_cors.before_request(request) is None


class TestRegistration:

    def test_production_uses_allow_list(self):
        Config.set("app.APP_ENV", "production")
        Config.set("security.ALLOWED_ORIGINS", ["https://shop.example.com"])

        cors = CorsMiddleware._register_middleware()

        assert not cors.reflect_origin
        assert cors.is_origin_allowed("https://shop.example.com")
        assert not cors.is_origin_allowed("https://other.example.com")
        assert cors.max_age == 86400

    def test_development_reflects(self):
        cors = CorsMiddleware._register_middleware()
        assert cors.reflect_origin

    def test_disabled_by_config(self):
        Config.set("security.CORS_ENABLED", False)
        assert CorsMiddleware._register_middleware() is None
