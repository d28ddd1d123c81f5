"""End-to-end routing tests against a running gateway."""

import time

import aiohttp
import pytest

from deepgate.gateway.router import CORS_HEADERS


def assert_cors(resp: aiohttp.ClientResponse) -> None:
    for name, value in CORS_HEADERS.items():
        assert resp.headers.get(name) == value, name


class TestRouter:
    """Routing table and CORS behaviour."""

    @pytest.fixture
    async def base_url(self, start_gateway):
        return await start_gateway()

    @pytest.mark.parametrize(
        "path",
        ["/v1/models", "/v1/chat/completions", "/", "/anything/else"],
    )
    async def test_options_preflight(self, base_url, path):
        """OPTIONS on any path is a 204 with no body and CORS headers."""
        async with (
            aiohttp.ClientSession() as session,
            session.options(f"{base_url}{path}") as resp,
        ):
            assert resp.status == 204
            assert await resp.read() == b""
            assert_cors(resp)

    async def test_list_models(self, base_url):
        """GET /v1/models returns the two-entry catalog."""
        async with (
            aiohttp.ClientSession() as session,
            session.get(f"{base_url}/v1/models") as resp,
        ):
            assert resp.status == 200
            assert resp.content_type == "application/json"
            assert_cors(resp)
            data = await resp.json()

        assert data["object"] == "list"
        assert [m["id"] for m in data["data"]] == ["deepseek-chat", "deepseek-reasoner"]
        for model in data["data"]:
            assert model["object"] == "model"
            assert model["owned_by"] == "system"
            assert abs(time.time() - model["created"]) < 60

    async def test_models_created_is_stable(self, base_url):
        """The catalog timestamp does not change between requests."""
        async with aiohttp.ClientSession() as session:
            async with session.get(f"{base_url}/v1/models") as resp:
                first = await resp.json()
            async with session.get(f"{base_url}/v1/models") as resp:
                second = await resp.json()

        assert first == second

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/"),
            ("GET", "/v1/chat/completions"),
            ("POST", "/v1/models"),
            ("DELETE", "/v1/models"),
            ("PUT", "/v1/chat/completions"),
            ("GET", "/v1/models/"),
            ("GET", "/health"),
            ("POST", "/v1/completions"),
        ],
    )
    async def test_unknown_routes_are_404(self, base_url, method, path):
        """Unknown paths and wrong methods on known paths are both 404."""
        async with (
            aiohttp.ClientSession() as session,
            session.request(method, f"{base_url}{path}") as resp,
        ):
            assert resp.status == 404
            assert await resp.text() == "Not Found"
            assert_cors(resp)

    async def test_chat_path_has_cors(self, base_url, chat_body):
        """Relayed upstream responses carry CORS headers too."""
        async with (
            aiohttp.ClientSession() as session,
            session.post(f"{base_url}/v1/chat/completions", json=chat_body) as resp,
        ):
            assert resp.status == 200
            assert_cors(resp)

    async def test_error_responses_have_cors(self, base_url):
        """Synthetic 500s carry CORS headers."""
        async with (
            aiohttp.ClientSession() as session,
            session.post(f"{base_url}/v1/chat/completions", data=b"{oops") as resp,
        ):
            assert resp.status == 500
            assert_cors(resp)
