"""Tests for SteamClient construction and the request gateway."""

import asyncio
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from steam_mini.client.steam_client import (
    BASE_URL,
    ENDPOINTS,
    GENERIC_FAILURE_MESSAGE,
    MISSING_KEY_MESSAGE,
    STATUS_MESSAGES,
    SteamClient,
)
from steam_mini.config import Settings
from steam_mini.errors import DecodeError, SteamAPIError, TransportError


@pytest.fixture
def client():
    """Create a SteamClient with a dummy key."""
    return SteamClient("test_key")


def query_of(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


class KeepAliveHandler(BaseHTTPRequestHandler):
    """Serves one player summary over persistent HTTP/1.1 connections."""

    protocol_version = "HTTP/1.1"

    def do_GET(self):
        body = json.dumps(
            {"response": {"players": [{"steamid": "76561198000000001"}]}}
        ).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def keep_alive_server():
    """Run a local keep-alive server and yield its base URL."""
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), KeepAliveHandler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    host, port = httpd.server_address[:2]
    yield f"http://{host}:{port}"
    httpd.shutdown()
    httpd.server_close()


class TestSteamClientInit:
    """Tests for client construction."""

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_missing_key_raises(self, api_key):
        with pytest.raises(ValueError) as exc_info:
            SteamClient(api_key)
        assert str(exc_info.value) == MISSING_KEY_MESSAGE

    def test_missing_key_ignores_environment(self):
        with patch.dict("os.environ", {"STEAM_API_KEY": "env_key"}):
            with pytest.raises(ValueError):
                SteamClient(None)

    def test_stores_key_and_base_url(self, client):
        assert client.api_key == "test_key"
        assert client.base_url == BASE_URL

    def test_configuration_is_read_only(self, client):
        with pytest.raises(AttributeError):
            client.api_key = "other"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            client.base_url = "http://example.com"  # type: ignore[misc]

    def test_trailing_slash_stripped_from_base_url(self):
        client = SteamClient("k", base_url="http://localhost:8080/")
        assert client.base_url == "http://localhost:8080"

    def test_from_settings(self):
        settings = Settings(api_key="abc", base_url="http://localhost:9000", timeout=5.0)
        client = SteamClient.from_settings(settings)

        assert client.api_key == "abc"
        assert client.base_url == "http://localhost:9000"
        assert client.timeout == 5.0

    def test_from_settings_without_key(self):
        with pytest.raises(ValueError):
            SteamClient.from_settings(Settings())


class TestLookupTables:
    def test_status_messages(self):
        assert STATUS_MESSAGES[403] == "Invalid API Key"
        assert STATUS_MESSAGES[404] == "Invalid Steam ID"
        assert STATUS_MESSAGES[500] == "Internal Server Error"

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            STATUS_MESSAGES[401] = "Unauthorized"  # type: ignore[index]
        with pytest.raises(TypeError):
            ENDPOINTS["other"] = "/x"  # type: ignore[index]


class TestBuildUrl:
    """Tests for URL construction."""

    def test_injects_key_and_format(self, client):
        url = client._build_url(ENDPOINTS["get_user"], {"steamids": "76561198000000001"})

        assert url.startswith(
            "https://api.steampowered.com/ISteamUser/GetPlayerSummaries/v0002/?"
        )
        assert query_of(url) == {
            "key": ["test_key"],
            "steamids": ["76561198000000001"],
            "format": ["json"],
        }

    def test_base_override(self, client):
        url = client._build_url("/ISteamApps/GetAppList/v2/", None, base="http://localhost/")
        assert url.startswith("http://localhost/ISteamApps/GetAppList/v2/?")

    def test_params_are_urlencoded(self, client):
        url = client._build_url("/x/", {"q": "a b&c"})
        assert query_of(url)["q"] == ["a b&c"]

    def test_rejects_explicit_key(self, client):
        with pytest.raises(ValueError):
            client._build_url("/x/", {"key": "other"})

    def test_does_not_mutate_params(self, client):
        params = {"steamid": "76561198000000001"}
        client._build_url("/x/", params)
        assert params == {"steamid": "76561198000000001"}


class TestRequest:
    """Tests for response classification and parsing."""

    @pytest.mark.asyncio
    async def test_returns_parsed_json(self, client):
        response = httpx.Response(200, json={"response": {"players": []}})

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response
            result = await client.request("/ISteamUser/GetPlayerSummaries/v0002/")

        assert result == {"response": {"players": []}}
        assert mock_get.call_count == 1

    @pytest.mark.asyncio
    async def test_returns_text_for_non_json(self, client):
        response = httpx.Response(200, text="plain body")

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response
            result = await client.request("/x/")

        assert result == "plain body"

    @pytest.mark.asyncio
    async def test_requests_built_url(self, client):
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = httpx.Response(200, json={})
            await client.request("/x/", {"count": "3"})

        url = mock_get.call_args.args[0]
        assert query_of(url)["count"] == ["3"]
        assert query_of(url)["key"] == ["test_key"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [403, 404, 500])
    async def test_known_status_codes(self, client, status):
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = httpx.Response(status, json={})
            with pytest.raises(TransportError) as exc_info:
                await client.request("/x/")

        assert str(exc_info.value) == STATUS_MESSAGES[status]
        assert exc_info.value.status_code == status
        assert exc_info.value.kind == "transport"

    @pytest.mark.asyncio
    async def test_forbidden_means_invalid_key(self, client):
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = httpx.Response(403, text="Forbidden")
            with pytest.raises(SteamAPIError, match="Invalid API Key"):
                await client.request("/x/")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [201, 204, 301, 400, 401, 429, 502, 503])
    async def test_other_non_200_statuses(self, client, status):
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = httpx.Response(status, text="")
            with pytest.raises(TransportError) as exc_info:
                await client.request("/x/")

        assert str(exc_info.value) == GENERIC_FAILURE_MESSAGE
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_invalid_json_raises_decode_error(self, client):
        response = httpx.Response(
            200,
            content=b"{not json",
            headers={"content-type": "application/json; charset=utf-8"},
        )

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = response
            with pytest.raises(DecodeError) as exc_info:
                await client.request("/x/")

        assert exc_info.value.kind == "decode"

    @pytest.mark.asyncio
    async def test_transport_failure(self, client):
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = httpx.ConnectError("connection refused")
            with pytest.raises(TransportError) as exc_info:
                await client.request("/x/")

        assert "connection refused" in str(exc_info.value)
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_transport_failure(self, client):
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = httpx.ReadTimeout("timed out")
            with pytest.raises(TransportError):
                await client.request("/x/")

        # No retries
        assert mock_get.call_count == 1


class TestClientReuse:
    """A single client must serve calls made from separate event loops."""

    def test_calls_from_separate_event_loops(self, keep_alive_server):
        client = SteamClient("test_key", base_url=keep_alive_server, timeout=5.0)

        first = asyncio.run(client.get_user("76561198000000001"))
        second = asyncio.run(client.get_user("76561198000000001"))

        assert first == second == {"steamid": "76561198000000001"}

    @pytest.mark.asyncio
    async def test_sequential_calls_in_one_loop(self, keep_alive_server):
        client = SteamClient("test_key", base_url=keep_alive_server, timeout=5.0)

        for _ in range(3):
            result = await client.request(ENDPOINTS["get_user"], {"steamids": "1"})
            assert result["response"]["players"][0]["steamid"] == "76561198000000001"
