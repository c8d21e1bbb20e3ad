"""
Straico Python SDK - Async Client Tests
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from straico import AsyncStraico
from straico.errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    TransportError,
    ValidationError,
)

from conftest import json_response, text_response


def mock_http(client: AsyncStraico, **kwargs) -> AsyncMock:
    """Replace the client's httpx.AsyncClient with a mock."""
    http = MagicMock()
    http.is_closed = False
    http.request = AsyncMock(**kwargs)
    client._client = http
    return http.request


class TestAsyncClientCreation:
    """Tests for async client construction."""

    def test_without_key_raises(self):
        with pytest.raises(ConfigurationError):
            AsyncStraico()

    def test_http_client_is_created_lazily(self, async_client):
        assert async_client._client is None

    @pytest.mark.asyncio
    async def test_get_client_sets_headers(self, async_client):
        http = await async_client._get_client()
        try:
            assert http.headers["Authorization"] == "Bearer test_key"
            assert http.headers["Accept"] == "application/json"
            assert http.headers["User-Agent"].startswith("straico-python-async/")
        finally:
            await async_client.close()

    @pytest.mark.asyncio
    async def test_closed_client_is_recreated(self, async_client):
        first = await async_client._get_client()
        await async_client.close()
        second = await async_client._get_client()

        assert first is not second
        await async_client.close()

    @pytest.mark.asyncio
    async def test_async_context_manager(self):
        async with AsyncStraico(api_key="test") as client:
            http = await client._get_client()
        assert http.is_closed


class TestAsyncOperations:
    """Tests for async endpoint operations."""

    @pytest.mark.asyncio
    async def test_list_models_unwraps_data(self, async_client):
        request = mock_http(
            async_client,
            return_value=json_response({"success": True, "data": {"chat": []}}),
        )

        assert await async_client.list_models() == {"chat": []}
        assert request.call_args[0] == ("GET", "models")

    @pytest.mark.asyncio
    async def test_prompt_completion_payload(self, async_client):
        request = mock_http(async_client, return_value=json_response({"price": 1}))

        result = await async_client.create_prompt_completion(
            models=["openai/gpt-4o-mini"], message="Hello"
        )

        assert result == {"price": 1}
        args, kwargs = request.call_args
        assert args == ("POST", "prompt/completion")
        assert kwargs["json"] == {"models": ["openai/gpt-4o-mini"], "message": "Hello"}

    @pytest.mark.asyncio
    async def test_prompt_completion_validation(self, async_client):
        request = mock_http(async_client)

        with pytest.raises(ValidationError):
            await async_client.create_prompt_completion(models=[], message="Hello")

        request.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_file(self, async_client, upload_path):
        request = mock_http(
            async_client,
            return_value=json_response({"success": True, "data": {"url": "u"}}),
        )

        assert await async_client.upload_file(upload_path) == {"url": "u"}
        args, kwargs = request.call_args
        assert args == ("POST", "https://api.straico.test/v0/file/upload")
        filename, fh = kwargs["files"]["file"]
        assert filename == "notes.txt"
        assert fh.closed

    @pytest.mark.asyncio
    async def test_upload_missing_file(self, async_client, tmp_path):
        request = mock_http(async_client)

        with pytest.raises(ValidationError):
            await async_client.upload_file(tmp_path / "missing.txt")

        request.assert_not_called()

    @pytest.mark.asyncio
    async def test_image_generation(self, async_client):
        request = mock_http(
            async_client,
            return_value=json_response({"success": False, "message": "bad request"}),
        )

        with pytest.raises(ApiError, match="bad request"):
            await async_client.create_image_generation(
                model="openai/dall-e-3", description="A cat"
            )

        assert request.call_args[0] == (
            "POST", "https://api.straico.test/v0/image/generation"
        )

    @pytest.mark.asyncio
    async def test_decode_error(self, async_client):
        mock_http(async_client, return_value=text_response("not json"))

        with pytest.raises(DecodeError) as exc_info:
            await async_client.list_models()

        assert exc_info.value.body_excerpt == "not json"

    @pytest.mark.asyncio
    async def test_timeout(self, async_client):
        mock_http(async_client, side_effect=httpx.ConnectTimeout("timed out"))

        with pytest.raises(TransportError) as exc_info:
            await async_client.list_models()

        assert exc_info.value.timed_out is True
