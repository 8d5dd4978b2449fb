"""
Unit tests for services.image_generation module.
Tests the Ark text-to-image adapter (request construction, response parsing, errors).
"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from app.services.image_generation import ArkImageService


def make_service(api_key="test-key"):
    with patch("app.services.image_generation.settings") as mock_settings:
        mock_settings.volc_api_key = api_key
        mock_settings.ark_api_url = "https://ark.example.com/api/v3/images/generations"
        mock_settings.ark_image_model = "doubao-seedream-4.5"
        mock_settings.ark_default_size = "2048x2048"
        return ArkImageService()


def mock_client_returning(mock_client_class, response, method="post"):
    mock_client = AsyncMock()
    setattr(mock_client.__aenter__.return_value, method, AsyncMock(return_value=response))
    mock_client_class.return_value = mock_client
    return getattr(mock_client.__aenter__.return_value, method)


class TestArkImageService:
    """Tests for the Ark image adapter."""

    def test_is_available(self):
        assert make_service("k").is_available() is True
        assert make_service(None).is_available() is False
        assert make_service("").is_available() is False

    @pytest.mark.asyncio
    async def test_text_to_image_sends_request(self):
        response = MagicMock()
        response.json.return_value = {"data": [{"url": "https://img/1.jpg"}, {"url": "https://img/2.jpg"}]}
        response.raise_for_status = MagicMock()

        service = make_service()
        with patch("httpx.AsyncClient") as mock_client_class:
            post = mock_client_returning(mock_client_class, response)
            urls = await service.text_to_image("a red fox", size="1024x1024")

        assert urls == ["https://img/1.jpg", "https://img/2.jpg"]
        args, kwargs = post.call_args
        assert args[0] == "https://ark.example.com/api/v3/images/generations"
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert kwargs["json"] == {
            "model": "doubao-seedream-4.5",
            "prompt": "a red fox",
            "size": "1024x1024",
            "response_format": "url",
            "watermark": False,
        }

    @pytest.mark.asyncio
    async def test_text_to_image_defaults(self):
        response = MagicMock()
        response.json.return_value = {"data": [{"url": "https://img/1.jpg"}]}

        service = make_service()
        with patch("httpx.AsyncClient") as mock_client_class:
            post = mock_client_returning(mock_client_class, response)
            await service.text_to_image("fox", model="other-model")

        payload = post.call_args.kwargs["json"]
        assert payload["size"] == "2048x2048"
        assert payload["model"] == "other-model"

    @pytest.mark.asyncio
    async def test_text_to_image_without_images_raises(self):
        response = MagicMock()
        response.json.return_value = {"data": [], "error": {"message": "prompt rejected"}}

        service = make_service()
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client_returning(mock_client_class, response)
            with pytest.raises(RuntimeError, match="prompt rejected"):
                await service.text_to_image("fox")

    @pytest.mark.asyncio
    async def test_text_to_image_without_key_raises(self):
        service = make_service(None)
        with patch("httpx.AsyncClient") as mock_client_class:
            with pytest.raises(RuntimeError):
                await service.text_to_image("fox")
            mock_client_class.assert_not_called()

    @pytest.mark.asyncio
    async def test_text_to_image_propagates_http_errors(self):
        service = make_service()
        with patch("httpx.AsyncClient") as mock_client_class:
            mock_client = AsyncMock()
            mock_client.__aenter__.return_value.post = AsyncMock(side_effect=Exception("API Error"))
            mock_client_class.return_value = mock_client
            with pytest.raises(Exception, match="API Error"):
                await service.text_to_image("fox")

    @pytest.mark.asyncio
    async def test_download_image_writes_file(self, tmp_path):
        response = MagicMock()
        response.content = b"jpeg-bytes"

        service = make_service()
        target = tmp_path / "nested" / "ai_1.jpg"
        with patch("httpx.AsyncClient") as mock_client_class:
            get = mock_client_returning(mock_client_class, response, method="get")
            path = await service.download_image("https://img/1.jpg", target)

        get.assert_awaited_once_with("https://img/1.jpg")
        assert path == target
        assert target.read_bytes() == b"jpeg-bytes"
