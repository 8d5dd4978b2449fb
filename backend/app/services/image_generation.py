"""
Text-to-Image Service

Calls the Volcengine Ark image generation API (doubao-seedream models) and
downloads generated images to local storage.
"""
import logging
from pathlib import Path
from typing import List, Optional

import httpx

from ..config import settings

logger = logging.getLogger("uvicorn.error")


class ArkImageService:
    """Volcengine Ark text-to-image service"""

    def __init__(self):
        self.api_key = settings.volc_api_key
        self.api_url = settings.ark_api_url
        self.model = settings.ark_image_model
        self.default_size = settings.ark_default_size

    @property
    def name(self) -> str:
        return "Volcengine Ark Images"

    def is_available(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    async def text_to_image(
        self,
        prompt: str,
        size: Optional[str] = None,
        model: Optional[str] = None,
        watermark: bool = False,
    ) -> List[str]:
        """
        Generate images for a prompt.

        Parameters:
            prompt: Text description of the image
            size: "<width>x<height>", defaults to ARK_DEFAULT_SIZE
            model: Model name, defaults to ARK_IMAGE_MODEL
            watermark: Whether the provider adds its watermark

        Returns:
            URLs of the generated images (hosted by the provider, short-lived)

        Raises:
            RuntimeError: API key missing or no image in the response
            httpx.HTTPError: Transport or HTTP status failure
        """
        if not self.is_available():
            raise RuntimeError(f"{self.name}: API key not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": model or self.model,
            "prompt": prompt,
            "size": size or self.default_size,
            "response_format": "url",
            "watermark": watermark,
        }

        logger.info("[AI] Calling %s (%s) size=%s", self.name, payload["model"], payload["size"])
        async with httpx.AsyncClient(timeout=120) as client:
            resp = await client.post(self.api_url, headers=headers, json=payload)
            resp.raise_for_status()
            result = resp.json()

        urls = [item["url"] for item in result.get("data") or [] if item.get("url")]
        if not urls:
            error = result.get("error") or {}
            raise RuntimeError(error.get("message") or "No image returned by the provider")
        return urls

    async def download_image(self, url: str, local_path: str | Path) -> Path:
        """
        Download an image to local_path (parent directories are created).

        Raises:
            httpx.HTTPError: Transport or HTTP status failure
        """
        path = Path(local_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        async with httpx.AsyncClient(timeout=60, follow_redirects=True) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            path.write_bytes(resp.content)
        return path


# Global instance
image_service = ArkImageService()
