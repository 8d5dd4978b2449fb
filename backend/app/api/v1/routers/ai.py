"""
AI image generation API Router

Generates images from a prompt through the text-to-image service and saves
selected results into the caller's gallery.
"""
import logging
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Request

from app.api.v1.deps import resolve_caller, token_subject
from app.api.v1.serializers import artwork_to_dict
from app.config import settings
from app.core.errors import BadRequest, InternalError, ServiceUnavailable, TooManyRequests
from app.core.rate_limit import FixedWindowRateLimiter
from app.schemas.ai import GenerateIn, SaveToGalleryIn
from app.services import catalog, storage
from app.services.image_generation import image_service

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/ai", tags=["ai"])

# Per-caller limit on /generate (process memory; reset on restart)
generate_limiter = FixedWindowRateLimiter(
    limit=settings.ai_rate_limit_max,
    window=settings.ai_rate_limit_window,
)

DEFAULT_AI_TITLE = "AI Generated Artwork"


def _lookup_url(image_urls: Union[Dict[str, str], List[str]], image_id: str) -> Optional[str]:
    """imageUrls may be keyed by image id or be a list indexed by it."""
    if isinstance(image_urls, dict):
        return image_urls.get(image_id)
    try:
        index = int(image_id)
    except ValueError:
        return None
    return image_urls[index] if 0 <= index < len(image_urls) else None


@router.post("/generate")
async def generate(body: GenerateIn, request: Request):
    """
    Generate images from a text prompt.

    Each caller (bearer token user, else the sent user id, else the client
    address) may call this at most AI_RATE_LIMIT_MAX times per
    AI_RATE_LIMIT_WINDOW seconds. A rejected call never reaches the image
    service. `remaining` tells how many calls are left in the current window.

    Returns:
        dict: {"success": True, "data": {"images": [url, ...], "prompt": str, "remaining": int}}

    Raises:
        BadRequest (400): Missing prompt
        Unauthenticated (401): Invalid bearer token
        TooManyRequests (429): Rate limit exceeded
        ServiceUnavailable (503): VOLC_API_KEY not configured
        InternalError (500): Image service call failed
    """
    if not body.prompt:
        raise BadRequest("Prompt is required")

    # Token holder first, then the asserted id, then the client address
    key = token_subject(request) or body.user or (request.client.host if request.client else "anonymous")
    if not generate_limiter.hit(key):
        raise TooManyRequests(
            f"Too many requests, please try again later (at most {generate_limiter.limit} per "
            f"{int(generate_limiter.window)} seconds)"
        )

    if not image_service.is_available():
        raise ServiceUnavailable("AI service is not configured, set VOLC_API_KEY in .env")

    try:
        images = await image_service.text_to_image(
            body.prompt,
            size=body.options.scale,
            model=body.options.model,
            watermark=False,
        )
    except Exception as e:
        logger.exception("[AI] generation failed")
        raise InternalError(f"Image generation failed: {e}")

    return {
        "success": True,
        "data": {"images": images, "prompt": body.prompt, "remaining": generate_limiter.remaining(key)},
    }


@router.post("/save-to-gallery")
async def save_to_gallery(body: SaveToGalleryIn, request: Request):
    """
    Download selected generated images and store them as the caller's artworks.

    Images that fail to download are skipped; the response reports how many
    of the requested images were saved.

    Returns:
        dict: {"success": True, "data": {"message", "saved", "requested", "artworks": [...]}}

    Raises:
        Unauthenticated (401): No caller id
        NotFound (404): Caller does not exist
        BadRequest (400): No image selected
        InternalError (500): None of the images could be saved
    """
    owner = await resolve_caller(request, body.user)
    if not body.imageIds:
        raise BadRequest("No image selected")

    saved = []
    for image_id in body.imageIds:
        url = _lookup_url(body.imageUrls, image_id)
        if not url:
            logger.warning("[AI] no url for image id %s, skipped", image_id)
            continue

        filename = storage.generated_filename()
        try:
            await image_service.download_image(url, storage.uploads_dir() / filename)
        except Exception:
            logger.exception("[AI] failed to download image %s", image_id)
            continue

        artwork = await catalog.create_artwork(
            owner,
            title=body.title or DEFAULT_AI_TITLE,
            desc="AI Generated Art",
            image=storage.public_url(filename),
            prompt=body.prompt,
            in_showcase=True,
            is_ai_generated=True,
        )
        saved.append(artwork_to_dict(artwork))

    if not saved:
        raise InternalError("Failed to save any of the selected images")

    return {
        "success": True,
        "data": {
            "message": f"Saved {len(saved)} of {len(body.imageIds)} artworks",
            "saved": len(saved),
            "requested": len(body.imageIds),
            "artworks": saved,
        },
    }
