"""
Local image storage

Uploaded and AI-downloaded images are written to settings.uploads_dir and
served by the /uploads static mount. Every file gets a fresh name, so
concurrent writers never share a path.
"""
import logging
import os
import random
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from ..config import settings

logger = logging.getLogger("uvicorn.error")

PUBLIC_PREFIX = "/uploads"


def uploads_dir() -> Path:
    path = Path(settings.uploads_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def public_url(filename: str) -> str:
    return f"{PUBLIC_PREFIX}/{filename}"


def upload_filename(original: str | None) -> str:
    """<ms>-<random><ext>, keeping the client's extension."""
    ext = os.path.splitext(original or "")[1].lower()
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


def generated_filename(ext: str = ".jpg") -> str:
    return f"ai_{int(time.time() * 1000)}_{secrets.token_hex(5)}{ext}"


async def save_upload(file: UploadFile) -> str:
    """
    Persist an uploaded image.

    Returns:
        Public URL path of the stored file (e.g. /uploads/1700000000000-123.png)
    """
    filename = upload_filename(file.filename)
    target = uploads_dir() / filename
    data = await file.read()
    target.write_bytes(data)
    logger.info("[storage] saved upload %s (%d bytes)", target, len(data))
    return public_url(filename)
