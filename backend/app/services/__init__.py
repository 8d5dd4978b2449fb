"""
Services Module

- catalog: multi-table store operations (artworks, exhibitions, cascades)
- storage: local image files served under /uploads
- image_generation: Volcengine Ark text-to-image API
"""
from .image_generation import ArkImageService, image_service

__all__ = [
    "ArkImageService",
    "image_service",
]
