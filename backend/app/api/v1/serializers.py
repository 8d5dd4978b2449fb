"""
Model -> JSON dict conversion for API responses (camelCase keys).
"""
import datetime as dt

from app.models.artwork import Artwork
from app.models.exhibition import Exhibition
from app.models.user import User
from app.services import catalog


def _iso(value: dt.datetime | None) -> str | None:
    return value.isoformat() if value else None


def user_to_dict(u: User) -> dict:
    """Public user record. Never includes the password."""
    return {
        "id": u.id,
        "name": u.name,
        "role": u.role,
        "joined": _iso(u.joined),
        "avatar": u.avatar,
    }


def artwork_to_dict(a: Artwork) -> dict:
    return {
        "id": a.id,
        "title": a.title,
        "artist": a.artist,
        "artistId": a.owner_ref,
        "desc": a.desc,
        "image": a.image,
        "prompt": a.prompt,
        "uploadedAt": _iso(a.uploaded_at),
        "inShowcase": bool(a.in_showcase),
        "isAIGenerated": bool(a.is_ai_generated),
    }


def exhibition_to_dict(e: Exhibition, artworks: list[str]) -> dict:
    return {
        "id": e.id,
        "title": e.title,
        "description": e.description,
        "curator": e.curator,
        "curatorId": e.curator_user_id,
        "coverImage": e.cover_image,
        "status": e.status,
        "createdAt": _iso(e.created_at),
        "updatedAt": _iso(e.updated_at),
        "artworks": artworks,
        "artworkCount": len(artworks),
    }


async def exhibition_with_members(e: Exhibition) -> dict:
    return exhibition_to_dict(e, await catalog.member_ids(e.id))
