import logging

from fastapi import APIRouter, Query, Request

from app.api.v1.deps import resolve_caller
from app.api.v1.serializers import exhibition_to_dict, exhibition_with_members
from app.config import settings
from app.core.errors import BadRequest, Forbidden, NotFound
from app.core.permissions import can_create_exhibition, can_manage_exhibition
from app.models.artwork import Artwork
from app.models.exhibition import Exhibition, ExhibitionArtwork
from app.models.user import User
from app.schemas.exhibition import CallerIn, ExhibitionCreateIn, ExhibitionUpdateIn
from app.services import catalog

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/exhibitions", tags=["exhibitions"])

async def _get_exhibition(exhibition_id: str) -> Exhibition:
    exhibition = await Exhibition.get_or_none(id=exhibition_id)
    if not exhibition:
        raise NotFound("Exhibition not found")
    return exhibition

async def _authorize(request: Request, asserted_id: str | None, exhibition_id: str, action: str) -> tuple[User, Exhibition]:
    """Resolve caller and exhibition, then apply the curator-or-admin rule."""
    caller = await resolve_caller(request, asserted_id)
    exhibition = await _get_exhibition(exhibition_id)
    if not can_manage_exhibition(caller, exhibition):
        raise Forbidden(f"You cannot {action} this exhibition")
    return caller, exhibition

def _caller_id(body: CallerIn | None, query_user: str | None) -> str | None:
    return (body.user if body else None) or query_user

# ===== Routes =====
@router.get("")
async def list_exhibitions():
    """
    List all exhibitions, newest first, each with its artwork ids and count.
    """
    rows = await Exhibition.all().order_by("-created_at", "-id")
    links = await ExhibitionArtwork.filter(
        exhibition_id__in=[e.id for e in rows]
    ).order_by("added_at", "id").values_list("exhibition_id", "artwork_id")

    members: dict[str, list[str]] = {e.id: [] for e in rows}
    for exhibition_id, artwork_id in links:
        members[exhibition_id].append(artwork_id)
    return {"success": True, "data": [exhibition_to_dict(e, members[e.id]) for e in rows]}

@router.get("/{exhibition_id}")
async def get_exhibition(exhibition_id: str):
    exhibition = await _get_exhibition(exhibition_id)
    return {"success": True, "data": await exhibition_with_members(exhibition)}

@router.post("")
async def create_exhibition(body: ExhibitionCreateIn, request: Request):
    """
    Create an exhibition in draft status (teachers and admins).

    The curator name is copied from the caller's current name.

    Raises:
        BadRequest (400): Missing title
        Unauthenticated (401): No caller id
        NotFound (404): Caller does not exist
        Forbidden (403): Caller is a student
    """
    if not body.title:
        raise BadRequest("Exhibition title is required")
    caller = await resolve_caller(request, body.user)
    if not can_create_exhibition(caller):
        raise Forbidden("Only teachers and administrators can create exhibitions")

    exhibition = await Exhibition.create(
        id=Exhibition.new_id(),
        title=body.title,
        description=body.description or "",
        curator=caller.name,
        curator_user=caller,
        cover_image=body.coverImage or settings.default_cover_image,
        status="draft",
    )
    logger.info("[exhibitions] %s created %s", caller.id, exhibition.id)
    return {"success": True, "data": exhibition_to_dict(exhibition, [])}

@router.put("/{exhibition_id}")
async def update_exhibition(exhibition_id: str, body: ExhibitionUpdateIn, request: Request):
    """
    Partially update an exhibition (curator or admin; any teacher for exhibitions without a curator).

    Fields present in the body are applied. `artworks`, when present, becomes
    the entire membership list (duplicates collapsed).

    Raises:
        NotFound (404): Caller, exhibition, or one of the listed artworks does not exist
        Forbidden (403): Caller may not manage this exhibition
    """
    _, exhibition = await _authorize(request, body.user, exhibition_id, "update")

    if body.artworks is not None:
        await catalog.replace_members(exhibition, body.artworks)

    if body.title:
        exhibition.title = body.title
    if body.description is not None:
        exhibition.description = body.description
    if body.coverImage:
        exhibition.cover_image = body.coverImage
    if body.status:
        exhibition.status = body.status
    await exhibition.save()
    return {"success": True, "data": await exhibition_with_members(exhibition)}

@router.post("/{exhibition_id}/publish")
async def publish_exhibition(
    exhibition_id: str,
    request: Request,
    body: CallerIn | None = None,
    user: str | None = Query(default=None),
):
    """
    Set status to "active". Repeating it is harmless; membership is not checked.
    """
    _, exhibition = await _authorize(request, _caller_id(body, user), exhibition_id, "publish")
    exhibition.status = "active"
    await exhibition.save()
    return {"success": True, "data": await exhibition_with_members(exhibition)}

@router.delete("/{exhibition_id}")
async def delete_exhibition(
    exhibition_id: str,
    request: Request,
    body: CallerIn | None = None,
    user: str | None = Query(default=None),
):
    _, exhibition = await _authorize(request, _caller_id(body, user), exhibition_id, "delete")
    await catalog.delete_exhibition(exhibition)
    return {"success": True, "data": {"id": exhibition_id, "deleted": True}}

@router.post("/{exhibition_id}/artwork/{artwork_id}")
async def add_exhibition_artwork(
    exhibition_id: str,
    artwork_id: str,
    request: Request,
    body: CallerIn | None = None,
    user: str | None = Query(default=None),
):
    """
    Add one artwork to an exhibition.

    Raises:
        NotFound (404): Caller, exhibition or artwork does not exist
        Forbidden (403): Caller may not manage this exhibition
        Conflict (409): Artwork is already in the exhibition
    """
    caller = await resolve_caller(request, _caller_id(body, user))
    exhibition = await _get_exhibition(exhibition_id)
    artwork = await Artwork.get_or_none(id=artwork_id)
    if not artwork:
        raise NotFound("Artwork not found")
    if not can_manage_exhibition(caller, exhibition):
        raise Forbidden("You cannot add artworks to this exhibition")

    await catalog.add_member(exhibition, artwork)
    return {"success": True, "data": await exhibition_with_members(exhibition)}

@router.delete("/{exhibition_id}/artwork/{artwork_id}")
async def remove_exhibition_artwork(
    exhibition_id: str,
    artwork_id: str,
    request: Request,
    body: CallerIn | None = None,
    user: str | None = Query(default=None),
):
    """
    Remove one artwork from an exhibition. Removing a non-member succeeds without changes.
    """
    _, exhibition = await _authorize(request, _caller_id(body, user), exhibition_id, "remove artworks from")
    await catalog.remove_member(exhibition, artwork_id)
    return {"success": True, "data": await exhibition_with_members(exhibition)}
