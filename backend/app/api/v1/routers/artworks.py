from fastapi import APIRouter, File, Form, Query, Request, UploadFile
from pydantic import BaseModel

from app.api.v1.deps import resolve_caller
from app.api.v1.serializers import artwork_to_dict
from app.core.errors import BadRequest, Forbidden, NotFound
from app.core.permissions import can_modify_artwork
from app.models.artwork import Artwork
from app.models.user import User
from app.schemas.exhibition import CallerIn
from app.services import catalog, storage

# Mounted at both /api/gallery and /api/artwork
router = APIRouter(tags=["artworks"])
# Older frontend pages list works through /api/works
legacy_router = APIRouter(tags=["artworks"])

# ===== Schemas =====
class ArtworkUpdateIn(BaseModel):
    title: str | None = None
    prompt: str | None = None
    desc: str | None = None
    inShowcase: bool | None = None
    user: str | None = None

def _form_flag(value: str | None) -> bool:
    """addToGallery form value: anything except "false"/"0" means yes."""
    return value not in ("false", "0")

async def _get_artwork(artwork_id: str) -> Artwork:
    artwork = await Artwork.get_or_none(id=artwork_id)
    if not artwork:
        raise NotFound("Artwork not found")
    return artwork

# ===== Routes =====
@router.post("/upload")
async def upload_artwork(
    request: Request,
    image: UploadFile | None = File(default=None),
    title: str | None = Form(default=None),
    prompt: str | None = Form(default=None),
    desc: str | None = Form(default=None),
    user: str | None = Form(default=None),
    addToGallery: str | None = Form(default=None),
):
    """
    Upload an artwork image (multipart/form-data).

    The artist name is copied from the uploader's current name. The artwork is
    shown in the public gallery unless addToGallery is "false" or "0".

    Returns:
        dict: {"success": True, "data": <artwork>}

    Raises:
        BadRequest (400): No image file
        Unauthenticated (401): No caller id
        NotFound (404): Caller does not exist
    """
    if image is None or not image.filename:
        raise BadRequest("Missing image file")
    owner = await resolve_caller(request, user)

    image_url = await storage.save_upload(image)
    artwork = await catalog.create_artwork(
        owner,
        title=title or "Untitled",
        desc=desc or "Student Submission",
        image=image_url,
        prompt=prompt,
        in_showcase=_form_flag(addToGallery),
    )
    return {"success": True, "data": artwork_to_dict(artwork)}

@router.get("")
async def list_artworks(
    inShowcase: bool | None = Query(default=None, description="Only artworks with this showcase flag"),
    artistId: str | None = Query(default=None, description="Only artworks owned by this user"),
):
    """
    List artworks, most recent first. No pagination.
    """
    qs = Artwork.all().order_by("-uploaded_at", "-id")
    if inShowcase is not None:
        qs = qs.filter(in_showcase=inShowcase)
    rows = await qs
    if artistId:
        rows = [a for a in rows if a.owner_ref == artistId]
    return {"success": True, "data": [artwork_to_dict(a) for a in rows]}

@router.get("/{artwork_id}")
async def get_artwork(artwork_id: str):
    artwork = await _get_artwork(artwork_id)
    return {"success": True, "data": artwork_to_dict(artwork)}

@router.put("/{artwork_id}")
async def update_artwork(artwork_id: str, body: ArtworkUpdateIn, request: Request):
    """
    Partially update an artwork (owner or admin).

    Only fields present in the body are changed; an empty title is ignored.

    Raises:
        Unauthenticated (401): No caller id
        NotFound (404): Caller or artwork does not exist
        Forbidden (403): Caller is neither the owner nor an admin
    """
    caller = await resolve_caller(request, body.user)
    artwork = await _get_artwork(artwork_id)
    if not can_modify_artwork(caller, artwork):
        raise Forbidden("You cannot edit this artwork")

    sent = body.model_fields_set
    if body.title:
        artwork.title = body.title
    if "prompt" in sent:
        artwork.prompt = body.prompt
    if "desc" in sent:
        artwork.desc = body.desc
    if body.inShowcase is not None:
        artwork.in_showcase = body.inShowcase
    await artwork.save()
    return {"success": True, "data": artwork_to_dict(artwork)}

@router.delete("/{artwork_id}")
async def delete_artwork(
    artwork_id: str,
    request: Request,
    body: CallerIn | None = None,
    user: str | None = Query(default=None),
):
    """
    Delete an artwork (owner or admin).

    Also removes it from every exhibition and from the upload history.
    """
    caller = await resolve_caller(request, (body.user if body else None) or user)
    artwork = await _get_artwork(artwork_id)
    if not can_modify_artwork(caller, artwork):
        raise Forbidden("You cannot delete this artwork")

    await catalog.delete_artwork(artwork)
    return {"success": True, "data": {"id": artwork_id, "deleted": True}}

@legacy_router.get("/works")
async def list_works(userId: str | None = Query(default=None)):
    """
    Artworks of one user (or all), most recent first.

    Legacy rows whose artist field reads "<type>_<id>" are reported with the
    owner's id and current name.
    """
    rows = await Artwork.all().order_by("-uploaded_at", "-id")
    if userId:
        rows = [a for a in rows if a.owner_ref == userId]

    legacy_ids = {a.owner_ref for a in rows if a.owner_id is None and a.owner_ref}
    names = dict(await User.filter(id__in=list(legacy_ids)).values_list("id", "name")) if legacy_ids else {}

    items = []
    for a in rows:
        item = artwork_to_dict(a)
        if a.owner_id is None and a.owner_ref in names:
            item["artist"] = names[a.owner_ref]
        items.append(item)
    return {"success": True, "data": items}
