"""
Catalog store operations

Multi-row reads and writes over users, artworks and exhibitions. Anything that
touches more than one table runs inside a transaction so link rows never
outlive the rows they point to.
"""
from typing import Dict, Iterable, List, Optional

from tortoise.exceptions import IntegrityError
from tortoise.expressions import Q
from tortoise.transactions import in_transaction

from app.core.errors import Conflict, NotFound
from app.models.artwork import Artwork, UserUpload
from app.models.exhibition import Exhibition, ExhibitionArtwork
from app.models.user import User


async def create_artwork(
    owner: User,
    *,
    title: str,
    image: str,
    desc: Optional[str] = None,
    prompt: Optional[str] = None,
    in_showcase: bool = True,
    is_ai_generated: bool = False,
) -> Artwork:
    """
    Store a new artwork owned by `owner` and record it in the owner's upload history.

    The artist name is a snapshot of owner.name; later renames don't touch it.
    """
    async with in_transaction():
        artwork = await Artwork.create(
            id=Artwork.new_id(),
            title=title,
            artist=owner.name,
            owner=owner,
            desc=desc,
            image=image,
            prompt=prompt,
            in_showcase=in_showcase,
            is_ai_generated=is_ai_generated,
        )
        await UserUpload.create(user=owner, artwork=artwork)
    return artwork


async def delete_artwork(artwork: Artwork) -> None:
    """Delete an artwork together with its exhibition memberships and upload records."""
    async with in_transaction():
        await ExhibitionArtwork.filter(artwork_id=artwork.id).delete()
        await UserUpload.filter(artwork_id=artwork.id).delete()
        await artwork.delete()


async def delete_user(user: User) -> Dict[str, int]:
    """
    Delete a user and everything that hangs off it.

    Removes the user's artworks (including legacy rows whose artist field
    encodes the user id), every membership and upload row that references
    them, and any exhibitions the user curates.

    Returns:
        Counts of deleted artworks and exhibitions
    """
    async with in_transaction():
        candidates = await Artwork.filter(
            Q(owner_id=user.id) | Q(owner_id__isnull=True, artist__endswith=f"_{user.id}")
        )
        # Same ownership test the permission rules use
        artwork_ids: List[str] = [a.id for a in candidates if a.owner_ref == user.id]
        exhibition_ids: List[str] = await Exhibition.filter(curator_user_id=user.id).values_list("id", flat=True)

        await ExhibitionArtwork.filter(
            Q(artwork_id__in=artwork_ids) | Q(exhibition_id__in=exhibition_ids)
        ).delete()
        await UserUpload.filter(Q(user_id=user.id) | Q(artwork_id__in=artwork_ids)).delete()
        await Artwork.filter(id__in=artwork_ids).delete()
        await Exhibition.filter(id__in=exhibition_ids).delete()
        await user.delete()
    return {"artworks": len(artwork_ids), "exhibitions": len(exhibition_ids)}


async def member_ids(exhibition_id: str) -> List[str]:
    """Artwork ids in an exhibition, in the order they were added."""
    return await ExhibitionArtwork.filter(exhibition_id=exhibition_id).order_by(
        "added_at", "id"
    ).values_list("artwork_id", flat=True)


async def replace_members(exhibition: Exhibition, artwork_ids: Iterable[str]) -> List[str]:
    """
    Make `artwork_ids` the exhibition's entire membership.

    Repeated ids are collapsed (first occurrence wins the position).

    Raises:
        NotFound: If any id does not name an existing artwork (nothing is changed)
    """
    wanted = list(dict.fromkeys(artwork_ids))
    existing = set(await Artwork.filter(id__in=wanted).values_list("id", flat=True))
    missing = [a for a in wanted if a not in existing]
    if missing:
        raise NotFound(f"Artwork not found: {', '.join(missing)}")

    async with in_transaction():
        await ExhibitionArtwork.filter(exhibition_id=exhibition.id).delete()
        for artwork_id in wanted:
            await ExhibitionArtwork.create(exhibition_id=exhibition.id, artwork_id=artwork_id)
    return wanted


async def add_member(exhibition: Exhibition, artwork: Artwork) -> None:
    """
    Raises:
        Conflict: If the artwork is already in the exhibition
    """
    # Unique (exhibition, artwork) constraint; also catches concurrent duplicate adds
    try:
        await ExhibitionArtwork.create(exhibition_id=exhibition.id, artwork_id=artwork.id)
    except IntegrityError:
        raise Conflict("Artwork is already in this exhibition")


async def remove_member(exhibition: Exhibition, artwork_id: str) -> bool:
    """Remove one artwork; returns whether it was a member. Removing a non-member is not an error."""
    deleted = await ExhibitionArtwork.filter(exhibition_id=exhibition.id, artwork_id=artwork_id).delete()
    return bool(deleted)


async def delete_exhibition(exhibition: Exhibition) -> None:
    async with in_transaction():
        await ExhibitionArtwork.filter(exhibition_id=exhibition.id).delete()
        await exhibition.delete()
