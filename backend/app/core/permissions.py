# app/core/permissions.py
"""
Ownership and role rules shared by the route handlers.

Each function answers one question for one resource kind; handlers raise
Forbidden when the answer is False.
"""
from app.models.artwork import Artwork
from app.models.exhibition import Exhibition
from app.models.user import User

CURATOR_ROLES = ("teacher", "admin")


def can_modify_artwork(caller: User, artwork: Artwork) -> bool:
    """Owner or admin. Ownerless legacy artworks are admin-only."""
    if caller.is_admin:
        return True
    owner = artwork.owner_ref
    return owner is not None and owner == caller.id


def can_create_exhibition(caller: User) -> bool:
    return caller.role in CURATOR_ROLES


def can_manage_exhibition(caller: User, exhibition: Exhibition) -> bool:
    """
    Curator or admin.

    Exhibitions without a curator id (seed/legacy data) may be edited by any teacher.
    """
    if caller.is_admin:
        return True
    if exhibition.curator_user_id is None:
        return caller.role == "teacher"
    return exhibition.curator_user_id == caller.id


def can_rename_student(caller: User, target: User) -> bool:
    return caller.is_admin or caller.id == target.id


def can_delete_student(caller: User, target: User) -> bool:
    return caller.is_admin and target.role == "student"
