from fastapi import APIRouter, Query, Request
from pydantic import BaseModel

from app.api.v1.deps import resolve_caller
from app.api.v1.serializers import user_to_dict
from app.core.errors import Forbidden, NotFound, Unauthorized
from app.core.permissions import can_delete_student, can_rename_student
from app.core.security import passwords_match
from app.models.user import User
from app.schemas.auth import UserUpdateIn
from app.schemas.exhibition import CallerIn
from app.services import catalog

router = APIRouter(tags=["users"])

# ===== Schemas =====
class StudentUpdateIn(BaseModel):
    name: str | None = None
    user: str | None = None

# ===== Profile =====
@router.get("/user/{user_id}")
async def get_user(user_id: str):
    """
    Get a user's public profile (no password).

    Raises:
        NotFound (404): If the user does not exist
    """
    u = await User.get_or_none(id=user_id)
    if not u:
        raise NotFound("User not found")
    return {"success": True, "data": user_to_dict(u)}

@router.put("/user/{user_id}")
async def update_user(user_id: str, body: UserUpdateIn, request: Request):
    """
    Update one's own name and/or password.

    The caller (currentUserId or bearer token) must be the user being updated.
    A password change needs the current password in oldPassword.

    Raises:
        Unauthenticated (401): No caller id
        Forbidden (403): Caller is someone else
        NotFound (404): User does not exist
        Unauthorized (401): oldPassword missing or wrong
    """
    if body.currentUserId and body.currentUserId != user_id:
        raise Forbidden("You can only edit your own profile")

    u = await resolve_caller(request, body.currentUserId)
    if u.id != user_id:
        raise Forbidden("You can only edit your own profile")

    if body.newPassword:
        if not passwords_match(body.oldPassword, u.password):
            raise Unauthorized("Current password is incorrect")
        u.password = body.newPassword
    if body.name:
        u.name = body.name
    await u.save()
    return {"success": True, "data": user_to_dict(u)}

# ===== Student management =====
@router.get("/students")
async def list_students(request: Request, user: str | None = Query(default=None)):
    """
    List all student accounts (admin only), newest first.
    """
    caller = await resolve_caller(request, user)
    if not caller.is_admin:
        raise Forbidden("Only administrators can view the student list")
    rows = await User.filter(role="student").order_by("-joined")
    return {"success": True, "data": [user_to_dict(s) for s in rows]}

@router.put("/student/{student_id}")
async def update_student(student_id: str, body: StudentUpdateIn, request: Request):
    """
    Rename a student. Allowed for the student themselves and for admins.
    """
    caller = await resolve_caller(request, body.user)
    target = await User.get_or_none(id=student_id)
    if not target:
        raise NotFound("User not found")
    if not can_rename_student(caller, target):
        raise Forbidden("You cannot modify another user's information")

    if body.name:
        target.name = body.name
        await target.save()
    return {"success": True, "data": user_to_dict(target)}

@router.delete("/student/{student_id}")
async def delete_student(
    student_id: str,
    request: Request,
    body: CallerIn | None = None,
    user: str | None = Query(default=None),
):
    """
    Delete a student account (admin only).

    Cascades to the student's artworks, their exhibition memberships and the
    student's upload history.
    """
    caller = await resolve_caller(request, (body.user if body else None) or user)
    target = await User.get_or_none(id=student_id)
    if not target:
        raise NotFound("User not found")
    if not can_delete_student(caller, target):
        raise Forbidden("Only administrators can delete student accounts")

    removed = await catalog.delete_user(target)
    return {"success": True, "data": {"id": student_id, "deleted": True, "removedArtworks": removed["artworks"]}}
