# app/api/v1/routers/auth.py
import logging

from fastapi import APIRouter

from app.api.v1.serializers import user_to_dict
from app.core.errors import BadRequest, Conflict, NotFound, Unauthorized
from app.core.security import create_access_token, passwords_match
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterIn

logger = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["auth"])

SELF_REGISTER_ROLES = ("student", "teacher")

@router.post("/register")
async def register(body: RegisterIn):
    """
    Register a new student or teacher account.

    Args:
        body: Request body containing:
            - userId: str (8 digits for students, 7 digits for teachers)
            - password: str
            - name: str
            - role: "student" | "teacher"

    Returns:
        dict: {"success": True, "data": <user without password>}

    Errors:
        - BadRequest (400): Missing field, unknown role, or id format doesn't match role
        - Conflict (409): Id already registered
    """
    if not body.userId or not body.password or not body.name or not body.role:
        raise BadRequest("Please fill in all fields")
    if body.role not in SELF_REGISTER_ROLES:
        raise BadRequest("Role must be student or teacher")
    if not User.id_matches_role(body.userId, body.role):
        if body.role == "student":
            raise BadRequest("Invalid student id: must be 8 digits")
        raise BadRequest("Invalid staff id: must be 7 digits")

    if await User.filter(id=body.userId).exists():
        raise Conflict("This account already exists")

    u = await User.create(
        id=body.userId,
        name=body.name,
        password=body.password,
        role=body.role,
    )
    logger.info("[auth] registered %s (%s)", u.id, u.role)
    return {"success": True, "data": user_to_dict(u)}

@router.post("/login")
async def login(payload: LoginRequest):
    """
    Check credentials and return the user record.

    The response also carries an access token; sending it back as
    `Authorization: Bearer <token>` makes the server use the token's user as
    the caller instead of the id in the request body.

    Returns:
        dict: {"success": True, "data": {<user fields>, "accessToken": str}}

    Errors:
        - BadRequest (400): Missing userId or password
        - NotFound (404): No such account
        - Unauthorized (401): Wrong password
    """
    if not payload.userId or not payload.password:
        raise BadRequest("Account and password are required")
    user = await User.get_or_none(id=payload.userId)
    if not user:
        raise NotFound("Account does not exist")
    if not passwords_match(payload.password, user.password):
        raise Unauthorized("Incorrect password")

    token = create_access_token(user.id, user.role)
    return {"success": True, "data": {**user_to_dict(user), "accessToken": token}}
