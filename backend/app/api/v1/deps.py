from fastapi import Request
import jwt

from app.core.errors import NotFound, Unauthenticated
from app.core.security import decode_access_token
from app.models.user import User

def _bearer_token(request: Request) -> str | None:
    authorization = request.headers.get("authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None

def token_subject(request: Request) -> str | None:
    """
    User id carried by the request's bearer token, or None when no token is sent.

    Raises:
        Unauthenticated (401): The token is invalid or expired
    """
    token = _bearer_token(request)
    if not token:
        return None
    try:
        return decode_access_token(token).get("sub")
    except jwt.PyJWTError:
        raise Unauthenticated("Invalid or expired token")

async def resolve_caller(request: Request, asserted_id: str | None) -> User:
    """
    Resolve the acting user for a request.

    The caller is taken from:
    1. Authorization: Bearer <token> (issued by /api/login) - preferred
    2. The user id the client sends in the request (`user` / `currentUserId`)

    Args:
        request: FastAPI Request object (for the Authorization header)
        asserted_id: User id supplied by the client, if any

    Returns:
        User: The acting user

    Raises:
        Unauthenticated (401): No caller id, or the bearer token is invalid/expired
        NotFound (404): The caller id does not name an existing user
    """
    caller_id = token_subject(request) or asserted_id
    if not caller_id:
        raise Unauthenticated()

    user = await User.get_or_none(id=caller_id)
    if not user:
        raise NotFound("User not found")
    return user
