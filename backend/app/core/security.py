# app/core/security.py
"""
Security module for authentication.
Handles JWT access token creation/validation and credential comparison.

Passwords are stored in plaintext by this system; comparisons go through
hmac.compare_digest so they run in constant time.
"""
import hmac
import os
import datetime as dt
import jwt  # PyJWT
from dotenv import load_dotenv
from pathlib import Path

# Load environment variables from project root
ENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")  # Secret key for JWT signing (use strong secret in production)
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))  # Token expiration time in minutes
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)

def passwords_match(given: str | None, stored: str | None) -> bool:
    """
    Compare a submitted password with the stored one.

    Returns:
        False if either side is missing, otherwise the constant-time comparison result
    """
    if given is None or stored is None:
        return False
    return hmac.compare_digest(given.encode("utf-8"), stored.encode("utf-8"))

def create_access_token(user_id: str, role: str) -> str:
    """
    Create a JWT access token for a logged-in user.

    The token carries the user id and role so a request can be attributed to a
    user without trusting an id supplied in the request body.

    Args:
        user_id: Student/staff number or admin id
        role: "student", "teacher" or "admin"

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID)
        - role: User role
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": user_id,  # Subject (user ID)
        "role": role,    # User role
        "iat": now,      # Issued at timestamp
        "exp": now + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),  # Expiration timestamp
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid or malformed
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG])
