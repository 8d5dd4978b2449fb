"""
Pydantic schemas for authentication and profile endpoints.

Fields are optional at the schema level so a missing value is reported
through the API's own BadRequest message instead of a bare validation error.
"""
from typing import Optional
from pydantic import BaseModel

class LoginRequest(BaseModel):
    """
    Request model for user login endpoint.
    """
    userId: Optional[str] = None  # Student/staff number or admin id
    password: Optional[str] = None  # Plain text password

class RegisterIn(BaseModel):
    """
    Request model for account registration.
    Students register with an 8-digit id, teachers with a 7-digit id.
    """
    userId: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None  # "student" | "teacher"

class UserUpdateIn(BaseModel):
    """
    Request model for updating one's own profile.
    Changing the password requires the current password.
    """
    name: Optional[str] = None
    oldPassword: Optional[str] = None
    newPassword: Optional[str] = None
    currentUserId: Optional[str] = None  # Caller id; must equal the path user id
