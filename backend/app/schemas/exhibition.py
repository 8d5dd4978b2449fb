"""
Pydantic schemas for exhibition endpoints.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel

ExhibitionStatus = Literal["draft", "active", "archived"]

class ExhibitionCreateIn(BaseModel):
    title: Optional[str] = None  # Required; checked by the handler
    description: Optional[str] = None
    coverImage: Optional[str] = None
    user: Optional[str] = None  # Caller id

class ExhibitionUpdateIn(BaseModel):
    """
    Partial update. Only fields present in the request are applied.
    `artworks`, when present, replaces the whole membership list.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    coverImage: Optional[str] = None
    status: Optional[ExhibitionStatus] = None
    artworks: Optional[List[str]] = None
    user: Optional[str] = None

class CallerIn(BaseModel):
    """Body of requests that carry nothing but the caller id (publish, delete, membership)."""
    user: Optional[str] = None
