"""
Pydantic schemas for AI generation endpoints.
"""
from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field

class GenerateOptions(BaseModel):
    scale: Optional[str] = None  # Image size, e.g. "2048x2048"
    model: Optional[str] = None

class GenerateIn(BaseModel):
    prompt: Optional[str] = None
    options: GenerateOptions = Field(default_factory=GenerateOptions)
    user: Optional[str] = None  # Caller id; rate limit key

class SaveToGalleryIn(BaseModel):
    imageIds: List[str] = Field(default_factory=list)
    # Either {imageId: url} or a list indexed by the numeric image id
    imageUrls: Union[Dict[str, str], List[str]] = Field(default_factory=dict)
    title: Optional[str] = None
    prompt: Optional[str] = None
    user: Optional[str] = None
