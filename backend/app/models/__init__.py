"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Student / teacher / admin account
- Artwork: Uploaded or AI-generated artwork (belongs to a User)
- UserUpload: Upload provenance row (User <-> Artwork)
- Exhibition: Curated exhibition (belongs to a teacher/admin User)
- ExhibitionArtwork: Exhibition membership row (Exhibition <-> Artwork)
"""
from .user import User
from .artwork import Artwork, UserUpload
from .exhibition import Exhibition, ExhibitionArtwork
