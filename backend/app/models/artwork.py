"""
Database models for artworks and their upload history.
"""
import secrets
import time
from typing import Optional
from tortoise import fields, models

class Artwork(models.Model):
    """
    Artwork database model.

    - artist: uploader display name copied at upload time (not refreshed on rename)
    - owner: owning user; null only for legacy rows whose artist field encodes "<type>_<id>"
    - in_showcase: visibility in the public gallery, independent of edit rights
    """
    id = fields.CharField(pk=True, max_length=48)  # Timestamp-derived token
    title = fields.CharField(max_length=256)
    artist = fields.CharField(max_length=128)
    owner: Optional[fields.ForeignKeyNullableRelation["User"]] = fields.ForeignKeyField(
        "models.User",
        related_name="artworks",
        null=True,
        on_delete=fields.CASCADE,
        source_field="artist_id",
    )  # Deleting the owner deletes the artwork
    desc = fields.TextField(null=True)
    image = fields.CharField(max_length=1024)  # URL path of the stored file, e.g. /uploads/...
    prompt = fields.TextField(null=True)  # Present for AI-assisted pieces
    uploaded_at = fields.DatetimeField(auto_now_add=True, index=True)
    in_showcase = fields.BooleanField(default=True, index=True)
    is_ai_generated = fields.BooleanField(default=False)

    class Meta:
        table = "artworks"

    @staticmethod
    def new_id() -> str:
        return f"{int(time.time() * 1000)}_{secrets.token_hex(4)}"

    @property
    def owner_ref(self) -> Optional[str]:
        """
        Id of the owning user.

        Falls back to the legacy "<type>_<id>" artist encoding when the row has
        no owner column; None means the artwork has no identifiable owner.
        """
        if self.owner_id:
            return self.owner_id
        parts = (self.artist or "").split("_")
        if len(parts) == 2 and parts[1]:
            return parts[1]
        return None


class UserUpload(models.Model):
    """Provenance row: which user uploaded which artwork. Not used for ownership."""
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="uploads", on_delete=fields.CASCADE)
    artwork = fields.ForeignKeyField("models.Artwork", related_name="upload_records", on_delete=fields.CASCADE)
    uploaded_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "user_uploads"
        unique_together = (("user", "artwork"),)
