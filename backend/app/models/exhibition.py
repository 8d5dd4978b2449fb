"""
Database models for curated exhibitions and their artwork membership.
"""
import secrets
import time
from typing import Optional
from tortoise import fields, models

STATUSES = ("draft", "active", "archived")

class Exhibition(models.Model):
    """
    Exhibition database model.

    - curator: display name of the curating user at creation time
    - curator_user: owning teacher/admin; null for legacy rows, which any teacher may edit
    - status: "draft" on creation, "active" once published
    """
    id = fields.CharField(pk=True, max_length=48)  # "ex" + timestamp token
    title = fields.CharField(max_length=256)
    description = fields.TextField(default="")
    curator = fields.CharField(max_length=128, null=True)
    curator_user: Optional[fields.ForeignKeyNullableRelation["User"]] = fields.ForeignKeyField(
        "models.User",
        related_name="exhibitions",
        null=True,
        on_delete=fields.CASCADE,
        source_field="curator_id",
    )
    cover_image = fields.CharField(max_length=1024, null=True)
    status = fields.CharField(max_length=16, default="draft", index=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "exhibitions"

    @staticmethod
    def new_id() -> str:
        return f"ex{int(time.time() * 1000)}{secrets.token_hex(3)}"


class ExhibitionArtwork(models.Model):
    """Membership row linking an exhibition to one artwork."""
    id = fields.IntField(pk=True)
    exhibition = fields.ForeignKeyField("models.Exhibition", related_name="memberships", on_delete=fields.CASCADE)
    artwork = fields.ForeignKeyField("models.Artwork", related_name="memberships", on_delete=fields.CASCADE)
    added_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "exhibition_artworks"
        unique_together = (("exhibition", "artwork"),)
