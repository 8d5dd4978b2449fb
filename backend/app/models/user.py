"""
Database model for users.
Represents a student, teacher or administrator account, identified by the
school-issued id (8-digit student number, 7-digit staff number, or the
reserved administrator id).
"""
import re
from tortoise import fields, models

ROLES = ("student", "teacher", "admin")

# Role -> required id format (admin ids are not constrained)
ID_PATTERNS = {
    "student": re.compile(r"[0-9]{8}"),
    "teacher": re.compile(r"[0-9]{7}"),
}

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Artworks (one-to-many, via related_name="artworks")
    - Curates many Exhibitions (one-to-many, via related_name="exhibitions")
    - Has many UserUpload provenance rows (via related_name="uploads")

    Notes:
    - id and role are fixed at registration
    - Password is stored as given (no hashing in this system)
    """
    id = fields.CharField(pk=True, max_length=32)  # Student/staff number or reserved admin id
    name = fields.CharField(max_length=128)  # Display name
    password = fields.CharField(max_length=255)  # Plaintext password
    role = fields.CharField(max_length=16, default="student")  # "student" | "teacher" | "admin"
    joined = fields.DatetimeField(auto_now_add=True)  # Registration time
    avatar = fields.CharField(max_length=1024, null=True)  # Optional avatar URL

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @staticmethod
    def id_matches_role(user_id: str, role: str) -> bool:
        """True when user_id has the format required for role."""
        pattern = ID_PATTERNS.get(role)
        return pattern is None or bool(pattern.fullmatch(user_id))
