"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating the administrator account on first startup.
"""
import logging
from app.config import settings
from app.models.user import User

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    If no admin exists in the database, create the reserved administrator account.
    Only takes effect under the following conditions:
      - Currently no user with role="admin"
      - And ADMIN_PASSWORD is set (to avoid using a default weak password)
    Environment variables:
      ADMIN_ID       (default: "admin")
      ADMIN_NAME     (default: "Administrator")
      ADMIN_PASSWORD (required, otherwise won't create)
    """
    # Check if any admin user already exists
    has_admin = await User.filter(role="admin").exists()
    if has_admin:
        return

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    # The reserved id cannot be registered through /register, but seed data might hold it
    if await User.filter(id=settings.admin_id).exists():
        logger.warning("[bootstrap] Reserved admin id %s is taken by a non-admin account -> skip.", settings.admin_id)
        return

    u = await User.create(
        id=settings.admin_id,
        name=settings.admin_name,
        password=settings.admin_password,
        role="admin",
    )
    logger.warning("[bootstrap] Created default admin -> id=%s name=%s", u.id, u.name)
