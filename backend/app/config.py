# app/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "AI ArtStyle Lab API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite://data/artstyle.db")
    # Create missing tables on startup (sqlite dev setups); production uses Aerich migrations
    db_generate_schemas: bool = os.getenv("DB_GENERATE_SCHEMAS", "true").lower() in ("true", "1", "yes")

    # Uploaded and AI-downloaded images, served under /uploads
    uploads_dir: str = os.getenv("UPLOADS_DIR", "public/uploads")
    default_cover_image: str = os.getenv("DEFAULT_COVER_IMAGE", "/public/images/default_exhibition_cover.png")

    # Volcengine Ark image generation (doubao-seedream)
    volc_api_key: str | None = os.getenv("VOLC_API_KEY")
    ark_api_url: str = os.getenv("ARK_API_URL", "https://ark.cn-beijing.volces.com/api/v3/images/generations")
    ark_image_model: str = os.getenv("ARK_IMAGE_MODEL", "doubao-seedream-4.5")
    ark_default_size: str = os.getenv("ARK_DEFAULT_SIZE", "2048x2048")

    # AI generation rate limit: at most N requests per window per caller
    ai_rate_limit_max: int = int(os.getenv("AI_RATE_LIMIT_MAX", "10"))
    ai_rate_limit_window: float = float(os.getenv("AI_RATE_LIMIT_WINDOW", "60"))

    # Reserved administrator account (created on first startup if ADMIN_PASSWORD is set)
    admin_id: str = os.getenv("ADMIN_ID", "admin")
    admin_name: str = os.getenv("ADMIN_NAME", "Administrator")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")

settings = Settings()  # Instantiate configuration
