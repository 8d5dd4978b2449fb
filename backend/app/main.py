# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.core.db import init_db, close_db
from app.core.errors import ApiError, BadRequest, InternalError

from app.api.v1.routers import ai, artworks, auth, exhibitions, users

from app.core.bootstrap import ensure_default_admin
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===== Error envelope =====
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(status_code=BadRequest.status_code, content=BadRequest(message).to_body())

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail), "code": f"HTTP_{exc.status_code}"},
    )

@app.middleware("http")
async def internal_error_middleware(request: Request, call_next):
    # Anything not turned into a response by the handlers above ends up here
    try:
        return await call_next(request)
    except Exception:
        logger.exception("[api] unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=InternalError.status_code, content=InternalError().to_body())

@app.on_event("startup")
async def on_startup():
    # Open the database (fails startup if unreachable)
    await init_db()
    # Ensure there's an admin account on first run
    await ensure_default_admin()

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(artworks.router, prefix="/api/gallery")
app.include_router(artworks.router, prefix="/api/artwork")  # older frontend pages
app.include_router(artworks.legacy_router, prefix="/api")
app.include_router(exhibitions.router, prefix="/api")
app.include_router(ai.router, prefix="/api")

# Stored images
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir, check_dir=False), name="uploads")

@app.get("/healthz")
def healthz():
    return {"ok": True}
