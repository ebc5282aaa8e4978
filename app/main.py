"""FastAPI application entry point with FastMCP mounted."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.auth.hmac_auth import verify_identity_signature
from app.config import get_settings
from app.errors import StudyTrackerError

logger = logging.getLogger(__name__)
settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
)


class IdentitySignatureMiddleware(BaseHTTPMiddleware):
    """Verify the gateway's signature over X-User-Id when HMAC_SECRET is configured.

    Requests without X-User-Id pass through (dependencies still guard access).
    When HMAC_SECRET is empty the middleware is a no-op (dev/test mode).
    """

    async def dispatch(self, request, call_next):
        secret = get_settings().HMAC_SECRET
        if not secret:
            return await call_next(request)

        user_id = request.headers.get("x-user-id")
        if user_id is None:
            return await call_next(request)

        ok = verify_identity_signature(
            secret,
            user_id,
            request.headers.get("x-request-timestamp"),
            request.headers.get("x-nonce"),
            request.headers.get("x-signature"),
        )
        if not ok:
            return JSONResponse(
                {"error": "unauthorized", "detail": "Invalid request signature"},
                status_code=401,
            )
        return await call_next(request)


# FastMCP ASGI sub-app
from app.mcp.server import mcp  # noqa: E402

mcp_app = mcp.http_app(path="/mcp")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Study Tracker...")
    async with mcp_app.lifespan(app):
        yield
    logger.info("Study Tracker stopped")


app = FastAPI(
    title="Study Tracker",
    description="Per-family learning tracker: recurring study tasks, daily logs and summaries",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Identity signature verification, added after CORS
app.add_middleware(IdentitySignatureMiddleware)


@app.exception_handler(StudyTrackerError)
async def study_tracker_error_handler(request: Request, exc: StudyTrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse({"error": exc.code, "detail": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse({"error": "invalid_request", "detail": detail}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        {"error": "internal_error", "detail": "internal server error"}, status_code=500
    )


# REST API router
from app.api.v1.router import router as api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")

app.mount("/mcp", mcp_app)


@app.get("/health")
async def health():
    """Basic liveness probe."""
    return {"status": "ok", "service": "study-tracker"}


@app.get("/health/ready")
async def health_ready():
    """Readiness probe with database check."""
    from app.database import engine
    from sqlalchemy import text

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "ready", "database": "ok"}
    except Exception as e:
        logger.error("Health ready check failed: %s", e)
        return JSONResponse(
            {"status": "not_ready", "database": "error"},
            status_code=503
        )


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
