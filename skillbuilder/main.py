"""FastAPI application entrypoint."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from skillbuilder.adapters.anthropic import AnthropicGenerationClient
from skillbuilder.adapters.base import GenerationClient
from skillbuilder.config import Settings, settings
from skillbuilder.dependencies import general_rate_limit
from skillbuilder.errors import RateLimitExceededError, SkillbuilderError
from skillbuilder.ratelimit import FixedWindowRateLimiter
from skillbuilder.routers import generate, skills
from skillbuilder.storage.base import SkillStore

# ── Logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def _build_store(cfg: Settings) -> SkillStore:
    if cfg.storage_backend == "sql":
        from skillbuilder.database import async_session
        from skillbuilder.storage.sql_store import SqlSkillStore

        return SqlSkillStore(async_session)

    from skillbuilder.storage.file_store import FileSkillStore

    return FileSkillStore(cfg.library_dir)


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SkillbuilderError)
    async def skillbuilder_error(request: Request, exc: SkillbuilderError):
        if exc.status_code >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, type(exc).__name__)
        headers = None
        if isinstance(exc, RateLimitExceededError):
            headers = {"Retry-After": str(exc.retry_after)}
        return _error(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        err = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        message = f"Invalid {field}: {err.get('msg', 'bad value')}" if field else "Invalid request body."
        return _error(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed."
        return _error(exc.status_code, message, getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Something went wrong. Please try again.")


def _mount_spa(app: FastAPI, static_dir: Path) -> None:
    """Serve the built client, falling back to index.html for client routes."""
    root = static_dir.resolve()
    index = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa(full_path: str):
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not found.")
        candidate = (root / full_path).resolve()
        try:
            candidate.relative_to(root)
        except ValueError:
            raise HTTPException(status_code=404, detail="Not found.")
        if full_path and candidate.is_file():
            return FileResponse(candidate)
        return FileResponse(index)


def create_app(
    cfg: Settings = settings,
    *,
    store: SkillStore | None = None,
    generation_client: GenerationClient | None = None,
) -> FastAPI:
    owns_store = store is None
    store = store or _build_store(cfg)
    generation_client = generation_client or AnthropicGenerationClient(
        cfg.anthropic_api_key,
        model=cfg.anthropic_model,
        max_tokens=cfg.max_tokens,
        timeout=cfg.generation_timeout,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if owns_store and cfg.storage_backend == "sql":
            from skillbuilder.database import init_db

            await init_db()
        if not cfg.anthropic_api_key:
            logger.warning("No Anthropic API key configured; only BYOK generation will work")
        logger.info("Skillbuilder ready (storage=%s, env=%s)", cfg.storage_backend, cfg.env)

        yield

        await generation_client.aclose()

    app = FastAPI(
        title="Skillbuilder",
        description="Generate, browse and export Claude Code skills",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.store = store
    app.state.generation_client = generation_client
    app.state.general_limiter = FixedWindowRateLimiter(
        cfg.rate_limit_requests,
        cfg.rate_limit_window,
        message="Too many requests, please try again later.",
    )
    app.state.generate_limiter = FixedWindowRateLimiter(
        cfg.generate_limit_requests,
        cfg.generate_limit_window,
        message="Generation limit reached. Please try again in an hour.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_and_harden(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > cfg.max_body_bytes:
            return _error(413, "Request body too large.")
        response = await call_next(request)
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    _register_error_handlers(app)

    # Mount routers
    api_limit = [Depends(general_rate_limit)]
    app.include_router(generate.router, prefix="/api/generate", tags=["generate"], dependencies=api_limit)
    app.include_router(skills.router, prefix="/api/skills", tags=["skills"], dependencies=api_limit)

    @app.get("/api/health", dependencies=api_limit)
    async def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - _STARTED_AT, 3),
        }

    if cfg.serve_static:
        if (cfg.static_dir / "index.html").is_file():
            _mount_spa(app, cfg.static_dir)
        else:
            logger.warning("serve_static is on but %s has no index.html", cfg.static_dir)

    return app


app = create_app()
