import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hunt.api.admin import router as admin_router
from hunt.api.submissions import router as submissions_router
from hunt.core.config import Settings, get_settings
from hunt.core.db import Base, build_engine, build_session_factory
from hunt.core.logging_config import configure_logging
from hunt.schemas.submission import SubmissionOutcome
from hunt.services.qualification import SubmissionResult
from hunt.services.submission_store import StorageError

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = build_engine(settings.database_url)
    # Create tables on startup
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Treasure Hunt Qualifier API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "x-admin-secret", "Authorization"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(request: Request, exc: RequestValidationError):
        result = SubmissionResult.of(SubmissionOutcome.INVALID_PAYLOAD)
        return JSONResponse(
            {"outcome": result.outcome.value, "message": result.message},
            status_code=result.status_code,
        )

    @app.exception_handler(StorageError)
    async def storage_failure(request: Request, exc: StorageError):
        logger.exception("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse({"message": "Server error"}, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                {"message": "404: NOT_FOUND", "error": "The requested resource was not found"},
                status_code=404,
            )
        return JSONResponse({"message": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    app.include_router(submissions_router)
    app.include_router(admin_router)

    @app.get("/health")
    def health():
        return {
            "ok": True,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - app.state.started_at, 3),
        }

    logger.info("Qualifier ready: %d teams on roster, %d slots", len(settings.team_ids), settings.qualification_slots)
    return app
