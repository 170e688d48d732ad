from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cmmc_tracker.config import settings
from cmmc_tracker.scoring import ScoringIntegrityError

logger = logging.getLogger(__name__)


def _register_routers(app: FastAPI) -> None:
    """Attach all domain routers under the /api prefix.

    Each router module is imported individually so that a missing module
    produces a clear ImportError rather than a silent skip.
    """
    from cmmc_tracker.routers.assessments import router as assessments_router
    from cmmc_tracker.routers.controls import router as controls_router
    from cmmc_tracker.routers.reports import router as reports_router
    from cmmc_tracker.routers.responses import router as responses_router
    from cmmc_tracker.routers.scoring import router as scoring_router

    app.include_router(controls_router, prefix="/api")
    app.include_router(assessments_router, prefix="/api")
    app.include_router(responses_router, prefix="/api")
    app.include_router(scoring_router, prefix="/api")
    app.include_router(reports_router, prefix="/api")


async def _scoring_integrity_handler(request: Request, exc: ScoringIntegrityError) -> JSONResponse:
    logger.warning("Scoring integrity error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore[type-arg]
    """Application lifespan handler: set up resources on startup."""
    from cmmc_tracker.database import AsyncSessionLocal, engine
    from cmmc_tracker.models import Base
    from cmmc_tracker.seed import seed_default_assessments

    reports_dir = Path(settings.REPORTS_DIR)
    reports_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Reports directory ensured at %s", reports_dir.resolve())

    if settings.CREATE_TABLES_ON_STARTUP:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured.")

    if settings.SEED_ON_STARTUP:
        async with AsyncSessionLocal() as session:
            await seed_default_assessments(session)

    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Construct and configure the FastAPI application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="CMMC Compliance Tracker API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ScoringIntegrityError, _scoring_integrity_handler)

    _register_routers(app)

    @app.get("/api/health", tags=["health"])
    async def health_check() -> dict[str, Any]:
        """Liveness probe endpoint."""
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "cmmc_tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
