import logging
import math
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assessdesk.core import config
from assessdesk.core.logging_config import setup_logging, sanitize_log_data
from assessdesk.api.routes import rubrics, candidates, evaluations, dashboard, export, health

logger = logging.getLogger(__name__)


# ============================================
# STARTUP
# ============================================

def prepare_database():
    """Bring the schema up to date and optionally insert demo data."""
    from assessdesk.db.init_db import init_db
    from assessdesk.db.migrate import run_migrations
    from assessdesk.db.seed import seed_demo_data
    from assessdesk.db.session import SessionLocal

    if config.RUN_MIGRATIONS:
        run_migrations()
    else:
        init_db()

    if config.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)
    settings = sanitize_log_data({
        "database_url": config.DATABASE_URL,
        "api_prefix": config.API_PREFIX,
        "version": config.APP_VERSION,
        "run_migrations": config.RUN_MIGRATIONS,
    })
    logger.info(f"Starting AssessDesk: {settings}")
    prepare_database()
    yield
    logger.info("AssessDesk stopped")


# ============================================
# ERROR HANDLERS
# ============================================

def _finite_or_none(value: float):
    return value if math.isfinite(value) else None


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """422 with the usual error list; NaN or Infinity inputs are echoed back as null."""
    logger.warning(f"Request validation failed: path={request.url.path}, errors={len(exc.errors())}")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors(), custom_encoder={float: _finite_or_none})},
    )


# ============================================
# FASTAPI APP INIT
# ============================================

def create_app() -> FastAPI:
    app = FastAPI(title="AssessDesk", version=config.APP_VERSION, lifespan=lifespan)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    # API routers
    app.include_router(dashboard.router, prefix=config.API_PREFIX)
    app.include_router(rubrics.router, prefix=config.API_PREFIX)
    app.include_router(candidates.router, prefix=config.API_PREFIX)
    app.include_router(evaluations.router, prefix=config.API_PREFIX)
    app.include_router(export.router, prefix=config.API_PREFIX)
    app.include_router(health.router)

    @app.get("/")
    def root():
        return {"status": "AssessDesk API running"}

    return app


app = create_app()
