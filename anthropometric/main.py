# anthropometric/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from starlette.middleware.cors import CORSMiddleware

from anthropometric import settings
from anthropometric.db import close_client
from anthropometric.db_init import ensure_indexes
from anthropometric.errors import register_error_handlers
from anthropometric.middleware.audit_middleware import AuditMiddleware
from anthropometric.routes import athletes, auth, measurements

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_indexes()
    logger.info("MongoDB ready (%s)", settings.MONGO_DB)
    yield
    close_client()


def create_app() -> FastAPI:
    app = FastAPI(title="Anthropometric API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(AuditMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Routers
    api = APIRouter()
    api.include_router(auth.router)
    for router in measurements.routers:
        api.include_router(router)
    api.include_router(measurements.aggregate_router)
    api.include_router(athletes.router)
    app.include_router(api, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    return app


app = create_app()
