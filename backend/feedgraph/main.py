import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feedgraph.api.routes.feeds import router as feeds_router
from feedgraph.api.routes.health import router as health_router
from feedgraph.api.routes.ingest import router as ingest_router
from feedgraph.api.routes.mentions import router as mentions_router
from feedgraph.api.routes.snapshots import router as snapshots_router

from feedgraph.core.config import settings
from feedgraph.core.logging import configure_logging
from feedgraph.db.base import create_all
from feedgraph.db.session import engine

logger = logging.getLogger(__name__)

configure_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

app = FastAPI(title=settings.PROJECT_NAME, version="0.1")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["health"])
app.include_router(feeds_router, prefix="/api", tags=["feeds"])
app.include_router(mentions_router, prefix="/api", tags=["mentions"])
app.include_router(snapshots_router, prefix="/api", tags=["snapshots"])
app.include_router(ingest_router, prefix="/api", tags=["ingest"])


@app.on_event("startup")
def _startup_db() -> None:
    create_all(engine)
    logger.info("[db] schema ready (%s)", settings.ENV)
    logger.info("[cors] allow_origins = %s", settings.cors_origins_list)
