# File: backend/app/main.py
# Version: v0.4.0
"""
BisPrimer API entry point (`uvicorn backend.app.main:app`).

Route assembly lives in backend/app/api/v1/api.py and is mounted under
settings.API_PREFIX. On startup the SQLite project store gets any missing
tables; set SCHEMA_AUTOHEAL=false to skip that.
"""
from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.v1.api import api_router
from backend.app.core.config import settings
from backend.app.db.maintenance import ensure_schema
from backend.app.db.session import engine

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.on_event("startup")
def _startup_autoheal() -> None:
    enabled = os.getenv("SCHEMA_AUTOHEAL", "true").strip().lower() in ("1", "true", "yes")
    if enabled and engine.url.get_backend_name() == "sqlite":
        logger.info("schema-autoheal: %s", ", ".join(ensure_schema(engine)))
