# File: backend/app/api/v1/api.py
# Version: v0.8.0
"""
v1 API aggregator.

Routers included under settings.API_PREFIX (/api):
- health      GET /health
- primers     strands, thermodynamics, structures, search, reaction settings
- projects    saved projects, methylation edits, primer CRUD, export
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router
from . import projects as projects_router
from .primers import router as primers_router

api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(primers_router.router)
api_router.include_router(projects_router.router)
