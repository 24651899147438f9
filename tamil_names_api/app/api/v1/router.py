"""
Top-level router for version 1 of the API.

This router aggregates the area-specific routers under a unified
prefix.  When new endpoints are added, update this file to include
their routers.
"""

from fastapi import APIRouter

from .endpoints import admin, health, names, session, users


router = APIRouter()

router.include_router(names.router, prefix="/names", tags=["names"])
router.include_router(users.router, prefix="/users", tags=["users"])
# The session router defines its own "/session" path.
router.include_router(session.router, tags=["session"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(health.router, tags=["health"])
