"""
API Router configuration.

Aggregates the endpoints served under /api and /admin.
"""

from fastapi import APIRouter

from chirpy.api.v1.endpoints import (
    admin,
    auth,
    users,
)

api_router = APIRouter()

# Authentication (login/refresh/revoke need no access token)
api_router.include_router(
    auth.router,
    tags=["authentication"]
)

# Account management
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

admin_router = APIRouter()

# Dev-only maintenance
admin_router.include_router(
    admin.router,
    tags=["admin"]
)
