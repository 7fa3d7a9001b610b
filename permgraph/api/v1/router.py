"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from permgraph.api.v1.dependencies.
"""

from fastapi import APIRouter

from permgraph.api.v1.endpoints import authorization, health, permissions, principals

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(authorization.router, prefix="/authorize", tags=["authorization"])
api_router.include_router(principals.router, prefix="/principals", tags=["principals"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
