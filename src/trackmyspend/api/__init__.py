"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: The auth router mixes open routes (register, login) with
protected ones (change-password, account, me); protection is declared
per handler with Depends(get_current_user) rather than on the router.
"""

from fastapi import APIRouter

from trackmyspend.api.auth import router as auth_router
from trackmyspend.api.health import router as health_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
