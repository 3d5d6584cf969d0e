"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import auth, rides, drivers

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(rides.router)
api_router.include_router(drivers.router)


@api_router.get("/health", tags=["health"])
async def api_health():
    """Health check endpoint."""
    return {"status": "ok"}
