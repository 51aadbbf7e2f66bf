"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from placement_ats.api.routes.ats_routes import router as ats_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(ats_router)
