"""API router configuration."""

from fastapi import APIRouter

from team_roster.api.endpoints import team

# Create main API router
api_router = APIRouter()

# Team roster - public page plus administration
api_router.include_router(
    team.router,
    prefix="/team",
    tags=["Team"],
    responses={
        400: {"description": "Validation Error"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Team member not found"},
        409: {"description": "Roster conflict"},
    },
)


def get_api_router():
    """Get configured API router with all endpoints."""
    return api_router
