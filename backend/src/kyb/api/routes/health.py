"""
Health check endpoint.

Provides system health status for monitoring and load balancers.
"""

from fastapi import APIRouter, Depends

from kyb import __version__
from kyb.api.routes.validation import get_orchestrator
from kyb.api.schemas import HealthResponse
from kyb.services.orchestrator import ValidationOrchestrator

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    orchestrator: ValidationOrchestrator = Depends(get_orchestrator),
) -> HealthResponse:
    """
    Check system health.

    Returns status of core components for monitoring dashboards
    and load balancer health checks.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        blocking_pool_size=orchestrator.blocking_executor.max_workers,
    )
