"""
Company validation endpoints.

Runs the validation pipeline for one company and maps its outcome to HTTP.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from kyb.api.schemas import ErrorResponse, ValidateCompanyRequest, ValidationResponse
from kyb.config import get_settings
from kyb.domain.models import Company
from kyb.domain.outcome import GenericFailure, NotFound, Success
from kyb.infrastructure.http_gateway import HttpCompanyServicesGateway
from kyb.services.blocking import BlockingExecutor
from kyb.services.orchestrator import ValidationOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/companies", tags=["validation"])


# Service instances (shared across requests, released on shutdown)
_orchestrator: ValidationOrchestrator | None = None


def get_orchestrator() -> ValidationOrchestrator:
    """Get or create the validation orchestrator."""
    global _orchestrator
    if _orchestrator is None:
        settings = get_settings()
        gateway = HttpCompanyServicesGateway(
            camara_comercio_url=settings.camara_comercio_url,
            bancolombia_url=settings.bancolombia_url,
            datacredito_url=settings.datacredito_url,
            superintendencia_url=settings.superintendencia_url,
            timeout=settings.gateway_timeout_seconds,
        )
        _orchestrator = ValidationOrchestrator(
            gateway=gateway,
            blocking_executor=BlockingExecutor(max_workers=settings.blocking_pool_size),
        )
    return _orchestrator


async def shutdown_orchestrator() -> None:
    """Release the orchestrator's HTTP clients and worker threads."""
    global _orchestrator
    if _orchestrator is None:
        return
    gateway = _orchestrator.gateway
    if isinstance(gateway, HttpCompanyServicesGateway):
        await gateway.aclose()
    _orchestrator.blocking_executor.shutdown()
    _orchestrator = None


@router.post(
    "/validate",
    response_model=ValidationResponse,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"model": ErrorResponse, "description": "Company not found"},
        502: {"model": ErrorResponse, "description": "A downstream check failed"},
    },
)
async def validate_company(
    request: ValidateCompanyRequest,
    orchestrator: ValidationOrchestrator = Depends(get_orchestrator),
):
    """
    Validate a company against every downstream service.

    **Process:**
    1. Check registration in Camara de Comercio
    2. Look up restrictions in Bancolombia
    3. Fetch DataCredito rating and Superintendencia report in parallel
    """
    company = Company(name=request.name, nit=request.nit)
    outcome = await orchestrator.evaluate(company)

    match outcome:
        case Success(validation=validation):
            return ValidationResponse.from_domain(validation)
        case NotFound():
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=ErrorResponse(
                    error="Not Found",
                    detail=f"Company '{company.name}' was not found",
                    code="COMPANY_NOT_FOUND",
                ).model_dump(),
            )
        case GenericFailure():
            return JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content=ErrorResponse(
                    error="Bad Gateway",
                    detail="Company validation could not be completed",
                    code="COMPANY_VALIDATION_FAILED",
                ).model_dump(),
            )
