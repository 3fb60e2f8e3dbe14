"""Pytest fixtures for company validation tests.

Provides:
- A mocked CompanyServicesGateway wired with the reference scenarios
- A ValidationOrchestrator backed by a small blocking pool

Scenarios (by company name):
- "Panaderia Acme": existence check returns no value
- "Minimercado Especial": restriction lookup raises
- "Verduras Frescas": DataCredito check raises
- anything else: every check succeeds
"""

import sys
import time
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

# Add backend/src to path for imports
backend_src = Path(__file__).parent.parent / "backend" / "src"
sys.path.insert(0, str(backend_src))

from kyb.domain.gateway import CompanyServicesGateway
from kyb.domain.models import Company, CreditRating, Report, Restriction
from kyb.services.blocking import BlockingExecutor
from kyb.services.orchestrator import ValidationOrchestrator

NOT_FOUND_COMPANY = "Panaderia Acme"
RESTRICTIONS_ERROR_COMPANY = "Minimercado Especial"
CREDIT_ERROR_COMPANY = "Verduras Frescas"


async def _validate_in_camara_comercio(company: Company) -> bool | None:
    if company.name.lower() == NOT_FOUND_COMPANY.lower():
        return None
    return True


async def _get_restrictions_bancolombia(company: Company) -> list[Restriction]:
    if company.name.lower() == RESTRICTIONS_ERROR_COMPANY.lower():
        raise RuntimeError("opsss")
    return [Restriction(name="blah")]


def _get_state_data_credito(company: Company) -> CreditRating:
    time.sleep(0.2)
    if company.name.lower() == CREDIT_ERROR_COMPANY.lower():
        raise RuntimeError("Error no esperado")
    return CreditRating.LOW_RISK


@pytest.fixture
def gateway():
    """Mock gateway following the reference scenarios."""
    mock = Mock(spec=CompanyServicesGateway)
    mock.validate_in_camara_comercio = AsyncMock(side_effect=_validate_in_camara_comercio)
    mock.get_restrictions_bancolombia = AsyncMock(side_effect=_get_restrictions_bancolombia)
    mock.get_state_data_credito = Mock(side_effect=_get_state_data_credito)
    mock.get_report_super_intendencia = AsyncMock(return_value=Report(name="foobar"))
    return mock


@pytest.fixture
def blocking_executor():
    """Small worker pool, shut down after each test."""
    executor = BlockingExecutor(max_workers=4)
    yield executor
    executor.shutdown()


@pytest.fixture
def orchestrator(gateway, blocking_executor):
    """Orchestrator wired to the mock gateway."""
    return ValidationOrchestrator(gateway=gateway, blocking_executor=blocking_executor)
