"""Unit tests for ValidationOrchestrator.

Covers the three-stage pipeline, the NotFound/Generic classification,
the DataCredito fallback and the stage-3 fan-out/join.
"""

import asyncio
import logging
import threading
from unittest.mock import AsyncMock, Mock

import pytest

from kyb.domain.exceptions import CompanyGenericError, CompanyNotFoundError
from kyb.domain.models import Company, CreditRating, Report, Restriction
from kyb.domain.outcome import GenericFailure, NotFound, OutcomeKind, Success


def assert_call_counts(gateway, camara, restrictions, credit, report):
    assert gateway.validate_in_camara_comercio.call_count == camara
    assert gateway.get_restrictions_bancolombia.call_count == restrictions
    assert gateway.get_state_data_credito.call_count == credit
    assert gateway.get_report_super_intendencia.call_count == report


class TestReferenceScenarios:
    """The four named scenarios."""

    @pytest.mark.asyncio
    async def test_performs_all_validations_without_errors(self, orchestrator, gateway):
        company = Company(name="Ferreteria Especial")

        validation = await orchestrator.validate_company(company)

        assert validation.company == company
        assert validation.exist_in_camara_comercio is True
        assert validation.credit_rating == CreditRating.LOW_RISK
        assert validation.restrictions == (Restriction(name="blah"),)
        assert validation.report == Report(name="foobar")
        assert validation.is_complete
        assert_call_counts(gateway, 1, 1, 1, 1)

    @pytest.mark.asyncio
    async def test_credit_failure_falls_back_to_mid_risk(self, orchestrator, gateway):
        validation = await orchestrator.validate_company(Company(name="Verduras Frescas"))

        assert validation.exist_in_camara_comercio is True
        assert validation.credit_rating == CreditRating.MID_RISK
        assert validation.restrictions == (Restriction(name="blah"),)
        assert validation.report == Report(name="foobar")
        assert_call_counts(gateway, 1, 1, 1, 1)

    @pytest.mark.asyncio
    async def test_company_not_found(self, orchestrator, gateway):
        with pytest.raises(CompanyNotFoundError):
            await orchestrator.validate_company(Company(name="Panaderia Acme"))

        assert_call_counts(gateway, 1, 0, 0, 0)

    @pytest.mark.asyncio
    async def test_restriction_failure_is_mapped_to_generic(self, orchestrator, gateway):
        with pytest.raises(CompanyGenericError) as exc_info:
            await orchestrator.validate_company(Company(name="Minimercado Especial"))

        assert "opsss" not in str(exc_info.value)
        assert exc_info.value.__cause__ is None
        assert_call_counts(gateway, 1, 1, 0, 0)


class TestExistenceCheck:

    @pytest.mark.asyncio
    async def test_false_is_a_successful_result(self, orchestrator, gateway):
        gateway.validate_in_camara_comercio = AsyncMock(return_value=False)

        outcome = await orchestrator.evaluate(Company(name="Ferreteria Especial"))

        assert isinstance(outcome, Success)
        assert outcome.validation.exist_in_camara_comercio is False
        assert outcome.validation.is_complete
        assert_call_counts(gateway, 1, 1, 1, 1)

    @pytest.mark.asyncio
    async def test_empty_result_is_not_found_outcome(self, orchestrator, gateway):
        company = Company(name="Panaderia Acme")

        outcome = await orchestrator.evaluate(company)

        assert outcome == NotFound(company=company)
        assert outcome.kind == OutcomeKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_existence_check_error_is_generic(self, orchestrator, gateway):
        gateway.validate_in_camara_comercio = AsyncMock(side_effect=ConnectionError("down"))

        outcome = await orchestrator.evaluate(Company(name="Ferreteria Especial"))

        assert isinstance(outcome, GenericFailure)
        assert_call_counts(gateway, 1, 0, 0, 0)


class TestRestrictionLookup:

    @pytest.mark.asyncio
    async def test_restriction_order_is_preserved(self, orchestrator, gateway):
        restrictions = [Restriction(name="embargo"), Restriction(name="mora", description="90 dias")]
        gateway.get_restrictions_bancolombia = AsyncMock(return_value=restrictions)

        validation = await orchestrator.validate_company(Company(name="Ferreteria Especial"))

        assert validation.restrictions == tuple(restrictions)

    @pytest.mark.asyncio
    async def test_empty_restrictions_succeed(self, orchestrator, gateway):
        gateway.get_restrictions_bancolombia = AsyncMock(return_value=[])

        validation = await orchestrator.validate_company(Company(name="Ferreteria Especial"))

        assert validation.restrictions == ()
        assert validation.is_complete

    @pytest.mark.asyncio
    async def test_missing_restrictions_are_generic(self, orchestrator, gateway):
        gateway.get_restrictions_bancolombia = AsyncMock(return_value=None)

        outcome = await orchestrator.evaluate(Company(name="Ferreteria Especial"))

        assert isinstance(outcome, GenericFailure)
        assert_call_counts(gateway, 1, 1, 0, 0)


class TestCreditAndReport:

    @pytest.mark.asyncio
    async def test_report_failure_is_generic_after_credit_completes(self, orchestrator, gateway):
        credit_finished = threading.Event()

        def credit(company):
            credit_finished.set()
            return CreditRating.LOW_RISK

        gateway.get_state_data_credito = Mock(side_effect=credit)
        gateway.get_report_super_intendencia = AsyncMock(side_effect=RuntimeError("timeout"))

        outcome = await orchestrator.evaluate(Company(name="Ferreteria Especial"))

        assert isinstance(outcome, GenericFailure)
        assert credit_finished.is_set()
        assert_call_counts(gateway, 1, 1, 1, 1)

    @pytest.mark.asyncio
    async def test_missing_report_is_generic(self, orchestrator, gateway):
        gateway.get_report_super_intendencia = AsyncMock(return_value=None)

        outcome = await orchestrator.evaluate(Company(name="Ferreteria Especial"))

        assert isinstance(outcome, GenericFailure)

    @pytest.mark.asyncio
    async def test_invalid_credit_result_falls_back(self, orchestrator, gateway):
        # Returning an error object instead of raising it
        gateway.get_state_data_credito = Mock(return_value=RuntimeError("Error no esperado"))

        validation = await orchestrator.validate_company(Company(name="Ferreteria Especial"))

        assert validation.credit_rating == CreditRating.MID_RISK

    @pytest.mark.asyncio
    async def test_credit_rating_value_is_coerced(self, orchestrator, gateway):
        gateway.get_state_data_credito = Mock(return_value="HIGH_RISK")

        validation = await orchestrator.validate_company(Company(name="Ferreteria Especial"))

        assert validation.credit_rating == CreditRating.HIGH_RISK

    @pytest.mark.asyncio
    async def test_credit_fallback_is_logged(self, orchestrator, caplog):
        with caplog.at_level(logging.WARNING, logger="kyb.services.orchestrator"):
            await orchestrator.validate_company(Company(name="Verduras Frescas"))

        assert "MID_RISK" in caplog.text

    @pytest.mark.asyncio
    async def test_blocking_call_runs_on_worker_thread(self, orchestrator, gateway):
        threads = []

        def credit(company):
            threads.append(threading.current_thread())
            return CreditRating.LOW_RISK

        gateway.get_state_data_credito = Mock(side_effect=credit)

        await orchestrator.validate_company(Company(name="Ferreteria Especial"))

        assert len(threads) == 1
        assert threads[0] is not threading.main_thread()
        assert threads[0].name.startswith("kyb-blocking")

    @pytest.mark.asyncio
    async def test_branches_run_concurrently(self, orchestrator, gateway):
        # Each branch waits for the other to start; sequential runs time out
        loop = asyncio.get_running_loop()
        credit_started = asyncio.Event()
        report_started = threading.Event()

        def credit(company):
            loop.call_soon_threadsafe(credit_started.set)
            if not report_started.wait(timeout=2):
                raise TimeoutError("report branch never started")
            return CreditRating.LOW_RISK

        async def report(company):
            report_started.set()
            await asyncio.wait_for(credit_started.wait(), timeout=2)
            return Report(name="foobar")

        gateway.get_state_data_credito = Mock(side_effect=credit)
        gateway.get_report_super_intendencia = AsyncMock(side_effect=report)

        validation = await orchestrator.validate_company(Company(name="Ferreteria Especial"))

        assert validation.credit_rating == CreditRating.LOW_RISK
        assert validation.report == Report(name="foobar")


class TestIndependentInvocations:

    @pytest.mark.asyncio
    async def test_concurrent_validations_do_not_interfere(self, orchestrator, gateway):
        names = ["Ferreteria Especial", "Verduras Frescas", "Panaderia Acme", "Minimercado Especial"]

        outcomes = await asyncio.gather(
            *(orchestrator.evaluate(Company(name=name)) for name in names)
        )

        assert [o.kind for o in outcomes] == [
            OutcomeKind.SUCCESS,
            OutcomeKind.SUCCESS,
            OutcomeKind.NOT_FOUND,
            OutcomeKind.GENERIC,
        ]
        assert outcomes[0].validation.credit_rating == CreditRating.LOW_RISK
        assert outcomes[1].validation.credit_rating == CreditRating.MID_RISK
        assert_call_counts(gateway, 4, 3, 2, 2)
