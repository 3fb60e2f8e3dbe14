"""
Company validation orchestrator service.

Coordinates the validation pipeline:
1. Existence check in Camara de Comercio
2. Restriction lookup in Bancolombia
3. DataCredito rating and Superintendencia report, fetched in parallel

This is the primary interface for validating a company.
"""

import asyncio
import logging

from kyb.domain.gateway import CompanyServicesGateway
from kyb.domain.models import Company, CreditRating, Report, Validation
from kyb.domain.outcome import GenericFailure, NotFound, Success, ValidationOutcome

from .blocking import BlockingExecutor

logger = logging.getLogger(__name__)


class StageError(Exception):
    """A gateway answered in a way that breaks its contract."""


class ValidationOrchestrator:
    """
    Orchestrates the three-stage company validation pipeline.

    Each stage returns a new copy of ``Validation``; nothing is mutated, so
    concurrent validations share no state apart from the blocking pool.

    Example:
        orchestrator = ValidationOrchestrator(
            gateway=HttpCompanyServicesGateway(...),
            blocking_executor=BlockingExecutor(max_workers=16),
        )

        validation = await orchestrator.validate_company(Company(name="Acme"))
    """

    # Substituted when the credit bureau call fails
    CREDIT_RATING_FALLBACK = CreditRating.MID_RISK

    def __init__(
        self,
        gateway: CompanyServicesGateway,
        blocking_executor: BlockingExecutor | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            gateway: Downstream services the company is checked against
            blocking_executor: Pool for the blocking credit call (created if None)
        """
        self.gateway = gateway
        self.blocking_executor = blocking_executor or BlockingExecutor()

    async def validate_company(self, company: Company) -> Validation:
        """
        Validate a company against every downstream service.

        Returns:
            Fully populated Validation

        Raises:
            CompanyNotFoundError: the existence check returned no data
            CompanyGenericError: any other downstream failure
        """
        outcome = await self.evaluate(company)
        return outcome.unwrap()

    async def evaluate(self, company: Company) -> ValidationOutcome:
        """
        Run the pipeline and return its tagged outcome.

        Downstream exceptions are logged and folded into GenericFailure here;
        NotFound is produced only by an empty existence check.
        """
        logger.info(f"Validating company: {company.name}")

        try:
            validation = await self._check_camara_comercio(company)
            if validation is None:
                logger.info(f"Company not found in Camara de Comercio: {company.name}")
                return NotFound(company=company)

            validation = await self._search_restrictions(validation)
            validation = await self._check_credit_and_report(validation)
        except Exception:
            logger.exception(f"Validation failed for company: {company.name}")
            return GenericFailure(company=company)

        logger.info(
            f"Validation complete: company={company.name}, "
            f"exists={validation.exist_in_camara_comercio}, "
            f"restrictions={len(validation.restrictions or ())}, "
            f"credit_rating={validation.credit_rating.value}"
        )
        return Success(validation=validation)

    async def _check_camara_comercio(self, company: Company) -> Validation | None:
        """Stage 1: start the Validation, or return None if there is no record."""
        exists = await self.gateway.validate_in_camara_comercio(company)
        if exists is None:
            return None
        # False is a valid answer, not a missing one
        return Validation(company=company, exist_in_camara_comercio=exists)

    async def _search_restrictions(self, validation: Validation) -> Validation:
        """Stage 2: copy of the Validation with the bank restrictions."""
        restrictions = await self.gateway.get_restrictions_bancolombia(validation.company)
        if restrictions is None:
            raise StageError("Restriction lookup returned no result")
        return validation.with_restrictions(restrictions)

    async def _check_credit_and_report(self, validation: Validation) -> Validation:
        """Stage 3: credit rating and regulator report, joined."""
        company = validation.company

        # Wait for both branches even when the report fails first
        report, credit_rating = await asyncio.gather(
            self.gateway.get_report_super_intendencia(company),
            self._fetch_credit_rating(company),
            return_exceptions=True,
        )

        if isinstance(report, BaseException):
            raise report
        if report is None:
            raise StageError("Superintendencia returned no report")
        # _fetch_credit_rating absorbs Exception; anything else is cancellation
        if isinstance(credit_rating, BaseException):
            raise credit_rating

        return validation.with_credit_and_report(credit_rating, report)

    async def _fetch_credit_rating(self, company: Company) -> CreditRating:
        """Run the blocking DataCredito call on the worker pool.

        Failures fall back to CREDIT_RATING_FALLBACK instead of propagating.
        """
        try:
            result = await self.blocking_executor.run(
                self.gateway.get_state_data_credito, company
            )
            return CreditRating(result)
        except Exception as e:
            logger.warning(
                f"DataCredito check failed for {company.name}, "
                f"using {self.CREDIT_RATING_FALLBACK.value}: {e!r}"
            )
            return self.CREDIT_RATING_FALLBACK
