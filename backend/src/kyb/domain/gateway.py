"""CompanyServicesGateway port: the four downstream checks in one place."""

from abc import ABC, abstractmethod

from .models import Company, CreditRating, Report, Restriction


class CompanyServicesGateway(ABC):
    """Port interface for the services a company is validated against.

    Three operations are coroutines. ``get_state_data_credito`` is a plain
    blocking call: implementations may hold the calling thread for the whole
    request, so callers must not run it on the event loop.
    """

    @abstractmethod
    async def validate_in_camara_comercio(self, company: Company) -> bool | None:
        """Check the company's registration in Camara de Comercio.

        Returns:
            True/False when the registry answered, None when it has no
            record of the company at all.
        """

    @abstractmethod
    async def get_restrictions_bancolombia(self, company: Company) -> list[Restriction]:
        """List the restrictions the bank holds against the company."""

    @abstractmethod
    def get_state_data_credito(self, company: Company) -> CreditRating:
        """Fetch the company's rating from DataCredito. Blocking I/O."""

    @abstractmethod
    async def get_report_super_intendencia(self, company: Company) -> Report:
        """Fetch the company's report from the Superintendencia."""
