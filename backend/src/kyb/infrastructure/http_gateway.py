"""
HTTP implementation of the company services gateway.

Talks JSON over HTTP to the four downstream services:
- Camara de Comercio: company registration
- Bancolombia: restrictions held against the company
- DataCredito: credit rating (sync client, blocking by contract)
- Superintendencia: regulator report

No retries are attempted. Any non-2xx response other than a registry 404
raises ``httpx.HTTPStatusError``.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from kyb.domain.gateway import CompanyServicesGateway
from kyb.domain.models import Company, CreditRating, Report, Restriction

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpCompanyServicesGateway(CompanyServicesGateway):
    """
    Gateway backed by httpx clients.

    One AsyncClient serves the non-blocking checks; a sync Client serves
    DataCredito, whose calls hold the calling thread.

    Example:
        gateway = HttpCompanyServicesGateway(
            camara_comercio_url="http://registry:8080",
            bancolombia_url="http://restrictions:8080",
            datacredito_url="http://ratings:8080",
            superintendencia_url="http://reports:8080",
        )
        exists = await gateway.validate_in_camara_comercio(company)
        await gateway.aclose()
    """

    def __init__(
        self,
        camara_comercio_url: str,
        bancolombia_url: str,
        datacredito_url: str,
        superintendencia_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize gateway.

        Args:
            camara_comercio_url: Registry base URL
            bancolombia_url: Restrictions base URL
            datacredito_url: Credit rating base URL
            superintendencia_url: Regulator reports base URL
            timeout: Per-request timeout in seconds
            transport: Override sync transport (for testing)
            async_transport: Override async transport (for testing)
        """
        self.camara_comercio_url = camara_comercio_url.rstrip("/")
        self.bancolombia_url = bancolombia_url.rstrip("/")
        self.datacredito_url = datacredito_url.rstrip("/")
        self.superintendencia_url = superintendencia_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._async_client = httpx.AsyncClient(timeout=timeout, transport=async_transport)

    @staticmethod
    def _company_path(company: Company, resource: str) -> str:
        return f"/companies/{quote(company.identifier, safe='')}/{resource}"

    async def _get_json(self, base_url: str, path: str) -> Any:
        url = f"{base_url}{path}"
        logger.debug(f"GET {url}")
        response = await self._async_client.get(url)
        response.raise_for_status()
        return response.json()

    async def validate_in_camara_comercio(self, company: Company) -> bool | None:
        url = f"{self.camara_comercio_url}{self._company_path(company, 'registration')}"
        response = await self._async_client.get(url)
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(f"No registry record for {company.identifier}")
            return None
        response.raise_for_status()

        registered = response.json().get("registered")
        if registered is None:
            return None
        if not isinstance(registered, bool):
            raise ValueError(f"Unexpected registration value: {registered!r}")
        return registered

    async def get_restrictions_bancolombia(self, company: Company) -> list[Restriction]:
        payload = await self._get_json(
            self.bancolombia_url, self._company_path(company, "restrictions")
        )
        return [
            Restriction(name=item["name"], description=item.get("description"))
            for item in payload
        ]

    def get_state_data_credito(self, company: Company) -> CreditRating:
        url = f"{self.datacredito_url}{self._company_path(company, 'rating')}"
        logger.debug(f"GET {url} (blocking)")
        response = self._client.get(url)
        response.raise_for_status()
        return CreditRating(response.json()["rating"])

    async def get_report_super_intendencia(self, company: Company) -> Report:
        payload = await self._get_json(
            self.superintendencia_url, self._company_path(company, "report")
        )
        return Report(name=payload["name"], summary=payload.get("summary"))

    async def aclose(self) -> None:
        """Close both HTTP clients."""
        await self._async_client.aclose()
        self._client.close()
