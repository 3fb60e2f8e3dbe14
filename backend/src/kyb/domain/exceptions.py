"""
Exceptions raised by the validation use case.

Only two failure kinds reach callers. Neither carries the downstream cause:
it is logged where it happens and then dropped.
"""


class CompanyValidationError(Exception):
    """Base class for terminal company validation failures."""

    code = "COMPANY_VALIDATION_ERROR"

    def __init__(self, company_name: str, message: str | None = None) -> None:
        self.company_name = company_name
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return f"Validation failed for company '{self.company_name}'"


class CompanyNotFoundError(CompanyValidationError):
    """The existence check returned no data for the company."""

    code = "COMPANY_NOT_FOUND"

    def default_message(self) -> str:
        return f"Company '{self.company_name}' was not found in Camara de Comercio"


class CompanyGenericError(CompanyValidationError):
    """Any other downstream failure."""

    code = "COMPANY_VALIDATION_FAILED"
