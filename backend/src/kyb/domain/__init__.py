"""
Domain package - Core business logic with no external dependencies.

This package contains pure Python domain models, the gateway port and the
outcome types that describe a company validation.
"""

from .exceptions import CompanyGenericError, CompanyNotFoundError, CompanyValidationError
from .gateway import CompanyServicesGateway
from .models import Company, CreditRating, Report, Restriction, Validation
from .outcome import GenericFailure, NotFound, OutcomeKind, Success, ValidationOutcome

__all__ = [
    "Company",
    "CompanyGenericError",
    "CompanyNotFoundError",
    "CompanyServicesGateway",
    "CompanyValidationError",
    "CreditRating",
    "GenericFailure",
    "NotFound",
    "OutcomeKind",
    "Report",
    "Restriction",
    "Success",
    "Validation",
    "ValidationOutcome",
]
