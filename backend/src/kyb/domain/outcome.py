"""
Tagged result of a validation run.

``ValidationOrchestrator.evaluate`` returns exactly one of ``Success``,
``NotFound`` or ``GenericFailure``. Failures never carry the downstream
cause, so nothing beyond the failure kind can leak to a caller.
"""

from dataclasses import dataclass
from enum import Enum

from .exceptions import CompanyGenericError, CompanyNotFoundError
from .models import Company, Validation


class OutcomeKind(str, Enum):
    """Kind of terminal result produced by a validation run."""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    GENERIC = "generic"


@dataclass(frozen=True)
class Success:
    """Pipeline completed; ``validation`` has every field populated."""
    validation: Validation
    kind: OutcomeKind = OutcomeKind.SUCCESS

    def unwrap(self) -> Validation:
        return self.validation


@dataclass(frozen=True)
class NotFound:
    """Existence check produced no value."""
    company: Company
    kind: OutcomeKind = OutcomeKind.NOT_FOUND

    def unwrap(self) -> Validation:
        raise CompanyNotFoundError(self.company.name)


@dataclass(frozen=True)
class GenericFailure:
    """Any other failure; the original cause is deliberately not kept."""
    company: Company
    kind: OutcomeKind = OutcomeKind.GENERIC

    def unwrap(self) -> Validation:
        raise CompanyGenericError(self.company.name)


ValidationOutcome = Success | NotFound | GenericFailure
