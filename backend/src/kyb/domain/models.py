"""
Domain models for company validation.

These models represent the subject of a validation and the records returned
by each downstream check, plus the aggregate ``Validation`` result.

Design Decisions:
- Frozen dataclasses so a record can be shared across concurrent stages
- Validation is updated by copy (``dataclasses.replace``), never in place
- Restrictions are stored as a tuple to keep the aggregate hashable and immutable
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable


class CreditRating(Enum):
    """Risk tier reported by the credit bureau, ordered from lowest to highest."""
    LOW_RISK = "LOW_RISK"
    MID_RISK = "MID_RISK"
    HIGH_RISK = "HIGH_RISK"

    @property
    def rank(self) -> int:
        """Position of the tier in ascending risk order."""
        return _RISK_ORDER.index(self)

    def __lt__(self, other: "CreditRating") -> bool:
        if not isinstance(other, CreditRating):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "CreditRating") -> bool:
        if not isinstance(other, CreditRating):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "CreditRating") -> bool:
        if not isinstance(other, CreditRating):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "CreditRating") -> bool:
        if not isinstance(other, CreditRating):
            return NotImplemented
        return self.rank >= other.rank


_RISK_ORDER = (CreditRating.LOW_RISK, CreditRating.MID_RISK, CreditRating.HIGH_RISK)


@dataclass(frozen=True)
class Company:
    """
    The business entity being validated.

    ``nit`` is the Colombian tax identifier. Downstream services are keyed
    on it when present, otherwise on the registered name.
    """
    name: str
    nit: str | None = None

    def __post_init__(self) -> None:
        """Reject blank names."""
        if not self.name or not self.name.strip():
            raise ValueError("Company name must not be empty")

    @property
    def identifier(self) -> str:
        """Key used to look the company up in downstream services."""
        return self.nit or self.name


@dataclass(frozen=True)
class Restriction:
    """A constraint the bank holds against the company."""
    name: str
    description: str | None = None


@dataclass(frozen=True)
class Report:
    """Report filed with the Superintendencia de Sociedades."""
    name: str
    summary: str | None = None


@dataclass(frozen=True)
class Validation:
    """
    Aggregate result of the validation pipeline.

    Each stage returns a new copy with its own fields set. Fields owned by
    later stages stay ``None`` until that stage completes, and a copy helper
    only ever touches the fields of its own stage.
    """
    company: Company
    exist_in_camara_comercio: bool
    restrictions: tuple[Restriction, ...] | None = None
    credit_rating: CreditRating | None = None
    report: Report | None = None

    def with_restrictions(self, restrictions: Iterable[Restriction]) -> "Validation":
        """Copy with the bank restrictions populated (order preserved)."""
        return replace(self, restrictions=tuple(restrictions))

    def with_credit_and_report(
        self,
        credit_rating: CreditRating,
        report: Report,
    ) -> "Validation":
        """Copy with the credit bureau and regulator results populated."""
        return replace(self, credit_rating=credit_rating, report=report)

    @property
    def is_complete(self) -> bool:
        """True once every stage has contributed its fields."""
        return (
            self.restrictions is not None
            and self.credit_rating is not None
            and self.report is not None
        )
