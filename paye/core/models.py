from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Period = Literal["annual", "monthly"]


class DeductionSet(BaseModel):
    mortgage: float = Field(0.0, ge=0)
    pension: float = Field(0.0, ge=0)
    rent: float = Field(0.0, ge=0)
    insurance: float = Field(0.0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def total(self) -> float:
        return self.mortgage + self.pension + self.rent + self.insurance


class BracketAllocation(BaseModel):
    bracket: str
    rate: float
    amount_taxed: float
    tax_owed: float

    model_config = ConfigDict(frozen=True)


class Apportionment(BaseModel):
    breakdown: tuple[BracketAllocation, ...] = ()
    total_tax: float = 0.0

    model_config = ConfigDict(frozen=True)


class TaxResult(BaseModel):
    """Annual figures for one gross income.

    ``effective_rate`` is a percentage of gross income, not a fraction.
    """

    gross_income: float
    deductions: DeductionSet
    total_deductions: float
    taxable_income: float
    breakdown: tuple[BracketAllocation, ...] = ()
    total_tax: float
    net_income: float
    effective_rate: float

    model_config = ConfigDict(frozen=True)


class PeriodView(TaxResult):
    period: Period = "annual"


__all__ = [
    "Apportionment",
    "BracketAllocation",
    "DeductionSet",
    "Period",
    "PeriodView",
    "TaxResult",
]
