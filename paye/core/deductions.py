from __future__ import annotations

from dataclasses import dataclass

from paye.core.models import DeductionSet


@dataclass(frozen=True)
class DeductionPolicy:
    mortgage_rate: float = 0.10
    pension_rate: float = 0.08
    rent_rate: float = 0.20
    rent_cap: float = 500_000
    insurance: float = 300_000


# Mortgage (FHS) 10%, pension (PenCom) 8%, rent relief 20% capped, life insurance flat.
STATUTORY_DEDUCTIONS = DeductionPolicy()


def calculate_deductions(
    annual_gross_income: float,
    policy: DeductionPolicy = STATUTORY_DEDUCTIONS,
) -> DeductionSet:
    return DeductionSet(
        mortgage=annual_gross_income * policy.mortgage_rate,
        pension=annual_gross_income * policy.pension_rate,
        rent=min(annual_gross_income * policy.rent_rate, policy.rent_cap),
        insurance=policy.insurance,
    )


__all__ = ["DeductionPolicy", "STATUTORY_DEDUCTIONS", "calculate_deductions"]
