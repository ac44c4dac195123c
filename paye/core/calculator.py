from __future__ import annotations

from typing import Literal, Sequence

from paye.core.brackets import NTA_2025_BRACKETS, TaxBracket, apportion
from paye.core.deductions import STATUTORY_DEDUCTIONS, DeductionPolicy, calculate_deductions
from paye.core.models import DeductionSet, TaxResult

ZeroIncomePolicy = Literal["statutory", "none"]
ZERO_INCOME_POLICIES: tuple[str, ...] = ("statutory", "none")


def deductions_for(
    annual_gross_income: float,
    policy: DeductionPolicy = STATUTORY_DEDUCTIONS,
    zero_income_deductions: ZeroIncomePolicy = "statutory",
) -> DeductionSet:
    """Statutory deductions for ``annual_gross_income`` under the zero-income policy."""
    if annual_gross_income == 0 and zero_income_deductions == "none":
        return DeductionSet()
    return calculate_deductions(annual_gross_income, policy)


def calculate_tax(
    annual_gross_income: float,
    *,
    brackets: Sequence[TaxBracket] = NTA_2025_BRACKETS,
    deduction_policy: DeductionPolicy = STATUTORY_DEDUCTIONS,
    zero_income_deductions: ZeroIncomePolicy = "statutory",
) -> TaxResult:
    """Compute annual PAYE for ``annual_gross_income``.

    The input must already be annual, finite and non-negative; parsing and
    validation belong to the caller. ``zero_income_deductions`` decides
    whether a zero gross still reports the flat insurance relief
    (``"statutory"``) or reports no deductions at all (``"none"``). Either
    way the tax is zero.
    """
    deductions = deductions_for(annual_gross_income, deduction_policy, zero_income_deductions)
    total_deductions = deductions.total
    taxable_income = max(0.0, annual_gross_income - total_deductions)
    apportioned = apportion(taxable_income, brackets)
    total_tax = apportioned.total_tax
    effective_rate = (total_tax / annual_gross_income) * 100 if annual_gross_income > 0 else 0.0
    return TaxResult(
        gross_income=annual_gross_income,
        deductions=deductions,
        total_deductions=total_deductions,
        taxable_income=taxable_income,
        breakdown=apportioned.breakdown,
        total_tax=total_tax,
        net_income=annual_gross_income - total_tax,
        effective_rate=effective_rate,
    )


__all__ = ["ZERO_INCOME_POLICIES", "ZeroIncomePolicy", "calculate_tax", "deductions_for"]
