from paye.core.brackets import (
    NTA_2025_BRACKETS,
    BracketTableError,
    TaxBracket,
    apportion,
    bracket_capacity,
    build_bracket_table,
)
from paye.core.calculator import ZERO_INCOME_POLICIES, calculate_tax, deductions_for
from paye.core.deductions import STATUTORY_DEDUCTIONS, DeductionPolicy, calculate_deductions
from paye.core.models import Apportionment, BracketAllocation, DeductionSet, PeriodView, TaxResult
from paye.core.period import (
    PERIODS,
    Period,
    annual_from_monthly,
    convert_entered_value,
    for_display,
    monthly_from_annual,
    project_result,
    to_annual,
)

__all__ = [
    "NTA_2025_BRACKETS",
    "PERIODS",
    "STATUTORY_DEDUCTIONS",
    "ZERO_INCOME_POLICIES",
    "Apportionment",
    "BracketAllocation",
    "BracketTableError",
    "DeductionPolicy",
    "DeductionSet",
    "Period",
    "PeriodView",
    "TaxBracket",
    "TaxResult",
    "annual_from_monthly",
    "apportion",
    "bracket_capacity",
    "build_bracket_table",
    "calculate_deductions",
    "calculate_tax",
    "convert_entered_value",
    "deductions_for",
    "for_display",
    "monthly_from_annual",
    "project_result",
    "to_annual",
]
