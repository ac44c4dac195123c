from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from paye.core.models import Period, PeriodView, TaxResult

PERIODS: tuple[str, ...] = ("annual", "monthly")
MONTHS_PER_YEAR = 12

_MONETARY_FIELDS = (
    "gross_income",
    "total_deductions",
    "taxable_income",
    "total_tax",
    "net_income",
)


def round_half_up(value: float, decimals: int = 0) -> Decimal:
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # Enough digits to quantize very large figures.
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def monthly_from_annual(value: float) -> int:
    return int(round_half_up(value / MONTHS_PER_YEAR))


def annual_from_monthly(value: float) -> float:
    return value * MONTHS_PER_YEAR


def convert_entered_value(value: float, from_period: Period, to_period: Period) -> float:
    """Convert a figure already typed into the input when the period toggles.

    Only the annual -> monthly direction rounds; monthly -> annual is exact.
    """
    if from_period == to_period:
        return value
    if to_period == "monthly":
        return monthly_from_annual(value)
    return annual_from_monthly(value)


def to_annual(value: float, period: Period) -> float:
    return annual_from_monthly(value) if period == "monthly" else value


def for_display(amount: float, period: Period) -> float:
    return amount / MONTHS_PER_YEAR if period == "monthly" else amount


def project_result(result: TaxResult, period: Period) -> PeriodView:
    data = result.model_dump()
    for field in _MONETARY_FIELDS:
        data[field] = for_display(data[field], period)
    data["deductions"] = {key: for_display(value, period) for key, value in data["deductions"].items()}
    data["breakdown"] = [
        {
            **item,
            "amount_taxed": for_display(item["amount_taxed"], period),
            "tax_owed": for_display(item["tax_owed"], period),
        }
        for item in data["breakdown"]
    ]
    data["period"] = period
    return PeriodView.model_validate(data)


__all__ = [
    "MONTHS_PER_YEAR",
    "PERIODS",
    "Period",
    "annual_from_monthly",
    "convert_entered_value",
    "for_display",
    "monthly_from_annual",
    "project_result",
    "round_half_up",
    "to_annual",
]
