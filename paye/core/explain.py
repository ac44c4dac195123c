from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from paye.core.models import Period, TaxResult
from paye.core.period import for_display, round_half_up

CURRENCY_SIGN = "₦"

DEDUCTION_LABELS: dict[str, str] = {
    "mortgage": "Mortgage (FHS)",
    "pension": "Pension (PenCom)",
    "rent": "Annual rent",
    "insurance": "Life insurance",
}


class ExplanationLine(BaseModel):
    description: str
    tax: float

    model_config = ConfigDict(frozen=True)


def format_naira(amount: float, decimals: int = 2) -> str:
    return f"{CURRENCY_SIGN}{round_half_up(amount, decimals):,.{decimals}f}"


def format_rate(rate: float) -> str:
    return f"{rate * 100:g}%"


def explain_breakdown(result: TaxResult, period: Period = "annual") -> list[ExplanationLine]:
    """Describe each taxed slice in plain words, e.g. ``Next ₦2,200,000 at 15%``."""
    lines: list[ExplanationLine] = []
    for allocation in result.breakdown:
        rate = allocation.rate
        if rate == 0:
            lines.append(ExplanationLine(description=f"{allocation.bracket} at 0%", tax=0.0))
            continue
        amount = format_naira(for_display(allocation.amount_taxed, period), decimals=0)
        lines.append(
            ExplanationLine(
                description=f"Next {amount} at {format_rate(rate)}",
                tax=for_display(allocation.tax_owed, period),
            )
        )
    return lines


def summarize(result: TaxResult, period: Period = "annual") -> dict[str, str]:
    rows: dict[str, str] = {"Gross income": format_naira(for_display(result.gross_income, period))}
    for field, label in DEDUCTION_LABELS.items():
        rows[label] = format_naira(for_display(getattr(result.deductions, field), period))
    rows["Total deductions"] = format_naira(for_display(result.total_deductions, period))
    rows["Taxable income"] = format_naira(for_display(result.taxable_income, period))
    rows["Total tax"] = format_naira(for_display(result.total_tax, period))
    rows["Net income"] = format_naira(for_display(result.net_income, period))
    rows["Effective tax rate"] = f"{result.effective_rate:.2f}%"
    return rows


__all__ = [
    "CURRENCY_SIGN",
    "DEDUCTION_LABELS",
    "ExplanationLine",
    "explain_breakdown",
    "format_naira",
    "format_rate",
    "summarize",
]
