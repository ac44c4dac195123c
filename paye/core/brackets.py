from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from paye.core.models import Apportionment, BracketAllocation


class BracketTableError(ValueError):
    """Raised when a bracket table does not tile ``[0, +inf)``."""


@dataclass(frozen=True)
class TaxBracket:
    lower: int
    upper: int | None
    rate: float
    label: str

    @property
    def unbounded(self) -> bool:
        return self.upper is None


def bracket_capacity(bracket: TaxBracket) -> float:
    # Bounds are inclusive on both ends, hence the +1.
    if bracket.upper is None:
        return math.inf
    return bracket.upper - bracket.lower + 1


def build_bracket_table(
    brackets: Iterable[TaxBracket | tuple[int, int | None, float, str]],
) -> tuple[TaxBracket, ...]:
    table = tuple(b if isinstance(b, TaxBracket) else TaxBracket(*b) for b in brackets)
    if not table:
        raise BracketTableError("Bracket table is empty")
    if table[0].lower != 0:
        raise BracketTableError(f"First bracket must start at 0, got {table[0].lower}")
    for index, bracket in enumerate(table):
        if not 0 <= bracket.rate <= 1:
            raise BracketTableError(f"Rate for {bracket.label!r} must be within [0, 1], got {bracket.rate}")
        last = index == len(table) - 1
        if bracket.upper is None:
            if not last:
                raise BracketTableError(f"Unbounded bracket {bracket.label!r} must be the last one")
            continue
        if last:
            raise BracketTableError("The last bracket must be unbounded")
        if bracket.upper < bracket.lower:
            raise BracketTableError(f"Bracket {bracket.label!r} has upper bound below its lower bound")
        following = table[index + 1]
        if following.lower != bracket.upper + 1:
            raise BracketTableError(
                f"Bracket {following.label!r} starts at {following.lower}; expected {bracket.upper + 1}"
            )
    return table


NTA_2025_BRACKETS: tuple[TaxBracket, ...] = build_bracket_table(
    [
        (0,          800_000,    0.0,  "First ₦800,000"),
        (800_001,    3_000_000,  0.15, "₦800,001 - ₦3,000,000"),
        (3_000_001,  12_000_000, 0.18, "₦3,000,001 - ₦12,000,000"),
        (12_000_001, 25_000_000, 0.21, "₦12,000,001 - ₦25,000,000"),
        (25_000_001, 50_000_000, 0.23, "₦25,000,001 - ₦50,000,000"),
        (50_000_001, None,       0.25, "Above ₦50,000,000"),
    ]
)


def apportion(
    taxable_income: float,
    brackets: Sequence[TaxBracket] = NTA_2025_BRACKETS,
) -> Apportionment:
    """Split ``taxable_income`` across ``brackets`` from the bottom up.

    Each slice is taxed at its own bracket's rate. Traversal stops as soon as
    the income is used up, so brackets above that point never show up in the
    breakdown. Zero-rate slices are kept as zero-tax lines.
    """
    remaining = taxable_income
    total_tax = 0.0
    breakdown: list[BracketAllocation] = []
    for bracket in brackets:
        if remaining <= 0:
            break
        amount = min(remaining, bracket_capacity(bracket))
        if amount > 0:
            tax = amount * bracket.rate
            breakdown.append(
                BracketAllocation(
                    bracket=bracket.label,
                    rate=bracket.rate,
                    amount_taxed=amount,
                    tax_owed=tax,
                )
            )
            total_tax += tax
            remaining -= amount
    return Apportionment(breakdown=tuple(breakdown), total_tax=total_tax)


__all__ = [
    "NTA_2025_BRACKETS",
    "BracketTableError",
    "TaxBracket",
    "apportion",
    "bracket_capacity",
    "build_bracket_table",
]
