from __future__ import annotations

import math

from paye.core.models import Period
from paye.core.period import PERIODS

NUM_SUFFIXES = {
    "k": 1_000.0,
    "m": 1_000_000.0,
    "b": 1_000_000_000.0,
}

_PERIOD_ALIASES: dict[str, str] = {
    "annual": "annual",
    "annually": "annual",
    "yearly": "annual",
    "year": "annual",
    "y": "annual",
    "monthly": "monthly",
    "month": "monthly",
    "m": "monthly",
}


def parse_amount(text: str) -> float:
    """Turn user-typed income such as ``₦5,000,000`` or ``450k`` into a float."""
    cleaned = text.strip().lower()
    if cleaned.startswith("ngn"):
        cleaned = cleaned[3:]
    cleaned = cleaned.replace("₦", "").replace(",", "").replace(" ", "").replace("_", "")
    if not cleaned:
        raise ValueError("Please enter an amount.")
    multiplier = 1.0
    suffix = cleaned[-1]
    if suffix in NUM_SUFFIXES:
        multiplier = NUM_SUFFIXES[suffix]
        cleaned = cleaned[:-1]
    cleaned = cleaned.replace("−", "-").replace("–", "-")
    if cleaned in {"", "-", "."}:
        raise ValueError("Please enter an amount.")
    try:
        value = float(cleaned) * multiplier
    except ValueError as exc:
        raise ValueError(f"'{text.strip()}' is not a valid amount.") from exc
    if not math.isfinite(value):
        raise ValueError(f"'{text.strip()}' is not a valid amount.")
    if value < 0:
        raise ValueError("Income cannot be negative.")
    return value


def parse_period(text: str) -> Period:
    key = text.strip().lower()
    try:
        period = _PERIOD_ALIASES[key]
    except KeyError as exc:
        raise ValueError(f"Unknown period '{text}'. Use one of: {', '.join(PERIODS)}.") from exc
    return "monthly" if period == "monthly" else "annual"


def format_grouped(value: float) -> str:
    # en-US grouping, at most three fraction digits like toLocaleString.
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


__all__ = ["NUM_SUFFIXES", "format_grouped", "parse_amount", "parse_period"]
