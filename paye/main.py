import argparse
import math
import os
import sys
from pathlib import Path
from typing import Literal, Sequence

if __package__ in (None, ""):
    sys.path.append(str(Path(__file__).resolve().parent.parent))

from rich.console import Console
from rich.table import Table

from paye.config import get_settings
from paye.core.brackets import NTA_2025_BRACKETS
from paye.core.calculator import calculate_tax
from paye.core.explain import explain_breakdown, format_naira, format_rate, summarize
from paye.core.models import Period, TaxResult
from paye.core.period import PERIODS, convert_entered_value, for_display, to_annual
from paye.wizard import format_grouped, parse_amount, parse_period

ColorPreference = Literal["auto", "always", "never"]

EXIT_USAGE = 2


def _resolve_color_preference(pref: ColorPreference) -> ColorPreference:
    if pref == "auto" and os.getenv("NO_COLOR"):
        return "never"
    return pref


def _get_console(pref: ColorPreference) -> Console:
    resolved = _resolve_color_preference(pref)
    if resolved == "never":
        return Console(no_color=True, highlight=False)
    return Console(force_terminal=resolved == "always" or None)


def _build_table(title: str, columns: Sequence[str]) -> Table:
    table = Table(title=title, expand=False)
    for column in columns:
        table.add_column(column)
    return table


def _print_summary(result: TaxResult, period: Period, console: Console) -> None:
    table = _build_table(f"Tax summary ({period} view)", ["Metric", "Value"])
    for metric, value in summarize(result, period).items():
        table.add_row(metric, value)
    console.print(table)


def _print_breakdown(result: TaxResult, period: Period, console: Console) -> None:
    if not result.breakdown:
        console.print("No taxable income after deductions.")
        return
    table = _build_table("Tax bracket breakdown", ["Bracket", "Rate", "Amount", "Tax"])
    for item in result.breakdown:
        table.add_row(
            item.bracket,
            format_rate(item.rate),
            format_naira(for_display(item.amount_taxed, period)),
            format_naira(for_display(item.tax_owed, period)) if item.tax_owed > 0 else "tax-free",
        )
    console.print(table)
    console.print("How your tax adds up:")
    for line in explain_breakdown(result, period):
        console.print(f"  - {line.description}: {format_naira(line.tax, decimals=0)}")


def _print_brackets(console: Console) -> None:
    table = _build_table("Tax brackets", ["Band", "From", "To", "Rate"])
    for bracket in NTA_2025_BRACKETS:
        upper = "and above" if bracket.upper is None else format_naira(bracket.upper, decimals=0)
        table.add_row(bracket.label, format_naira(bracket.lower, decimals=0), upper, format_rate(bracket.rate))
    console.print(table)


def _run_estimate(income_text: str, period_text: str | None, console: Console) -> int:
    settings = get_settings()
    try:
        income = parse_amount(income_text)
        period = parse_period(period_text) if period_text else settings.default_period
    except ValueError as exc:
        console.print(f"Error: {exc}")
        return EXIT_USAGE
    annual_income = to_annual(income, period)
    if not math.isfinite(annual_income):
        console.print("Error: Income is too large to compute an annual figure.")
        return EXIT_USAGE
    result = calculate_tax(
        annual_income,
        zero_income_deductions=settings.zero_income_deductions,
    )
    _print_summary(result, period, console)
    _print_breakdown(result, period, console)
    return 0


def _run_convert(value_text: str, from_text: str, to_text: str, console: Console) -> int:
    try:
        value = parse_amount(value_text)
        from_period = parse_period(from_text)
        to_period = parse_period(to_text)
    except ValueError as exc:
        console.print(f"Error: {exc}")
        return EXIT_USAGE
    converted = convert_entered_value(value, from_period, to_period)
    if not math.isfinite(converted):
        console.print("Error: Value is too large to convert.")
        return EXIT_USAGE
    console.print(f"{format_grouped(converted)} ({to_period})")
    return 0


def _run_server(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("paye.api.http:app", host=host, port=port)
    return 0


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="paye",
        description="Estimate personal income tax under the progressive NTA bracket table.",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output preference (default: auto).",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="Alias for --color never.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    estimate = commands.add_parser("estimate", help="Compute tax for a gross income.")
    estimate.add_argument("income", help="Gross income, e.g. 5,000,000 or 450k.")
    estimate.add_argument(
        "--period",
        help=f"Period the income is entered in ({', '.join(PERIODS)}); also the display period.",
    )

    commands.add_parser("brackets", help="Show the tax bracket table.")

    convert = commands.add_parser("convert", help="Toggle an entered figure between periods.")
    convert.add_argument("value", help="Figure to convert.")
    convert.add_argument("--from", dest="from_period", default="annual", help="Period of the figure.")
    convert.add_argument("--to", dest="to_period", default="monthly", help="Target period.")

    serve = commands.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    console = _get_console(args.color)
    if args.command == "estimate":
        return _run_estimate(args.income, args.period, console)
    if args.command == "brackets":
        _print_brackets(console)
        return 0
    if args.command == "convert":
        return _run_convert(args.value, args.from_period, args.to_period, console)
    return _run_server(args.host, args.port)


if __name__ == "__main__":
    sys.exit(main())
