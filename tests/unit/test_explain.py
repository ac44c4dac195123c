import pytest

from paye.core.calculator import calculate_tax
from paye.core.explain import explain_breakdown, format_naira, format_rate, summarize


def test_format_naira():
    assert format_naira(1_234_567.891) == "₦1,234,567.89"
    assert format_naira(0) == "₦0.00"
    assert format_naira(2_200_000, decimals=0) == "₦2,200,000"


def test_format_naira_rounds_halves_up():
    assert format_naira(2.5, decimals=0) == "₦3"
    assert format_naira(0.125) == "₦0.13"
    assert format_naira(416_666.665) == "₦416,666.67"
    assert format_naira(1e30, decimals=0) == "₦1,000,000,000,000,000,000,000,000,000,000"


@pytest.mark.parametrize("rate, text", [(0.0, "0%"), (0.15, "15%"), (0.18, "18%"), (0.25, "25%")])
def test_format_rate(rate, text):
    assert format_rate(rate) == text


def test_explanation_lines_annual():
    lines = explain_breakdown(calculate_tax(5_000_000))
    assert [line.description for line in lines] == [
        "First ₦800,000 at 0%",
        "Next ₦2,200,000 at 15%",
        "Next ₦299,999 at 18%",
    ]
    assert lines[0].tax == 0
    assert lines[1].tax == pytest.approx(330_000)
    assert lines[2].tax == pytest.approx(53_999.82)


def test_explanation_lines_monthly():
    lines = explain_breakdown(calculate_tax(5_000_000), "monthly")
    assert lines[0].description == "First ₦800,000 at 0%"
    assert lines[1].description == "Next ₦183,333 at 15%"
    assert lines[1].tax == pytest.approx(27_500)


def test_explanation_empty_without_taxable_income():
    assert explain_breakdown(calculate_tax(0)) == []


def test_summary_rows():
    rows = summarize(calculate_tax(5_000_000))
    assert rows["Gross income"] == "₦5,000,000.00"
    assert rows["Mortgage (FHS)"] == "₦500,000.00"
    assert rows["Pension (PenCom)"] == "₦400,000.00"
    assert rows["Annual rent"] == "₦500,000.00"
    assert rows["Life insurance"] == "₦300,000.00"
    assert rows["Total deductions"] == "₦1,700,000.00"
    assert rows["Taxable income"] == "₦3,300,000.00"
    assert rows["Total tax"] == "₦383,999.82"
    assert rows["Net income"] == "₦4,616,000.18"
    assert rows["Effective tax rate"] == "7.68%"


def test_summary_rows_monthly():
    rows = summarize(calculate_tax(5_000_000), "monthly")
    assert rows["Life insurance"] == "₦25,000.00"
    assert rows["Effective tax rate"] == "7.68%"
