import pytest

from paye.wizard import format_grouped, parse_amount, parse_period


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5000000", 5_000_000.0),
        ("5,000,000", 5_000_000.0),
        ("₦5,000,000", 5_000_000.0),
        (" NGN 1,000 ", 1_000.0),
        ("450k", 450_000.0),
        ("1.5m", 1_500_000.0),
        ("2B", 2_000_000_000.0),
        ("12_500.50", 12_500.5),
        ("0", 0.0),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "k", "1,2,3x", "nan", "inf", "₦"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_amount_rejects_negative():
    with pytest.raises(ValueError, match="negative"):
        parse_amount("-5,000")


@pytest.mark.parametrize(
    "text, expected",
    [("annual", "annual"), ("Yearly", "annual"), ("MONTHLY", "monthly"), ("month", "monthly")],
)
def test_parse_period(text, expected):
    assert parse_period(text) == expected


def test_parse_period_rejects_unknown():
    with pytest.raises(ValueError, match="Unknown period"):
        parse_period("weekly")


def test_format_grouped():
    assert format_grouped(5_000_004) == "5,000,004"
    assert format_grouped(416_667.0) == "416,667"
    assert format_grouped(1_234.5) == "1,234.5"
