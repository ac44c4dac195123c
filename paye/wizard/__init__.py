from .fields import NUM_SUFFIXES, format_grouped, parse_amount, parse_period

__all__ = ["NUM_SUFFIXES", "format_grouped", "parse_amount", "parse_period"]
