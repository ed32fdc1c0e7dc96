"""Formatting helpers for estimate display strings.

Matches how the calculator widget shows numbers: whole rupees with
comma separators, large totals abbreviated to lakh / crore.
"""

from __future__ import annotations

_LAKH = 100_000
_CRORE = 10_000_000


def format_currency(amount: float, currency: str = "NPR") -> str:
    """Format an amount as e.g. 'NPR 4,400,000'."""
    return f"{currency} {amount:,.0f}"


def format_compact(amount: float, currency: str = "NPR") -> str:
    """Abbreviate large amounts in lakh / crore.

    - Amounts >= 1 crore: 'NPR 1.25 Cr'
    - Amounts >= 1 lakh: 'NPR 44.00 L'
    - Smaller amounts fall back to ``format_currency``.
    """
    if amount >= _CRORE:
        return f"{currency} {amount / _CRORE:.2f} Cr"
    if amount >= _LAKH:
        return f"{currency} {amount / _LAKH:.2f} L"
    return format_currency(amount, currency)


def format_rate(rate: float, currency: str = "NPR") -> str:
    """Format a per-square-foot rate as 'NPR 2,200 / sq ft'."""
    return f"{format_currency(rate, currency)} / sq ft"


def format_area(area: float) -> str:
    return f"{area:,.0f} sq ft"
