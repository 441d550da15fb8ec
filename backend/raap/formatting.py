"""Formatting helpers for feasibility output.

Provides human-readable formatting for currency amounts, scores and
schedule durations, matching how the project cards present numbers
(e.g., '$10.8M' instead of '$10,824,000.00').
"""

from __future__ import annotations


def format_currency(amount: float) -> str:
    """Format a currency amount as a human-readable string.

    - Amounts >= $10,000: no cents, with comma separators (e.g., '$1,234,567')
    - Amounts < $10,000: with cents (e.g., '$9,876.54')
    """
    if amount >= 10_000:
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def format_currency_short(amount: float) -> str:
    """Format large totals as '$X.XM'; smaller amounts fall back to format_currency."""
    if amount >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M"
    return format_currency(amount)


def format_cost_per_sf(amount: float) -> str:
    return f"${amount:,.0f}/sf"


def format_score(score: float) -> str:
    """Format a 1-5 score as 'X.X / 5'."""
    return f"{score:.1f} / 5"


def format_months(months: int) -> str:
    return f"{months} month" if months == 1 else f"{months} months"
