"""French-style number formatting used in advisory texts."""

from __future__ import annotations


def format_euro(value: float | None, decimals: int = 0) -> str:
    """Format a number as Euro currency.

    Args:
        value: Amount to format
        decimals: Number of decimal places

    Returns:
        Formatted string like "1 234 567 €"
    """
    if value is None:
        return "—"
    if decimals == 0:
        return f"{int(round(value)):,}".replace(",", " ") + " €"
    return f"{value:,.{decimals}f}".replace(",", " ").replace(".", ",") + " €"


def format_pct(value: float | None, decimals: int = 1) -> str:
    """Format a percentage value (3.5 means 3.5 %), French decimal comma."""
    if value is None:
        return "—"
    return f"{value:.{decimals}f}".replace(".", ",") + " %"
