"""Display formatting for dollar amounts and rates."""


def format_compact_currency(amount: float) -> str:
    """$1.2M / $450K / $950 style used in summaries and reasoning text."""
    if amount >= 1_000_000:
        return f"${amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"${amount / 1_000:.0f}K"
    return f"${amount:.0f}"


def format_percent(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"
