"""Compact number formatting for the stat grid."""


def format_number(n: int) -> str:
    """Format a count with K/M suffixes: 1200 -> "1.2K", 1500000 -> "1.5M"."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)
