"""Date helpers for TMDb payloads."""

from datetime import date


def parse_release_date(value: str | date | None) -> date | None:
    """
    Parse a TMDb release date string.

    Args:
        value: ISO date string such as "2024-12-25", possibly blank

    Returns:
        The parsed date, or None if blank or unparseable
    """
    if isinstance(value, date):
        return value
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None
