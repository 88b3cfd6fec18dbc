"""Display formatting helpers for record lists and dashboard cards."""
from datetime import date

WEEKDAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def weekday_label(day: date) -> str:
    """Short English weekday name, independent of the process locale."""
    return WEEKDAY_LABELS[day.weekday()]


def format_number(num: int) -> str:
    """Format a number with thousands separators: 26500 -> '26,500'."""
    return f"{num:,}"


def format_large_number(num: int) -> str:
    """Abbreviate large totals: 1250000 -> '1.3M', 26500 -> '26.5K'."""
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return format_number(num)


def format_duration(minutes: int) -> str:
    """Format workout minutes: 135 -> '2h 15m', 45 -> '45 min'."""
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins} min"


def format_record_date(day: date) -> str:
    """Format a record date for list rows: 'Sat, Jan 10, 2026'."""
    return f"{weekday_label(day)}, {MONTH_LABELS[day.month - 1]} {day.day}, {day.year}"
