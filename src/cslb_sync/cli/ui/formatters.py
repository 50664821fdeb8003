"""
Output formatting utilities
"""

from datetime import datetime, timedelta
from typing import Any, Optional

from rich.text import Text


def format_timestamp(dt: datetime, now: Optional[datetime] = None) -> str:
    """Format timestamp for display"""
    now = now or datetime.now()
    diff = now - dt

    if diff < timedelta(seconds=60):
        return f"{int(diff.total_seconds())}s ago"
    elif diff < timedelta(hours=1):
        return f"{int(diff.total_seconds() // 60)}m ago"
    elif diff < timedelta(days=1):
        return f"{int(diff.total_seconds() // 3600)}h ago"
    elif diff < timedelta(days=7):
        return f"{diff.days}d ago"
    else:
        return dt.strftime("%Y-%m-%d")


def format_success_rate(successful: int, total: int) -> Text:
    """Format success rate with color coding"""
    if total == 0:
        return Text("N/A", style="white")

    rate = (successful / total) * 100

    if rate >= 95:
        color = "green"
    elif rate >= 80:
        color = "yellow"
    else:
        color = "red"

    return Text(f"{rate:.1f}%", style=color)


def format_duration(seconds: float) -> str:
    """Format duration in a human-readable way"""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"


def format_config_value(value: Any) -> str:
    """Format configuration value for display"""
    if value is None:
        return "not set"
    elif isinstance(value, bool):
        return "enabled" if value else "disabled"
    elif isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) if value else "(empty)"
    else:
        return str(value)
