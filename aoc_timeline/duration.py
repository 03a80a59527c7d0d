"""Human readable elapsed time"""
from datetime import timedelta


def format_duration(duration: timedelta) -> str:
    """
    Render a duration as 'Dd H:MM:SS', 'H:MM:SS' or 'MM:SS'.

    Fractions of a second are truncated. Negative durations do not raise but
    the text produced for them is undefined and should not be relied on.
    """
    seconds = int(duration.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return f"{days}d {hours % 24}:{minutes % 60:02}:{seconds % 60:02}"
    elif hours > 0:
        return f"{hours}:{minutes % 60:02}:{seconds % 60:02}"
    return f"{minutes % 60:02}:{seconds % 60:02}"
