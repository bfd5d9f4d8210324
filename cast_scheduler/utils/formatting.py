"""
Human-readable labels used in validation messages
"""


def format_show_label(show) -> str:
    """
    Label a show the way the company reads call sheets, e.g. 'Wed Oct 21 7:30 PM'.

    Falls back to '{date} {time}' when the show has no curtain time.
    """
    try:
        day = show.date
        curtain = show.time
        hour = curtain.hour % 12 or 12
        suffix = 'AM' if curtain.hour < 12 else 'PM'
        return f"{day:%a} {day:%b} {day.day} {hour}:{curtain.minute:02d} {suffix}"
    except (AttributeError, TypeError, ValueError):
        return f"{show.date} {show.time or ''}".strip()
