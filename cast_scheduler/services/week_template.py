"""
Standard touring week
Builds the usual eight-show running order for a week starting on Monday
"""
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from cast_scheduler.error_handlers.exceptions import ValidationException
from cast_scheduler.models import Show, ShowStatus
from cast_scheduler.utils.validators import validate_date_param

DAY_NAMES = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

# (weekday, curtain) pairs; call is one hour before curtain
STANDARD_PERFORMANCES = (
    (0, time(19, 30)),
    (1, time(19, 30)),
    (2, time(14, 30)),
    (2, time(19, 30)),
    (3, time(19, 30)),
    (4, time(19, 30)),
    (5, time(14, 30)),
    (5, time(19, 30)),
)

CALL_BEFORE_CURTAIN = timedelta(hours=1)


def show_id_for(day: date, curtain: Optional[time]) -> str:
    suffix = curtain.strftime('%H%M') if curtain else 'travel'
    return f"{day.isoformat()}-{suffix}"


def standard_week(week_start, travel_day: Optional[str] = None) -> List[Show]:
    """
    Running order for a standard week

    Args:
        week_start: Any date in the week; shows are laid out from that week's Monday
        travel_day: Optional weekday name ('monday' ... 'sunday', or 'none'); its
            shows are replaced by a single travel entry

    Returns:
        Shows sorted by date and curtain time

    Raises:
        ValidationException: If travel_day is not a weekday name
    """
    start = validate_date_param(week_start, 'week_start')
    monday = start - timedelta(days=start.weekday())

    travel_index = None
    if travel_day and travel_day.lower() != 'none':
        if travel_day.lower() not in DAY_NAMES:
            raise ValidationException(
                f"Invalid travel day '{travel_day}'. Use a weekday name or 'none'",
                details={'field': 'travel_day', 'value': travel_day}
            )
        travel_index = DAY_NAMES.index(travel_day.lower())

    shows = []
    for weekday, curtain in STANDARD_PERFORMANCES:
        if weekday == travel_index:
            continue
        day = monday + timedelta(days=weekday)
        call = (datetime.combine(day, curtain) - CALL_BEFORE_CURTAIN).time()
        shows.append(Show(id=show_id_for(day, curtain), date=day, time=curtain, call_time=call))

    if travel_index is not None:
        day = monday + timedelta(days=travel_index)
        shows.append(Show(id=show_id_for(day, None), date=day, status=ShowStatus.TRAVEL))

    return sorted(shows, key=lambda s: s.sort_key)
