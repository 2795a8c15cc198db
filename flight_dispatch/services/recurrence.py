"""
Occurrence dates for recurring jobs.
"""
import logging
from datetime import date, timedelta
from typing import List, Union

from dateutil.relativedelta import relativedelta

from flight_dispatch.models.job import RecurrenceFrequency

logger = logging.getLogger(__name__)


def expand_dates(
    origin: date,
    frequency: Union[RecurrenceFrequency, str, None],
    count: int,
) -> List[date]:
    """
    Compute the dates of the ``count`` occurrences following ``origin``.

    daily -> origin + i days, weekly -> origin + 7*i days,
    monthly -> origin + i calendar months (i = 1..count).

    Monthly steps are always taken from the origin and clamp to the last day
    of a shorter month, so Jan 31 gives Feb 28 (or 29), Mar 31, Apr 30, ...

    An unrecognised frequency is treated as weekly.
    """
    try:
        frequency = RecurrenceFrequency(frequency)
    except ValueError:
        logger.warning(f"Unknown recurrence frequency {frequency!r}, falling back to weekly")
        frequency = RecurrenceFrequency.weekly

    if frequency == RecurrenceFrequency.daily:
        step = lambda i: timedelta(days=i)
    elif frequency == RecurrenceFrequency.monthly:
        step = lambda i: relativedelta(months=i)
    else:
        step = lambda i: timedelta(weeks=i)

    return [origin + step(i) for i in range(1, count + 1)]
