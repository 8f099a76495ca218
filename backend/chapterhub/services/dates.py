"""Calendar-date normalization for signed waivers and participation forms.

Aware datetimes are converted to ``CHAPTER_TIMEZONE`` before the date is
taken, so the stored date can differ from the literal ``YYYY-MM-DD`` prefix
the browser sent (``2025-03-02T03:00:00Z`` is stored as March 1st in Ohio).
Naive datetimes and plain dates are kept as sent.
"""
from datetime import date, datetime

import pytz

from chapterhub.config import settings


def to_chapter_date(value) -> date:
    """Return the calendar date a form value refers to, in the chapter's timezone.

    Accepts a ``date``, a ``YYYY-MM-DD`` string or a full ISO datetime.
    Raises ``ValueError`` for anything unparseable or out of range.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    else:
        text = str(value).strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))

    if parsed.tzinfo is None:
        return parsed.date()
    tz = pytz.timezone(settings.CHAPTER_TIMEZONE)
    try:
        return parsed.astimezone(tz).date()
    except OverflowError:
        # e.g. 0001-01-01T01:00+05:00 falls before date.min once shifted
        raise ValueError("date out of range") from None
