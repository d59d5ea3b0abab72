from datetime import date, datetime

import click

from cltodo.schemas import Priority


class TimestampOrDateType(click.ParamType):
    """
    Accepts `YYYY-MM-DD` or any ISO 8601 timestamp.

    Bare dates come back as `date` so the listing can widen them to a whole
    day; timestamps come back as `datetime`.
    """

    name = "timestamp_or_date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            self.fail(
                f"{value!r} is not a date (YYYY-MM-DD) or timestamp (YYYY-MM-DDTHH:MM:SS[+HH:MM])",
                param,
                ctx,
            )


class PriorityType(click.Choice):
    def __init__(self):
        super().__init__([p.name.lower() for p in Priority], case_sensitive=False)

    def convert(self, value, param, ctx):
        if isinstance(value, Priority):
            return value
        return Priority.from_name(super().convert(value, param, ctx))


TIMESTAMP_OR_DATE = TimestampOrDateType()
PRIORITY = PriorityType()
