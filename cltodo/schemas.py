from datetime import date, datetime, time, timedelta
from enum import IntEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict, field_validator


class Priority(IntEnum):
    """Priority tiers, persisted as their integer value."""

    NORMAL = 0
    IMPORTANT = 1
    CRITICAL = 2

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, raw: str) -> "Priority":
        return cls[raw.strip().upper()]


def local_now() -> datetime:
    # second precision, matches what ends up in the database
    return datetime.now().astimezone().replace(microsecond=0)


def to_storage(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


def as_local(value: datetime) -> datetime:
    # naive timestamps typed by the user are local time
    if value.tzinfo is None:
        return value.astimezone()
    return value


class TodoCreate(BaseModel):
    text: str
    priority: Priority


class TodoRead(BaseModel):
    id: int
    date: AwareDatetime
    text: str
    priority: Priority

    model_config = ConfigDict(from_attributes=True)

    @field_validator("date", mode="before")
    @classmethod
    def parse_stored_date(cls, value):
        if isinstance(value, str):
            return datetime.fromisoformat(value)
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def strict_priority(cls, value):
        # the stored tag must be one of the enum values, never coerced
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"priority tag must be an integer, got {value!r}")
        return value


class TodoFilter(BaseModel):
    """
    Listing options. Bounds may be bare dates: `date_from` becomes the start
    of that day, `date_to` the last second of it, both in local time.
    """

    priority: Priority | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None
    reversed: bool = False
    chronological: bool = False

    @field_validator("date_from", mode="before")
    @classmethod
    def start_of_day(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min).astimezone()
        return value

    @field_validator("date_to", mode="before")
    @classmethod
    def end_of_day(cls, value):
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time(23, 59, 59)).astimezone()
        return value

    @field_validator("date_from", "date_to")
    @classmethod
    def localize(cls, value: datetime | None) -> datetime | None:
        return as_local(value) if value is not None else None

    @field_validator("date_from")
    @classmethod
    def round_up_to_second(cls, value: datetime | None) -> datetime | None:
        # stored dates have whole seconds, so the first matching one is the next full second
        if value is not None and value.microsecond:
            return value.replace(microsecond=0) + timedelta(seconds=1)
        return value
