import datetime as dt
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

DATE_FORMAT = "%Y-%m-%d"

def parse_day(value: str) -> dt.date:
    """Strict YYYY-MM-DD; anything else is a ValueError."""
    try:
        parsed = dt.datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid date format, expected YYYY-MM-DD: {value!r}") from e
    # strptime accepts unpadded fields like 2024-1-5
    if parsed.strftime(DATE_FORMAT) != value:
        raise ValueError(f"invalid date format, expected YYYY-MM-DD: {value!r}")
    return parsed


class _DatedIn(BaseModel):
    user_id: StrictInt
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def _strict_day(cls, v):
        if isinstance(v, dt.date):
            return v
        return parse_day(v)


class EventIn(_DatedIn):
    """Body of /create_event and /update_event. The description travels as "event"."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    text: str = Field(min_length=1, alias="event")


class DeleteEventIn(_DatedIn):
    pass


class EventOut(BaseModel):
    user_id: int
    date: dt.date
    title: str
    event: str

    @classmethod
    def from_event(cls, e) -> "EventOut":
        return cls(user_id=e.user_id, date=e.date, title=e.title, event=e.text)
