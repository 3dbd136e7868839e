from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, field_validator


class AssignmentPayload(BaseModel):
    """Body of assignment create/update. Field order is the order fields are checked in."""

    model_config = ConfigDict(extra="forbid")

    name: StrictStr
    points: StrictInt
    num_of_attempts: StrictInt
    deadline: datetime

    # accepted but ignored, the server owns the timestamps
    assignment_created: Optional[Any] = None
    assignment_updated: Optional[Any] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline(cls, value: Any) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip())
        else:
            raise ValueError("deadline must be an ISO-8601 string")

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        try:
            return parsed.astimezone(timezone.utc)
        except OverflowError:
            # e.g. 9999-12-31 with a negative offset lands past datetime.max
            raise ValueError("deadline out of range")


class AssignmentRead(BaseModel):
    id: str
    name: str
    points: int
    num_of_attempts: int
    deadline: datetime
    assignment_created: datetime
    assignment_updated: datetime

    class Config:
        from_attributes = True
