from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictStr


class SubmissionPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    submission_url: StrictStr


class SubmissionRead(BaseModel):
    id: str
    assignment_id: str
    submission_url: str
    attempts: int
    submission_date: datetime
    submission_updated: datetime

    class Config:
        from_attributes = True
