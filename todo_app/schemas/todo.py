from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_MAX_LENGTH = 255


def _required(value, field):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"The {field} field is required.")
    return value


class TodoCreate(BaseModel):
    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = None
    completed: bool = False
    due_date: Optional[date] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v):
        return _required(v, "title")

    @field_validator("completed", mode="before")
    @classmethod
    def completed_not_null(cls, v):
        if v is None:
            raise ValueError("The completed field must be true or false.")
        return v


class TodoUpdate(BaseModel):
    """Partial update: only the keys present in the request body are applied.

    ``title`` and ``completed`` may be omitted but not nulled out;
    ``description`` and ``due_date`` may be cleared with ``null``.
    """

    title: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[date] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_required(cls, v):
        return _required(v, "title")

    @field_validator("completed", mode="before")
    @classmethod
    def completed_not_null(cls, v):
        if v is None:
            raise ValueError("The completed field must be true or false.")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    due_date: Optional[date] = None
    user_id: int
    created_at: datetime
    updated_at: datetime
