"""
Task model for TaskVault
Defines the task entity and the request/response schemas built on it
"""
from datetime import datetime
from typing import Optional, List
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ..utils.timestamps import utc_now

TITLE_MAX_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 2000


class TaskStatus(str, Enum):
    """Task status options"""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class Task(SQLModel, table=True):
    """Task model for database table. description holds the encrypted envelope."""
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True, max_length=32)
    title: str = Field(max_length=TITLE_MAX_LENGTH, index=True)
    description: str = Field(nullable=False)
    status: TaskStatus = Field(default=TaskStatus.TODO, index=True)
    owner_id: str = Field(foreign_key="user.id", nullable=False, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )


def _strip_text(value, field_name: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} cannot be empty")
    if len(value) > max_length:
        raise ValueError(f"{field_name} exceeds maximum length of {max_length} characters")
    return value


class TaskCreate(BaseModel):
    """Schema for creating a new task"""
    title: str
    description: str
    status: TaskStatus = TaskStatus.TODO

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v):
        return _strip_text(v, "Title", TITLE_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v):
        return _strip_text(v, "Description", DESCRIPTION_MAX_LENGTH)


class TaskUpdate(BaseModel):
    """
    Schema for a partial task update.

    Only the fields present in the request body are applied; the set of present
    fields is available as model_fields_set. Explicit nulls are rejected.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v):
        if v is None:
            raise ValueError("Title cannot be null")
        return _strip_text(v, "Title", TITLE_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v):
        if v is None:
            raise ValueError("Description cannot be null")
        return _strip_text(v, "Description", DESCRIPTION_MAX_LENGTH)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if v is None:
            raise ValueError("Status cannot be null")
        return v

    @model_validator(mode="after")
    def require_one_field(self) -> "TaskUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self

    def changes(self) -> dict:
        """The fields present in the request, by name."""
        return self.model_dump(include=self.model_fields_set)


class TaskPublic(BaseModel):
    """Public representation of a task, with the description decrypted"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    status: TaskStatus
    owner_id: str
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int


class TaskPage(BaseModel):
    """One page of a user's tasks"""
    tasks: List[TaskPublic]
    pagination: Pagination
