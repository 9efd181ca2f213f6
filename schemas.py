import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from models import TaskPriority, TaskStatus

SYMBOL_PATTERN = re.compile(r"[^A-Za-z0-9]")


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timezone-aware UTC; values without an offset are taken to be UTC already"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON while keeping snake_case attributes"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserRegister(CamelModel):
    """Schema for registering a new user"""
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Username must be at least 3 characters")
        return value

    @field_validator("email")
    @classmethod
    def email_length(cls, value: str) -> str:
        if len(value) > 100:
            raise ValueError("Email must be at most 100 characters")
        return value

    @field_validator("password")
    @classmethod
    def password_complexity(cls, value: str) -> str:
        missing = []
        if not any(c.isupper() for c in value):
            missing.append("an uppercase letter")
        if not any(c.islower() for c in value):
            missing.append("a lowercase letter")
        if not any(c.isdigit() for c in value):
            missing.append("a digit")
        if not SYMBOL_PATTERN.search(value):
            missing.append("a symbol")
        if missing:
            raise ValueError("Password must contain " + ", ".join(missing))
        return value


class UserLogin(CamelModel):
    """Schema for logging in with either username or email"""
    username_or_email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Public user profile, never carries the password hash"""
    id: uuid.UUID
    username: str
    email: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class LoginResponse(CamelModel):
    token: str
    user: UserResponse


class TaskCreate(CamelModel):
    """Schema for creating a new task"""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    due_date: Optional[datetime] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class TaskUpdate(CamelModel):
    """Schema for updating a task; only fields sent in the body are applied"""
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    due_date: Optional[datetime] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class TaskResponse(CamelModel):
    """Schema for task response"""
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    description: Optional[str]
    due_date: Optional[datetime]
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def timestamps_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Some backends hand back naive values for UTC columns
        return as_utc(value)


class TaskFilter(BaseModel):
    """Filter, sort and paging options for listing tasks"""
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date_from: Optional[datetime] = None
    due_date_to: Optional[datetime] = None
    sort_by: Optional[str] = "createdAt"
    sort_order: Optional[str] = "desc"
    page_number: int = 1
    page_size: int = 10

    @field_validator("due_date_from", "due_date_to")
    @classmethod
    def normalize_range(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class PaginatedTasks(CamelModel):
    items: List[TaskResponse]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, items: List[Any], total_count: int, page_number: int, page_size: int) -> "PaginatedTasks":
        total_pages = math.ceil(total_count / page_size)
        return cls(
            items=[TaskResponse.model_validate(item) for item in items],
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
            total_pages=total_pages,
            has_next_page=page_number < total_pages,
            has_previous_page=page_number > 1,
        )


class DeleteResponse(CamelModel):
    deleted: bool


class ApiResponse(BaseModel):
    """Standard API response wrapper"""
    success: bool
    error: Optional[dict] = None
