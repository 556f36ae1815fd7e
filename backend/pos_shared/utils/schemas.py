"""
Shared Pydantic schemas used across the application.
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from pos_shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

TableStatusLiteral = Literal["Free", "Occupied"]


class MessageResponse(BaseModel):
    """Success envelope for mutating operations."""

    message: str


class ErrorResponse(BaseModel):
    """Failure envelope."""

    error: str


# =============================================================================
# Authentication Schemas
# =============================================================================


class RegisterRequest(BaseModel):
    """Staff registration request body."""

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value: str) -> str:
        if len(value.encode("utf-8")) > Limits.MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {Limits.MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class UserInfo(BaseModel):
    """Basic user information included in auth responses."""

    id: uuid.UUID
    email: str
    role: str | None = None
    name: str | None = None


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo


# =============================================================================
# Table Schemas
# =============================================================================


class AddTableRequest(BaseModel):
    """Create a table."""

    name: str = Field(min_length=1, max_length=Limits.MAX_TABLE_NAME_LENGTH)
    capacity: int = Field(gt=0, le=Limits.MAX_TABLE_CAPACITY)


class EditTableRequest(BaseModel):
    """Edit name and capacity of a table. Status is never edited directly."""

    id: uuid.UUID
    name: str = Field(min_length=1, max_length=Limits.MAX_TABLE_NAME_LENGTH)
    capacity: int = Field(gt=0, le=Limits.MAX_TABLE_CAPACITY)


class AssignTableRequest(BaseModel):
    """Assign a free table to a dining session."""

    table_id: uuid.UUID


class ReleaseTableRequest(BaseModel):
    """Release an occupied table."""

    table_id: uuid.UUID


class TableDetail(BaseModel):
    """Snapshot of a table as returned to staff and customers."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    capacity: int
    status: TableStatusLiteral
    access_code: str | None = None
    assigned_at: datetime | None = None
