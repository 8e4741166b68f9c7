from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

NAME_MAX_LENGTH = 255
# users.age is a 4-byte INTEGER
AGE_MAX = 2_147_483_647


class UserCreate(BaseModel):
    """Body of ``POST /users``; id and timestamps are assigned by the server."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    age: Optional[int] = Field(None, ge=0, le=AGE_MAX)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class UserUpdate(BaseModel):
    """Body of ``PUT /users/{id}``.

    Every field is optional; only the fields present in the request are
    written. ``age`` may be sent as ``null`` to clear it, ``name`` and
    ``email`` may not.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: Optional[EmailStr] = None
    age: Optional[int] = Field(None, ge=0, le=AGE_MAX)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("name must not be blank")
        return value

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "UserUpdate":
        for field in ("name", "email"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    age: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive values; every stored timestamp is UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
