from datetime import datetime
from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from leadintake.models.intake import IntakeStatusEnum


class IntakeIn(BaseModel):
    """Common shape of a public form submission."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=80)
    email: str = Field(max_length=120)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Any:
        # Forms send numbers/booleans for text fields sometimes; treat them as text
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if not v:
            raise ValueError("required")
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("invalid format")
        return v.lower()


class WaitlistIn(IntakeIn):
    city: str = Field(min_length=2, max_length=120)


class CourierIn(IntakeIn):
    route: str = Field(min_length=2, max_length=200)


class IntakeRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    status: IntakeStatusEnum
    created_at: Optional[datetime] = None


class WaitlistEntryOut(IntakeRecordOut):
    city: str


class CourierApplicationOut(IntakeRecordOut):
    route: str


class SubmitResponse(BaseModel):
    ok: bool = True
    id: int


class ItemsResponse(BaseModel):
    ok: bool = True
    items: List[dict]


class UpdatedResponse(BaseModel):
    ok: bool = True
    updated: int


class DeletedResponse(BaseModel):
    ok: bool = True
    deleted: int


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
