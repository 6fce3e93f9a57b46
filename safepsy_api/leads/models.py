from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LeadRole(str, Enum):
    CLIENT = "client"
    THERAPIST = "therapist"
    PARTNER = "partner"


def _scalar_to_str(value: Any) -> Any:
    # Numbers and booleans arrive from loosely typed forms; keep their text form
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ContactRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    subject: Optional[str] = None
    message: Optional[str] = None

    @field_validator("email", "full_name", "subject", "message", mode="before")
    @classmethod
    def coerce_scalars(cls, value: Any) -> Any:
        return _scalar_to_str(value)


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    role: Optional[str] = None
    consent_given: Any = Field(default=None, alias="consentGiven")

    @field_validator("email", "full_name", "role", mode="before")
    @classmethod
    def coerce_scalars(cls, value: Any) -> Any:
        return _scalar_to_str(value)

    @property
    def has_consent(self) -> bool:
        # Only a literal JSON true counts as consent
        return self.consent_given is True


class LeadResponse(BaseModel):
    success: bool
    message: str


class ContactMessageCreate(BaseModel):
    email: str
    full_name: str
    subject: str
    message: str
    ip_hash: Optional[str] = None


class SubscriptionCreate(BaseModel):
    email: str
    full_name: Optional[str] = None
    role: Optional[LeadRole] = None
    ip_hash: Optional[str] = None
    consent_given: bool = False
    consent_timestamp: Optional[datetime] = None
