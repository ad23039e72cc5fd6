from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, StrictStr, field_validator


class QuotationStatus(str, Enum):
    pending = "pending"
    reviewed = "reviewed"
    quoted = "quoted"
    completed = "completed"


# One message per field, reported whichever rule on that field failed.
FIELD_MESSAGES: Dict[str, str] = {
    "service": "Service is required",
    "selectedOptions": "At least one option must be selected",
    "timeline": "Timeline is required",
    "budget": "Budget range is required",
    "projectBrief": "Project brief must be at least 20 characters",
    "clientName": "Name is required",
    "clientEmail": "Valid email is required",
    "preferredContact": "Preferred contact method is required",
    "consent": "Consent is required",
    "honeypot": "Spam detected",
}


class QuotationRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    service: StrictStr = Field(min_length=1)
    selectedOptions: List[StrictStr] = Field(min_length=1)
    timeline: StrictStr = Field(min_length=1)
    budget: StrictStr = Field(min_length=1)
    projectBrief: StrictStr = Field(min_length=20)
    clientName: StrictStr = Field(min_length=1)
    clientEmail: EmailStr
    clientPhone: Optional[StrictStr] = None
    clientCompany: Optional[StrictStr] = None
    preferredContact: StrictStr = Field(min_length=1)
    consent: StrictBool
    honeypot: StrictStr = Field(max_length=0)

    @field_validator("consent")
    @classmethod
    def _consent_given(cls, value: bool) -> bool:
        if value is not True:
            raise ValueError("consent must be true")
        return value


class QuotationRecord(BaseModel):
    """A row of ``quotation_requests`` as returned by the store."""

    id: Optional[int] = None
    ticket_id: str
    service: str
    selected_options: List[str]
    timeline: str
    budget: str
    project_brief: str
    client_name: str
    client_email: str
    client_phone: Optional[str] = None
    client_company: Optional[str] = None
    preferred_contact: str
    consent: bool
    status: QuotationStatus = QuotationStatus.pending
    created_at: datetime


class FieldError(BaseModel):
    field: str
    message: str
    type: str


class QuotationResponse(BaseModel):
    success: bool
    message: str
    ticketId: Optional[str] = None
    errors: Optional[List[FieldError]] = None


def format_validation_errors(
    errors: List[Dict[str, Any]], messages: Optional[Dict[str, str]] = None
) -> List[FieldError]:
    """Flatten pydantic error dicts into per-field messages for the client.

    ``messages`` maps a top-level field name to the text reported for any
    failure on that field; fields not listed keep the pydantic message.
    """
    messages = FIELD_MESSAGES if messages is None else messages
    formatted: List[FieldError] = []
    for err in errors:
        loc = err.get("loc") or ()
        field = ".".join(str(part) for part in loc) or "body"
        message = messages.get(str(loc[0]), err.get("msg", "Invalid value")) if loc else err.get("msg", "Invalid body")
        formatted.append(FieldError(field=field, message=message, type=err.get("type", "value_error")))
    return formatted
