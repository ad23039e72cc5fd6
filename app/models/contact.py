import re
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PROJECT_TYPE_LABELS: Dict[str, str] = {
    "ai-ml": "AI/ML Solution",
    "automation": "Intelligent Automation",
    "web-app": "Web Application",
    "consulting": "Design & Consulting",
    "other": "Other",
}

BUDGET_LABELS: Dict[str, str] = {
    "under-5k": "Under $5,000",
    "5k-10k": "$5,000 - $10,000",
    "10k-25k": "$10,000 - $25,000",
    "25k-plus": "$25,000+",
    "discuss": "Let's discuss",
}

TIMELINE_LABELS: Dict[str, str] = {
    "asap": "ASAP",
    "1-month": "Within 1 month",
    "2-3-months": "2-3 months",
    "flexible": "Flexible",
}


def _required(value: Optional[str], message: str) -> str:
    if not (value or "").strip():
        raise PydanticCustomError("required", message)
    return value


class ContactRequest(BaseModel):
    # Defaults are validated so that a missing key reports the same message as a blank one.
    model_config = ConfigDict(extra="ignore", validate_default=True)

    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    projectType: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    message: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        return _required(value, "Name is required")

    @field_validator("email")
    @classmethod
    def _check_email(cls, value):
        _required(value, "Email is required")
        if not EMAIL_PATTERN.match(value):
            raise PydanticCustomError("email", "Please enter a valid email address")
        return value

    @field_validator("projectType")
    @classmethod
    def _check_project_type(cls, value):
        if not value:
            raise PydanticCustomError("required", "Please select a project type")
        return value

    @field_validator("message")
    @classmethod
    def _check_message(cls, value):
        _required(value, "Project description is required")
        if len(value.strip()) < 20:
            raise PydanticCustomError("too_short", "Please provide at least 20 characters")
        return value

    @property
    def project_type_label(self) -> str:
        return PROJECT_TYPE_LABELS.get(self.projectType, self.projectType)

    @property
    def budget_label(self) -> Optional[str]:
        return BUDGET_LABELS.get(self.budget, self.budget) if self.budget else None

    @property
    def timeline_label(self) -> Optional[str]:
        return TIMELINE_LABELS.get(self.timeline, self.timeline) if self.timeline else None
