from typing import Optional

from pydantic import BaseModel, EmailStr, Field

NOT_SPECIFIED = "Not specified"
TO_BE_DISCUSSED = "To be discussed"

ORDER_FIELD_MESSAGES = {
    "name": "Name is required",
    "email": "Valid email is required",
    "service": "Service is required",
    "requirements": "Project requirements are required",
}


class ServiceOrder(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    service: str = Field(min_length=1)
    requirements: str = Field(min_length=1)
    deadline: str = NOT_SPECIFIED
    budget: str = NOT_SPECIFIED
    paymentMethod: str = TO_BE_DISCUSSED


class OrderResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    clientEmailId: Optional[str] = None
    sellerEmailId: Optional[str] = None
    error: Optional[str] = None
