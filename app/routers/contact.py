import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core.mailer import MailDeliveryError, Mailer, get_mailer
from ..models.contact import ContactRequest
from ..services.contact_service import send_contact_message

router = APIRouter()
log = logging.getLogger(__name__)


def _field_errors(exc: ValidationError) -> dict:
    errors = {}
    for err in exc.errors():
        # malformed JSON and non-object bodies carry no location
        if err.get("loc"):
            errors[str(err["loc"][0])] = err["msg"]
        else:
            errors["body"] = "Invalid request body"
    return errors


@router.post("/contact")
async def submit_contact_form(request: Request, mailer: Mailer = Depends(get_mailer)):
    body = await request.body()
    try:
        contact = ContactRequest.model_validate_json(body)
    except ValidationError as exc:
        errors = _field_errors(exc)
        return JSONResponse(status_code=400, content={"success": False, "errors": errors})

    try:
        message_id = await send_contact_message(contact, mailer)
    except MailDeliveryError:
        log.exception("Failed to send contact form email")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to send email. Please try again."},
        )
    except Exception:
        log.exception("Contact form error")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "An unexpected error occurred. Please try again."},
        )

    return {"success": True, "messageId": message_id}
