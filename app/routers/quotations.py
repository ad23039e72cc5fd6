import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core.mailer import Mailer, get_mailer
from ..models.quotation import QuotationRequest, QuotationResponse, format_validation_errors
from ..services import quotations_service

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/quote", response_model=QuotationResponse, response_model_exclude_none=True)
async def create_quotation_request(request: Request, mailer: Mailer = Depends(get_mailer)):
    body = await request.body()
    try:
        payload = QuotationRequest.model_validate_json(body)
    except ValidationError as exc:
        errors = format_validation_errors(exc.errors())
        log.info("Rejected quotation request: %s", ", ".join(e.field for e in errors))
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": "Validation error",
                "errors": [e.model_dump() for e in errors],
            },
        )

    try:
        stored = await quotations_service.submit_quotation(payload, mailer)
    except Exception:
        log.exception("Quote API error")
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error"},
        )

    return {
        "success": True,
        "message": "Quotation request submitted successfully",
        "ticketId": stored.ticket_id,
    }
