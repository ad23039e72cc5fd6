import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core.mailer import Attachment, Mailer, get_mailer
from ..models.order import NOT_SPECIFIED, ORDER_FIELD_MESSAGES, TO_BE_DISCUSSED, OrderResponse, ServiceOrder
from ..models.quotation import format_validation_errors
from ..services.orders_service import submit_order

router = APIRouter()
log = logging.getLogger(__name__)


async def _read_attachments(files: Optional[List[UploadFile]]) -> List[Attachment]:
    attachments = []
    for upload in files or []:
        if not upload.filename:
            continue
        attachments.append(
            Attachment(
                filename=upload.filename,
                content=await upload.read(),
                content_type=upload.content_type or "application/octet-stream",
            )
        )
    return attachments


@router.post("/send-order", response_model=OrderResponse, response_model_exclude_none=True)
async def send_order(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    service: Optional[str] = Form(None),
    requirements: Optional[str] = Form(None),
    deadline: Optional[str] = Form(None),
    budget: Optional[str] = Form(None),
    paymentMethod: Optional[str] = Form(None),
    files: Optional[List[UploadFile]] = File(None),
    mailer: Mailer = Depends(get_mailer),
):
    try:
        order = ServiceOrder(
            name=name or "",
            email=email or "",
            service=service or "",
            requirements=requirements or "",
            deadline=deadline or NOT_SPECIFIED,
            budget=budget or NOT_SPECIFIED,
            paymentMethod=paymentMethod or TO_BE_DISCUSSED,
        )
    except ValidationError as exc:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "error": "Validation error",
                "errors": [e.model_dump() for e in format_validation_errors(exc.errors(), ORDER_FIELD_MESSAGES)],
            },
        )

    try:
        attachments = await _read_attachments(files)
        client_id, seller_id = await submit_order(order, attachments, mailer)
    except Exception:
        log.exception("Error processing order")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to process order. Please try again."},
        )

    return {
        "success": True,
        "message": "Order submitted successfully",
        "clientEmailId": client_id,
        "sellerEmailId": seller_id,
    }
