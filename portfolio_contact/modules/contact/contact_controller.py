# portfolio_contact/modules/contact/contact_controller.py

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from portfolio_contact.common.config import Settings
from portfolio_contact.common.cors import require_allowed_origin
from portfolio_contact.common.dependencies import get_mailer, get_settings
from portfolio_contact.common.rate_limit import enforce_rate_limit
from portfolio_contact.common.utils.email_service import Mailer
from portfolio_contact.common.utils.global_messages import GlobalMessages
from portfolio_contact.modules.contact import contact_service, schemas
from portfolio_contact.modules.contact.validators import ContactValidationError, validate_contact_form

logger = logging.getLogger(__name__)

# Dependencies run in order: the rate limit counts every request, including
# ones later rejected for their origin.
router = APIRouter(
    prefix="/contact",
    tags=["contact"],
    dependencies=[Depends(enforce_rate_limit), Depends(require_allowed_origin)],
)

async def read_payload(request: Request) -> dict:
    # Bodies that are not declared as JSON are ignored, so the form reads as empty.
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type != "application/json":
        return {}
    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = await request.json()
    except ValueError:
        raise ContactValidationError([
            schemas.ValidationIssue(field="value", kind="type", message=GlobalMessages.INVALID_JSON_BODY)
        ])
    if not isinstance(payload, dict):
        raise ContactValidationError([
            schemas.ValidationIssue(field="value", kind="type", message=GlobalMessages.BODY_NOT_AN_OBJECT)
        ])
    return payload

@router.post(
    "",
    response_model=schemas.ContactFormResponse,
    responses={
        400: {"model": schemas.ValidationErrorResponse},
        500: {"model": schemas.ContactFailureResponse},
    },
)
async def submit_contact_form(
    request: Request,
    mailer: Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
):
    """
    Process a contact form submission.

    - **name**: 2 to 50 characters.
    - **email**: A valid email address.
    - **message**: 10 to 1000 characters.

    The owner is notified first; the client confirmation is only sent afterwards.
    """
    submission = validate_contact_form(await read_payload(request))

    result = await contact_service.dispatch_notifications(submission, mailer, settings)
    if result.delivered or (result.owner_sent and settings.CONTACT_ACCEPT_PARTIAL_DELIVERY):
        return schemas.ContactFormResponse()

    logger.error(f"Contact submission not delivered (failed step: {result.failed_step})")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=schemas.ContactFailureResponse(error=GlobalMessages.EMAIL_DISPATCH_FAILED).model_dump(),
    )
