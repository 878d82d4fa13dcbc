from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from tenant_admin.api.deps import get_email_service, require_caller
from tenant_admin.schemas.responses import ReminderRequest, ReminderResponse
from tenant_admin.services.email import ReminderEmailService
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("/reminder", response_model=ReminderResponse,
             summary="Send reminder email",
             description="Render the reminder template and send it to one recipient.")
async def send_reminder(
    request: ReminderRequest,
    caller: Dict[str, Any] = Depends(require_caller),
    email_service: ReminderEmailService = Depends(get_email_service),
):
    logger.info(f"Reminder email to {request.email} requested by {caller.get('uid')}")
    result = await email_service.send_reminder(
        email=request.email,
        user_name=request.user_name,
        message=request.message,
        action_url=request.action_url,
    )
    if not result.get("success"):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to send reminder email: {result.get('error')}",
        )
    return ReminderResponse(message_id=result.get("message_id"))
