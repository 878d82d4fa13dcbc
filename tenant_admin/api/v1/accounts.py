from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from tenant_admin.api.deps import get_account_service, require_caller
from tenant_admin.core.exceptions import AccountError
from tenant_admin.schemas.responses import ProfileDeletedEvent, ProfileDeletedResponse
from tenant_admin.services.account import AccountService
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("/profile-deleted", response_model=ProfileDeletedResponse,
             summary="Delete auth identity of a removed profile",
             description="Handle a user profile document deletion by removing the matching auth identity.")
def profile_deleted(
    event: ProfileDeletedEvent,
    caller: Dict[str, Any] = Depends(require_caller),
    account_service: AccountService = Depends(get_account_service),
):
    """Delete the auth identity for a deleted user profile document"""
    if event.document:
        try:
            user_id = account_service.user_id_from_document(event.document)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    elif event.user_id:
        user_id = event.user_id
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either document or user_id is required",
        )

    logger.info(f"Profile deletion for {user_id} reported by {caller.get('uid')}")
    try:
        deleted = account_service.handle_profile_deleted(user_id)
    except AccountError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return ProfileDeletedResponse(user_id=user_id, identity_deleted=deleted)
