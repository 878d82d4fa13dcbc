"""
Response models for the migration, account and notification endpoints
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class MigrationResponse(BaseModel):
    """Body returned by both migration triggers on success"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(True, description="Indicates if the migration completed")
    total_updated: int = Field(..., alias="totalUpdated", description="Number of user records updated")


class MigrationErrorResponse(BaseModel):
    """Body returned by the HTTP trigger when the migration fails"""
    success: bool = Field(False, description="Always false for failures")
    error: str = Field(..., description="Failure message")


class CallableError(BaseModel):
    status: str = Field(..., description="Callable error status, e.g. UNAUTHENTICATED or INTERNAL")
    message: str = Field(..., description="Human-readable error message")


class CallableErrorResponse(BaseModel):
    error: CallableError


class CallableMigrationResponse(BaseModel):
    result: MigrationResponse


class ProfileDeletedEvent(BaseModel):
    """Document-deleted event for a user profile"""
    document: Optional[str] = Field(None, description="Deleted document path, organizations/{org}/users/{uid}")
    user_id: Optional[str] = Field(None, description="User id when the path is not available")


class ProfileDeletedResponse(BaseModel):
    success: bool = True
    user_id: str
    identity_deleted: bool = Field(..., description="False when no auth identity existed")


class ReminderRequest(BaseModel):
    email: EmailStr
    user_name: Optional[str] = None
    message: Optional[str] = Field(None, max_length=2000)
    action_url: Optional[str] = None


class ReminderResponse(BaseModel):
    success: bool = True
    message_id: Optional[str] = None
