from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


IS_ACTIVE_FIELD = "is_active"
UPDATED_AT_FIELD = "updated_at"


class Organization(BaseModel):
    """Tenant partition; owns a users sub-collection"""
    id: str


class UserRecord(BaseModel):
    """
    Typed view of a user document inside an organization.

    ``is_active`` is None only when the document has no such field. Any stored
    value, including ``false`` or null, counts as present and is exposed as a
    bool so the record is never backfilled again.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    organization_id: str
    reference: Any = None
    is_active: Optional[bool] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_snapshot(cls, snapshot: Any, organization_id: str) -> "UserRecord":
        data = snapshot.to_dict() or {}
        is_active = bool(data[IS_ACTIVE_FIELD]) if IS_ACTIVE_FIELD in data else None
        return cls(
            id=snapshot.id,
            organization_id=organization_id,
            reference=snapshot.reference,
            is_active=is_active,
            data=data,
        )

    @property
    def needs_backfill(self) -> bool:
        return self.is_active is None
