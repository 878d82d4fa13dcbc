from typing import Any, Iterator, List, Optional

from google.cloud.firestore_v1 import SERVER_TIMESTAMP
from google.cloud.firestore_v1.field_path import FieldPath

from tenant_admin.core.config import Settings, settings as default_settings
from tenant_admin.models.user import Organization, UserRecord
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)


class OrganizationRepository:
    """Firestore access for organizations and their users sub-collections"""

    def __init__(self, db: Any, config: Settings = default_settings):
        self.db = db
        self.organizations_collection = config.organizations_collection
        self.users_subcollection = config.users_subcollection
        self.page_size = config.firestore_page_size

    def _users_ref(self, organization_id: str):
        return (
            self.db.collection(self.organizations_collection)
            .document(organization_id)
            .collection(self.users_subcollection)
        )

    def _stream_all(self, collection_ref) -> Iterator[Any]:
        """Stream every document of a collection, page by page, ordered by id."""
        query = collection_ref.order_by(FieldPath.document_id()).limit(self.page_size)
        last_snapshot = None
        while True:
            page_query = query.start_after(last_snapshot) if last_snapshot is not None else query
            page = list(page_query.stream())
            yield from page
            if len(page) < self.page_size:
                return
            last_snapshot = page[-1]

    def list_organizations(self) -> List[Organization]:
        """List all organizations, exhausting pagination"""
        collection_ref = self.db.collection(self.organizations_collection)
        return [Organization(id=snapshot.id) for snapshot in self._stream_all(collection_ref)]

    def list_users(self, organization_id: str) -> List[UserRecord]:
        """List all user records of one organization, exhausting pagination"""
        return [
            UserRecord.from_snapshot(snapshot, organization_id)
            for snapshot in self._stream_all(self._users_ref(organization_id))
        ]

    def get_user(self, organization_id: str, user_id: str) -> Optional[UserRecord]:
        snapshot = self._users_ref(organization_id).document(user_id).get()
        if not snapshot.exists:
            return None
        return UserRecord.from_snapshot(snapshot, organization_id)

    def create_write_group(self):
        """New atomic write batch"""
        return self.db.batch()

    def server_timestamp(self) -> Any:
        return SERVER_TIMESTAMP
