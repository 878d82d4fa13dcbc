from typing import Optional

import firebase_admin
from firebase_admin import auth
from firebase_admin.exceptions import FirebaseError

from tenant_admin.core.config import Settings, settings as default_settings
from tenant_admin.core.exceptions import AccountError
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)


class AccountService:
    """Identity-provider account operations tied to user profile documents"""

    def __init__(self, app: Optional[firebase_admin.App] = None, config: Settings = default_settings):
        self.app = app
        self.organizations_collection = config.organizations_collection
        self.users_subcollection = config.users_subcollection

    def user_id_from_document(self, document_path: str) -> str:
        """
        Extract the user id from a profile document path.

        Accepts ``organizations/{org}/users/{uid}``, optionally prefixed with
        ``projects/{p}/databases/{d}/documents/``.
        """
        parts = [part for part in document_path.strip("/").split("/") if part]
        if "documents" in parts:
            parts = parts[parts.index("documents") + 1:]
        if (
            len(parts) != 4
            or parts[0] != self.organizations_collection
            or parts[2] != self.users_subcollection
        ):
            raise ValueError(f"Not a user profile document path: {document_path}")
        return parts[3]

    def handle_profile_deleted(self, user_id: str) -> bool:
        """
        Delete the auth identity of a removed profile document.

        Returns:
            True if an identity was deleted, False if none existed

        Raises:
            AccountError: the identity provider rejected the deletion
        """
        try:
            auth.delete_user(user_id, app=self.app)
        except auth.UserNotFoundError:
            logger.warning(f"No auth identity for deleted profile {user_id}")
            return False
        except FirebaseError as e:
            logger.error(f"Failed to delete auth identity {user_id}: {e}")
            raise AccountError(f"Failed to delete auth identity: {e}", user_id=user_id) from e

        logger.info(f"Deleted auth identity {user_id} after profile removal")
        return True
