"""
Dependency providers shared by the API routers
"""
from functools import lru_cache
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth

from tenant_admin.core.config import settings
from tenant_admin.core.exceptions import MigrationError
from tenant_admin.core.firebase import get_firebase_app, get_firestore_client
from tenant_admin.repositories.organization import OrganizationRepository
from tenant_admin.services.account import AccountService
from tenant_admin.services.email import ReminderEmailService
from tenant_admin.services.migration import BackfillMigrator
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)

# Security scheme; missing credentials are handled per transport
security = HTTPBearer(auto_error=False)


def get_repository() -> OrganizationRepository:
    return OrganizationRepository(get_firestore_client(), settings)


RepositoryFactory = Callable[[], OrganizationRepository]
MigratorFactory = Callable[[], BackfillMigrator]


def get_repository_factory() -> RepositoryFactory:
    return get_repository


def get_migrator_factory(
    repository_factory: RepositoryFactory = Depends(get_repository_factory),
) -> MigratorFactory:
    """
    Deferred migrator construction.

    The Firestore client is opened when the factory is called, inside the
    trigger's error handling; client failures surface as MigrationError.
    """
    def build() -> BackfillMigrator:
        try:
            repository = repository_factory()
        except Exception as e:
            logger.error(f"Failed to open the user store: {e}", exc_info=True)
            raise MigrationError(str(e) or type(e).__name__, cause=e) from e
        return BackfillMigrator(repository, batch_size=settings.migration_batch_size)

    return build


def get_account_service() -> AccountService:
    return AccountService(get_firebase_app(), settings)


@lru_cache
def get_email_service() -> ReminderEmailService:
    return ReminderEmailService(config=settings)


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Dict[str, Any]]:
    """Verified caller identity from a Firebase ID token, None when absent or invalid"""
    if credentials is None:
        return None
    try:
        decoded = auth.verify_id_token(credentials.credentials, app=get_firebase_app())
    except (ValueError, auth.InvalidIdTokenError, auth.CertificateFetchError) as e:
        logger.warning(f"Rejected ID token: {e}")
        return None
    return {
        "uid": decoded.get("uid"),
        "email": decoded.get("email"),
        "token": decoded,
    }


def require_caller(caller: Optional[Dict[str, Any]] = Depends(get_caller)) -> Dict[str, Any]:
    """Get current authenticated caller"""
    if not caller or not caller.get("uid"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Must be authenticated",
        )
    return caller
