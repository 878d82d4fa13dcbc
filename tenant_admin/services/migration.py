"""
is_active backfill migration.

Visits every organization and its users sub-collection sequentially and
adds ``is_active = True`` plus a server ``updated_at`` to each user document
that lacks the field, committing at most ``batch_size`` updates per atomic
write batch.
"""
from dataclasses import dataclass
from typing import List, Sequence

from tenant_admin.core.config import MAX_BATCH_OPERATIONS
from tenant_admin.core.exceptions import MigrationError
from tenant_admin.models.user import IS_ACTIVE_FIELD, UPDATED_AT_FIELD, UserRecord
from tenant_admin.repositories.organization import OrganizationRepository
from tenant_admin.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class MigrationResult:
    updated_count: int = 0
    organizations_processed: int = 0
    batches_committed: int = 0
    records_skipped: int = 0
    dry_run: bool = False


def chunked(records: Sequence[UserRecord], size: int) -> List[Sequence[UserRecord]]:
    """Split records into contiguous chunks of at most ``size``"""
    return [records[i:i + size] for i in range(0, len(records), size)]


class BackfillMigrator:
    def __init__(
        self,
        repository: OrganizationRepository,
        batch_size: int = MAX_BATCH_OPERATIONS,
        dry_run: bool = False,
    ):
        if batch_size < 1 or batch_size > MAX_BATCH_OPERATIONS:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_OPERATIONS}")
        self.repository = repository
        self.batch_size = batch_size
        self.dry_run = dry_run

    def run(self) -> MigrationResult:
        """
        Run the backfill over all organizations.

        Returns:
            MigrationResult with the total number of updated user records

        Raises:
            MigrationError: listing or committing failed; batches committed
                before the failure stay applied
        """
        result = MigrationResult(dry_run=self.dry_run)
        mode = " (dry run)" if self.dry_run else ""
        logger.info(f"Starting is_active migration{mode}")

        try:
            organizations = self.repository.list_organizations()
            logger.info(f"Found {len(organizations)} organizations")

            for organization in organizations:
                self._migrate_organization(organization.id, result)
                result.organizations_processed += 1
        except Exception as e:
            logger.error(
                f"Migration failed after {result.batches_committed} batches "
                f"({result.updated_count} users staged): {e}",
                exc_info=True,
            )
            raise MigrationError(str(e) or type(e).__name__, cause=e) from e

        logger.info(f"Migration completed! Updated {result.updated_count} users")
        return result

    def _migrate_organization(self, organization_id: str, result: MigrationResult) -> None:
        logger.info(f"Processing org: {organization_id}")
        users = self.repository.list_users(organization_id)
        logger.info(f"Org {organization_id} has {len(users)} users")

        for chunk in chunked(users, self.batch_size):
            batch = self.repository.create_write_group()
            batch_updates = 0

            for user in chunk:
                if not user.needs_backfill:
                    result.records_skipped += 1
                    continue
                batch.update(user.reference, {
                    IS_ACTIVE_FIELD: True,
                    UPDATED_AT_FIELD: self.repository.server_timestamp(),
                })
                batch_updates += 1
                result.updated_count += 1

            if batch_updates == 0:
                continue
            if self.dry_run:
                logger.info(f"Dry run: would commit {batch_updates} updates in org {organization_id}")
                continue

            batch.commit()
            result.batches_committed += 1
            logger.info(f"Committed {batch_updates} updates in org {organization_id}")
