"""
Backfill is_active on every organization user.

Usage:
  python scripts/run_migration.py --dry-run
  python scripts/run_migration.py --apply --batch-size 500
"""

import sys

import click

from tenant_admin.core.config import MAX_BATCH_OPERATIONS, settings
from tenant_admin.core.exceptions import MigrationError
from tenant_admin.core.firebase import get_firestore_client, init_firebase
from tenant_admin.repositories.organization import OrganizationRepository
from tenant_admin.services.migration import BackfillMigrator
from tenant_admin.utils.logger import configure_logging


@click.command()
@click.option("--dry-run/--apply", default=True, help="Only count users that would be updated")
@click.option("--batch-size", type=click.IntRange(1, MAX_BATCH_OPERATIONS),
              default=settings.migration_batch_size, show_default=True,
              help="Updates per atomic write batch")
@click.option("--verbose", is_flag=True, help="Log at DEBUG level")
def main(dry_run: bool, batch_size: int, verbose: bool) -> None:
    if verbose:
        configure_logging("DEBUG")
    init_firebase(settings)
    repository = OrganizationRepository(get_firestore_client(), settings)
    migrator = BackfillMigrator(repository, batch_size=batch_size, dry_run=dry_run)

    try:
        result = migrator.run()
    except MigrationError as e:
        click.echo(f"Migration failed: {e.message}", err=True)
        sys.exit(1)

    verb = "Would update" if dry_run else "Updated"
    click.echo(
        f"{verb} {result.updated_count} users across {result.organizations_processed} organizations "
        f"({result.records_skipped} already migrated, {result.batches_committed} batches committed)"
    )


if __name__ == "__main__":
    main()
