from unittest.mock import patch

from click.testing import CliRunner

from scripts import run_migration


def _invoke(fake_db, *args):
    with patch.object(run_migration, "init_firebase"), \
            patch.object(run_migration, "get_firestore_client", return_value=fake_db):
        return CliRunner().invoke(run_migration.main, list(args))


def test_dry_run_by_default(sample_db):
    result = _invoke(sample_db)

    assert result.exit_code == 0
    assert "Would update 3 users across 2 organizations" in result.output
    assert sample_db.commits == []


def test_apply(sample_db):
    result = _invoke(sample_db, "--apply", "--batch-size", "2")

    assert result.exit_code == 0
    assert "Updated 3 users" in result.output
    # org1 chunks [u1, u2] and [u3] each stage one update; org2 stages u4
    assert sample_db.commit_sizes == [1, 1, 1]


def test_failure_exit_code(sample_db):
    sample_db.fail_on_commit = 0
    result = _invoke(sample_db, "--apply")

    assert result.exit_code == 1
    assert "Migration failed: commit failed" in result.output


def test_rejects_oversized_batch(sample_db):
    result = _invoke(sample_db, "--apply", "--batch-size", "501")
    assert result.exit_code == 2


def test_verbose_sets_debug_level(sample_db):
    with patch.object(run_migration, "configure_logging") as configure_logging:
        result = _invoke(sample_db, "--verbose")

    assert result.exit_code == 0
    configure_logging.assert_called_once_with("DEBUG")
