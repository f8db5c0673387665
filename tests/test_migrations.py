"""
Tests for the Alembic migration manager.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from adoption_core.database.migrations import MigrationManager
from adoption_core.exceptions import MigrationException

ALEMBIC_INI = str(Path(__file__).resolve().parents[1] / "alembic.ini")


@pytest.fixture
def manager():
    return MigrationManager(ALEMBIC_INI, database_url="sqlite+aiosqlite:///./test.db")


class TestMigrationCommands:
    """Alembic commands are wrapped and their failures translated."""

    @patch("adoption_core.database.migrations.command")
    def test_upgrade_database(self, mock_command, manager):
        manager.upgrade_database()

        mock_command.upgrade.assert_called_once_with(
            manager.alembic_config, "head", sql=False
        )

    @patch("adoption_core.database.migrations.command")
    def test_downgrade_database(self, mock_command, manager):
        manager.downgrade_database("base")

        mock_command.downgrade.assert_called_once_with(
            manager.alembic_config, "base", sql=False
        )

    @patch("adoption_core.database.migrations.command")
    def test_upgrade_failure(self, mock_command, manager):
        mock_command.upgrade.side_effect = RuntimeError("relation already exists")

        with pytest.raises(MigrationException) as exc_info:
            manager.upgrade_database("001")

        assert exc_info.value.details["migration_version"] == "001"

    @patch("adoption_core.database.migrations.command")
    def test_show_current_revision_failure(self, mock_command, manager):
        mock_command.current.side_effect = RuntimeError("no database")

        with pytest.raises(MigrationException, match="current revision"):
            manager.show_current_revision()


class TestMigrationScripts:
    def test_database_url_override(self, manager):
        assert (
            manager.alembic_config.get_main_option("sqlalchemy.url")
            == "sqlite+aiosqlite:///./test.db"
        )

    def test_path_separator_option(self, manager):
        assert manager.alembic_config.get_main_option("path_separator") == "os"
        assert manager.alembic_config.get_main_option("version_path_separator") is None

    def test_head_revision(self, manager):
        assert manager.get_head_revision() == "001"

    def test_migration_history(self, manager):
        history = manager.get_migration_history()

        assert len(history) == 1
        assert history[0]["revision"] == "001"
        assert history[0]["down_revision"] is None
        assert history[0]["is_head"] is True

    def test_missing_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with patch("os.path.exists", return_value=False):
            with pytest.raises(MigrationException, match="alembic.ini"):
                MigrationManager()
