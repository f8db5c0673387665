"""
Database migration utilities for the adoption-core package.

Thin wrapper around Alembic commands for applying and inspecting schema
revisions. The migration scripts live in the repository's ``alembic/``
directory.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory

from ..exceptions import MigrationException

logger = logging.getLogger(__name__)


class MigrationManager:
    """Manager for database migrations using Alembic."""

    def __init__(
        self,
        alembic_config_path: Optional[str] = None,
        database_url: Optional[str] = None,
    ):
        """
        Initialize the migration manager.

        Args:
            alembic_config_path: Path to alembic.ini file
            database_url: Database URL override
        """
        self.alembic_config_path = alembic_config_path or self._find_alembic_config()
        self.database_url = database_url
        self._alembic_config: Optional[Config] = None

    def _find_alembic_config(self) -> str:
        """Find the alembic.ini configuration file."""
        possible_paths = [
            "alembic.ini",
            "../alembic.ini",
            os.path.join(os.path.dirname(__file__), "../../../alembic.ini"),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return os.path.abspath(path)

        raise MigrationException("Could not find alembic.ini configuration file")

    @property
    def alembic_config(self) -> Config:
        """Get the Alembic configuration object."""
        if self._alembic_config is None:
            self._alembic_config = Config(self.alembic_config_path)

            if self.database_url:
                self._alembic_config.set_main_option(
                    "sqlalchemy.url", self.database_url
                )

        return self._alembic_config

    def upgrade_database(self, revision: str = "head", sql: bool = False) -> None:
        """
        Upgrade database to a specific revision.

        Raises:
            MigrationException: If upgrade fails
        """
        try:
            logger.info(f"Upgrading database to revision: {revision}")
            command.upgrade(self.alembic_config, revision, sql=sql)
            logger.info(f"Successfully upgraded database to {revision}")
        except Exception as e:
            logger.error(f"Failed to upgrade database: {e}")
            raise MigrationException(
                f"Failed to upgrade database: {e}",
                migration_version=revision,
                original_error=e,
            )

    def downgrade_database(self, revision: str, sql: bool = False) -> None:
        """
        Downgrade database to a specific revision.

        Raises:
            MigrationException: If downgrade fails
        """
        try:
            logger.info(f"Downgrading database to revision: {revision}")
            command.downgrade(self.alembic_config, revision, sql=sql)
            logger.info(f"Successfully downgraded database to {revision}")
        except Exception as e:
            logger.error(f"Failed to downgrade database: {e}")
            raise MigrationException(
                f"Failed to downgrade database: {e}",
                migration_version=revision,
                original_error=e,
            )

    def get_migration_history(self) -> List[Dict[str, Any]]:
        """
        Get the known revisions, newest first.

        Raises:
            MigrationException: If the script directory cannot be read
        """
        try:
            script_dir = ScriptDirectory.from_config(self.alembic_config)
            return [
                {
                    "revision": rev.revision,
                    "down_revision": rev.down_revision,
                    "message": rev.doc,
                    "is_head": rev.is_head,
                }
                for rev in script_dir.walk_revisions()
            ]
        except Exception as e:
            logger.error(f"Failed to read migration history: {e}")
            raise MigrationException(
                f"Failed to read migration history: {e}", original_error=e
            )

    def get_head_revision(self) -> Optional[str]:
        """Get the head revision of the migration scripts."""
        script_dir = ScriptDirectory.from_config(self.alembic_config)
        return script_dir.get_current_head()

    def show_current_revision(self, verbose: bool = False) -> None:
        """
        Print the revision the database is currently at.

        Raises:
            MigrationException: If the database cannot be inspected
        """
        try:
            command.current(self.alembic_config, verbose=verbose)
        except Exception as e:
            logger.error(f"Failed to read current revision: {e}")
            raise MigrationException(
                f"Failed to read current revision: {e}", original_error=e
            )
