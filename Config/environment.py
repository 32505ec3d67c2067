"""
Environment detection and .env file loading.

Looks for a .env file at the project root (or the path in GAINS_ENV_FILE) and
loads it without overriding variables that are already set.
"""
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class Environment:
    """Locate and load the project .env file."""

    def __init__(self, env_file: Optional[Path] = None):
        self.env_file = env_file or self._find_env_file()
        self._loaded = False

    @staticmethod
    def _find_env_file() -> Optional[Path]:
        """Find the .env file: GAINS_ENV_FILE wins, then project root."""
        override = os.getenv('GAINS_ENV_FILE')
        if override:
            env_path = Path(override)
        else:
            # Go up from Config/ to project root
            env_path = Path(__file__).parents[1] / '.env'
        return env_path if env_path.exists() else None

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, force_reload: bool = False) -> None:
        """
        Load environment variables from file.

        Args:
            force_reload: If True, reload even if already loaded
        """
        if self._loaded and not force_reload:
            return

        if not self.env_file:
            logger.debug("No .env file found; using process environment only")
            self._loaded = True
            return

        load_dotenv(self.env_file, override=False)
        logger.debug(f"Loaded environment from {self.env_file}")
        self._loaded = True

    def __repr__(self) -> str:
        return f"Environment(file={self.env_file}, loaded={self._loaded})"


# ============================================================================
# Global Instance - Auto-load on import
# ============================================================================

env = Environment()
env.load()
