"""
JSON file connection store
"""
import json
import os
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir

from ..core.constants import APP_NAME, CONFIG_FILE_NAME
from ..core.exceptions import ConfigError
from ..core.interfaces import ConnectionStore
from ..core.logging import get_logger
from ..domain.models import AppConfig

logger = get_logger(__name__)


def default_config_dir() -> Path:
    """Per-user config directory, e.g. ~/.config/hostdeck on Linux"""
    return Path(user_config_dir(APP_NAME))


class JsonConnectionStore(ConnectionStore):
    """
    Connections, credentials and settings kept in one JSON document:
    - {config_dir}/config.json

    Secrets are never written here.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize JSON store.

        Args:
            config_dir: Directory holding config.json
        """
        if config_dir is None:
            config_dir = default_config_dir()

        self.config_dir = Path(config_dir).expanduser()
        self.path = self.config_dir / CONFIG_FILE_NAME

    def load(self) -> AppConfig:
        """
        Load the configuration; a missing file yields an empty one.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.info("No configuration at %s, starting empty", self.path)
            return AppConfig()

        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"failed to read {self.path}: {e}") from e

        try:
            return AppConfig.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"invalid configuration in {self.path}: {e}") from e

    def save(self, config: AppConfig) -> None:
        """
        Write the configuration atomically.

        Raises:
            ConfigError: If the file cannot be written
        """
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(config.to_dict(), indent=2), encoding='utf-8')
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise ConfigError(f"failed to save {self.path}: {e}") from e
        logger.debug("Saved %d connection(s) to %s", len(config.connections), self.path)
