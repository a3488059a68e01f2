"""
Effective settings: CLI > env > TOML file > persisted settings > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ...core.constants import ENV_PREFIX
from ...core.exceptions import ConfigError
from ...core.logging import get_logger
from ...domain.models import Settings

logger = get_logger(__name__)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


# environment suffix -> (settings key, parser)
ENV_SETTINGS: Dict[str, tuple] = {
    "EDITOR": ("editor", str),
    "SHOW_HIDDEN": ("show_hidden_files", parse_bool),
    "DEFAULT_PORT": ("default_port", int),
    "DOWNLOADS_DIR": ("downloads_dir", str),
}


class ConfigLoader:
    """Layer settings sources over the persisted ones"""

    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._env_prefix = env_prefix

    def load_toml(self, path: Path) -> Dict[str, Any]:
        """
        Read a TOML settings file.

        Keys may sit at the top level or inside a ``[settings]`` table.

        Raises:
            ConfigError: If the file is missing or not valid TOML
        """
        if not path.exists():
            raise ConfigError(f"Settings file not found: {path}")
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to parse TOML settings: {e}") from e
        return data.get("settings", data)

    def load_env(self) -> Dict[str, Any]:
        """
        Collect ``HOSTDECK_*`` overrides.

        Raises:
            ConfigError: If a variable cannot be parsed
        """
        overrides: Dict[str, Any] = {}
        for suffix, (key, parse) in ENV_SETTINGS.items():
            name = self._env_prefix + suffix
            raw = os.getenv(name)
            if not raw:
                continue
            try:
                overrides[key] = parse(raw)
            except ValueError as e:
                raise ConfigError(f"Invalid {name}: {e}") from e
        return overrides

    @staticmethod
    def merge_layers(*layers: Dict[str, Any]) -> Dict[str, Any]:
        """Flat merge; later layers win, None never overrides"""
        merged: Dict[str, Any] = {}
        for layer in layers:
            merged.update({k: v for k, v in layer.items() if v is not None})
        return merged

    def load(
        self,
        base: Optional[Settings] = None,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Settings:
        """
        Resolve effective settings.

        Args:
            base: Settings persisted in the connection store
            toml_path: Optional TOML settings file
            cli_overrides: Values from command line options; None means unset
            use_env: Whether to read HOSTDECK_* environment variables

        Raises:
            ConfigError: If any layer is unreadable or a value has the wrong type
        """
        layers = [(base or Settings()).to_dict()]
        if toml_path:
            layers.append(self.load_toml(toml_path))
        if use_env:
            layers.append(self.load_env())
        if cli_overrides:
            layers.append(cli_overrides)

        merged = self.merge_layers(*layers)
        try:
            settings = Settings.from_dict(merged)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid settings: {e}") from e
        logger.debug("Effective settings: %s", settings)
        return settings
