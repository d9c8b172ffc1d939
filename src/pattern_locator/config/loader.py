"""
Config Loader - Build Settings from a YAML file, .env and explicit overrides.

Priority order (highest to lowest):
1. Overrides passed to ``load`` / ``load_config``
2. Config file values
3. Environment variables (``PATTERN_LOCATOR__...``, .env included)
4. Defaults
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
import logging

import yaml
from dotenv import load_dotenv

from pattern_locator.config.settings import Settings
from pattern_locator.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_CANDIDATES: Tuple[Path, ...] = (
    Path("pattern-locator.yaml"),
    Path("config.yaml"),
    Path("config.yml"),
    Path("config/default.yaml"),
)
ENV_FILE_CANDIDATES: Tuple[Path, ...] = (Path(".env"), Path(".env.local"))


class ConfigLoader:
    """Finds and reads configuration sources for one Settings instance."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else None

    def find_config_file(self) -> Optional[Path]:
        """Explicit path if it exists, else the first candidate in the working directory."""
        if self.config_path and self.config_path.exists():
            return self.config_path
        return next((path for path in CONFIG_FILE_CANDIDATES if path.exists()), None)

    def load_yaml_config(self, path: Path) -> Dict[str, Any]:
        """
        Read a YAML config file.

        Raises:
            ConfigurationError: If the file is not valid YAML or not a mapping
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file {path}: {e}", {"path": str(path)})

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping",
                {"path": str(path)},
            )
        return config

    def _load_env(self, env_file: Optional[Union[str, Path]]) -> None:
        if env_file:
            load_dotenv(env_file)
            return
        for env_path in ENV_FILE_CANDIDATES:
            if env_path.exists():
                load_dotenv(env_path)
                return

    def load(
        self,
        env_file: Optional[Union[str, Path]] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Settings:
        """
        Load settings from every source.

        Args:
            env_file: .env file to load instead of the default candidates
            overrides: Nested values merged on top of everything else

        Returns:
            Settings instance
        """
        self._load_env(env_file)

        file_config: Dict[str, Any] = {}
        config_file = self.find_config_file()
        if config_file:
            logger.debug(f"Loading config from {config_file}")
            file_config = self.load_yaml_config(config_file)

        # Pydantic fills in anything the file leaves out from env vars
        settings = Settings(**file_config)

        if overrides:
            settings = settings.merge_with(overrides)

        return settings


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> Settings:
    """
    Load configuration in one call.

    Example:
        >>> settings = load_config()
        >>> settings = load_config(config_path="pattern-locator.yaml")
        >>> settings = load_config(resolver={"default_pattern": "loginPage"})
    """
    return ConfigLoader(config_path).load(env_file=env_file, overrides=overrides or None)
