"""
Configuration management for the places client.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils
from lib.places.constants import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

TOKEN_PLACEHOLDERS = ("", "YOUR_BEARER_TOKEN_HERE")
ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Get value of ``${NAME}`` placeholder from environment, unknown names are left as is."""
    return os.environ.get(match.group(1), match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ``${VAR_NAME}`` placeholders in configuration values.

    Strings, tables and arrays are walked, other TOML values are returned unchanged.
    """
    match value:
        case str():
            return ENV_VAR_PATTERN.sub(replaceMatchToEnv, value)
        case dict():
            return {key: substituteEnvVars(item) for key, item in value.items()}
        case list():
            return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Loads ``config.toml`` plus optional config directories for the places client."""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """
        Args:
            configPath: Main TOML file, may be absent when config directories are given
            configDirs: Directories searched recursively for additional ``*.toml`` files
            dotEnvFile: Optional ``.env`` file with variables for ``${VAR}`` placeholders
        """
        self.config_path = configPath
        self.config_dirs = list(configDirs) if configDirs else []
        if os.path.isfile(dotEnvFile):
            utils.load_dotenv(path=dotEnvFile)
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Get ``*.toml`` files under the directory in sorted order, dood!"""
        dirPath = Path(directory)
        if not dirPath.is_dir():
            logger.warning(f"Skipping config directory {directory}: not a directory")
            return []

        tomlFiles = sorted(path for path in dirPath.rglob("*.toml") if path.is_file())
        logger.debug(f"Config files in {directory}: {[str(path) for path in tomlFiles]}")
        return tomlFiles

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, new values win."""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """Load configuration from TOML file and optional config directories.

        Files found in config directories are merged on top of the main file
        in sorted order. Broken files in config directories are skipped.

        Raises:
            SystemExit: If there is neither main config file nor config directories,
                        or main config file can't be parsed.
        """
        configFile = Path(self.config_path)
        hasConfigFile = configFile.exists()
        if not hasConfigFile and not self.config_dirs:
            logger.error(f"Configuration file {self.config_path} not found!")
            sys.exit(1)

        config: Dict[str, Any] = {}
        if hasConfigFile:
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration {self.config_path}: {e}")
                sys.exit(1)
            logger.info(f"Loaded main config from {self.config_path}")

        for configDir in self.config_dirs:
            tomlFiles = self._findTomlFilesRecursive(configDir)
            logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

            for tomlFile in tomlFiles:
                try:
                    with open(tomlFile, "rb") as f:
                        dirConfig = tomli.load(f)
                except (OSError, tomli.TOMLDecodeError) as e:
                    logger.error(f"Failed to load config file {tomlFile}: {e}")
                    continue

                config = self._mergeConfigs(config, dirConfig)
                logger.info(f"Merged config from {tomlFile}")

        logger.info("Configuration loaded and merged successfully, dood!")
        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getPlacesConfig(self) -> Dict[str, Any]:
        """
        Get places API configuration

        Returns:
            Dict with places settings (token, timeout)
        """
        return self.get("places", {})

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get ``[logging]`` table, see ``lib.logging_utils.initLogging``."""
        return self.get("logging", {})

    def getToken(self) -> str:
        """Get bearer token from configuration, exits if it isn't set."""
        token = str(self.getPlacesConfig().get("token", "")).strip()
        if token in TOKEN_PLACEHOLDERS or token.startswith("${"):
            logger.error("Please set places.token in config.toml!")
            sys.exit(1)
        return token

    def getRequestTimeout(self) -> float:
        """Get HTTP request timeout in seconds."""
        return float(self.getPlacesConfig().get("timeout", DEFAULT_TIMEOUT))
