"""
Logging utilities for the places client.
"""
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# HTTP client libraries log every request on INFO level
QUIET_LOGGERS = ("httpx", "httpcore")


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = getattr(logging, str(levelStr).upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def _handlerLevel(config: Dict[str, Any], key: str, fallback: int) -> int:
    if key not in config:
        return fallback
    level = getLogLevelByStr(config[key], fallback)
    return fallback if level is None else level


def _createFileHandler(logFile: str, rotate: bool) -> logging.Handler:
    logPath = Path(logFile)
    logPath.parent.mkdir(parents=True, exist_ok=True)
    if rotate:
        return TimedRotatingFileHandler(
            filename=logFile,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    return logging.FileHandler(logFile, encoding="utf-8")


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from config file settings.

    Supported keys: ``level``, ``format``, ``propagate``, ``console``,
    ``console-level``, ``file``, ``file-level``, ``rotate``.
    Handlers attached earlier are replaced.
    """
    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])
    if "level" in config:
        level = getLogLevelByStr(config["level"])
        if level is not None:
            localLogger.setLevel(level)

    effectiveLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))

    handlers: List[logging.Handler] = []
    if config.get("console", False):
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(_handlerLevel(config, "console-level", effectiveLevel))
        handlers.append(consoleHandler)

    if "file" in config:
        try:
            fileHandler = _createFileHandler(config["file"], bool(config.get("rotate", False)))
        except OSError as e:
            logger.error(f"Can't log {localLogger.name} to {config['file']}: {e}")
        else:
            fileHandler.setLevel(_handlerLevel(config, "file-level", effectiveLevel))
            handlers.append(fileHandler)

    for oldHandler in list(localLogger.handlers):
        localLogger.removeHandler(oldHandler)
    for handler in handlers:
        handler.setFormatter(formatter)
        localLogger.addHandler(handler)
        logger.info(f"Logger {localLogger.name or 'root'}: {type(handler).__name__}, level {handler.level}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure logging from the ``[logging]`` config table.

    Per-logger overrides go into ``[logging.logger."<name>"]`` tables and accept
    the same keys as the root configuration.
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    configureLogger(root, config)

    rootLevel = root.getEffectiveLevel()
    if rootLevel < logging.WARNING:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Logger '{loggerName}' overrides: {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured, root level: {logging.getLevelName(rootLevel)}")
