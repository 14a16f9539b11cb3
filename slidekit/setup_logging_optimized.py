import logging
from typing import Optional

from slidekit.config.logging_config import apply_logging_config, get_logging_config


def setup_logging(level: Optional[str] = None) -> None:
    """Install the engine's console logging once.

    - Picks the development/production/debug profile from the environment
    - An explicit `level` overrides the profile's default level
    - Later calls only adjust the root level
    """
    root = logging.getLogger()
    if root.handlers:
        if level:
            root.setLevel(getattr(logging, level.upper(), logging.INFO))
        return

    config = get_logging_config()
    if level:
        config["default_level"] = level.upper()
    apply_logging_config(config)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger after ensuring logging is initialized."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
