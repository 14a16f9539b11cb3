"""
Environment-specific logging configuration
"""
import logging
import os
from typing import Dict, Any, Optional

from dotenv import load_dotenv


ENGINE_MODULES = [
    "slidekit.generation.layout_composer",
    "slidekit.generation.style_validator",
    "slidekit.generation.color_science",
    "slidekit.generation.slide_builder",
]


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration based on environment"""
    load_dotenv()

    env_name = (os.getenv("SLIDEKIT_ENV") or os.getenv("ENV") or "development").lower()
    is_production = env_name == "production"
    is_debug = os.getenv("DEBUG", "false").lower() == "true"

    config = {
        "production": {
            # Production: warnings only, engine internals quiet
            "default_level": "WARNING",
            "console_format": "%(levelname)s - %(message)s",
            "show_timestamps": False,
            "suppress_modules": list(ENGINE_MODULES),
        },
        "development": {
            "default_level": "INFO",
            "console_format": "%(asctime)s - %(levelname)s - %(message)s",
            "show_timestamps": True,
            "suppress_modules": [],
        },
        "debug": {
            # Debug: per-element placement and rule decisions
            "default_level": "DEBUG",
            "console_format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
            "show_timestamps": True,
            "suppress_modules": [],
        },
    }

    if is_debug:
        selected_config = dict(config["debug"])
    elif is_production:
        selected_config = dict(config["production"])
    else:
        selected_config = dict(config["development"])

    selected_config["environment"] = "debug" if is_debug else ("production" if is_production else "development")

    override = os.getenv("SLIDEKIT_LOG_LEVEL")
    if override:
        selected_config["default_level"] = override.upper()

    return selected_config


def apply_logging_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Apply logging configuration to Python's logging system"""
    if config is None:
        config = get_logging_config()

    level = getattr(logging, config["default_level"], logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(config["console_format"]))

    # Replace existing handlers so repeated calls do not duplicate output
    root_logger.handlers = []
    root_logger.addHandler(console_handler)

    for module in config.get("suppress_modules", []):
        logging.getLogger(module).setLevel(logging.WARNING)

    return config
