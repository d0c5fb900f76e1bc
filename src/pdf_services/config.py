"""
Logging configuration for the SDK.
"""

import json
import logging
import logging.config
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_LOG_FORMAT = "%(asctime)s:[%(levelname)s]: %(message)s"

_configured = False


@dataclass
class SDKConfig:
    """Logging configuration for SDK operations."""

    debug: bool = False
    log_level: str = "INFO"
    log_config_file: Optional[str] = None

    def setup_logging(self, force: bool = False) -> None:
        """Configure the ``pdf_services`` logger once per process.

        An external configuration file wins when it exists. JSON files are
        applied with ``dictConfig``, anything else with ``fileConfig``.
        """
        global _configured
        if _configured and not force:
            return

        logger = logging.getLogger("pdf_services")

        if self.log_config_file and Path(self.log_config_file).is_file():
            _apply_config_file(Path(self.log_config_file))
            logger.info("Logging configuration found at %s", self.log_config_file)
        else:
            level_name = "DEBUG" if self.debug else self.log_level
            level = getattr(logging, level_name.upper(), logging.INFO)
            logger.setLevel(level)

            if not logger.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
                logger.addHandler(handler)
            logger.debug("No logging configuration file, using defaults")

        _configured = True


def _apply_config_file(path: Path) -> None:
    if path.suffix.lower() == ".json":
        with path.open("r", encoding="utf-8") as f:
            logging.config.dictConfig(json.load(f))
    else:
        logging.config.fileConfig(str(path), disable_existing_loggers=False)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(f"pdf_services.{name}")
