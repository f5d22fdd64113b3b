"""
Configuration for the RESP playground.

Settings live in a dataclass with defaults; a plain ``key value`` file
(``#`` comments allowed) can override them.
"""

import logging
import os
import sys
from dataclasses import dataclass, fields

from .decoder import DecoderLimits

logger = logging.getLogger("resp_playground")


@dataclass
class PlaygroundConfig:
    """Playground settings."""

    # UI settings
    host: str = "127.0.0.1"
    port: int = 7860
    share: bool = False

    # Logging
    loglevel: str = "info"

    # Decoder limits
    max_bulk_length: int = DecoderLimits.max_bulk_length
    max_array_length: int = DecoderLimits.max_array_length
    max_nesting_depth: int = DecoderLimits.max_nesting_depth
    max_line_length: int = DecoderLimits.max_line_length

    @classmethod
    def from_file(cls, filepath: str) -> "PlaygroundConfig":
        """Load configuration from a file. Missing files give the defaults."""
        config = cls()
        if not os.path.exists(filepath):
            logger.info(f"No config file at {filepath}, using defaults")
            return config

        types = {f.name: type(getattr(config, f.name)) for f in fields(cls)}
        with open(filepath, "r") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                parts = line.split(None, 1)
                if len(parts) != 2:
                    continue
                key, value = parts[0].lower(), parts[1].strip().strip('"')
                attr_type = types.get(key)
                if attr_type is None:
                    logger.warning(f"Unknown config key '{key}' ignored")
                elif attr_type is bool:
                    setattr(config, key, value.lower() in ("1", "yes", "true", "on"))
                elif attr_type is int:
                    setattr(config, key, int(value))
                else:
                    setattr(config, key, value)
        return config

    def decoder_limits(self) -> DecoderLimits:
        return DecoderLimits(
            max_bulk_length=self.max_bulk_length,
            max_array_length=self.max_array_length,
            max_nesting_depth=self.max_nesting_depth,
            max_line_length=self.max_line_length,
        )


def setup_logging(level: str = "info"):
    """Setup logging configuration."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(handler)

    logger.setLevel(log_level)
