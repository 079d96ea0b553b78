"""Validator configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_TAG_KEY = "validate"


@dataclass(frozen=True)
class ValidatorConfig:
    """Settings shared by the walker and the CLI.

    Attributes:
        tag_key: Field metadata key that holds the rule annotation
        log_level: Logging level name applied by the CLI
    """

    tag_key: str = DEFAULT_TAG_KEY
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> ValidatorConfig:
        """Create config from environment variables.

        Resolution order for each setting:
        1. BEANVALIDATOR_TAG_KEY / BEANVALIDATOR_LOG_LEVEL env vars
        2. Defaults ("validate", "WARNING")
        """
        tag_key = os.environ.get("BEANVALIDATOR_TAG_KEY") or DEFAULT_TAG_KEY
        log_level = (os.environ.get("BEANVALIDATOR_LOG_LEVEL") or "WARNING").upper()
        return cls(tag_key=tag_key, log_level=log_level)

    @property
    def logging_level(self) -> int:
        """Numeric logging level; unknown names fall back to WARNING."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING
