"""
Build Configuration
===================

Settings that are not part of the zobj or manifest formats. Values come
from the defaults below, or from environment variables via
``BuildConfig.from_env()``:

    PLAYAS_PLACEHOLDER_SYMBOL   Dictionary name of the placeholder DF
    PLAYAS_LOG_LEVEL            DEBUG, INFO, WARNING or ERROR
    PLAYAS_OUTPUT_SUFFIX        Suffix for default output file names
"""

from dataclasses import dataclass
import logging
import os

from playas_sdk.alias.symbols import DEFAULT_PLACEHOLDER_SYMBOL


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class BuildConfig:
    """
    Configuration for a patch build.

    Attributes:
        placeholder_symbol: Name bank objects fall back to
        log_level: Logging level name for the CLI
        output_suffix: Appended to the zobj stem when no output is given
    """
    placeholder_symbol: str = DEFAULT_PLACEHOLDER_SYMBOL
    log_level: str = "WARNING"
    output_suffix: str = ".patched.zobj"

    @classmethod
    def from_env(cls) -> "BuildConfig":
        """Create a BuildConfig from PLAYAS_* environment variables."""
        config = cls()

        if symbol := os.environ.get("PLAYAS_PLACEHOLDER_SYMBOL", "").strip():
            config.placeholder_symbol = symbol

        if level := os.environ.get("PLAYAS_LOG_LEVEL", "").strip().upper():
            if level in LOG_LEVELS:
                config.log_level = level

        if suffix := os.environ.get("PLAYAS_OUTPUT_SUFFIX", "").strip():
            config.output_suffix = suffix

        return config

    def logging_level(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)
