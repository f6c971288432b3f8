"""
Configuration Management for Comment Search MCP

Following Linus's principle: "Good configuration is no configuration."
Provides sensible defaults with optional environment variable overrides.
"""

import logging
import os
from typing import Optional

from core.scheduler import EXECUTOR_MODES, default_concurrency


class SearchConfig:
    """Search engine and server configuration"""

    # Default values - concurrency follows the machine, the rest are fixed
    DEFAULT_PAGE_SIZE = 200  # Matches per page before "load more"
    DEFAULT_MAX_FILE_SIZE_MB = 10  # Larger files are skipped
    DEFAULT_EXECUTOR = "thread"  # inline | thread | process
    DEFAULT_LOG_LEVEL = "ERROR"

    def __init__(self):
        # Load from environment variables with fallback to defaults
        self.max_concurrency = self._get_int_env(
            "COMMENT_SEARCH_MAX_CONCURRENCY", default_concurrency()
        )
        self.page_size = self._get_int_env("COMMENT_SEARCH_PAGE_SIZE", self.DEFAULT_PAGE_SIZE)
        self.max_file_size_mb = self._get_float_env(
            "COMMENT_SEARCH_MAX_FILE_SIZE_MB", self.DEFAULT_MAX_FILE_SIZE_MB
        )
        self.executor = os.environ.get("COMMENT_SEARCH_EXECUTOR", self.DEFAULT_EXECUTOR).strip().lower()
        self.log_level = os.environ.get("COMMENT_SEARCH_LOG_LEVEL", self.DEFAULT_LOG_LEVEL).strip().upper()

        # Validate configuration
        self._validate_config()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_float_env(self, key: str, default: float) -> float:
        """Get float from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return float(value)
        except (ValueError, TypeError):
            pass
        return default

    def _validate_config(self):
        """Validate configuration values"""
        if self.max_concurrency <= 0:
            raise ValueError("max_concurrency must be positive")
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if self.executor not in EXECUTOR_MODES:
            raise ValueError(
                f"executor must be one of {', '.join(EXECUTOR_MODES)}, got {self.executor!r}"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def get_max_file_size_bytes(self) -> int:
        """Get max file size in bytes"""
        return int(self.max_file_size_mb * 1024 * 1024)

    def get_log_level(self) -> int:
        return logging.getLevelName(self.log_level)

    def __repr__(self) -> str:
        return (
            f"SearchConfig("
            f"max_concurrency={self.max_concurrency}, "
            f"page_size={self.page_size}, "
            f"max_file_size_mb={self.max_file_size_mb}, "
            f"executor={self.executor!r}, "
            f"log_level={self.log_level!r})"
        )


# Global configuration instance
_config: Optional[SearchConfig] = None


def get_search_config() -> SearchConfig:
    """Get global search configuration instance"""
    global _config
    if _config is None:
        _config = SearchConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
Comment Search Configuration Environment Variables:

- COMMENT_SEARCH_MAX_CONCURRENCY: Files scanned in parallel (default: CPU count)
- COMMENT_SEARCH_PAGE_SIZE: Matches returned per page (default: 200)
- COMMENT_SEARCH_MAX_FILE_SIZE_MB: Files larger than this are skipped (default: 10)
- COMMENT_SEARCH_EXECUTOR: Where per-file scans run: inline, thread or process (default: thread)
- COMMENT_SEARCH_LOG_LEVEL: Logging level written to stderr (default: ERROR)

Example usage:
    export COMMENT_SEARCH_MAX_CONCURRENCY=8
    export COMMENT_SEARCH_EXECUTOR=process
    export COMMENT_SEARCH_LOG_LEVEL=INFO
"""
