"""
File filtering for candidate discovery.

Directory exclusion, temporary/binary file detection and the
``should_include(path, options)`` predicate over relative paths.
"""

import fnmatch
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional

from core.errors import InvalidPatternError
from core.models import SearchOptions

DEFAULT_EXCLUDE_DIRS = {
    ".git", ".svn", ".hg",
    "node_modules", "bower_components",
    "__pycache__", ".mypy_cache", ".pytest_cache", ".tox",
    ".venv", "venv", "env",
    "dist", "build", "out", "target",
    ".idea", ".vscode",
}

# Binary content is skipped before it ever reaches the decoder
BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp",
    ".pdf", ".zip", ".gz", ".tar", ".7z", ".rar", ".jar",
    ".exe", ".dll", ".so", ".dylib", ".o", ".a", ".class", ".pyc",
    ".woff", ".woff2", ".ttf", ".eot", ".mp3", ".mp4", ".mov",
}

TEMPORARY_SUFFIXES = ("~", ".swp", ".swo", ".tmp", ".bak")


@lru_cache(maxsize=64)
def _compile_path_pattern(pattern: str) -> "re.Pattern[str]":
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def should_include(path: str, options: SearchOptions) -> bool:
    """
    Apply include/exclude regular expressions to a relative path.

    Paths are compared with ``/`` separators. An invalid pattern raises
    InvalidPatternError so the caller can report it before scanning.
    """
    relative = path.replace("\\", "/")
    if options.include_pattern:
        if not _compile_path_pattern(options.include_pattern).search(relative):
            return False
    if options.exclude_pattern:
        if _compile_path_pattern(options.exclude_pattern).search(relative):
            return False
    return True


def validate_path_patterns(options: SearchOptions) -> None:
    for pattern in (options.include_pattern, options.exclude_pattern):
        if pattern:
            _compile_path_pattern(pattern)


class FileFilter:
    """Centralized directory and file exclusion rules."""

    def __init__(self, additional_excludes: Optional[Iterable[str]] = None):
        self.exclude_dirs = set(DEFAULT_EXCLUDE_DIRS)
        self.exclude_patterns: List[str] = list(additional_excludes or [])

    def should_exclude_directory(self, name: str) -> bool:
        if name in self.exclude_dirs:
            return True
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.exclude_patterns)

    def is_temporary_file(self, file_path: Path) -> bool:
        return file_path.name.endswith(TEMPORARY_SUFFIXES)

    def is_binary_file(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in BINARY_EXTENSIONS

    def should_exclude_file(self, file_path: Path) -> bool:
        if self.is_temporary_file(file_path) or self.is_binary_file(file_path):
            return True
        return any(fnmatch.fnmatch(file_path.name, pattern) for pattern in self.exclude_patterns)

    def get_exclude_summary(self) -> dict:
        return {
            "exclude_dirs": sorted(self.exclude_dirs),
            "exclude_patterns": list(self.exclude_patterns),
        }
