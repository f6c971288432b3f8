"""
Centralized file walking utilities for the Comment Search MCP server.

This module provides candidate file discovery that integrates with the
FileFilter system and the include/exclude predicate of a search.
"""

import fnmatch
import os
from pathlib import Path
from typing import Iterator, List, Optional

from core.errors import FileAccessError
from core.models import SearchOptions
from core.scheduler import FileHandle

from .file_filter import FileFilter, should_include, validate_path_patterns


class FileWalker:
    """Centralized file walking with integrated filtering."""

    def __init__(self, file_filter: Optional[FileFilter] = None):
        """
        Initialize the file walker.

        Args:
            file_filter: FileFilter instance, creates default if None
        """
        self.file_filter = file_filter or FileFilter()

    def walk_files(self, project_path: str, file_pattern: Optional[str] = None) -> Iterator[Path]:
        """
        Walk through all searchable files in a project directory.

        Args:
            project_path: Root directory to walk
            file_pattern: Optional glob pattern, matched against the file name
                          or, when it contains a slash, the relative path

        Yields:
            Path objects for files that should be processed
        """
        base_path = Path(project_path)

        for root, dirs, files in os.walk(project_path):
            # Filter directories in-place to avoid descending into excluded dirs
            dirs[:] = sorted(d for d in dirs if not self.file_filter.should_exclude_directory(d))

            for file in sorted(files):
                file_path = Path(root) / file
                if self.file_filter.should_exclude_file(file_path):
                    continue
                if file_pattern and not self._matches_glob(file_path, base_path, file_pattern):
                    continue
                yield file_path

    @staticmethod
    def _matches_glob(file_path: Path, base_path: Path, file_pattern: str) -> bool:
        if "/" in file_pattern:
            relative = file_path.relative_to(base_path).as_posix()
            return fnmatch.fnmatch(relative, file_pattern)
        return fnmatch.fnmatch(file_path.name, file_pattern)

    def find_candidate_files(self, project_path: str, options: Optional[SearchOptions] = None) -> List[FileHandle]:
        """
        Collect the candidate file list for a search, in stable path order.

        Args:
            project_path: Root directory to search
            options: Search options carrying file_pattern and include/exclude regexes

        Returns:
            FileHandle list with paths relative to project_path as identifiers
        """
        if not os.path.isdir(project_path):
            raise FileAccessError(project_path, "not a directory")

        options = options or SearchOptions()
        validate_path_patterns(options)

        base_path = Path(project_path)
        handles = []
        for file_path in self.walk_files(project_path, options.file_pattern):
            relative = file_path.relative_to(base_path).as_posix()
            if should_include(relative, options):
                handles.append(FileHandle(str(file_path), relative))
        return handles

    def count_files(self, project_path: str) -> int:
        """
        Count total number of searchable files in the project.

        Args:
            project_path: Root directory to count

        Returns:
            Number of files that would be processed
        """
        count = 0
        for _ in self.walk_files(project_path):
            count += 1
        return count


def create_file_walker(additional_excludes: Optional[List[str]] = None) -> FileWalker:
    """
    Factory function to create a FileWalker with custom exclusions.

    Args:
        additional_excludes: Additional patterns to exclude

    Returns:
        Configured FileWalker instance
    """
    return FileWalker(FileFilter(additional_excludes))
