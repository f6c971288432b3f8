"""
Utility modules for the Comment Search MCP server.

This package contains shared utilities:
- error_handler: Decorator-based error handling for MCP entry points
- file utilities: File filtering and walking
"""

from .error_handler import handle_mcp_errors
from .file_filter import FileFilter, should_include
from .file_walker import FileWalker, create_file_walker

__all__ = [
    'handle_mcp_errors',
    'FileFilter',
    'should_include',
    'FileWalker',
    'create_file_walker'
]
