"""
Tools - comment-aware search tool collection
"""

from .registry import execute_tool, get_tool_registry

__all__ = [
    'execute_tool',
    'get_tool_registry',
]
