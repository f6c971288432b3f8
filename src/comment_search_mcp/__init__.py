"""
Comment Search MCP

Comment-aware code search exposed as MCP tools.
"""

__version__ = "0.1.0"
