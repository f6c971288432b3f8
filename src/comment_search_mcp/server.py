"""
Comment Search MCP Server - Linus式极简实现

工具只做参数转发，会话状态归lifespan上下文所有
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from mcp.server.fastmcp import Context, FastMCP

from .config import CONFIG_DOCS, get_search_config
from .tools import execute_tool
from .workspace import SearchWorkspace

logger = logging.getLogger(__name__)


@asynccontextmanager
async def search_lifespan(_server: FastMCP) -> AsyncIterator[SearchWorkspace]:
    workspace = SearchWorkspace.create()
    try:
        yield workspace
    finally:
        workspace.close()


mcp = FastMCP("CommentSearch", lifespan=search_lifespan)


def _workspace(ctx: Context) -> SearchWorkspace:
    return ctx.request_context.lifespan_context


@mcp.resource("config://comment-search")
def get_config() -> str:
    return f"{get_search_config()!r}\n{CONFIG_DOCS}"


# ----- 核心工具组 -----


@mcp.tool()
async def set_project_path(path: str, ctx: Context) -> Dict[str, Any]:
    """Set the base project path to search."""
    return await execute_tool("set_project_path", _workspace(ctx), path=path)


@mcp.tool()
async def find_files(pattern: str, ctx: Context) -> Dict[str, Any]:
    """Find project files matching a glob pattern."""
    return await execute_tool("find_files", _workspace(ctx), pattern=pattern)


@mcp.tool()
async def search_code(
    ctx: Context,
    query: str = "",
    patterns: Optional[List[str]] = None,
    case_sensitive: bool = False,
    whole_word: bool = False,
    regex: bool = False,
    comment_mode: str = "exclude",
    include_pattern: Optional[str] = None,
    exclude_pattern: Optional[str] = None,
    file_pattern: Optional[str] = None,
    limit: Optional[int] = None,
    refresh: bool = False,
) -> Dict[str, Any]:
    """
    Search the project while telling comments apart from code.

    Args:
        query: Literal text, or a regular expression when regex is True.
        patterns: Several literal strings searched at once (overrides query).
        case_sensitive: Compare case exactly.
        whole_word: Require ASCII non-word characters around the match.
        regex: Treat query as a regular expression anchored at each position.
        comment_mode: "exclude" (code only), "include" (code and comments) or "only".
        include_pattern: Regex over relative paths that files must match.
        exclude_pattern: Regex over relative paths that removes files.
        file_pattern: Glob applied during file discovery (e.g. "*.ts").
        limit: Page size for the first page; defaults to the configured page size.
        refresh: Re-run even if the same search is already active.

    String and character literal contents are never matched.
    """
    return await execute_tool(
        "search_code",
        _workspace(ctx),
        query=query,
        patterns=patterns,
        case_sensitive=case_sensitive,
        whole_word=whole_word,
        regex=regex,
        comment_mode=comment_mode,
        include_pattern=include_pattern,
        exclude_pattern=exclude_pattern,
        file_pattern=file_pattern,
        limit=limit,
        refresh=refresh,
    )


@mcp.tool()
async def load_more_results(ctx: Context, count: Optional[int] = None) -> Dict[str, Any]:
    """Continue the active search from where the last page stopped."""
    return await execute_tool("load_more_results", _workspace(ctx), count=count)


# ----- 导航工具组 -----


@mcp.tool()
async def next_match(ctx: Context) -> Dict[str, Any]:
    """Move to the next match (wraps around)."""
    return await execute_tool("next_match", _workspace(ctx))


@mcp.tool()
async def prev_match(ctx: Context) -> Dict[str, Any]:
    """Move to the previous match (wraps around)."""
    return await execute_tool("prev_match", _workspace(ctx))


@mcp.tool()
async def go_to_match(index: int, ctx: Context) -> Dict[str, Any]:
    """Select a match by index and return its location."""
    return await execute_tool("go_to_match", _workspace(ctx), index=index)


@mcp.tool()
async def clear_results(ctx: Context) -> Dict[str, Any]:
    """Discard the active search and its cursor."""
    return await execute_tool("clear_results", _workspace(ctx))


@mcp.tool()
async def get_search_status(ctx: Context) -> Dict[str, Any]:
    """Report the active search, cursor position and configuration."""
    return await execute_tool("get_search_status", _workspace(ctx))


def main():
    config = get_search_config()
    # stdout留给stdio传输
    logging.basicConfig(level=config.get_log_level(), stream=sys.stderr)
    logger.info("Starting CommentSearch server: %r", config)
    mcp.run()


if __name__ == '__main__':
    main()
