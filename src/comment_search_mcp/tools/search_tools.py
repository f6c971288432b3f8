"""
Search Tools - comment-aware search and result navigation

Plain functions over a SearchWorkspace, following Linus-style direct data
manipulation principles. The MCP server and the tests call the same functions.
"""

import fnmatch
import os
from typing import Any, Dict, List, Optional

from core.models import SearchMatch, SearchOptions, SearchResult
from core.normalizer import normalize_query
from core.session import search_fingerprint

from ..utils import handle_mcp_errors
from ..workspace import SearchWorkspace


def _require_project(workspace: SearchWorkspace) -> None:
    if not workspace.base_path:
        raise ValueError("Project path not set. Call set_project_path first.")


def _require_session(workspace: SearchWorkspace) -> None:
    if not workspace.session.is_active:
        raise ValueError("No active search. Call search_code first.")


def _match_response(workspace: SearchWorkspace, match: Optional[SearchMatch]) -> Dict[str, Any]:
    if match is None:
        return {"success": False, "error": "No matches"}
    return {
        "index": workspace.session.current_index,
        "total_count": len(workspace.session.results),
        "match": match.to_dict(),
    }


def _result_response(workspace: SearchWorkspace, result: SearchResult) -> Dict[str, Any]:
    session = workspace.session
    return {
        "matches": [m.to_dict() for m in result.matches],
        "total_count": result.total_count,
        "has_more": result.has_more,
        "search_time": result.search_time,
        "comment_mode": session.options.comment_mode if session.options else None,
        "stats": result.stats.to_dict(),
    }


# ----- 项目工具 -----


@handle_mcp_errors
def tool_set_project_path(workspace: SearchWorkspace, path: str) -> Dict[str, Any]:
    """设置项目路径 - 旧搜索随之丢弃"""
    path = os.path.abspath(os.path.expanduser(path))
    if not os.path.isdir(path):
        return {"success": False, "error": f"Directory does not exist: {path}"}
    workspace.set_base_path(path)
    return {"path": path, "file_count": workspace.walker.count_files(path)}


@handle_mcp_errors
def tool_find_files(workspace: SearchWorkspace, pattern: str) -> Dict[str, Any]:
    _require_project(workspace)
    files: List[str] = []
    for file_path in workspace.walker.walk_files(workspace.base_path):
        relative = os.path.relpath(file_path, workspace.base_path).replace(os.sep, "/")
        if fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(file_path.name, pattern):
            files.append(relative)
    return {"files": files, "count": len(files)}


# ----- 搜索工具 -----


@handle_mcp_errors
async def tool_search_code(
    workspace: SearchWorkspace,
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
    注释感知搜索 - 新会话，返回第一页

    patterns非空时走多模式匹配，否则query按字面量或正则处理
    """
    _require_project(workspace)
    search_query = list(patterns) if patterns else query
    if not search_query:
        raise ValueError("Empty query")
    # 指纹与会话使用同一规范化形式
    search_query = normalize_query(search_query)

    options = SearchOptions.from_comment_mode(
        comment_mode,
        case_sensitive=case_sensitive,
        whole_word=whole_word,
        regex=regex,
        include_pattern=include_pattern,
        exclude_pattern=exclude_pattern,
        file_pattern=file_pattern,
    )
    session = workspace.session

    # 相同搜索直接复用当前会话
    fingerprint = search_fingerprint(search_query, options, session.scope)
    if not refresh and session.is_active and session.fingerprint == fingerprint:
        matches = session.results
        if limit:
            matches = matches[:limit]
        return {
            "matches": [m.to_dict() for m in matches],
            "total_count": len(matches),
            "has_more": session.has_more or len(matches) < len(session.results),
            "search_time": 0.0,
            "comment_mode": options.comment_mode,
            "cached": True,
        }

    files = workspace.walker.find_candidate_files(workspace.base_path, options)
    if not files:
        session.clear()
        return {"matches": [], "total_count": 0, "has_more": False, "message": "No files to search"}

    result = await session.start(files, search_query, options, target_count=limit, base_path=workspace.base_path)
    response = _result_response(workspace, result)
    response["files_searched"] = session.collector.cursor.file_index
    response["files_total"] = len(files)
    return response


@handle_mcp_errors
async def tool_load_more_results(workspace: SearchWorkspace, count: Optional[int] = None) -> Dict[str, Any]:
    """加载更多 - 从游标继续，已有结果不变"""
    _require_session(workspace)
    previous = len(workspace.session.results)
    result = await workspace.session.load_more(count)
    response = _result_response(workspace, result)
    response["new_count"] = result.total_count - previous
    return response


# ----- 导航工具 -----


@handle_mcp_errors
def tool_next_match(workspace: SearchWorkspace) -> Dict[str, Any]:
    _require_session(workspace)
    return _match_response(workspace, workspace.session.next_match())


@handle_mcp_errors
def tool_prev_match(workspace: SearchWorkspace) -> Dict[str, Any]:
    _require_session(workspace)
    return _match_response(workspace, workspace.session.prev_match())


@handle_mcp_errors
def tool_go_to_match(workspace: SearchWorkspace, index: int) -> Dict[str, Any]:
    _require_session(workspace)
    match = workspace.session.go_to(index)
    if match is None:
        return {"success": False, "error": f"Match index out of range: {index}"}
    return _match_response(workspace, match)


@handle_mcp_errors
def tool_clear_results(workspace: SearchWorkspace) -> Dict[str, Any]:
    workspace.session.cancel()
    workspace.session.clear()
    return {"cleared": True}


@handle_mcp_errors
def tool_get_search_status(workspace: SearchWorkspace) -> Dict[str, Any]:
    status = workspace.session.summary()
    status["project_path"] = workspace.base_path
    status["config"] = repr(workspace.config)
    return status
