"""
Tool Registry - 工具注册表

单一入口点，消除if/else分支
"""

import inspect
from typing import Any, Callable, Dict

from ..workspace import SearchWorkspace


def _import_tools() -> Dict[str, Callable]:
    """延迟导入避免循环依赖"""
    from .search_tools import (
        tool_clear_results,
        tool_find_files,
        tool_get_search_status,
        tool_go_to_match,
        tool_load_more_results,
        tool_next_match,
        tool_prev_match,
        tool_search_code,
        tool_set_project_path,
    )

    return {
        "set_project_path": tool_set_project_path,
        "find_files": tool_find_files,
        "search_code": tool_search_code,
        "load_more_results": tool_load_more_results,
        "next_match": tool_next_match,
        "prev_match": tool_prev_match,
        "go_to_match": tool_go_to_match,
        "clear_results": tool_clear_results,
        "get_search_status": tool_get_search_status,
    }


def get_tool_registry() -> Dict[str, Callable]:
    """获取工具注册表 - 懒加载"""
    return _import_tools()


async def execute_tool(tool_name: str, workspace: SearchWorkspace, **kwargs) -> Dict[str, Any]:
    """
    统一工具执行器 - 替代所有if/else分支

    同步和异步工具一视同仁
    """
    tool_func = get_tool_registry().get(tool_name)
    if not tool_func:
        return {"success": False, "error": f"Unknown tool: {tool_name}"}

    try:
        result = tool_func(workspace, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result
    except Exception as e:
        return {"success": False, "error": f"Tool execution failed: {str(e)}"}
