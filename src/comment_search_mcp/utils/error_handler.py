"""
Decorator-based error handling for MCP entry points.

Every tool returns a dict with a ``success`` flag; exceptions never reach the
MCP transport.
"""

import inspect
import logging
from functools import wraps
from typing import Any, Callable, Dict, cast

logger = logging.getLogger(__name__)


def _error_response(func: Callable, error: Exception) -> Dict[str, Any]:
    logger.error("Tool %s failed: %s", func.__name__, error)
    return {"success": False, "error": str(error), "function": func.__name__}


def _mark_success(result: Any) -> Dict[str, Any]:
    # 确保所有成功响应包含success标志
    if isinstance(result, dict) and "success" not in result:
        result["success"] = True
    return cast(Dict[str, Any], result)


def handle_mcp_errors(func: Callable) -> Callable:
    """
    Unified error handling for tool functions, sync or async.

    Returns ``{"success": False, "error": ..., "function": ...}`` on failure.
    """
    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args, **kwargs) -> Dict[str, Any]:
            try:
                return _mark_success(await func(*args, **kwargs))
            except Exception as e:
                return _error_response(func, e)

        return async_wrapper

    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            return _mark_success(func(*args, **kwargs))
        except Exception as e:
            return _error_response(func, e)

    return wrapper
