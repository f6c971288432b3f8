"""
Scan Worker - 进程隔离的消息传递任务

请求: 文件字节 + 查询 + 选项 -> 响应: 匹配列表
msgpack二进制编码，跨进程只传字节
"""

from typing import Any, Dict, List, Tuple

import msgpack

from .models import Query, SearchMatch, SearchOptions
from .scanner import scan


def encode_request(file_id: str, file_bytes: bytes, query: Query, options: SearchOptions) -> bytes:
    payload: Dict[str, Any] = {
        "file": file_id,
        "content": file_bytes,
        "query": query if isinstance(query, str) else list(query),
        "options": options.to_dict(),
    }
    return msgpack.packb(payload, use_bin_type=True)


def decode_request(payload: bytes) -> Tuple[str, bytes, Query, SearchOptions]:
    data = msgpack.unpackb(payload, raw=False)
    return data["file"], data["content"], data["query"], SearchOptions.from_dict(data["options"])


def encode_response(matches: List[SearchMatch]) -> bytes:
    return msgpack.packb([m.to_dict() for m in matches], use_bin_type=True)


def decode_response(payload: bytes) -> List[SearchMatch]:
    return [SearchMatch.from_dict(item) for item in msgpack.unpackb(payload, raw=False)]


def run_scan_task(payload: bytes) -> bytes:
    """工作进程入口 - 模块级函数才能被pickle"""
    file_id, content, query, options = decode_request(payload)
    return encode_response(scan(content, query, options, file_id))
