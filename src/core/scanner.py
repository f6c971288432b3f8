"""
Scan Orchestrator - 单文件扫描

规范化 -> 词法分类 + 匹配策略 -> 结果过滤
纯函数: (文件字节, 查询, 选项) -> 有序匹配列表
"""

import logging
from collections import deque
from pathlib import Path
from typing import List, Optional, Union

from .errors import DecodeError, InvalidPatternError
from .lexer import LexicalClassifier
from .models import Query, SearchMatch, SearchOptions
from .normalizer import decode_bytes, normalize_query, normalize_text
from .result_filter import ResultFilter
from .strategies import MatchStrategy, create_strategy

logger = logging.getLogger(__name__)


def _match_order(match: SearchMatch):
    return match.line, match.column, match.match_length


def scan_normalized(
    text: str, strategy: MatchStrategy, options: SearchOptions, file_id: str = ""
) -> List[SearchMatch]:
    """核心单遍扫描 - 文本和策略都已规范化"""
    result_filter = ResultFilter(options, file_id)
    window = deque(maxlen=strategy.lookback)
    matches: List[SearchMatch] = []

    for position in LexicalClassifier(text):
        window.append(position)
        for start_offset, length in strategy.feed(text, position):
            back = position.offset - start_offset + 1
            if back > len(window):
                continue
            start = window[-back]
            match = result_filter.accept(text, start, length)
            if match is not None:
                matches.append(match)

    # 多模式按结束位置产出，统一为起点升序
    if strategy.lookback > 1:
        matches.sort(key=_match_order)
    return matches


def scan_text(
    text: str, query: Query, options: Optional[SearchOptions] = None, file_id: str = ""
) -> List[SearchMatch]:
    """扫描已解码文本 - 失败只影响当前文件"""
    options = options or SearchOptions()
    try:
        strategy = create_strategy(normalize_query(query), options)
    except InvalidPatternError as e:
        logger.warning("Regex search aborted for %s: %s", file_id or "<text>", e)
        return []
    return scan_normalized(normalize_text(text), strategy, options, file_id)


def scan(
    file_bytes: bytes, query: Query, options: Optional[SearchOptions] = None, file_id: str = ""
) -> List[SearchMatch]:
    """引擎入口 - 无状态，每个文件调用一次"""
    try:
        text = decode_bytes(file_bytes)
    except DecodeError as e:
        logger.warning("Skipping %s: %s", file_id or "<bytes>", e)
        return []
    return scan_text(text, query, options, file_id)


def read_file_bytes(path: Union[str, Path]) -> Optional[bytes]:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        logger.warning("Cannot read file %s: %s", path, e)
        return None


def scan_file(
    path: Union[str, Path], query: Query, options: Optional[SearchOptions] = None, file_id: Optional[str] = None
) -> List[SearchMatch]:
    """同步读取并扫描 - 读取失败返回空列表"""
    raw = read_file_bytes(path)
    if raw is None:
        return []
    return scan(raw, query, options, file_id if file_id is not None else str(path))
