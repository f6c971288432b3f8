"""
Search Session - 显式会话状态

替代进程级单例: 结果、游标、当前匹配索引都属于调用方持有的会话
"""

import json
import logging
import time
from typing import Any, Dict, List, Optional, Sequence

import xxhash

from .collector import FileLike, PaginatedCollector
from .models import Query, ScanStats, SearchMatch, SearchOptions, SearchResult
from .normalizer import normalize_query
from .scheduler import ConcurrencyScheduler

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 200


def search_fingerprint(query: Query, options: SearchOptions, scope: str = "") -> str:
    """查询指纹 - 识别重复搜索"""
    data = {
        "scope": scope,
        "query": query if isinstance(query, str) else list(query),
        "options": options.to_dict(),
    }
    return xxhash.xxh3_64(json.dumps(data, sort_keys=True).encode("utf-8")).hexdigest()


class SearchSession:
    """一次搜索的全部状态 - 新搜索或clear时丢弃"""

    def __init__(
        self,
        scheduler: Optional[ConcurrencyScheduler] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        scope: str = "",
    ):
        self.scheduler = scheduler or ConcurrencyScheduler()
        self.page_size = max(1, page_size)
        self.scope = scope
        self.query: Optional[Query] = None
        self.options: Optional[SearchOptions] = None
        self.collector: Optional[PaginatedCollector] = None
        self.fingerprint: Optional[str] = None
        self.current_index = -1
        self.last_search_time = 0.0

    @property
    def results(self) -> List[SearchMatch]:
        return self.collector.results if self.collector else []

    @property
    def has_more(self) -> bool:
        return self.collector.has_more if self.collector else False

    @property
    def is_active(self) -> bool:
        return self.collector is not None

    async def start(
        self,
        files: Sequence[FileLike],
        query: Query,
        options: Optional[SearchOptions] = None,
        target_count: Optional[int] = None,
        base_path: Optional[str] = None,
    ) -> SearchResult:
        """新搜索 - 丢弃旧游标和结果"""
        options = options or SearchOptions()
        query = normalize_query(query)
        self.clear()
        self.scheduler.stats = ScanStats()
        self.query = query
        self.options = options
        self.fingerprint = search_fingerprint(query, options, self.scope)
        self.collector = PaginatedCollector(files, query, options, self.scheduler, base_path)
        return await self._collect(target_count or self.page_size)

    async def load_more(self, count: Optional[int] = None) -> SearchResult:
        """从游标继续 - 已有结果保持为前缀"""
        if self.collector is None:
            return SearchResult(matches=[], has_more=False)
        additional = count or self.page_size
        return await self._collect(len(self.collector.results) + additional)

    async def _collect(self, target_count: int) -> SearchResult:
        start_time = time.time()
        matches, has_more = await self.collector.collect(target_count)
        self.last_search_time = time.time() - start_time
        logger.debug(
            "Collected %d matches (has_more=%s) in %.3fs",
            len(matches), has_more, self.last_search_time,
        )
        return SearchResult(
            matches=matches,
            has_more=has_more,
            search_time=self.last_search_time,
            stats=self.scheduler.stats,
        )

    # ----- 匹配导航 -----

    @property
    def current_match(self) -> Optional[SearchMatch]:
        if 0 <= self.current_index < len(self.results):
            return self.results[self.current_index]
        return None

    def next_match(self) -> Optional[SearchMatch]:
        results = self.results
        if not results:
            return None
        self.current_index = (self.current_index + 1) % len(results)
        return results[self.current_index]

    def prev_match(self) -> Optional[SearchMatch]:
        results = self.results
        if not results:
            return None
        if self.current_index <= 0:
            self.current_index = len(results) - 1
        else:
            self.current_index -= 1
        return results[self.current_index]

    def set_current_index(self, index: int) -> bool:
        if index < 0 or index >= len(self.results):
            return False
        self.current_index = index
        return True

    def go_to(self, index: int) -> Optional[SearchMatch]:
        """定位到指定匹配 - 实际跳转由宿主完成"""
        if not self.set_current_index(index):
            return None
        return self.results[index]

    def cancel(self) -> None:
        if self.collector is not None:
            self.collector.cancel()

    def clear(self) -> None:
        self.query = None
        self.options = None
        self.collector = None
        self.fingerprint = None
        self.current_index = -1

    def summary(self) -> Dict[str, Any]:
        collector = self.collector
        return {
            "active": collector is not None,
            "query": self.query if self.query is None or isinstance(self.query, str) else list(self.query),
            "comment_mode": self.options.comment_mode if self.options else None,
            "result_count": len(self.results),
            "has_more": self.has_more,
            "files_total": len(collector.files) if collector else 0,
            "files_consumed": collector.cursor.file_index if collector else 0,
            "current_index": self.current_index,
            "fingerprint": self.fingerprint,
        }
