"""
Paginated Collector - 游标分页收集

按文件列表顺序提交结果，达到目标数后停止接纳新文件
越过阈值的文件剩余匹配直接丢弃，不延迟到下一页
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .models import Query, ScanCursor, SearchMatch, SearchOptions
from .scheduler import CancellationToken, ConcurrencyScheduler, FileHandle, ScanTask

logger = logging.getLogger(__name__)

FileLike = Union[str, Path, FileHandle]


def to_handles(files: Sequence[FileLike], base_path: Optional[str] = None) -> List[FileHandle]:
    return [FileHandle.of(f, base_path) for f in files]


class PaginatedCollector:
    """跨文件累积匹配，保留可恢复游标"""

    def __init__(
        self,
        files: Sequence[FileLike],
        query: Query,
        options: Optional[SearchOptions] = None,
        scheduler: Optional[ConcurrencyScheduler] = None,
        base_path: Optional[str] = None,
    ):
        self.files = to_handles(files, base_path)
        self.query = query
        self.options = options or SearchOptions()
        self.scheduler = scheduler or ConcurrencyScheduler()
        self.cursor = ScanCursor()
        self.results: List[SearchMatch] = []
        self.token: Optional[CancellationToken] = None

    @property
    def has_more(self) -> bool:
        return self.cursor.file_index < len(self.files)

    async def collect(self, target_count: int) -> Tuple[List[SearchMatch], bool]:
        """从游标恢复，收集到target_count或文件耗尽"""
        if target_count <= len(self.results) or not self.has_more:
            return list(self.results), self.has_more

        start = self.cursor.file_index
        tasks = [ScanTask(i, self.files[i]) for i in range(start, len(self.files))]
        token = CancellationToken()
        self.token = token

        pending: Dict[int, List[SearchMatch]] = {}
        next_index = start

        def commit(index: int, matches: List[SearchMatch]) -> None:
            # 完成顺序不定，按列表顺序提交连续前缀
            nonlocal next_index
            pending[index] = matches
            while next_index in pending and not token.cancelled:
                file_matches = pending.pop(next_index)
                room = target_count - len(self.results)
                if len(file_matches) > room:
                    logger.debug(
                        "Dropping %d matches from %s beyond page threshold",
                        len(file_matches) - room, self.files[next_index].file_id,
                    )
                self.results.extend(file_matches[:room])
                next_index += 1
                if len(self.results) >= target_count:
                    token.cancel()

        await self.scheduler.run(tasks, self.query, self.options, token, commit)

        self.cursor.file_index = next_index
        self.cursor.collected = len(self.results)
        self.token = None
        return list(self.results), self.has_more

    async def load_more(self, additional_count: int) -> Tuple[List[SearchMatch], bool]:
        return await self.collect(len(self.results) + max(0, additional_count))

    def cancel(self) -> None:
        """放弃进行中的收集"""
        if self.token is not None:
            self.token.cancel()

    def reset(self) -> None:
        self.cursor = ScanCursor()
        self.results = []


async def collect(
    files: Sequence[FileLike],
    query: Query,
    options: Optional[SearchOptions],
    target_count: int,
    scheduler: Optional[ConcurrencyScheduler] = None,
) -> Tuple[PaginatedCollector, List[SearchMatch], bool]:
    """一次性入口 - 返回收集器供后续load_more使用"""
    collector = PaginatedCollector(files, query, options, scheduler)
    matches, has_more = await collector.collect(target_count)
    return collector, matches, has_more


async def search_all(
    files: Sequence[FileLike],
    query: Query,
    options: Optional[SearchOptions] = None,
    scheduler: Optional[ConcurrencyScheduler] = None,
    token: Optional[CancellationToken] = None,
) -> List[SearchMatch]:
    """不分页全量搜索 - 跨文件按完成顺序追加"""
    scheduler = scheduler or ConcurrencyScheduler()
    tasks = [ScanTask(i, handle) for i, handle in enumerate(to_handles(files))]
    matches: List[SearchMatch] = []
    for _, file_matches in await scheduler.run(tasks, query, options or SearchOptions(), token):
        matches.extend(file_matches)
    return matches
