"""
Concurrency Scheduler - 有界并发扫描池

FIFO队列 + C个worker协程，最多C个任务同时运行
挂起点只有两个: 文件读取、把扫描交给执行器
"""

import asyncio
import logging
import os
import threading
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import aiofiles
import aiofiles.os
import psutil

from .models import Query, ScanStats, SearchMatch, SearchOptions
from .scanner import scan
from .worker import decode_response, encode_request, run_scan_task

logger = logging.getLogger(__name__)

EXECUTOR_MODES = ("inline", "thread", "process")

ResultCallback = Callable[[int, List[SearchMatch]], None]


def default_concurrency() -> int:
    """默认并发度 - 逻辑CPU数，至少为1"""
    try:
        count = psutil.cpu_count(logical=True)
    except Exception:
        count = None
    return max(1, count or os.cpu_count() or 1)


@dataclass(frozen=True)
class FileHandle:
    """候选文件 - 磁盘路径和对外显示的标识"""
    path: str
    file_id: str

    @classmethod
    def of(cls, item: Union[str, Path, "FileHandle"], base_path: Optional[str] = None) -> "FileHandle":
        if isinstance(item, FileHandle):
            return item
        path = Path(item)
        if base_path and not path.is_absolute():
            full = Path(base_path) / path
            return cls(str(full), path.as_posix())
        if base_path:
            try:
                return cls(str(path), path.relative_to(base_path).as_posix())
            except ValueError:
                pass
        return cls(str(path), str(path))


@dataclass(frozen=True)
class ScanTask:
    index: int
    handle: FileHandle


class CancellationToken:
    """取消信号 - 停止接纳新任务，丢弃进行中任务的结果"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ConcurrencyScheduler:
    """有界并发调度器 - 执行策略可选: inline / thread / process"""

    def __init__(
        self,
        max_concurrency: Optional[int] = None,
        executor: str = "thread",
        max_file_size: Optional[int] = None,
    ):
        if executor not in EXECUTOR_MODES:
            raise ValueError(f"Unknown executor mode: {executor} (expected one of {', '.join(EXECUTOR_MODES)})")
        self.max_concurrency = max(1, max_concurrency or default_concurrency())
        self.executor_mode = executor
        self.max_file_size = max_file_size
        self.stats = ScanStats()
        self._pool: Optional[Executor] = None

    @property
    def pool(self) -> Executor:
        """懒加载执行器"""
        if self._pool is None:
            if self.executor_mode == "process":
                self._pool = ProcessPoolExecutor(max_workers=self.max_concurrency)
            else:
                self._pool = ThreadPoolExecutor(
                    max_workers=self.max_concurrency, thread_name_prefix="ScanWorker"
                )
        return self._pool

    async def read_bytes(self, handle: FileHandle) -> Optional[bytes]:
        """异步读取文件字节 - 失败记录日志并跳过"""
        try:
            if self.max_file_size is not None:
                stat_result = await aiofiles.os.stat(handle.path)
                if stat_result.st_size > self.max_file_size:
                    logger.info("Skipping %s: %d bytes exceeds limit", handle.file_id, stat_result.st_size)
                    self.stats.files_skipped += 1
                    return None
            async with aiofiles.open(handle.path, "rb") as f:
                return await f.read()
        except OSError as e:
            logger.warning("Cannot read file %s: %s", handle.file_id, e)
            self.stats.files_failed += 1
            return None

    async def execute(self, handle: FileHandle, query: Query, options: SearchOptions) -> List[SearchMatch]:
        """单文件任务 - 读取后交给执行策略"""
        raw = await self.read_bytes(handle)
        if raw is None:
            return []

        if self.executor_mode == "inline":
            return scan(raw, query, options, handle.file_id)

        loop = asyncio.get_running_loop()
        try:
            if self.executor_mode == "process":
                payload = encode_request(handle.file_id, raw, query, options)
                response = await loop.run_in_executor(self.pool, run_scan_task, payload)
                return decode_response(response)
            return await loop.run_in_executor(self.pool, scan, raw, query, options, handle.file_id)
        except Exception:
            # 失败只影响当前文件
            logger.exception("Scan task failed for %s", handle.file_id)
            self.stats.files_failed += 1
            return []

    async def run(
        self,
        tasks: Sequence[ScanTask],
        query: Query,
        options: SearchOptions,
        token: Optional[CancellationToken] = None,
        on_result: Optional[ResultCallback] = None,
    ) -> List[Tuple[int, List[SearchMatch]]]:
        """
        运行一批任务，按完成顺序返回 (文件序号, 匹配列表)

        共享状态只有结果列表和进度计数，都在锁内追加
        """
        queue: "asyncio.Queue[ScanTask]" = asyncio.Queue()
        for task in tasks:
            queue.put_nowait(task)

        completed: List[Tuple[int, List[SearchMatch]]] = []
        lock = asyncio.Lock()

        async def worker() -> None:
            while True:
                if token is not None and token.cancelled:
                    return
                try:
                    task = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return

                matches = await self.execute(task.handle, query, options)

                # 已取消: 任务跑完但结果丢弃
                if token is not None and token.cancelled:
                    continue
                async with lock:
                    completed.append((task.index, matches))
                    self.stats.files_scanned += 1
                    self.stats.matches += len(matches)
                    if on_result is not None:
                        on_result(task.index, matches)

        worker_count = min(self.max_concurrency, len(tasks))
        if worker_count:
            await asyncio.gather(*(worker() for _ in range(worker_count)))
        return completed

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __del__(self):
        """清理资源"""
        if getattr(self, "_pool", None) is not None:
            self._pool.shutdown(wait=False)
