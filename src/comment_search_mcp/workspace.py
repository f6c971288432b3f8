"""
Search workspace - the state one MCP server instance owns.

Holds the project path and the current SearchSession. The server's lifespan
context creates exactly one; nothing here is module-global.
"""

from dataclasses import dataclass, field
from typing import Optional

from core.scheduler import ConcurrencyScheduler
from core.session import SearchSession

from .config import SearchConfig, get_search_config
from .utils.file_walker import FileWalker


@dataclass
class SearchWorkspace:
    session: SearchSession
    config: SearchConfig
    base_path: str = ""
    walker: FileWalker = field(default_factory=FileWalker)

    @classmethod
    def create(cls, config: Optional[SearchConfig] = None, base_path: str = "") -> "SearchWorkspace":
        config = config or get_search_config()
        scheduler = ConcurrencyScheduler(
            max_concurrency=config.max_concurrency,
            executor=config.executor,
            max_file_size=config.get_max_file_size_bytes(),
        )
        session = SearchSession(scheduler, page_size=config.page_size, scope=base_path)
        return cls(session=session, config=config, base_path=base_path)

    def set_base_path(self, path: str) -> None:
        self.base_path = path
        self.session.clear()
        self.session.scope = path

    def close(self) -> None:
        self.session.scheduler.close()
