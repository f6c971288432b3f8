"""
Core module - comment-aware scanning engine and paginated orchestrator

Single pass, no hidden global state.
"""

from .collector import PaginatedCollector, collect, search_all
from .errors import DecodeError, FileAccessError, InvalidPatternError, SearchError
from .lexer import LexicalClassifier, ScanPosition
from .models import (LexicalMode, MatchLocation, ScanCursor, ScanStats,
                     SearchMatch, SearchOptions, SearchResult)
from .scanner import scan, scan_file, scan_text
from .scheduler import (CancellationToken, ConcurrencyScheduler, FileHandle,
                        default_concurrency)
from .session import SearchSession
from .strategies import (LiteralStrategy, MultiPatternStrategy, RegexStrategy,
                         create_strategy)

__all__ = [
    "CancellationToken",
    "ConcurrencyScheduler",
    "DecodeError",
    "FileAccessError",
    "FileHandle",
    "InvalidPatternError",
    "LexicalClassifier",
    "LexicalMode",
    "LiteralStrategy",
    "MatchLocation",
    "MultiPatternStrategy",
    "PaginatedCollector",
    "RegexStrategy",
    "ScanCursor",
    "ScanPosition",
    "ScanStats",
    "SearchError",
    "SearchMatch",
    "SearchOptions",
    "SearchResult",
    "SearchSession",
    "collect",
    "create_strategy",
    "default_concurrency",
    "scan",
    "scan_file",
    "scan_text",
    "search_all",
]
