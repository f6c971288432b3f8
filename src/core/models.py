"""Linus-style core data structures."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

# 单个查询字符串或多模式列表
Query = Union[str, Sequence[str]]

SNIPPET_MAX_LENGTH = 200


class LexicalMode(Enum):
    CODE = "code"
    LINE_COMMENT = "line"
    BLOCK_COMMENT = "block"
    STRING_LITERAL = "str"
    CHAR_LITERAL = "char"

    @property
    def is_comment(self) -> bool:
        return self in (LexicalMode.LINE_COMMENT, LexicalMode.BLOCK_COMMENT)

    @property
    def is_literal(self) -> bool:
        return self in (LexicalMode.STRING_LITERAL, LexicalMode.CHAR_LITERAL)


COMMENT_MODES = ("exclude", "include", "only")


@dataclass(frozen=True)
class SearchOptions:
    """搜索选项 - 封闭结构，每次搜索不可变"""
    case_sensitive: bool = False
    whole_word: bool = False
    regex: bool = False
    include_comments: bool = False
    comments_only: bool = False
    include_pattern: Optional[str] = None
    exclude_pattern: Optional[str] = None
    file_pattern: Optional[str] = None  # 文件发现用的glob

    @classmethod
    def create(cls, include_comments: bool = False, comments_only: bool = False, **kwargs) -> "SearchOptions":
        """边界处解决注释选项互斥 - comments_only优先"""
        if comments_only:
            include_comments = False
        return cls(include_comments=include_comments, comments_only=comments_only, **kwargs)

    @classmethod
    def from_comment_mode(cls, mode: str = "exclude", **kwargs) -> "SearchOptions":
        if mode not in COMMENT_MODES:
            raise ValueError(f"Unknown comment mode: {mode} (expected one of {', '.join(COMMENT_MODES)})")
        return cls.create(include_comments=mode == "include", comments_only=mode == "only", **kwargs)

    def with_comment_mode(self, mode: str) -> "SearchOptions":
        if mode not in COMMENT_MODES:
            raise ValueError(f"Unknown comment mode: {mode} (expected one of {', '.join(COMMENT_MODES)})")
        return replace(self, include_comments=mode == "include", comments_only=mode == "only")

    @property
    def comment_mode(self) -> str:
        if self.comments_only:
            return "only"
        if self.include_comments:
            return "include"
        return "exclude"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "case_sensitive": self.case_sensitive,
            "whole_word": self.whole_word,
            "regex": self.regex,
            "include_comments": self.include_comments,
            "comments_only": self.comments_only,
            "include_pattern": self.include_pattern,
            "exclude_pattern": self.exclude_pattern,
            "file_pattern": self.file_pattern,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchOptions":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls.create(**known)


@dataclass(frozen=True)
class MatchLocation:
    file: str
    line: int
    column: int


@dataclass
class SearchMatch:
    file: str
    line: int
    column: int
    match_length: int
    snippet: str
    line_text: str
    is_comment: bool = False

    @property
    def location(self) -> MatchLocation:
        return MatchLocation(self.file, self.line, self.column)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "match_length": self.match_length,
            "snippet": self.snippet,
            "line_text": self.line_text,
            "is_comment": self.is_comment,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchMatch":
        return cls(
            file=data["file"],
            line=data["line"],
            column=data["column"],
            match_length=data["match_length"],
            snippet=data["snippet"],
            line_text=data["line_text"],
            is_comment=data.get("is_comment", False),
        )


@dataclass
class ScanCursor:
    """可恢复的扫描位置 - 已消费文件数和已收集匹配数"""
    file_index: int = 0
    collected: int = 0


@dataclass
class ScanStats:
    files_scanned: int = 0
    files_failed: int = 0
    files_skipped: int = 0
    matches: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "files_scanned": self.files_scanned,
            "files_failed": self.files_failed,
            "files_skipped": self.files_skipped,
            "matches": self.matches,
        }


@dataclass
class SearchResult:
    matches: List[SearchMatch]
    has_more: bool
    search_time: float = 0.0
    stats: ScanStats = field(default_factory=ScanStats)

    @property
    def total_count(self) -> int:
        return len(self.matches)
