"""
Result Filter - 全词边界 + 注释策略 + 片段生成
"""

import re
from typing import Optional

from .lexer import ScanPosition
from .models import SNIPPET_MAX_LENGTH, LexicalMode, SearchMatch, SearchOptions

# ASCII单词字符 - 非ASCII标识符字符不算单词字符
WORD_CHAR = re.compile(r"[A-Za-z0-9_]")


def is_word_char(ch: str) -> bool:
    return bool(ch) and WORD_CHAR.fullmatch(ch) is not None


def passes_whole_word(text: str, start: int, length: int) -> bool:
    before = text[start - 1] if start > 0 else ""
    end = start + length
    after = text[end] if end < len(text) else ""
    return not (is_word_char(before) or is_word_char(after))


def passes_comment_policy(mode: LexicalMode, options: SearchOptions) -> bool:
    if mode.is_literal:
        return False
    if options.comments_only:
        return mode.is_comment
    if options.include_comments:
        return True
    return mode is LexicalMode.CODE


def line_bounds(text: str, offset: int):
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end == -1:
        end = len(text)
    return start, end


def extract_line(text: str, offset: int) -> str:
    start, end = line_bounds(text, offset)
    line = text[start:end]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def make_snippet(line_text: str) -> str:
    return line_text[:SNIPPET_MAX_LENGTH].strip()


class ResultFilter:
    """候选匹配过滤器 - 每次搜索一个实例"""

    def __init__(self, options: SearchOptions, file_id: str = ""):
        self.options = options
        self.file_id = file_id

    def accept(self, text: str, start: ScanPosition, length: int) -> Optional[SearchMatch]:
        """通过则返回SearchMatch，否则None"""
        if length <= 0 or not start.searchable:
            return None
        if self.options.whole_word and not passes_whole_word(text, start.offset, length):
            return None
        if not passes_comment_policy(start.mode, self.options):
            return None

        line_text = extract_line(text, start.offset)
        return SearchMatch(
            file=self.file_id,
            line=start.line,
            column=start.column,
            match_length=length,
            snippet=make_snippet(line_text),
            line_text=line_text,
            is_comment=start.mode.is_comment,
        )
