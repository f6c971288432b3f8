"""
Lexical Classifier - 单遍词法模式状态机

通用C系分隔符: // /* */ " '，对所有文件一视同仁
"""

from dataclasses import dataclass
from typing import Iterator

from .models import LexicalMode


@dataclass(frozen=True)
class ScanPosition:
    """单个字符位置的分类结果"""
    offset: int
    line: int
    column: int
    mode: LexicalMode
    searchable: bool


class LexicalClassifier:
    """在线状态机 - 每个文件重新从CODE开始"""

    def __init__(self, text: str):
        self.text = text
        self.mode = LexicalMode.CODE
        self.escaped = False
        self.line = 1
        self.column = 1

    def __iter__(self) -> Iterator[ScanPosition]:
        return self.positions()

    def positions(self) -> Iterator[ScanPosition]:
        """逐字符产出分类 - 每个偏移恰好一次"""
        text = self.text
        length = len(text)
        i = 0

        while i < length:
            ch = text[i]
            nxt = text[i + 1] if i + 1 < length else ""

            # 换行优先: 行注释在行号前进之前结束
            if ch == "\n":
                if self.mode is LexicalMode.LINE_COMMENT:
                    self.mode = LexicalMode.CODE
                yield ScanPosition(i, self.line, self.column, self.mode, False)
                self.line += 1
                self.column = 1
                i += 1
                continue

            mode = self.mode

            if mode is LexicalMode.LINE_COMMENT:
                yield ScanPosition(i, self.line, self.column, mode, True)
                i += 1
                self.column += 1
                continue

            if mode is LexicalMode.BLOCK_COMMENT:
                if ch == "*" and nxt == "/":
                    yield from self._consume_delimiter(i, 2, mode)
                    self.mode = LexicalMode.CODE
                    i += 2
                else:
                    yield ScanPosition(i, self.line, self.column, mode, True)
                    i += 1
                    self.column += 1
                continue

            if mode.is_literal:
                quote = '"' if mode is LexicalMode.STRING_LITERAL else "'"
                yield ScanPosition(i, self.line, self.column, mode, False)
                if not self.escaped and ch == quote:
                    self.mode = LexicalMode.CODE
                self.escaped = (not self.escaped) if ch == "\\" else False
                i += 1
                self.column += 1
                continue

            # CODE: 按优先级检查转移
            if ch == "/" and nxt == "/":
                yield from self._consume_delimiter(i, 2, mode)
                self.mode = LexicalMode.LINE_COMMENT
                i += 2
                continue
            if ch == "/" and nxt == "*":
                yield from self._consume_delimiter(i, 2, mode)
                self.mode = LexicalMode.BLOCK_COMMENT
                i += 2
                continue
            if ch == '"' or ch == "'":
                yield from self._consume_delimiter(i, 1, mode)
                self.mode = LexicalMode.STRING_LITERAL if ch == '"' else LexicalMode.CHAR_LITERAL
                self.escaped = False
                i += 1
                continue

            yield ScanPosition(i, self.line, self.column, mode, True)
            i += 1
            self.column += 1

    def _consume_delimiter(self, start: int, width: int, mode: LexicalMode) -> Iterator[ScanPosition]:
        for k in range(width):
            yield ScanPosition(start + k, self.line, self.column, mode, False)
            self.column += 1


def classify(text: str) -> Iterator[ScanPosition]:
    return LexicalClassifier(text).positions()
