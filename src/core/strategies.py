"""
Match Strategies - 字面量 / 正则 / Aho-Corasick多模式

统一接口: feed(text, position) -> [(start, length)]
每次搜索选择一次，无特殊情况
"""

import re
from collections import deque
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .errors import InvalidPatternError
from .lexer import ScanPosition
from .models import Query, SearchOptions
from .normalizer import fold_case, fold_char

Candidate = Tuple[int, int]


class MatchStrategy:
    """匹配策略基类"""

    name = "base"

    @property
    def lookback(self) -> int:
        """需要回看的最大位置数 - 候选起点必须仍在窗口内"""
        return 1

    def feed(self, text: str, position: ScanPosition) -> Iterable[Candidate]:
        raise NotImplementedError


class LiteralStrategy(MatchStrategy):
    name = "literal"

    def __init__(self, needle: str, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive
        self.needle = needle if case_sensitive else fold_case(needle)
        self.length = len(needle)

    def match_at(self, text: str, offset: int) -> int:
        n = self.length
        if n == 0:
            return 0
        window = text[offset:offset + n]
        if len(window) != n:
            return 0
        if not self.case_sensitive:
            window = fold_case(window)
        return n if window == self.needle else 0

    def feed(self, text: str, position: ScanPosition) -> Iterable[Candidate]:
        if not position.searchable:
            return ()
        length = self.match_at(text, position.offset)
        return ((position.offset, length),) if length else ()


@lru_cache(maxsize=128)
def compile_pattern(pattern: str, case_sensitive: bool) -> "re.Pattern[str]":
    """编译正则 - 同一搜索内所有文件复用"""
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


class RegexStrategy(MatchStrategy):
    name = "regex"

    def __init__(self, pattern: str, case_sensitive: bool = False):
        self.pattern = pattern
        self.compiled = compile_pattern(pattern, case_sensitive)

    def match_at(self, text: str, offset: int) -> int:
        # 对剩余后缀匹配: ^、\b和后顾断言都看不到offset之前的字符
        m = self.compiled.match(text[offset:])
        if m is None:
            return 0
        return m.end() - m.start()

    def feed(self, text: str, position: ScanPosition) -> Iterable[Candidate]:
        if not position.searchable:
            return ()
        length = self.match_at(text, position.offset)
        return ((position.offset, length),) if length else ()


class AhoCorasickAutomaton:
    """多模式自动机 - trie + fail链接"""

    def __init__(self, patterns: Iterable[str]):
        self.goto: List[Dict[str, int]] = [{}]
        self.fail: List[int] = [0]
        self.output: List[Set[int]] = [set()]  # 节点 -> 模式长度集合
        self.patterns: List[str] = []

        for pattern in patterns:
            if pattern and pattern not in self.patterns:
                self.patterns.append(pattern)
                self._insert(pattern)
        self._build_fail_links()

    def _insert(self, pattern: str) -> None:
        node = 0
        for ch in pattern:
            nxt = self.goto[node].get(ch)
            if nxt is None:
                nxt = len(self.goto)
                self.goto[node][ch] = nxt
                self.goto.append({})
                self.fail.append(0)
                self.output.append(set())
            node = nxt
        self.output[node].add(len(pattern))

    def _build_fail_links(self) -> None:
        # BFS - 深度为1的节点fail指向根
        queue = deque(self.goto[0].values())
        while queue:
            node = queue.popleft()
            for ch, child in self.goto[node].items():
                queue.append(child)
                f = self.fail[node]
                while f and ch not in self.goto[f]:
                    f = self.fail[f]
                target = self.goto[f].get(ch, 0)
                self.fail[child] = target if target != child else 0
                self.output[child] |= self.output[self.fail[child]]

    @property
    def max_length(self) -> int:
        return max((len(p) for p in self.patterns), default=0)

    def step(self, state: int, ch: str) -> int:
        while state and ch not in self.goto[state]:
            state = self.fail[state]
        return self.goto[state].get(ch, 0)

    def iter_matches(self, text: str) -> Iterable[Tuple[int, int]]:
        """独立遍历 - 产出(结束偏移, 长度)"""
        state = 0
        for i, ch in enumerate(text):
            state = self.step(state, ch)
            for length in sorted(self.output[state], reverse=True):
                yield i, length


@lru_cache(maxsize=32)
def build_automaton(patterns: Tuple[str, ...], case_sensitive: bool) -> AhoCorasickAutomaton:
    """构建自动机 - 同一搜索内所有文件共享，构建后只读"""
    folded = [p if case_sensitive else fold_case(p) for p in patterns]
    return AhoCorasickAutomaton(folded)


class MultiPatternStrategy(MatchStrategy):
    """每次扫描一个实例 - 自动机共享，匹配状态独占"""

    name = "multi"

    def __init__(self, patterns: Sequence[str], case_sensitive: bool = False):
        self.case_sensitive = case_sensitive
        self.automaton = build_automaton(tuple(patterns), case_sensitive)
        self._state = 0

    @property
    def lookback(self) -> int:
        return max(1, self.automaton.max_length)

    def feed(self, text: str, position: ScanPosition) -> Iterable[Candidate]:
        # 每个字符都喂入自动机，保持偏移对齐
        ch = text[position.offset]
        if not self.case_sensitive:
            ch = fold_char(ch)
        self._state = self.automaton.step(self._state, ch)
        lengths = self.automaton.output[self._state]
        if not lengths:
            return ()
        end = position.offset
        return [(end - length + 1, length) for length in sorted(lengths, reverse=True)]


def create_strategy(query: Query, options: Optional[SearchOptions] = None) -> MatchStrategy:
    """策略分派 - 列表走多模式，regex选项走正则，否则字面量"""
    options = options or SearchOptions()
    if not isinstance(query, str):
        return MultiPatternStrategy(list(query), options.case_sensitive)
    if options.regex:
        return RegexStrategy(query, options.case_sensitive)
    return LiteralStrategy(query, options.case_sensitive)
