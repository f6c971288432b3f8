"""搜索异常 - 所有失败都是文件级别的"""


class SearchError(Exception):
    """搜索异常基类"""


class FileAccessError(SearchError):
    """文件无法读取"""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read file {path}: {reason}" if reason else f"Cannot read file {path}")


class DecodeError(SearchError):
    """编码检测或解码失败"""


class InvalidPatternError(SearchError, ValueError):
    """正则表达式无效"""

    def __init__(self, pattern: str, reason: str = ""):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regex pattern: {pattern}, error: {reason}")
