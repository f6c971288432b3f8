"""
Text Normalizer - 字节解码与Unicode规范化

文本和查询使用同一套规范化，保证比较一致
"""

import logging
import unicodedata
from typing import List

from charset_normalizer import from_bytes

from .errors import DecodeError
from .models import Query

logger = logging.getLogger(__name__)

NORMAL_FORM = "NFC"

_UTF8_NAMES = {"ascii", "utf_8", "utf-8", "utf8"}


def detect_encoding(raw: bytes) -> str:
    """启发式编码检测 - 失败时返回utf-8"""
    best = from_bytes(raw).best()
    if best is None:
        return "utf-8"
    encoding = best.encoding.lower()
    if encoding in _UTF8_NAMES:
        return "utf-8"
    return encoding


def decode_bytes(raw: bytes) -> str:
    """解码文件字节 - UTF-8快速路径，失败后走检测"""
    if not raw:
        return ""

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    encoding = detect_encoding(raw)
    if encoding == "utf-8":
        codec = "utf-8-sig"
    else:
        codec = encoding
    try:
        return raw.decode(codec)
    except (UnicodeDecodeError, LookupError) as e:
        raise DecodeError(f"Cannot decode content as {encoding}: {e}") from e


def normalize_text(text: str) -> str:
    return unicodedata.normalize(NORMAL_FORM, text)


def normalize_query(query: Query) -> Query:
    """查询规范化 - 单字符串或模式列表"""
    if isinstance(query, str):
        return normalize_text(query)
    patterns: List[str] = [normalize_text(p) for p in query]
    return patterns


def decode_and_normalize(raw: bytes) -> str:
    return normalize_text(decode_bytes(raw))


def fold_char(ch: str) -> str:
    lowered = ch.lower()
    # 长度变化的字符保持原样，保证偏移对齐
    return lowered if len(lowered) == 1 else ch


def fold_case(text: str) -> str:
    """等长大小写折叠"""
    if text.isascii():
        return text.lower()
    return "".join(fold_char(ch) for ch in text)
