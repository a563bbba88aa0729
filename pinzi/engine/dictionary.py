"""
词典模块

从 GZIP 压缩的 CC-CEDICT 文件加载 词条 → 拼音 映射。

词条格式:
    繁体 简体 [pin1 yin1] /释义1/释义2/
    中國 中国 [Zhong1 guo2] /China/Middle Kingdom/

加载分两阶段：
1. DictionaryBuilder 在单线程加载期间可变
2. build() 冻结为只读 Dictionary，之后可被任意多个转换调用共享
"""

import gzip
import zlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import DictionaryIOError, ParseError
from .logging import get_engine_logger, log_execution_time

logger = get_engine_logger()

COMMENT_PREFIX = '#'


@dataclass(frozen=True)
class Syllable:
    """拼音音节"""
    raw_value: str               # 原始音节，如 "Zhong1"
    value: str                   # 去掉声调数字，如 "Zhong"
    tone: Optional[str] = None   # 声调数字，如 "1"；无声调为 None

    @classmethod
    def parse(cls, token: str) -> 'Syllable':
        """末尾是十进制数字则视为声调"""
        last = token[-1]
        if last.isdecimal():
            return cls(raw_value=token, value=token[:-1], tone=last)
        return cls(raw_value=token, value=token)

    def __str__(self):
        return self.raw_value


@dataclass(frozen=True)
class Entry:
    """词条"""
    traditional: str
    simplified: str
    syllables: Tuple[Syllable, ...]

    @property
    def pinyin(self) -> str:
        return ' '.join(s.raw_value for s in self.syllables)


def _next_token(line: str, pos: int) -> Tuple[str, int]:
    """
    读取下一个空白分隔的词元

    '[' 也会结束当前词元，便于处理 "中國 中国[Zhong1 guo2]"。

    Returns:
        (词元, 词元结束位置)；没有更多词元时词元为空串
    """
    n = len(line)
    while pos < n and line[pos].isspace():
        pos += 1
    start = pos
    if pos < n and line[pos] == '[':
        return '', pos
    while pos < n and not line[pos].isspace() and line[pos] != '[':
        pos += 1
    return line[start:pos], pos


def parse_syllables(text: str) -> Tuple[Syllable, ...]:
    """拆分方括号内的拼音为音节序列"""
    return tuple(Syllable.parse(token) for token in text.split())


def parse_line(line: str, line_number: Optional[int] = None) -> Optional[Entry]:
    """
    解析一行 CC-CEDICT

    Args:
        line: 原始行文本
        line_number: 行号（仅用于错误信息）

    Returns:
        Entry；注释行和空行返回 None

    Raises:
        ParseError: 缺少繁体/简体词头或方括号拼音
    """
    line = line.rstrip('\r\n')

    traditional, pos = _next_token(line, 0)
    if traditional.startswith(COMMENT_PREFIX):
        return None
    if not traditional:
        if pos >= len(line):
            return None
        raise ParseError(line, line_number, "缺少繁体词头")

    simplified, pos = _next_token(line, pos)
    if not simplified:
        raise ParseError(line, line_number, "缺少简体词头")

    while pos < len(line) and line[pos].isspace():
        pos += 1
    if pos >= len(line) or line[pos] != '[':
        raise ParseError(line, line_number, "缺少方括号拼音")

    end = line.find(']', pos + 1)
    if end < 0:
        raise ParseError(line, line_number, "方括号未闭合")

    # 方括号之后的释义部分不需要
    syllables = parse_syllables(line[pos + 1:end])
    if not syllables:
        raise ParseError(line, line_number, "拼音为空")

    return Entry(traditional=traditional, simplified=simplified, syllables=syllables)


class Dictionary:
    """
    只读拼音词典

    键为词头（繁体或简体），值为按加载顺序排列的词条元组。
    同一词头有多个词条时，第一个词条为规范读音。
    """

    def __init__(
        self,
        entries: Dict[str, Tuple[Entry, ...]],
        entry_count: int = 0,
        word_max_length: int = 0,
    ):
        self._entries = MappingProxyType(entries)
        self.entry_count = entry_count
        self.word_max_length = word_max_length

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        return (
            f"Dictionary(entries={self.entry_count}, keys={len(self._entries)}, "
            f"word_max_length={self.word_max_length})"
        )

    def entries(self, key: str) -> Tuple[Entry, ...]:
        """词头对应的全部词条（多音词）"""
        return self._entries.get(key, ())

    def lookup(self, key: str) -> Optional[Entry]:
        """词头对应的规范词条（第一个加载的）"""
        entries = self._entries.get(key)
        return entries[0] if entries else None

    def longest_prefix(self, text: str, start: int = 0) -> Tuple[int, Optional[Entry]]:
        """
        从 start 开始查找最长的词头

        窗口长度不超过 word_max_length，从长到短逐个尝试。

        Returns:
            (匹配长度, 词条)；未命中返回 (0, None)
        """
        length = min(len(text) - start, self.word_max_length)
        while length > 0:
            entries = self._entries.get(text[start:start + length])
            if entries:
                return length, entries[0]
            length -= 1
        return 0, None


class DictionaryBuilder:
    """加载阶段使用的可变词典"""

    def __init__(self):
        self._entries: Dict[str, List[Entry]] = {}
        self.entry_count = 0
        self.word_max_length = 0

    def add(self, entry: Entry):
        """同时以繁体和简体词头插入，保持文件顺序"""
        self.entry_count += 1
        for key in dict.fromkeys((entry.traditional, entry.simplified)):
            self._entries.setdefault(key, []).append(entry)
            if len(key) > self.word_max_length:
                self.word_max_length = len(key)

    def feed(self, lines: Iterable[str]) -> 'DictionaryBuilder':
        """逐行解析并插入；遇到非法行直接抛出 ParseError"""
        for line_number, line in enumerate(lines, start=1):
            entry = parse_line(line, line_number)
            if entry is not None:
                self.add(entry)
        return self

    def build(self) -> Dictionary:
        return Dictionary(
            {key: tuple(entries) for key, entries in self._entries.items()},
            entry_count=self.entry_count,
            word_max_length=self.word_max_length,
        )


@log_execution_time(logger)
def load_dictionary(path) -> Dictionary:
    """
    从 GZIP 压缩的 CC-CEDICT 文件加载词典

    加载是全有或全无的：任何一行解析失败都会中止加载。

    Args:
        path: 词典文件路径（.gz）

    Returns:
        只读 Dictionary

    Raises:
        DictionaryIOError: 文件不存在、无法解压或不是 UTF-8
        ParseError: 存在非法词条行
    """
    logger.info(f"加载词典: {path}")
    builder = DictionaryBuilder()
    try:
        with gzip.open(path, 'rt', encoding='utf-8') as f:
            builder.feed(f)
    except (OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        raise DictionaryIOError(path, str(e)) from e

    dictionary = builder.build()
    logger.info(f"{dictionary.entry_count} entries are loaded")
    return dictionary
