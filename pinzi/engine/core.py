"""
转换引擎

贪心最长匹配：每一步取剩余文本中最长的词典词头，
未命中时只消耗一个字符。每个字符只被消耗一次，不回溯。
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .config import EngineConfig
from .dictionary import Dictionary, Entry
from .formatter import FULL_PINYIN, INITIALS, FormatPolicy, get_policy
from .logging import get_engine_logger

logger = get_engine_logger()


@dataclass(frozen=True)
class Segment:
    """切分片段"""
    text: str                       # 被消耗的原文
    entry: Optional[Entry] = None   # 命中的词条；回退字符为 None

    @property
    def matched(self) -> bool:
        return self.entry is not None


def segment(dictionary: Dictionary, text: str) -> Iterator[Segment]:
    """按最长匹配切分文本"""
    pos = 0
    n = len(text)
    while pos < n:
        length, entry = dictionary.longest_prefix(text, pos)
        if entry is None:
            length = 1
        yield Segment(text[pos:pos + length], entry)
        pos += length


def convert(
    dictionary: Dictionary,
    text: str,
    policy: Union[str, FormatPolicy] = FULL_PINYIN,
) -> str:
    """
    将文本转换为拼音

    Args:
        dictionary: 已加载的词典
        text: 任意输入文本
        policy: 格式策略或内置策略名 ("pinyin" / "initials")

    Returns:
        完整的转换结果（可能为空串）
    """
    policy = get_policy(policy)
    separator = policy.separator
    pieces: List[str] = []

    def emit(piece: str):
        if not piece:
            return
        if separator and pieces:
            pieces.append(separator)
        pieces.append(piece)

    for seg in segment(dictionary, text):
        if seg.entry is not None:
            for syllable in seg.entry.syllables:
                emit(policy.format_syllable(syllable))
        else:
            emit(policy.format_codepoint(seg.text))

    return ''.join(pieces)


class PinyinConverter:
    """
    拼音转换器

    持有只读词典，自身无可变状态，可在多个线程间共享。
    """

    def __init__(self, dictionary: Dictionary, config: EngineConfig = None):
        self.dictionary = dictionary
        self.config = config or EngineConfig()

    def convert(self, text: str, policy: Union[str, FormatPolicy] = FULL_PINYIN) -> str:
        return convert(self.dictionary, text, policy)

    def pinyin(self, text: str) -> str:
        """完整拼音，如 "中国" → "Zhong1 guo2" """
        return convert(self.dictionary, text, FULL_PINYIN)

    def initials(self, text: str) -> str:
        """拼音首字母，如 "中国" → "zg" """
        return convert(self.dictionary, text, INITIALS)

    def segment(self, text: str) -> List[Segment]:
        return list(segment(self.dictionary, text))

    def get_stats(self) -> dict:
        """词典统计"""
        return {
            'entry_count': self.dictionary.entry_count,
            'key_count': len(self.dictionary),
            'word_max_length': self.dictionary.word_max_length,
        }
