"""
输出格式策略

一个策略由三部分组成：
- format_syllable: 命中词条时，格式化每个音节
- format_codepoint: 未命中时，格式化单个字符
- separator: 非空片段之间的分隔符
"""

from dataclasses import dataclass
from typing import Callable, Dict, Union

from .dictionary import Syllable


@dataclass(frozen=True)
class FormatPolicy:
    """格式策略"""
    format_syllable: Callable[[Syllable], str]
    format_codepoint: Callable[[str], str]
    separator: str = ''
    name: str = 'custom'


def format_initial(ch: str) -> str:
    """
    首字母规则

    ASCII 大写字母转小写；小写字母和数字原样输出；其他字符输出空串。
    """
    if 'A' <= ch <= 'Z':
        return ch.lower()
    if ch.islower() or ch.isdecimal():
        return ch
    return ''


def _full_syllable(syllable: Syllable) -> str:
    return syllable.raw_value


def _full_codepoint(ch: str) -> str:
    # 未命中的空白直接丢弃
    if ch.isspace():
        return ''
    return ch


def _initial_syllable(syllable: Syllable) -> str:
    if not syllable.value:
        return ''
    return format_initial(syllable.value[0])


FULL_PINYIN = FormatPolicy(
    format_syllable=_full_syllable,
    format_codepoint=_full_codepoint,
    separator=' ',
    name='pinyin',
)

INITIALS = FormatPolicy(
    format_syllable=_initial_syllable,
    format_codepoint=format_initial,
    separator='',
    name='initials',
)

POLICIES: Dict[str, FormatPolicy] = {
    FULL_PINYIN.name: FULL_PINYIN,
    INITIALS.name: INITIALS,
}


def get_policy(policy: Union[str, FormatPolicy]) -> FormatPolicy:
    """按名称获取内置策略；传入 FormatPolicy 原样返回"""
    if isinstance(policy, FormatPolicy):
        return policy
    if not isinstance(policy, str) or policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}. Available: {list(POLICIES.keys())}")
    return POLICIES[policy]
