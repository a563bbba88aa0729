"""
PinZi - 汉字转拼音

基于 CC-CEDICT 词典的最长匹配拼音 / 首字母转换
"""

__version__ = "0.1.0"

from pinzi.engine import (
    EngineConfig,
    DictionaryError,
    DictionaryIOError,
    ParseError,
    Syllable,
    Entry,
    Dictionary,
    DictionaryBuilder,
    load_dictionary,
    FormatPolicy,
    FULL_PINYIN,
    INITIALS,
    Segment,
    PinyinConverter,
    convert,
    segment,
    create_converter,
)

__all__ = [
    "__version__",
    # 配置
    "EngineConfig",
    # 异常
    "DictionaryError",
    "DictionaryIOError",
    "ParseError",
    # 词典
    "Syllable",
    "Entry",
    "Dictionary",
    "DictionaryBuilder",
    "load_dictionary",
    # 转换
    "FormatPolicy",
    "FULL_PINYIN",
    "INITIALS",
    "Segment",
    "PinyinConverter",
    "convert",
    "segment",
    "create_converter",
]
