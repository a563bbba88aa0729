"""
宿主进程接口

宿主启动时调用一次 load_pinyin_dictionary，之后每次请求调用
get_pinyin / get_pinyin_initials，结果以 UTF-8 写入调用方提供的定长缓冲区。
缓冲区不足时静默截断；引擎本身总是返回完整结果。
"""

from typing import Optional, Union

from pinzi.engine import Dictionary, FULL_PINYIN, INITIALS, convert, load_dictionary

Buffer = Union[bytearray, memoryview]

_dictionary: Optional[Dictionary] = None


def load_pinyin_dictionary(filename: str) -> Dictionary:
    """加载全局词典；失败时异常直接抛给宿主"""
    global _dictionary
    _dictionary = load_dictionary(filename)
    return _dictionary


def copy_into(buf: Buffer, data: bytes) -> int:
    """复制 data 到 buf，超出部分截断，返回写入的字节数"""
    size = min(len(data), len(buf))
    if size == 0:
        return 0
    buf[:size] = data[:size]
    return size


def _get_dictionary() -> Dictionary:
    if _dictionary is None:
        raise RuntimeError("词典未加载，请先调用 load_pinyin_dictionary")
    return _dictionary


def get_pinyin(buf: Buffer, word: str) -> int:
    """把 word 的完整拼音写入 buf，返回写入的字节数"""
    result = convert(_get_dictionary(), word, FULL_PINYIN)
    return copy_into(buf, result.encode('utf-8'))


def get_pinyin_initials(buf: Buffer, word: str) -> int:
    """把 word 的拼音首字母写入 buf，返回写入的字节数"""
    result = convert(_get_dictionary(), word, INITIALS)
    return copy_into(buf, result.encode('utf-8'))
