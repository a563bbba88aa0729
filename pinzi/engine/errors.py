"""
词典加载异常

只有词典加载阶段会抛出异常，转换引擎对任意输入都不会失败。
"""

from typing import Optional


class DictionaryError(Exception):
    """词典相关异常基类"""


class DictionaryIOError(DictionaryError, IOError):
    """词典文件无法打开、解压或解码"""

    def __init__(self, path: str, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"无法读取词典文件: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ParseError(DictionaryError, ValueError):
    """词条行无法解析为 繁体 简体 [拼音]"""

    def __init__(self, line: str, line_number: Optional[int] = None, reason: str = ""):
        self.line = line
        self.line_number = line_number
        self.reason = reason
        location = f"第 {line_number} 行" if line_number is not None else "词条"
        message = f"invalid entry: {line}"
        if reason:
            message = f"{message} ({location}: {reason})"
        else:
            message = f"{message} ({location})"
        super().__init__(message)
