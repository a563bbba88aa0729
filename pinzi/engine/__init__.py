from .config import EngineConfig
from .errors import DictionaryError, DictionaryIOError, ParseError
from .dictionary import (
    Syllable,
    Entry,
    Dictionary,
    DictionaryBuilder,
    load_dictionary,
    parse_line,
    parse_syllables,
)
from .formatter import FormatPolicy, FULL_PINYIN, INITIALS, POLICIES, format_initial, get_policy
from .core import Segment, PinyinConverter, convert, segment
from .logging import setup_logging, get_logger, get_api_logger, get_engine_logger


def create_converter(config: EngineConfig = None, dict_path: str = None) -> PinyinConverter:
    """
    加载词典并创建转换器

    Args:
        config: 引擎配置（默认从环境变量读取）
        dict_path: 词典文件路径（可选，覆盖 config.dict_path）

    Returns:
        PinyinConverter 实例
    """
    config = config or EngineConfig.from_env()
    setup_logging(
        'pinzi.engine',
        level=config.log_level,
        log_to_file=config.log_to_file,
        json_format=config.json_logs,
    )
    path = dict_path or config.dict_file
    return PinyinConverter(load_dictionary(path), config)


__all__ = [
    # 配置
    'EngineConfig',
    # 异常
    'DictionaryError',
    'DictionaryIOError',
    'ParseError',
    # 词典
    'Syllable',
    'Entry',
    'Dictionary',
    'DictionaryBuilder',
    'load_dictionary',
    'parse_line',
    'parse_syllables',
    # 格式
    'FormatPolicy',
    'FULL_PINYIN',
    'INITIALS',
    'POLICIES',
    'format_initial',
    'get_policy',
    # 引擎
    'Segment',
    'PinyinConverter',
    'convert',
    'segment',
    'create_converter',
    # 日志
    'setup_logging',
    'get_logger',
    'get_api_logger',
    'get_engine_logger',
]
