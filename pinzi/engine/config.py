import os
from dataclasses import dataclass
from pathlib import Path

from .logging import PROJECT_ROOT, env_flag

DEFAULT_DICT_PATH = PROJECT_ROOT / 'data' / 'cedict_1_0_ts_utf-8_mdbg.txt.gz'


@dataclass
class EngineConfig:
    """引擎配置"""
    dict_path: str = str(DEFAULT_DICT_PATH)
    log_level: str = "INFO"
    log_to_file: bool = False
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> 'EngineConfig':
        """从环境变量读取配置，未设置的项使用默认值"""
        return cls(
            dict_path=os.getenv('PINZI_DICT_PATH', str(DEFAULT_DICT_PATH)),
            log_level=os.getenv('PINZI_LOG_LEVEL', 'INFO'),
            log_to_file=env_flag('PINZI_LOG_TO_FILE'),
            json_logs=env_flag('PINZI_JSON_LOGS'),
        )

    @property
    def dict_file(self) -> Path:
        return Path(self.dict_path)

