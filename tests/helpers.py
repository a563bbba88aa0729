"""
测试用词典数据
"""
import gzip
from pathlib import Path
from typing import Iterable

SAMPLE_LINES = [
    "# CC-CEDICT",
    "# 测试用词典片段",
    "",
    "中國 中国 [Zhong1 guo2] /China/Middle Kingdom/",
    "國 国 [guo2] /country/nation/",
    "體重 体重 [ti3 zhong4] /body weight/",
    "兩 两 [liang3] /two/",
    "重 重 [zhong4] /heavy/",
    "重 重 [chong2] /to repeat/",
    "重天 重天 [chong2 tian1] /(test entry)/",
    "B B [bi1] /letter B/",
    "珍·奧斯汀 珍·奥斯汀 [Zhen1 · Ao4 si1 ting1] /Jane Austen (1775-1817)/",
    "人為財死，鳥為食亡 人为财死，鸟为食亡 [ren2 wei4 cai2 si3 , niao3 wei4 shi2 wang2] /idiom/",
    "行 行 [xing2] /to walk/",
    "行 行 [hang2] /row/",
]

SENTENCE = "体重两重天ABC 珍·奥斯汀 人为财死，鸟为食亡"
SENTENCE_PINYIN = (
    "ti3 zhong4 liang3 chong2 tian1 A bi1 C Zhen1 · Ao4 si1 ting1 "
    "ren2 wei4 cai2 si3 , niao3 wei4 shi2 wang2"
)
SENTENCE_INITIALS = "tzlctabczastrwcsnwsw"


def write_cedict(path, lines: Iterable[str] = SAMPLE_LINES, newline: str = "\n") -> Path:
    """写入 GZIP 压缩的 CC-CEDICT 文件"""
    path = Path(path)
    with gzip.open(path, "wt", encoding="utf-8", newline="") as f:
        for line in lines:
            f.write(line + newline)
    return path
