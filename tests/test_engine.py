"""
转换引擎测试：最长匹配切分、回退、两种内置格式与自定义格式。
"""
import logging
import random
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest import mock

from pinzi.engine import (
    DictionaryBuilder,
    EngineConfig,
    FULL_PINYIN,
    FormatPolicy,
    INITIALS,
    PinyinConverter,
    convert,
    create_converter,
    format_initial,
    get_policy,
    load_dictionary,
    segment,
    setup_logging,
)
from tests.helpers import (
    SAMPLE_LINES,
    SENTENCE,
    SENTENCE_INITIALS,
    SENTENCE_PINYIN,
    write_cedict,
)


class TestConvert(unittest.TestCase):
    """测试 convert。"""

    @classmethod
    def setUpClass(cls):
        cls.dictionary = DictionaryBuilder().feed(SAMPLE_LINES).build()

    def test_china(self):
        self.assertEqual(convert(self.dictionary, "中国"), "Zhong1 guo2")
        self.assertEqual(convert(self.dictionary, "中国", INITIALS), "zg")

    def test_traditional_input(self):
        self.assertEqual(convert(self.dictionary, "中國"), "Zhong1 guo2")

    def test_sentence(self):
        self.assertEqual(convert(self.dictionary, SENTENCE), SENTENCE_PINYIN)
        self.assertEqual(convert(self.dictionary, SENTENCE, INITIALS), SENTENCE_INITIALS)

    def test_policy_by_name(self):
        self.assertEqual(convert(self.dictionary, "中国", "pinyin"), "Zhong1 guo2")
        self.assertEqual(convert(self.dictionary, "中国", "initials"), "zg")

    def test_unknown_policy(self):
        with self.assertRaises(ValueError):
            convert(self.dictionary, "中国", "zhuyin")

    def test_unhashable_policy(self):
        with self.assertRaises(ValueError):
            get_policy(["pinyin"])
        with self.assertRaises(ValueError):
            convert(self.dictionary, "中国", {"name": "pinyin"})

    def test_unmapped_latin_letter(self):
        self.assertEqual(convert(self.dictionary, "中国A国"), "Zhong1 guo2 A guo2")
        self.assertEqual(convert(self.dictionary, "中国A国", INITIALS), "zgag")

    def test_unmapped_whitespace(self):
        self.assertEqual(convert(self.dictionary, " "), "")
        self.assertEqual(convert(self.dictionary, " ", INITIALS), "")
        self.assertEqual(convert(self.dictionary, " 中国 \t国\n"), "Zhong1 guo2 guo2")
        self.assertEqual(convert(self.dictionary, " 中国 \t国\n", INITIALS), "zgg")

    def test_empty_input(self):
        self.assertEqual(convert(self.dictionary, ""), "")
        self.assertEqual(convert(self.dictionary, "", INITIALS), "")

    def test_homograph_uses_first_entry(self):
        self.assertEqual(convert(self.dictionary, "行"), "xing2")
        self.assertEqual(convert(self.dictionary, "重"), "zhong4")

    def test_longest_match_wins(self):
        # 重天 优先于 重
        self.assertEqual(convert(self.dictionary, "重天"), "chong2 tian1")
        self.assertEqual(convert(self.dictionary, "重国"), "zhong4 guo2")

    def test_no_backtracking(self):
        # 体重 被消耗后，重天 不再匹配
        self.assertEqual(convert(self.dictionary, "体重天"), "ti3 zhong4 天")

    def test_unmapped_punctuation(self):
        self.assertEqual(convert(self.dictionary, "中国!"), "Zhong1 guo2 !")
        self.assertEqual(convert(self.dictionary, "中国!", INITIALS), "zg")

    def test_initials_digits_and_lowercase(self):
        self.assertEqual(convert(self.dictionary, "a1Z", INITIALS), "a1z")

    def test_empty_dictionary(self):
        empty = DictionaryBuilder().build()
        self.assertEqual(convert(empty, "中国 A"), "中 国 A")
        self.assertEqual(convert(empty, "中国 A", INITIALS), "a")

    def test_custom_policy(self):
        policy = FormatPolicy(
            format_syllable=lambda s: s.value.lower(),
            format_codepoint=lambda ch: "?" if not ch.isspace() else "",
            separator="-",
        )
        self.assertEqual(convert(self.dictionary, "中国 X两", policy), "zhong-guo-?-liang")
        self.assertIs(get_policy(policy), policy)

    def test_syllable_without_letters(self):
        dictionary = DictionaryBuilder().feed(["儿 儿 [5] /test/"]).build()
        self.assertEqual(convert(dictionary, "儿"), "5")
        self.assertEqual(convert(dictionary, "儿", INITIALS), "")


class TestSegment(unittest.TestCase):
    """测试切分。"""

    @classmethod
    def setUpClass(cls):
        cls.dictionary = DictionaryBuilder().feed(SAMPLE_LINES).build()

    def test_segments(self):
        segments = list(segment(self.dictionary, "体重两重天AB"))
        self.assertEqual([s.text for s in segments], ["体重", "两", "重天", "A", "B"])
        self.assertEqual([s.matched for s in segments], [True, True, True, False, True])

    def test_segments_cover_input(self):
        rng = random.Random(42)
        alphabet = "中国國体重两重天ABC 珍·奥斯汀人为财死，鸟食亡行x\t"
        for _ in range(200):
            text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 30)))
            self.assertEqual("".join(s.text for s in segment(self.dictionary, text)), text)

    def test_longest_match_property(self):
        rng = random.Random(7)
        alphabet = "中国國体重两天ABC·珍奥斯汀行"
        keys_max = self.dictionary.word_max_length
        for _ in range(200):
            text = "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 20)))
            pos = 0
            for seg in segment(self.dictionary, text):
                longest = 0
                for k in range(1, min(keys_max, len(text) - pos) + 1):
                    if text[pos:pos + k] in self.dictionary:
                        longest = k
                if longest:
                    self.assertEqual(len(seg.text), longest)
                else:
                    self.assertEqual(len(seg.text), 1)
                    self.assertFalse(seg.matched)
                pos += len(seg.text)

    def test_separator_never_doubled(self):
        rng = random.Random(1234)
        alphabet = "中国体重两天ABC ·珍奥斯汀，人为财死鸟食亡\t\n"
        for _ in range(300):
            text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 25)))
            result = convert(self.dictionary, text)
            self.assertFalse(result.startswith(" "), repr(result))
            self.assertFalse(result.endswith(" "), repr(result))
            self.assertNotIn("  ", result)


class TestPinyinConverter(unittest.TestCase):
    """测试转换器封装。"""

    @classmethod
    def setUpClass(cls):
        cls.tmpdir = tempfile.TemporaryDirectory()
        cls.path = write_cedict(Path(cls.tmpdir.name) / "cedict.txt.gz")

    @classmethod
    def tearDownClass(cls):
        cls.tmpdir.cleanup()

    def test_create_converter(self):
        converter = create_converter(dict_path=str(self.path))
        self.assertIsInstance(converter, PinyinConverter)
        self.assertEqual(converter.pinyin("中国"), "Zhong1 guo2")
        self.assertEqual(converter.initials("中国"), "zg")
        self.assertEqual(converter.convert("中国", "initials"), "zg")

    def test_create_converter_from_config(self):
        converter = create_converter(EngineConfig(dict_path=str(self.path)))
        self.assertEqual(converter.pinyin(SENTENCE), SENTENCE_PINYIN)

    def test_create_converter_configures_logging(self):
        with tempfile.TemporaryDirectory() as log_dir:
            self.addCleanup(setup_logging, "pinzi.engine")
            with mock.patch("pinzi.engine.logging.LOG_DIR", Path(log_dir)):
                config = EngineConfig(dict_path=str(self.path), log_level="DEBUG", log_to_file=True)
                converter = create_converter(config)
                self.assertEqual(converter.pinyin("中国"), "Zhong1 guo2")

                engine_logger = logging.getLogger("pinzi.engine")
                self.assertEqual(engine_logger.level, logging.DEBUG)
                file_handlers = [h for h in engine_logger.handlers if isinstance(h, RotatingFileHandler)]
                self.assertEqual(len(file_handlers), 2)
                for handler in file_handlers:
                    handler.flush()
                log_text = (Path(log_dir) / "pinzi.engine.log").read_text(encoding="utf-8")
                self.assertIn("entries are loaded", log_text)
            setup_logging("pinzi.engine")

    def test_stats(self):
        converter = create_converter(dict_path=str(self.path))
        stats = converter.get_stats()
        self.assertEqual(stats["entry_count"], 12)
        self.assertEqual(stats["word_max_length"], 9)
        self.assertEqual(stats["key_count"], len(converter.dictionary))

    def test_segment(self):
        converter = PinyinConverter(load_dictionary(self.path))
        self.assertEqual([s.text for s in converter.segment("中国A")], ["中国", "A"])

    def test_reload_gives_same_output(self):
        first = PinyinConverter(load_dictionary(self.path))
        second = PinyinConverter(load_dictionary(self.path))
        for text in [SENTENCE, "中國行", "重重天", "", " A "]:
            self.assertEqual(first.pinyin(text), second.pinyin(text))
            self.assertEqual(first.initials(text), second.initials(text))


class TestFormatInitial(unittest.TestCase):
    """测试首字母规则。"""

    def test_rules(self):
        self.assertEqual(format_initial("Z"), "z")
        self.assertEqual(format_initial("z"), "z")
        self.assertEqual(format_initial("7"), "7")
        self.assertEqual(format_initial("中"), "")
        self.assertEqual(format_initial(" "), "")
        self.assertEqual(format_initial("·"), "")
        self.assertEqual(format_initial(","), "")

    def test_builtin_policies(self):
        self.assertEqual(FULL_PINYIN.separator, " ")
        self.assertEqual(INITIALS.separator, "")
        self.assertIs(get_policy("pinyin"), FULL_PINYIN)
        self.assertIs(get_policy("initials"), INITIALS)


if __name__ == '__main__':
    unittest.main()
