"""
PinZi 命令行工具
"""

import argparse
import sys


def _add_dict_argument(parser: argparse.ArgumentParser):
    parser.add_argument("-d", "--dict", dest="dict_path", default=None,
                        help="词典文件路径 (默认: PINZI_DICT_PATH 或 data/ 下的 CC-CEDICT)")


def _load_converter(args):
    from pinzi.engine import DictionaryError, create_converter

    try:
        return create_converter(dict_path=args.dict_path)
    except DictionaryError as e:
        print(f"错误: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv=None):
    """命令行入口"""
    parser = argparse.ArgumentParser(
        prog="pinzi",
        description="PinZi - 汉字转拼音",
    )

    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    pinyin_parser = subparsers.add_parser("pinyin", help="转换为完整拼音")
    pinyin_parser.add_argument("text", help="待转换文本")
    _add_dict_argument(pinyin_parser)

    initials_parser = subparsers.add_parser("initials", help="转换为拼音首字母")
    initials_parser.add_argument("text", help="待转换文本")
    _add_dict_argument(initials_parser)

    info_parser = subparsers.add_parser("info", help="显示词典统计")
    _add_dict_argument(info_parser)

    server_parser = subparsers.add_parser("server", help="启动 API 服务")
    server_parser.add_argument("--host", default="0.0.0.0", help="绑定地址 (默认: 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=3000, help="端口 (默认: 3000)")
    _add_dict_argument(server_parser)

    subparsers.add_parser("version", help="显示版本")

    args = parser.parse_args(argv)

    if args.command == "pinyin":
        print(_load_converter(args).pinyin(args.text))

    elif args.command == "initials":
        print(_load_converter(args).initials(args.text))

    elif args.command == "info":
        stats = _load_converter(args).get_stats()
        print(f"词条数: {stats['entry_count']:,}")
        print(f"词头数: {stats['key_count']:,}")
        print(f"最长词头: {stats['word_max_length']}")

    elif args.command == "server":
        import os
        os.environ["HOST"] = args.host
        os.environ["PORT"] = str(args.port)
        if args.dict_path:
            os.environ["PINZI_DICT_PATH"] = args.dict_path
        from pinzi.api.server import main as server_main
        server_main()

    elif args.command == "version":
        from pinzi import __version__
        print(f"PinZi v{__version__}")

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
