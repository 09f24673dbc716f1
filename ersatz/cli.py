"""
ersatz command line tool
"""

import argparse
import sys

import orjson


def main(argv=None):
    """Command line entry point"""
    parser = argparse.ArgumentParser(
        prog="ersatz",
        description="ersatz - German umlaut and ß restoration",
    )
    parser.add_argument("--dict", dest="dict_path", default=None, help="word list (default: $ERSATZ_DICT or bundled)")

    subparsers = parser.add_subparsers(dest="command", help="commands")

    # substitute
    substitute_parser = subparsers.add_parser("substitute", help="restore umlauts and ß")
    substitute_parser.add_argument("text", nargs="?", help="input text (default: stdin)")

    # check
    check_parser = subparsers.add_parser("check", help="check whether a word is valid")
    check_parser.add_argument("word", help="word to check")
    check_parser.add_argument("--json", action="store_true", help="JSON output")

    # verify-dict
    verify_parser = subparsers.add_parser("verify-dict", help="check word list invariants")
    verify_parser.add_argument("path", nargs="?", default=None, help="word list (default: --dict or bundled)")

    # build-dict
    build_parser = subparsers.add_parser("build-dict", help="build a word list from sources")
    build_parser.add_argument("sources", nargs="+", help="plain word lists or hunspell .dic files (optionally .gz)")
    build_parser.add_argument("-o", "--output", required=True, help="output word list")

    # server
    server_parser = subparsers.add_parser("server", help="start the API service")
    server_parser.add_argument("--host", default="127.0.0.1", help="bind address (default: 127.0.0.1)")
    server_parser.add_argument("--port", type=int, default=3000, help="port (default: 3000)")

    # version
    subparsers.add_parser("version", help="show version")

    args = parser.parse_args(argv)

    if args.command == "substitute":
        from ersatz.engine import create_engine
        engine = create_engine(dict_path=args.dict_path)
        if args.text is not None:
            print(engine.substitute(args.text))
        else:
            for line in sys.stdin:
                sys.stdout.write(engine.substitute(line))

    elif args.command == "check":
        from ersatz.engine import create_engine
        engine = create_engine(dict_path=args.dict_path)
        valid = engine.is_valid(args.word)
        parts = engine.decompose(args.word)
        if args.json:
            data = {"word": args.word, "valid": valid, "parts": parts}
            sys.stdout.write(orjson.dumps(data).decode("utf-8") + "\n")
        else:
            print(f"{args.word}: {'valid' if valid else 'invalid'}")
            if parts:
                print(f"  compound: {' + '.join(parts)}")
        return 0 if valid else 1

    elif args.command == "verify-dict":
        from ersatz.dicts import WordList
        words = WordList.load(args.path or args.dict_path)
        problems = words.verify()
        for problem in problems:
            print(f"{words.source}: {problem}", file=sys.stderr)
        if problems:
            return 1
        print(f"{words.source}: {len(words)} words, OK")

    elif args.command == "build-dict":
        from ersatz.dicts import build_word_list
        count = build_word_list(args.sources, args.output)
        print(f"Wrote {count} words to {args.output}")

    elif args.command == "server":
        from ersatz.api.server import main as server_main
        import os
        os.environ["HOST"] = args.host
        os.environ["PORT"] = str(args.port)
        if args.dict_path:
            os.environ["ERSATZ_DICT"] = args.dict_path
        server_main()

    elif args.command == "version":
        from ersatz import __version__
        print(f"ersatz v{__version__}")

    else:
        parser.print_help()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
