"""Command line entry point for keysuggest.

Usage:
    keysuggest suggest hel            # ranked completions
    keysuggest check helllo           # spelling verdict
    keysuggest accept zoomer          # learn an accepted word
    keysuggest build-dict en out.json # export a base dictionary asset
"""
import argparse
import logging
import sys


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="keysuggest", description="keysuggest")
    parser.add_argument("--config", help="Path to config.json")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("suggest", help="Suggest completions for composing text")
    p.add_argument("text", nargs="?", default="")
    p.add_argument("-n", "--max", type=int, default=None, dest="count")
    p.add_argument("--locale")

    p = sub.add_parser("check", help="Spell-check a word")
    p.add_argument("word")
    p.add_argument("-n", "--max", type=int, default=None, dest="count")
    p.add_argument("--locale")

    p = sub.add_parser("accept", help="Learn an accepted word")
    p.add_argument("word")
    p.add_argument("--locale")

    p = sub.add_parser("build-dict", help="Export a base dictionary from pyspellchecker")
    p.add_argument("locale")
    p.add_argument("output")
    p.add_argument("--limit", type=int, default=None)
    return parser


def run_suggest(engine, args, config) -> int:
    count = args.count if args.count is not None else config.max_candidates
    candidates = engine.suggest(args.text, max_candidates=count, locale=args.locale)
    auto = engine.auto_commit_candidate(candidates, args.text)
    for c in candidates:
        marker = "*" if c is auto else " "
        print(f"{marker} {c.text:<20} {c.confidence:.3f}  {c.source_tier.value}")
    return 0


def run_check(engine, args, config) -> int:
    count = args.count if args.count is not None else config.max_suggestions
    verdict = engine.check(args.word, max_suggestions=count, locale=args.locale)
    if verdict.is_valid:
        print(f"{args.word}: valid")
        return 0
    print(f"{args.word}: typo → {', '.join(verdict.suggestions)}")
    return 1


def run_accept(engine, args, config) -> int:
    engine.on_accepted(args.word, locale=args.locale)
    engine.flush()
    return 0


def run_build_dict(args) -> int:
    from keysuggest.dictbuild import DEFAULT_LIMIT, build_dictionary, write_dictionary

    words = build_dictionary(args.locale, args.limit or DEFAULT_LIMIT)
    path = write_dictionary(words, args.output)
    print(f"Wrote {len(words)} words to {path}")
    return 0


def main(argv=None) -> int:
    from keysuggest.config import Config
    from keysuggest.engine import SuggestionEngine
    from keysuggest.errors import DictionaryLoadError

    args = build_parser().parse_args(argv)
    config = Config(args.config)
    setup_logging(args.debug or config.debug_logging)
    logger = logging.getLogger(__name__)

    if args.command == "build-dict":
        return run_build_dict(args)

    engine = SuggestionEngine.from_config(config)
    try:
        engine.preload(args.locale)
    except DictionaryLoadError as e:
        logger.error("%s", e)
        return 2

    handlers = {"suggest": run_suggest, "check": run_check, "accept": run_accept}
    try:
        return handlers[args.command](engine, args, config)
    finally:
        engine.close()


if __name__ == "__main__":
    sys.exit(main())
