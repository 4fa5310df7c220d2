from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import IO, Any

from .cleaner import clean
from .config import RuntimePaths, SettingsStore, resolve_max_tweet_length, resolve_runtime_paths
from .constants import COMMAND_ID
from .errors import ErrorCode, TweetThreadError, exit_code_for
from .host import FileSystemHost
from .logging_utils import setup_logging
from .segmenter import segment
from .workflow import register_commands


def print_json(payload: Any, stream: IO[str] | None = None) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2), file=stream or sys.stdout)


def read_text_file(path_arg: str) -> str:
    path = Path(path_arg).expanduser()
    if not path.is_file():
        raise TweetThreadError(ErrorCode.SOURCE_NOT_FOUND, f"input does not exist: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TweetThreadError(
            ErrorCode.SOURCE_NOT_FOUND,
            f"failed to read input: {path}",
            cause=exc,
        ) from exc


def resolve_max_length(args, settings_store: SettingsStore, logger) -> int:
    if args.max_length is not None:
        return resolve_max_tweet_length(args.max_length, logger)
    return settings_store.load().max_tweet_length


def run_convert(args, runtime_paths: RuntimePaths, logger) -> int:
    settings_store = SettingsStore(runtime_paths.settings_file, logger)
    host = FileSystemHost(
        runtime_paths.vault_root,
        source_path=Path(args.input).expanduser().resolve(),
        selection=args.selection or "",
        logger=logger,
    )
    results = register_commands(
        host,
        settings_store,
        logger,
        max_length=resolve_max_length(args, settings_store, logger),
    )

    if not host.run_command(COMMAND_ID):
        raise TweetThreadError(ErrorCode.SOURCE_NOT_FOUND, f"input does not exist: {args.input}")

    result = results[-1]
    payload = result.to_dict()
    if result.path is not None:
        payload["path"] = str(runtime_paths.vault_root / result.path)
    print_json(payload)
    return 0


def run_split(args, runtime_paths: RuntimePaths, logger) -> int:
    settings_store = SettingsStore(runtime_paths.settings_file, logger)
    max_length = resolve_max_length(args, settings_store, logger)

    text = args.text if args.text is not None else read_text_file(args.input)
    if not args.no_clean:
        text = clean(text)

    chunks = segment(text, max_length)
    print_json(
        {
            "max_length": max_length,
            "chunks": [
                {"index": index, "length": len(chunk), "text": chunk}
                for index, chunk in enumerate(chunks, start=1)
            ],
        }
    )
    return 0


def run_clean(args) -> int:
    print_json({"text": clean(read_text_file(args.input))})
    return 0


def run_settings_show(runtime_paths: RuntimePaths, logger) -> int:
    settings = SettingsStore(runtime_paths.settings_file, logger).load()
    print_json({"settings": settings.to_dict(), "path": str(runtime_paths.settings_file)})
    return 0


def run_settings_set(args, runtime_paths: RuntimePaths, logger) -> int:
    settings = SettingsStore(runtime_paths.settings_file, logger).update_max_tweet_length(
        args.max_tweet_length
    )
    print_json({"settings": settings.to_dict(), "path": str(runtime_paths.settings_file)})
    return 0


def add_max_length_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-length",
        default=None,
        help="maximum characters per chunk (default: stored maxTweetLength)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tweetthread", description="Split markdown notes into tweet threads")
    parser.add_argument("--vault-root", default=".", help="notes directory (default: current directory)")
    parser.add_argument("--verbose", action="store_true")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="write a thread note for a markdown note")
    convert.add_argument("--input", required=True, help="markdown note to convert")
    convert.add_argument("--selection", default=None, help="convert this text instead of the whole note")
    add_max_length_arg(convert)

    split = subparsers.add_parser("split", help="print chunks without writing a note")
    source = split.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", default=None)
    source.add_argument("--input", default=None)
    split.add_argument("--no-clean", action="store_true", help="skip markdown cleaning")
    add_max_length_arg(split)

    clean_cmd = subparsers.add_parser("clean", help="print a note with markdown stripped")
    clean_cmd.add_argument("--input", required=True)

    settings = subparsers.add_parser("settings", help="stored settings")
    settings_sub = settings.add_subparsers(dest="settings_command", required=True)

    settings_sub.add_parser("show", help="show settings")
    settings_set = settings_sub.add_parser("set", help="update settings")
    settings_set.add_argument("--max-tweet-length", required=True)

    return parser


def dispatch(args, runtime_paths: RuntimePaths, logger) -> int:
    if args.command == "convert":
        return run_convert(args, runtime_paths, logger)

    if args.command == "split":
        return run_split(args, runtime_paths, logger)

    if args.command == "clean":
        return run_clean(args)

    if args.command == "settings" and args.settings_command == "show":
        return run_settings_show(runtime_paths, logger)

    if args.command == "settings" and args.settings_command == "set":
        return run_settings_set(args, runtime_paths, logger)

    raise TweetThreadError(ErrorCode.INVALID_INPUT, "unsupported command")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    runtime_paths = resolve_runtime_paths(args.vault_root)
    runtime_paths.ensure()

    logger = setup_logging(runtime_paths.log_file, verbose=args.verbose)

    try:
        return dispatch(args, runtime_paths, logger)
    except TweetThreadError as err:
        logger.error(
            err.message,
            extra={"event": "error", "error_code": err.code.value},
        )
        print_json(err.to_dict(), stream=sys.stderr)
        return exit_code_for(err)
    except Exception as exc:  # noqa: BLE001
        logger.exception("unhandled error", extra={"event": "error_unhandled"})
        err = TweetThreadError(ErrorCode.INTERNAL_ERROR, "unhandled error", cause=exc)
        print_json(err.to_dict(), stream=sys.stderr)
        return exit_code_for(err)


if __name__ == "__main__":
    raise SystemExit(main())
