"""Application entry point for the zulip-compose command line."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import text2art
from rich.console import Console

import settings
from adapters.snapshot_store import SnapshotStore
from core.config import RealmContext
from core.inline import mention
from core.narrow import (
    ApiNarrow,
    ApiNarrowDm,
    ApiNarrowMessageId,
    ApiNarrowStream,
    ApiNarrowTopic,
)
from core.narrow_links import narrow_link
from core.quote_reply import quote_and_reply, quote_and_reply_placeholder

NAME = "ZCOMPOSE"
FONT = "small"

LOGGER = logging.getLogger(__name__)

# Output is meant to be pasted into a compose box, so the banner goes to stderr.
_ERR = Console(stderr=True, highlight=False)


def _print_banner() -> None:
    _ERR.print(text2art(NAME, font=FONT), markup=False)


_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _file_handler(file_cfg: dict) -> RotatingFileHandler:
    """Rotating log file; relative paths are taken from the project root."""

    path = file_cfg.get("path", "logs/zcompose.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _log_handlers(config: dict) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_file_handler(file_cfg))
    return handlers


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    handlers = _log_handlers(config)
    if not handlers:
        return

    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


def _realm() -> RealmContext:
    if not settings.REALM_URL:
        raise RuntimeError("realm.url (or REALM_URL) is required")
    return RealmContext(
        realm_url=settings.REALM_URL,
        zulip_feature_level=settings.ZULIP_FEATURE_LEVEL,
    )


def _build_store() -> SnapshotStore:
    return SnapshotStore.from_file(settings.SNAPSHOT_PATH, _realm(), settings.SELF_USER_ID)


def _parse_user_ids(raw: str) -> tuple[int, ...]:
    try:
        return tuple(sorted(int(part) for part in raw.split(",") if part.strip()))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"user ids must be comma-separated integers: {raw!r}") from e


def build_narrow(args: argparse.Namespace) -> ApiNarrow:
    """Turn the link subcommand's options into an API narrow."""

    narrow: ApiNarrow = []
    if args.stream is not None:
        narrow.append(ApiNarrowStream(args.stream))
    if args.topic is not None:
        narrow.append(ApiNarrowTopic(args.topic))
    if args.not_topic is not None:
        narrow.append(ApiNarrowTopic(args.not_topic, negated=True))
    if args.dm is not None:
        narrow.append(ApiNarrowDm(args.dm))
    if args.id is not None:
        narrow.append(ApiNarrowMessageId(args.id))
    return narrow


def _read_content(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def _quote(args: argparse.Namespace) -> str:
    store = _build_store()
    message = store.get_message(args.message_id)
    if args.content_file is None:
        return quote_and_reply_placeholder(store, message)
    return quote_and_reply(store, message, _read_content(args.content_file))


def _link(args: argparse.Namespace) -> str:
    store = _build_store()
    return narrow_link(store, build_narrow(args), near_message_id=args.near)


def _mention(args: argparse.Namespace) -> str:
    store = _build_store()
    user = store.get_user(args.user_id)
    if user is None:
        raise KeyError(f"User {args.user_id} is not in the snapshot")
    users = store.users if settings.MENTION_DISAMBIGUATE else None
    return mention(user, silent=args.silent, users=users)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zcompose")
    parser.add_argument("--no-banner", action="store_true", help="Skip the banner")
    subparsers = parser.add_subparsers(dest="command", required=True)

    quote_parser = subparsers.add_parser("quote", help="Compose a quote-and-reply body")
    quote_parser.add_argument("message_id", type=int)
    quote_parser.add_argument(
        "--content-file",
        help="Raw Markdown of the quoted message ('-' for stdin); omit for the placeholder",
    )
    quote_parser.set_defaults(handler=_quote)

    link_parser = subparsers.add_parser("link", help="Print a narrow link")
    link_parser.add_argument("--stream", type=int, help="Stream id")
    link_parser.add_argument("--topic", help="Topic name")
    link_parser.add_argument("--not-topic", help="Exclude this topic")
    link_parser.add_argument("--dm", type=_parse_user_ids, help="Comma-separated user ids")
    link_parser.add_argument("--id", type=int, help="Single message id")
    link_parser.add_argument("--near", type=int, help="Anchor message id")
    link_parser.set_defaults(handler=_link)

    mention_parser = subparsers.add_parser("mention", help="Print an @-mention")
    mention_parser.add_argument("user_id", type=int)
    mention_parser.add_argument("--silent", action="store_true")
    mention_parser.set_defaults(handler=_mention)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if not args.no_banner:
        _print_banner()
    _configure_logging()

    try:
        output = args.handler(args)
    except (FileNotFoundError, KeyError, RuntimeError, ValueError):
        LOGGER.exception("Failed to run %s", args.command)
        raise SystemExit(1)

    print(output, end="")


if __name__ == "__main__":
    main()
