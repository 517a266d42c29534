"""Command line: extract a record from an item document, or inject one into it."""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

from loguru import logger
from slixmpp.xmlstream import tostring

from xmpp_activity import __version__
from xmpp_activity.config import Config, cfg, load_config_with_env
from xmpp_activity.core.errors import MalformedRatingError
from xmpp_activity.extractor import extract
from xmpp_activity.injector import inject

# Third-party libraries to intercept and route through loguru
_INTERCEPTED_LIBRARIES = ["slixmpp"]


def _intercept_logging(level: str) -> None:
    """Route stdlib logging from third-party libraries to loguru."""

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                log_level: str | int = logger.level(record.levelname).name
            except ValueError:
                log_level = record.levelno
            logger.patch(
                lambda r: r.update(
                    name=record.name,
                    function=record.funcName,
                    line=record.lineno,
                ),
            ).opt(exception=record.exc_info).log(log_level, record.getMessage())

    for lib in _INTERCEPTED_LIBRARIES:
        lib_logger = logging.getLogger(lib)
        lib_logger.handlers = [InterceptHandler()]
        lib_logger.propagate = False
        lib_logger.setLevel(level)


def setup_logging(verbose: bool = False, default: str = "INFO") -> None:
    """Configure loguru on stderr.

    Level: verbose=True gives DEBUG; otherwise LOG_LEVEL from the environment,
    falling back to ``default``.
    """
    level = default
    if verbose:
        level = "DEBUG"
    else:
        env_level = (os.environ.get("LOG_LEVEL") or "").upper()
        if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = env_level

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}",
    )
    _intercept_logging(level)


def reload_config(config_path: Path) -> Config:
    """Load config from path and update global cfg."""
    data = load_config_with_env(config_path)
    cfg.reload(data)
    return cfg


def _read_item(path: Path) -> ET.Element | None:
    try:
        return ET.parse(path).getroot()
    except ET.ParseError as exc:
        logger.error("Malformed item document {}: {}", path, exc)
        return None
    except OSError as exc:
        logger.error("Cannot read item document {}: {}", path, exc)
        return None


def _dump_record(record: dict) -> str:
    """JSON text for a record; a non-finite rating is written as null."""
    review = record.get("review")
    if isinstance(review, dict) and isinstance(review.get("rating"), float) and not math.isfinite(review["rating"]):
        logger.warning("Rating {} is not a finite number; writing null", review["rating"])
        record = {**record, "review": {**review, "rating": None}}
    return json.dumps(record, indent=2, sort_keys=True, allow_nan=False)


def cmd_extract(args: argparse.Namespace) -> int:
    item = _read_item(args.item)
    if item is None:
        return 1
    record: dict = {}
    try:
        extract(item, record, strict=args.strict or None)
    except MalformedRatingError as exc:
        logger.error("{}: {}", args.item, exc)
        return 1
    print(_dump_record(record))
    return 0


def cmd_inject(args: argparse.Namespace) -> int:
    item = _read_item(args.item)
    if item is None:
        return 1
    try:
        record = json.loads(args.record.read_text())
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read record {}: {}", args.record, exc)
        return 1
    except json.JSONDecodeError as exc:
        logger.error("Malformed record {}: {}", args.record, exc)
        return 1
    if not isinstance(record, dict):
        logger.error("Record {} must be a JSON object", args.record)
        return 1
    inject(record, item)
    print(tostring(item))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xmpp-activity",
        description="Activity Streams extensions for XMPP pubsub Atom entries",
    )
    parser.add_argument("--config", "-c", type=Path, default=None, help="Path to YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="Print the record carried by an item as JSON")
    p_extract.add_argument("item", type=Path, help="Item XML document")
    p_extract.add_argument("--strict", action="store_true", help="Fail on a non-numeric rating")
    p_extract.set_defaults(func=cmd_extract)

    p_inject = sub.add_parser("inject", help="Write a JSON record into an item and print it")
    p_inject.add_argument("item", type=Path, help="Item XML document")
    p_inject.add_argument("record", type=Path, help="JSON record file")
    p_inject.set_defaults(func=cmd_inject)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entrypoint."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.config is not None:
        if not args.config.exists():
            logger.error("Config file not found: {}", args.config)
            return 1
        config = reload_config(args.config)
        setup_logging(args.verbose, default=config.log_level)
        logger.info("Config loaded from {}", args.config)

    for path in (getattr(args, "item", None), getattr(args, "record", None)):
        if path is not None and not path.exists():
            logger.error("File not found: {}", path)
            return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
