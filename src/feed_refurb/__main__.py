# ABOUTME: CLI entry point for feed-refurb.
# ABOUTME: Provides subcommands: refurb (one feed to stdout or file) and serve (web app).

import argparse
import logging
import sys
from pathlib import Path

import structlog

from feed_refurb.config import get_settings


def configure_logging() -> None:
    """Send structlog output to stderr, as JSON lines or for a terminal.

    stdout is reserved for the feed written by ``refurb``.
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        timestamper = structlog.processors.TimeStamper(fmt="iso")
        renderer = structlog.processors.JSONRenderer()
    else:
        timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S")
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[timestamper, structlog.processors.add_log_level, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def cmd_refurb(args: argparse.Namespace) -> int:
    """Refurbish one feed and write the resulting RSS.

    Logs go to stderr so stdout carries only the feed.
    """
    from feed_refurb.errors import RefurbError, SelectorCompileError
    from feed_refurb.feeds import FeedRefurbisher, compile_selector

    log = structlog.get_logger()
    log.info("cmd_refurb_start", feed=args.feed, selector=args.selector)

    try:
        selector = compile_selector(args.selector)
    except SelectorCompileError as e:
        log.error("invalid_selector", error=str(e))
        return 1

    try:
        with FeedRefurbisher(get_settings()) as refurbisher:
            xml = refurbisher.refurbish_to_xml(args.feed, selector)
    except RefurbError as e:
        log.error("cmd_refurb_failed", error=str(e), cause=str(e.__cause__))
        return 1

    if args.output:
        Path(args.output).write_text(xml, encoding="utf-8")
        log.info("feed_written", path=args.output)
    else:
        sys.stdout.write(xml)
        sys.stdout.write("\n")

    log.info("cmd_refurb_complete")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the web frontend with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port

    log = structlog.get_logger()
    log.info("cmd_serve_start", host=host, port=port)

    uvicorn.run(
        "feed_refurb.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="feed_refurb",
        description="feed-refurb - replace RSS item descriptions with content from the linked pages",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # refurb command
    refurb_parser = subparsers.add_parser(
        "refurb",
        help="Refurbish a feed and print the resulting RSS",
    )
    refurb_parser.add_argument("feed", help="URL of the RSS feed")
    refurb_parser.add_argument(
        "selector",
        help='CSS selector for the article parts to keep (e.g. ".main-image,article")',
    )
    refurb_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the feed to this file instead of stdout",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the web frontend",
    )
    serve_parser.add_argument(
        "--host",
        type=str,
        help="Interface to bind. Defaults to the HOST setting.",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on. Defaults to the PORT setting.",
    )

    return parser


def main() -> int:
    """Main entry point."""
    configure_logging()

    parser = create_parser()
    args = parser.parse_args()

    commands = {
        "refurb": cmd_refurb,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
