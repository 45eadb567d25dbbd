#!/usr/bin/env python3
"""
calcstate CLI entry point: feeds key strings to a calculator and prints the display
"""

from __future__ import annotations
import sys
import argparse
import os
import logging
import logging.handlers
import traceback
from pathlib import Path

from calcstate import __version__
from calcstate.log import parse_level

# Global logger instance
logger = None


def setup_logging(debug: bool = False, log_file: str | None = None,
                  level: str | None = None) -> logging.Logger:
    """Setup logging to both console and file

    Args:
        debug: Enable debug level logging on the console
        log_file: Path to log file (default: ~/.calcstate.log)
        level: Explicit level name (``trace``, ``debug``, ...) overriding *debug*
    """
    global logger

    if logger is not None:
        return logger

    if level is not None:
        file_level = console_level = parse_level(level)
    else:
        file_level = logging.DEBUG  # Always log everything to file
        console_level = logging.DEBUG if debug else logging.WARNING

    logger = logging.getLogger('calcstate')
    logger.setLevel(min(file_level, console_level))

    if log_file is None:
        log_file = os.path.expanduser('~/.calcstate.log')

    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-8s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File handler (rotate log file when it gets too large)
    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,  # 1 MB
            backupCount=3
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='calcstate',
        description='Four-function calculator driven by key presses '
                    '(0-9 . + - * / = C)',
    )
    parser.add_argument(
        '-k', '--keys',
        type=str,
        default=None,
        help='Key sequence to evaluate, e.g. "12+3=". Reads stdin when omitted'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Log level name (trace, debug, info, warning, error)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to config file'
    )
    parser.add_argument(
        '--logfile',
        type=str,
        default=None,
        help='Path to log file (default: ~/.calcstate.log)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__
    )
    return parser.parse_args(argv)


def run_session(dispatcher, stream, out=None) -> None:
    """Feed each line of *stream* to *dispatcher* and print the display after it."""
    out = out or sys.stdout
    for line in stream:
        keys = line.strip()
        if not keys:
            continue
        try:
            print(dispatcher.feed(keys), file=out)
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            print(dispatcher.context.display(), file=out)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for calcstate"""
    args = parse_args(argv)

    try:
        log = setup_logging(debug=args.debug, log_file=args.logfile, level=args.log_level)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log.info(f"calcstate started (version {__version__})")

    # Import after args parsing to avoid import-time side effects
    from calcstate.config import ConfigManager
    from calcstate.core.context import CalculatorContext
    from calcstate.core.key_dispatcher import KeyDispatcher

    config = ConfigManager(args.config)
    log.debug(f"Effective config from {config.config_path}: {config.get_all()}")

    dispatcher = KeyDispatcher(CalculatorContext(config.get_all()))

    try:
        if args.keys is not None:
            print(dispatcher.feed(args.keys))
        else:
            run_session(dispatcher, sys.stdin)
        return 0

    except ValueError as e:
        log.error(f"Invalid input: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        log.info("calcstate terminated by user (Ctrl+C)")
        return 0

    except Exception as e:
        log.error(f"Unhandled error: {type(e).__name__}: {e}")
        log.debug(traceback.format_exc())
        return 1

    finally:
        log.info("calcstate shutdown")


if __name__ == '__main__':
    sys.exit(main())
