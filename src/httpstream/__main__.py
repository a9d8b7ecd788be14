"""
=============================================================================
HTTPSTREAM CLI ENTRY POINT
=============================================================================

Dumps the HTTP messages found in captured traffic.

=============================================================================
USAGE
=============================================================================

    python -m httpstream capture.bin
    python -m httpstream capture.bin --chunk-size 1460
    python -m httpstream capture.bin --headers
    python -m httpstream --strict capture.bin
    cat capture.bin | python -m httpstream -

Output, one block per message:

    Request - POST - /api/users
    Content: {"name": "alice"}

    Response - Created - 201

=============================================================================
"""

import argparse
import logging
import sys
from typing import BinaryIO, Optional

from . import __version__
from .config import ParserConfig
from .http.errors import HTTPParseError
from .http.message import HTTPMessage, HTTPRequest
from .parser import StreamParser

logger = logging.getLogger("httpstream")


def _setup_logging(config: ParserConfig) -> None:
    level = getattr(logging, config.log_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("httpstream").setLevel(level)


def format_message(message: HTTPMessage, show_headers: bool = False) -> str:
    """Render a message the way the CLI prints it."""
    if isinstance(message, HTTPRequest):
        lines = [f"Request - {message.method.value} - {message.target}"]
    else:
        lines = [f"Response - {message.status_text} - {message.status_code}"]

    if show_headers:
        lines.extend(f"  {name}: {value}" for name, value in message.headers)

    if message.body:
        lines.append(f"Content: {message.text}")

    return "\n".join(lines)


def _read_chunks(stream: BinaryIO, chunk_size: Optional[int]):
    if chunk_size is None:
        yield stream.read()
        return
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            return
        yield chunk


def dump(stream: BinaryIO, parser: StreamParser, chunk_size: Optional[int], show_headers: bool) -> int:
    """Feed one capture through the parser, printing messages as they complete."""
    count = 0
    for chunk in _read_chunks(stream, chunk_size):
        parser.push(chunk)
        for message in parser:
            print(format_message(message, show_headers))
            print()
            count += 1

    if parser.buffered:
        logger.info(f"{parser.buffered} trailing bytes did not form a complete message")
    return count


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns the process exit status: 0 on success, 1 when a file cannot be
    read or a strict-mode parse error occurs.
    """
    env_config = ParserConfig.from_env()

    parser = argparse.ArgumentParser(
        prog="httpstream",
        description="Extract HTTP/1.x requests and responses from captured traffic",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m httpstream capture.bin                  # Whole file at once
  python -m httpstream capture.bin -c 1460          # Feed in TCP-sized chunks
  python -m httpstream capture.bin --headers        # Show header pairs
  python -m httpstream --strict capture.bin         # Stop at the first hard error
        """
    )

    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="Capture file(s) to parse, '-' for stdin"
    )

    parser.add_argument(
        "--chunk-size", "-c",
        type=int,
        default=None,
        help="Push the capture in chunks of this many bytes (default: whole file)"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Raise on malformed messages instead of skipping them"
    )

    parser.add_argument(
        "--strict-headers",
        action="store_true",
        help="Treat header lines without a colon as malformed"
    )

    parser.add_argument(
        "--headers",
        action="store_true",
        help="Print header pairs for every message"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=env_config.log_level.upper(),
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpstream {__version__}"
    )

    args = parser.parse_args(argv)

    if args.chunk_size is not None and args.chunk_size < 1:
        parser.error("--chunk-size must be >= 1")

    config = ParserConfig(
        tolerant_mode=env_config.tolerant_mode and not args.strict,
        strict_headers=env_config.strict_headers or args.strict_headers,
        max_buffer_size=env_config.max_buffer_size,
        compact_threshold=env_config.compact_threshold,
        log_level=args.log_level,
    )
    _setup_logging(config)

    total = 0
    for path in args.files:
        stream_parser = StreamParser(config)
        try:
            if path == "-":
                total += dump(sys.stdin.buffer, stream_parser, args.chunk_size, args.headers)
            else:
                with open(path, "rb") as stream:
                    total += dump(stream, stream_parser, args.chunk_size, args.headers)
        except OSError as e:
            print(f"Error: cannot read {path}: {e}", file=sys.stderr)
            return 1
        except HTTPParseError as e:
            print(f"Error: {path}: {e}", file=sys.stderr)
            return 1

    logger.info(f"{total} message(s) parsed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
