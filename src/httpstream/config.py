"""
=============================================================================
PARSER CONFIGURATION
=============================================================================

Centralized configuration for StreamParser and the command-line tool.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m httpstream --strict capture.bin                 │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPSTREAM_MAX_BUFFER=1048576 python -m httpstream ...    │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
TOLERANT VS STRICT
=============================================================================

    Tolerant (default):  capturing arbitrary streams of unknown quality.
                         Broken messages are logged and skipped.

    Strict:              conformance testing. The first hard error is
                         raised to the caller.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class ParserConfig:
    """
    Configuration for the streaming parser.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    ERROR HANDLING
    - tolerant_mode, strict_headers

    MEMORY
    - max_buffer_size, compact_threshold

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # ERROR HANDLING
    # ─────────────────────────────────────────────────────────────────────

    tolerant_mode: bool = True
    """
    Swallow hard parse errors.

    True  - log the error, discard the broken message, keep parsing
    False - raise the error from parse()/push()
    """

    strict_headers: bool = False
    """
    Reject header lines that have no colon.

    Off by default: such lines are skipped and the rest of the message
    is still delivered.
    """

    # ─────────────────────────────────────────────────────────────────────
    # MEMORY
    # ─────────────────────────────────────────────────────────────────────

    max_buffer_size: Optional[int] = None
    """
    Ceiling on unconsumed buffered bytes.

    None = unbounded. A stream that never completes a message can grow
    the buffer forever, so set this for untrusted input.
    """

    compact_threshold: int = 64 * 1024
    """
    Size of the already-parsed prefix that triggers physical compaction
    of the buffer. Lower = less memory, more copying.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """Logging level used by the command-line tool."""

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPSTREAM_TOLERANT           Swallow hard errors (default: true)
        HTTPSTREAM_STRICT_HEADERS     Reject colon-less headers (default: false)
        HTTPSTREAM_MAX_BUFFER         Buffer ceiling in bytes (default: none)
        HTTPSTREAM_COMPACT_THRESHOLD  Compaction threshold (default: 65536)
        HTTPSTREAM_LOG_LEVEL          Logging level (default: WARNING)

        =====================================================================
        """
        max_buffer = os.getenv("HTTPSTREAM_MAX_BUFFER")
        return cls(
            tolerant_mode=_env_flag("HTTPSTREAM_TOLERANT", True),
            strict_headers=_env_flag("HTTPSTREAM_STRICT_HEADERS", False),
            max_buffer_size=int(max_buffer) if max_buffer else None,
            compact_threshold=int(os.getenv("HTTPSTREAM_COMPACT_THRESHOLD", str(64 * 1024))),
            log_level=os.getenv("HTTPSTREAM_LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """Fail fast on impossible values."""
        if self.max_buffer_size is not None and self.max_buffer_size < 1:
            raise ValueError("max_buffer_size must be >= 1 or None")

        if self.compact_threshold < 0:
            raise ValueError("compact_threshold must be >= 0")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")
