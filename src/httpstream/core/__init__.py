"""
=============================================================================
CORE SCANNING COMPONENTS
=============================================================================

The HTTP-agnostic bottom of the parser:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                          BYTE CURSOR                                 │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Owns the unconsumed bytes and the read position                  │
    │  • Checkpoint / restore for speculative parsing                     │
    │  • Index-window flushing with periodic compaction                   │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                        SEQUENCE SCANNER                              │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Lookahead matching, literal consumption                          │
    │  • Bounded "read until terminator" scans                            │
    │  • NEED_MORE instead of errors when the buffer runs out             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .cursor import ByteCursor
from .scanner import (
    NEED_MORE,
    ScanResult,
    match_at,
    consume_literal,
    take_until,
    take_exact,
)

__all__ = [
    "ByteCursor",
    "NEED_MORE",
    "ScanResult",
    "match_at",
    "consume_literal",
    "take_until",
    "take_exact",
]
