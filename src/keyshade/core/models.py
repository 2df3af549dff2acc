#!/usr/bin/env python3
"""
KEYSHADE CORE MODELS
--------------------
Defines the fundamental data structures used across the KeyShade scanners.
These models represent the lowest level of key-file abstraction: a classified
character range inside a single line.

Author: KeyShade Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FileKind(str, Enum):
    """The two OpenSSH file formats KeyShade understands."""
    AUTHORIZED_KEYS = "authorized-keys"
    KNOWN_HOSTS = "known-hosts"


class Category(str, Enum):
    """Highlight category attached to a recognized field."""
    KEYWORD = "keyword"
    KEY_TYPE = "key-type"
    KEY_MATERIAL = "key-material"
    COMMENT = "comment"
    MARKER = "marker"
    HOSTNAME = "hostname"
    HASHED_HOSTNAME = "hashed-hostname"
    NEGATION = "negation"


@dataclass(frozen=True)
class Span:
    """
    The atomic unit of a classified line.

    Offsets are zero-based and half-open, counted on the line with its
    terminator removed. Anything not covered by a Span is plain text.
    """
    start: int                     # First character of the field
    end: int                       # One past the last character
    category: Category             # What the field is
    detail: Optional[str] = None   # Marker name for MARKER spans

    def text(self, line: str) -> str:
        return line[self.start:self.end]


@dataclass(frozen=True)
class AbbreviationRange:
    """The collapsible middle of a key-material span."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start
