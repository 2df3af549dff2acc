#!/usr/bin/env python3
"""
KEYSHADE ABBREVIATOR
--------------------
Computes the part of a key blob that can be folded away for display.
The head (AAAA plus 8 characters, enough to tell key types apart) and the
last 8 characters stay visible; everything in between is collapsible.

Author: KeyShade Team
Date: 2026-10-19
"""

import re
from typing import Optional

from keyshade.core.models import AbbreviationRange, Category, Span
from keyshade.scanning.lexer import KEY_BLOB_PREFIX


class KeyAbbreviator:
    """Pure function object: a key-material span in, zero or one range out."""

    HEAD_LENGTH = 8
    TAIL_LENGTH = 8
    BASE64_CHARS = re.compile(r'[A-Za-z0-9+/=]+')

    def abbreviate(self, line: str, span: Span) -> Optional[AbbreviationRange]:
        if span.category is not Category.KEY_MATERIAL:
            return None

        field = line[span.start:span.end]
        marker = field.find(KEY_BLOB_PREFIX)
        if marker == -1:
            return None

        head_start = marker + len(KEY_BLOB_PREFIX)
        head = field[head_start:head_start + self.HEAD_LENGTH]
        if len(head) < self.HEAD_LENGTH or not self.BASE64_CHARS.fullmatch(head):
            return None

        start = span.start + head_start + self.HEAD_LENGTH
        end = span.end - self.TAIL_LENGTH
        if end <= start:
            # Too short to leave a middle; show the whole key
            return None
        return AbbreviationRange(start, end)


_default = KeyAbbreviator()


def abbreviate(line: str, span: Span) -> Optional[AbbreviationRange]:
    return _default.abbreviate(line, span)
