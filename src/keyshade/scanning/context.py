#!/usr/bin/env python3
"""
KEYSHADE SCAN CONTEXT
---------------------
The result of one display pass over a document: every line with its spans
and, for key lines, the collapsible part of the key.

Author: KeyShade Team
Date: 2026-10-19
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from keyshade.core.models import AbbreviationRange, Category, FileKind, Span
from keyshade.core.vocabulary import Vocabulary
from keyshade.scanning.lexer import is_comment_or_blank


@dataclass
class LineResult:
    """One classified line."""
    line_no: int                                        # 1-based line number in the document
    text: str                                           # Line content without terminator
    spans: List[Span] = field(default_factory=list)     # Ordered, non-overlapping fields
    abbreviation: Optional[AbbreviationRange] = None    # Collapsible part of the key blob

    @property
    def is_comment_or_blank(self) -> bool:
        return is_comment_or_blank(self.text)

    @property
    def has_key(self) -> bool:
        return any(s.category is Category.KEY_MATERIAL for s in self.spans)

    def first(self, category: Category) -> Optional[Span]:
        for span in self.spans:
            if span.category is category:
                return span
        return None


@dataclass
class ScanContext:
    """
    Maintains everything produced for a single document.
    Built by the HighlightPipeline; read by the engine and the formatter.
    """
    raw_text: str                                           # The input as given
    kind: FileKind                                          # Format the lines were read as
    vocabulary: Vocabulary                                  # Word lists used for matching
    lines: List[LineResult] = field(default_factory=list)

    @property
    def entries(self) -> List[LineResult]:
        return [r for r in self.lines if r.has_key]

    @property
    def unrecognized(self) -> List[LineResult]:
        """Non-comment lines where no key could be located."""
        return [r for r in self.lines if not r.is_comment_or_blank and not r.has_key]

    def key_type_counts(self) -> Counter:
        counts = Counter()
        for result in self.entries:
            span = result.first(Category.KEY_TYPE)
            counts[span.text(result.text)] += 1
        return counts
