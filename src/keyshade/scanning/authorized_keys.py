#!/usr/bin/env python3
"""
KEYSHADE AUTHORIZED_KEYS SCANNER
--------------------------------
Classifies one authorized_keys line:

    [options] key-type base64-key [comment]

Options are comma separated, optionally with quoted values
(command="echo hi",no-pty). Only option names from the vocabulary are
highlighted; their values are plain text.

Author: KeyShade Team
Date: 2026-10-19
"""

import re
from typing import List, Optional

from keyshade.core.models import Category, Span
from keyshade.core.vocabulary import Vocabulary
from keyshade.scanning.lexer import (
    Word, find_key, is_comment_or_blank, key_spans, split_on_commas,
    split_words, strip_terminator,
)


class AuthorizedKeysScanner:
    """Stateless classifier for authorized_keys lines."""

    OPTION_NAME = re.compile(r'[A-Za-z0-9_-]+')

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or Vocabulary()

    def classify(self, line: str) -> List[Span]:
        line = strip_terminator(line)
        if is_comment_or_blank(line):
            return []

        words = split_words(line)
        found = find_key(words, self.vocabulary)
        if not found:
            # Nothing to anchor the options against
            return []

        key_index, blob_end = found
        spans = []
        for word in words[:key_index]:
            spans.extend(self._option_spans(word))
        spans.extend(key_spans(line, words, key_index, blob_end))
        return spans

    def _option_spans(self, word: Word) -> List[Span]:
        spans = []
        for item in split_on_commas(word):
            match = self.OPTION_NAME.match(item.text)
            if not match:
                continue
            rest = item.text[match.end():]
            if rest and not rest.startswith('='):
                continue
            if self.vocabulary.is_option(match.group()):
                spans.append(Span(item.start, item.start + match.end(), Category.KEYWORD))
        return spans
