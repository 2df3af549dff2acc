#!/usr/bin/env python3
"""
KEYSHADE KNOWN_HOSTS SCANNER
----------------------------
Classifies one known_hosts line:

    [@marker] host[,host...] key-type base64-key [comment]

A host is a plain pattern (example.com, 10.0.0.*, [git.local]:2222) or a
hashed entry (|1|salt|hash). Hashed entries are opaque and never decoded.
A leading '!' negates a pattern and is highlighted on its own.

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


class KnownHostsScanner:
    """Stateless classifier for known_hosts lines."""

    HOST_PATTERN = re.compile(r'[A-Za-z0-9.:?*\-\[\]]+')

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or Vocabulary()

    def classify(self, line: str) -> List[Span]:
        line = strip_terminator(line)
        if is_comment_or_blank(line):
            return []

        words = split_words(line)
        spans = []
        first_host = 0

        if words[0].text.startswith('@'):
            name = words[0].text[1:]
            if self.vocabulary.is_marker(name):
                spans.append(Span(words[0].start, words[0].end, Category.MARKER, detail=name))
            first_host = 1

        if first_host >= len(words):
            return spans

        # At least one host word must sit between the marker and the key type
        found = find_key(words, self.vocabulary, first=first_host + 1)
        if found:
            key_index, blob_end = found
            host_words = words[first_host:key_index]
        else:
            host_words = words[first_host:first_host + 1]

        for word in host_words:
            spans.extend(self._host_spans(word))

        if found:
            spans.extend(key_spans(line, words, key_index, blob_end))
        return spans

    def _host_spans(self, word: Word) -> List[Span]:
        spans = []
        for entry in split_on_commas(word):
            start, text = entry.start, entry.text
            if text.startswith('!'):
                spans.append(Span(start, start + 1, Category.NEGATION))
                start, text = start + 1, text[1:]
            if not text:
                continue
            if text.startswith('|'):
                spans.append(Span(start, entry.end, Category.HASHED_HOSTNAME))
            elif self.HOST_PATTERN.fullmatch(text):
                spans.append(Span(start, entry.end, Category.HOSTNAME))
        return spans
