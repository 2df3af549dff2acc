#!/usr/bin/env python3
"""
KEYSHADE LEXER - Word Sharder
-----------------------------
Shared scanning primitives for both key-file formats. A line is cut into
whitespace separated words (double quotes protect whitespace, a backslash
protects a quote), and small matchers then decide what each word is.

Author: KeyShade Team
Date: 2026-10-19
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from keyshade.core.models import Category, Span
from keyshade.core.vocabulary import Vocabulary

BASE64_RUN = re.compile(r'[A-Za-z0-9+/=]+')
KEY_BLOB_PREFIX = "AAAA"


@dataclass(frozen=True)
class Word:
    """A whitespace delimited run of a line, with its offsets."""
    start: int
    end: int
    text: str


def strip_terminator(line: str) -> str:
    """Removes a trailing LF / CRLF / CR."""
    return line.rstrip('\r\n')


def is_comment_or_blank(line: str) -> bool:
    stripped = line.lstrip()
    return not stripped or stripped.startswith('#')


def split_words(line: str) -> List[Word]:
    """
    Splits a line on unquoted spaces and tabs.
    Protects whitespace inside "..." so option values stay in one word.
    """
    words = []
    start = -1
    in_quote = escaped = False

    for i, char in enumerate(line):
        if escaped:
            escaped = False
            continue
        if char == '\\' and in_quote:
            escaped = True
            continue
        if char == '"':
            in_quote = not in_quote
        if char in ' \t' and not in_quote:
            if start != -1:
                words.append(Word(start, i, line[start:i]))
                start = -1
            continue
        if start == -1:
            start = i

    if start != -1:
        words.append(Word(start, len(line), line[start:]))
    return words


def split_on_commas(word: Word) -> List[Word]:
    """Splits a word on commas that are not inside double quotes."""
    parts = []
    part_start = 0
    in_quote = escaped = False
    text = word.text

    for i, char in enumerate(text):
        if escaped:
            escaped = False
            continue
        if char == '\\' and in_quote:
            escaped = True
            continue
        if char == '"':
            in_quote = not in_quote
        elif char == ',' and not in_quote:
            parts.append(Word(word.start + part_start, word.start + i, text[part_start:i]))
            part_start = i + 1

    parts.append(Word(word.start + part_start, word.end, text[part_start:]))
    return parts


def key_blob_length(word: Word) -> int:
    """
    Length of the base64 key blob at the start of a word, or 0.
    A blob always opens with AAAA (the big-endian length of the type name).
    """
    if not word.text.startswith(KEY_BLOB_PREFIX):
        return 0
    return BASE64_RUN.match(word.text).end()


def find_key(words: List[Word], vocabulary: Vocabulary, first: int = 0) -> Optional[Tuple[int, int]]:
    """
    Finds the first key-type word (at index >= first) directly followed by a
    key blob. Returns (index of the key-type word, end offset of the blob).
    """
    for i in range(first, len(words) - 1):
        if not vocabulary.is_key_type(words[i].text):
            continue
        blob_len = key_blob_length(words[i + 1])
        if blob_len:
            return i, words[i + 1].start + blob_len
    return None


def key_spans(line: str, words: List[Word], key_index: int, blob_end: int) -> List[Span]:
    """Key-type, key-material and (if anything follows) comment spans."""
    key_word = words[key_index]
    blob_word = words[key_index + 1]
    spans = [
        Span(key_word.start, key_word.end, Category.KEY_TYPE),
        Span(blob_word.start, blob_end, Category.KEY_MATERIAL),
    ]
    comment = comment_span(line, blob_end)
    if comment:
        spans.append(comment)
    return spans


def comment_span(line: str, after: int) -> Optional[Span]:
    """Everything after `after` up to end of line, minus surrounding whitespace."""
    end = len(line.rstrip())
    start = after
    while start < end and line[start] in ' \t':
        start += 1
    if start >= end:
        return None
    return Span(start, end, Category.COMMENT)
