#!/usr/bin/env python3
"""
KEYSHADE HIGHLIGHT PIPELINE
---------------------------
Central coordinator for a display pass. Each line is classified by the
scanner matching the document's format, then the key blob (if any) is
handed to the abbreviator. Ranges are computed fresh on every run; nothing
is cached between documents or between runs.

Author: KeyShade Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from keyshade.core.models import AbbreviationRange, Category, FileKind, Span
from keyshade.core.vocabulary import Vocabulary
from keyshade.scanning.abbreviator import KeyAbbreviator
from keyshade.scanning.authorized_keys import AuthorizedKeysScanner
from keyshade.scanning.context import LineResult, ScanContext
from keyshade.scanning.known_hosts import KnownHostsScanner

logger = logging.getLogger("keyshade.pipeline")

FILE_NAMES = {
    "authorized_keys": FileKind.AUTHORIZED_KEYS,
    "authorized_keys2": FileKind.AUTHORIZED_KEYS,
    "known_hosts": FileKind.KNOWN_HOSTS,
    "known_hosts2": FileKind.KNOWN_HOSTS,
    "ssh_known_hosts": FileKind.KNOWN_HOSTS,
    "ssh_known_hosts2": FileKind.KNOWN_HOSTS,
}


def split_records(text: str) -> List[str]:
    """
    Cuts a document into records the way sshd reads it: on LF only.
    Form feeds and other Unicode line breaks stay inside the record.
    """
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def detect_kind(path: Union[str, Path]) -> Optional[FileKind]:
    """Guesses the format from the file name, or None."""
    return FILE_NAMES.get(Path(path).name)


class HighlightPipeline:
    """
    The Orchestrator: classification first, abbreviation second,
    one line at a time.
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None, abbreviate: bool = True):
        self.vocabulary = vocabulary or Vocabulary()
        self.abbreviate = abbreviate
        self.scanners = {
            FileKind.AUTHORIZED_KEYS: AuthorizedKeysScanner(self.vocabulary),
            FileKind.KNOWN_HOSTS: KnownHostsScanner(self.vocabulary),
        }
        self.abbreviator = KeyAbbreviator()

    def classify_line(self, line: str, kind: Union[FileKind, str]) -> List[Span]:
        return self.scanners[FileKind(kind)].classify(line)

    def abbreviation_for(self, line: str, spans: List[Span]) -> Optional[AbbreviationRange]:
        for span in spans:
            if span.category is Category.KEY_MATERIAL:
                return self.abbreviator.abbreviate(line, span)
        return None

    def run(self, text: str, kind: Union[FileKind, str]) -> ScanContext:
        kind = FileKind(kind)
        context = ScanContext(raw_text=text, kind=kind, vocabulary=self.vocabulary)

        # A BOM would otherwise glue itself to the first field
        for i, line in enumerate(split_records(text.lstrip('\ufeff')), 1):
            spans = self.classify_line(line, kind)
            abbreviation = self.abbreviation_for(line, spans) if self.abbreviate else None
            context.lines.append(LineResult(
                line_no=i,
                text=line,
                spans=spans,
                abbreviation=abbreviation,
            ))

        logger.debug(f"Classified {len(context.lines)} lines as {kind.value}: "
                     f"{len(context.entries)} entries")
        return context


def classify_line(line: str, kind: Union[FileKind, str], vocabulary: Optional[Vocabulary] = None) -> List[Span]:
    """Convenience wrapper: classify a single line with a throwaway pipeline."""
    return HighlightPipeline(vocabulary).classify_line(line, kind)
