#!/usr/bin/env python3
"""
KEYSHADE ENGINE - The Inspector
-------------------------------
The InspectionEngine reads key files from disk, runs them through the
HighlightPipeline and turns the result into report dictionaries for the CLI.
It never writes to the files it inspects.

Author: KeyShade Team
Date: 2026-10-19
"""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from keyshade.core.models import FileKind
from keyshade.core.vocabulary import Vocabulary
from keyshade.scanning.pipeline import FILE_NAMES, HighlightPipeline, detect_kind

# Setup standardized logging
logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger("keyshade.engine")


class InspectionEngine:
    """
    Principal orchestrator for reading and classifying key files,
    with safety gates for recursion depth and unreadable input.
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None, abbreviate: bool = True):
        self.vocabulary = vocabulary or Vocabulary()
        self.pipeline = HighlightPipeline(self.vocabulary, abbreviate=abbreviate)

    def inspect_text(self, text: str, kind: Union[FileKind, str], label: str = "<text>") -> Dict[str, Any]:
        """Classifies already-loaded text and builds the report."""
        context = self.pipeline.run(text, kind)
        entries = context.entries
        comments = sum(1 for r in context.lines if r.text.strip().startswith('#'))

        if not text.strip():
            status = "EMPTY"
        elif not entries:
            status = "NO_ENTRIES"
        else:
            status = "OK"

        return {
            "file_path": label,
            "kind": context.kind.value,
            "status": status,
            "success": True,
            "total_lines": len(context.lines),
            "entries": len(entries),
            "comments": comments,
            "unrecognized": [r.line_no for r in context.unrecognized],
            "key_types": dict(context.key_type_counts()),
            "context": context,
            "timestamp": time.time(),
        }

    def inspect_file(self, path: Union[str, Path], kind: Optional[Union[FileKind, str]] = None) -> Dict[str, Any]:
        """
        Performs a full read and classification of a single file.
        The kind is taken from the file name when not given.
        """
        full_path = Path(path)

        if not full_path.is_file():
            return self._file_error(str(path), "FILE_NOT_FOUND", f"Path missing: {full_path}")

        kind = FileKind(kind) if kind else detect_kind(full_path)
        if kind is None:
            return self._file_error(str(path), "UNKNOWN_KIND",
                                    f"Cannot tell the format of '{full_path.name}'; pass a kind explicitly")

        try:
            # BOM-aware read; line endings are left for split_records
            with open(full_path, 'r', encoding='utf-8-sig', newline='') as f:
                raw_text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unable to read {full_path}: {str(e)}")
            return self._file_error(str(path), "READ_ERROR", str(e))

        logger.debug(f"Inspecting {full_path} as {kind.value}")
        report = self.inspect_text(raw_text, kind, label=str(path))
        if report["unrecognized"]:
            logger.debug(f"{full_path}: no key found on lines {report['unrecognized']}")
        return report

    def discover_files(self, root: Union[str, Path], max_depth: int = 10) -> List[Path]:
        """Finds key files by name below root. Symlinks are skipped to avoid loops."""
        root = Path(root)
        try:
            max_depth = int(max_depth)
        except (ValueError, TypeError):
            logger.warning(f"Invalid max_depth '{max_depth}'. Falling back to default: 10")
            max_depth = 10

        found = []
        for candidate in root.rglob("*"):
            if candidate.name not in FILE_NAMES:
                continue
            if candidate.is_symlink() or not candidate.is_file():
                continue
            if len(candidate.relative_to(root).parts) > max_depth:
                continue
            found.append(candidate)
        return sorted(found)

    def scan_directory(self, root: Union[str, Path], max_depth: int = 10,
                       progress_callback: Optional[Callable[[int, int], None]] = None) -> List[Dict[str, Any]]:
        """Recursively discovers and inspects every key file below root."""
        files = self.discover_files(root, max_depth=max_depth)
        total = len(files)
        reports = []

        for processed, file_path in enumerate(files, 1):
            reports.append(self.inspect_file(file_path))
            if progress_callback:
                progress_callback(processed, total)

        logger.info(f"Scanned {total} key files under {root}")
        return reports

    def generate_summary(self, reports: List[Dict[str, Any]]) -> Dict[str, Any]:
        if not reports:
            return {
                "total_files": 0, "successful": 0, "entries": 0,
                "unrecognized_lines": 0, "system_errors": 0, "key_types": {}
            }

        key_types: Dict[str, int] = {}
        for r in reports:
            for name, count in r.get("key_types", {}).items():
                key_types[name] = key_types.get(name, 0) + count

        return {
            "total_files": len(reports),
            "successful": sum(1 for r in reports if r.get("success", False)),
            "entries": sum(r.get("entries", 0) for r in reports),
            "unrecognized_lines": sum(len(r.get("unrecognized", [])) for r in reports),
            "system_errors": sum(1 for r in reports if not r.get("success", False)),
            "key_types": key_types,
            "summary_timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
        }

    def _file_error(self, path: str, status: str, error: str) -> Dict[str, Any]:
        return {
            "file_path": path, "status": status, "error": error,
            "success": False, "kind": "unknown", "entries": 0,
            "unrecognized": [], "key_types": {},
        }
