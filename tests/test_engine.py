#!/usr/bin/env python3
"""
KEYSHADE ENGINE SUITE
---------------------
File-level behaviour of the InspectionEngine:
1. Reports for good, empty and junk-only files
2. Missing / undecodable / unnamed files
3. Directory discovery with depth limit and symlink skipping

Author: KeyShade Team
Date: 2026-10-19
"""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from keyshade.core.engine import InspectionEngine
from keyshade.core.models import FileKind

ED_KEY = "AAAAC3NzaC1lZDI1NTE5AAAAIOMqqnkVzrm0SdG6UOoqKLsabgH5C9okWi0dh2l9GKJl"
RSA_KEY = "AAAAB3NzaC1yc2EAAAADAQABAAABgQDexample=="


@pytest.fixture
def engine():
    return InspectionEngine()


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_authorized_keys_report(tmp_path, engine):
    path = write(tmp_path / "authorized_keys", (
        "# team keys\n"
        f"ssh-ed25519 {ED_KEY} alice\n"
        f"no-pty ssh-rsa {RSA_KEY} bob\n"
        f"ssh-ed25519 {ED_KEY} carol\n"
        "garbage\n"
    ))

    report = engine.inspect_file(path)

    assert report["success"] is True
    assert report["status"] == "OK"
    assert report["kind"] == "authorized-keys"
    assert report["entries"] == 3
    assert report["comments"] == 1
    assert report["unrecognized"] == [5]
    assert report["key_types"] == {"ssh-ed25519": 2, "ssh-rsa": 1}


def test_known_hosts_detected_by_name(tmp_path, engine):
    path = write(tmp_path / "known_hosts", f"github.com ssh-ed25519 {ED_KEY}\n")
    report = engine.inspect_file(path)
    assert report["kind"] == "known-hosts"
    assert report["entries"] == 1


def test_bom_is_ignored(tmp_path, engine):
    path = tmp_path / "authorized_keys"
    path.write_bytes(b"\xef\xbb\xbf" + f"ssh-ed25519 {ED_KEY}\n".encode())
    assert engine.inspect_file(path)["entries"] == 1


def test_empty_and_comment_only_files(tmp_path, engine):
    empty = write(tmp_path / "a" / "authorized_keys", "")
    comments = write(tmp_path / "b" / "authorized_keys", "# nothing yet\n")

    assert engine.inspect_file(empty)["status"] == "EMPTY"
    assert engine.inspect_file(comments)["status"] == "NO_ENTRIES"


def test_missing_file(tmp_path, engine):
    report = engine.inspect_file(tmp_path / "authorized_keys")
    assert report["success"] is False
    assert report["status"] == "FILE_NOT_FOUND"


def test_unnamed_file_needs_explicit_kind(tmp_path, engine):
    path = write(tmp_path / "keys.txt", f"ssh-ed25519 {ED_KEY}\n")

    assert engine.inspect_file(path)["status"] == "UNKNOWN_KIND"
    report = engine.inspect_file(path, kind=FileKind.AUTHORIZED_KEYS)
    assert report["status"] == "OK"
    assert engine.inspect_file(path, kind="known-hosts")["kind"] == "known-hosts"


def test_undecodable_bytes(tmp_path, engine):
    path = tmp_path / "known_hosts"
    path.write_bytes(b"\xff\xfe\xfa binary")
    report = engine.inspect_file(path)
    assert report["success"] is False
    assert report["status"] == "READ_ERROR"


def test_scan_directory_respects_depth_and_symlinks(tmp_path, engine):
    write(tmp_path / "home" / "alice" / ".ssh" / "authorized_keys", f"ssh-ed25519 {ED_KEY} a\n")
    write(tmp_path / "home" / "bob" / ".ssh" / "known_hosts", f"* ssh-ed25519 {ED_KEY}\n")
    write(tmp_path / "home" / "bob" / ".ssh" / "config", "Host *\n")
    deep = tmp_path / "a" / "b" / "c" / "d" / "e" / "known_hosts"
    write(deep, f"host ssh-ed25519 {ED_KEY}\n")
    if os.name != 'nt':
        os.symlink(tmp_path / "home" / "alice" / ".ssh" / "authorized_keys",
                   tmp_path / "home" / "authorized_keys")

    reports = engine.scan_directory(tmp_path, max_depth=4)

    names = sorted(os.path.relpath(r["file_path"], tmp_path) for r in reports)
    assert names == [
        os.path.join("home", "alice", ".ssh", "authorized_keys"),
        os.path.join("home", "bob", ".ssh", "known_hosts"),
    ]


def test_scan_directory_progress_callback(tmp_path, engine):
    write(tmp_path / "x" / "authorized_keys", f"ssh-ed25519 {ED_KEY}\n")
    write(tmp_path / "y" / "known_hosts", f"h ssh-ed25519 {ED_KEY}\n")
    seen = []

    engine.scan_directory(tmp_path, progress_callback=lambda done, total: seen.append((done, total)))

    assert seen == [(1, 2), (2, 2)]


def test_invalid_depth_falls_back(tmp_path, engine):
    write(tmp_path / "authorized_keys", f"ssh-ed25519 {ED_KEY}\n")
    assert len(engine.discover_files(tmp_path, max_depth="deep")) == 1


def test_generate_summary(tmp_path, engine):
    good = write(tmp_path / "authorized_keys", f"ssh-ed25519 {ED_KEY}\nnope\n")
    reports = [engine.inspect_file(good), engine.inspect_file(tmp_path / "missing" / "known_hosts")]

    summary = engine.generate_summary(reports)

    assert summary["total_files"] == 2
    assert summary["successful"] == 1
    assert summary["system_errors"] == 1
    assert summary["entries"] == 1
    assert summary["unrecognized_lines"] == 1
    assert summary["key_types"] == {"ssh-ed25519": 1}
    assert engine.generate_summary([])["total_files"] == 0
