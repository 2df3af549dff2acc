#!/usr/bin/env python3
"""
KEYSHADE VOCABULARY SUITE
-------------------------
YAML vocabulary files: merging, replacing, bundled presets and the
failure paths.

Author: KeyShade Team
Date: 2026-10-19
"""

import logging
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest

from keyshade.core.vocabulary import (
    DEFAULT_KEY_TYPES, Vocabulary, available_presets, load_preset, load_vocabulary,
)


def test_defaults():
    vocab = Vocabulary()
    assert vocab.key_types == frozenset(DEFAULT_KEY_TYPES)
    assert vocab.is_key_type("ssh-ed25519")
    assert not vocab.is_key_type("SSH-ED25519")
    assert vocab.is_option("no-x11-forwarding")
    assert vocab.is_marker("revoked")
    assert not vocab.is_marker("@revoked")


def test_extend_merges_with_defaults(tmp_path):
    path = tmp_path / "vocab.yaml"
    path.write_text("key_types:\n  - ssh-foo\noption_keywords:\n  - restrict\n")

    vocab = load_vocabulary(path)

    assert vocab.is_key_type("ssh-foo")
    assert vocab.is_key_type("ssh-rsa")
    assert vocab.is_option("restrict")
    assert vocab.is_option("no-pty")


def test_extend_false_replaces_only_the_lists_given(tmp_path):
    path = tmp_path / "vocab.yaml"
    path.write_text("extend: false\nkey_types: [ssh-ed25519]\n")

    vocab = load_vocabulary(path)

    assert vocab.key_types == frozenset({"ssh-ed25519"})
    assert vocab.is_option("no-pty")


def test_empty_file_is_the_base(tmp_path):
    path = tmp_path / "vocab.yaml"
    path.write_text("")
    assert load_vocabulary(path) == Vocabulary()


@pytest.mark.parametrize("content", [
    "key_types: ssh-foo\n",
    "key_types:\n  - 42\n",
    "- just\n- a list\n",
    "key_types: [unclosed\n",
    "extend: no\n",
    "extend: 1\n",
    "extend: 'false'\n",
])
def test_malformed_files_raise_runtime_error(tmp_path, content):
    path = tmp_path / "vocab.yaml"
    path.write_text(content)
    with pytest.raises(RuntimeError, match="Failed to load vocabulary"):
        load_vocabulary(path)


def test_missing_file_raises_runtime_error(tmp_path):
    with pytest.raises(RuntimeError, match="Failed to load vocabulary"):
        load_vocabulary(tmp_path / "absent.yaml")


def test_bundled_openssh_preset():
    assert "openssh" in available_presets()
    vocab = load_preset("openssh")
    assert vocab.is_key_type("sk-ssh-ed25519@openssh.com")
    assert vocab.is_key_type("ssh-rsa")
    assert vocab.is_option("restrict")


def test_unknown_preset(caplog):
    with caplog.at_level(logging.ERROR, logger="keyshade.vocabulary"):
        with pytest.raises(RuntimeError, match="unknown preset"):
            load_preset("putty")
    assert any("putty" in r.getMessage() for r in caplog.records)


def test_extend_false_keeps_defaults_when_lists_absent(tmp_path):
    path = tmp_path / "vocab.yaml"
    path.write_text("extend: false\n")
    assert load_vocabulary(path) == Vocabulary()


def test_option_case_folding_survives_extension():
    vocab = Vocabulary().extended(option_keywords=["Restrict", "verify-required"])

    assert vocab.is_option("restrict")
    assert vocab.is_option("RESTRICT")
    assert vocab.is_option("Verify-Required")
    assert vocab.is_option("NO-PTY")
    assert not vocab.is_option("no-such-option")


def test_folded_options_do_not_affect_equality():
    assert Vocabulary(option_keywords=frozenset({"No-Pty"})) != Vocabulary(option_keywords=frozenset({"no-pty"}))
    assert Vocabulary() == Vocabulary()
    assert hash(Vocabulary()) == hash(Vocabulary())
