#!/usr/bin/env python3
"""
KEYSHADE VOCABULARY - Configurable Word Lists
---------------------------------------------
Key types, authorized_keys option names and known_hosts markers are closed
sets for matching purposes, but they are data, not code. New key types can be
added from a YAML file without touching the scanners.

Author: KeyShade Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Union

from ruamel.yaml import YAML, YAMLError

logger = logging.getLogger("keyshade.vocabulary")

DEFAULT_KEY_TYPES = (
    "ecdsa-sha2-nistp256",
    "ecdsa-sha2-nistp384",
    "ecdsa-sha2-nistp521",
    "ssh-ed25519",
    "ssh-dss",
    "ssh-rsa",
)

DEFAULT_OPTION_KEYWORDS = (
    "cert-authority",
    "command",
    "environment",
    "from",
    "no-agent-forwarding",
    "no-port-forwarding",
    "no-pty",
    "no-user-rc",
    "no-X11-forwarding",
    "permitopen",
    "principals",
    "tunnel",
)

DEFAULT_MARKERS = ("cert-authority", "revoked")


@dataclass(frozen=True)
class Vocabulary:
    """
    The word lists the scanners match against.

    Option keywords are compared case-insensitively (sshd does the same),
    key types and markers are exact.
    """
    key_types: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_KEY_TYPES))
    option_keywords: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_OPTION_KEYWORDS))
    markers: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_MARKERS))
    # Lower-cased option names, derived once from option_keywords
    folded_options: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "folded_options", frozenset(o.lower() for o in self.option_keywords))

    def is_key_type(self, word: str) -> bool:
        return word in self.key_types

    def is_option(self, name: str) -> bool:
        return name.lower() in self.folded_options

    def is_marker(self, name: str) -> bool:
        return name in self.markers

    def extended(self, key_types: Iterable[str] = (), option_keywords: Iterable[str] = ()) -> "Vocabulary":
        """Returns a copy with extra words merged in."""
        return Vocabulary(
            key_types=self.key_types | frozenset(key_types),
            option_keywords=self.option_keywords | frozenset(option_keywords),
            markers=self.markers,
        )


def _string_list(data: dict, key: str, source: Path) -> list:
    value = data.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' in {source} must be a list of strings")
    return [v.strip() for v in value if v.strip()]


def load_vocabulary(path: Union[str, Path], base: Vocabulary = None) -> Vocabulary:
    """
    Loads a vocabulary file.

    The document may carry 'key_types' and 'option_keywords' lists and an
    'extend' flag. With extend (the default) the lists are merged into
    `base`; without it they replace the corresponding defaults.
    """
    source = Path(path)
    base = base or Vocabulary()
    yaml = YAML(typ='safe')

    try:
        with open(source, 'r', encoding='utf-8') as f:
            data = yaml.load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{source} must contain a mapping at the top level")
        key_types = _string_list(data, "key_types", source)
        options = _string_list(data, "option_keywords", source)
        extend = data.get("extend", True)
        if not isinstance(extend, bool):
            raise ValueError(f"'extend' in {source} must be true or false")
    except (OSError, YAMLError, ValueError) as e:
        logger.error(f"Unable to load vocabulary from {source}")
        raise RuntimeError(f"Failed to load vocabulary: {str(e)}")

    if extend:
        vocab = base.extended(key_types, options)
    else:
        vocab = Vocabulary(
            key_types=frozenset(key_types) or base.key_types,
            option_keywords=frozenset(options) or base.option_keywords,
            markers=base.markers,
        )

    logger.debug(f"Loaded vocabulary from {source}: "
                 f"{len(vocab.key_types)} key types, {len(vocab.option_keywords)} options")
    return vocab


def _data_dir() -> Path:
    return Path(__file__).resolve().parent.parent / "data"


def available_presets() -> list:
    return sorted(p.stem for p in _data_dir().glob("*.yaml"))


def load_preset(name: str) -> Vocabulary:
    """Loads one of the vocabulary files bundled under keyshade/data/."""
    candidate = _data_dir() / f"{name}.yaml"
    if not candidate.exists():
        logger.error(f"Unknown vocabulary preset '{name}'")
        raise RuntimeError(f"Failed to load vocabulary: unknown preset '{name}' "
                           f"(available: {', '.join(available_presets()) or 'none'})")
    return load_vocabulary(candidate)
