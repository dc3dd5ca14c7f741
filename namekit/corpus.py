#!/usr/bin/env python3
"""
Training corpus loading.

One name per line, UTF-8. Blank lines (including the usual trailing one)
are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .sampler import WeightedSampler
from .settings import data_path, get_setting, require_setting, user_path

logger = logging.getLogger(__name__)


def load_names(path: Path | str) -> List[str]:
    """Read names from a text file, one per line."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Training corpus not found: {path}")

    names = []
    for line in path.read_text(encoding='utf-8').splitlines():
        name = line.strip()
        if name:
            names.append(name)
    return names


def to_sequences(names: Iterable[str]) -> List[List[str]]:
    """Split each name into its characters."""
    return [list(name) for name in names]


@dataclass
class Corpus:
    """Training names plus the set used to reject regenerated ones."""
    names: List[str]
    known: Set[str] = field(default_factory=set)
    path: Optional[Path] = None

    def __post_init__(self):
        if not self.known:
            self.known = set(self.names)

    @classmethod
    def from_file(cls,
                  path: Path | str | None = None,
                  shuffle: bool | None = None,
                  sampler: WeightedSampler | None = None) -> 'Corpus':
        """
        Load a corpus, optionally shuffling the training order.

        Args:
            path: Corpus file, relative to the cwd (default: corpus.path in
                app.yaml, relative to the package)
            shuffle: Shuffle names before training (default: corpus.shuffle)
            sampler: Random source for the shuffle; pass the model's sampler
                so a seeded run is reproducible end to end
        """
        if path is None:
            resolved = data_path(require_setting("corpus.path"))
        else:
            resolved = user_path(path)
        if shuffle is None:
            shuffle = bool(get_setting("corpus.shuffle", False))

        names = load_names(resolved)
        if shuffle:
            (sampler or WeightedSampler()).shuffle(names)

        logger.debug("Loaded %d names from %s", len(names), resolved)
        return cls(names=names, path=resolved)

    def sequences(self) -> List[List[str]]:
        return to_sequences(self.names)

    def __len__(self) -> int:
        return len(self.names)


__all__ = ['Corpus', 'load_names', 'to_sequences']
