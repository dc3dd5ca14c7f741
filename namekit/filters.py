#!/usr/bin/env python3
"""
Acceptability Filters
=====================
Predicates over a candidate name, grouped into an ordered pipeline.

Filters marked prefix_safe can only get worse as a name grows (a bad start
stays bad, a long consonant run stays long), so the harvester runs them on
the partial name after every step and restarts early. The rest need the
finished name.

Usage:
    pipeline = FilterPipeline([capitalized(), max_consonant_run(3)])
    ok, reason = pipeline.check("Vrsktan")   # (False, 'consonant_run')
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .settings import get_setting

CONSONANTS = 'bcdfghjklmnpqrstvwxz'


@dataclass(frozen=True)
class NameFilter:
    """A named acceptance test; the name doubles as the rejection reason."""
    name: str
    accepts: Callable[[str], bool]
    prefix_safe: bool = True

    def __call__(self, text: str) -> bool:
        return self.accepts(text)


def capitalized() -> NameFilter:
    """First symbol must be an uppercase letter A-Z."""
    return NameFilter(
        'not_capitalized',
        lambda text: bool(text) and text[0] in string.ascii_uppercase,
    )


def max_consonant_run(limit: int) -> NameFilter:
    """No more than limit consonants in a row."""
    if limit < 1:
        raise ValueError("max_consonant_run must be at least 1")
    pattern = re.compile(f'[{CONSONANTS}]{{{limit + 1},}}')
    return NameFilter('consonant_run', lambda text: not pattern.search(text.lower()))


def max_repeated_letter(limit: int) -> NameFilter:
    """No letter repeated more than limit times in a row (case-insensitive)."""
    if limit < 1:
        raise ValueError("max_repeated_letter must be at least 1")
    pattern = re.compile(r'([a-z])\1{%d,}' % limit)
    return NameFilter('repeated_letter', lambda text: not pattern.search(text.lower()))


def min_length(limit: int) -> NameFilter:
    return NameFilter('too_short', lambda text: len(text) >= limit, prefix_safe=False)


def max_length(limit: int) -> NameFilter:
    return NameFilter('too_long', lambda text: len(text) <= limit)


class FilterPipeline:
    """Ordered filters; the first failure is the rejection reason."""

    def __init__(self, filters: Iterable[NameFilter] = ()):
        self.filters: List[NameFilter] = list(filters)

    def add(self, name_filter: NameFilter) -> 'FilterPipeline':
        self.filters.append(name_filter)
        return self

    def check(self, text: str) -> Tuple[bool, Optional[str]]:
        """Run every filter on a finished name."""
        return self._run(text, self.filters)

    def check_prefix(self, text: str) -> Tuple[bool, Optional[str]]:
        """Run only the filters that are meaningful on a partial name."""
        return self._run(text, [f for f in self.filters if f.prefix_safe])

    @staticmethod
    def _run(text: str, filters: List[NameFilter]) -> Tuple[bool, Optional[str]]:
        for name_filter in filters:
            if not name_filter(text):
                return False, name_filter.name
        return True, None

    @classmethod
    def from_settings(cls, cfg: dict | None = None) -> 'FilterPipeline':
        """Build the pipeline from the filters section of app.yaml."""
        if cfg is None:
            cfg = get_setting("filters")
        if cfg is None:
            raise ValueError("filters must be set in app.yaml")

        pipeline = cls()
        if cfg.get("require_capital"):
            pipeline.add(capitalized())
        if cfg.get("max_consonant_run") is not None:
            pipeline.add(max_consonant_run(int(cfg["max_consonant_run"])))
        if cfg.get("max_repeated_letter") is not None:
            pipeline.add(max_repeated_letter(int(cfg["max_repeated_letter"])))
        if cfg.get("min_length") is not None:
            pipeline.add(min_length(int(cfg["min_length"])))
        if cfg.get("max_length") is not None:
            pipeline.add(max_length(int(cfg["max_length"])))
        return pipeline

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[NameFilter]:
        return iter(self.filters)

    def __repr__(self) -> str:
        return f"FilterPipeline({[f.name for f in self.filters]})"


__all__ = [
    'NameFilter',
    'FilterPipeline',
    'capitalized',
    'max_consonant_run',
    'max_repeated_letter',
    'min_length',
    'max_length',
]
