#!/usr/bin/env python3
"""
Sequence
========
Append-only list of symbols produced (or continued) by a SequenceModel.

The caller owns every Sequence; the model only appends to the one it is
handed and never keeps a reference to it.
"""

from typing import Any, Iterable, Iterator, List, Optional


class Sequence:
    """Ordered, append-only run of symbols."""

    __slots__ = ('_symbols',)

    def __init__(self, symbols: Optional[Iterable[Any]] = None):
        self._symbols: List[Any] = list(symbols) if symbols is not None else []

    def append(self, symbol: Any) -> None:
        self._symbols.append(symbol)

    def __len__(self) -> int:
        return len(self._symbols)

    def __getitem__(self, index):
        # Out-of-range access raises IndexError; callers are expected to
        # respect len().
        return self._symbols[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._symbols)

    def __eq__(self, other) -> bool:
        if isinstance(other, Sequence):
            return self._symbols == other._symbols
        if isinstance(other, (list, tuple)):
            return self._symbols == list(other)
        return NotImplemented

    __hash__ = None

    def to_list(self) -> List[Any]:
        return list(self._symbols)

    def __str__(self) -> str:
        return ''.join(str(s) for s in self._symbols)

    def __repr__(self) -> str:
        return f"Sequence({self._symbols!r})"


__all__ = ['Sequence']
