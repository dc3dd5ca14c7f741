#!/usr/bin/env python3
"""
Finite-Context Sequence Model
=============================
Learns P(next symbol | preceding symbols) from a corpus of names and samples
new names from it.

Key features:
- Bounded order k (default 3) with wraparound, so the tree never grows past
  depth k while generated names can be any length
- Unbounded prefix-trie configuration (order=None)
- Generation from scratch, from a seed symbol, or continuing a prefix
- Single-step advancement for callers that filter names while they grow

Theory:
-------
Training builds a prefix tree keyed by symbol. A node at depth d < k stands
for "the name started with these d symbols". Its transitions point to its
own children, weighted by how often each symbol followed, plus the END
sentinel if names ended there.

A node at depth k is the order boundary. Rather than growing deeper, its
transitions point at the depth-k node reached from the root by its last
k-1 symbols plus the next symbol. Nodes with the same trailing context
share one subtree, which is what makes the model order-k Markov.

Once all names are ingested the counts are rescaled to percentages that sum
to 100 at every node.
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .sampler import WeightedSampler
from .sequence import Sequence

logger = logging.getLogger(__name__)

DEFAULT_ORDER = 3


# =============================================================================
# CONTEXT NODE
# =============================================================================

class ContextNode:
    """One position in the prefix tree."""

    __slots__ = ('symbol', 'depth', 'parent', 'children', 'transitions')

    def __init__(self, symbol: Any = None, depth: int = 0,
                 parent: Optional['ContextNode'] = None):
        self.symbol = symbol
        self.depth = depth
        self.parent = parent  # navigational only; children own the tree
        self.children: Dict[Any, 'ContextNode'] = {}
        # Keyed by node identity: owned children, wraparound targets or END.
        self.transitions: Dict['ContextNode', float] = {}

    def get_child(self, symbol: Any) -> Optional['ContextNode']:
        return self.children.get(symbol)

    def add_child(self, symbol: Any) -> 'ContextNode':
        """Create a child for symbol without touching transition weights."""
        child = ContextNode(symbol, self.depth + 1, self)
        self.children[symbol] = child
        return child

    def count(self, target: 'ContextNode', amount: float = 1.0) -> None:
        """Add to the raw transition count towards target."""
        self.transitions[target] = self.transitions.get(target, 0.0) + amount

    def get_next(self, sampler: WeightedSampler) -> Optional['ContextNode']:
        """Draw a transition target, or None if there are no transitions."""
        if not self.transitions:
            return None
        return sampler.choose(self.transitions.items())

    def calculate_probabilities(self) -> None:
        """Rescale raw counts to percentages, for this node and everything below."""
        stack = [self]
        while stack:
            node = stack.pop()
            total = sum(node.transitions.values())
            if total > 0:
                for target in node.transitions:
                    node.transitions[target] = 100.0 * node.transitions[target] / total
            stack.extend(node.children.values())

    def train(self, batch: Iterable[Iterable[Any]]) -> None:
        """
        Grow an unbounded prefix trie below this node.

        Non-empty sequences are grouped by first symbol. Each distinct first
        symbol gets one child, weighted by the share of sequences starting
        with it, and the child is trained on the tails. Empty sequences add
        nothing: there is no END sentinel in this configuration.
        """
        pending = [(self, [list(s) for s in batch])]
        while pending:
            node, sequences = pending.pop()
            counts = Counter()
            tails = defaultdict(list)
            for seq in sequences:
                if not seq:
                    continue
                counts[seq[0]] += 1
                tails[seq[0]].append(seq[1:])

            total = sum(counts.values())
            for symbol in sorted(counts):
                child = node.add_child(symbol)
                node.transitions[child] = 100.0 * counts[symbol] / total
                pending.append((child, tails[symbol]))

    def path(self) -> Tuple[Any, ...]:
        """Symbols from the root down to this node."""
        symbols = []
        node = self
        while node is not None and node.parent is not None:
            symbols.append(node.symbol)
            node = node.parent
        return tuple(reversed(symbols))

    def iter_nodes(self) -> Iterator['ContextNode']:
        """Depth-first walk over this node and every node it owns."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children.values())))

    def __repr__(self) -> str:
        if self is END:
            return "<END>"
        return f"ContextNode({''.join(map(str, self.path()))!r}, depth={self.depth})"


# Shared "sequence ends here" marker. Never has children.
END = ContextNode(depth=-1)


# =============================================================================
# SEQUENCE MODEL
# =============================================================================

class SequenceModel:
    """
    Trains on a corpus of symbol sequences and generates new ones.

    Usage:
        model = SequenceModel(order=2, seed=7)
        model.train(["Ariel", "Io", "Europa"])
        name = model.generate()          # from scratch
        name = model.generate("E")       # from a seed symbol
        name = model.generate("Eur")     # continuing a prefix

        seq = Sequence()
        model.advance_sequence(seq)      # one symbol at a time
    """

    def __init__(self, order: Optional[int] = DEFAULT_ORDER, seed: Optional[int] = None):
        """
        Args:
            order: Context length k, clamped to >= 1. None selects the
                unbounded prefix trie, which has no END sentinel and stops
                generating only when it runs off the tree.
            seed: Seed for this model's sampler (fresh entropy if None)
        """
        if order is not None:
            if isinstance(order, bool) or not isinstance(order, int):
                raise TypeError(f"order must be an int or None, got {order!r}")
            order = max(order, 1)
        self.order = order
        self.sampler = WeightedSampler(seed)
        self.root = ContextNode()

    @property
    def bounded(self) -> bool:
        return self.order is not None

    def reseed(self, seed: int) -> None:
        self.sampler.reseed(seed)

    # -------------------------------------------------------------------------
    # Training
    # -------------------------------------------------------------------------

    def train(self, corpus: Iterable[Iterable[Any]]) -> None:
        """Discard any previous tree and rebuild it from the whole corpus."""
        sequences = [list(s) for s in corpus]
        self.root = ContextNode()

        if self.order is None:
            self.root.train(sequences)
        else:
            for seq in sequences:
                self._ingest(seq)
            self.root.calculate_probabilities()

        logger.debug(
            "Trained order=%s model on %d sequences (%d nodes)",
            self.order, len(sequences), self.node_count(),
        )

    def _ingest(self, seq: List[Any]) -> None:
        current = self.root
        for symbol in seq:
            if current.depth < self.order:
                target = current.get_child(symbol)
                if target is None:
                    target = current.add_child(symbol)
            else:
                # Order boundary: wrap to the node for the trailing k-1
                # symbols plus this one.
                target = self._descend(current.path()[1:] + (symbol,))
            current.count(target)
            current = target
        current.count(END)

    def _descend(self, symbols: Tuple[Any, ...]) -> ContextNode:
        """Walk from the root along symbols, creating missing nodes."""
        node = self.root
        for symbol in symbols:
            child = node.get_child(symbol)
            if child is None:
                child = node.add_child(symbol)
            node = child
        return node

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self, start: Any = None) -> Sequence:
        """
        Generate one sequence.

        Args:
            start: None to start from scratch; a single symbol (including a
                one-character string) to seed the first symbol; a Sequence,
                list, tuple or longer string to continue a prefix.
        """
        if start is None:
            return self._walk(self.root.get_next(self.sampler), Sequence())
        if self._is_prefix(start):
            return self.generate_from_prefix(start)
        return self.generate_from_symbol(start)

    def generate_from_symbol(self, seed: Any) -> Sequence:
        """Start with seed; an unseen start symbol yields an empty Sequence."""
        return self._walk(self.root.get_child(seed), Sequence())

    def generate_from_prefix(self, partial: Iterable[Any]) -> Sequence:
        """
        Replay partial from the root and carry on from where it ends.

        Every symbol of partial is copied into the result. If the replay
        leaves the tree, nothing more is generated.
        """
        sequence = Sequence()
        node = self.root
        for symbol in partial:
            if node is not None:
                node = node.get_child(symbol)
            sequence.append(symbol)

        if node is None:
            return sequence
        return self._walk(node.get_next(self.sampler), sequence)

    def advance_sequence(self, sequence) -> None:
        """
        Append one symbol to sequence in place.

        Only the trailing k symbols are used as context. The sequence is left
        unchanged when the model draws END or the context is not in the tree;
        callers detect both by comparing len() before and after.
        """
        start = 0 if self.order is None else max(0, len(sequence) - self.order)

        node = self.root
        for index in range(start, len(sequence)):
            node = node.get_child(sequence[index])
            if node is None:
                return

        target = node.get_next(self.sampler)
        if target is not None and target is not END:
            sequence.append(target.symbol)

    def _walk(self, node: Optional[ContextNode], sequence: Sequence) -> Sequence:
        while node is not None and node is not END:
            sequence.append(node.symbol)
            node = node.get_next(self.sampler)
        return sequence

    @staticmethod
    def _is_prefix(start: Any) -> bool:
        if isinstance(start, (Sequence, list, tuple)):
            return True
        return isinstance(start, str) and len(start) != 1

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def find(self, context: Iterable[Any]) -> Optional[ContextNode]:
        """Node reached from the root along context, or None."""
        node = self.root
        for symbol in context:
            node = node.get_child(symbol)
            if node is None:
                return None
        return node

    def distribution(self, context: Iterable[Any] = ()) -> List[Tuple[Any, float]]:
        """
        Next-symbol percentages after context, highest first.

        END appears as None. Returns [] for an unknown context.
        """
        node = self.find(context)
        if node is None:
            return []
        rows = [
            (None if target is END else target.symbol, weight)
            for target, weight in node.transitions.items()
        ]
        return sorted(rows, key=lambda row: -row[1])

    def node_count(self) -> int:
        return sum(1 for _ in self.root.iter_nodes())

    def max_depth(self) -> int:
        return max(node.depth for node in self.root.iter_nodes())

    def __repr__(self) -> str:
        return f"SequenceModel(order={self.order}, nodes={self.node_count()})"


__all__ = ['ContextNode', 'SequenceModel', 'END', 'DEFAULT_ORDER']
