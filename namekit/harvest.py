#!/usr/bin/env python3
"""
Name Harvesting
===============
Generation-retry loop around a trained SequenceModel.

Each candidate is grown one symbol at a time with advance_sequence. The
prefix-safe filters run after every step, so a name with a bad start is
abandoned at once instead of being finished and thrown away. Finished
candidates must also pass the whole-name filters, must not be a training
name, and must not repeat an accepted one.

Usage:
    harvester = NameHarvester(model, pipeline, known=corpus.known)
    result = harvester.harvest(count=20)
    write_names("generated_names.txt", result.names)
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .chain import SequenceModel
from .filters import FilterPipeline
from .sequence import Sequence
from .settings import require_setting

logger = logging.getLogger(__name__)

REJECT_EMPTY = 'empty'
REJECT_NOT_GENERATED = 'not_generated'  # reproduced a training name
REJECT_NOT_UNIQUE = 'not_unique'
REJECT_MAX_STEPS = 'max_steps'  # hit the per-candidate symbol cap


@dataclass
class HarvestResult:
    """Accepted names in order of discovery plus rejection tallies."""
    names: List[str] = field(default_factory=list)
    attempts: int = 0
    rejections: Counter = field(default_factory=Counter)

    @property
    def accepted(self) -> int:
        return len(self.names)

    @property
    def rejected(self) -> int:
        return sum(self.rejections.values())

    @property
    def pass_rate(self) -> float:
        if not self.attempts:
            return 0.0
        return 100.0 * self.accepted / self.attempts


class NameHarvester:
    """Drives a model until enough acceptable, novel names are found."""

    def __init__(self,
                 model: SequenceModel,
                 pipeline: Optional[FilterPipeline] = None,
                 known: Optional[Iterable[str]] = None,
                 max_steps: Optional[int] = None):
        """
        Args:
            model: Trained sequence model
            pipeline: Acceptability filters (default: from app.yaml)
            known: Training names to reject if regenerated
            max_steps: Hard cap on symbols per candidate (default: harvest.max_steps)
        """
        self.model = model
        self.pipeline = pipeline if pipeline is not None else FilterPipeline.from_settings()
        self.known: Set[str] = set(known or ())
        if max_steps is None:
            max_steps = require_setting("harvest.max_steps")
        if max_steps < 1:
            raise ValueError("max_steps must be positive")
        self.max_steps = max_steps

    def grow(self) -> Tuple[Sequence, Optional[str]]:
        """
        Grow one candidate from nothing.

        Returns:
            (sequence, reason): reason is None when the model stopped on its
            own, otherwise the prefix filter that cut the candidate short
        """
        sequence = Sequence()
        while True:
            before = len(sequence)
            self.model.advance_sequence(sequence)
            if len(sequence) == before:
                return sequence, None

            ok, reason = self.pipeline.check_prefix(str(sequence))
            if not ok:
                return sequence, reason
            if len(sequence) >= self.max_steps:
                return sequence, REJECT_MAX_STEPS

    def classify(self, text: str, accepted: Set[str]) -> Optional[str]:
        """Rejection reason for a finished candidate, or None to accept it."""
        if not text:
            return REJECT_EMPTY
        ok, reason = self.pipeline.check(text)
        if not ok:
            return reason
        if text in self.known:
            return REJECT_NOT_GENERATED
        if text in accepted:
            return REJECT_NOT_UNIQUE
        return None

    def harvest(self,
                count: Optional[int] = None,
                max_attempts: Optional[int] = None,
                on_progress: Optional[Callable[[HarvestResult], None]] = None) -> HarvestResult:
        """
        Collect up to count names.

        Args:
            count: Names wanted (default: harvest.count)
            max_attempts: Candidates to try before giving up (default:
                harvest.max_attempts)
            on_progress: Called with the running result after every attempt
        """
        if count is None:
            count = require_setting("harvest.count")
        if max_attempts is None:
            max_attempts = require_setting("harvest.max_attempts")
        if count < 0 or max_attempts < 0:
            raise ValueError("count and max_attempts must not be negative")

        result = HarvestResult()
        accepted: Set[str] = set()

        while result.accepted < count and result.attempts < max_attempts:
            result.attempts += 1
            sequence, reason = self.grow()
            text = str(sequence)
            if reason is None:
                reason = self.classify(text, accepted)

            if reason:
                result.rejections[reason] += 1
                logger.debug("REJECTED %r: %s", text, reason)
            else:
                accepted.add(text)
                result.names.append(text)
                logger.debug("ACCEPTED %r (%d/%d)", text, result.accepted, count)

            if on_progress is not None:
                on_progress(result)

        if result.accepted < count:
            logger.warning(
                "Only %d of %d names found after %d attempts",
                result.accepted, count, result.attempts,
            )
        logger.info(
            "Harvested %d names in %d attempts (%.1f%% pass rate)",
            result.accepted, result.attempts, result.pass_rate,
        )
        return result


def write_names(path: Path | str, names: Iterable[str]) -> Path:
    """Overwrite path with the distinct names, sorted, one per line."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(''.join(f"{name}\n" for name in sorted(set(names))), encoding='utf-8')
    return path


__all__ = [
    'NameHarvester',
    'HarvestResult',
    'write_names',
    'REJECT_EMPTY',
    'REJECT_NOT_GENERATED',
    'REJECT_NOT_UNIQUE',
    'REJECT_MAX_STEPS',
]
