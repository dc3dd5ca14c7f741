#!/usr/bin/env python3
"""
namekit - Markov Chain Name Generator
=====================================

Learns a finite-order character model from a list of names and samples
new, plausible ones from it.

Quick Start
-----------
    from namekit import SequenceModel, Corpus, NameHarvester

    corpus = Corpus.from_file("planet_names.txt")
    model = SequenceModel(order=3, seed=42)
    model.train(corpus.sequences())

    # Raw model output
    name = model.generate()

    # Filtered, novel, unique names
    result = NameHarvester(model, known=corpus.known).harvest(count=20)

Modules
-------
    namekit.chain    - ContextNode tree and SequenceModel
    namekit.sampler  - Seedable weighted sampler
    namekit.sequence - Append-only symbol sequence
    namekit.corpus   - Training file loading
    namekit.filters  - Acceptability filters
    namekit.harvest  - Generation-retry loop and output writing

CLI Usage
---------
    python -m namekit generate -n 20
    python -m namekit inspect --context Ca
"""

__version__ = "0.1.0"

from .sequence import Sequence
from .sampler import WeightedSampler
from .chain import ContextNode, SequenceModel, END, DEFAULT_ORDER
from .corpus import Corpus, load_names, to_sequences
from .filters import (
    FilterPipeline,
    NameFilter,
    capitalized,
    max_consonant_run,
    max_repeated_letter,
    min_length,
    max_length,
)
from .harvest import NameHarvester, HarvestResult, write_names
from .settings import get_setting

__all__ = [
    '__version__',
    'Sequence',
    'WeightedSampler',
    'ContextNode',
    'SequenceModel',
    'END',
    'DEFAULT_ORDER',
    'Corpus',
    'load_names',
    'to_sequences',
    'FilterPipeline',
    'NameFilter',
    'capitalized',
    'max_consonant_run',
    'max_repeated_letter',
    'min_length',
    'max_length',
    'NameHarvester',
    'HarvestResult',
    'write_names',
    'get_setting',
]
