"""sharedrand: a pre-seeded, concurrency-safe shared random source.

Libraries that need non-deterministic behavior can call these functions
from any thread without seeding or locking anything themselves. The
underlying source is seeded from OS entropy at import, re-seeded
periodically, and cannot be seeded manually.
"""

from __future__ import annotations

import logging

__version__ = "0.1.0"

from .config import SourceConfig
from .exceptions import ConfigurationError, InvalidArgumentError, SharedRandError
from .source import SharedSource, SourceStats

logging.getLogger(__name__).addHandler(logging.NullHandler())

_source = SharedSource()

# Integers
int63 = _source.int63
uint32 = _source.uint32
uint64 = _source.uint64
int31 = _source.int31
int_ = _source.int_
int63n = _source.int63n
int31n = _source.int31n
intn = _source.intn

# Floats
float64 = _source.float64
float32 = _source.float32
norm_float64 = _source.norm_float64
exp_float64 = _source.exp_float64

# Sequences and bytes
perm = _source.perm
shuffle = _source.shuffle
read = _source.read

stats = _source.stats

__all__ = [
    "__version__",
    # Integers
    "int63",
    "uint32",
    "uint64",
    "int31",
    "int_",
    "int63n",
    "int31n",
    "intn",
    # Floats
    "float64",
    "float32",
    "norm_float64",
    "exp_float64",
    # Sequences and bytes
    "perm",
    "shuffle",
    "read",
    # Introspection
    "stats",
    "SourceStats",
    # Standalone sources and configuration
    "SharedSource",
    "SourceConfig",
    # Errors
    "SharedRandError",
    "InvalidArgumentError",
    "ConfigurationError",
]
