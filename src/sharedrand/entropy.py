"""Entropy acquisition for seeding."""

from __future__ import annotations

import numpy as np


def draw_entropy() -> int:
    """Return a fresh 64-bit value drawn from the operating system's entropy pool.

    ``SeedSequence()`` without arguments reads OS randomness; the first
    generated word is used as the seed. The value is not cached.
    """
    sequence = np.random.SeedSequence()
    return int(sequence.generate_state(1, dtype=np.uint64)[0])
