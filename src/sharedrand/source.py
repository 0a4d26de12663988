"""Concurrency-safe, self-seeding random source.

A ``SharedSource`` wraps one ``numpy.random.Generator``. The engine lock is
held only for the engine call that produces a value; afterwards the call is
charged to an approximate counter under a separate lock. Once the counter
exceeds the re-seed threshold the engine state is replaced from fresh entropy.
The counter is never reset, so every call past the threshold re-seeds again.
"""

from __future__ import annotations

import logging
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, MutableSequence, Optional, TypeVar

import numpy as np

from .config import SourceConfig
from .entropy import draw_entropy
from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

T = TypeVar("T")

INT31_MAX = 2**31 - 1
INT63_MAX = 2**63 - 1
UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _check_bound(name: str, value: Any, limit: int) -> int:
    """Validate a bound for the half-open range [0, value)."""
    if not _is_integer(value):
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(value).__name__}",
            {name: value},
        )
    value = int(value)
    if value <= 0:
        raise InvalidArgumentError(f"invalid argument {name}={value}: must be > 0", {name: value})
    if value > limit:
        raise InvalidArgumentError(
            f"invalid argument {name}={value}: must be <= {limit}",
            {name: value, "limit": limit},
        )
    return value


@dataclass(frozen=True)
class SourceStats:
    """Point-in-time view of a source's bookkeeping."""

    calls: int
    reseeds: int
    threshold: int
    bit_generator: str


class SharedSource:
    """Thread-safe random source that seeds and re-seeds itself from entropy.

    Args:
        config: Engine and threshold settings. Defaults to ``SourceConfig()``.
        entropy: Callable returning a fresh 64-bit seed on every call.
    """

    def __init__(
        self,
        config: Optional[SourceConfig] = None,
        entropy: Callable[[], int] = draw_entropy,
    ) -> None:
        self.config = (config or SourceConfig()).validate()
        self._entropy = entropy
        self._bit_generator_cls = getattr(np.random, self.config.bit_generator)
        self._threshold = self.config.reseed_threshold

        self._lock = threading.Lock()
        self._calls_lock = threading.Lock()
        self._calls = 0
        self._reseeds = 0

        self._generator = np.random.Generator(self._bit_generator_cls(self._next_seed()))
        logger.debug("Seeded %s source", self.config.bit_generator)

    def _next_seed(self) -> int:
        return int(self._entropy()) & UINT64_MAX

    def _reseed(self, calls: int) -> None:
        fresh = self._bit_generator_cls(self._next_seed())
        with self._lock:
            self._generator.bit_generator.state = fresh.state
            self._reseeds += 1
        logger.debug("Re-seeded %s source at %d calls", self.config.bit_generator, calls)

    def _charge(self, units: int) -> None:
        """Add ``units`` to the call counter and re-seed past the threshold."""
        with self._calls_lock:
            self._calls = (self._calls + units) & UINT64_MAX
            calls = self._calls
        if calls > self._threshold:
            # Concurrent callers may all land here; each re-seed is independent.
            self._reseed(calls)

    @contextmanager
    def _drawing(self, units: int) -> Iterator[np.random.Generator]:
        """Hold the engine for one draw, then charge ``units`` on every exit path."""
        try:
            with self._lock:
                yield self._generator
        finally:
            self._charge(units)

    @property
    def calls(self) -> int:
        """Approximate number of units charged so far."""
        with self._calls_lock:
            return self._calls

    @property
    def reseeds(self) -> int:
        """Number of re-seeds performed since construction."""
        return self._reseeds

    def stats(self) -> SourceStats:
        """Return a snapshot of the counter, re-seed count and settings."""
        return SourceStats(
            calls=self.calls,
            reseeds=self._reseeds,
            threshold=self._threshold,
            bit_generator=self.config.bit_generator,
        )

    def int63(self) -> int:
        """Return a non-negative pseudo-random 63-bit integer."""
        with self._drawing(1) as engine:
            value = engine.integers(0, INT63_MAX, dtype=np.int64, endpoint=True)
        return int(value)

    def uint32(self) -> int:
        """Return a pseudo-random 32-bit unsigned integer."""
        with self._drawing(1) as engine:
            value = engine.integers(0, UINT32_MAX, dtype=np.uint32, endpoint=True)
        return int(value)

    def uint64(self) -> int:
        """Return a pseudo-random 64-bit unsigned integer."""
        with self._drawing(1) as engine:
            value = engine.integers(0, UINT64_MAX, dtype=np.uint64, endpoint=True)
        return int(value)

    def int31(self) -> int:
        """Return a non-negative pseudo-random 31-bit integer."""
        with self._drawing(1) as engine:
            value = engine.integers(0, INT31_MAX, dtype=np.int32, endpoint=True)
        return int(value)

    def int_(self) -> int:
        """Return a non-negative pseudo-random integer below ``sys.maxsize``."""
        with self._drawing(1) as engine:
            value = engine.integers(0, sys.maxsize, dtype=np.int64)
        return int(value)

    def int63n(self, n: int) -> int:
        """Return a pseudo-random integer in [0, n).

        Raises:
            InvalidArgumentError: If ``n <= 0`` or ``n`` does not fit in 63 bits.
        """
        with self._drawing(1) as engine:
            bound = _check_bound("n", n, INT63_MAX)
            value = engine.integers(0, bound, dtype=np.int64)
        return int(value)

    def int31n(self, n: int) -> int:
        """Return a pseudo-random integer in [0, n).

        Raises:
            InvalidArgumentError: If ``n <= 0`` or ``n`` does not fit in 31 bits.
        """
        with self._drawing(1) as engine:
            bound = _check_bound("n", n, INT31_MAX)
            value = engine.integers(0, bound, dtype=np.int32)
        return int(value)

    def intn(self, n: int) -> int:
        """Return a pseudo-random integer in [0, n).

        Raises:
            InvalidArgumentError: If ``n <= 0`` or ``n > sys.maxsize``.
        """
        with self._drawing(1) as engine:
            bound = _check_bound("n", n, sys.maxsize)
            value = engine.integers(0, bound, dtype=np.int64)
        return int(value)

    def float64(self) -> float:
        """Return a pseudo-random float in [0.0, 1.0)."""
        with self._drawing(1) as engine:
            value = engine.random()
        return float(value)

    def float32(self) -> float:
        """Return a pseudo-random single-precision value in [0.0, 1.0)."""
        with self._drawing(1) as engine:
            value = engine.random(dtype=np.float32)
        return float(value)

    def perm(self, n: int) -> list[int]:
        """Return a pseudo-random permutation of ``range(n)`` as a list.

        Raises:
            InvalidArgumentError: If ``n`` is negative.
        """
        units = int(n) if _is_integer(n) and n > 0 else 0
        with self._drawing(units) as engine:
            if not _is_integer(n) or n < 0:
                raise InvalidArgumentError(f"invalid argument n={n!r}: must be >= 0", {"n": n})
            values = engine.permutation(int(n))
        return values.tolist()

    def shuffle(self, seq: Optional[MutableSequence[T]]) -> None:
        """Shuffle ``seq`` in place.

        Swap targets for a Fisher-Yates pass are drawn in one engine call;
        the swaps themselves happen after the engine is released, so any
        sequence supporting indexed get and set works. numpy arrays are
        permuted along their first axis in a single fancy-indexed copy,
        since their items may be views. ``None`` is a no-op.
        """
        n = 0 if seq is None else len(seq)
        with self._drawing(n) as engine:
            if n < 2:
                return
            # targets[k] is uniform in [0, n - 1 - k]
            targets = engine.integers(0, np.arange(n, 1, -1)).tolist()

        if isinstance(seq, np.ndarray):
            order = list(range(n))
            for i, j in zip(range(n - 1, 0, -1), targets):
                order[i], order[j] = order[j], order[i]
            seq[...] = seq[order]
            return

        for i, j in zip(range(n - 1, 0, -1), targets):
            seq[i], seq[j] = seq[j], seq[i]

    def read(self, buffer: Optional[Any]) -> int:
        """Fill ``buffer`` with random bytes and return the number written.

        Always writes every byte of ``buffer``; an empty buffer or ``None``
        yields 0. Non-contiguous buffers are filled element-wise through numpy.
        The counter is charged one unit per eight bytes.

        Raises:
            InvalidArgumentError: If ``buffer`` is read-only.
        """
        if buffer is None:
            return 0
        view = memoryview(buffer)
        if view.readonly:
            raise InvalidArgumentError("buffer must be writable", {"buffer_type": type(buffer).__name__})
        size = view.nbytes
        with self._drawing(size // 8) as engine:
            data = engine.bytes(size) if size else b""

        if view.c_contiguous:
            view.cast("B")[:] = data
        else:
            target = np.asarray(buffer)
            target[...] = np.frombuffer(data, dtype=target.dtype).reshape(target.shape)
        return size

    def norm_float64(self) -> float:
        """Return a standard normal sample (mean 0, stddev 1).

        Rescale with ``sample * stddev + mean``.
        """
        with self._drawing(1) as engine:
            value = engine.standard_normal()
        return float(value)

    def exp_float64(self) -> float:
        """Return a standard exponential sample (rate 1), always > 0.

        Rescale with ``sample / rate``.
        """
        with self._drawing(1) as engine:
            value = engine.standard_exponential()
            while value == 0.0:
                value = engine.standard_exponential()
        return float(value)
