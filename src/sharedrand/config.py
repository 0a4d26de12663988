"""Configuration for shared random sources."""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict

from .exceptions import ConfigurationError

# Re-seed once the approximate call counter exceeds this value.
DEFAULT_RESEED_THRESHOLD = 2**32 - 1

SUPPORTED_BIT_GENERATORS = ("PCG64", "PCG64DXSM", "Philox", "SFC64", "MT19937")

_UINT64_LIMIT = 2**64


@dataclass(frozen=True)
class SourceConfig:
    """Engine and re-seed settings for a ``SharedSource``.

    There is no seed field; sources always seed themselves from entropy.
    """
    bit_generator: str = "PCG64"
    reseed_threshold: int = DEFAULT_RESEED_THRESHOLD

    def validate(self) -> "SourceConfig":
        """Check the settings, raising ``ConfigurationError`` on the first problem."""
        if self.bit_generator not in SUPPORTED_BIT_GENERATORS:
            raise ConfigurationError(
                f"Unsupported bit generator: {self.bit_generator!r}",
                {"bit_generator": self.bit_generator, "supported": list(SUPPORTED_BIT_GENERATORS)},
            )

        threshold = self.reseed_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise ConfigurationError(
                "reseed_threshold must be an integer",
                {"reseed_threshold": threshold},
            )
        if not 0 < threshold < _UINT64_LIMIT:
            raise ConfigurationError(
                f"reseed_threshold must be in (0, 2**64), got {threshold}",
                {"reseed_threshold": threshold},
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SourceConfig":
        """Build and validate a config from a plain dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                {"unknown_keys": unknown},
            )
        return cls(**data).validate()
