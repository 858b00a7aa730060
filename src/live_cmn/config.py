"""Centralized live CMN configuration.

Defaults follow the usual cepstral front end:
- Initial mean: 12.0 on c0 (log-energy DC offset), 0 elsewhere
- Decay window: 100 frames (1 s at a 10 ms hop)
- Shift window: re-estimate the mean every 160 frames
"""

import numbers
from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class LiveCMNConfig:
    """Live cepstral mean normalization parameters."""

    # Seed for the c0 mean before any data is seen
    initial_mean: float = 12.0

    # Effective memory of the running sum after a decay, in frames
    window: int = 100

    # Frames accumulated before the mean is recalculated
    shift_window: int = 160

    def __post_init__(self) -> None:
        for name in ("window", "shift_window"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer number of frames, got {value!r}")
            object.__setattr__(self, name, int(value))
        if self.window < 1:
            raise ValueError("window must be >= 1")
        if self.shift_window < 1:
            raise ValueError("shift_window must be >= 1")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "LiveCMNConfig":
        """Build a config from a plain mapping; None values fall back to defaults."""
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown LiveCMN option(s): {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in mapping.items() if v is not None})
