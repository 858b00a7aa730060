"""Items flowing through the front end: feature frames and control signals.

Every item carries a `kind` tag so processors dispatch on it explicitly:

- FeatureFrame  -> ItemKind.FEATURES       (normalized)
- DataEndSignal -> ItemKind.END_OF_STREAM  (forces a mean update)
- Signal        -> ItemKind.PASS_THROUGH   (forwarded untouched)

`None` marks the end of input and is never wrapped.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np


class ItemKind(enum.Enum):
    FEATURES = "features"
    END_OF_STREAM = "end_of_stream"
    PASS_THROUGH = "pass_through"


@dataclass(eq=False)
class FeatureFrame:
    """One frame of features (e.g. 13 cepstral coefficients).

    `values` is normalized in place; copy it beforehand if the raw
    coefficients are still needed.
    """

    values: np.ndarray
    sample_rate: Optional[int] = None
    first_sample_number: Optional[int] = None
    collect_time: Optional[float] = None
    kind: ItemKind = field(default=ItemKind.FEATURES, init=False, repr=False)

    def __post_init__(self) -> None:
        values = self.values
        if not isinstance(values, np.ndarray) or not np.issubdtype(values.dtype, np.floating):
            values = np.asarray(values, dtype=np.float64)
        if values.ndim != 1:
            raise ValueError(f"FeatureFrame values must be 1-D, got shape {values.shape}")
        self.values = values

    def __len__(self) -> int:
        return self.values.shape[0]


@dataclass(frozen=True)
class DataEndSignal:
    """End of a stream (utterance); duration in seconds if known."""

    duration: Optional[float] = None
    kind: ItemKind = field(default=ItemKind.END_OF_STREAM, init=False, repr=False)


@dataclass(frozen=True)
class Signal:
    """Any other control signal (data start, speech start/end, ...)."""

    name: str
    kind: ItemKind = field(default=ItemKind.PASS_THROUGH, init=False, repr=False)


Item = Union[FeatureFrame, DataEndSignal, Signal]
