"""Live cepstral mean normalization - config, items, normalizer, stream plumbing."""

from live_cmn.config import LiveCMNConfig
from live_cmn.data import DataEndSignal, FeatureFrame, ItemKind, Signal
from live_cmn.errors import DimensionMismatch
from live_cmn.normalizer import LiveMeanNormalizer
from live_cmn.stream import LiveCMNProcessor, normalize_utterances

__all__ = [
    "DataEndSignal",
    "DimensionMismatch",
    "FeatureFrame",
    "ItemKind",
    "LiveCMNConfig",
    "LiveCMNProcessor",
    "LiveMeanNormalizer",
    "Signal",
    "normalize_utterances",
]
