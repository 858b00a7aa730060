"""Pull-based stream plumbing around LiveMeanNormalizer.

Upstream is any callable returning the next item (FeatureFrame, signal) or
None when input is exhausted. Each pull yields exactly one output item:
no buffering, no reordering.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional

import numpy as np

from live_cmn.config import LiveCMNConfig
from live_cmn.data import DataEndSignal, FeatureFrame, Item
from live_cmn.normalizer import LiveMeanNormalizer

logger = logging.getLogger(__name__)

# Predecessor: returns the next item, or None at end of input
Predecessor = Callable[[], Optional[Item]]


class LiveCMNProcessor:
    """Front-end stage that pulls from a predecessor and normalizes on the fly.

    Interface:
      processor = LiveCMNProcessor(source.get_data)
      while (item := processor.get_data()) is not None:
          consume(item)
    or simply `for item in processor: ...`.
    """

    def __init__(
        self,
        predecessor: Predecessor,
        normalizer: Optional[LiveMeanNormalizer] = None,
        config: Optional[LiveCMNConfig] = None,
    ):
        """
        Args:
            predecessor: Callable returning the next item, or None at end of input.
            normalizer: Normalizer to use; carries its own config.
            config: Config for a new normalizer when `normalizer` is None.
        """
        if normalizer is not None and config is not None:
            raise ValueError("Pass either normalizer or config, not both")
        self.predecessor = predecessor
        self.normalizer = normalizer or LiveMeanNormalizer(config)

    def get_data(self) -> Optional[Item]:
        """Pull one item from the predecessor and return it normalized (or None)."""
        return self.normalizer.process(self.predecessor())

    def __iter__(self) -> Iterator[Item]:
        while True:
            item = self.get_data()
            if item is None:
                return
            yield item


def normalize_utterances(
    utterances: Iterable[Iterable[np.ndarray]],
    normalizer: Optional[LiveMeanNormalizer] = None,
) -> Iterator[np.ndarray]:
    """Normalize a sequence of utterances with one shared normalizer.

    Args:
        utterances: Each utterance is an iterable of 1-D feature vectors.
        normalizer: Normalizer to use (a default one is created if None).

    Yields:
        Normalized feature vectors, in input order. An end-of-stream signal
        is processed after each utterance so the mean carries over.

    The end-of-stream signal is sent when the generator is resumed after an
    utterance's last vector. A consumer that stops at that vector (e.g. via
    itertools.islice) leaves the final mean update pending; send a
    DataEndSignal to the normalizer yourself in that case.
    """
    normalizer = normalizer or LiveMeanNormalizer()
    for index, utterance in enumerate(utterances):
        n_frames = 0
        for vector in utterance:
            frame = normalizer.process(FeatureFrame(vector))
            n_frames += 1
            yield frame.values
        normalizer.process(DataEndSignal())
        logger.debug("Utterance %d: %d frames normalized", index, n_frames)
