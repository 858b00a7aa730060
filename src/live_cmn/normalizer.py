"""Live cepstral mean normalization (CMN) for streaming features.

Subtracts an estimate of the mean of all input seen so far from each frame.
Unlike batch CMN it never waits for the whole utterance: the mean is
estimated from frames already seen, so no delay is introduced.

The mean is not re-estimated on every frame. Frames are summed, and once
more than `shift_window` frames have been accumulated the mean is set to
sum / count. The sum is then decayed so it looks like exactly `window`
frames at the new mean, which bounds the memory of the estimator:

    sum <- sum * window / count,  count <- window

Pipeline: features -> LiveMeanNormalizer -> decoder. This is a 1-to-1
processor.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from live_cmn.config import LiveCMNConfig
from live_cmn.data import Item, ItemKind
from live_cmn.errors import DimensionMismatch

logger = logging.getLogger(__name__)


class LiveMeanNormalizer:
    """Online mean normalizer with periodic recalculation and decay.

    State (running sum, current mean, frame count) is allocated on the first
    frame and then persists for the life of the instance, so the estimate
    carries over from one utterance to the next.

    Interface:
      cmn = LiveMeanNormalizer(LiveCMNConfig(initial_mean=12.0))
      frame = cmn.process(frame)         # FeatureFrame, normalized in place
      cmn.process(DataEndSignal())       # end of utterance: update the mean
      cmn.reset()                        # optional: forget everything (new channel)
    """

    def __init__(self, config: Optional[LiveCMNConfig] = None):
        self.config = config or LiveCMNConfig()
        self._sum: Optional[np.ndarray] = None
        self._mean: Optional[np.ndarray] = None
        self._frame_count = 0

    def process(self, item: Optional[Item]) -> Optional[Item]:
        """Normalize a feature frame in place; forward signals unchanged.

        Args:
            item: FeatureFrame, DataEndSignal, any other Signal, or None
                  (end of input).

        Returns:
            The same item. Feature frames have the current mean subtracted
            from their values.

        Raises:
            DimensionMismatch: frame length differs from the first frame seen.
        """
        if item is None:
            return None
        if item.kind is ItemKind.FEATURES:
            self.normalize(item.values)
        elif item.kind is ItemKind.END_OF_STREAM:
            self._update_mean_sum()
        return item

    def normalize(self, values: np.ndarray) -> np.ndarray:
        """Subtract the current mean from `values` in place and fold them into the sum.

        The subtraction uses the mean from before this frame is counted.
        Nothing is modified when the input is rejected.

        Raises:
            ValueError: `values` is not a 1-D floating ndarray.
            DimensionMismatch: length differs from the first frame seen.
        """
        if not isinstance(values, np.ndarray):
            raise ValueError(f"Expected a 1-D floating ndarray, got {type(values).__name__}")
        if values.ndim != 1 or not np.issubdtype(values.dtype, np.floating):
            raise ValueError(
                f"Expected a 1-D floating ndarray, got dtype {values.dtype} shape {values.shape}"
            )
        if self._sum is None:
            self._init_means_sums(values.shape[0])

        if values.shape[0] != self._sum.shape[0]:
            raise DimensionMismatch(self._sum.shape[0], values.shape[0])

        self._sum += values
        values -= self._mean

        self._frame_count += 1

        if self._frame_count > self.config.shift_window:
            self._update_mean_sum()
        return values

    def reset(self) -> None:
        """Drop all state; the next frame starts from the initial mean again."""
        logger.debug("Resetting live CMN state")
        self._sum = None
        self._mean = None
        self._frame_count = 0

    def _init_means_sums(self, dimension: int) -> None:
        self._mean = np.zeros(dimension, dtype=np.float64)
        self._mean[:1] = self.config.initial_mean
        self._sum = np.zeros(dimension, dtype=np.float64)
        logger.debug(
            "Allocated live CMN buffers: dimension=%d, initial_mean=%s",
            dimension,
            self.config.initial_mean,
        )

    def _update_mean_sum(self) -> None:
        """Set the mean from the sum; decay the sum once shift_window is reached."""
        if self._frame_count == 0:
            return

        scale = 1.0 / self._frame_count
        self._mean = self._sum * scale

        # Decay is inclusive (>=) while the trigger in normalize() is strict (>)
        if self._frame_count >= self.config.shift_window:
            self._sum *= scale * self.config.window
            logger.debug(
                "Recalculated mean over %d frames, decayed sum to %d frames",
                self._frame_count,
                self.config.window,
            )
            self._frame_count = self.config.window
        else:
            logger.debug("Recalculated mean over %d frames (no decay)", self._frame_count)

    @property
    def dimension(self) -> Optional[int]:
        """Feature dimension fixed by the first frame (None before any data)."""
        return None if self._sum is None else self._sum.shape[0]

    @property
    def frame_count(self) -> int:
        """Frames accumulated since the last recalculation."""
        return self._frame_count

    @property
    def current_mean(self) -> Optional[np.ndarray]:
        """Copy of the mean currently being subtracted."""
        return None if self._mean is None else self._mean.copy()

    @property
    def running_sum(self) -> Optional[np.ndarray]:
        """Copy of the (decayed) running sum."""
        return None if self._sum is None else self._sum.copy()
