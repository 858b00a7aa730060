"""CLI for live cepstral mean normalization of feature files."""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from live_cmn.config import LiveCMNConfig
from live_cmn.errors import DimensionMismatch
from live_cmn.normalizer import LiveMeanNormalizer
from live_cmn.stream import normalize_utterances

logger = logging.getLogger(__name__)


def _load_features(path: Path) -> np.ndarray:
    features = np.load(path)
    if not isinstance(features, np.ndarray):
        features.close()
        raise ValueError(f"{path}: expected a single .npy array, got {type(features).__name__}")
    if features.ndim != 2:
        raise ValueError(f"{path}: expected (frames, dims) array, got shape {features.shape}")
    return features.astype(np.float64)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="Apply live (causal) cepstral mean normalization to .npy feature files"
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help="Feature files, shape (frames, dims); processed in order as consecutive utterances",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Directory for <stem>_cmn.npy outputs (default: next to each input)",
    )
    parser.add_argument(
        "--initial-mean",
        type=float,
        default=None,
        help="Initial mean of the first coefficient (default: 12.0)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Decay window in frames (default: 100)",
    )
    parser.add_argument(
        "--shift-window",
        type=int,
        default=None,
        help="Frames between mean recalculations (default: 160)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log normalizer state changes",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        config = LiveCMNConfig.from_mapping(
            {
                "initial_mean": args.initial_mean,
                "window": args.window,
                "shift_window": args.shift_window,
            }
        )
        normalizer = LiveMeanNormalizer(config)
        for path in args.inputs:
            features = _load_features(path)
            # One utterance per file; the normalizer state carries across files
            normalized = np.array(list(normalize_utterances([features], normalizer)))
            if normalized.size == 0:
                normalized = features.copy()
            out_dir = args.output_dir or path.parent
            out_dir.mkdir(parents=True, exist_ok=True)
            out_path = out_dir / f"{path.stem}_cmn.npy"
            np.save(out_path, normalized)
            print(f"{path}: {features.shape[0]} frames x {features.shape[1]} dims -> {out_path}")
    except (DimensionMismatch, ValueError, OSError) as exc:
        logger.debug("Normalization failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    if normalizer.current_mean is not None:
        print(f"Final mean (first 5 dims): {normalizer.current_mean[:5]}")


if __name__ == "__main__":
    main()
