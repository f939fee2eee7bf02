"""Recurrence period density entropy of a signal."""

from __future__ import annotations

import warnings
from collections.abc import Iterable

import numpy as np

DEFAULT_WINDOW_SIZE = 2048
_FLOAT32_EPS = np.finfo(np.float32).eps


def normalize_min_max(values: Iterable[float]) -> np.ndarray:
    """Map values linearly onto [-1, 1].

    Returns a float32 copy; an empty or constant input is returned unchanged.
    """
    arr = np.array(values, dtype=np.float32)
    if arr.size == 0:
        return arr
    low = arr.min()
    span = arr.max() - low
    if span <= _FLOAT32_EPS:
        return arr
    return ((arr - low) / span) * np.float32(2.0) - np.float32(1.0)


def compute_rpde(
    window: Iterable[float], dim: int, tau: int, epsilon: float, tmax: int
) -> float:
    """Return the normalised recurrence period density entropy of ``window``.

    The window is delay-embedded with ``dim`` coordinates spaced ``tau``
    samples apart. A ``tmax`` of zero or less puts no limit on return times.
    """
    if dim < 1:
        raise ValueError("dim must be at least 1")
    if tau < 0:
        raise ValueError("tau must not be negative")
    data = np.asarray(window, dtype=np.float32).ravel()
    n = data.size - (dim - 1) * tau
    if n <= 0:
        return 0.0

    embedded = np.stack([data[k * tau : k * tau + n] for k in range(dim)], axis=1)
    eps = np.float32(epsilon)
    eps_sq = eps * eps
    histogram = np.zeros(n, dtype=np.int64)

    for i, point in enumerate(embedded):
        stop = n if tmax <= 0 else min(n, i + tmax + 1)
        diffs = embedded[i + 1 : stop] - point
        dist_sq = (diffs * diffs).sum(axis=1, dtype=np.float32)
        outside = np.flatnonzero(dist_sq > eps_sq)
        if outside.size == 0:
            continue
        first_out = int(outside[0])
        back_in = np.flatnonzero(dist_sq[first_out + 1 :] < eps_sq)
        if back_in.size:
            # Offset m in dist_sq is the point i + 1 + m.
            histogram[first_out + int(back_in[0]) + 2] += 1

    if tmax > 0:
        hist_size = min(tmax, n)
    else:
        occupied = np.flatnonzero(histogram[1:])
        hist_size = int(occupied[-1]) + 1 if occupied.size else 0
    if hist_size <= 1:
        return 0.0

    counts = histogram[1:hist_size]
    total = int(counts.sum())
    if total == 0:
        return 0.0
    probs = counts[counts > 0] / float(total)
    entropy = float(-(probs * np.log(probs)).sum())
    return float(np.float32(entropy / np.log(hist_size)))


class RPDEAnalyzer:
    """Streaming RPDE over overlapping windows of a subsampled signal."""

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW_SIZE,
        *,
        hop_size: int = 512,
        dim: int = 3,
        tau: int = 50,
        epsilon: float = 0.001,
        tmax: int = -1,
        subsample_factor: float = 5,
    ) -> None:
        window_size = int(window_size)
        if window_size <= 0:
            warnings.warn(
                f"window_size must be positive; defaulting to {DEFAULT_WINDOW_SIZE}",
                stacklevel=2,
            )
            window_size = DEFAULT_WINDOW_SIZE
        self._window_size = window_size
        self.hop_size = hop_size
        self.dim = dim
        self.tau = tau
        self.epsilon = epsilon
        self.tmax = tmax
        self.subsample_factor = subsample_factor
        self._accum: list[float] = []
        self._counter = 0
        self._value = 0.0

    @property
    def window_size(self) -> int:
        """Analysis window length, fixed at construction."""
        return self._window_size

    @property
    def value(self) -> float:
        """Most recently computed RPDE."""
        return self._value

    @property
    def buffered(self) -> int:
        """Number of subsampled values waiting for the next window."""
        return len(self._accum)

    def _analyse(self, window: np.ndarray) -> None:
        self._value = compute_rpde(
            normalize_min_max(window),
            int(self.dim),
            int(self.tau),
            float(np.float32(self.epsilon)),
            int(self.tmax),
        )

    def process(self, block: Iterable[float]) -> np.ndarray:
        """Feed a block of samples and return it filled with the current RPDE."""
        samples = np.asarray(block, dtype=np.float32).ravel()
        factor = int(self.subsample_factor)
        if factor < 1:
            raise ValueError("subsample_factor must be at least 1")

        start = (-(self._counter + 1)) % factor
        self._accum.extend(samples[start::factor].tolist())
        self._counter += samples.size

        size = self._window_size
        if len(self._accum) >= size:
            self._analyse(np.array(self._accum[-size:], dtype=np.float32))
            hop = int(self.hop_size)
            if 0 < hop < size:
                overlap = size - hop
                self._accum = self._accum[-overlap:] if len(self._accum) > overlap else []
            else:
                self._accum = []
        if len(self._accum) > 2 * size:
            self._accum = self._accum[-size:]

        return np.full(samples.size, self._value, dtype=np.float32)