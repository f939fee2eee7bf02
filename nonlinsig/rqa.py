"""Recurrence quantification analysis of three-dimensional trajectories."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

DEFAULT_WINDOW_SIZE = 1024


@dataclass(frozen=True)
class RQAMetrics:
    """Recurrence measures of one analysis window."""

    recurrence_rate: float = 0.0
    determinism: float = 0.0
    lmax: float = 0.0
    entropy: float = 0.0
    laminarity: float = 0.0
    trapping_time: float = 0.0


def _as_points(points: object) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError("points must be a two-dimensional array of shape (N, dims)")
    if arr.shape[0] == 0:
        raise ValueError("points must not be empty")
    return arr


def dynamic_threshold(points: object, factor: float) -> float:
    """Return ``factor`` times the mean distance of the points from their centroid."""
    pts = _as_points(points)
    centroid = pts.mean(axis=0)
    mean_distance = float(np.linalg.norm(pts - centroid, axis=1).mean())
    return float(factor) * mean_distance


def recurrence_matrix(points: object, threshold: float) -> np.ndarray:
    """Return the boolean recurrence matrix of the points.

    Two distinct samples recur when their Euclidean distance is strictly
    below ``threshold``. The main diagonal is always false.
    """
    pts = _as_points(points)
    n = pts.shape[0]
    dist_sq = np.zeros((n, n), dtype=np.float64)
    for column in pts.T:
        diff = column[:, None] - column[None, :]
        dist_sq += diff * diff
    threshold = float(threshold)
    matrix = dist_sq < threshold * threshold
    np.fill_diagonal(matrix, False)
    return matrix


def _runs(mask: np.ndarray) -> np.ndarray:
    """Lengths of the runs of true values along each row of ``mask``."""
    rows, cols = mask.shape
    padded = np.zeros((rows, cols + 2), dtype=np.int8)
    padded[:, 1:-1] = mask
    steps = np.diff(padded, axis=1)
    starts = np.nonzero(steps == 1)[1]
    ends = np.nonzero(steps == -1)[1]
    return ends - starts


def _diagonal_runs(matrix: np.ndarray) -> np.ndarray:
    """Lengths of the diagonal lines above the main diagonal."""
    n = matrix.shape[0]
    if n < 2:
        return np.zeros(0, dtype=np.int64)
    offsets = np.arange(1, n)[:, None]
    rows = np.broadcast_to(np.arange(n)[None, :], (n - 1, n))
    cols = rows + offsets
    valid = cols < n
    sheared = np.zeros((n - 1, n), dtype=bool)
    sheared[valid] = matrix[rows[valid], cols[valid]]
    return _runs(sheared)


def compute_rqa(points: object, threshold: float, l_min: float, v_min: float) -> RQAMetrics:
    """Compute the recurrence measures of a window of points.

    Diagonal lines are taken from the upper triangle of the recurrence
    matrix, vertical lines from the whole matrix. Lines shorter than the
    integer part of ``l_min`` or ``v_min`` are not counted.
    """
    pts = _as_points(points)
    n = pts.shape[0]
    matrix = recurrence_matrix(pts, threshold)
    recurrences = int(np.count_nonzero(matrix)) // 2

    diagonals = _diagonal_runs(matrix)
    diagonals = diagonals[diagonals >= int(l_min)]
    sum_diag = float(diagonals.sum())
    lmax = float(diagonals.max()) if diagonals.size else 0.0
    entropy = 0.0
    if diagonals.size:
        _, counts = np.unique(diagonals, return_counts=True)
        probs = counts / float(counts.sum())
        entropy = float(-(probs * np.log(probs)).sum())

    verticals = _runs(matrix.T)
    verticals = verticals[verticals >= int(v_min)]
    sum_vert = float(verticals.sum())

    rr = 2.0 * recurrences / float(n * n)
    det = sum_diag / (2.0 * recurrences) if recurrences else 0.0
    lam = sum_vert / (2.0 * recurrences) if recurrences else 0.0
    tt = sum_vert / verticals.size if verticals.size else 0.0
    return RQAMetrics(rr, det, lmax, entropy, lam, tt)


class RQAAnalyzer:
    """Streaming recurrence analysis over a sliding window of subsampled points."""

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW_SIZE,
        *,
        subsample_factor: float = 5,
        hop_size: float = 256,
        threshold: float = 0.1,
        use_dynamic_threshold: bool = False,
        dynamic_threshold_factor: float = 0.1,
        l_min: float = 100.0,
        v_min: float = 100.0,
    ) -> None:
        window_size = int(window_size)
        if window_size <= 0:
            raise ValueError("window_size must be positive")
        self._window_size = window_size
        self._hop_size = int(hop_size)
        self.subsample_factor = subsample_factor
        self.threshold = threshold
        self.use_dynamic_threshold = use_dynamic_threshold
        self.dynamic_threshold_factor = dynamic_threshold_factor
        self.l_min = l_min
        self.v_min = v_min
        self._ring = np.zeros((window_size, 3), dtype=np.float64)
        self._write_index = 0
        self._since_update = 0
        self._counter = 0
        self._metrics = RQAMetrics()

    @property
    def window_size(self) -> int:
        """Number of points in the analysis window."""
        return self._window_size

    @property
    def hop_size(self) -> int:
        """Number of stored points between analyses, fixed at construction."""
        return self._hop_size

    @property
    def metrics(self) -> RQAMetrics:
        """Most recently computed measures."""
        return self._metrics

    def snapshot(self) -> np.ndarray:
        """Return the window's points in order, oldest first."""
        return np.roll(self._ring, -self._write_index, axis=0)

    def _update(self) -> None:
        points = self.snapshot()
        if self.use_dynamic_threshold:
            radius = dynamic_threshold(points, float(self.dynamic_threshold_factor))
        else:
            radius = float(self.threshold)
        self._metrics = compute_rqa(points, radius, self.l_min, self.v_min)

    def process(self, x: float, y: float, z: float) -> RQAMetrics:
        """Feed one sample of each coordinate and return the current measures."""
        factor = int(self.subsample_factor)
        if factor < 1:
            raise ValueError("subsample_factor must be at least 1")
        if self._counter % factor == 0:
            self._ring[self._write_index] = (x, y, z)
            self._write_index = (self._write_index + 1) % self._window_size
            self._since_update += 1
            if self._hop_size >= 0 and self._since_update >= self._hop_size:
                self._update()
                self._since_update = 0
        self._counter += 1
        return self._metrics