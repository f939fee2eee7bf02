# nonlinsig

Block-based signal generators and analysers for nonlinear dynamics, built
on NumPy. The package has three modules:

- `nonlinsig.attractors`: the `Lorenz`, `Thomas` and `Dadras` chaotic
  systems, all derived from the abstract `Attractor` base class.
- `nonlinsig.rpde`: recurrence period density entropy (`compute_rpde`,
  `normalize_min_max`, and the streaming `RPDEAnalyzer`).
- `nonlinsig.rqa`: recurrence quantification analysis of a 3-D trajectory
  (`compute_rqa`, `recurrence_matrix`, `dynamic_threshold`, the `RQAMetrics`
  result and the streaming `RQAAnalyzer`).

## Attractors

Each attractor integrates two copies of its system with the Euler method: a
primary trajectory advanced by `speed_primary / samplerate` per sample and a
secondary one advanced by `speed_secondary / samplerate`. `process` returns
an array of shape `(6, frame_count)` holding primary x, y, z followed by
secondary x, y, z. With `scale_outputs` on (the default) every value is
passed through `tanh(value * scale_factor)`, so it lies within ±1.

```python
from nonlinsig.attractors import Lorenz

lorenz = Lorenz()
block = lorenz.process(frame_count=512, samplerate=48000)
```

Model parameters are given as keyword arguments and changed with
`set_param`, which also moves the secondary trajectory onto the primary one:

```python
from nonlinsig.attractors import Dadras, Lorenz, Thomas

lorenz = Lorenz(rho=32.0)           # sigma, rho, beta
lorenz.set_param("rho", 28.0)
thomas = Thomas(b=0.2)              # b
dadras = Dadras(a=3.0, e=9.0)       # a, b, c, d, e
```

An unknown parameter name raises `TypeError` in the constructor and
`KeyError` in `set_param`. If the primary trajectory becomes infinite, NaN
or all zero, both trajectories are put back at their starting point derived
from `position`. A `dt` value is accepted and stored, but the step size is
set by the speeds and the sample rate.

## Recurrence period density entropy

`compute_rpde(window, dim, tau, epsilon, tmax)` delay-embeds the window with
`dim` coordinates spaced `tau` samples apart, builds a histogram of return
times to the `epsilon` ball and returns its entropy normalised to [0, 1]. A
`tmax` of zero or less puts no limit on return times.
`normalize_min_max` maps values onto [-1, 1].

```python
import numpy as np
from nonlinsig.rpde import RPDEAnalyzer, compute_rpde, normalize_min_max

signal = np.sin(np.linspace(0, 200, 4096))
value = compute_rpde(normalize_min_max(signal), dim=3, tau=50, epsilon=0.001, tmax=-1)

analyzer = RPDEAnalyzer(window_size=2048, hop_size=512, subsample_factor=5)
out = analyzer.process(signal[:512])   # the block filled with analyzer.value
```

`RPDEAnalyzer` keeps every `subsample_factor`-th input sample. Once a full
window has gathered, the most recent `window_size` values are normalised
and analysed, and `window_size - hop_size` of them are kept for the next
window. A window size of zero or less gives a warning and falls back to
2048.

## Recurrence quantification analysis

```python
import numpy as np
from nonlinsig.rqa import compute_rqa, dynamic_threshold

points = np.random.default_rng(0).normal(size=(256, 3))
metrics = compute_rqa(points, threshold=dynamic_threshold(points, 0.1), l_min=2, v_min=2)
print(metrics.recurrence_rate, metrics.determinism, metrics.lmax)
```

Two distinct points recur when their distance is strictly below the
threshold. `RQAMetrics` holds `recurrence_rate`, `determinism`, `lmax`,
`entropy`, `laminarity` and `trapping_time`. Diagonal lines come from the
upper triangle of the recurrence matrix, vertical lines from the whole
matrix; lines shorter than `l_min` or `v_min` are not counted.

`RQAAnalyzer.process(x, y, z)` takes one sample of each coordinate per call,
stores every `subsample_factor`-th point in a ring buffer of `window_size`
points, and recomputes its `metrics` after every `hop_size` stored points,
using either the fixed `threshold` or, with `use_dynamic_threshold`,
`dynamic_threshold_factor` times the mean distance from the centroid.
`snapshot()` returns the buffered points oldest first.

## What the package does not do

It does not open audio devices, run inside an audio host or provide a
command-line tool. You hand it blocks of samples and it hands arrays back;
the analysers do their work synchronously inside `process`.

## Tests

The `test` extra installs pytest; the test suite lives in `tests/`.