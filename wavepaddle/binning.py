"""
Frequency-bin partitioning of the spectral domain [0, wmax).
"""

from typing import Optional, Union

import numpy as np

from .exceptions import InvalidParameterError, SamplingDivergenceError
from .structs import SAMPLING_SCHEMES, BinSet


# Draw budget per requested bin for rejection sampling
MAX_ATTEMPTS_PER_BIN = 10000

# Largest jitter of a uniform boundary, as a fraction of the nominal bin width
UNIFORM_JITTER_FRACTION = 0.2


RandomSource = Union[None, int, np.random.Generator]


def _as_generator(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def sample_peak_weighted_normal(n: int,
                                wp: float,
                                wmax: float,
                                rng: np.random.Generator,
                                max_attempts: Optional[int] = None) -> np.ndarray:
    """
    Draws `n - 1` distinct interior boundaries from Normal(wp, wp/2), rejecting draws outside (0, wmax).

    Boundaries cluster around the spectral peak, so bins are narrow where most of the energy
    sits and wide in the tails. Duplicate draws merge, so the number of draws is not fixed.

    Args:
        n: Number of bins.
        wp: Peak angular frequency [rad/s].
        wmax: Upper edge of the domain [rad/s].
        rng: Random source.
        max_attempts: Draw budget, defaults to MAX_ATTEMPTS_PER_BIN * n.

    Returns:
        Sorted array of `n - 1` boundaries.

    Raises:
        SamplingDivergenceError: If the budget is exhausted first.
    """
    if max_attempts is None:
        max_attempts = MAX_ATTEMPTS_PER_BIN * n

    bounds = set()
    attempts = 0
    while len(bounds) < n - 1:
        if attempts >= max_attempts:
            raise SamplingDivergenceError(
                f"Collected {len(bounds)} of {n - 1} distinct boundaries after {attempts} draws")
        attempts += 1
        bound = float(rng.normal(wp, wp / 2.0))
        if 0.0 < bound < wmax:
            bounds.add(bound)

    return np.array(sorted(bounds))


def sample_uniform_jittered(n: int, wmax: float, rng: np.random.Generator) -> np.ndarray:
    """
    Evenly spaced boundaries i * wmax / n, each shifted by up to +/-20% of the nominal bin width.

    Neighbouring boundaries stay at least 60% of a bin width apart, so the result is
    strictly increasing and inside (0, wmax) without any retries.
    """
    width = wmax / n
    nominal = width * np.arange(1, n)
    jitter = rng.uniform(-UNIFORM_JITTER_FRACTION, UNIFORM_JITTER_FRACTION, size=n - 1) * width
    return nominal + jitter


def partition_bins(n: int,
                   wp: float,
                   wmax: float,
                   rng: RandomSource = None,
                   sampling: str = "peak-weighted-normal",
                   max_attempts: Optional[int] = None) -> BinSet:
    """
    Splits [0, wmax) into `n` contiguous frequency bins.

    Args:
        n: Number of bins (>= 1). One bin has no interior boundaries and its center at wmax / 2.
        wp: Peak angular frequency [rad/s].
        wmax: Upper edge of the last bin [rad/s].
        rng: `numpy.random.Generator`, integer seed, or None for fresh OS entropy.
        sampling: "peak-weighted-normal" (rejection sampling around wp) or
            "uniform-jittered" (even spacing plus bounded jitter).
        max_attempts: Draw budget for rejection sampling.

    Returns:
        BinSet with `n - 1` boundaries and `n` center frequencies.

    Notes:
        - No global random state is used; passing the same seed reproduces the same bins.
    """
    if isinstance(n, bool) or int(n) != n or n < 1:
        raise InvalidParameterError(f"Number of bins must be a positive integer, got {n!r}")
    n = int(n)
    if sampling not in SAMPLING_SCHEMES:
        raise InvalidParameterError(f"Unknown sampling scheme: {sampling}")
    if not (wp > 0 and wmax > wp):
        raise InvalidParameterError(f"Require 0 < wp < wmax, got wp={wp}, wmax={wmax}")

    generator = _as_generator(rng)

    if n == 1:
        bounds = np.zeros(0)
    elif sampling == "peak-weighted-normal":
        bounds = sample_peak_weighted_normal(n, wp, wmax, generator, max_attempts=max_attempts)
    else:
        bounds = sample_uniform_jittered(n, wmax, generator)

    return BinSet(boundaries=bounds, wmax=wmax)


def center_frequencies(boundaries, wmax: float) -> np.ndarray:
    """
    Midpoint of each bin, using the implicit edges 0 and wmax for the first and last bins.

    Args:
        boundaries: Strictly increasing interior boundaries.
        wmax: Upper edge of the last bin.

    Returns:
        Array of len(boundaries) + 1 center frequencies.
    """
    return BinSet(boundaries=boundaries, wmax=wmax).centers.copy()
