"""
Energy integration and wavemaker transfer computations for the wavepaddle package.
"""

import math
import warnings
from typing import Optional, Union

import numpy as np

from .binning import RandomSource, partition_bins
from .exceptions import DegenerateBinError, InvalidParameterError
from .structs import GRAVITY, INTEGRATION_MODES, WAVEMAKER_KINDS, BinSet, PaddleSpectrum, WavemakerParams


# Below this kh the transfer function is treated as singular
KH_MIN = 1e-6


def trapezoid_bin_energy(spectrum, lo: float, hi: float, dw: float) -> float:
    """
    Composite trapezoidal integral of the spectrum over one bin [lo, hi).

    Samples start at `lo` (at `dw` when lo == 0, since S(0) is undefined) and advance by `dw`;
    the last sample is clamped to `hi`, so the final step may be shorter than `dw`.

    Args:
        spectrum: Object with a vectorised `density(w)` method.
        lo: Lower bin edge [rad/s].
        hi: Upper bin edge [rad/s].
        dw: Integration step [rad/s].

    Returns:
        Bin energy (m^2).
    """
    start = dw if lo == 0.0 else lo
    if start >= hi:
        return 0.0

    n_steps = int(math.ceil((hi - start) / dw))
    x = np.minimum(start + dw * np.arange(n_steps + 1), hi)
    y = spectrum.density(x)
    return float(np.sum(np.diff(x) * (y[:-1] + y[1:]) / 2.0))


def _normalise_to_budget(energy: np.ndarray, max_stroke: float) -> np.ndarray:
    if max_stroke is None or not np.isfinite(max_stroke) or max_stroke <= 0:
        raise InvalidParameterError(f"max_stroke must be a finite positive number, got {max_stroke!r}")
    total = np.sum(energy)
    if not total > 0.0:
        raise InvalidParameterError("Total bin energy is zero; cannot rescale to max_stroke")
    return energy / total * max_stroke


def integrate_bins(spectrum,
                   bins: BinSet,
                   dw: float,
                   mode: str = "energy",
                   max_stroke: Optional[float] = None) -> np.ndarray:
    """
    Integrates the spectrum over every bin with a fixed-step composite trapezoid rule.

    Args:
        spectrum: JonswapSpectrum (or any object with a vectorised `density`).
        bins: Frequency partition to integrate over.
        dw: Integration step [rad/s], > 0.
        mode: "energy" for raw bin energy, "density" for bin energy divided by bin width.
        max_stroke: In "energy" mode, rescale the result so it sums to this budget.

    Returns:
        Fresh array of len(bins.boundaries) + 1 values.

    Notes:
        - The raw energies together approximate the integral of S over [dw, wmax).
        - A step wider than the narrowest bin still yields one (clamped) trapezoid per bin,
          but accuracy suffers, so a RuntimeWarning is issued.
    """
    if dw is None or not np.isfinite(dw) or dw <= 0:
        raise InvalidParameterError(f"Integration step dw must be a finite positive number, got {dw!r}")
    if mode not in INTEGRATION_MODES:
        raise InvalidParameterError(f"Unknown integration mode: {mode}")
    if mode == "density" and max_stroke is not None:
        raise InvalidParameterError("max_stroke rescaling only applies to mode='energy'")

    widths = bins.widths
    if dw > np.min(widths):
        warnings.warn(f"Integration step {dw:.6g} exceeds the narrowest bin width {np.min(widths):.6g}; "
                      "bin energies will be coarse.", RuntimeWarning)

    edges = bins.edges
    energy = np.array([trapezoid_bin_energy(spectrum, edges[i], edges[i + 1], dw)
                       for i in range(bins.n_bins)])

    if mode == "density":
        return energy / widths
    if max_stroke is not None:
        return _normalise_to_budget(energy, max_stroke)
    return energy


def dispersion_kh(wc: Union[float, np.ndarray], depth: float, g: float = GRAVITY) -> Union[float, np.ndarray]:
    """
    Explicit approximation of the linear dispersion relation w^2 = g k tanh(kh).

    kh = k0 h (1 - exp(-(k0 h)^1.25))^-0.4, with the deep-water wavenumber k0 = w^2 / g.
    Tends to k0 h in deep water and to w sqrt(h/g) in shallow water.

    Args:
        wc: Angular frequency or array of them [rad/s].
        depth: Water depth [m], > 0.
        g: Gravitational acceleration [m/s^2].

    Returns:
        Dimensionless depth kh, same shape as `wc`. Zero frequency maps to kh = 0.
    """
    if depth is None or not np.isfinite(depth) or depth <= 0:
        raise InvalidParameterError(f"Water depth must be a finite positive number, got {depth!r}")

    k0h = np.asarray(wc, dtype=np.float64) ** 2 / g * depth
    with np.errstate(divide='ignore', invalid='ignore'):
        kh = np.where(k0h > 0.0, k0h * (-np.expm1(-k0h ** 1.25)) ** -0.4, 0.0)

    if kh.ndim == 0:
        return float(kh)
    return kh


def transfer_function(kh: Union[float, np.ndarray], kind: str = "flap") -> Union[float, np.ndarray]:
    """
    Wave-height to stroke ratio H/S of a wavemaker (Biesel transfer function).

    piston: 2 (cosh 2kh - 1) / (sinh 2kh + 2kh)
    flap:   4 (sinh kh / kh) (kh sinh kh - cosh kh + 1) / (sinh 2kh + 2kh)

    Args:
        kh: Dimensionless depth, scalar or array.
        kind: "flap" (hinged at the bed) or "piston".

    Returns:
        H/S with the shape of `kh`.

    Raises:
        DegenerateBinError: If any kh is below KH_MIN or not finite.
    """
    if kind not in WAVEMAKER_KINDS:
        raise InvalidParameterError(f"Unknown wavemaker kind: {kind}")

    kh_arr = np.asarray(kh, dtype=np.float64)
    if np.any(~(kh_arr >= KH_MIN)) or np.any(~np.isfinite(kh_arr)):
        raise DegenerateBinError(f"kh must be finite and at least {KH_MIN:g}, got {kh!r}")

    # Numerator and denominator scaled by 2 exp(-2kh) so deep water does not overflow
    m1 = -np.expm1(-kh_arr)
    m2 = -np.expm1(-2.0 * kh_arr)
    m4 = -np.expm1(-4.0 * kh_arr)
    denom = m4 + 4.0 * kh_arr * np.exp(-2.0 * kh_arr)

    if kind == "piston":
        HoS = 2.0 * m2**2 / denom
    else:
        HoS = 2.0 * m2 * (kh_arr * m2 - m1**2) / (kh_arr * denom)

    if HoS.ndim == 0:
        return float(HoS)
    return HoS


def to_paddle_amplitude(energy: float, width: float, wc: float, depth: float, kind: str = "flap") -> float:
    """
    Paddle stroke amplitude for one bin.

    Args:
        energy: Bin energy density S_i [m^2 s/rad] (bin energy divided by bin width).
        width: Bin width [rad/s].
        wc: Bin center frequency [rad/s].
        depth: Water depth [m].
        kind: "flap" or "piston".

    Returns:
        sqrt(2 * energy * width) / (H/S) [m].
    """
    if energy < 0:
        raise InvalidParameterError(f"Bin energy must be non-negative, got {energy}")
    if not width > 0:
        raise InvalidParameterError(f"Bin width must be positive, got {width}")

    kh = dispersion_kh(wc, depth)
    return math.sqrt(2.0 * energy * width) / transfer_function(kh, kind)


def paddle_amplitudes(energy: np.ndarray,
                      widths: np.ndarray,
                      centers: np.ndarray,
                      depth: float,
                      kind: str = "flap") -> np.ndarray:
    """
    Vector form of `to_paddle_amplitude` over all bins.

    Args:
        energy: Per-bin energy density.
        widths: Per-bin width [rad/s].
        centers: Per-bin center frequency [rad/s].
        depth: Water depth [m].
        kind: "flap" or "piston".

    Returns:
        Fresh array of stroke amplitudes [m], one per bin.

    Raises:
        DegenerateBinError: Naming the first bin whose kh is below KH_MIN.
    """
    energy = np.asarray(energy, dtype=np.float64)
    widths = np.asarray(widths, dtype=np.float64)
    centers = np.asarray(centers, dtype=np.float64)

    if not (energy.shape == widths.shape == centers.shape):
        raise ValueError("energy/widths/centers must be the same length")
    if np.any(energy < 0):
        raise InvalidParameterError("Bin energies must be non-negative")
    if np.any(~(widths > 0)):
        raise InvalidParameterError("Bin widths must be positive")

    kh = np.atleast_1d(dispersion_kh(centers, depth))
    bad = np.flatnonzero(~(kh >= KH_MIN) | ~np.isfinite(kh))
    if bad.size:
        i = int(bad[0])
        raise DegenerateBinError(f"Bin {i} (center {centers.flat[i]:.6g} rad/s) has degenerate kh={kh[i]:.3g}")

    return np.sqrt(2.0 * energy * widths) / transfer_function(kh, kind).reshape(energy.shape)


def compute_paddle_spectrum(spectrum,
                            params: Optional[WavemakerParams] = None,
                            rng: RandomSource = None) -> PaddleSpectrum:
    """
    Runs the full chain: partition -> integrate (energy density) -> wavemaker transfer.

    Args:
        spectrum: JonswapSpectrum to reproduce.
        params: Run configuration, defaults to WavemakerParams().
        rng: Random source for the bin boundaries; falls back to `params.seed`.

    Returns:
        PaddleSpectrum holding the bins, energy densities, stroke amplitudes and, when
        `params.max_stroke` is set, the raw energies rescaled to that budget.
    """
    if params is None:
        params = WavemakerParams()
    if rng is None:
        rng = params.seed

    bins = partition_bins(params.n_bins, spectrum.wp, spectrum.wmax, rng=rng, sampling=params.sampling)
    raw = integrate_bins(spectrum, bins, params.dw, mode="energy")
    energy = raw / bins.widths
    amplitudes = paddle_amplitudes(energy, bins.widths, bins.centers, params.depth, params.kind)

    stroke_budget = None
    if params.max_stroke is not None:
        stroke_budget = _normalise_to_budget(raw, params.max_stroke)

    return PaddleSpectrum(
        spectrum=spectrum,
        bins=bins,
        energy=energy,
        mode="density",
        paddle_amplitudes=amplitudes,
        depth=params.depth,
        kind=params.kind,
        stroke_budget=stroke_budget
    )
