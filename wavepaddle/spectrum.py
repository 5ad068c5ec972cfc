"""
JONSWAP spectral model.
"""

import math
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from scipy import integrate

from .exceptions import InvalidParameterError
from .structs import GRAVITY, BinSet, SpectrumParameters


def calc_alpha(vel10: float, F: float, g: float = GRAVITY) -> float:
    """
    Energy scale of a fetch-limited JONSWAP sea.

    Args:
        vel10: Wind speed at 10 m [m/s].
        F: Fetch length [m].
        g: Gravitational acceleration [m/s^2].

    Returns:
        alpha = 0.076 * ((vel10^2 / F) / g)^0.22
    """
    _check_wind(vel10, F)
    return 0.076 * ((vel10**2 / F) / g) ** 0.22


def calc_wp(vel10: float, F: float, g: float = GRAVITY) -> float:
    """Peak angular frequency [rad/s]: wp = 22 * cbrt(g^2 / (vel10 * F))."""
    _check_wind(vel10, F)
    return 22.0 * np.cbrt(g**2 / (vel10 * F))


def calc_wmax(wp: float) -> float:
    """Upper bound of the modelled frequency range [rad/s]: 33 * wp / (2 pi)."""
    return 33.0 * wp / (2.0 * math.pi)


def derive_wind_parameters(vel10: float, F: float, g: float = GRAVITY) -> SpectrumParameters:
    """
    Builds the spectrum parameters of a developing wind sea from wind speed and fetch.

    gamma, s1 and s2 take the mean JONSWAP values 3.3, 0.7 and 0.9.
    """
    alpha = calc_alpha(vel10, F, g)
    wp = calc_wp(vel10, F, g)
    return SpectrumParameters(
        alpha=alpha,
        wp=wp,
        wmax=calc_wmax(wp),
        gamma=3.3,
        s1=0.7,
        s2=0.9,
        g=g,
        vel10=vel10,
        F=F
    )


def _check_wind(vel10: float, F: float) -> None:
    if vel10 is None or not np.isfinite(vel10) or vel10 <= 0:
        raise InvalidParameterError(f"vel10 must be strictly positive, got {vel10!r}")
    if F is None or not np.isfinite(F) or F <= 0:
        raise InvalidParameterError(f"Fetch F must be strictly positive, got {F!r}")


class JonswapSpectrum:
    """
    JONSWAP wave energy spectrum S(w) over angular frequency.

    Attributes:
        params (SpectrumParameters): Immutable shape parameters

    Notes:
        - S(w) = alpha g^2 w^-5 exp(-1.2 (wp/w)^4) gamma^r(w), with
          r(w) = exp(-((w - wp) / (s(w) wp))^2 / 2) and s(w) = s1 for w <= wp, s2 otherwise.
        - Only defined for w > 0.
    """

    def __init__(self,
                 alpha: float,
                 wp: float,
                 wmax: float,
                 gamma: float = 3.3,
                 s1: float = 0.07,
                 s2: float = 0.09):
        """Initialize the spectrum from its six shape parameters."""
        self.params = SpectrumParameters(alpha=alpha, wp=wp, wmax=wmax, gamma=gamma, s1=s1, s2=s2)

    @classmethod
    def from_parameters(cls, params: SpectrumParameters) -> "JonswapSpectrum":
        spectrum = cls(params.alpha, params.wp, params.wmax, params.gamma, params.s1, params.s2)
        spectrum.params = params
        return spectrum

    @classmethod
    def from_wind(cls, vel10: float, F: float) -> "JonswapSpectrum":
        """
        Builds the spectrum from wind speed at 10 m [m/s] and fetch [m].

        alpha, wp and wmax are derived in closed form; vel10 and F are kept for reporting.
        """
        return cls.from_parameters(derive_wind_parameters(vel10, F))

    @property
    def wp(self) -> float:
        return self.params.wp

    @property
    def wmax(self) -> float:
        return self.params.wmax

    def density(self, w: Union[float, Sequence[float], np.ndarray]) -> Union[float, np.ndarray]:
        """
        Evaluates the spectral density.

        Args:
            w: A single angular frequency or a sequence of them [rad/s]. All values must be > 0.

        Returns:
            A float for scalar input, otherwise an array where element i is S(w[i]).
        """
        p = self.params
        w_arr = np.asarray(w, dtype=np.float64)
        if np.any(~(w_arr > 0.0)):
            raise InvalidParameterError("Spectral density is only defined for w > 0")

        s = np.where(w_arr <= p.wp, p.s1, p.s2)
        r = np.exp(-((w_arr - p.wp) / (s * p.wp)) ** 2 / 2.0)
        decay = np.exp(-1.2 * (p.wp / w_arr) ** 4)
        S = p.alpha * p.g**2 * w_arr**-5 * decay * p.gamma**r

        if S.ndim == 0:
            return float(S)
        return S

    def __call__(self, w):
        return self.density(w)

    def partition(self, n: int, rng=None, sampling: str = "peak-weighted-normal") -> BinSet:
        """Splits [0, wmax) into `n` bins around this spectrum's peak. See `binning.partition_bins`."""
        from .binning import partition_bins
        return partition_bins(n, self.wp, self.wmax, rng=rng, sampling=sampling)

    def integrate(self, bins: BinSet, dw: float, mode: str = "energy",
                  max_stroke: Optional[float] = None) -> np.ndarray:
        """Per-bin trapezoidal energy. See `computations.integrate_bins`."""
        from .computations import integrate_bins
        return integrate_bins(self, bins, dw, mode=mode, max_stroke=max_stroke)

    def __str__(self):
        p = self.params
        lines = [
            "jonswapSpec params:",
            f"alpha\t: {p.alpha:.6g}",
            f"gamma\t: {p.gamma:.6g}",
            f"w_p\t: {p.wp:.6g}",
            f"w_max\t: {p.wmax:.6g}",
            f"s1\t: {p.s1:.6g} | (w <= w_p)",
            f"s2\t: {p.s2:.6g} | (w > w_p)",
        ]
        if p.is_wind_derived:
            lines.append(f"vel10\t: {p.vel10:.6g}")
            lines.append(f"F\t: {p.F:.6g}")
        return "\n".join(lines)

    def __repr__(self):
        return f"JonswapSpectrum({self.params!r})"


def spectral_moment(spectrum: JonswapSpectrum, n: int = 0,
                    limits: Optional[Tuple[float, float]] = None) -> float:
    """
    n-th spectral moment m_n = integral of w^n S(w) dw.

    Args:
        spectrum: Spectrum to integrate.
        n: Moment order.
        limits: Integration bounds, defaults to (0, wmax]. The lower bound is evaluated
            just above zero because S(0) is undefined.

    Returns:
        The moment, computed adaptively with `scipy.integrate.quad`.
    """
    lo, hi = limits if limits is not None else (0.0, spectrum.wmax)
    lo = max(lo, 1e-6 * spectrum.wp)
    points = [spectrum.wp] if lo < spectrum.wp < hi else None
    value, _ = integrate.quad(lambda w: w**n * spectrum.density(w), lo, hi, points=points, limit=200)
    return value


def significant_wave_height(spectrum: JonswapSpectrum) -> float:
    """Spectral significant wave height Hm0 = 4 sqrt(m0) [m]."""
    return 4.0 * math.sqrt(spectral_moment(spectrum, 0))
