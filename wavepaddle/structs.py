"""
Data structures for the wavepaddle package.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union
import numpy as np

from .exceptions import InvalidParameterError


# Gravitational acceleration [m/s^2]
GRAVITY = 9.81

SAMPLING_SCHEMES = ("peak-weighted-normal", "uniform-jittered")
WAVEMAKER_KINDS = ("flap", "piston")
INTEGRATION_MODES = ("energy", "density")


def _require_positive(name: str, value) -> None:
    if value is None or not np.isfinite(value) or value <= 0:
        raise InvalidParameterError(f"{name} must be a finite positive number, got {value!r}")


@dataclass(frozen=True)
class SpectrumParameters:
    """
    Shape parameters of a JONSWAP spectrum.

    Attributes:
        alpha (float): Energy scale (Phillips constant), > 0
        wp (float): Peak angular frequency [rad/s], > 0
        wmax (float): Upper integration bound [rad/s], must exceed `wp`
        gamma (float): Peak enhancement factor
        s1 (float): Peak width for w <= wp
        s2 (float): Peak width for w > wp
        g (float): Gravitational acceleration [m/s^2]
        vel10 (Optional[float]): Wind speed at 10 m [m/s], kept for reporting when derived
        F (Optional[float]): Fetch length [m], kept for reporting when derived

    Notes:
        - Instances are immutable; derive a new one with `dataclasses.replace` if needed.
        - `vel10` and `F` play no role in the density once alpha and wp are known.
    """

    alpha: float
    wp: float
    wmax: float
    gamma: float = 3.3
    s1: float = 0.07
    s2: float = 0.09
    g: float = GRAVITY
    vel10: Optional[float] = None
    F: Optional[float] = None

    def __post_init__(self):
        for name in ("alpha", "wp", "wmax", "gamma", "s1", "s2", "g"):
            _require_positive(name, getattr(self, name))
        if self.wmax <= self.wp:
            raise InvalidParameterError(f"wmax ({self.wmax}) must be greater than wp ({self.wp})")
        if self.vel10 is not None:
            _require_positive("vel10", self.vel10)
        if self.F is not None:
            _require_positive("F", self.F)

    @property
    def is_wind_derived(self) -> bool:
        return self.vel10 is not None and self.F is not None


@dataclass(frozen=True, eq=False)
class BinSet:
    """
    Partition of [0, wmax) into contiguous frequency bins.

    Attributes:
        boundaries (np.ndarray): Strictly increasing interior boundaries, all inside (0, wmax)
        wmax (float): Upper edge of the last bin

    Notes:
        - `n - 1` boundaries give exactly `n` bins: [0, b_1), [b_1, b_2), ..., [b_{n-1}, wmax).
        - Arrays are stored read-only; a BinSet is never mutated after creation.
    """

    boundaries: np.ndarray
    wmax: float
    edges: np.ndarray = field(init=False, repr=False)
    centers: np.ndarray = field(init=False, repr=False)
    widths: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        _require_positive("wmax", self.wmax)
        bounds = np.array(self.boundaries, dtype=np.float64).ravel()

        if bounds.size and not np.all(np.isfinite(bounds)):
            raise InvalidParameterError("Bin boundaries must be finite")
        if bounds.size and (bounds[0] <= 0.0 or bounds[-1] >= self.wmax):
            raise InvalidParameterError(f"Bin boundaries must lie strictly inside (0, {self.wmax})")
        if np.any(np.diff(bounds) <= 0.0):
            raise InvalidParameterError("Bin boundaries must be unique and sorted ascending")

        edges = np.concatenate(([0.0], bounds, [float(self.wmax)]))
        centers = 0.5 * (edges[:-1] + edges[1:])
        widths = np.diff(edges)

        for arr in (bounds, edges, centers, widths):
            arr.flags.writeable = False

        object.__setattr__(self, "boundaries", bounds)
        object.__setattr__(self, "wmax", float(self.wmax))
        object.__setattr__(self, "edges", edges)
        object.__setattr__(self, "centers", centers)
        object.__setattr__(self, "widths", widths)

    @property
    def n_bins(self) -> int:
        return self.boundaries.size + 1

    def __len__(self):
        return self.n_bins


class PaddleSpectrum:
    """
    Output of one wavemaker pipeline run.

    Attributes:
        spectrum: The JonswapSpectrum the run was computed from
        bins (BinSet): Frequency partition used
        energy (np.ndarray): Per-bin amplitude vector in `mode`
        mode (str): "energy" or "density"
        paddle_amplitudes (np.ndarray): Stroke amplitude per bin [m]
        depth (float): Water depth at the paddle [m]
        kind (str): Wavemaker type, "flap" or "piston"
        stroke_budget (Optional[np.ndarray]): Raw bin energy rescaled to sum to `max_stroke`, if requested
    """

    def __init__(self,
                 spectrum,
                 bins: BinSet,
                 energy: np.ndarray,
                 mode: str,
                 paddle_amplitudes: np.ndarray,
                 depth: float,
                 kind: str,
                 stroke_budget: Optional[np.ndarray] = None):
        """Initialize PaddleSpectrum with the provided data."""
        self.spectrum = spectrum
        self.bins = bins
        self.energy = energy
        self.mode = mode
        self.paddle_amplitudes = paddle_amplitudes
        self.depth = depth
        self.kind = kind
        self.stroke_budget = stroke_budget

    @property
    def n_bins(self) -> int:
        return self.bins.n_bins

    def __str__(self):
        from .spectrum import significant_wave_height

        lines = [
            str(self.spectrum),
            f"Nbins\t: {self.n_bins}",
            f"Amps\t: [ 1 x {self.energy.size} ] ({self.mode})",
            f"W_c\t: [ 1 x {self.bins.centers.size} ]",
            f"Stroke\t: [ 1 x {self.paddle_amplitudes.size} ] ({self.kind}, depth {self.depth:g} m)",
            f"Hm0\t: {significant_wave_height(self.spectrum):.6g}",
        ]
        return "\n".join(lines)


class AmplitudeAccumulator:
    """
    Opt-in container that appends amplitude vectors across repeated runs.

    The pipeline functions always return fresh arrays. Callers that want results
    from several runs concatenated collect them here and call `reset` between
    independent experiments.
    """

    def __init__(self):
        self._chunks: List[np.ndarray] = []

    def extend(self, values: Union[Sequence[float], np.ndarray]) -> None:
        self._chunks.append(np.array(values, dtype=np.float64).ravel())

    def reset(self) -> None:
        self._chunks = []

    @property
    def values(self) -> np.ndarray:
        if not self._chunks:
            return np.zeros(0)
        return np.concatenate(self._chunks)

    def __len__(self):
        return sum(chunk.size for chunk in self._chunks)


class WavemakerParams:
    """
    Encapsulates the user-defined inputs of a wavemaker signal computation.

    Attributes:
        n_bins (int): Number of frequency bins
        dw (float): Trapezoidal integration step [rad/s]
        depth (float): Water depth at the wavemaker [m]
        kind (str): Wavemaker type, "flap" or "piston"
        sampling (str): Bin partition scheme, "peak-weighted-normal" or "uniform-jittered"
        max_stroke (Optional[float]): Budget the raw bin energies are rescaled to sum to
        seed (Optional[int]): Seed for the bin-boundary random source
        sweep_step (float): Sample spacing of the written spectrum table [rad/s]
        sweep_max (Optional[float]): Upper bound of the spectrum table, defaults to wmax
    """

    def __init__(self,
                 n_bins: int = 10,
                 dw: float = 0.001,
                 depth: float = 1.0,
                 kind: str = "flap",
                 sampling: str = "peak-weighted-normal",
                 max_stroke: Optional[float] = None,
                 seed: Optional[int] = None,
                 sweep_step: float = 0.001,
                 sweep_max: Optional[float] = None):
        """Initialize WavemakerParams and validate every field."""
        if isinstance(n_bins, bool) or int(n_bins) != n_bins or n_bins < 1:
            raise InvalidParameterError(f"n_bins must be a positive integer, got {n_bins!r}")
        _require_positive("dw", dw)
        _require_positive("depth", depth)
        _require_positive("sweep_step", sweep_step)
        if kind not in WAVEMAKER_KINDS:
            raise InvalidParameterError(f"Unknown wavemaker kind: {kind}")
        if sampling not in SAMPLING_SCHEMES:
            raise InvalidParameterError(f"Unknown sampling scheme: {sampling}")
        if max_stroke is not None:
            _require_positive("max_stroke", max_stroke)
        if sweep_max is not None:
            _require_positive("sweep_max", sweep_max)

        self.n_bins = int(n_bins)
        self.dw = float(dw)
        self.depth = float(depth)
        self.kind = kind
        self.sampling = sampling
        self.max_stroke = None if max_stroke is None else float(max_stroke)
        self.seed = None if seed is None else int(seed)
        self.sweep_step = float(sweep_step)
        self.sweep_max = None if sweep_max is None else float(sweep_max)

    def __repr__(self):
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"WavemakerParams({fields})"
