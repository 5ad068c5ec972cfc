"""
File input/output and text reporting for the wavepaddle package.
"""

import os
from typing import Optional, Tuple
import warnings

import numpy as np
import pandas as pd

from .exceptions import InvalidParameterError
from .structs import PaddleSpectrum, WavemakerParams


def sweep_spectrum(spectrum, step: float = 0.001, w_max: Optional[float] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Samples the spectral density on a regular frequency grid.

    Args:
        spectrum: JonswapSpectrum to sample.
        step: Grid spacing [rad/s]. The grid starts at `step`, never at 0 where S is undefined.
        w_max: Last frequency of the grid, defaults to the spectrum's wmax.

    Returns:
        (w, amp) arrays of equal length.
    """
    if step is None or not np.isfinite(step) or step <= 0:
        raise InvalidParameterError(f"Sweep step must be a finite positive number, got {step!r}")
    if w_max is None:
        w_max = spectrum.wmax
    if not w_max >= step:
        raise InvalidParameterError(f"Sweep upper bound {w_max} is below the step {step}")

    n = int(np.floor(w_max / step + 1e-9))
    w = step * np.arange(1, n + 1)
    return w, spectrum.density(w)


def write_spectrum_table(filename: str, w: np.ndarray, amp: np.ndarray) -> None:
    """
    Writes a two-column, tab-delimited `w  amp` table.

    Args:
        filename: Path to the output text file. An existing file is overwritten.
        w: Angular frequencies [rad/s].
        amp: Spectral density at each frequency.

    Returns:
        None
    """
    w = np.asarray(w, dtype=np.float64).ravel()
    amp = np.asarray(amp, dtype=np.float64).ravel()
    if w.shape != amp.shape:
        raise ValueError("w and amp must be the same length")

    with open(filename, "w") as f:
        f.write("w\tamp\n")
        for wi, ai in zip(w, amp):
            f.write(f"{float(wi)!r}\t{float(ai)!r}\n")


def load_spectrum_table(filename: str) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reads a table written by `write_spectrum_table`.

    Returns:
        (w, amp) arrays.
    """
    data = np.loadtxt(filename, delimiter="\t", skiprows=1, ndmin=2)
    return data[:, 0], data[:, 1]


def bins_to_dataframe(result: PaddleSpectrum) -> pd.DataFrame:
    """
    Tabulates a pipeline result, one row per bin.

    Columns: lower, upper, center, width, energy, paddle_amplitude
    (and stroke_budget when the run was given a max_stroke).
    """
    bins = result.bins
    df = pd.DataFrame({
        "lower": bins.edges[:-1],
        "upper": bins.edges[1:],
        "center": bins.centers,
        "width": bins.widths,
        "energy": result.energy,
        "paddle_amplitude": result.paddle_amplitudes,
    })
    if result.stroke_budget is not None:
        df["stroke_budget"] = result.stroke_budget
    df.index.name = "bin"
    return df


def format_bin_table(result: PaddleSpectrum) -> str:
    """Human-readable bin listing: range, center frequency and amplitudes."""
    df = bins_to_dataframe(result)
    table = pd.DataFrame({
        "Bin": [f"{lo:.4g} - {hi:.4g}" for lo, hi in zip(df["lower"], df["upper"])],
        "W_c": df["center"],
        "Amp": df["energy"],
        "Stroke": df["paddle_amplitude"],
    })
    return table.to_string(index=False, float_format=lambda v: f"{v:.6g}")


def write_bin_table(filename: str, result: PaddleSpectrum) -> None:
    """Writes the per-bin table of a pipeline result to CSV, overwriting any existing file."""
    bins_to_dataframe(result).to_csv(filename)


def load_wavemaker_params(path: str) -> WavemakerParams:
    """
    Loads run configuration from a two-column `key,value` CSV file.

    Args:
        path: Path to the CSV file. The first row is a header, e.g. `key,value`.

    Returns:
        WavemakerParams built from the listed keys; unlisted keys keep their defaults.

    Expected CSV Format:
        key,value
        n_bins,10
        dw,0.001
        depth,1.2
        kind,flap

    Notes:
        - Empty values are treated as missing.
        - Unknown keys raise InvalidParameterError.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Parameter file not found: {path}")

    df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    if df.shape[1] < 2:
        raise InvalidParameterError(f"Expected two columns (key, value) in {path}")

    casts = {
        "n_bins": int,
        "dw": float,
        "depth": float,
        "kind": str,
        "sampling": str,
        "max_stroke": float,
        "seed": int,
        "sweep_step": float,
        "sweep_max": float,
    }

    kwargs = {}
    for key, value in zip(df.iloc[:, 0], df.iloc[:, 1]):
        key = str(key).strip()
        if key not in casts:
            raise InvalidParameterError(f"Unknown parameter '{key}' in {path}")
        if pd.isna(value) or str(value).strip() == "":
            continue
        if key in kwargs:
            warnings.warn(f"Parameter '{key}' listed more than once in {path}; using the last value")
        try:
            kwargs[key] = casts[key](str(value).strip())
        except ValueError as e:
            raise InvalidParameterError(f"Bad value for '{key}' in {path}: {value!r}") from e

    return WavemakerParams(**kwargs)
