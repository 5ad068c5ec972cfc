"""
wavepaddle - JONSWAP spectra to wavemaker paddle strokes

This package provides tools for turning a target sea state into wavemaker drive amplitudes.
It builds a JONSWAP spectrum from spectral parameters or from wind speed and fetch, splits the
frequency range into bins, integrates the energy in each bin, and converts it to a flap or
piston paddle stroke with linear wave theory.
"""

import os

# Get the repository root directory (2 levels up from this file)
repo_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

from .exceptions import (
    WavepaddleError,
    InvalidParameterError,
    SamplingDivergenceError,
    DegenerateBinError
)

from .structs import (
    GRAVITY,
    SpectrumParameters,
    BinSet,
    PaddleSpectrum,
    AmplitudeAccumulator,
    WavemakerParams
)

from .spectrum import (
    JonswapSpectrum,
    derive_wind_parameters,
    spectral_moment,
    significant_wave_height
)

from .binning import partition_bins, center_frequencies

from .computations import (
    integrate_bins,
    dispersion_kh,
    transfer_function,
    to_paddle_amplitude,
    paddle_amplitudes,
    compute_paddle_spectrum
)

from .fileio import (
    sweep_spectrum,
    write_spectrum_table,
    load_spectrum_table,
    bins_to_dataframe,
    format_bin_table,
    write_bin_table,
    load_wavemaker_params
)

from .graphics import plot_paddle_spectrum

__version__ = "0.1.0"
