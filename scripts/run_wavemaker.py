#!/usr/bin/env python3
"""
Batch driver: JONSWAP sea state -> binned spectrum -> wavemaker paddle strokes.

Edit the knobs below and run the script. Writes the sampled spectrum to
`jonswap_spec.txt` and the per-bin table to `jonswap_bins.csv` next to this file.
"""

import os
import sys

# Add the parent directory to the path so we can import wavepaddle
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import wavepaddle

# ------------------------ config / knobs ------------------------
localpath = os.path.dirname(os.path.abspath(__file__))

# Sea state: set use_wind = False to use the explicit parameters instead
use_wind = True
vel10 = 10.0        # wind speed at 10 m [m/s]
fetch = 100000.0    # fetch [m]

alpha = 0.0081
wp    = 0.8
wmax  = 3.0
gamma = 3.3
s1    = 0.07
s2    = 0.09

# Optional key,value CSV overriding the run parameters below
params_file = os.path.join(localpath, "wavemaker_params.csv")

params = wavepaddle.WavemakerParams(
    n_bins=10,
    dw=0.001,
    depth=1.0,
    kind="flap",
    sampling="peak-weighted-normal",
    max_stroke=0.75,
    seed=None,
    sweep_step=0.001,
    sweep_max=3.0
)

spectrum_file = os.path.join(localpath, "jonswap_spec.txt")
bins_file     = os.path.join(localpath, "jonswap_bins.csv")
genplots = False

# ------------------------ run ------------------------
if os.path.isfile(params_file):
    params = wavepaddle.load_wavemaker_params(params_file)

if use_wind:
    spectrum = wavepaddle.JonswapSpectrum.from_wind(vel10, fetch)
else:
    spectrum = wavepaddle.JonswapSpectrum(alpha, wp, wmax, gamma, s1, s2)

result = wavepaddle.compute_paddle_spectrum(spectrum, params)

print(result)
print("\n------------------------------------\n")
print(wavepaddle.format_bin_table(result))

w, amp = wavepaddle.sweep_spectrum(spectrum, params.sweep_step, params.sweep_max)
wavepaddle.write_spectrum_table(spectrum_file, w, amp)
wavepaddle.write_bin_table(bins_file, result)
print(f"\nSpectrum written to {spectrum_file}")
print(f"Bin table written to {bins_file}")

if genplots:
    wavepaddle.plot_paddle_spectrum(spectrum, result)
