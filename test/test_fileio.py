"""
Unit tests for wavepaddle.fileio module.
"""

import unittest
import os
import shutil
import tempfile
import numpy as np
import pandas as pd
from wavepaddle.fileio import (
    sweep_spectrum,
    write_spectrum_table,
    load_spectrum_table,
    bins_to_dataframe,
    format_bin_table,
    write_bin_table,
    load_wavemaker_params
)
from wavepaddle.spectrum import JonswapSpectrum
from wavepaddle.computations import compute_paddle_spectrum
from wavepaddle.structs import WavemakerParams
from wavepaddle.exceptions import InvalidParameterError


class TestSpectrumTable(unittest.TestCase):
    """Test cases for sweep_spectrum, write_spectrum_table and load_spectrum_table."""

    def setUp(self):
        """Set up test data."""
        self.temp_dir = tempfile.mkdtemp()
        self.spectrum = JonswapSpectrum(alpha=0.0081, wp=0.8, wmax=3.0)

    def tearDown(self):
        """Clean up temporary files."""
        shutil.rmtree(self.temp_dir)

    def test_sweep_starts_at_step(self):
        """The grid starts at step and ends at wmax."""
        w, amp = sweep_spectrum(self.spectrum, step=0.01)

        self.assertAlmostEqual(w[0], 0.01)
        self.assertAlmostEqual(w[-1], 3.0)
        self.assertEqual(w.size, 300)
        np.testing.assert_array_almost_equal(amp, self.spectrum.density(w))

    def test_sweep_custom_upper_bound(self):
        """w_max overrides the spectrum's wmax."""
        w, _ = sweep_spectrum(self.spectrum, step=0.1, w_max=1.0)
        self.assertEqual(w.size, 10)
        self.assertAlmostEqual(w[-1], 1.0)

    def test_sweep_invalid_step(self):
        """Non-positive steps are rejected."""
        with self.assertRaises(InvalidParameterError):
            sweep_spectrum(self.spectrum, step=0.0)

    def test_write_header_and_rows(self):
        """The table has a `w amp` header and one tab-delimited row per sample."""
        path = os.path.join(self.temp_dir, "jonswap_spec.txt")
        w, amp = sweep_spectrum(self.spectrum, step=0.5)
        write_spectrum_table(path, w, amp)

        with open(path, 'r') as f:
            lines = f.read().splitlines()

        self.assertEqual(lines[0], "w\tamp")
        self.assertEqual(len(lines), w.size + 1)
        self.assertEqual(len(lines[1].split("\t")), 2)

    def test_write_overwrites(self):
        """Writing twice replaces the earlier contents."""
        path = os.path.join(self.temp_dir, "jonswap_spec.txt")
        write_spectrum_table(path, [0.1, 0.2, 0.3], [1.0, 2.0, 3.0])
        write_spectrum_table(path, [0.5], [4.0])

        w, amp = load_spectrum_table(path)
        np.testing.assert_array_equal(w, [0.5])
        np.testing.assert_array_equal(amp, [4.0])

    def test_load_round_trip(self):
        """Values read back are the values written."""
        path = os.path.join(self.temp_dir, "jonswap_spec.txt")
        w, amp = sweep_spectrum(self.spectrum, step=0.25)
        write_spectrum_table(path, w, amp)

        w_loaded, amp_loaded = load_spectrum_table(path)
        np.testing.assert_array_equal(w_loaded, w)
        np.testing.assert_array_equal(amp_loaded, amp)

    def test_write_length_mismatch(self):
        """w and amp must align."""
        with self.assertRaises(ValueError):
            write_spectrum_table(os.path.join(self.temp_dir, "x.txt"), [0.1, 0.2], [1.0])


class TestBinTable(unittest.TestCase):
    """Test cases for bins_to_dataframe, format_bin_table and write_bin_table."""

    def setUp(self):
        """Set up a pipeline result."""
        self.temp_dir = tempfile.mkdtemp()
        spectrum = JonswapSpectrum.from_wind(10.0, 100000.0)
        self.result = compute_paddle_spectrum(spectrum, WavemakerParams(n_bins=5, seed=3))

    def tearDown(self):
        """Clean up temporary files."""
        shutil.rmtree(self.temp_dir)

    def test_dataframe_columns(self):
        """One row per bin with the expected columns."""
        df = bins_to_dataframe(self.result)

        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(len(df), 5)
        self.assertEqual(list(df.columns),
                         ["lower", "upper", "center", "width", "energy", "paddle_amplitude"])
        self.assertEqual(df.index.name, "bin")
        self.assertEqual(df["lower"].iloc[0], 0.0)
        self.assertAlmostEqual(df["upper"].iloc[-1], self.result.bins.wmax)
        np.testing.assert_array_almost_equal(df["paddle_amplitude"].values, self.result.paddle_amplitudes)

    def test_dataframe_stroke_budget_column(self):
        """A max_stroke run adds the stroke_budget column."""
        spectrum = JonswapSpectrum.from_wind(10.0, 100000.0)
        result = compute_paddle_spectrum(spectrum, WavemakerParams(n_bins=5, seed=3, max_stroke=0.5))

        df = bins_to_dataframe(result)
        self.assertIn("stroke_budget", df.columns)
        self.assertAlmostEqual(df["stroke_budget"].sum(), 0.5)

    def test_format_bin_table(self):
        """The text table has a header line and one line per bin."""
        text = format_bin_table(self.result)
        lines = text.splitlines()

        self.assertEqual(len(lines), 6)
        for column in ["Bin", "W_c", "Amp", "Stroke"]:
            self.assertIn(column, lines[0])

    def test_write_bin_table(self):
        """The CSV reads back into the same table."""
        path = os.path.join(self.temp_dir, "jonswap_bins.csv")
        write_bin_table(path, self.result)

        df = pd.read_csv(path, index_col="bin")
        self.assertEqual(len(df), 5)
        np.testing.assert_array_almost_equal(df["center"].values, self.result.bins.centers)


class TestLoadWavemakerParams(unittest.TestCase):
    """Test cases for load_wavemaker_params function."""

    def setUp(self):
        """Set up test data."""
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "wavemaker_params.csv")

    def tearDown(self):
        """Clean up temporary files."""
        shutil.rmtree(self.temp_dir)

    def _write(self, text):
        with open(self.path, 'w') as f:
            f.write(text)

    def test_load_params(self):
        """Listed keys are cast and the rest keep their defaults."""
        self._write("key,value\n"
                    "n_bins,20\n"
                    "dw,0.0005\n"
                    "depth,1.5\n"
                    "kind,piston\n"
                    "seed,42\n"
                    "max_stroke,0.3\n")

        params = load_wavemaker_params(self.path)

        self.assertIsInstance(params, WavemakerParams)
        self.assertEqual(params.n_bins, 20)
        self.assertEqual(params.dw, 0.0005)
        self.assertEqual(params.depth, 1.5)
        self.assertEqual(params.kind, "piston")
        self.assertEqual(params.seed, 42)
        self.assertEqual(params.max_stroke, 0.3)
        self.assertEqual(params.sampling, "peak-weighted-normal")
        self.assertIsNone(params.sweep_max)

    def test_empty_value_keeps_default(self):
        """Blank values are treated as missing."""
        self._write("key,value\nn_bins,\ndepth,2.0\n")

        params = load_wavemaker_params(self.path)
        self.assertEqual(params.n_bins, 10)
        self.assertEqual(params.depth, 2.0)

    def test_duplicate_key_warns(self):
        """A repeated key warns and the last value wins."""
        self._write("key,value\nn_bins,5\nn_bins,7\n")

        with self.assertWarns(UserWarning):
            params = load_wavemaker_params(self.path)
        self.assertEqual(params.n_bins, 7)

    def test_unknown_key(self):
        """Unknown keys are rejected."""
        self._write("key,value\nn_bins,5\nstroke_limit,1.0\n")
        with self.assertRaises(InvalidParameterError):
            load_wavemaker_params(self.path)

    def test_bad_value(self):
        """Values that do not parse are rejected."""
        self._write("key,value\ndepth,deep\n")
        with self.assertRaises(InvalidParameterError):
            load_wavemaker_params(self.path)

    def test_invalid_value_after_cast(self):
        """Parsed values still go through WavemakerParams validation."""
        self._write("key,value\nkind,plunger\n")
        with self.assertRaises(InvalidParameterError):
            load_wavemaker_params(self.path)

    def test_missing_file(self):
        """A missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_wavemaker_params(os.path.join(self.temp_dir, "nope.csv"))


if __name__ == '__main__':
    unittest.main()
