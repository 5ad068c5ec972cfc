"""
Error types raised by the wavepaddle package.
"""


class WavepaddleError(Exception):
    """Base class for all wavepaddle errors."""


class InvalidParameterError(WavepaddleError, ValueError):
    """A physical or numerical input is outside its valid range."""


class SamplingDivergenceError(WavepaddleError, RuntimeError):
    """Bin-boundary sampling did not collect enough distinct boundaries."""


class DegenerateBinError(WavepaddleError, ArithmeticError):
    """A bin's wavemaker transfer function is singular (kh close to zero)."""
