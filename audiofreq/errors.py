"""
Errors raised by AudioFreq
"""


class AudioFreqError(Exception):
    """Base class for all AudioFreq errors"""


class DecodeFailure(AudioFreqError):
    """The audio could not be decoded into a usable sample buffer"""


class InvalidConfiguration(AudioFreqError, ValueError):
    """An analysis option is out of range"""


class InvalidFftSize(InvalidConfiguration):
    """FFT size is not a power of two between 2^5 and 2^15"""


class AnalyzerFailure(AudioFreqError):
    """The spectral analysis stage failed while running"""


class Cancelled(AudioFreqError):
    """The analysis was cancelled before the last snapshot was captured"""
