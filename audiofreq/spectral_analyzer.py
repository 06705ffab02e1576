"""
Spectral Analyzer Module for AudioFreq
Handles windowed FFT analysis of a decoded signal
"""

import numbers

import numpy as np
import scipy.fft
import scipy.signal

from .errors import AnalyzerFailure, InvalidFftSize

MIN_FFT_SIZE = 2 ** 5
MAX_FFT_SIZE = 2 ** 15


def validate_fft_size(fft_size):
    """Raise InvalidFftSize unless fft_size is a power of two in [2^5, 2^15]"""
    if isinstance(fft_size, bool) or not isinstance(fft_size, numbers.Integral):
        raise InvalidFftSize(f"FFT size must be an integer, got {fft_size!r}")
    fft_size = int(fft_size)
    if fft_size < MIN_FFT_SIZE or fft_size > MAX_FFT_SIZE or fft_size & (fft_size - 1):
        raise InvalidFftSize(
            f"FFT size must be a power of 2 between {MIN_FFT_SIZE} and {MAX_FFT_SIZE}, got {fft_size}")
    return fft_size


class SpectralAnalyzer:
    """
    Byte-scaled spectrum of the fft_size frames ending at a read head.

    The read head only moves forward (see advance_to). The first read at
    each new read head position blends the new magnitudes with the
    previous ones using smoothing_time_constant, so one instance must be
    used for exactly one pass over the signal. Further reads at the same
    position return the cached spectrum without smoothing again.
    """

    def __init__(self, buffer, fft_size, smoothing_time_constant=0.5,
                 min_decibels=-100.0, max_decibels=-30.0):
        self.fft_size = validate_fft_size(fft_size)
        self.smoothing_time_constant = float(smoothing_time_constant)
        self.min_decibels = float(min_decibels)
        self.max_decibels = float(max_decibels)

        # Channels are merged before analysis
        buffer = np.asarray(buffer)
        if buffer.ndim > 1:
            self.signal = buffer.mean(axis=0, dtype=np.float64)
        else:
            self.signal = buffer.astype(np.float64)

        self.frequency_bin_count = self.fft_size // 2
        self.window = scipy.signal.get_window('blackman', self.fft_size)
        self.position = 0
        self._block = np.zeros(self.fft_size)
        self._smoothed = np.zeros(self.frequency_bin_count)
        self._analyzed_position = None
        self._db = None

    def advance_to(self, frame):
        """Move the read head forward to the given frame index"""
        frame = int(frame)
        if frame < self.position:
            raise AnalyzerFailure(
                f"Cannot rewind analyzer from frame {self.position} to {frame}")
        self.position = min(frame, len(self.signal))

    def _time_domain_block(self):
        """The fft_size frames ending at the read head, zero-padded at the start"""
        block = self._block
        block.fill(0.0)
        start = max(self.position - self.fft_size, 0)
        recent = self.signal[start:self.position]
        if len(recent):
            block[self.fft_size - len(recent):] = recent
        return block

    def get_float_frequency_data(self):
        """Smoothed spectrum in dB for the current read head (-inf for silence)"""
        if self._analyzed_position == self.position:
            return self._db.copy()

        windowed = self._time_domain_block() * self.window
        spectrum = scipy.fft.rfft(windowed)[:self.frequency_bin_count]
        magnitude = np.abs(spectrum) / self.fft_size

        if not np.all(np.isfinite(magnitude)):
            raise AnalyzerFailure(f"Non-finite spectrum at frame {self.position}")

        tau = self.smoothing_time_constant
        self._smoothed = tau * self._smoothed + (1.0 - tau) * magnitude

        with np.errstate(divide='ignore'):
            self._db = 20.0 * np.log10(self._smoothed)
        self._analyzed_position = self.position
        return self._db.copy()

    def get_byte_frequency_data(self, out=None):
        """
        Spectrum for the current read head scaled to bytes.

        dB values in [min_decibels, max_decibels] map linearly onto 0..255;
        anything outside is clamped. If out is given, only its first
        min(len(out), frequency_bin_count) entries are written.
        """
        db = self.get_float_frequency_data()
        scale = 255.0 / (self.max_decibels - self.min_decibels)
        scaled = np.clip((db - self.min_decibels) * scale, 0.0, 255.0)
        data = scaled.astype(np.uint8)

        if out is None:
            return data
        n = min(len(out), self.frequency_bin_count)
        out[:n] = data[:n]
        return out
