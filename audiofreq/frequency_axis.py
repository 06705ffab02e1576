"""
Frequency Axis Module for AudioFreq
Maps analyzer bins onto a clipped, linear Hz axis
"""

import math

import numpy as np


class FrequencyAxis:
    """Linear frequency axis from 0 Hz up to an effective maximum frequency"""

    def __init__(self, sample_rate, native_bin_count, max_frequency):
        self.sample_rate = sample_rate
        self.native_bin_count = native_bin_count
        self.nyquist = sample_rate / 2

        self.max_frequency = min(self.nyquist, max_frequency)
        self.frequency_band_size = self.nyquist / native_bin_count
        self.frequency_bin_count = min(
            native_bin_count,
            math.ceil(self.max_frequency / self.frequency_band_size))

    def clip(self, raw):
        """Drop the bins above max_frequency (truncation, no re-binning)"""
        return raw[:self.frequency_bin_count]

    def allocate(self, num_samples):
        """Zeroed snapshot array, one row per capture"""
        return np.zeros((num_samples, self.frequency_bin_count), dtype=np.uint8)
