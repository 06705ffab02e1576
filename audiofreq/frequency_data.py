"""
Frequency Data Module for AudioFreq
Result of an analysis run with time and frequency lookups
"""

import math

import numpy as np


class FrequencyData:
    """
    Snapshots of an audio file's spectrum plus their axes.

    data is a read-only uint8 array of shape
    (num_samples, frequency_bin_count). Row i is the spectrum at
    time_at_sample(i); column k is the band at frequency_at_bin(k).
    Attributes cannot be reassigned once the result is built.
    """

    def __init__(self, data, min_frequency, max_frequency, frequency_band_size,
                 frequency_bin_count, sample_time_length, duration=None):
        data = np.array(data, dtype=np.uint8, copy=True)
        if data.ndim != 2:
            data = data.reshape(-1, frequency_bin_count)
        data.flags.writeable = False

        self.data = data
        self.min_frequency = min_frequency
        self.max_frequency = max_frequency
        self.frequency_band_size = frequency_band_size
        self.frequency_bin_count = frequency_bin_count
        self.sample_time_length = sample_time_length
        self.duration = duration
        self._frozen = True

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"FrequencyData is read-only, cannot set {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError(f"FrequencyData is read-only, cannot delete {name!r}")

    @property
    def num_samples(self):
        return self.data.shape[0]

    def __len__(self):
        return self.num_samples

    def __iter__(self):
        return iter(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __repr__(self):
        return (f"FrequencyData(num_samples={self.num_samples}, "
                f"frequency_bin_count={self.frequency_bin_count}, "
                f"frequency_band_size={self.frequency_band_size:.3f}, "
                f"max_frequency={self.max_frequency}, "
                f"sample_time_length={self.sample_time_length})")

    def frequency_at_bin(self, bin_index):
        """Frequency (Hz) at the given bin index"""
        return self.min_frequency + (self.frequency_band_size * bin_index)

    def time_at_sample(self, sample_index):
        """Timestamp (seconds) at the given sample index"""
        return sample_index * self.sample_time_length

    def frequencies(self):
        return self.min_frequency + self.frequency_band_size * np.arange(self.frequency_bin_count)

    def times(self):
        return self.sample_time_length * np.arange(self.num_samples)

    def bin_at_frequency(self, frequency):
        """Index of the bin containing the given frequency"""
        if not self.min_frequency <= frequency <= self.max_frequency:
            raise IndexError(
                f"{frequency} Hz is outside [{self.min_frequency}, {self.max_frequency}] Hz")
        index = math.floor(round((frequency - self.min_frequency) / self.frequency_band_size, 9))
        return min(index, self.frequency_bin_count - 1)

    def sample_at_time(self, time):
        """Index of the latest snapshot taken at or before the given time"""
        index = math.floor(round(time / self.sample_time_length, 9))
        if not 0 <= index < self.num_samples:
            raise IndexError(f"No snapshot at {time}s ({self.num_samples} snapshots)")
        return index

    def magnitude_at(self, frequency, time):
        """Byte magnitude (0-255) at the given frequency and time"""
        return int(self.data[self.sample_at_time(time), self.bin_at_frequency(frequency)])
