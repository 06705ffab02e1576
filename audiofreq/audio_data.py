"""
Audio Data Module for AudioFreq
Decoded audio buffer and the offline frequency analysis over it
"""

import numbers

import numpy as np

from .audio_loader import AudioLoader
from .config import AnalysisConfig
from .errors import DecodeFailure
from .frequency_axis import FrequencyAxis
from .frequency_data import FrequencyData
from .offline_scheduler import OfflineScheduler
from .spectral_analyzer import SpectralAnalyzer


class AudioData:
    """
    A fully decoded, read-only audio signal.

    buffer has shape (number_of_channels, length); a 1-D array is taken
    as a single channel.
    """

    def __init__(self, buffer, sample_rate, metadata=None):
        buffer = np.array(buffer, dtype=np.float32, copy=True)
        if buffer.ndim == 1:
            buffer = buffer[np.newaxis, :]
        if buffer.ndim != 2:
            raise DecodeFailure(f"Audio buffer must be 1-D or 2-D, got {buffer.ndim} dimensions")
        if buffer.shape[0] == 0 or buffer.shape[1] == 0:
            raise DecodeFailure("Audio buffer is empty")
        if not np.all(np.isfinite(buffer)):
            raise DecodeFailure("Audio buffer contains non-finite samples")
        if isinstance(sample_rate, bool) or not isinstance(sample_rate, numbers.Real) \
                or not sample_rate > 0:
            raise DecodeFailure(f"Sample rate must be positive, got {sample_rate}")
        buffer.flags.writeable = False

        self.buffer = buffer
        self.sample_rate = sample_rate
        self.number_of_channels = buffer.shape[0]
        self.length = buffer.shape[1]
        self.duration = self.length / sample_rate
        self.metadata = metadata or {}

    @classmethod
    def from_file(cls, audio_file, target_sr=None, loader=None):
        """Decode an audio file into an AudioData"""
        loader = loader or AudioLoader()
        decoded = loader.load_audio_universal(audio_file, target_sr)
        return cls(decoded['audio'], decoded['sr'], metadata=decoded['metadata'])

    def __repr__(self):
        return (f"AudioData(channels={self.number_of_channels}, length={self.length}, "
                f"sample_rate={self.sample_rate}, duration={self.duration:.3f}s)")

    def get_frequency_data(self, config=None, cancel_event=None, **options):
        """
        Returns audio frequency data for the whole signal.

        Options are the AnalysisConfig fields (sample_time_length, fft_size,
        max_frequency, smoothing_time_constant, ...); keyword options
        override the matching fields of config. Each snapshot is a
        normalized array of decibel values between 0 and 255, spread
        linearly from 0 Hz to the effective max frequency.
        """
        config = AnalysisConfig.from_options(config, **options)

        analyzer = SpectralAnalyzer(
            self.buffer,
            config.fft_size,
            smoothing_time_constant=config.smoothing_time_constant,
            min_decibels=config.min_decibels,
            max_decibels=config.max_decibels)
        axis = FrequencyAxis(self.sample_rate, analyzer.frequency_bin_count, config.max_frequency)
        scheduler = OfflineScheduler(
            self.duration, self.sample_rate, self.length,
            config.sample_time_length, render_quantum=config.render_quantum)

        snapshots = scheduler.run(analyzer, axis, cancel_event=cancel_event)

        return FrequencyData(
            data=snapshots,
            min_frequency=0,
            max_frequency=axis.max_frequency,
            frequency_band_size=axis.frequency_band_size,
            frequency_bin_count=axis.frequency_bin_count,
            sample_time_length=config.sample_time_length,
            duration=self.duration)
