"""
Analysis configuration for AudioFreq
Holds the tunable parameters of an offline frequency analysis run
"""

from dataclasses import dataclass, fields, replace

from .errors import InvalidConfiguration
from .spectral_analyzer import validate_fft_size

DEFAULT_SAMPLE_TIME_LENGTH = 1 / 60
DEFAULT_FFT_SIZE = 2 ** 11
DEFAULT_MAX_FREQUENCY = 44100 / 2
DEFAULT_SMOOTHING_TIME_CONSTANT = 0.5
DEFAULT_MIN_DECIBELS = -100.0
DEFAULT_MAX_DECIBELS = -30.0
DEFAULT_RENDER_QUANTUM = 128


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Parameters of one analysis run.

    sample_time_length: seconds between two snapshots; the number of
        snapshots is floor(duration / sample_time_length).
    fft_size: analysis window in frames, a power of two in [2^5, 2^15].
    max_frequency: highest frequency (Hz) kept in the snapshots. The
        effective value is min(sample_rate / 2, max_frequency).
    smoothing_time_constant: 0..1, 0 disables averaging with the
        previous snapshot.
    min_decibels / max_decibels: dB range mapped onto the 0..255 bytes.
    render_quantum: capture offsets snap up to multiples of this many frames.
    """
    sample_time_length: float = DEFAULT_SAMPLE_TIME_LENGTH
    fft_size: int = DEFAULT_FFT_SIZE
    max_frequency: float = DEFAULT_MAX_FREQUENCY
    smoothing_time_constant: float = DEFAULT_SMOOTHING_TIME_CONSTANT
    min_decibels: float = DEFAULT_MIN_DECIBELS
    max_decibels: float = DEFAULT_MAX_DECIBELS
    render_quantum: int = DEFAULT_RENDER_QUANTUM

    def __post_init__(self):
        validate_fft_size(self.fft_size)

        if not self.sample_time_length > 0:
            raise InvalidConfiguration(
                f"sample_time_length must be > 0, got {self.sample_time_length}")
        if not self.max_frequency > 0:
            raise InvalidConfiguration(
                f"max_frequency must be > 0, got {self.max_frequency}")
        if not 0 <= self.smoothing_time_constant <= 1:
            raise InvalidConfiguration(
                "smoothing_time_constant must be between 0 and 1, "
                f"got {self.smoothing_time_constant}")
        if not self.min_decibels < self.max_decibels:
            raise InvalidConfiguration(
                f"min_decibels ({self.min_decibels}) must be lower than "
                f"max_decibels ({self.max_decibels})")
        if isinstance(self.render_quantum, bool) or not isinstance(self.render_quantum, int) \
                or self.render_quantum < 1:
            raise InvalidConfiguration(
                f"render_quantum must be a positive integer, got {self.render_quantum}")

    @classmethod
    def from_options(cls, config=None, **options):
        """Build a config from an optional base config plus keyword overrides"""
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise InvalidConfiguration(f"Unknown analysis option(s): {', '.join(sorted(unknown))}")

        overrides = {k: v for k, v in options.items() if v is not None}
        if config is None:
            return cls(**overrides)
        return replace(config, **overrides) if overrides else config
