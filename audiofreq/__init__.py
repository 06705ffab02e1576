"""
AudioFreq - Offline Audio Frequency Analysis

Computes the spectrum of a whole audio recording at fixed time
intervals, faster than real time.
"""

from .version import __version__, __full_name__
__author__ = "AudioFreq"

# Import main components for package use
from .audio_data import AudioData
from .audio_loader import AudioLoader
from .audiofreq import compute_frequency_data, get_audio_frequency_data
from .config import AnalysisConfig
from .errors import (AnalyzerFailure, AudioFreqError, Cancelled, DecodeFailure,
                     InvalidConfiguration, InvalidFftSize)
from .frequency_axis import FrequencyAxis
from .frequency_data import FrequencyData
from .offline_scheduler import OfflineScheduler
from .spectral_analyzer import SpectralAnalyzer

__all__ = [
    'AudioData',
    'AudioLoader',
    'AnalysisConfig',
    'FrequencyAxis',
    'FrequencyData',
    'OfflineScheduler',
    'SpectralAnalyzer',
    'compute_frequency_data',
    'get_audio_frequency_data',
    'AudioFreqError',
    'AnalyzerFailure',
    'Cancelled',
    'DecodeFailure',
    'InvalidConfiguration',
    'InvalidFftSize',
]
