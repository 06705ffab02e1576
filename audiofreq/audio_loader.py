"""
Audio Loader Module for AudioFreq
Handles universal audio format decoding
"""

import os
from math import gcd

import numpy as np
import soundfile as sf
from scipy.io import wavfile
from scipy.signal import resample_poly

from .errors import DecodeFailure


def _to_float32_channels(x):
    """Return float32 samples shaped (channels, frames)."""
    x = np.asarray(x)
    if x.ndim == 1:
        x = x[np.newaxis, :]
    elif x.ndim == 2:
        # decoders hand back (frames, channels)
        x = x.T
    else:
        raise DecodeFailure(f"Unexpected sample array with {x.ndim} dimensions")
    return np.ascontiguousarray(x, dtype=np.float32)


def _normalize_pcm(x):
    """Scale integer PCM to [-1, 1] floats by dtype"""
    if x.dtype == np.uint8:
        return (x.astype(np.float64) - 128.0) / 128.0
    if x.dtype == np.int16:
        return x.astype(np.float64) / 32768.0
    if x.dtype == np.int32:
        return x.astype(np.float64) / 2147483648.0
    if x.dtype in (np.float32, np.float64):
        return x.astype(np.float64, copy=False)
    raise DecodeFailure(f"Unsupported sample format: {x.dtype}")


def _resample_if_needed(x, sr, target_sr):
    """Polyphase resampling along the frame axis if target_sr set and != sr."""
    if target_sr is None or target_sr == sr or x.size == 0:
        return x, sr
    g = gcd(int(target_sr), int(sr))
    up = int(target_sr // g)
    down = int(sr // g)
    y = resample_poly(x, up, down, axis=-1)
    return y.astype(np.float32), int(target_sr)


class AudioLoader:
    """Universal audio decoder with metadata extraction"""

    def load_audio_universal(self, filepath, target_sr=None):
        """
        Decode an audio file, keeping every channel.

        Returns dict with:
          - audio (float32, shape (channels, frames))
          - sr
          - metadata {format, original_sr, bit_depth, channels, codec}
          - file_size (MB)

        Raises DecodeFailure if no decoder can read the file.
        """
        if not os.path.isfile(filepath):
            raise DecodeFailure(f"Audio file not found: {filepath}")

        result = {
            'audio': None,
            'sr': None,
            'metadata': {
                'format': os.path.splitext(filepath)[1][1:].upper(),
                'original_sr': None,
                'bit_depth': None,
                'channels': None,
                'codec': None
            },
            'file_size': os.path.getsize(filepath) / (1024*1024)
        }

        last_error = None
        for name, method in (("soundfile", self._load_soundfile),
                             ("pydub", self._load_pydub),
                             ("scipy wavfile", self._load_wavfile)):
            try:
                audio, sr = method(filepath, result['metadata'])
            except Exception as e:
                last_error = e
                print(f"  {name} failed: {e}. Falling back...")
                continue

            if audio.size == 0:
                raise DecodeFailure(f"No audio frames in {filepath}")
            audio, sr = _resample_if_needed(audio, sr, target_sr)
            result['audio'] = audio
            result['sr'] = sr
            return result

        raise DecodeFailure(f"Could not load audio file {filepath}: {last_error}") from last_error

    def _load_soundfile(self, filepath, metadata):
        """libsndfile formats (WAV, FLAC, OGG, ...)"""
        data, fs = sf.read(filepath, dtype='float32', always_2d=True)
        info = sf.info(filepath)
        metadata['original_sr'] = fs
        metadata['channels'] = data.shape[1]
        metadata['codec'] = f"{info.subtype_info} (via soundfile)"
        return _to_float32_channels(data), fs

    def _load_pydub(self, filepath, metadata):
        """Compressed formats through ffmpeg"""
        from pydub import AudioSegment

        seg = AudioSegment.from_file(filepath)
        metadata['original_sr'] = seg.frame_rate
        metadata['bit_depth'] = seg.sample_width * 8
        metadata['channels'] = seg.channels
        metadata['codec'] = 'via ffmpeg/pydub'

        # Standardize to 16-bit PCM for clean NumPy conversion
        seg = seg.set_sample_width(2)
        x = np.frombuffer(seg.raw_data, dtype=np.int16).astype(np.float64) / 32768.0
        x = x.reshape(-1, seg.channels)
        return _to_float32_channels(x), seg.frame_rate

    def _load_wavfile(self, filepath, metadata):
        """Plain PCM WAV"""
        sr, x = wavfile.read(filepath)
        metadata['original_sr'] = sr
        metadata['bit_depth'] = x.dtype.itemsize * 8
        metadata['channels'] = x.shape[1] if x.ndim > 1 else 1
        metadata['codec'] = 'PCM (via scipy)'
        return _to_float32_channels(_normalize_pcm(x)), sr
