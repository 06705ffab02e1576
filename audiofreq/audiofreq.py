"""
AudioFreq - Offline Audio Frequency Analysis
Public entry points and command line interface
"""

import argparse
import asyncio
import glob
import os
import threading

import numpy as np

from .audio_data import AudioData
from .config import AnalysisConfig
from .errors import AudioFreqError
from .version import __full_name__

AUDIO_EXTENSIONS = ['*.wav', '*.mp3', '*.m4a', '*.flac', '*.aac', '*.ogg', '*.wma']


def get_audio_frequency_data(audio_file, config=None, target_sr=None, **options):
    """
    Returns audio frequency data for the given audio file.

    The configuration is validated before the file is decoded, so an
    invalid fft_size fails without touching the file.
    """
    config = AnalysisConfig.from_options(config, **options)
    audio_data = AudioData.from_file(audio_file, target_sr=target_sr)
    return audio_data.get_frequency_data(config)


async def compute_frequency_data(audio_data, config=None, cancel_event=None, **options):
    """
    Analyze audio_data without blocking the event loop.

    If the awaiting task is cancelled, the analysis stops at its next
    capture.
    """
    config = AnalysisConfig.from_options(config, **options)
    if cancel_event is None:
        cancel_event = threading.Event()
    try:
        return await asyncio.to_thread(
            audio_data.get_frequency_data, config, cancel_event=cancel_event)
    except asyncio.CancelledError:
        cancel_event.set()
        raise


def peak_frequencies(frequency_data):
    """Frequency of the loudest bin in each snapshot (None for silent ones)"""
    peaks = []
    for snapshot in frequency_data:
        if not snapshot.any():
            peaks.append(None)
        else:
            peaks.append(frequency_data.frequency_at_bin(int(np.argmax(snapshot))))
    return peaks


def find_audio_files(input_path):
    audio_files = []
    for ext in AUDIO_EXTENSIONS:
        audio_files.extend(glob.glob(os.path.join(input_path, ext)))
        audio_files.extend(glob.glob(os.path.join(input_path, ext.upper())))
    return sorted(set(audio_files))


def analyze_file(file_path, config, show_peaks=False):
    """Analyze one file and print its summary"""
    audio_data = AudioData.from_file(file_path)
    print(f"  Duration: {audio_data.duration:.2f}s, Sample rate: {audio_data.sample_rate}Hz, "
          f"Channels: {audio_data.number_of_channels}")

    frequency_data = audio_data.get_frequency_data(config)
    print(f"  Snapshots: {frequency_data.num_samples} every {frequency_data.sample_time_length:.4f}s")
    print(f"  Bins: {frequency_data.frequency_bin_count} x {frequency_data.frequency_band_size:.2f} Hz "
          f"(0-{frequency_data.max_frequency:.0f} Hz)")

    if show_peaks:
        for i, peak in enumerate(peak_frequencies(frequency_data)):
            label = "silent" if peak is None else f"{peak:.1f} Hz"
            print(f"    {frequency_data.time_at_sample(i):8.3f}s  {label}")

    print(f"  ✓ Analysis complete")
    return frequency_data


def process_input_path(input_path, config, show_peaks=False):
    """Process a single file or directory containing audio files"""
    results = {}

    if os.path.isfile(input_path):
        print(f"\nProcessing: {os.path.basename(input_path)}")
        results[input_path] = analyze_file(input_path, config, show_peaks)

    elif os.path.isdir(input_path):
        audio_files = find_audio_files(input_path)

        if not audio_files:
            print(f"\n✗ No audio files found in directory: {input_path}")
            return results

        print(f"\nFound {len(audio_files)} audio files in directory")

        for i, file_path in enumerate(audio_files):
            filename = os.path.basename(file_path)
            print(f"\n[{i+1}/{len(audio_files)}] Processing: {filename}")
            try:
                results[file_path] = analyze_file(file_path, config, show_peaks)
            except AudioFreqError as e:
                print(f"✗ Error processing {filename}: {e}")

    else:
        print(f"\n✗ Input path does not exist: {input_path}")

    return results


def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description=__full_name__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Computes the spectrum of a whole audio file at fixed time intervals,
without playing it back in real time.

Examples:
  %(prog)s audio.wav
  %(prog)s /path/to/audio/folder/
  %(prog)s recording.mp3 --fft-size 4096 --max-frequency 8000
  %(prog)s song.flac --sample-time-length 0.5 --peaks
        """
    )

    parser.add_argument('input', help='Audio file or folder to analyze')
    parser.add_argument('--sample-time-length', type=float,
                        help='Seconds between snapshots (default: 1/60)')
    parser.add_argument('--fft-size', type=int,
                        help='FFT window size, power of 2 from 32 to 32768 (default: 2048)')
    parser.add_argument('--max-frequency', type=float,
                        help='Highest frequency in Hz to keep (default: 22050)')
    parser.add_argument('--smoothing', type=float, dest='smoothing_time_constant',
                        help='Time smoothing between snapshots, 0 to 1 (default: 0.5)')
    parser.add_argument('--peaks', action='store_true',
                        help='Print the dominant frequency of every snapshot')

    args = parser.parse_args(argv)

    print("="*60)
    print(__full_name__)
    print("="*60)

    try:
        config = AnalysisConfig.from_options(
            sample_time_length=args.sample_time_length,
            fft_size=args.fft_size,
            max_frequency=args.max_frequency,
            smoothing_time_constant=args.smoothing_time_constant)
        results = process_input_path(args.input, config, args.peaks)
    except AudioFreqError as e:
        print(f"\n✗ Error: {e}")
        return 1

    if not results:
        print(f"\n✗ No files processed")
        return 1

    print(f"\n✓ Analysis complete - processed {len(results)} files")
    print("="*60)
    return 0
