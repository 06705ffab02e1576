"""
Offline Scheduler Module for AudioFreq
Drives the analyzer through a whole signal, capturing at fixed offsets
"""

import math

from .errors import AnalyzerFailure, Cancelled


class OfflineScheduler:
    """
    Captures one snapshot every sample_time_length seconds.

    The capture offsets are fixed at construction. run() walks them in
    ascending order, moving the analyzer's read head forward to each one
    and capturing there, without waiting on a real-time clock.
    """

    def __init__(self, duration, sample_rate, length, sample_time_length, render_quantum=128):
        self.duration = duration
        self.sample_rate = sample_rate
        self.length = length
        self.sample_time_length = sample_time_length
        self.render_quantum = render_quantum
        self.num_samples = math.floor(duration / sample_time_length)

    def capture_offsets(self):
        """Capture times in seconds, strictly increasing"""
        return [i * self.sample_time_length for i in range(self.num_samples)]

    def frame_at(self, offset):
        """Frame index at which a capture for the given offset happens"""
        # Round away float noise (e.g. 735.0000000001) before snapping up
        blocks = math.ceil(round(offset * self.sample_rate / self.render_quantum, 9))
        return min(blocks * self.render_quantum, self.length)

    def capture_frames(self):
        return [self.frame_at(offset) for offset in self.capture_offsets()]

    def iter_captures(self):
        """Yield (index, offset, frame) in capture order"""
        for index, offset in enumerate(self.capture_offsets()):
            yield index, offset, self.frame_at(offset)

    def run(self, analyzer, axis, cancel_event=None):
        """
        Capture every snapshot and return them as one array.

        The array is only returned once the last snapshot has been written.
        cancel_event (anything with is_set()) is checked before each capture.
        """
        snapshots = axis.allocate(self.num_samples)

        for index, offset, frame in self.iter_captures():
            if cancel_event is not None and cancel_event.is_set():
                raise Cancelled(
                    f"Analysis cancelled at snapshot {index}/{self.num_samples} ({offset:.3f}s)")
            try:
                analyzer.advance_to(frame)
                snapshots[index] = axis.clip(analyzer.get_byte_frequency_data())
            except AnalyzerFailure:
                raise
            except (ValueError, ArithmeticError, MemoryError, RuntimeError) as e:
                raise AnalyzerFailure(
                    f"Spectral analysis failed at {offset:.3f}s: {e}") from e

        return snapshots
