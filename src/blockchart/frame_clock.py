import time


class FrameClock:
    """
    Paces a redraw loop at a fixed rate.

    Attributes:
        interval_seconds: Time between two frames.
        started_at: The monotonic time the clock was started (set by start()).
        frames: Number of frames ticked so far.
    """

    def __init__(self, fps: float = 60.0):
        """
        Args:
            fps: Frames per second. Must be positive.
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.interval_seconds = 1.0 / fps
        self.frames = 0

    def __repr__(self) -> str:
        if hasattr(self, "started_at"):
            return f"FrameClock(interval_seconds={self.interval_seconds}, frames={self.frames}, elapsed={self.elapsed})"
        return f"FrameClock(interval_seconds={self.interval_seconds})"

    def start(self) -> float:
        """
        Start the clock.

        Returns:
            The monotonic time when the clock was started.
        """
        self.started_at = time.monotonic()
        self.frames = 0
        return self.started_at

    @property
    def elapsed(self) -> float:
        """
        Seconds since start().

        Raises:
            RuntimeError: If the clock has not been started yet.
        """
        if not hasattr(self, "started_at"):
            raise RuntimeError("FrameClock must be started before we know the elapsed time.")
        return time.monotonic() - self.started_at

    @property
    def next_frame_at(self) -> float:
        """
        The monotonic time the next frame is due.

        Raises:
            RuntimeError: If the clock has not been started yet.
        """
        if not hasattr(self, "started_at"):
            raise RuntimeError("FrameClock must be started before we know the next frame.")
        return self.started_at + (self.frames + 1) * self.interval_seconds

    @property
    def time_remaining(self) -> float:
        """ Seconds until the next frame is due, never negative """
        return max(0.0, self.next_frame_at - time.monotonic())

    def tick(self) -> float:
        """
        Wait for the next frame. Frames that were missed are skipped rather
        than drawn late in a burst.

        Returns:
            Seconds spent sleeping.
        """
        remaining = self.time_remaining
        if remaining > 0:
            time.sleep(remaining)
        now = time.monotonic()
        self.frames = max(self.frames + 1, int((now - self.started_at) / self.interval_seconds))
        return remaining
