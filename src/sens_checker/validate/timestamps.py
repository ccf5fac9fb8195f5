from ..core.statuses import TimestampStatus

class TimestampTracker:
    """
    Single forward pass over one timestamp stream (depth or color).

    A stream is available once any timestamp is non-zero, and monotonic while
    no timestamp is smaller than its predecessor (repeats are allowed).
    """

    def __init__(self) -> None:
        self.last_seen = 0
        self.any_available = False
        self.monotonic = True

    def update(self, t: int) -> None:
        if t > 0:
            self.any_available = True
        if t < self.last_seen:
            self.monotonic = False
        self.last_seen = t

    @property
    def status(self) -> TimestampStatus:
        if not self.any_available:
            return TimestampStatus.NOT_AVAILABLE
        return TimestampStatus.GOOD if self.monotonic else TimestampStatus.NOT_MONOTONIC
