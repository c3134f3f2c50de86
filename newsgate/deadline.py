import time
from dataclasses import dataclass


@dataclass(frozen=True)
class Deadline:
    """Absolute point in monotonic time after which a request is abandoned."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(time.monotonic() + seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    def budget(self, cap: float) -> float:
        """Timeout for one nested call: *cap*, shortened by the request deadline."""
        return min(cap, self.remaining())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0
