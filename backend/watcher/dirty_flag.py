"""
ModulePush Dirty Flag.

Coalescing signal shared by the change monitor and the flush scheduler.
Requires Python 3.11+.
"""

import threading


class DirtyFlag:
    """
    Thread-safe "unflushed changes exist" flag.

    Only presence matters, never how many times it was set. The flag
    starts set so the first flush always uploads.
    """

    def __init__(self, initial: bool = True) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def set(self) -> None:
        """Mark changes as pending. Setting an already set flag is a no-op."""
        with self._lock:
            self._value = True

    def test_and_clear(self) -> bool:
        """Clear the flag and return whether it was set."""
        with self._lock:
            was_set = self._value
            self._value = False
        return was_set

    @property
    def is_set(self) -> bool:
        """Current value, for inspection only."""
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"DirtyFlag(is_set={self.is_set})"
