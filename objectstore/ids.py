"""Snowflake-style identifiers for objects and blocks."""

from __future__ import annotations

import threading
import time

EPOCH_MS = 1288834974657
NODE_BITS = 10
STEP_BITS = 12
MAX_NODE = (1 << NODE_BITS) - 1
STEP_MASK = (1 << STEP_BITS) - 1
TIME_SHIFT = NODE_BITS + STEP_BITS

DEFAULT_NODE = 1


class IdGenerator:
    """Generates unique, time-ordered 63-bit identifiers for one node."""

    def __init__(self, node: int) -> None:
        if not 0 <= node <= MAX_NODE:
            raise ValueError(f"node number must be between 0 and {MAX_NODE}")
        self.node = node
        self._lock = threading.Lock()
        self._last_ms = 0
        self._step = 0

    @staticmethod
    def _now_ms() -> int:
        return time.time_ns() // 1_000_000

    def generate(self) -> int:
        """Return the next identifier; identifiers only ever increase."""
        with self._lock:
            now = max(self._now_ms(), self._last_ms)
            if now == self._last_ms:
                self._step = (self._step + 1) & STEP_MASK
                if self._step == 0:
                    while now <= self._last_ms:
                        now = self._now_ms()
            else:
                self._step = 0
            self._last_ms = now
            return (
                ((now - EPOCH_MS) << TIME_SHIFT)
                | (self.node << STEP_BITS)
                | self._step
            )


_generator: IdGenerator | None = None
_generator_lock = threading.Lock()


def init_identifier(node: int) -> IdGenerator:
    """Install the process-wide generator for the given node number."""
    global _generator
    generator = IdGenerator(node)
    with _generator_lock:
        _generator = generator
    return generator


def generate_id() -> int:
    """Generate an identifier with the process-wide generator."""
    global _generator
    with _generator_lock:
        if _generator is None:
            _generator = IdGenerator(DEFAULT_NODE)
        generator = _generator
    return generator.generate()


class _Identifier(int):
    __slots__ = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    __str__ = int.__repr__


class ObjectID(_Identifier):
    """Identifier of a stored object."""

    __slots__ = ()

    @classmethod
    def new(cls) -> "ObjectID":
        """Create a fresh object identifier."""
        return cls(generate_id())

    def is_valid(self) -> bool:
        return self > 0


class BlockID(_Identifier):
    """Identifier of a stored block."""

    __slots__ = ()

    @classmethod
    def new(cls) -> "BlockID":
        """Create a fresh block identifier."""
        return cls(generate_id())

    def is_valid(self) -> bool:
        return self > 0