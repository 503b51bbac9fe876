"""A deterministic counting number source for packet identifiers."""

from __future__ import annotations

from dataclasses import dataclass

_U16_MAX = 0xFFFF


@dataclass
class CountingRng:
    """Counts upwards from its state, wrapping back to 1 past 65535."""

    state: int = 0

    def next_u64(self) -> int:
        self.state += 1
        if self.state > _U16_MAX:
            self.state = 1
        return self.state

    def next_u32(self) -> int:
        return self.next_u64() & 0xFFFFFFFF

    def fill_bytes(self, size: int) -> bytes:
        """Return `size` bytes drawn from the counter, little endian."""
        if size < 0:
            raise ValueError("size must not be negative")
        out = bytearray()
        while size - len(out) >= 8:
            out += self.next_u64().to_bytes(8, "little")
        rest = size - len(out)
        if rest > 4:
            out += self.next_u64().to_bytes(8, "little")[:rest]
        elif rest > 0:
            out += self.next_u32().to_bytes(4, "little")[:rest]
        return bytes(out)