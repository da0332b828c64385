"""Simulated physical memory.

A flat little-endian byte array starting at ``base``.  Accesses of 1,
2 or 4 bytes are supported; anything outside ``[base, base + size)``
raises :class:`MemoryAccessError`.
"""

import numpy as np

from .config import MEM_BASE, MEM_SIZE
from .errors import MemoryAccessError

ACCESS_SIZES = (1, 2, 4)


class VirtualMemory:
    """Byte-addressable guest memory backed by a numpy array."""

    def __init__(self, size: int = MEM_SIZE, base: int = MEM_BASE):
        self.size = size
        self.base = base
        self._mem = np.zeros(size, dtype=np.uint8)

    def _offset(self, addr: int, size: int) -> int:
        if size not in ACCESS_SIZES:
            raise ValueError(f"Access size must be 1, 2 or 4, got {size}")
        off = addr - self.base
        if off < 0 or off + size > self.size:
            raise MemoryAccessError(addr, size)
        return off

    def read_memory(self, addr: int, size: int) -> int:
        """Read *size* bytes at *addr* as an unsigned little-endian value."""
        off = self._offset(addr, size)
        return int.from_bytes(self._mem[off:off + size].tobytes(), 'little')

    def write_memory(self, addr: int, size: int, value: int):
        """Store the low *size* bytes of *value* at *addr*."""
        off = self._offset(addr, size)
        mask = (1 << (8 * size)) - 1
        data = (value & mask).to_bytes(size, 'little')
        self._mem[off:off + size] = np.frombuffer(data, dtype=np.uint8)

    def load(self, data: bytes, addr: int = None):
        """Copy an image into memory at *addr* (default: ``base``)."""
        if addr is None:
            addr = self.base
        off = addr - self.base
        if off < 0 or off + len(data) > self.size:
            raise MemoryAccessError(addr, len(data))
        self._mem[off:off + len(data)] = np.frombuffer(bytes(data), dtype=np.uint8)
