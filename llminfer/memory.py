"""Memory managers that hand out raw byte blocks."""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Optional

from llminfer.dtypes import DeviceType

__all__ = ["MemcpyKind", "MemoryManager", "CPUMemoryManager", "cpu_memory_manager"]


class MemcpyKind(IntEnum):
    """Direction of a memory copy."""

    CPU2CPU = 0
    CPU2GPU = 1
    GPU2CPU = 2
    GPU2GPU = 3


def _bytes_view(block: Any) -> memoryview:
    return memoryview(block).cast("B")


class MemoryManager(ABC):
    """Allocates, frees, copies and clears blocks of memory on one device."""

    def __init__(self, device_type: DeviceType) -> None:
        self.device_type = DeviceType(device_type)

    @abstractmethod
    def allocate(self, size: int) -> Optional[bytearray]:
        """Return a new block of ``size`` bytes, or None for size 0."""

    @abstractmethod
    def deallocate(self, block: Optional[bytearray]) -> None:
        """Release a block obtained from :meth:`allocate`."""

    def memcpy(self, src: Any, dst: Any, count: int, kind: MemcpyKind) -> None:
        """Copy ``count`` bytes from ``src`` into ``dst``."""
        if src is None:
            raise ValueError("memcpy source is None")
        if dst is None:
            raise ValueError("memcpy destination is None")
        if not count:
            return
        try:
            kind = MemcpyKind(kind)
        except ValueError:
            raise ValueError(f"Unknown memcpy kind: {int(kind)}") from None
        if kind is not MemcpyKind.CPU2CPU:
            raise RuntimeError(f"no GPU device is available for {kind.name} copies")
        src_view = _bytes_view(src)
        dst_view = _bytes_view(dst)
        if count < 0 or count > src_view.nbytes or count > dst_view.nbytes:
            raise ValueError(
                f"cannot copy {count} bytes from {src_view.nbytes} into {dst_view.nbytes}"
            )
        dst_view[:count] = src_view[:count]

    def memset0(self, block: Any, size: int) -> None:
        """Set the first ``size`` bytes of ``block`` to zero."""
        if self.device_type is DeviceType.UNKNOWN:
            raise RuntimeError("memory manager has an unknown device type")
        if self.device_type is not DeviceType.CPU:
            raise RuntimeError("no GPU device is available to clear memory")
        view = _bytes_view(block)
        if size < 0 or size > view.nbytes:
            raise ValueError(f"cannot clear {size} bytes of a {view.nbytes}-byte block")
        view[:size] = bytes(size)


class CPUMemoryManager(MemoryManager):
    """Manager for host memory backed by bytearrays."""

    def __init__(self) -> None:
        super().__init__(DeviceType.CPU)
        self._live: dict[int, bytearray] = {}

    def allocate(self, size: int) -> Optional[bytearray]:
        if size < 0:
            raise ValueError(f"cannot allocate a negative size: {size}")
        if not size:
            return None
        block = bytearray(size)
        self._live[id(block)] = block
        return block

    def deallocate(self, block: Optional[bytearray]) -> None:
        if block is None:
            return
        if self._live.get(id(block)) is not block:
            raise ValueError("block was not allocated by this manager or is already freed")
        del self._live[id(block)]


@functools.lru_cache(maxsize=None)
def cpu_memory_manager() -> CPUMemoryManager:
    """Return the shared CPU memory manager."""
    return CPUMemoryManager()