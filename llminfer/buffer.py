"""Byte buffers owned by, or borrowed from, a memory manager."""

from __future__ import annotations

import contextlib
from typing import Any, Optional

from llminfer.dtypes import DeviceType
from llminfer.memory import MemcpyKind, MemoryManager

__all__ = ["Buffer"]


_COPY_KINDS = {
    (DeviceType.CPU, DeviceType.CPU): MemcpyKind.CPU2CPU,
    (DeviceType.GPU, DeviceType.CPU): MemcpyKind.GPU2CPU,
    (DeviceType.CPU, DeviceType.GPU): MemcpyKind.CPU2GPU,
    (DeviceType.GPU, DeviceType.GPU): MemcpyKind.GPU2GPU,
}


class Buffer:
    """A block of memory of a fixed byte size.

    When no data is given and a memory manager is, the buffer allocates its
    own block and releases it again through that manager. Data handed in from
    outside is borrowed and never released by the buffer.
    """

    def __init__(
        self,
        byte_size: int = 0,
        memory_manager: Optional[MemoryManager] = None,
        data: Any = None,
        use_external: bool = False,
    ) -> None:
        self.byte_size = byte_size
        self.memory_manager = memory_manager
        self.data = data
        self.device_type = DeviceType.UNKNOWN
        self._use_external = use_external
        if self.data is None and memory_manager is not None:
            self.device_type = memory_manager.device_type
            self._use_external = False
            self.data = memory_manager.allocate(byte_size)

    def allocate(self) -> bool:
        """Allocate a fresh block through the memory manager.

        Returns False when there is no manager, the size is zero, or the
        manager could not provide memory.
        """
        if self.memory_manager is None or self.byte_size == 0:
            return False
        self._use_external = False
        self.data = self.memory_manager.allocate(self.byte_size)
        return self.data is not None

    def copy_from(self, other: "Buffer") -> None:
        """Copy as many bytes from ``other`` as fit into this buffer."""
        if self.memory_manager is None:
            raise RuntimeError("buffer has no memory manager to copy with")
        if other is None or other.data is None:
            raise ValueError("source buffer holds no data")
        if DeviceType.UNKNOWN in (other.device_type, self.device_type):
            raise ValueError("cannot copy between buffers of unknown device type")
        size = min(self.byte_size, other.byte_size)
        kind = _COPY_KINDS[(DeviceType(other.device_type), DeviceType(self.device_type))]
        self.memory_manager.memcpy(other.data, self.data, size, kind)

    def release(self) -> None:
        """Return an owned block to its manager; borrowed data is kept."""
        if self._use_external:
            return
        if self.data is not None and self.memory_manager is not None:
            block, self.data = self.data, None
            self.memory_manager.deallocate(block)

    def is_external(self) -> bool:
        """Whether the data is borrowed rather than owned."""
        return self._use_external

    def __enter__(self) -> "Buffer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __del__(self) -> None:
        with contextlib.suppress(Exception):
            self.release()

    def __repr__(self) -> str:
        return (
            f"Buffer(byte_size={self.byte_size}, device_type={self.device_type.name}, "
            f"external={self._use_external})"
        )