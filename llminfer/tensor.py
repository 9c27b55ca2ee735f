"""Typed n-dimensional tensors stored in memory-manager buffers."""

from __future__ import annotations

import math
import operator
from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np

from llminfer.buffer import Buffer
from llminfer.dtypes import DataType, DeviceType, data_type_size
from llminfer.memory import MemoryManager, cpu_memory_manager

__all__ = ["Tensor", "make_scalar", "is_scalar_compatible"]

_NUMPY_TYPES = {
    DataType.FP32: np.float32,
    DataType.INT8: np.int8,
    DataType.INT32: np.int32,
}

Number = Union[int, float]


def _normalize_dims(dims: Union[int, Iterable[int], None]) -> tuple[int, ...]:
    if dims is None:
        return ()
    if isinstance(dims, (int, np.integer)):
        dims = (dims,)
    result = tuple(operator.index(d) for d in dims)
    for axis, dim in enumerate(result):
        if dim < 0:
            raise ValueError(f"dimension {axis} is negative: {dim}")
    return result


class Tensor:
    """A tensor of one data type laid out contiguously in row-major order.

    Integer keys address elements by linear offset; tuple keys address them
    by one coordinate per dimension.
    """

    def __init__(
        self,
        data_type: DataType,
        dims: Union[int, Sequence[int], None] = (),
        need_alloc: bool = False,
        memory_manager: Optional[MemoryManager] = None,
        data: Any = None,
    ) -> None:
        self.data_type = DataType(data_type)
        self._dims = _normalize_dims(dims)
        self.buffer: Optional[Buffer] = None

        if need_alloc:
            if memory_manager is None:
                raise ValueError("a memory manager is needed to allocate a tensor")
            if not self.allocate(memory_manager, True) and self.byte_size() > 0:
                raise MemoryError(f"could not allocate {self.byte_size()} bytes")
        elif data is not None:
            available = memoryview(data).nbytes
            if available < self.byte_size():
                raise ValueError(
                    f"data holds {available} bytes, tensor needs {self.byte_size()}"
                )
            buffer = Buffer(self.byte_size(), None, data, True)
            buffer.device_type = (
                memory_manager.device_type if memory_manager is not None else DeviceType.CPU
            )
            self.buffer = buffer

    @property
    def dims(self) -> tuple[int, ...]:
        """The extent of every dimension."""
        return self._dims

    @property
    def device_type(self) -> DeviceType:
        """Device of the backing buffer, UNKNOWN when there is none."""
        if self.buffer is None:
            return DeviceType.UNKNOWN
        return DeviceType(self.buffer.device_type)

    def is_empty(self) -> bool:
        """True when the tensor has no elements or no allocated data."""
        return self.size() == 0 or self.buffer is None or self.buffer.data is None

    def size(self) -> int:
        """Number of elements."""
        return math.prod(self._dims)

    def byte_size(self) -> int:
        """Number of bytes the elements occupy."""
        return self.size() * data_type_size(self.data_type)

    def dims_size(self) -> int:
        """Number of dimensions."""
        return len(self._dims)

    def get_dim(self, idx: int) -> int:
        """Extent of dimension ``idx``."""
        if not 0 <= idx < len(self._dims):
            raise IndexError(f"dimension index {idx} out of range for {len(self._dims)} dims")
        return self._dims[idx]

    def strides(self) -> list[int]:
        """Row-major element strides, one per dimension."""
        strides: list[int] = []
        step = 1
        for dim in reversed(self._dims):
            strides.append(step)
            step *= dim
        strides.reverse()
        return strides

    def allocate(self, memory_manager: Optional[MemoryManager], need_realloc: bool = False) -> bool:
        """Give the tensor a buffer large enough for its elements.

        An existing buffer that is large enough is kept unless
        ``need_realloc`` is set. Returns False when nothing could be allocated.
        """
        if memory_manager is None:
            return False
        byte_size = self.byte_size()
        if not byte_size:
            return False
        if self.buffer is not None and byte_size <= self.buffer.byte_size and not need_realloc:
            return True
        self.buffer = Buffer(byte_size, memory_manager)
        return self.buffer.data is not None

    def get_offset(self, *args: int) -> int:
        """Linear offset of the element at the given coordinates."""
        if len(args) != len(self._dims):
            raise ValueError(
                f"Number of indices ({len(args)}) doesn't match tensor dimensions "
                f"({len(self._dims)})"
            )
        offset = 0
        for axis, (index, dim, stride) in enumerate(zip(args, self._dims, self.strides())):
            index = operator.index(index)
            if not 0 <= index < dim:
                raise IndexError(f"Index out of bounds at dimension {axis}")
            offset += index * stride
        return offset

    def _view(self) -> np.ndarray:
        if self.buffer is None or self.buffer.data is None:
            raise RuntimeError(
                "The data area buffer of this tensor is empty or it points to a null pointer."
            )
        try:
            dtype = _NUMPY_TYPES[self.data_type]
        except KeyError:
            raise TypeError(f"unsupported element type {self.data_type}") from None
        return np.frombuffer(self.buffer.data, dtype=dtype, count=self.size())

    def _offset_for(self, key: Any) -> int:
        if isinstance(key, tuple):
            return self.get_offset(*key)
        offset = operator.index(key)
        if not 0 <= offset < self.size():
            raise IndexError(f"offset {offset} out of range for {self.size()} elements")
        return offset

    def __getitem__(self, key: Any) -> Number:
        offset = self._offset_for(key)
        return self._view()[offset].item()

    def __setitem__(self, key: Any, value: Number) -> None:
        offset = self._offset_for(key)
        self._view()[offset] = value

    def transpose(self, axis0: int, axis1: int) -> None:
        """Swap two dimensions in place, moving the data accordingly."""
        if self.device_type is not DeviceType.CPU:
            raise RuntimeError("Transpose only implemented on CPU tensor")
        rank = len(self._dims)
        if not 0 <= axis0 < rank:
            raise IndexError("axis0 out of bounds")
        if not 0 <= axis1 < rank:
            raise IndexError("axis1 out of bounds")
        if axis0 == axis1:
            return
        view = self._view()
        moved = np.ascontiguousarray(view.reshape(self._dims).swapaxes(axis0, axis1))
        new_dims = list(self._dims)
        new_dims[axis0], new_dims[axis1] = new_dims[axis1], new_dims[axis0]
        view[:] = moved.ravel()
        self._dims = tuple(new_dims)

    def is_scalar(self) -> bool:
        """True for rank-0 tensors and tensors of shape [1]."""
        return self.size() == 1 and (not self._dims or self._dims == (1,))

    def _check_scalar(self) -> None:
        if not self.is_scalar():
            raise ValueError("Tensor is not a scalar")
        if self.buffer is None or self.buffer.data is None:
            raise RuntimeError("Buffer is not allocated")

    def scalar_value(self) -> Number:
        """The single value of a scalar tensor."""
        self._check_scalar()
        return self._view()[0].item()

    def set_scalar_value(self, value: Number) -> None:
        """Store the single value of a scalar tensor."""
        self._check_scalar()
        self._view()[0] = value

    def __float__(self) -> float:
        return float(self.scalar_value())

    def __int__(self) -> int:
        return int(self.scalar_value())

    def __repr__(self) -> str:
        return (
            f"Tensor(data_type={self.data_type.name}, dims={list(self._dims)}, "
            f"device_type={self.device_type.name})"
        )


def make_scalar(
    value: Number,
    data_type: Optional[DataType] = None,
    memory_manager: Optional[MemoryManager] = None,
) -> Tensor:
    """Create an allocated rank-0 tensor holding ``value``.

    Without a data type, floats become FP32 and integers INT32.
    """
    if data_type is None:
        if isinstance(value, bool):
            raise TypeError("Unsupported data type for scalar tensor: bool")
        if isinstance(value, (float, np.floating)):
            data_type = DataType.FP32
        elif isinstance(value, (int, np.integer)):
            data_type = DataType.INT32
        else:
            raise TypeError(
                f"Unsupported data type for scalar tensor: {type(value).__name__}"
            )
    data_type = DataType(data_type)
    if data_type not in _NUMPY_TYPES:
        raise TypeError(f"Unsupported data type for scalar tensor: {data_type}")
    if memory_manager is None:
        memory_manager = cpu_memory_manager()
    scalar = Tensor(data_type, (), True, memory_manager)
    scalar.set_scalar_value(value)
    return scalar


def is_scalar_compatible(tensor: Tensor) -> bool:
    """True when the tensor holds exactly one element."""
    return tensor.size() == 1