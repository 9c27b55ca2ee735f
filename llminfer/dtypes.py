"""Device, data and layer type enumerations."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["DeviceType", "DataType", "LayerType", "data_type_size"]


class DeviceType(IntEnum):
    """Where a block of memory lives."""

    UNKNOWN = 0
    CPU = 1
    GPU = 2


class DataType(IntEnum):
    """Element type of a tensor."""

    UNKNOWN = 0
    FP32 = 1
    FP16 = 2
    BF16 = 3
    INT8 = 4
    INT32 = 5

    def __str__(self) -> str:
        return _DATA_TYPE_NAMES.get(self, "DataType::Invalid")


_DATA_TYPE_NAMES = {
    DataType.UNKNOWN: "DataType::Unknown",
    DataType.FP32: "DataType::FP32",
    DataType.INT8: "DataType::INT8",
    DataType.INT32: "DataType::INT32",
}

_DATA_TYPE_SIZES = {
    DataType.FP32: 4,
    DataType.INT8: 1,
    DataType.INT32: 4,
}


class LayerType(IntEnum):
    """Kind of a network layer."""

    UNKNOWN = 0
    LINEAR = 1
    ENCODE = 2
    EMBEDDING = 3
    RMSNORM = 4
    MATMUL = 5
    ROPE = 6
    MHA = 7
    SOFTMAX = 8
    ADD = 9
    SWIGLU = 10


def data_type_size(data_type: DataType) -> int:
    """Return the size in bytes of one element, or 0 for unsupported types."""
    return _DATA_TYPE_SIZES.get(DataType(data_type), 0)