import pytest

from llminfer.dtypes import DataType, DeviceType, LayerType, data_type_size


@pytest.mark.parametrize(
    "data_type, size",
    [
        (DataType.FP32, 4),
        (DataType.INT8, 1),
        (DataType.INT32, 4),
        (DataType.FP16, 0),
        (DataType.BF16, 0),
        (DataType.UNKNOWN, 0),
    ],
)
def test_data_type_size(data_type, size):
    assert data_type_size(data_type) == size


def test_data_type_size_accepts_plain_int():
    assert data_type_size(1) == 4


@pytest.mark.parametrize(
    "data_type, text",
    [
        (DataType.UNKNOWN, "DataType::Unknown"),
        (DataType.FP32, "DataType::FP32"),
        (DataType.INT8, "DataType::INT8"),
        (DataType.INT32, "DataType::INT32"),
        (DataType.FP16, "DataType::Invalid"),
        (DataType.BF16, "DataType::Invalid"),
    ],
)
def test_data_type_str(data_type, text):
    assert str(data_type) == text


def test_enum_lookup_by_source_values():
    assert DeviceType(1) is DeviceType.CPU
    assert DeviceType(2) is DeviceType.GPU
    assert LayerType(10) is LayerType.SWIGLU
    assert str(DataType(5)) == "DataType::INT32"
    assert data_type_size(DataType(5)) == 4


def test_invalid_data_type_rejected():
    with pytest.raises(ValueError):
        data_type_size(42)