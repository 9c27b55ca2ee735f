# llminfer

Building blocks for a small language-model inference core: data and device
types, status values, a host memory manager, byte buffers and typed,
multi-dimensional tensors backed by numpy views of those buffers.

## Install

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Modules

- `llminfer.dtypes`: `DeviceType`, `DataType`, `LayerType` and
  `data_type_size`, which gives the byte width of an element type:
  `FP32` is 4 bytes, `INT8` is 1, `INT32` is 4, and every other type gives 0.
  `str(DataType.FP32)` is `"DataType::FP32"`.
- `llminfer.status`: `StatusCode`, `Status` and `StatusError`. A `Status`
  is true only when its code is `SUCCESS`, compares equal to another status
  or an integer by code, and prints as its message. The helpers `success`,
  `function_not_implement`, `path_not_valid`, `model_parse_error`,
  `internal_error`, `invalid_argument` and `key_has_exists` build statuses.
  `check_status` returns a successful status and raises `StatusError` for
  any other.
- `llminfer.memory`: `MemcpyKind`, the abstract `MemoryManager` and
  `CPUMemoryManager`, which hands out `bytearray` blocks (`None` for size 0)
  and raises `ValueError` when asked to free a block it does not own.
  `cpu_memory_manager()` returns one shared CPU manager.
- `llminfer.buffer`: `Buffer`, a block of bytes. Given a memory manager and
  no data it allocates and owns its block, and gives it back on `release()`,
  on leaving a `with` block, or when collected. Data passed in is borrowed
  and never released. `copy_from` copies as many bytes as fit.
- `llminfer.tensor`: `Tensor`, `make_scalar` and `is_scalar_compatible`.
  Tensors are row-major; an integer key addresses an element by linear
  offset, a tuple key by one coordinate per dimension. `transpose` swaps two
  dimensions in place and moves the data with them.

## Example

```python
from llminfer.dtypes import DataType
from llminfer.memory import cpu_memory_manager
from llminfer.tensor import Tensor, make_scalar

mm = cpu_memory_manager()

weight = Tensor(DataType.FP32, [3, 4], True, mm)
for i in range(3):
    for j in range(4):
        weight[i, j] = i / 10 + (j + 1) / 10

print(weight.dims_size(), weight.size(), weight.byte_size())  # 2 12 48
print(weight.strides())                                       # [4, 1]

weight.transpose(0, 1)   # the dimensions are now (4, 3)
print(weight.dims)       # (4, 3)
print(weight[1, 2])

count = make_scalar(3, DataType.INT32, mm)
print(int(count))        # 3
```

An index out of range raises `IndexError`; a number of indices that does not
match the tensor's rank raises `ValueError`. Asking for a tensor to be
allocated without a memory manager raises `ValueError`.

## What it does not do

- There is no GPU support. Only host memory exists: any copy other than
  `MemcpyKind.CPU2CPU` and clearing memory on a non-CPU manager raise
  `RuntimeError`.
- There are no layers, kernels, model loading or text generation; `LayerType`
  only names layer kinds. The package provides the tensor and memory
  foundation such pieces would be built on.
- There is no command-line program.