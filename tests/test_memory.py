import pytest

from llminfer.dtypes import DeviceType
from llminfer.memory import (
    CPUMemoryManager,
    MemcpyKind,
    MemoryManager,
    cpu_memory_manager,
)


@pytest.fixture
def manager():
    return CPUMemoryManager()


def test_device_type_is_cpu(manager):
    assert manager.device_type is DeviceType.CPU


def test_allocate_zero_returns_none(manager):
    assert manager.allocate(0) is None


def test_allocate_gives_requested_size(manager):
    block = manager.allocate(16)
    assert len(block) == 16


def test_allocate_negative_raises(manager):
    with pytest.raises(ValueError):
        manager.allocate(-1)


def test_allocations_are_distinct(manager):
    a = manager.allocate(8)
    b = manager.allocate(8)
    a[0] = 7
    assert b[0] != 7 or a is not b
    assert a is not b


def test_deallocate_none_is_harmless(manager):
    manager.deallocate(None)
    assert manager.allocate(0) is None


def test_double_deallocate_raises(manager):
    block = manager.allocate(4)
    manager.deallocate(block)
    with pytest.raises(ValueError):
        manager.deallocate(block)


def test_deallocate_foreign_block_raises(manager):
    with pytest.raises(ValueError):
        manager.deallocate(bytearray(4))


def test_memcpy_copies_bytes(manager):
    dst = manager.allocate(4)
    manager.memcpy(b"abcd", dst, 4, MemcpyKind.CPU2CPU)
    assert bytes(dst) == b"abcd"


def test_memcpy_partial_count(manager):
    dst = bytearray(b"zzzz")
    manager.memcpy(b"abcd", dst, 2, MemcpyKind.CPU2CPU)
    assert bytes(dst) == b"abzz"


def test_memcpy_zero_count_leaves_destination(manager):
    dst = bytearray(b"wxyz")
    manager.memcpy(b"abcd", dst, 0, MemcpyKind.CPU2CPU)
    assert bytes(dst) == b"wxyz"


@pytest.mark.parametrize("src, dst", [(None, bytearray(4)), (b"abcd", None)])
def test_memcpy_none_raises(manager, src, dst):
    with pytest.raises(ValueError):
        manager.memcpy(src, dst, 4, MemcpyKind.CPU2CPU)


def test_memcpy_overrun_raises(manager):
    with pytest.raises(ValueError):
        manager.memcpy(b"ab", bytearray(4), 4, MemcpyKind.CPU2CPU)


@pytest.mark.parametrize(
    "kind", [MemcpyKind.CPU2GPU, MemcpyKind.GPU2CPU, MemcpyKind.GPU2GPU]
)
def test_memcpy_gpu_kinds_raise(manager, kind):
    with pytest.raises(RuntimeError):
        manager.memcpy(b"abcd", bytearray(4), 4, kind)


def test_memcpy_unknown_kind_raises(manager):
    with pytest.raises(ValueError):
        manager.memcpy(b"abcd", bytearray(4), 4, 9)


def test_memset0_clears_prefix(manager):
    block = bytearray(b"abcd")
    manager.memset0(block, 2)
    assert bytes(block) == b"\x00\x00cd"


def test_memset0_too_large_raises(manager):
    with pytest.raises(ValueError):
        manager.memset0(bytearray(2), 3)


def test_cpu_memory_manager_is_shared():
    assert cpu_memory_manager() is cpu_memory_manager()
    assert cpu_memory_manager().device_type is DeviceType.CPU


def test_memory_manager_is_abstract():
    with pytest.raises(TypeError):
        MemoryManager(DeviceType.CPU)