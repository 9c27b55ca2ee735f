"""Data types, status values, host memory managers, buffers and tensors for LLM inference."""

__version__ = "0.1.0"
__all__ = ["buffer", "dtypes", "memory", "status", "tensor"]