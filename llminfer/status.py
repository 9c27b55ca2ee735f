"""Status values and the errors raised from them."""

from __future__ import annotations

from enum import IntEnum
from typing import Union

__all__ = [
    "StatusCode",
    "Status",
    "StatusError",
    "success",
    "function_not_implement",
    "path_not_valid",
    "model_parse_error",
    "internal_error",
    "invalid_argument",
    "key_has_exists",
    "check_status",
]


class StatusCode(IntEnum):
    """Result codes of inference operations."""

    SUCCESS = 0
    FUNCTION_UNIMPLEMENT = 1
    PATH_NOT_VALID = 2
    MODEL_PARSE_ERROR = 3
    INTERNAL_ERROR = 5
    KEY_VALUE_HAS_EXIST = 6
    INVALID_ARGUMENT = 7


class Status:
    """A result code with an optional message."""

    __slots__ = ("code", "message")

    def __init__(self, code: int = StatusCode.SUCCESS, message: str = "") -> None:
        self.code = int(code)
        self.message = message

    def __bool__(self) -> bool:
        return self.code == StatusCode.SUCCESS

    def __int__(self) -> int:
        return self.code

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Status):
            return self.code == other.code
        if isinstance(other, int):
            return self.code == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.code)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"Status(code={self.code}, message={self.message!r})"


class StatusError(RuntimeError):
    """Raised when a failed status is checked."""

    def __init__(self, status: Status) -> None:
        self.status = status
        super().__init__(
            f"Infer error\n Error code:{int(status)}\n Error msg:{status.message}\n"
        )


def success(message: str = "") -> Status:
    return Status(StatusCode.SUCCESS, message)


def function_not_implement(message: str = "") -> Status:
    return Status(StatusCode.FUNCTION_UNIMPLEMENT, message)


def path_not_valid(message: str = "") -> Status:
    return Status(StatusCode.PATH_NOT_VALID, message)


def model_parse_error(message: str = "") -> Status:
    return Status(StatusCode.MODEL_PARSE_ERROR, message)


def internal_error(message: str = "") -> Status:
    return Status(StatusCode.INTERNAL_ERROR, message)


def invalid_argument(message: str = "") -> Status:
    return Status(StatusCode.INVALID_ARGUMENT, message)


def key_has_exists(message: str = "") -> Status:
    return Status(StatusCode.KEY_VALUE_HAS_EXIST, message)


def check_status(status: Union[Status, int]) -> Status:
    """Return the status if it is a success, otherwise raise StatusError."""
    if not isinstance(status, Status):
        status = Status(status)
    if not status:
        raise StatusError(status)
    return status