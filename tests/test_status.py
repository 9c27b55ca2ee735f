import pytest

from llminfer.status import (
    Status,
    StatusCode,
    StatusError,
    check_status,
    function_not_implement,
    internal_error,
    invalid_argument,
    key_has_exists,
    model_parse_error,
    path_not_valid,
    success,
)


def test_default_status_is_success():
    status = Status()
    assert bool(status) is True
    assert int(status) == StatusCode.SUCCESS
    assert str(status) == ""


@pytest.mark.parametrize(
    "factory, code",
    [
        (success, StatusCode.SUCCESS),
        (function_not_implement, StatusCode.FUNCTION_UNIMPLEMENT),
        (path_not_valid, StatusCode.PATH_NOT_VALID),
        (model_parse_error, StatusCode.MODEL_PARSE_ERROR),
        (internal_error, StatusCode.INTERNAL_ERROR),
        (invalid_argument, StatusCode.INVALID_ARGUMENT),
        (key_has_exists, StatusCode.KEY_VALUE_HAS_EXIST),
    ],
)
def test_factories_carry_code_and_message(factory, code):
    status = factory("some message")
    assert int(status) == code
    assert str(status) == "some message"
    assert bool(status) is (code == StatusCode.SUCCESS)


def test_factory_codes_match_source():
    assert int(success()) == 0
    assert int(function_not_implement()) == 1
    assert int(path_not_valid()) == 2
    assert int(model_parse_error()) == 3
    assert int(internal_error()) == 5
    assert int(key_has_exists()) == 6
    assert int(invalid_argument()) == 7


def test_equality_compares_codes_only():
    assert success() == success("other text")
    assert internal_error("a") == internal_error("b")
    assert not (success() == internal_error())


def test_equality_with_int():
    assert invalid_argument() == StatusCode.INVALID_ARGUMENT
    assert invalid_argument() != StatusCode.SUCCESS


def test_equal_statuses_hash_equal():
    assert hash(path_not_valid("x")) == hash(path_not_valid("y"))


def test_check_status_passes_success_through():
    status = success("ok")
    assert check_status(status) is status


def test_check_status_raises_on_failure():
    with pytest.raises(StatusError) as info:
        check_status(model_parse_error("bad model"))
    assert info.value.status == StatusCode.MODEL_PARSE_ERROR
    assert "bad model" in str(info.value)


def test_check_status_accepts_int_code():
    with pytest.raises(StatusError):
        check_status(int(StatusCode.INTERNAL_ERROR))