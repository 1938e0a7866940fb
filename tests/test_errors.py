import pytest

from minirt.errors import RTError


def test_message_and_exit_code_are_kept():
    err = RTError("Wrong input err", 23)
    assert err.message == "Wrong input err"
    assert err.exit_code == 23
    assert str(err) == "Wrong input err"


def test_default_exit_code():
    assert RTError("Img create err").exit_code == 1


def test_can_be_raised_and_caught_as_exception():
    err = RTError("screen malloc error", 2)
    assert err.exit_code == 2
    with pytest.raises(RTError) as info:
        raise err
    assert info.value is err
    assert info.value.exit_code == 2
    assert info.value.message == "screen malloc error"