import pickle

import pytest

from suitelist.listing import ListTestError


def test_is_an_exception():
    assert isinstance(ListTestError(), Exception)


def test_message_has_suite_name():
    error = ListTestError("suite_name")
    assert "suite_name" in error.message
    assert str(error) == "suite_name"


def test_stack_has_suite_name():
    assert "suite_name" in ListTestError("suite_name").stack


def test_stack_elides_missing_error_output():
    assert ListTestError("suite_name").stack == "suite_name"
    assert ListTestError("suite_name", "").stack == "suite_name"


def test_stack_has_error_output():
    error = ListTestError("suite_name", "error\noutput")
    assert "error\noutput" in error.stack
    assert error.stack.startswith("suite_name")


def test_timeout_defaults_to_false():
    assert ListTestError("suite_name").timeout is False


def test_load_failure():
    error = ListTestError.load_failure("a/suite.py", "worker exited with code 1", "Traceback")
    assert error.message == "Failed to process a/suite.py: worker exited with code 1"
    assert error.stack == "Failed to process a/suite.py: worker exited with code 1\nTraceback"
    assert error.timeout is False


def test_timed_out():
    error = ListTestError.timed_out("a/suite.py")
    assert error.message == "Timed out while listing tests of a/suite.py"
    assert error.stack == error.message
    assert error.timeout is True


def test_can_be_raised_and_caught_as_exception():
    with pytest.raises(Exception, match="suite_name"):
        raise ListTestError("suite_name")


@pytest.mark.parametrize(
    "error",
    [
        ListTestError.load_failure("a/suite.py", "worker exited with code 1", "SyntaxError: x"),
        ListTestError.timed_out("a/suite.py"),
        ListTestError(),
    ],
)
def test_survives_pickling(error):
    restored = pickle.loads(pickle.dumps(error))
    assert type(restored) is ListTestError
    assert restored.message == error.message
    assert restored.stack == error.stack
    assert restored.timeout is error.timeout
    assert str(restored) == str(error)
