"""Test classes OperationRequest and OperationResult."""
from pydantic import ValidationError
import pytest

from stream_calculator.common.operations import OperationRequest, OperationResult
from stream_calculator.engine.status import Status


def test_operation_request_valid() -> None:
    """Test that a valid OperationRequest can be created."""
    req = OperationRequest(expression="2 + 2 * 3")
    assert req.expression == "2 + 2 * 3"


def test_operation_request_invalid_type() -> None:
    """Test that non-string expressions raise a validation error."""
    with pytest.raises(ValidationError):
        # int instead of str
        OperationRequest(expression=123)


@pytest.mark.parametrize("expression", ["", "   "])
def test_operation_request_rejects_empty(expression: str) -> None:
    """Test that blank expressions are rejected."""
    with pytest.raises(ValidationError):
        OperationRequest(expression=expression)


def test_operation_result_valid() -> None:
    """Test that a successful OperationResult formats as an equation."""
    res = OperationResult(line=1, expression="2 + 2 * 3", status=Status.END_OF_LINE, result=8.0)
    assert res.ok
    assert isinstance(res.result, float)
    assert res.format() == "2 + 2 * 3 = 8.0"


def test_operation_result_error() -> None:
    """Test that a failed OperationResult formats as an error line."""
    res = OperationResult(
        line=3,
        expression="2 ** 3",
        status=Status.SYNTAX_ERROR,
        error="Invalid arithmetic expression",
    )
    assert not res.ok
    assert res.result is None
    assert res.format() == "2 ** 3 -> ERROR: Invalid arithmetic expression"


def test_operation_result_infinite_value() -> None:
    """Test that infinities are valid results."""
    res = OperationResult(line=1, expression="5/0", status=Status.END_OF_LINE, result=float("inf"))
    assert res.format() == "5/0 = inf"


def test_operation_result_invalid_result_type() -> None:
    """Test that invalid result type raises a validation error."""
    with pytest.raises(ValidationError):
        OperationResult(line=1, expression="2 + 2", status=Status.END_OF_LINE, result="not a float")


def test_operation_result_invalid_line() -> None:
    """Test that line numbers start at 1."""
    with pytest.raises(ValidationError):
        OperationResult(line=0, expression="2 + 2", status=Status.END_OF_LINE, result=4.0)
