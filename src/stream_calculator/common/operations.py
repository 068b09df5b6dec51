"""Pydantic models for expression requests and evaluation results."""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from stream_calculator.engine.status import Status


class OperationRequest(BaseModel):
    """Represents a single expression given directly, e.g. on the command line."""

    expression: str = Field(..., description="Arithmetic expression as a string")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class OperationResult(BaseModel):
    """Represents the outcome of evaluating one expression line."""

    line: int = Field(..., ge=1, description="Line number in the input")
    expression: str = Field(..., description="Original arithmetic expression")
    status: Status = Field(..., description="Terminal status reported by the evaluator")
    result: Optional[float] = Field(default=None, description="Evaluated value, absent on error")
    error: Optional[str] = Field(default=None, description="Error message, absent on success")

    @property
    def ok(self) -> bool:
        """True when the expression produced an authoritative value."""
        return self.error is None

    def format(self) -> str:
        """
        Render the result the way it is written to the output.

        :return: "<expr> = <value>" on success, "<expr> -> ERROR: <message>" otherwise
        :rtype: str
        """
        if self.ok:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
