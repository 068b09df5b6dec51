"""Evaluate an expression stream line by line and report the results."""
from typing import Iterable, Iterator, Optional, TextIO

from pydantic import BaseModel, ConfigDict, Field

from stream_calculator.common.logger import logger
from stream_calculator.common.operations import OperationResult
from stream_calculator.engine.evaluator import evaluate
from stream_calculator.engine.reader import CharReader
from stream_calculator.engine.status import Status

SYNTAX_ERROR_MESSAGE: str = "Invalid arithmetic expression"
UNBALANCED_MESSAGE: str = "Unbalanced closing parenthesis"
NESTING_MESSAGE: str = "Expression nested too deeply"


class ExpressionRunner(BaseModel):
    """
    Drive the evaluator over every line of a character stream.

    Lifecycle of one line:
        - The evaluator consumes exactly one expression line
        - Whatever it left unread on that line (after an error) is discarded
        - The outcome is turned into an OperationResult
    """

    # Allow arbitrary types like CharReader
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    reader: CharReader = Field(..., description="Shared character reader over the input stream")
    skip_blank_lines: bool = Field(default=True, description="Do not report lines holding only whitespace")

    def run_line(self) -> Optional[OperationResult]:
        """
        Evaluate the next line of the stream.

        :return: The line's result, or None for a skipped blank line
        :rtype: Optional[OperationResult]
        """
        self.reader.begin_line()
        too_deep: bool = False
        try:
            value, status = evaluate(self.reader)
        except RecursionError:
            # One activation per group, so deep nesting exhausts the call stack
            value, status, too_deep = 0.0, Status.SYNTAX_ERROR, True
        # Drop the unread remainder of an abandoned line
        self.reader.skip_line()

        expression: str = self.reader.line_text.strip()
        line_number: int = self.reader.line_number
        if not expression and self.skip_blank_lines:
            return None

        logger.info(f"🧮 Evaluated line {line_number}: {expression!r} -> {status.value}")

        if too_deep:
            logger.error(f"❌ Expression nested too deeply on line {line_number}")
            return OperationResult(line=line_number, expression=expression, status=status, error=NESTING_MESSAGE)

        if status is Status.SYNTAX_ERROR:
            logger.error(f"❌ Invalid arithmetic expression on line {line_number}: {expression!r}")
            return OperationResult(line=line_number, expression=expression, status=status, error=SYNTAX_ERROR_MESSAGE)

        if status is Status.CLOSE_PAREN:
            logger.error(f"❌ Unbalanced closing parenthesis on line {line_number}: {expression!r}")
            return OperationResult(line=line_number, expression=expression, status=status, error=UNBALANCED_MESSAGE)

        return OperationResult(line=line_number, expression=expression, status=status, result=value)

    def run(self) -> Iterator[OperationResult]:
        """
        Evaluate lines until the stream is exhausted.

        :return: Iterator over the results of non-blank lines
        :rtype: Iterator[OperationResult]
        """
        while not self.reader.at_end():
            result = self.run_line()
            if result is not None:
                yield result


def write_results(results: Iterable[OperationResult], f_out: TextIO) -> bool:
    """
    Write formatted results as they arrive.

    :param Iterable[OperationResult] results: Results to write
    :param TextIO f_out: Open text stream for writing results

    :return: True if every result was successful
    :rtype: bool
    """
    all_ok: bool = True
    for result in results:
        f_out.write(result.format() + "\n")
        # Flush so partial progress survives an interruption
        f_out.flush()
        all_ok = all_ok and result.ok
    return all_ok
