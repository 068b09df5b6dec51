"""
Command-line entrypoint.

This script:
- Evaluates a single expression given with -e
- Or evaluates every line of an expression file or archive
- Or reads expressions from standard input, prompting when it is a terminal

Results are printed to stdout unless an output file is requested.
The exit status is 1 when any expression failed to evaluate.
"""

import argparse
from contextlib import nullcontext
import io
from pathlib import Path
import sys
from typing import ContextManager, List, Optional, TextIO

from pydantic import BaseModel, FilePath, ValidationError, field_validator, model_validator

from stream_calculator.common.logger import configure_logging, logger, resolve_log_level
from stream_calculator.common.operations import OperationRequest
from stream_calculator.engine.reader import CharReader
from stream_calculator.frontend.runner import ExpressionRunner, write_results
from stream_calculator.frontend.sources import ExpressionSource

PROMPT: str = "> "


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath, optional
        Path to the file or archive containing arithmetic expressions.
    expression : str, optional
        Single expression to evaluate instead of a file.
    output : Path, optional
        Where to write the results.
    save : bool
        Write the results next to the input file.
    log_level : str, optional
        Logging level name.
    """

    file_path: Optional[FilePath] = None
    expression: Optional[str] = None
    output: Optional[Path] = None
    save: bool = False
    log_level: Optional[str] = None

    @field_validator("log_level")
    def log_level_must_exist(cls, v: Optional[str]) -> Optional[str]:
        """Ensure the log level is a standard logging level."""
        return None if v is None else resolve_log_level(v)

    @model_validator(mode="after")
    def check_combinations(self) -> "CliArgs":
        """Reject option combinations that cannot be honoured together."""
        if self.expression is not None and self.file_path is not None:
            raise ValueError("Give either an expression or a file, not both")
        if self.save and self.file_path is None:
            raise ValueError("--save needs an input file")
        if self.save and self.output is not None:
            raise ValueError("--save and --output are mutually exclusive")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments to parse, sys.argv[1:] if omitted

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="stream-calc",
        description="Evaluate arithmetic expressions one character at a time",
    )

    parser.add_argument(
        "file_path",
        nargs="?",
        help="Path to a file or archive (.zip, .tar.xz, .7z) with one expression per line",
    )
    parser.add_argument("-e", "--expression", help="Evaluate a single expression")
    parser.add_argument("-o", "--output", help="Write results to this file")
    parser.add_argument(
        "-s",
        "--save",
        action="store_true",
        help="Write results next to the input file",
    )
    parser.add_argument("--log-level", help="Logging level (default: $STREAM_CALCULATOR_LOG_LEVEL or WARNING)")

    args = parser.parse_args(argv)

    try:
        return CliArgs(
            file_path=args.file_path,
            expression=args.expression,
            output=args.output,
            save=args.save,
            log_level=args.log_level,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct a safe output file path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/expressions.7z
    output: resources/expressions_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    stem = input_path.name[: len(input_path.name) - len("".join(input_path.suffixes))]
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def run_interactive(reader: CharReader, out: TextIO) -> bool:
    """
    Prompt for one expression at a time until end of input.

    :param CharReader reader: Reader over the terminal
    :param TextIO out: Where prompts and results are written

    :return: True if every expression was evaluated successfully
    :rtype: bool
    """
    runner = ExpressionRunner(reader=reader)
    all_ok: bool = True
    while True:
        out.write(PROMPT)
        out.flush()
        if reader.at_end():
            out.write("\n")
            return all_ok
        result = runner.run_line()
        if result is not None:
            all_ok = write_results([result], out) and all_ok


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the stream-calc command.

    :param list argv: Arguments to parse, sys.argv[1:] if omitted

    :return: Process exit status
    :rtype: int
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)

    output_path: Optional[Path] = cli_args.output
    if cli_args.save:
        output_path = build_output_path(cli_args.file_path)

    interactive: bool = False
    if cli_args.expression is not None:
        try:
            request = OperationRequest(expression=cli_args.expression)
        except ValidationError as exc:
            print(f"stream-calc: {exc}", file=sys.stderr)
            return 1
        stream_cm: ContextManager[TextIO] = nullcontext(io.StringIO(request.expression))
    else:
        source = ExpressionSource(path=cli_args.file_path)
        stream_cm = source.open()
        interactive = source.is_interactive and output_path is None

    try:
        with stream_cm as stream:
            reader = CharReader(stream)
            if interactive:
                all_ok = run_interactive(reader, sys.stdout)
            elif output_path is None:
                all_ok = write_results(ExpressionRunner(reader=reader).run(), sys.stdout)
            else:
                with output_path.open("w", encoding="utf-8") as f_out:
                    all_ok = write_results(ExpressionRunner(reader=reader).run(), f_out)
                logger.info(f"💾 Results written to {output_path}")
    except (OSError, ValueError) as exc:
        # Unreadable input, or an archive without expressions
        logger.error(f"❌ {exc}")
        print(f"stream-calc: {exc}", file=sys.stderr)
        return 1

    return 0 if all_ok else 1


if __name__ == "__main__":
    sys.exit(main())
