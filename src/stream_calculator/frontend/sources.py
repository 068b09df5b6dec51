"""Acquire the text stream expressions are read from: a file, an archive, or stdin."""
from contextlib import contextmanager
import io
from pathlib import Path
import sys
import tarfile
import tempfile
from typing import Iterator, List, Optional, TextIO
import zipfile

import py7zr
from pydantic import BaseModel, ConfigDict, Field, FilePath

from stream_calculator.common.logger import logger

ARCHIVE_SUFFIXES = (".zip", ".7z", ".tar.xz")


class ExpressionSource(BaseModel):
    """
    Input an expression stream is read from.

    The source:
    - streams a plain text file character by character
    - extracts the first .txt file of a .zip, .tar.xz or .7z archive
    - falls back to standard input when no path is given
    """

    # Make the Pydantic instance immutable (read-only)
    model_config = ConfigDict(frozen=True)

    path: Optional[FilePath] = Field(default=None, description="Expression file or archive, stdin if omitted")

    @property
    def is_archive(self) -> bool:
        """True when the path names one of the supported archive formats."""
        return self.path is not None and self.path.name.endswith(ARCHIVE_SUFFIXES)

    @property
    def is_interactive(self) -> bool:
        """True when reading from a terminal rather than a file or a pipe."""
        return self.path is None and sys.stdin.isatty()

    @contextmanager
    def open(self) -> Iterator[TextIO]:
        """
        Open the source as a text stream.

        :return: Context manager yielding the text stream
        :raises ValueError: If an archive holds no .txt file or its format is unsupported
        """
        if self.path is None:
            logger.info("⌨️ Reading expressions from standard input")
            yield sys.stdin
        elif self.is_archive:
            logger.info(f"🗜️ Reading expressions from archive {self.path}")
            with self._open_archive_member(self.path) as member:
                yield member
        else:
            logger.info(f"📄 Reading expressions from {self.path}")
            with self.path.open("r", encoding="utf-8") as f_in:
                yield f_in

    @contextmanager
    def _open_archive_member(self, archive_path: Path) -> Iterator[TextIO]:
        """
        Open the first .txt member of a .zip, .tar.xz or .7z archive as a text stream.

        :param Path archive_path: Path to the archive file

        :return: Context manager yielding the member's text
        :raises ValueError: If no .txt member is found or the format is unsupported
        """
        name = archive_path.name
        if name.endswith(".zip"):
            with zipfile.ZipFile(archive_path) as zf:
                member = _first_expression_file(zf.namelist(), archive_path)
                with zf.open(member) as raw:
                    yield io.TextIOWrapper(raw, encoding="utf-8")

        elif name.endswith(".tar.xz"):
            with tarfile.open(archive_path, "r:xz") as tf:
                member = _first_expression_file([m.name for m in tf.getmembers() if m.isfile()], archive_path)
                with tf.extractfile(member) as raw:
                    yield io.TextIOWrapper(raw, encoding="utf-8")

        elif name.endswith(".7z"):
            # py7zr only extracts to disk
            with py7zr.SevenZipFile(archive_path, mode="r") as archive, tempfile.TemporaryDirectory() as tmpdir:
                member = _first_expression_file(archive.getnames(), archive_path)
                archive.extract(path=tmpdir, targets=[member])
                with (Path(tmpdir) / member).open("r", encoding="utf-8") as f_in:
                    yield f_in

        else:
            raise ValueError(f"📄❌ Unsupported archive format: {archive_path.suffix}")


def _first_expression_file(names: List[str], archive_path: Path) -> str:
    """Return the first .txt name of an archive listing."""
    for member in names:
        if member.endswith(".txt"):
            logger.debug(f"Using {member} from {archive_path.name}")
            return member
    raise ValueError(f"📄❌ No .txt file found in {archive_path.name}")
