"""Path resolution and delimited text helpers."""

from pathlib import Path
from typing import List

from simprep.core.exceptions import MatrixIOError


def ensure_output_dir(path: str) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def split_line(line: str, delimiter: str) -> List[str]:
    """Split one line into fields.

    A space delimiter splits on runs of whitespace, so column-aligned
    files and trailing blanks parse cleanly.
    """
    if delimiter == " ":
        return line.split()
    return [cell.strip() for cell in line.rstrip("\r\n").split(delimiter)]


def read_delimited(path: str, delimiter: str) -> List[List[str]]:
    """Read a delimited text file into rows of string cells.

    Blank lines are skipped.
    """
    try:
        with open(path, "r") as f:
            lines = f.readlines()
    except OSError as e:
        raise MatrixIOError(path, e.strerror or str(e)) from e

    return [split_line(line, delimiter) for line in lines if line.strip()]


def write_text(path: str, text: str) -> str:
    try:
        ensure_output_dir(path)
        with open(path, "w") as f:
            f.write(text)
    except OSError as e:
        raise MatrixIOError(path, e.strerror or str(e)) from e
    return path
