"""Writers for labeled matrices and predicted interactions."""

from typing import Iterable

import numpy as np

from simprep.core.constants import DEFAULT_DELIMITER
from simprep.core.exceptions import MatrixIOError
from simprep.core.logging import get_logger
from simprep.core.models import InteractionRecord, LabeledMatrix
from simprep.utils.io import ensure_output_dir, write_text

logger = get_logger("data.writers")


def format_cell(value) -> str:
    if isinstance(value, (bool, np.bool_)):
        return "1" if value else "0"
    if isinstance(value, (float, np.floating)):
        return repr(float(value))
    return str(value)


def serialize_matrix(
    matrix: LabeledMatrix,
    delimiter: str = DEFAULT_DELIMITER,
    labeled: bool = True,
) -> str:
    """Render a matrix as delimited text.

    Labeled output starts with a header of an empty corner field followed
    by the column labels, and prefixes each row with its row label.
    """
    lines = []
    if labeled:
        lines.append(delimiter.join([""] + list(matrix.col_labels)))

    for label, row in zip(matrix.row_labels, matrix.values):
        cells = [format_cell(v) for v in row]
        if labeled:
            cells.insert(0, label)
        lines.append(delimiter.join(cells))

    return "".join(line + "\n" for line in lines)


def write_matrix(
    matrix: LabeledMatrix,
    path: str,
    delimiter: str = DEFAULT_DELIMITER,
    labeled: bool = True,
) -> str:
    """Write a matrix to ``path``. Returns the output path."""
    write_text(path, serialize_matrix(matrix, delimiter=delimiter, labeled=labeled))
    logger.info(
        f"Wrote {matrix.n_rows}x{matrix.n_cols} matrix to {path} "
        f"(labeled={labeled})"
    )
    return path


def write_interactions(
    records: Iterable,
    path: str,
) -> int:
    """Write one ``source target score`` line per record. Returns the count."""
    count = 0
    try:
        ensure_output_dir(path)
        with open(path, "w") as f:
            for rec in records:
                f.write(InteractionRecord(*rec).to_line())
                count += 1
    except OSError as e:
        raise MatrixIOError(path, e.strerror or str(e)) from e

    logger.info(f"Wrote {count} predicted interactions to {path}")
    return count
