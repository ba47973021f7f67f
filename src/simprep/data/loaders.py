"""Loaders turning delimited text into LabeledMatrix objects.

Input files hold one matrix row per line. Depending on the LabelLayout the
first field of each line is a row label and/or the first line holds column
labels. Fingerprint cells are the literals ``0``/``1``.
"""

from pathlib import Path
from typing import Callable, Dict, List, Sequence, Type

import numpy as np

from simprep.core.constants import (
    COL_LABEL_FORMAT,
    DEFAULT_DELIMITER,
    FALSE_TOKENS,
    ROW_LABEL_FORMAT,
    TRUE_TOKENS,
)
from simprep.core.exceptions import MatrixIOError, MatrixParseError
from simprep.core.logging import get_logger
from simprep.core.models import LabeledMatrix, LabelLayout
from simprep.utils.io import read_delimited

logger = get_logger("data.loaders")


def _to_bool(cell: str) -> bool:
    token = cell.strip().lower()
    if token in TRUE_TOKENS:
        return True
    if token in FALSE_TOKENS:
        return False
    raise ValueError("expected one of 0/1/true/false")


_CONVERTERS: Dict[type, Callable[[str], object]] = {
    bool: _to_bool,
    int: int,
    float: float,
    str: str,
}

_DTYPES: Dict[type, object] = {
    bool: np.bool_,
    int: np.int64,
    float: np.float64,
    str: object,
}


def parse_matrix(
    raw_rows: Sequence[Sequence[str]],
    layout: LabelLayout = LabelLayout.NONE,
    value_type: Type = bool,
) -> LabeledMatrix:
    """Convert rows of string cells into a canonical LabeledMatrix.

    The label row and/or column are sliced off according to ``layout``;
    unlabeled axes get ``R#<i>``/``C#<i>`` placeholders. The result is
    sorted ascending by label on both axes, so input order is not kept.
    """
    convert = _CONVERTERS.get(value_type)
    if convert is None:
        raise TypeError(
            f"Unsupported value type: {value_type!r}. "
            f"Available: {[t.__name__ for t in _CONVERTERS]}"
        )

    rows = [list(r) for r in raw_rows]
    header: List[str] = []
    body_offset = 0
    if layout.has_col_labels and rows:
        header = rows[0]
        rows = rows[1:]
        body_offset = 1
    label_offset = 1 if layout.has_row_labels else 0

    width = len(rows[0]) if rows else len(header)
    values = []
    row_labels = []
    for r, cells in enumerate(rows):
        line_no = r + body_offset + 1
        if len(cells) != width:
            raise MatrixParseError(
                line_no, len(cells), " ".join(cells),
                f"expected {width} fields, found {len(cells)}",
            )
        if label_offset:
            row_labels.append(cells[0])

        parsed = []
        for c, cell in enumerate(cells[label_offset:]):
            try:
                parsed.append(convert(cell))
            except ValueError as e:
                raise MatrixParseError(line_no, c + label_offset + 1, cell, str(e)) from e
        values.append(parsed)

    n_cols = width - label_offset if rows else max(len(header) - label_offset, 0)
    array = np.array(values, dtype=_DTYPES[value_type]).reshape(len(values), n_cols)

    if not layout.has_row_labels:
        row_labels = [ROW_LABEL_FORMAT.format(i) for i in range(1, len(values) + 1)]

    if layout.has_col_labels:
        col_labels = _column_labels(header, n_cols, label_offset)
    else:
        col_labels = [COL_LABEL_FORMAT.format(j) for j in range(1, n_cols + 1)]

    matrix = LabeledMatrix(values=array, row_labels=row_labels, col_labels=col_labels)
    return matrix.sorted()


def _column_labels(header: List[str], n_cols: int, label_offset: int) -> List[str]:
    # Whitespace splitting drops the blank corner cell of a fully labeled file.
    if len(header) == n_cols:
        return header
    if len(header) == n_cols + label_offset:
        return header[label_offset:]
    raise MatrixParseError(
        1, len(header), " ".join(header),
        f"header has {len(header)} fields for {n_cols} columns",
    )


def read_matrix(
    path: str,
    delimiter: str = DEFAULT_DELIMITER,
    layout: LabelLayout = LabelLayout.NONE,
    value_type: Type = bool,
) -> LabeledMatrix:
    """Load a delimited matrix file into a canonical LabeledMatrix."""
    p = Path(path)
    if not p.is_file():
        raise MatrixIOError(path, "file not found")

    raw_rows = read_delimited(path, delimiter)
    matrix = parse_matrix(raw_rows, layout=layout, value_type=value_type)
    logger.info(
        f"Loaded {matrix.n_rows}x{matrix.n_cols} {value_type.__name__} matrix "
        f"from {path} (labels={layout.value})"
    )
    return matrix
