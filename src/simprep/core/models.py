"""Core data models: labeled matrices and predicted interactions."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Sequence, Tuple

import numpy as np
import pandas as pd

from simprep.core.exceptions import ValidationError


class LabelLayout(Enum):
    """Which axes of a delimited matrix file carry labels."""
    NONE = "none"
    ROWS = "rows"
    COLS = "cols"
    BOTH = "both"

    @property
    def has_row_labels(self) -> bool:
        return self in (LabelLayout.ROWS, LabelLayout.BOTH)

    @property
    def has_col_labels(self) -> bool:
        return self in (LabelLayout.COLS, LabelLayout.BOTH)

    @classmethod
    def from_flags(cls, rows: bool, cols: bool) -> "LabelLayout":
        if rows and cols:
            return cls.BOTH
        if rows:
            return cls.ROWS
        if cols:
            return cls.COLS
        return cls.NONE


@dataclass(frozen=True)
class LabeledMatrix:
    """2-D array with ordered, unique labels on both axes.

    Values are stored read-only; derive new matrices instead of mutating.
    """

    values: np.ndarray
    row_labels: Tuple[str, ...]
    col_labels: Tuple[str, ...]

    def __post_init__(self) -> None:
        values = np.array(self.values, copy=True)
        if values.ndim != 2:
            raise ValidationError(
                f"Matrix values must be 2-D, got {values.ndim} dimension(s)"
            )
        values.setflags(write=False)
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "row_labels", tuple(str(r) for r in self.row_labels))
        object.__setattr__(self, "col_labels", tuple(str(c) for c in self.col_labels))

        n_rows, n_cols = values.shape
        if len(self.row_labels) != n_rows:
            raise ValidationError(
                f"{len(self.row_labels)} row labels for {n_rows} rows"
            )
        if len(self.col_labels) != n_cols:
            raise ValidationError(
                f"{len(self.col_labels)} column labels for {n_cols} columns"
            )
        _check_unique(self.row_labels, "row")
        _check_unique(self.col_labels, "column")

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    @property
    def n_rows(self) -> int:
        return self.values.shape[0]

    @property
    def n_cols(self) -> int:
        return self.values.shape[1]

    @property
    def dtype(self) -> np.dtype:
        return self.values.dtype

    def row(self, index: int) -> np.ndarray:
        return self.values[index, :]

    def sorted(self) -> "LabeledMatrix":
        """Return the canonical form: both axes ascending by label."""
        row_order = sorted(range(self.n_rows), key=lambda i: self.row_labels[i])
        col_order = sorted(range(self.n_cols), key=lambda j: self.col_labels[j])
        values = self.values[np.ix_(row_order, col_order)]
        return LabeledMatrix(
            values=values,
            row_labels=tuple(self.row_labels[i] for i in row_order),
            col_labels=tuple(self.col_labels[j] for j in col_order),
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            self.values,
            index=list(self.row_labels),
            columns=list(self.col_labels),
        )

    @classmethod
    def zeros(
        cls,
        row_labels: Sequence[str],
        col_labels: Sequence[str],
        dtype=np.float64,
    ) -> "LabeledMatrix":
        return cls(
            values=np.zeros((len(row_labels), len(col_labels)), dtype=dtype),
            row_labels=tuple(row_labels),
            col_labels=tuple(col_labels),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabeledMatrix):
            return NotImplemented
        return (
            self.row_labels == other.row_labels
            and self.col_labels == other.col_labels
            and self.values.shape == other.values.shape
            and bool(np.array_equal(self.values, other.values, equal_nan=_is_float(self.values)))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"LabeledMatrix(shape={self.shape}, dtype={self.dtype}, "
            f"rows={list(self.row_labels[:3])}..., "
            f"cols={list(self.col_labels[:3])}...)"
        )


class InteractionRecord(NamedTuple):
    """A scored (source, target) pair emitted by the prediction step."""
    source: str
    target: str
    score: float

    def to_line(self) -> str:
        return " ".join([str(self.source), str(self.target), str(self.score)]) + "\n"


def _check_unique(labels: Tuple[str, ...], axis: str) -> None:
    if len(set(labels)) != len(labels):
        dupes = sorted(lab for lab, n in Counter(labels).items() if n > 1)
        raise ValidationError(f"Duplicate {axis} labels: {dupes[:5]}")


def _is_float(values: np.ndarray) -> bool:
    return np.issubdtype(values.dtype, np.floating)
