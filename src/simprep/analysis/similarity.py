"""Tversky index similarity between fingerprint bit vectors.

The Tversky index of two bit vectors X and Y is

    S = |X & Y| / (|X & Y| + alpha * |X & ~Y| + beta * |Y & ~X|)

and reduces to familiar coefficients for particular weights:

- alpha = beta = 1: Tanimoto (Jaccard) coefficient
- alpha = beta = 0.5: Sorensen-Dice coefficient
- alpha = 1, beta = 0: "superstructure-likeness"
- alpha = 0, beta = 1: "substructure-likeness"

Tversky index is not a metric. When both vectors are empty the ratio is
0/0 and the score is NaN; callers receive it unchanged.
"""

from typing import Optional, Sequence, Tuple, Union

import numpy as np

from simprep.core.constants import COEFFICIENT_PRESETS
from simprep.core.exceptions import DimensionMismatchError, ValidationError
from simprep.core.logging import get_logger, log_duration
from simprep.core.models import LabeledMatrix
from simprep.utils.parallel import parallel_map, resolve_workers

logger = get_logger("analysis.similarity")

BitVector = Union[np.ndarray, Sequence[bool], Sequence[int]]


def check_coefficients(alpha: float, beta: float) -> None:
    if alpha < 0:
        raise ValidationError(f"alpha must be >= 0, got {alpha}")
    if beta < 0:
        raise ValidationError(f"beta must be >= 0, got {beta}")


def resolve_coefficients(preset: str) -> Tuple[float, float]:
    """Return the (alpha, beta) pair for a named coefficient."""
    coeffs = COEFFICIENT_PRESETS.get(preset.lower())
    if coeffs is None:
        raise ValidationError(
            f"Unknown coefficient preset: {preset}. "
            f"Available: {list(COEFFICIENT_PRESETS.keys())}"
        )
    return coeffs


def _tversky_ratio(intersection, only_x, only_y, alpha: float, beta: float):
    # Shared by the scalar and row paths so both round identically. The two
    # weighted terms are summed first so swapping x and y with alpha and beta
    # gives the same bits.
    intersection = np.asarray(intersection, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        return intersection / (intersection + (alpha * only_x + beta * only_y))


def tversky(x: BitVector, y: BitVector, alpha: float, beta: float) -> float:
    """Compute the Tversky index between two bit vectors.

    >>> tversky([1, 0, 0, 1, 0], [1, 0, 1, 1, 0], 0.5, 0.5)
    0.8
    >>> tversky([1, 0, 0, 1, 0], [1, 0, 1, 1, 0], 1.0, 0.0)
    1.0
    """
    check_coefficients(alpha, beta)
    if len(x) != len(y):
        raise ValidationError(
            f"Bit vectors must have the same length: {len(x)} != {len(y)}"
        )

    x = np.asarray(x, dtype=bool)
    y = np.asarray(y, dtype=bool)
    intersection = np.count_nonzero(x & y)
    only_x = np.count_nonzero(x & ~y)
    only_y = np.count_nonzero(y & ~x)
    return float(_tversky_ratio(intersection, only_x, only_y, alpha, beta))


def tanimoto(x: BitVector, y: BitVector) -> float:
    return tversky(x, y, *COEFFICIENT_PRESETS["tanimoto"])


def dice(x: BitVector, y: BitVector) -> float:
    return tversky(x, y, *COEFFICIENT_PRESETS["dice"])


def tversky_row(
    x: np.ndarray,
    targets: np.ndarray,
    alpha: float,
    beta: float,
) -> np.ndarray:
    """Tversky index of one bit vector against every row of ``targets``."""
    intersection = np.count_nonzero(targets & x, axis=1)
    only_x = np.count_nonzero(x & ~targets, axis=1)
    only_y = np.count_nonzero(targets & ~x, axis=1)
    return _tversky_ratio(intersection, only_x, only_y, alpha, beta)


def tversky_matrix(
    M: LabeledMatrix,
    N: LabeledMatrix,
    alpha: float,
    beta: float,
    n_workers: Optional[int] = None,
    progress: bool = True,
) -> LabeledMatrix:
    """Compute the M x N Tversky similarity matrix between two bit matrices.

    Rows of the result follow M's row labels, columns follow N's row labels.
    Each output row is one unit of work, so the matrix is identical for any
    ``n_workers`` (None uses every available CPU).
    """
    check_coefficients(alpha, beta)
    if M.n_cols != N.n_cols:
        raise DimensionMismatchError(M.n_cols, N.n_cols)

    n_workers = resolve_workers(n_workers)
    logger.info(
        f"Calculating Tversky index (alpha = {alpha}, beta = {beta}) for "
        f"{M.n_rows}x{N.n_rows} pairs on {n_workers} worker(s)"
    )

    queries = M.values.astype(bool)
    targets = N.values.astype(bool)
    with log_duration(logger, f"Tversky matrix {M.n_rows}x{N.n_rows}"):
        rows = parallel_map(
            tversky_row,
            list(queries),
            n_jobs=n_workers,
            desc="Computing Tversky matrix",
            shared=(targets, alpha, beta),
            disable=not progress,
        )

    values = np.empty((M.n_rows, N.n_rows), dtype=np.float64)
    for i, row in enumerate(rows):
        values[i, :] = row

    n_undefined = int(np.isnan(values).sum())
    if n_undefined:
        logger.warning(
            f"{n_undefined} pair(s) have no set bits on either side; "
            f"their similarity is NaN"
        )

    return LabeledMatrix(
        values=values, row_labels=M.row_labels, col_labels=N.row_labels,
    )
