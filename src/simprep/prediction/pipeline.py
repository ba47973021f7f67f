"""Drug-target interaction prediction from similarity matrices.

Loads the training drug-target adjacency and the training/query drug-drug
similarity matrices, hands them to a PredictionBackend, and writes the
scored (drug, target) pairs.
"""

from typing import List

from simprep.core.constants import DEFAULT_CUTOFF, DEFAULT_GPU_ID
from simprep.core.exceptions import PredictionError, SimPrepError, ValidationError
from simprep.core.logging import get_logger
from simprep.core.models import InteractionRecord, LabeledMatrix, LabelLayout
from simprep.data.loaders import read_matrix
from simprep.data.writers import write_interactions
from simprep.prediction.backend import PredictionBackend

logger = get_logger("prediction.pipeline")


def check_prediction_inputs(
    dt_train: LabeledMatrix,
    dd_train: LabeledMatrix,
    dd_query: LabeledMatrix,
) -> None:
    """Ensure the three matrices describe the same training drugs."""
    if dd_train.row_labels != dt_train.row_labels:
        raise ValidationError(
            "Training similarity rows do not match training adjacency rows"
        )
    if dd_query.col_labels != dd_train.col_labels:
        raise ValidationError(
            "Query similarity columns do not match training similarity columns"
        )


def query_adjacency(
    dt_train: LabeledMatrix,
    dd_query: LabeledMatrix,
) -> LabeledMatrix:
    """Empty adjacency: query drugs x training targets."""
    return LabeledMatrix.zeros(dd_query.row_labels, dt_train.col_labels)


def predict_interactions(
    dt_train: LabeledMatrix,
    dd_train: LabeledMatrix,
    dd_query: LabeledMatrix,
    backend: PredictionBackend,
    cutoff: float = DEFAULT_CUTOFF,
    weighted: bool = False,
    gpu: bool = False,
    gpu_id: int = DEFAULT_GPU_ID,
) -> List[InteractionRecord]:
    check_prediction_inputs(dt_train, dd_train, dd_query)
    dt_query = query_adjacency(dt_train, dd_query)

    try:
        df_train = backend.featurize(dd_train, cutoff, weighted)
        df_query = backend.featurize(dd_query, cutoff, weighted)
        graph = backend.construct((dt_train, dt_query), (df_train, df_query))
        predictions = backend.predict(graph, dt_query, gpu=gpu, gpu_id=gpu_id)
        records = [InteractionRecord(*p) for p in predictions]
    except SimPrepError:
        raise
    except Exception as e:
        raise PredictionError(f"Prediction backend failed: {e}") from e

    logger.info(
        f"Predicted {len(records)} interactions for "
        f"{dt_query.n_rows} query drugs x {dt_query.n_cols} targets"
    )
    return records


def run_prediction(
    dt_train_path: str,
    dd_train_path: str,
    dd_query_path: str,
    output_path: str,
    backend: PredictionBackend,
    cutoff: float = DEFAULT_CUTOFF,
    weighted: bool = False,
    gpu: bool = False,
    gpu_id: int = DEFAULT_GPU_ID,
) -> int:
    """Load inputs, predict, and write interactions. Returns the record count."""
    dd_train = read_matrix(dd_train_path, layout=LabelLayout.BOTH, value_type=float)
    dd_query = read_matrix(dd_query_path, layout=LabelLayout.BOTH, value_type=float)
    dt_train = read_matrix(dt_train_path, layout=LabelLayout.BOTH, value_type=float)

    records = predict_interactions(
        dt_train, dd_train, dd_query, backend,
        cutoff=cutoff, weighted=weighted, gpu=gpu, gpu_id=gpu_id,
    )
    return write_interactions(records, output_path)
