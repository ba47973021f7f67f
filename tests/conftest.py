"""Shared test fixtures."""

import numpy as np
import pytest

from simprep.core.models import InteractionRecord, LabeledMatrix

# 5x5 bit matrix with known Dice / superstructure similarity matrices
REFERENCE_BITS = np.array([
    [0, 1, 0, 0, 1],
    [1, 0, 1, 0, 0],
    [1, 0, 0, 0, 1],
    [0, 0, 1, 0, 0],
    [0, 0, 0, 1, 1],
], dtype=bool)


@pytest.fixture
def reference_matrix():
    labels = [f"D{i}" for i in range(1, 6)]
    return LabeledMatrix(
        values=REFERENCE_BITS, row_labels=labels,
        col_labels=[f"F{j}" for j in range(1, 6)],
    )


@pytest.fixture
def abc_matrix():
    """3x4 fingerprint matrix with row labels A, B, C."""
    return LabeledMatrix(
        values=np.array([
            [1, 1, 0, 1],
            [0, 1, 1, 0],
            [1, 0, 1, 1],
        ], dtype=bool),
        row_labels=["A", "B", "C"],
        col_labels=["C#1", "C#2", "C#3", "C#4"],
    )


@pytest.fixture
def fingerprint_path(tmp_path):
    """Named fingerprint file, rows deliberately out of order."""
    path = tmp_path / "fps.txt"
    path.write_text(
        "C 1 0 1 1\n"
        "A 1 1 0 1\n"
        "B 0 1 1 0\n"
    )
    return str(path)


# ── Prediction Fixtures ───────────────────────────────────────

@pytest.fixture
def prediction_paths(tmp_path):
    """Training adjacency and train/query similarity files."""
    dt = tmp_path / "dt_train.txt"
    dt.write_text(
        " T1 T2\n"
        "D1 1 0\n"
        "D2 0 1\n"
    )
    dd_train = tmp_path / "dd_train.txt"
    dd_train.write_text(
        " D1 D2\n"
        "D1 1.0 0.25\n"
        "D2 0.25 1.0\n"
    )
    dd_query = tmp_path / "dd_query.txt"
    dd_query.write_text(
        " D1 D2\n"
        "Q1 0.8 0.1\n"
    )
    return str(dt), str(dd_train), str(dd_query)


class StubBackend:
    """Records calls; scores each query/target pair by thresholded similarity."""

    def __init__(self):
        self.calls = []

    def featurize(self, similarity, cutoff, weighted):
        self.calls.append(("featurize", cutoff, weighted))
        kept = similarity.values >= cutoff
        return np.where(kept, similarity.values if weighted else 1.0, 0.0)

    def construct(self, adjacency, features):
        self.calls.append(("construct",))
        dt_train, dt_query = adjacency
        _, df_query = features
        return df_query @ dt_train.values, dt_query

    def predict(self, graph, query_adjacency, gpu=False, gpu_id=0):
        self.calls.append(("predict", gpu, gpu_id))
        scores, _ = graph
        for i, source in enumerate(query_adjacency.row_labels):
            for j, target in enumerate(query_adjacency.col_labels):
                yield InteractionRecord(source, target, float(scores[i, j]))


@pytest.fixture
def stub_backend():
    return StubBackend()


@pytest.fixture
def stub_backend_module(monkeypatch):
    """Register an importable module exposing StubBackend."""
    import sys
    import types

    module = types.ModuleType("stub_prediction_backend")
    module.StubBackend = StubBackend
    module.not_a_backend = 42
    monkeypatch.setitem(sys.modules, "stub_prediction_backend", module)
    return module
