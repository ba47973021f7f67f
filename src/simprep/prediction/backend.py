"""Interface to the external link-prediction collaborator.

The graph construction and resource diffusion live outside this package.
Anything exposing ``featurize``, ``construct`` and ``predict`` with the
signatures below can drive the prediction step.
"""

from __future__ import annotations

import importlib
import inspect
from typing import Any, Iterable, Protocol, Tuple, Union, runtime_checkable

from simprep.core.exceptions import ConfigurationError
from simprep.core.models import InteractionRecord, LabeledMatrix

Prediction = Union[InteractionRecord, Tuple[str, str, float]]


@runtime_checkable
class PredictionBackend(Protocol):
    def featurize(
        self, similarity: LabeledMatrix, cutoff: float, weighted: bool,
    ) -> Any:
        """Threshold (and optionally weight) a similarity matrix into features."""
        ...

    def construct(
        self,
        adjacency: Tuple[LabeledMatrix, LabeledMatrix],
        features: Tuple[Any, Any],
    ) -> Any:
        """Build the combined training + query graph."""
        ...

    def predict(
        self,
        graph: Any,
        query_adjacency: LabeledMatrix,
        gpu: bool = False,
        gpu_id: int = 0,
    ) -> Iterable[Prediction]:
        """Score unobserved (source, target) pairs of the query rows."""
        ...


def load_backend(spec: str) -> PredictionBackend:
    """Resolve ``"package.module:Name"`` to a backend instance.

    Classes and zero-argument factories are called; other objects are used
    as-is.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"Backend must be given as 'module:attribute', got '{spec}'"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import backend module '{module_name}': {e}")

    try:
        target = getattr(module, attr)
    except AttributeError:
        raise ConfigurationError(f"Module '{module_name}' has no attribute '{attr}'")

    if inspect.isclass(target):
        backend = target()
    elif isinstance(target, PredictionBackend):
        backend = target
    elif callable(target):
        backend = target()
    else:
        backend = target
    if not isinstance(backend, PredictionBackend):
        raise ConfigurationError(
            f"'{spec}' does not provide featurize/construct/predict"
        )
    return backend
