"""Run configuration system with YAML loading."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

import yaml

from simprep.core.constants import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    DEFAULT_CUTOFF,
    DEFAULT_DELIMITER,
    DEFAULT_GPU_ID,
)
from simprep.core.exceptions import ConfigurationError


@dataclass
class SimilarityConfig:
    """Configuration for Tversky similarity matrix computation."""
    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA
    delimiter: str = DEFAULT_DELIMITER
    named: bool = False
    n_workers: Optional[int] = None


@dataclass
class PredictionConfig:
    """Configuration for the interaction prediction step."""
    cutoff: float = DEFAULT_CUTOFF
    weighted: bool = False
    gpu: bool = False
    gpu_id: int = DEFAULT_GPU_ID
    backend: Optional[str] = None


@dataclass
class RunConfig:
    log_level: str = "INFO"
    log_file: Optional[str] = None

    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
    prediction: PredictionConfig = field(default_factory=PredictionConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "RunConfig":
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config {path} must be a mapping, got {type(data).__name__}"
            )

        config = cls()
        sub_config_map = {
            "similarity": SimilarityConfig,
            "prediction": PredictionConfig,
        }

        for key, value in data.items():
            if key in sub_config_map and isinstance(value, dict):
                attr = getattr(config, key)
                for sub_key, sub_value in value.items():
                    if hasattr(attr, sub_key):
                        setattr(attr, sub_key, sub_value)
            elif hasattr(config, key):
                setattr(config, key, value)

        _check_values(config, path)
        return config

    def to_yaml(self, path: str) -> None:
        data = dataclasses.asdict(self)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_values(config: RunConfig, path: str) -> None:
    sim, pred = config.similarity, config.prediction
    for name, value in (("similarity.alpha", sim.alpha),
                        ("similarity.beta", sim.beta),
                        ("prediction.cutoff", pred.cutoff)):
        if not _is_number(value):
            raise ConfigurationError(
                f"Config {path}: {name} must be a number, got {value!r}"
            )
    if sim.alpha < 0 or sim.beta < 0:
        raise ConfigurationError(f"Config {path}: alpha and beta must be >= 0")

    if not isinstance(sim.delimiter, str) or len(sim.delimiter) != 1:
        raise ConfigurationError(
            f"Config {path}: similarity.delimiter must be a single character, "
            f"got {sim.delimiter!r}"
        )
    for name, value, optional in (("similarity.n_workers", sim.n_workers, True),
                                  ("prediction.gpu_id", pred.gpu_id, False)):
        if value is None and optional:
            continue
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigurationError(
                f"Config {path}: {name} must be an integer, got {value!r}"
            )
    if not isinstance(config.log_level, str):
        raise ConfigurationError(
            f"Config {path}: log_level must be a string, got {config.log_level!r}"
        )
    if pred.backend is not None and not isinstance(pred.backend, str):
        raise ConfigurationError(
            f"Config {path}: prediction.backend must be 'module:attribute', "
            f"got {pred.backend!r}"
        )
