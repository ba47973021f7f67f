"""Default parameters, coefficient presets, and text format constants."""

# Tversky coefficients (alpha, beta) for the named special cases
COEFFICIENT_PRESETS = {
    "tanimoto": (1.0, 1.0),
    "dice": (0.5, 0.5),
    "superstructure": (1.0, 0.0),
    "substructure": (0.0, 1.0),
}

# Defaults realize the Tanimoto coefficient
DEFAULT_ALPHA = 1.0
DEFAULT_BETA = 1.0

DEFAULT_DELIMITER = " "

# Placeholder labels for unlabeled axes (1-based)
ROW_LABEL_FORMAT = "R#{}"
COL_LABEL_FORMAT = "C#{}"

# Literal cell spellings accepted for boolean matrices
TRUE_TOKENS = frozenset({"1", "true"})
FALSE_TOKENS = frozenset({"0", "false"})

# ── Prediction defaults ───────────────────────────────────────

DEFAULT_CUTOFF = 0.5
DEFAULT_GPU_ID = 0
