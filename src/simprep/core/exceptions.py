"""Custom exception hierarchy for simprep."""


class SimPrepError(Exception):
    """Base exception for all simprep errors."""


class ValidationError(SimPrepError):
    """Raised when inputs violate a precondition before any computation."""


class DimensionMismatchError(ValidationError):
    """Raised when two matrices disagree on their feature (column) count."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(
            f"Matrices should have the same amount of columns: "
            f"{left} != {right}"
        )


class MatrixParseError(SimPrepError):
    """Raised when a matrix cell cannot be converted to the expected type."""

    def __init__(self, line: int, field: int, cell: str, reason: str = ""):
        self.line = line
        self.field = field
        self.cell = cell
        super().__init__(
            f"Failed to parse cell at line {line}, field {field}: "
            f"'{cell[:40]}' - {reason}"
        )


class MatrixIOError(SimPrepError):
    """Raised when a matrix file cannot be read or written."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        super().__init__(f"Cannot access {path}: {reason}")


class ConfigurationError(SimPrepError):
    """Raised when run configuration is invalid."""


class PredictionError(SimPrepError):
    """Raised when the prediction backend fails."""
