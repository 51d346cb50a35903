

class SparseMatrixError(ValueError):
    """Base class for sparse matrix runtime errors."""
    pass

class MatrixConfigError(ValueError):
    """Base class for sparse matrix configuration errors."""
    pass



class FormatError(SparseMatrixError):
    """Raised when a matrix text source does not follow the rows/cols/(row, col, value) grammar."""

    def __init__(self, reason: str, source: str = "<string>", line_number: int = None):
        self.reason = reason
        self.source = source
        self.line_number = line_number

        location = source if line_number is None else f"{source}:{line_number}"
        message = f"Input file has wrong format ({location}): {reason}"
        super().__init__(message)


class DimensionMismatchError(SparseMatrixError):
    """Raised when addition or subtraction is requested on matrices of differing shape."""

    def __init__(self, operation: str, left_shape: tuple, right_shape: tuple):
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape
        message = f"Matrix dimensions must be the same for {operation}: {left_shape} vs {right_shape}"
        super().__init__(message)


class DimensionIncompatibleError(SparseMatrixError):
    """Raised when the inner dimensions of a multiplication disagree."""

    def __init__(self, left_shape: tuple, right_shape: tuple):
        self.left_shape = left_shape
        self.right_shape = right_shape
        message = f"Matrix dimensions are not suitable for multiplication: {left_shape} x {right_shape}"
        super().__init__(message)


class OutOfRangeError(SparseMatrixError, IndexError):
    """Raised when a coordinate falls outside the declared matrix shape, or a shape is negative."""

    def __init__(self, row: int, col: int, shape: tuple):
        self.row = row
        self.col = col
        self.shape = shape
        message = f"Coordinate ({row}, {col}) is out of range for matrix of shape {shape}"
        super().__init__(message)



class InvalidMultiplyStrategyError(MatrixConfigError):
    """Raised when an unknown multiplication strategy is requested."""

    def __init__(self, strategy: str, valid_strategies: list):
        self.strategy = strategy
        self.valid_strategies = valid_strategies
        message = f"Invalid multiply strategy '{strategy}'. Must be one of: {valid_strategies}"
        super().__init__(message)


class InvalidResultFilenameError(MatrixConfigError):
    """Raised when a result file name is missing, empty, or contains a directory part."""

    def __init__(self, operation: str, filename=None):
        self.operation = operation
        self.filename = filename
        if filename is None:
            message = f"No result filename configured for operation '{operation}'"
        else:
            message = f"Invalid result filename '{filename}' for operation '{operation}'. Must be a bare file name"
        super().__init__(message)


class InvalidLogLevelError(MatrixConfigError):
    """Raised when the configured log level is not a standard logging level name."""

    def __init__(self, level: str, valid_levels: list):
        self.level = level
        self.valid_levels = valid_levels
        message = f"Invalid log level '{level}'. Must be one of: {valid_levels}"
        super().__init__(message)
