import os
from typing import Optional, Literal
from dataclasses import dataclass, field

from .constants import MULTIPLY_STRATEGIES, LOG_LEVELS, RESULT_FILENAMES, Operation
from .matrix_errors import InvalidMultiplyStrategyError, InvalidResultFilenameError, InvalidLogLevelError


@dataclass
class MatrixConfig:
    """
    Configuration for sparse matrix arithmetic sessions.

    This class defines how multiplication is evaluated, where results are
    written, and how much diagnostic logging is emitted.
    """

    multiply_strategy: Literal['row_index', 'column_scan'] = 'row_index'
    """Algorithm used for multiplication:
    - 'row_index': index the right operand by row and visit only its non-zero entries
    - 'column_scan': scan every column of the right operand for each non-zero entry of the left
    Both produce identical results.
    """

    result_filenames: dict[str, str] = field(default_factory=lambda: dict(RESULT_FILENAMES))
    """File name written inside the result directory for each operation."""

    log_level: str = 'WARNING'
    """Logging level name for the 'sparse_arith' logger."""

    log_file: Optional[str] = None
    """Optional path that log records are also written to."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.multiply_strategy not in MULTIPLY_STRATEGIES:
            raise InvalidMultiplyStrategyError(self.multiply_strategy, MULTIPLY_STRATEGIES)
        for operation in (Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY):
            filename = self.result_filenames.get(operation)
            if filename is None:
                raise InvalidResultFilenameError(operation)
            if not filename.strip() or filename in ('.', '..') or os.path.basename(filename) != filename:
                raise InvalidResultFilenameError(operation, filename)
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise InvalidLogLevelError(self.log_level, LOG_LEVELS)
