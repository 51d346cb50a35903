ROWS_KEY = "rows"
COLS_KEY = "cols"
HEADER_DELIMITER = "="
ENTRY_OPEN = "("
ENTRY_CLOSE = ")"
ENTRY_SEPARATOR = ","
ENTRY_FIELD_COUNT = 3

MULTIPLY_STRATEGIES = ['row_index', 'column_scan']
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class Operation:
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"


class MenuChoice:
    ADD = "1"
    SUBTRACT = "2"
    MULTIPLY = "3"
    EXIT = "4"


RESULT_FILENAMES = {
    Operation.ADD: "addition.txt",
    Operation.SUBTRACT: "difference.txt",
    Operation.MULTIPLY: "multiplication.txt",
}

# names used when reporting a saved result
OPERATION_LABELS = {
    Operation.ADD: "addition",
    Operation.SUBTRACT: "subtraction",
    Operation.MULTIPLY: "multiplication",
}
