import os
import argparse
import logging
from typing import Callable, Optional

from .arithmetic import OPERATIONS, multiply
from .config import MatrixConfig
from .constants import MenuChoice, Operation, OPERATION_LABELS, MULTIPLY_STRATEGIES, LOG_LEVELS
from .logging_config import setup_logging
from .matrix_errors import SparseMatrixError, MatrixConfigError
from .matrix_io import load_matrix, save_matrix
from .sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)

MENU = (
    "\nKindly choose an arithmetic operator or exit the program:\n"
    "1. Addition (+)\n"
    "2. Subtraction (-)\n"
    "3. Multiplication (*)\n"
    "4. Exit\n"
)
PROMPT = "Choose one option you want to use : 1, 2, 3 or 4:\n"

MENU_OPERATIONS = {
    MenuChoice.ADD: Operation.ADD,
    MenuChoice.SUBTRACT: Operation.SUBTRACT,
    MenuChoice.MULTIPLY: Operation.MULTIPLY,
}


class MatrixShell:
    """
    Interactive loop that applies the user's chosen operation to two loaded
    matrices and writes each result into the result directory.
    """

    def __init__(self, matrix1: SparseMatrix, matrix2: SparseMatrix, result_dir: str,
                 config: MatrixConfig = None,
                 input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        """
        Args:
            matrix1: Left operand for every operation.
            matrix2: Right operand for every operation.
            result_dir: Existing directory the result files are written to.
            config: MatrixConfig controlling the multiply strategy and result file names.
            input_fn: Reads one line of user input given a prompt.
            output_fn: Writes one message to the user.
        """
        self.matrix1 = matrix1
        self.matrix2 = matrix2
        self.result_dir = result_dir
        self.config = config if config is not None else MatrixConfig()
        self.config.validate()
        self.input_fn = input_fn
        self.output_fn = output_fn

    def compute(self, operation: str) -> SparseMatrix:
        if operation == Operation.MULTIPLY:
            return multiply(self.matrix1, self.matrix2, strategy=self.config.multiply_strategy)
        return OPERATIONS[operation](self.matrix1, self.matrix2)

    def run_operation(self, operation: str) -> str:
        """Compute one operation, save it and return the path of the written file."""
        result = self.compute(operation)
        result_path = os.path.join(self.result_dir, self.config.result_filenames[operation])
        save_matrix(result, result_path)
        return result_path

    def handle_choice(self, choice: str) -> bool:
        """Dispatch one menu choice. Returns False when the user asked to exit."""
        choice = choice.strip()
        if choice == MenuChoice.EXIT:
            self.output_fn("You exit the program! Thank you")
            return False

        operation = MENU_OPERATIONS.get(choice)
        if operation is None:
            self.output_fn("Your choice is invalid, Please try again.")
            return True

        try:
            result_path = self.run_operation(operation)
        except (SparseMatrixError, OSError) as e:
            # the session continues so the user can pick another operation
            logger.info(f"{operation} failed: {e}")
            self.output_fn(f"Error: {e}")
            return True

        self.output_fn(f"The {OPERATION_LABELS[operation]} operation results are saved in {result_path}")
        return True

    def run(self) -> None:
        while True:
            self.output_fn(MENU)
            try:
                choice = self.input_fn(PROMPT)
            except EOFError:
                break
            if not self.handle_choice(choice):
                break


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sparse-arith",
        description="Add, subtract or multiply two sparse integer matrices stored as rows/cols/(row, col, value) text files.",
    )
    parser.add_argument("matrix1", help="path of the left operand matrix file")
    parser.add_argument("matrix2", help="path of the right operand matrix file")
    parser.add_argument("result_dir", help="existing directory the result files are written to")
    parser.add_argument("--operation", choices=list(OPERATIONS.keys()), default=None,
                        help="run a single operation and exit instead of showing the menu")
    parser.add_argument("--strategy", choices=MULTIPLY_STRATEGIES, default='row_index',
                        help="multiplication algorithm (default: row_index)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default='WARNING')
    parser.add_argument("--log-file", default=None)
    return parser


def main(argv: Optional[list[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    """Command-line entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    config = MatrixConfig(multiply_strategy=args.strategy, log_level=args.log_level, log_file=args.log_file)
    try:
        config.validate()
    except MatrixConfigError as e:
        print(f"Error: {e}")
        return 1
    setup_logging(config.log_level, config.log_file)

    if not os.path.isdir(args.result_dir):
        print(f"Error: {args.result_dir} is not a directory or does not exist.")
        return 1

    try:
        matrix1 = load_matrix(args.matrix1)
        matrix2 = load_matrix(args.matrix2)
    except (SparseMatrixError, OSError) as e:
        # without both operands there is nothing to operate on
        print(f"Error loading matrices: {e}")
        return 1

    shell = MatrixShell(matrix1, matrix2, args.result_dir, config=config, input_fn=input_fn)
    if args.operation is not None:
        try:
            result_path = shell.run_operation(args.operation)
        except (SparseMatrixError, OSError) as e:
            print(f"Error: {e}")
            return 1
        print(f"The {OPERATION_LABELS[args.operation]} operation results are saved in {result_path}")
        return 0

    shell.run()
    return 0
