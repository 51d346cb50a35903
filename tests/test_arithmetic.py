import pytest
import os
import sys
import operator
import numpy as np

# Add the src directory to Python path to import local sparse_arith
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_arith import (SparseMatrix, add, subtract, multiply, negate, combine, load_matrix,
                          DimensionMismatchError, DimensionIncompatibleError)
from sparse_arith.matrix_errors import InvalidMultiplyStrategyError
from test_utils import data_path, random_sparse_dense, validate_against_dense


STRATEGIES = ['row_index', 'column_scan']


@pytest.fixture
def scenario() -> tuple[SparseMatrix, SparseMatrix]:
    """2x2 operands: A = {(0,0): 1, (1,1): 2}, B = {(0,0): 3, (0,1): 4}."""
    return load_matrix(data_path('matrix_a.txt')), load_matrix(data_path('matrix_b.txt'))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


class TestScenario:

    def test_add(self, scenario):
        a, b = scenario
        assert add(a, b).sorted_items() == [((0, 0), 4), ((0, 1), 4), ((1, 1), 2)]

    def test_subtract(self, scenario):
        a, b = scenario
        assert subtract(a, b).sorted_items() == [((0, 0), -2), ((0, 1), -4), ((1, 1), 2)]
        assert subtract(b, a).sorted_items() == [((0, 0), 2), ((0, 1), 4), ((1, 1), -2)]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_multiply(self, scenario, strategy):
        a, b = scenario
        # row 1 of B is empty, so A's (1, 1) entry contributes nothing
        result = multiply(a, b, strategy=strategy)
        assert result.shape == (2, 2)
        assert result.sorted_items() == [((0, 0), 3), ((0, 1), 4)]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_multiply_reversed(self, scenario, strategy):
        a, b = scenario
        assert multiply(b, a, strategy=strategy).sorted_items() == [((0, 0), 3), ((0, 1), 8)]

    def test_operands_are_not_mutated(self, scenario):
        a, b = scenario
        a_before, b_before = a.copy(), b.copy()
        add(a, b)
        subtract(a, b)
        multiply(a, b)
        negate(b)
        assert a == a_before
        assert b == b_before

    def test_operator_sugar(self, scenario):
        a, b = scenario
        assert a + b == add(a, b)
        assert a - b == subtract(a, b)
        assert a @ b == multiply(a, b)
        assert -a == negate(a)


class TestAddSubtract:

    @pytest.mark.parametrize("fn", [add, subtract])
    def test_dimension_mismatch(self, fn):
        with pytest.raises(DimensionMismatchError) as excinfo:
            fn(SparseMatrix(2, 3), SparseMatrix(3, 2))
        assert "Matrix dimensions must be the same for" in str(excinfo.value)
        assert excinfo.value.left_shape == (2, 3)
        assert excinfo.value.right_shape == (3, 2)

    def test_mismatch_never_truncates(self):
        with pytest.raises(DimensionMismatchError):
            add(SparseMatrix(2, 2, {(0, 0): 1}), SparseMatrix(2, 3, {(0, 0): 1}))

    def test_add_commutative(self, rng):
        for _ in range(10):
            a = SparseMatrix.from_dense(random_sparse_dense(rng, (7, 5)))
            b = SparseMatrix.from_dense(random_sparse_dense(rng, (7, 5)))
            assert add(a, b) == add(b, a)

    def test_subtract_equals_add_negated(self, rng):
        for _ in range(10):
            a = SparseMatrix.from_dense(random_sparse_dense(rng, (6, 6)))
            b = SparseMatrix.from_dense(random_sparse_dense(rng, (6, 6)))
            assert subtract(a, b) == add(a, negate(b))

    def test_key_only_in_right_operand_is_negated(self):
        a = SparseMatrix(2, 2, {(0, 0): 5})
        b = SparseMatrix(2, 2, {(1, 1): 3})
        assert subtract(a, b).sorted_items() == [((0, 0), 5), ((1, 1), -3)]

    def test_cancellation_leaves_no_entry(self):
        a = SparseMatrix(2, 2, {(0, 0): 5, (1, 0): 1})
        assert len(subtract(a, a)) == 0
        assert add(a, negate(a)).sorted_items() == []
        assert subtract(a, a).shape == (2, 2)

    def test_against_dense(self, rng):
        da = random_sparse_dense(rng, (9, 4))
        db = random_sparse_dense(rng, (9, 4))
        a, b = SparseMatrix.from_dense(da), SparseMatrix.from_dense(db)
        validate_against_dense(add(a, b), da + db)
        validate_against_dense(subtract(a, b), da - db)

    def test_combine_with_custom_op(self):
        a = SparseMatrix(1, 3, {(0, 0): 4, (0, 1): 2})
        b = SparseMatrix(1, 3, {(0, 1): 5, (0, 2): 7})
        assert combine(a, b, max).sorted_items() == [((0, 0), 4), ((0, 1), 5), ((0, 2), 7)]
        assert combine(a, b, operator.mul).sorted_items() == [((0, 1), 10)]

    def test_negate(self):
        m = SparseMatrix(2, 2, {(0, 1): 3, (1, 0): -4})
        assert negate(m).sorted_items() == [((0, 1), -3), ((1, 0), 4)]
        assert negate(negate(m)) == m


class TestMultiply:

    def test_incompatible(self):
        with pytest.raises(DimensionIncompatibleError) as excinfo:
            multiply(SparseMatrix(2, 3), SparseMatrix(2, 3))
        assert "Matrix dimensions are not suitable for multiplication" in str(excinfo.value)

    def test_unknown_strategy(self, scenario):
        a, b = scenario
        with pytest.raises(InvalidMultiplyStrategyError):
            multiply(a, b, strategy='dense')

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_zero_matrix(self, rng, strategy):
        a = SparseMatrix.from_dense(random_sparse_dense(rng, (4, 6)))
        result = multiply(a, SparseMatrix(6, 3), strategy=strategy)
        assert result.shape == (4, 3)
        assert len(result) == 0
        result = multiply(SparseMatrix(5, 4), a, strategy=strategy)
        assert result.shape == (5, 6)
        assert len(result) == 0

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_identity(self, rng, strategy):
        a = SparseMatrix.from_dense(random_sparse_dense(rng, (4, 6)))
        identity = SparseMatrix.from_dense(np.eye(6, dtype=np.int64))
        assert multiply(a, identity, strategy=strategy) == a

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_against_dense(self, rng, strategy):
        for shape_a, shape_b in [((5, 7), (7, 3)), ((1, 9), (9, 1)), ((8, 2), (2, 8))]:
            da = random_sparse_dense(rng, shape_a, density=0.4)
            db = random_sparse_dense(rng, shape_b, density=0.4)
            result = multiply(SparseMatrix.from_dense(da), SparseMatrix.from_dense(db), strategy=strategy)
            validate_against_dense(result, da @ db)

    def test_strategies_agree(self, rng):
        da = random_sparse_dense(rng, (12, 15), density=0.25)
        db = random_sparse_dense(rng, (15, 10), density=0.25)
        a, b = SparseMatrix.from_dense(da), SparseMatrix.from_dense(db)
        assert multiply(a, b, strategy='row_index') == multiply(a, b, strategy='column_scan')

    def test_cancelling_products_leave_no_entry(self):
        a = SparseMatrix(1, 2, {(0, 0): 1, (0, 1): 1})
        b = SparseMatrix(2, 1, {(0, 0): 3, (1, 0): -3})
        result = multiply(a, b)
        assert result.shape == (1, 1)
        assert len(result) == 0

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_each_result_cell_written_once(self, monkeypatch, strategy):
        # (0, 0) gets two products that cancel, (0, 1) and (1, 1) get two that add up
        a = SparseMatrix(2, 2, {(0, 0): 1, (0, 1): 1, (1, 0): 2, (1, 1): 3})
        b = SparseMatrix(2, 2, {(0, 0): 4, (1, 0): -4, (0, 1): 5, (1, 1): 6})
        writes = []
        original_set = SparseMatrix.set

        def counting_set(self, i, j, v):
            writes.append((i, j))
            original_set(self, i, j, v)

        monkeypatch.setattr(SparseMatrix, 'set', counting_set)
        monkeypatch.setattr(SparseMatrix, 'add_at', None)
        result = multiply(a, b, strategy=strategy)

        assert sorted(writes) == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert result.sorted_items() == [((0, 1), 11), ((1, 0), -4), ((1, 1), 28)]

    def test_empty_inner_dimension(self):
        result = multiply(SparseMatrix(3, 0), SparseMatrix(0, 2))
        assert result.shape == (3, 2)
        assert len(result) == 0
