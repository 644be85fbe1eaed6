import numpy as np
import pytest

from regressionAPP.core.dataset import Dataset, DatasetError


class TestConstruction:
    def test_from_pairs_keeps_order(self):
        ds = Dataset.from_pairs([(2.0, 5.0), (0.0, 1.0), (1.0, 3.0)])
        assert ds.pairs() == [(2.0, 5.0), (0.0, 1.0), (1.0, 3.0)]
        assert len(ds) == 3

    def test_arrays_are_float64(self):
        ds = Dataset([0, 1, 2], [1, 3, 10])
        assert ds.x.dtype == np.float64
        assert ds.y.dtype == np.float64

    def test_repeated_x_allowed(self):
        ds = Dataset([1.0, 1.0, 2.0], [0.0, 1.0, 2.0])
        assert len(ds) == 3
        assert ds.n_distinct_x == 2

    def test_iteration_yields_pairs(self):
        ds = Dataset([0.0, 1.0], [1.0, 3.0])
        assert list(ds) == [(0.0, 1.0), (1.0, 3.0)]

    def test_equality(self):
        assert Dataset([0, 1], [1, 2]) == Dataset.from_pairs([(0, 1), (1, 2)])
        assert Dataset([0, 1], [1, 2]) != Dataset([0, 1], [1, 3])


class TestValidation:
    def test_empty_rejected(self):
        with pytest.raises(DatasetError):
            Dataset([], [])

    def test_empty_pairs_rejected(self):
        with pytest.raises(DatasetError):
            Dataset.from_pairs([])

    def test_length_mismatch_rejected(self):
        with pytest.raises(DatasetError):
            Dataset([0.0, 1.0], [1.0])

    def test_two_dimensional_rejected(self):
        with pytest.raises(DatasetError):
            Dataset([[0.0, 1.0]], [[1.0, 2.0]])

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(DatasetError):
            Dataset([0.0, bad], [1.0, 2.0])

    @pytest.mark.parametrize("pairs", [
        [(0.0, 1.0, 2.0), (1.0, 3.0, 4.0)],
        [(0.0, 1.0), (1.0,)],
        [1.0, 2.0],
        [(0.0, 1.0), None],
    ])
    def test_non_pair_items_rejected(self, pairs):
        with pytest.raises(DatasetError):
            Dataset.from_pairs(pairs)

    def test_non_numeric_values_rejected(self):
        with pytest.raises(DatasetError):
            Dataset.from_pairs([("a", 1.0), ("b", 2.0)])

    def test_dataset_error_is_value_error(self):
        assert issubclass(DatasetError, ValueError)


class TestImmutability:
    def test_arrays_read_only(self):
        ds = Dataset([0.0, 1.0], [1.0, 3.0])
        with pytest.raises(ValueError):
            ds.x[0] = 5.0
        with pytest.raises(ValueError):
            ds.y[1] = 5.0

    def test_attributes_frozen(self):
        ds = Dataset([0.0, 1.0], [1.0, 3.0])
        with pytest.raises(AttributeError):
            ds.x = np.array([9.0, 9.0])

    def test_input_list_not_aliased(self):
        x = np.array([0.0, 1.0])
        ds = Dataset(x, [1.0, 3.0])
        x[0] = 100.0
        assert ds.x[0] == 0.0
