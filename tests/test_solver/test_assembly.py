import numpy as np
import pytest

from nlconduit.solver.assembly import HessianTriplets, assemble_symmetric


def test_diagonal_entries_added_once():
    H = assemble_symmetric([0, 1], [0, 1], [2.0, 3.0], 2).toarray()
    assert np.array_equal(H, np.diag([2.0, 3.0]))


def test_off_diagonal_entries_are_mirrored():
    H = assemble_symmetric([0, 1, 1], [0, 0, 1], [4.0, -1.5, 5.0], 2).toarray()
    expected = np.array([[4.0, -1.5], [-1.5, 5.0]])
    assert np.array_equal(H, expected)


def test_duplicate_off_diagonal_entries_are_summed():
    v1, v2 = 0.25, 1.5
    H = assemble_symmetric([1, 1, 0, 1], [0, 0, 0, 1], [v1, v2, 2.0, 2.0], 2)
    dense = H.toarray()
    assert dense[1, 0] == pytest.approx(v1 + v2)
    assert dense[0, 1] == pytest.approx(v1 + v2)


def test_duplicate_diagonal_entries_are_summed():
    H = assemble_symmetric([0, 0, 0], [0, 0, 0], [1.0, 2.0, 3.0], 1).toarray()
    assert H[0, 0] == pytest.approx(6.0)


def test_empty_triplets_give_zero_matrix():
    H = assemble_symmetric([], [], [], 3)
    assert H.shape == (3, 3)
    assert H.nnz == 0


def test_result_is_symmetric_for_random_pattern(rng):
    n = 6
    rows, cols = np.tril_indices(n)
    keep = rng.random(rows.size) < 0.5
    rows, cols = rows[keep], cols[keep]
    values = rng.standard_normal(rows.size)
    H = assemble_symmetric(rows, cols, values, n).toarray()
    assert np.allclose(H, H.T)


def test_misaligned_values_raise():
    with pytest.raises(ValueError, match="aligned"):
        assemble_symmetric([0, 1], [0, 1], [1.0], 2)


def test_out_of_range_index_raises():
    with pytest.raises(ValueError, match="outside"):
        assemble_symmetric([2], [0], [1.0], 2)


def test_triplets_are_read_only():
    triplets = HessianTriplets.from_structure([0, 1], [0, 0], 2)
    assert triplets.nnz == 2
    with pytest.raises(ValueError):
        triplets.rows[0] = 1


def test_triplets_copy_input_structure():
    rows = [0, 1]
    triplets = HessianTriplets.from_structure(rows, [0, 0], 2)
    rows[0] = 1
    assert triplets.rows[0] == 0


def test_triplets_reject_mismatched_lengths():
    with pytest.raises(ValueError, match="differ in length"):
        HessianTriplets.from_structure([0, 1], [0], 2)


def test_triplets_reject_negative_index():
    with pytest.raises(ValueError, match="outside"):
        HessianTriplets.from_structure([-1], [0], 2)


def test_triplets_assemble_uses_fixed_pattern():
    triplets = HessianTriplets.from_structure([0, 1, 1], [0, 0, 1], 2)
    first = triplets.assemble([1.0, 0.5, 1.0]).toarray()
    second = triplets.assemble([3.0, -1.0, 2.0]).toarray()
    assert np.array_equal(first, [[1.0, 0.5], [0.5, 1.0]])
    assert np.array_equal(second, [[3.0, -1.0], [-1.0, 2.0]])
