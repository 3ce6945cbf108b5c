def test_label_counts_keep_gaps_as_zero():
    from balnet.target_cost import calculate_label_counts
    t = [0, 1, 4, 0, 1, 2]  # no class 3
    counts = calculate_label_counts(t)
    assert len(counts) == 5
    assert counts.tolist() == [2, 2, 1, 0, 1]
    assert int(counts.sum()) == len(t)


def test_label_counts_empty_input():
    from balnet.target_cost import calculate_label_counts
    assert len(calculate_label_counts([])) == 0


def test_label_counts_accepts_numpy_and_rejects_negative():
    import numpy as np
    import pytest
    from balnet.target_cost import calculate_label_counts
    assert calculate_label_counts(np.array([3, 3])).tolist() == [0, 0, 0, 2]
    with pytest.raises(ValueError):
        calculate_label_counts([0, -1])
