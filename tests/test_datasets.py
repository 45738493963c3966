import numpy as np
import pytest

from dense_net import datasets


def test_xor_batches_come_from_table():
    dataset = datasets.xor(seed=0)
    table_x, table_y = dataset.get_full()

    x, y = dataset.get_batch(50)

    assert x.shape == (50, 2)
    assert y.shape == (50, 1)
    for x_i, y_i in zip(x, y):
        row = np.flatnonzero(np.all(table_x == x_i, axis=1))
        assert row.size == 1
        np.testing.assert_array_equal(table_y[row[0]], y_i)


def test_xor_full_table():
    x, y = datasets.xor().get_full()

    np.testing.assert_array_equal(x, [[0, 0], [0, 1], [1, 0], [1, 1]])
    np.testing.assert_array_equal(y, [[0], [1], [1], [0]])


def test_seeded_sampling_is_reproducible():
    first = datasets.circle(seed=3).get_batch(20)
    second = datasets.circle(seed=3).get_batch(20)

    np.testing.assert_array_equal(first[0], second[0])
    np.testing.assert_array_equal(first[1], second[1])


def test_dynamic_dataset_cannot_be_materialized():
    with pytest.raises(NotImplementedError):
        datasets.rgb_donut().get_full()


def test_circle_labels():
    x, y = datasets.circle(seed=1).get_batch(200)

    assert np.all((x >= 0.0) & (x < 1.0))
    inside = np.hypot(x[:, 0] - 0.5, x[:, 1] - 0.5) < 0.25
    np.testing.assert_array_equal(y[:, 0], inside.astype(float))


def test_rgb_datasets():
    x, y = datasets.rgb_test(seed=1).get_batch(10)
    np.testing.assert_allclose(y, np.column_stack((x[:, 0], x[:, 1],
                                                   1.0 - x[:, 0])))

    x, y = datasets.rgb_donut(seed=1).get_batch(200)
    radius = np.hypot(x[:, 0] - 0.5, x[:, 1] - 0.5)
    ring = (radius > 0.25) & (radius < 0.45)
    assert not np.any(y[~ring])
    np.testing.assert_allclose(y[ring, 2], 1.0 - x[ring, 0])


def test_unit_square_layout():
    grid = datasets.get_2d_unit_square(3)

    assert grid.shape == (9, 2)
    np.testing.assert_allclose(grid[0], [0.0, 0.0])
    np.testing.assert_allclose(grid[1], [0.5, 0.0])
    np.testing.assert_allclose(grid[3], [0.0, 0.5])
    np.testing.assert_allclose(grid[8], [1.0, 1.0])


def test_invalid_sizes_raise():
    with pytest.raises(ValueError):
        datasets.xor().get_batch(0)

    with pytest.raises(ValueError):
        datasets.get_2d_unit_square(0)

    with pytest.raises(ValueError):
        datasets.StaticDataset("bad", np.zeros((3, 2)), np.zeros((2, 1)))

    with pytest.raises(ValueError):
        datasets.DynamicDataset("bad", lambda x: x, 0, 1)
