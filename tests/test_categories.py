from figspec.services.categories import CategoryIndex, heatmap_grid
from figspec.services.models import TabularDataset


def test_category_index_first_seen_order():
    index = CategoryIndex(["b", "a", "b", 1.0, 1])
    assert index.labels == ("b", "a", "1")
    assert index.position("a") == 1
    assert 1 in index
    assert len(index) == 3
    assert index.add("c") == 3


def test_heatmap_grid_cells_and_range():
    dataset = TabularDataset.from_lists(
        ["x", "y", "v"],
        [["A", "X", 1], ["B", "X", 2], ["A", "Y", 3]],
    )
    grid = heatmap_grid(dataset, 0, 1, 2)
    assert grid.x_categories == ("A", "B")
    assert grid.y_categories == ("X", "Y")
    assert grid.cells == ((0, 0, 1), (1, 0, 2), (0, 1, 3))
    assert (grid.min_value, grid.max_value) == (1, 3)


def test_heatmap_grid_ignores_missing_values_for_range():
    dataset = TabularDataset.from_lists(["x", "y", "v"], [["A", "X", ""], ["B", "X", 4]])
    grid = heatmap_grid(dataset, 0, 1, 2)
    assert (grid.min_value, grid.max_value) == (4, 4)

    empty = TabularDataset.from_lists(["x", "y", "v"], [["A", "X", "-"]])
    grid = heatmap_grid(empty, 0, 1, 2)
    assert (grid.min_value, grid.max_value) == (0, 0)
