import pytest

from figspec.services.models import TabularDataset
from figspec.services.statistics import EMPTY_BOX, boxplot_summary, percentile, summarize


def test_percentile_interpolates():
    assert percentile([1, 2, 3, 4], 50) == 2.5
    assert percentile([5], 50) == 5.0
    assert percentile([1, 2, 3, 4, 5], 25) == 2.0


def test_percentile_empty_raises():
    with pytest.raises(ValueError):
        percentile([], 50)


def test_summarize_flags_outliers():
    box, outliers = summarize([1, 2, 3, 4, 5, 6, 7, 8, 9, 100])
    assert box == pytest.approx((1.0, 3.25, 5.5, 7.75, 14.5))
    assert outliers == [100.0]


def test_summarize_degenerate_and_empty():
    assert summarize([5, 5, 5]) == ((5.0, 5.0, 5.0, 5.0, 5.0), [])
    assert summarize([]) == (EMPTY_BOX, [])
    assert summarize([float("nan")]) == (EMPTY_BOX, [])


def test_boxplot_summary_uses_headers_and_positions():
    dataset = TabularDataset.from_lists(
        ["a", "b"],
        [[1, 10], [2, 10], [3, 10], [4, ""], [50, 10]],
    )
    summary = boxplot_summary(dataset, [0, 1])
    assert summary.categories == ("a", "b")
    assert summary.boxes[1] == (10.0, 10.0, 10.0, 10.0, 10.0)
    assert summary.outliers == ((0, 50.0),)
