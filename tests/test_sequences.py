"""
Tests for collection combinators: map, filter, reduce.
"""

import pytest

from fnpipe import StageNotCallableError, filter, map, pipe, reduce


@pytest.fixture
def numbers():
    return [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]


# =============================================================================
# map
# =============================================================================

class TestMap:

    def test_maps_over_list(self):
        assert map(lambda x: x * 2)([1, 2, 3]) == [2, 4, 6]

    def test_preserves_length_and_order(self):
        assert map(str)([3, 1, 2]) == ["3", "1", "2"]

    def test_empty_input(self):
        assert map(lambda x: x * 2)([]) == []

    def test_does_not_mutate_input(self):
        items = [1, 2, 3]
        result = map(lambda x: x + 1)(items)
        assert items == [1, 2, 3]
        assert result is not items

    def test_accepts_any_iterable(self):
        assert map(lambda x: x * x)(range(4)) == [0, 1, 4, 9]


# =============================================================================
# filter
# =============================================================================

class TestFilter:

    def test_filters_list(self):
        assert filter(lambda x: x % 2 == 0)([1, 2, 3, 4, 5]) == [2, 4]

    def test_preserves_relative_order(self):
        assert filter(lambda s: s.startswith("a"))(["ab", "b", "aa", "c", "ac"]) == ["ab", "aa", "ac"]

    def test_no_matches(self):
        assert filter(lambda x: x > 100)([1, 2, 3]) == []

    def test_does_not_mutate_input(self):
        items = [1, 2, 3, 4]
        filter(lambda x: x > 2)(items)
        assert items == [1, 2, 3, 4]


# =============================================================================
# reduce
# =============================================================================

class TestReduce:

    def test_sums(self):
        assert reduce(lambda acc, x: acc + x, 0)([1, 2, 3, 4]) == 10

    def test_is_left_fold(self):
        assert reduce(lambda acc, x: f"({acc}{x})", "")(["a", "b", "c"]) == "(((a)b)c)"

    def test_empty_returns_initial(self):
        initial = object()
        assert reduce(lambda acc, x: acc, initial)([]) is initial

    def test_can_change_type(self):
        result = reduce(lambda acc, word: {**acc, word: len(word)}, {})(["hi", "there"])
        assert result == {"hi": 2, "there": 5}

    def test_rejects_non_callable(self):
        with pytest.raises(StageNotCallableError, match="reduce"):
            reduce(0, lambda acc, x: acc)


# =============================================================================
# Composite pipelines
# =============================================================================

class TestSequencePipelines:

    def test_sum_of_even_squares(self, numbers):
        result = pipe(
            numbers,
            filter(lambda x: x % 2 == 0),
            map(lambda x: x * x),
            reduce(lambda total, x: total + x, 0),
        )
        assert result == 220

    def test_over_range(self):
        result = pipe(
            range(1, 11),
            filter(lambda x: x % 2 == 0),
            map(lambda x: x * x),
            reduce(lambda total, x: total + x, 0),
        )
        assert result == 220
