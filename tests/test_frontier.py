"""Tests for the search frontier."""

import pytest
from py_road.core.frontier import Frontier


class TestFrontier:
    """Test priority ordering and duplicate handling."""

    def test_pops_lowest_priority_first(self):
        """Test min-priority ordering."""
        frontier = Frontier()
        for item, priority in [("c", 3.0), ("a", 1.0), ("d", 4.5), ("b", 2.0)]:
            frontier.insert_or_update(item, priority)

        assert [frontier.pop_min() for _ in range(4)] == ["a", "b", "c", "d"]
        assert frontier.is_empty()

    def test_update_leaves_stale_entry(self):
        """Test that reinserting an item keeps the old entry around."""
        frontier = Frontier()
        frontier.insert_or_update("cell", 5.0)
        frontier.insert_or_update("other", 3.0)
        frontier.insert_or_update("cell", 1.0)

        assert len(frontier) == 3
        assert frontier.pop_min() == "cell"
        assert frontier.pop_min() == "other"
        # Stale duplicate is still returned; the search decides to skip it
        assert frontier.pop_min() == "cell"
        assert frontier.is_empty()

    def test_ties_pop_in_insertion_order(self):
        """Test deterministic ordering for equal priorities."""
        frontier = Frontier()
        for item in ["first", "second", "third"]:
            frontier.insert_or_update(item, 1.0)

        assert [frontier.pop_min() for _ in range(3)] == ["first", "second", "third"]

    def test_unorderable_items(self):
        """Test that items never need to be compared to each other."""
        frontier = Frontier()
        frontier.insert_or_update({"x": 1}, 2.0)
        frontier.insert_or_update({"x": 2}, 2.0)

        assert frontier.pop_min() == {"x": 1}

    def test_peek_priority(self):
        """Test reading the lowest priority without popping."""
        frontier = Frontier()
        frontier.insert_or_update("a", 4.0)
        frontier.insert_or_update("b", 0.5)

        assert frontier.peek_priority() == 0.5
        assert len(frontier) == 2

    def test_empty_frontier(self):
        """Test empty state and pop errors."""
        frontier = Frontier()

        assert frontier.is_empty()
        assert len(frontier) == 0
        with pytest.raises(IndexError):
            frontier.pop_min()
        with pytest.raises(IndexError):
            frontier.peek_priority()
