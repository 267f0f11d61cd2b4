"""
Unit tests for the transaction value types.
"""

import pytest

from txdag_core.domain import ROOT_ID, GraphSummary, Transaction, TransactionMetrics, root_transaction


class TestTransaction:
    """Test Transaction construction rules."""

    def test_new_starts_with_placeholder_metrics(self):
        """Test a non-root transaction starts with depth 0 and no references."""
        tx = Transaction.new(2, 1, 1, 5)

        assert tx.id == 2
        assert tx.parents == (1, 1)
        assert tx.timestamp == 5
        assert tx.metrics == TransactionMetrics(depth=0, in_reference=0)
        assert not tx.is_root

    def test_new_keeps_parent_order(self):
        tx = Transaction.new(7, 3, 5, 0)
        assert tx.parents == (3, 5)

    @pytest.mark.parametrize(
        "fields",
        [(-1, 1, 1, 0), (2, -1, 1, 0), (2, 1, -1, 0), (2, 1, 1, -1)],
    )
    def test_new_rejects_negative_values(self, fields):
        """Test every field must be non-negative."""
        with pytest.raises(ValueError):
            Transaction.new(*fields)

    def test_metrics_are_not_shared(self):
        a = Transaction.new(2, 1, 1, 0)
        b = Transaction.new(3, 1, 1, 0)
        a.metrics.in_reference += 1
        assert b.metrics.in_reference == 0


class TestRoot:
    def test_root_constant(self):
        """Test the root has id 1, no parents, timestamp 0 and zeroed metrics."""
        root = root_transaction()

        assert root.id == ROOT_ID == 1
        assert root.parents is None
        assert root.timestamp == 0
        assert root.metrics.depth == 0
        assert root.metrics.in_reference == 0
        assert root.is_root

    def test_root_is_fresh_each_time(self):
        first = root_transaction()
        first.metrics.in_reference = 10
        assert root_transaction().metrics.in_reference == 0


class TestGraphSummary:
    def test_defaults_are_unset(self):
        summary = GraphSummary()
        assert summary.last_transaction is None
        assert summary.most_in_reference_transaction is None
        assert summary.as_tuple() == (None, None)
