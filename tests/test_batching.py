"""Tests for flush planning."""

import pytest

from sql_rw.batching import FlushPolicy, flush_due, plan_batches, validate


class TestPlanBatchesFixed:
    """Clean fixed-size batches."""

    def test_remainder_flushed_at_end(self):
        assert plan_batches(1200, 500) == [500, 500, 200]

    def test_exact_multiple_has_no_trailing_batch(self):
        assert plan_batches(1000, 500) == [500, 500]

    def test_fewer_records_than_batch(self):
        assert plan_batches(7, 500) == [7]

    def test_zero_records(self):
        assert plan_batches(0, 500) == []

    def test_batch_size_one(self):
        assert plan_batches(3, 1) == [1, 1, 1]

    @pytest.mark.parametrize("num_records,batch_size", [(1, 1), (499, 500), (501, 500), (1234, 7)])
    def test_sizes_cover_every_record(self, num_records, batch_size):
        sizes = plan_batches(num_records, batch_size)
        assert sum(sizes) == num_records
        assert all(s == batch_size for s in sizes[:-1])
        assert 0 < sizes[-1] <= batch_size


class TestPlanBatchesLegacy:
    """Flush on ``i % batch_size == 0``: the first record goes alone."""

    def test_first_record_flushed_alone(self):
        assert plan_batches(1200, 500, FlushPolicy.LEGACY) == [1, 500, 500, 199]

    def test_exact_multiple(self):
        assert plan_batches(1000, 500, FlushPolicy.LEGACY) == [1, 500, 499]

    def test_single_record(self):
        assert plan_batches(1, 500, FlushPolicy.LEGACY) == [1]

    def test_sizes_cover_every_record(self):
        assert sum(plan_batches(1234, 7, FlushPolicy.LEGACY)) == 1234


def test_flush_due():
    assert not flush_due(0, 500)
    assert flush_due(499, 500)
    assert flush_due(0, 500, FlushPolicy.LEGACY)
    assert not flush_due(499, 500, FlushPolicy.LEGACY)


@pytest.mark.parametrize("num_records,batch_size", [(-1, 500), (10, 0), (10, -3)])
def test_validate_rejects_bad_counts(num_records, batch_size):
    with pytest.raises(ValueError):
        validate(num_records, batch_size)


class TestFlushPolicyParse:
    def test_accepts_member(self):
        assert FlushPolicy.parse(FlushPolicy.LEGACY) is FlushPolicy.LEGACY

    def test_accepts_string_case_insensitive(self):
        assert FlushPolicy.parse(" Fixed ") is FlushPolicy.FIXED

    def test_rejects_unknown(self):
        with pytest.raises(ValueError, match="unknown flush policy"):
            FlushPolicy.parse("sometimes")
