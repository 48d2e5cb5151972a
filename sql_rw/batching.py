"""
Flush planning for the batched writer.

Decides which staged records close a batch. Kept free of any store access
so the flush/commit points can be checked on their own.
"""

from __future__ import annotations

from enum import Enum
from typing import List

DEFAULT_BATCH_SIZE = 500


class FlushPolicy(str, Enum):
    """When a staged record triggers a flush + commit."""

    # after every batch_size-th record: 1200 @ 500 -> [500, 500, 200]
    FIXED = "fixed"
    # first record alone, then every batch_size: 1200 @ 500 -> [1, 500, 500, 199]
    LEGACY = "legacy"

    @classmethod
    def parse(cls, value: "str | FlushPolicy") -> "FlushPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(
                f"unknown flush policy {value!r} (expected one of: {choices})"
            ) from None


def validate(num_records: int, batch_size: int) -> None:
    """Raise ``ValueError`` for counts the writer cannot honour."""
    if num_records < 0:
        raise ValueError(f"num_records must be >= 0, got {num_records}")
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")


def flush_due(index: int, batch_size: int, policy: FlushPolicy = FlushPolicy.FIXED) -> bool:
    """Return True when the record at zero-based `index` closes a batch."""
    if policy is FlushPolicy.LEGACY:
        return index % batch_size == 0
    return (index + 1) % batch_size == 0


def plan_batches(
    num_records: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
    policy: FlushPolicy = FlushPolicy.FIXED,
) -> List[int]:
    """
    Sizes of the non-empty batches the writer flushes, in order.

    The trailing flush after the loop is listed only when it carries rows;
    an empty trailing flush is a no-op.
    """
    validate(num_records, batch_size)
    sizes: List[int] = []
    pending = 0
    for i in range(num_records):
        pending += 1
        if flush_due(i, batch_size, policy):
            sizes.append(pending)
            pending = 0
    if pending:
        sizes.append(pending)
    return sizes
