"""
Static interval tree for O(log n) range min/max queries over values with gaps.

This module provides a complete binary tree stored in a flat array. It is built
once in O(n) and answers min/max queries over arbitrary index ranges in O(log n).
Gaps (``None`` values) are transparent to the aggregation; a range made of gaps
only aggregates to ``None``.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

MinMax = tuple[float, float]


# ============================================================================
# Gap-aware combinators
# ============================================================================


def ceiling_log2(n: int) -> int:
    """Return ceil(log2(n)) for n >= 1."""
    if n < 1:
        raise ValueError(f"ceiling_log2 requires n >= 1, got {n}")
    return (n - 1).bit_length()


def pick_extreme(
    a: Optional[float], b: Optional[float], pick_min: bool
) -> Optional[float]:
    """
    Pick the min (or max) of two optional scalars.

    Args:
        a: First value or None
        b: Second value or None
        pick_min: True for the minimum, False for the maximum

    Returns:
        The extreme of the present values, or None if neither is present
    """
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b) if pick_min else max(a, b)


def min_max_of(a: Optional[float], b: Optional[float]) -> Optional[MinMax]:
    """Return (min, max) of two optional scalars, or None if both are gaps."""
    low = pick_extreme(a, b, pick_min=True)
    if low is None:
        return None
    return low, pick_extreme(a, b, pick_min=False)


def merge_min_max(left: Optional[MinMax], right: Optional[MinMax]) -> Optional[MinMax]:
    """
    Merge two optional (min, max) pairs.

    Args:
        left: (min, max) or None
        right: (min, max) or None

    Returns:
        Merged (min, max), the only present pair, or None
    """
    if left is None:
        return right
    if right is None:
        return left
    return min(left[0], right[0]), max(left[1], right[1])


# ============================================================================
# Tree
# ============================================================================


@dataclass(frozen=True, slots=True)
class TreeNode:
    """
    One node of the interval tree.

    Covers indices [lo_idx, hi_idx] (inclusive) and stores the min/max of the
    non-gap values in that range, or None when the range holds gaps only.
    """

    lo_idx: int
    hi_idx: int
    min_max: Optional[MinMax]

    def matches(self, lo_idx: int, hi_idx: int) -> bool:
        return self.lo_idx == lo_idx and self.hi_idx == hi_idx

    def contains(self, lo_idx: int, hi_idx: int) -> bool:
        return self.lo_idx <= lo_idx and hi_idx <= self.hi_idx


class IntervalTreeMinMax:
    """
    Array-based complete binary tree for O(log n) range min/max queries.

    For 16 values (k = 4) the layout of the flat array is:

        layer 0, index 0:       (0,15)
        layer 1, indices 1-2:   (0,7), (8,15)
        layer 2, indices 3-6:   (0,3), (4,7), (8,11), (12,15)
        layer 3, indices 7-14:  (0,1), (2,3), ..., (14,15)

    - Node i has children at indices 2*i+1 and 2*i+2
    - The root covers [0, M-1] where M is n rounded up to a power of two
    - Indices in [n, M-1] are padding and read as gaps
    - A single value (n == 1) needs no nodes at all

    Complexity:
    - Build: O(n)
    - Query: O(log n)
    - Space: O(n)
    """

    def __init__(self, values: Sequence[Optional[float]]):
        """
        Build the tree from values in O(n) time.

        Args:
            values: Values to aggregate; None marks a gap. Not copied.
        """
        if len(values) == 0:
            raise ValueError("values must not be empty")

        self._values = values
        self._n = len(values)
        self._depth = ceiling_log2(self._n)
        self._nodes: list[TreeNode] = []

        if self._n > 1:
            self._build()

    @property
    def size(self) -> int:
        """Number of values covered by the tree."""
        return self._n

    @property
    def depth(self) -> int:
        """Number of node layers, ceil(log2(n))."""
        return self._depth

    @property
    def nodes(self) -> Sequence[TreeNode]:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def query(self, lo_idx: int, hi_idx: int) -> Optional[MinMax]:
        """
        Query min/max over value index range in O(log n) time.

        Args:
            lo_idx: Lower value index (inclusive)
            hi_idx: Upper value index (inclusive)

        Returns:
            (min, max) over the non-gap values, or None if all are gaps

        Raises:
            ValueError: If indices are out of bounds or invalid
        """
        self._validate_range(lo_idx, hi_idx)
        return self._query_range(lo_idx, hi_idx, node_idx=0)

    def _value_at(self, idx: int) -> Optional[float]:
        return self._values[idx] if idx < self._n else None

    def _build(self) -> None:
        """Fill the node array layer by layer, starting from the lowest one."""
        k = self._depth
        self._nodes = [TreeNode(0, 0, None)] * ((1 << k) - 1)

        # Lowest layer, each node covers two values
        layer = k - 1
        layer_start = (1 << layer) - 1
        for offset in range(1 << layer):
            lo_idx = 2 * offset
            hi_idx = lo_idx + 1
            self._nodes[layer_start + offset] = TreeNode(
                lo_idx, hi_idx, min_max_of(self._value_at(lo_idx), self._value_at(hi_idx))
            )

        # Higher layers merge their two children
        for layer in range(k - 2, -1, -1):
            layer_start = (1 << layer) - 1
            span = 1 << (k - layer)
            for offset in range(1 << layer):
                node_idx = layer_start + offset
                child_1 = self._nodes[2 * node_idx + 1]
                child_2 = self._nodes[2 * node_idx + 2]
                self._nodes[node_idx] = TreeNode(
                    offset * span,
                    (offset + 1) * span - 1,
                    merge_min_max(child_1.min_max, child_2.min_max),
                )

    def _query_range(self, lo_idx: int, hi_idx: int, node_idx: int) -> Optional[MinMax]:
        """
        Recursive range query helper.

        Args:
            lo_idx: Query range start
            hi_idx: Query range end
            node_idx: Current tree node index; [lo_idx, hi_idx] lies inside it

        Returns:
            (min, max) for the query range, or None
        """
        if self._nodes and self._nodes[node_idx].matches(lo_idx, hi_idx):
            return self._nodes[node_idx].min_max

        # Nodes always span two or more indices, a single index is read directly
        if lo_idx == hi_idx:
            return min_max_of(self._values[lo_idx], None)

        child_1_idx, child_2_idx = 2 * node_idx + 1, 2 * node_idx + 2
        child_1, child_2 = self._nodes[child_1_idx], self._nodes[child_2_idx]

        if child_1.contains(lo_idx, hi_idx):
            return self._query_range(lo_idx, hi_idx, child_1_idx)
        if child_2.contains(lo_idx, hi_idx):
            return self._query_range(lo_idx, hi_idx, child_2_idx)

        # Straddles both children
        partial_1 = self._query_range(lo_idx, child_1.hi_idx, child_1_idx)
        partial_2 = self._query_range(child_2.lo_idx, hi_idx, child_2_idx)
        return merge_min_max(partial_1, partial_2)

    def _validate_range(self, lo_idx: int, hi_idx: int) -> None:
        """
        Validate query range indices.

        Raises:
            ValueError: If indices are invalid
        """
        if lo_idx < 0 or hi_idx >= self._n or lo_idx > hi_idx:
            raise ValueError(f"Invalid range [{lo_idx}, {hi_idx}] for tree size {self._n}")


def linear_min_max(
    values: Sequence[Optional[float]], lo_idx: int = 0, hi_idx: Optional[int] = None
) -> Optional[MinMax]:
    """Reference O(n) scan over values[lo_idx:hi_idx + 1]; used for checks and benchmarks."""
    if hi_idx is None:
        hi_idx = len(values) - 1
    result: Optional[MinMax] = None
    for value in values[lo_idx : hi_idx + 1]:
        result = merge_min_max(result, min_max_of(value, None))
    return result
