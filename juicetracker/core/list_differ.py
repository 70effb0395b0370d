"""Row-level diff between two juice lists, for partial re-render of a list view.

Two juices are the same row when their ids match (identity); a same-row pair
whose fields differ is reported as an UPDATE, never as remove + insert.

Operations are returned in the order they must be applied:

1. REMOVE for rows that no longer exist, highest old position first.
2. INSERT / MOVE in new-list order, each placing a row at its final slot
   relative to the rows already placed.
3. UPDATE at final positions, ascending.

Every position refers to the list as it stands after the previous operations,
so ``apply_operations(old, diff_juices(old, new)) == new`` always holds.
"""
from collections import defaultdict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Optional, Sequence, Tuple

from juicetracker.models.juice import Juice


class RowOpKind(str, Enum):
    REMOVE = "remove"
    INSERT = "insert"
    MOVE = "move"
    UPDATE = "update"


@dataclass(frozen=True)
class RowOperation:
    """One change to a rendered list.

    REMOVE uses ``position``; INSERT and UPDATE use ``position`` and ``item``;
    MOVE takes the row at ``position`` out and reinserts it at ``to_position``.
    """
    kind: RowOpKind
    position: int
    to_position: Optional[int] = None
    item: Optional[Juice] = None


def same_identity(a: Juice, b: Juice) -> bool:
    return a.id == b.id


def same_content(a: Juice, b: Juice) -> bool:
    return a == b


def _lcs_pairs(old: Sequence[Juice], new: Sequence[Juice]) -> List[Tuple[int, int]]:
    """Longest common subsequence of the two lists by identity, as (old, new) index pairs."""
    n, m = len(old), len(new)
    # table[i][j] = LCS length of old[i:] and new[j:]
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(n - 1, -1, -1):
        row, below = table[i], table[i + 1]
        for j in range(m - 1, -1, -1):
            if same_identity(old[i], new[j]):
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])
    pairs = []
    i = j = 0
    while i < n and j < m:
        if same_identity(old[i], new[j]):
            pairs.append((i, j))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            i += 1
        else:
            j += 1
    return pairs


def _match(old: Sequence[Juice], new: Sequence[Juice]) -> Tuple[Dict[int, int], Dict[int, int]]:
    """Pair old and new indices by identity.

    Returns (in_place, moved): new index -> old index for rows kept in relative
    order, and for rows that exist in both lists but must move.
    """
    n, m = len(old), len(new)
    # Common prefix and suffix need no table
    start = 0
    while start < n and start < m and same_identity(old[start], new[start]):
        start += 1
    end = 0
    while (
        end < n - start
        and end < m - start
        and same_identity(old[n - 1 - end], new[m - 1 - end])
    ):
        end += 1

    in_place = {k: k for k in range(start)}
    for k in range(end):
        in_place[m - 1 - k] = n - 1 - k
    for oi, nj in _lcs_pairs(old[start:n - end], new[start:m - end]):
        in_place[start + nj] = start + oi

    matched_old = set(in_place.values())
    unmatched_new: Dict[int, Deque[int]] = defaultdict(deque)
    for j in range(m):
        if j not in in_place:
            unmatched_new[new[j].id].append(j)

    moved = {}
    for i in range(n):
        if i in matched_old:
            continue
        candidates = unmatched_new.get(old[i].id)
        if candidates:
            moved[candidates.popleft()] = i
    return in_place, moved


def diff_juices(old: Sequence[Juice], new: Sequence[Juice]) -> List[RowOperation]:
    """Operations that turn a list rendered from ``old`` into one showing ``new``."""
    in_place, moved = _match(old, new)
    kept_old = set(in_place.values()) | set(moved.values())

    ops: List[RowOperation] = []
    # Rows are tracked by token: ("old", i) for rows from old, ("new", j) for inserted rows
    rows: List[Tuple[str, int]] = [("old", i) for i in range(len(old))]
    for i in range(len(old) - 1, -1, -1):
        if i not in kept_old:
            ops.append(RowOperation(RowOpKind.REMOVE, i))
            rows.pop(i)

    token_for_new: List[Tuple[str, int]] = []
    for j, juice in enumerate(new):
        if j in in_place:
            token_for_new.append(("old", in_place[j]))
            continue
        after = rows.index(token_for_new[j - 1]) if j > 0 else -1
        if j in moved:
            token = ("old", moved[j])
            src = rows.index(token)
            rows.pop(src)
            if src < after:
                after -= 1
            dst = after + 1
            rows.insert(dst, token)
            if src != dst:
                ops.append(RowOperation(RowOpKind.MOVE, src, to_position=dst))
        else:
            token = ("new", j)
            rows.insert(after + 1, token)
            ops.append(RowOperation(RowOpKind.INSERT, after + 1, item=juice))
        token_for_new.append(token)

    for j, juice in enumerate(new):
        i = in_place.get(j, moved.get(j))
        if i is not None and not same_content(old[i], juice):
            ops.append(RowOperation(RowOpKind.UPDATE, j, item=juice))
    return ops


def apply_operations(items: Sequence[Juice], ops: Sequence[RowOperation]) -> List[Juice]:
    """Apply diff operations to a copy of ``items`` and return it."""
    out = list(items)
    for op in ops:
        if op.kind is RowOpKind.REMOVE:
            out.pop(op.position)
        elif op.kind is RowOpKind.INSERT:
            out.insert(op.position, op.item)
        elif op.kind is RowOpKind.MOVE:
            out.insert(op.to_position, out.pop(op.position))
        elif op.kind is RowOpKind.UPDATE:
            out[op.position] = op.item
    return out
