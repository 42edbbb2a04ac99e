"""Sequence diffing — minimal edit scripts and unified-diff rendering.

Implements the greedy O(ND) shortest-edit-script search over two sequences,
compared through an optional ``key`` function.  The result is expressed as
coalesced DELETE / INSERT runs (``Delta``) and can be rendered as a unified
diff that applies cleanly with ``patch``.

The same engine backs both the sort-order report of
``ConstraintSetBuilder`` and the formatting patch of the JSON reader.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class DeltaKind(str, Enum):
    """The two kinds of edit run."""

    DELETE = "delete"
    INSERT = "insert"


class Delta(BaseModel):
    """A contiguous run of items removed from or inserted into the source.

    ``source_position`` is always expressed in source coordinates: for a
    DELETE it is the index of the first removed item, for an INSERT it is
    the index in the source before which the items go.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: DeltaKind
    source_position: int
    target_position: int
    items: tuple[Any, ...]

    @property
    def last_source_position(self) -> int:
        """Position of the last item of the run, in source coordinates."""
        return self.source_position + len(self.items) - 1


class _ChangeBlock(BaseModel):
    """A maximal region where source[s1:s2] is replaced by target[t1:t2]."""

    model_config = ConfigDict(frozen=True)

    s1: int
    s2: int
    t1: int
    t2: int


# ---------------------------------------------------------------------------
# Edit-script search
# ---------------------------------------------------------------------------


def _shortest_edit_trace(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[dict[int, int]]:
    """Run the forward search, returning the furthest-reaching snapshot per D."""
    n, m = len(a), len(b)
    v: dict[int, int] = {1: 0}
    trace: list[dict[int, int]] = []
    for d in range(n + m + 1):
        trace.append(dict(v))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1] < v[k + 1]):
                x = v[k + 1]
            else:
                x = v[k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[k] = x
            if x >= n and y >= m:
                return trace
    return trace


def _edit_moves(a: Sequence[Hashable], b: Sequence[Hashable]) -> list[tuple[int, int, int, int]]:
    """Backtrack the trace into forward-ordered single-step moves."""
    trace = _shortest_edit_trace(a, b)
    x, y = len(a), len(b)
    moves: list[tuple[int, int, int, int]] = []
    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        if k == -d or (k != d and v[k - 1] < v[k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = v[prev_k]
        prev_y = prev_x - prev_k
        while x > prev_x and y > prev_y:
            moves.append((x - 1, y - 1, x, y))
            x, y = x - 1, y - 1
        if d > 0:
            moves.append((prev_x, prev_y, x, y))
        x, y = prev_x, prev_y
    moves.reverse()
    return moves


def _change_blocks(
    source: Sequence[Any],
    target: Sequence[Any],
    key: Callable[[Any], Hashable] | None,
) -> list[_ChangeBlock]:
    a = [key(item) for item in source] if key else list(source)
    b = [key(item) for item in target] if key else list(target)

    blocks: list[_ChangeBlock] = []
    start: tuple[int, int] | None = None
    end = (0, 0)
    for x0, y0, x1, y1 in _edit_moves(a, b):
        equal = x1 - x0 == 1 and y1 - y0 == 1
        if equal:
            if start is not None:
                blocks.append(_ChangeBlock(s1=start[0], s2=end[0], t1=start[1], t2=end[1]))
                start = None
            continue
        if start is None:
            start = (x0, y0)
        end = (x1, y1)
    if start is not None:
        blocks.append(_ChangeBlock(s1=start[0], s2=end[0], t1=start[1], t2=end[1]))
    return blocks


def diff(
    source: Sequence[Any],
    target: Sequence[Any],
    *,
    key: Callable[[Any], Hashable] | None = None,
) -> list[Delta]:
    """Compute the edit script turning ``source`` into ``target``.

    Items are compared by ``key(item)`` when a key is given, by equality
    otherwise.  Within one changed region the DELETE run is listed before
    the INSERT run.  An empty list means the sequences are equal.
    """
    deltas: list[Delta] = []
    for block in _change_blocks(source, target, key):
        if block.s2 > block.s1:
            deltas.append(
                Delta(
                    kind=DeltaKind.DELETE,
                    source_position=block.s1,
                    target_position=block.t1,
                    items=tuple(source[block.s1:block.s2]),
                )
            )
        if block.t2 > block.t1:
            deltas.append(
                Delta(
                    kind=DeltaKind.INSERT,
                    source_position=block.s1,
                    target_position=block.t1,
                    items=tuple(target[block.t1:block.t2]),
                )
            )
    return deltas


# ---------------------------------------------------------------------------
# Unified diff rendering
# ---------------------------------------------------------------------------


def _format_range(start: int, stop: int) -> str:
    """Render a hunk range the way GNU diff does (1-based, empty = line before)."""
    beginning = start + 1
    length = stop - start
    if length == 1:
        return f"{beginning}"
    if not length:
        beginning -= 1
    return f"{beginning},{length}"


def _group_blocks(blocks: list[_ChangeBlock], context: int) -> list[list[_ChangeBlock]]:
    groups: list[list[_ChangeBlock]] = []
    for block in blocks:
        if groups and block.s1 - groups[-1][-1].s2 <= 2 * context:
            groups[-1].append(block)
        else:
            groups.append([block])
    return groups


def unified_diff(
    source: Sequence[str],
    target: Sequence[str],
    *,
    fromfile: str = "",
    tofile: str = "",
    context: int = 0,
) -> list[str]:
    """Render the line diff between ``source`` and ``target``.

    Returns the diff as a list of lines without terminators, starting with
    the ``---``/``+++`` labels.  Returns an empty list when nothing differs.

    >>> unified_diff(["a", "b"], ["a", "c"], fromfile="old", tofile="new")
    ['--- old', '+++ new', '@@ -2 +2 @@', '-b', '+c']
    """
    blocks = _change_blocks(source, target, None)
    if not blocks:
        return []

    lines = [f"--- {fromfile}", f"+++ {tofile}"]
    for group in _group_blocks(blocks, context):
        first, last = group[0], group[-1]
        s_start = max(0, first.s1 - context)
        s_stop = min(len(source), last.s2 + context)
        t_start = first.t1 - (first.s1 - s_start)
        t_stop = last.t2 + (s_stop - last.s2)
        lines.append(f"@@ -{_format_range(s_start, s_stop)} +{_format_range(t_start, t_stop)} @@")

        cursor = s_start
        for block in group:
            lines.extend(f" {source[i]}" for i in range(cursor, block.s1))
            lines.extend(f"-{line}" for line in source[block.s1:block.s2])
            lines.extend(f"+{line}" for line in target[block.t1:block.t2])
            cursor = block.s2
        lines.extend(f" {source[i]}" for i in range(cursor, s_stop))
    return lines
