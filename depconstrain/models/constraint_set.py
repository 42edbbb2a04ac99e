"""ConstraintSet — the ordered, immutable result of one load."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from depconstrain.core.diffing import Delta, DeltaKind, diff
from depconstrain.errors import DependencyConstrainError
from depconstrain.models.constraint import Constraint


class ConstraintSet(BaseModel):
    """Constraints in the order they were encountered in the source.

    An empty set is the value for "no constraints file present".
    """

    model_config = ConfigDict(frozen=True)

    constraints: tuple[Constraint, ...] = ()

    @classmethod
    def empty(cls) -> ConstraintSet:
        return _EMPTY

    @property
    def is_empty(self) -> bool:
        return not self.constraints

    def __len__(self) -> int:
        return len(self.constraints)

    def keys(self) -> list[str]:
        """Derived ``group:name:suggestedVersion`` keys, in set order."""
        return [c.key for c in self.constraints]

    def union(self, other: ConstraintSet) -> ConstraintSet:
        """Concatenate two sets, ``self`` first.  Neither input is modified."""
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return ConstraintSet(constraints=self.constraints + other.constraints)


_EMPTY = ConstraintSet()


class ConstraintSetBuilder:
    """Collects constraints in call order and freezes them into a set.

    Parameters
    ----------
    strict:
        When ``True``, ``build()`` additionally requires the constraints to
        be sorted by their derived key and reports every out-of-order run.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict
        self._constraints: list[Constraint] = []

    @property
    def strict(self) -> bool:
        return self._strict

    def add(self, constraint: Constraint) -> ConstraintSetBuilder:
        self._constraints.append(constraint)
        return self

    def build(self) -> ConstraintSet:
        if self._strict:
            self._ensure_sorted()
        return ConstraintSet(constraints=tuple(self._constraints))

    # ------------------------------------------------------------------
    # Sort-order enforcement
    # ------------------------------------------------------------------

    def _ensure_sorted(self) -> None:
        expected = sorted(self._constraints, key=lambda c: c.key)
        deltas = diff(self._constraints, expected, key=lambda c: c.key)
        if not deltas:
            return
        runs = "\n".join(_describe_delta(delta) for delta in deltas)
        raise DependencyConstrainError(
            "Constrains were not sorted by group:name:suggestedVersion in "
            "lexicographical order:\n" + runs
        )


def _describe_delta(delta: Delta) -> str:
    qualifier = "Remove" if delta.kind == DeltaKind.DELETE else "Insert"
    noun = "constraints" if len(delta.items) > 1 else "constraint"
    message = f"  - {qualifier} {noun} at position {delta.source_position}"
    if len(delta.items) > 1:
        message += f" through {delta.last_source_position}"
    previews = "\n".join(f"    - {c.to_preview()}" for c in delta.items)
    return f"{message}:\n{previews}"
