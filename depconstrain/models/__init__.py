"""depconstrain data models — all Pydantic v2, all frozen (immutable)."""

from depconstrain.models.constraint import Constraint, ConstraintBuilder
from depconstrain.models.constraint_set import ConstraintSet, ConstraintSetBuilder
from depconstrain.models.document import (
    BecauseClause,
    ConstraintsDocument,
    DocumentConstraint,
)

__all__ = [
    # constraint
    "Constraint",
    "ConstraintBuilder",
    # constraint set
    "ConstraintSet",
    "ConstraintSetBuilder",
    # JSON document
    "BecauseClause",
    "ConstraintsDocument",
    "DocumentConstraint",
]
