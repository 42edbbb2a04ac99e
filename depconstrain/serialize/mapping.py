"""Raw field values -> ``Constraint``, shared by both readers.

Each encoding only decides how it extracts the five raw values; turning
them into a validated ``Constraint`` always goes through here and the
``ConstraintBuilder``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from depconstrain.models.constraint import Constraint, ConstraintBuilder
from depconstrain.models.document import DocumentConstraint


def build_constraint(
    *,
    group: str | None,
    name: str | None,
    suggested_version: str | None,
    rejected_versions: Iterable[str] = (),
    reason: str | None,
    field_labels: Mapping[str, str] | None = None,
) -> Constraint:
    """Run raw values through a fresh ``ConstraintBuilder``.

    Absent values are left unset so that ``build()`` reports them.
    """
    builder = ConstraintBuilder(field_labels=field_labels)
    if group is not None:
        builder.set_group(group)
    if name is not None:
        builder.set_name(name)
    if suggested_version is not None:
        builder.set_suggested_version(suggested_version)
    for rejected in rejected_versions:
        builder.add_rejected_version(rejected)
    if reason is not None:
        builder.set_reason(reason)
    return builder.build()


def constraint_from_document(entry: DocumentConstraint) -> Constraint:
    """Map one typed JSON entry, composing the advisory-prefixed reason."""
    return build_constraint(
        group=entry.group,
        name=entry.name,
        suggested_version=entry.suggested_version,
        rejected_versions=entry.rejected_versions or (),
        reason=entry.because.compose_reason(),
    )
