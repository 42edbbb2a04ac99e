"""Constraint model — one forced version plus rejections for a dependency.

A ``Constraint`` is immutable and can only be created complete.  Readers
that discover fields incrementally stage them in a ``ConstraintBuilder``,
which refuses to finalize until every required field has been supplied.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from depconstrain.errors import DependencyConstrainError


class Constraint(BaseModel):
    """A dependency version constraint loaded from a constraints file.

    Examples
    --------
    >>> c = Constraint(group="g", name="n", suggested_version="1.2.3", reason="bad")
    >>> c.key
    'g:n:1.2.3'
    """

    model_config = ConfigDict(frozen=True)

    group: str = Field(min_length=1)
    name: str = Field(min_length=1)
    suggested_version: str = Field(min_length=1)
    rejected_versions: tuple[str, ...] = ()
    reason: str = Field(min_length=1)

    @property
    def key(self) -> str:
        """The ``group:name:suggestedVersion`` key used for ordering."""
        return f"{self.group}:{self.name}:{self.suggested_version}"

    @property
    def object_notation(self) -> dict[str, str]:
        """Module coordinates without a version, as build tools expect them."""
        return {"group": self.group, "name": self.name}

    def to_preview(self) -> str:
        """Compact JSON-like rendering used in sort-order reports."""
        return (
            f'{{"group":"{self.group}", "name":"{self.name}", '
            f'"suggestedVersion":"{self.suggested_version}"}}'
        )


# Labels used when reporting a missing field; readers may override them
# with the names their encoding uses.
DEFAULT_FIELD_LABELS: dict[str, str] = {
    "group": "group",
    "name": "name",
    "suggested_version": "suggestedVersion",
    "reason": "because",
}


class ConstraintBuilder:
    """Stages the fields of one ``Constraint`` until it is complete.

    Parameters
    ----------
    region:
        Name of the region the fields are expected under, used in the
        diagnostic when ``build()`` is called too early.
    field_labels:
        Mapping of required field name to the label the source encoding
        uses for it.
    """

    def __init__(
        self,
        region: str = "constraint",
        field_labels: Mapping[str, str] | None = None,
    ) -> None:
        self._region = region
        self._labels = dict(DEFAULT_FIELD_LABELS)
        if field_labels:
            self._labels.update(field_labels)
        self._group: str | None = None
        self._name: str | None = None
        self._suggested_version: str | None = None
        self._rejected_versions: list[str] = []
        self._reason: str | None = None

    @staticmethod
    def _require(value: str | None, label: str) -> str:
        if not value:
            raise DependencyConstrainError(f"`{label}` must not be empty")
        return value

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_group(self, group: str | None) -> ConstraintBuilder:
        self._group = self._require(group, self._labels["group"])
        return self

    def set_name(self, name: str | None) -> ConstraintBuilder:
        self._name = self._require(name, self._labels["name"])
        return self

    def set_suggested_version(self, suggested_version: str | None) -> ConstraintBuilder:
        self._suggested_version = self._require(
            suggested_version, self._labels["suggested_version"]
        )
        return self

    def add_rejected_version(self, rejected_version: str | None) -> ConstraintBuilder:
        """Append a rejected version range; order of calls is preserved."""
        self._rejected_versions.append(self._require(rejected_version, "rejected version"))
        return self

    def set_reason(self, reason: str | None) -> ConstraintBuilder:
        self._reason = self._require(reason, self._labels["reason"])
        return self

    # ------------------------------------------------------------------
    # Completeness
    # ------------------------------------------------------------------

    def is_group_set(self) -> bool:
        return self._group is not None

    def is_name_set(self) -> bool:
        return self._name is not None

    def is_suggested_version_set(self) -> bool:
        return self._suggested_version is not None

    def is_reason_set(self) -> bool:
        return self._reason is not None

    def missing_fields(self) -> list[str]:
        """Required fields that have not been supplied, in declaration order."""
        present = {
            "group": self.is_group_set(),
            "name": self.is_name_set(),
            "suggested_version": self.is_suggested_version_set(),
            "reason": self.is_reason_set(),
        }
        return [field for field, is_set in present.items() if not is_set]

    def build(self) -> Constraint:
        """Finalize the constraint.

        Raises ``DependencyConstrainError`` naming the first missing field
        and the region it was expected under.
        """
        missing = self.missing_fields()
        if missing:
            raise DependencyConstrainError(
                f"Invalid dependency constraints file: <{self._labels[missing[0]]}> tag "
                f"must appear under the <{self._region}> tag"
            )
        return Constraint(
            group=self._group,
            name=self._name,
            suggested_version=self._suggested_version,
            rejected_versions=tuple(self._rejected_versions),
            reason=self._reason,
        )
