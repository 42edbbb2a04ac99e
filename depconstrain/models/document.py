"""Typed form of the JSON constraints document.

These models mirror the JSON encoding field for field (camelCase aliases)
and are only ever built from a tree that already passed schema validation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BecauseClause(BaseModel):
    """The ``because`` object explaining a constraint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    advisory_identifiers: list[str] | None = Field(default=None, alias="advisoryIdentifiers")
    more_information_urls: list[str] | None = Field(default=None, alias="moreInformationUrls")
    reason: str

    def compose_reason(self) -> str:
        """Prefix the reason with ``[ID-1, ID-2]: `` when identifiers exist.

        >>> BecauseClause(advisoryIdentifiers=["CVE-1", "CVE-2"], reason="bad").compose_reason()
        '[CVE-1, CVE-2]: bad'
        """
        if self.advisory_identifiers is None:
            return self.reason
        return f"[{', '.join(self.advisory_identifiers)}]: {self.reason}"


class DocumentConstraint(BaseModel):
    """One entry of ``dependencyConstraints``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    group: str
    name: str
    suggested_version: str = Field(alias="suggestedVersion")
    rejected_versions: list[str] | None = Field(default=None, alias="rejectedVersions")
    because: BecauseClause


class ConstraintsDocument(BaseModel):
    """The whole JSON constraints document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    version: str | None = None
    dependency_constraints: list[DocumentConstraint] = Field(
        default_factory=list, alias="dependencyConstraints"
    )
