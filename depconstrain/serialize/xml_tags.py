"""Element and attribute names of the XML constraints encoding."""

CONSTRAINTS = "constraints"
CONSTRAINT = "constraint"
GROUP = "group"
NAME = "name"
SUGGESTED_VERSION = "suggested-version"
REJECTED = "rejected"
REJECT = "reject"
BECAUSE = "because"
ADVISORY = "advisory"

# Required enclosing element of each element; None marks the root.
PARENT_TAGS: dict[str, str | None] = {
    CONSTRAINTS: None,
    CONSTRAINT: CONSTRAINTS,
    GROUP: CONSTRAINT,
    NAME: CONSTRAINT,
    SUGGESTED_VERSION: CONSTRAINT,
    REJECTED: CONSTRAINT,
    REJECT: REJECTED,
    BECAUSE: CONSTRAINT,
}

# Elements whose character content is a field value.
TEXT_TAGS: frozenset[str] = frozenset({GROUP, NAME, SUGGESTED_VERSION, REJECT, BECAUSE})

# How the builder should name a missing field in diagnostics.
FIELD_LABELS: dict[str, str] = {
    "group": GROUP,
    "name": NAME,
    "suggested_version": SUGGESTED_VERSION,
    "reason": BECAUSE,
}
