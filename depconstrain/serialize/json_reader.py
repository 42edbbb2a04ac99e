"""JSON constraints reader — schema validation plus canonical formatting.

Processing sequence, each step short-circuiting the rest:

1. Read the whole input as text and parse it into a JSON tree.
2. Validate the tree against the bundled JSON schema, collecting every
   violation.
3. Convert the tree into the typed ``ConstraintsDocument`` and check the
   format version.
4. Build the ``ConstraintSet`` (order as written, not re-sorted).
5. Re-render the *raw* tree canonically and diff it against the input
   lines; any difference fails with a patch that fixes the formatting.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, BinaryIO

from jsonschema import Draft201909Validator
from pydantic import ValidationError

from depconstrain.core.canonical import canonical_file_text, canonical_lines
from depconstrain.core.diffing import unified_diff
from depconstrain.errors import DependencyConstrainError
from depconstrain.models.constraint_set import ConstraintSet, ConstraintSetBuilder
from depconstrain.models.document import ConstraintsDocument
from depconstrain.serialize.mapping import constraint_from_document

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = "1.0.0"
SCHEMA_RESOURCE = "schema/dependency-constraints-schema.json"
DEFAULT_FILE_LABEL = "constraints.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the bundled JSON schema (once per process)."""
    resource = resources.files("depconstrain.serialize").joinpath(SCHEMA_RESOURCE)
    try:
        return json.loads(resource.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise DependencyConstrainError(
            f"Unable to load dependency constraints schema (resource: {SCHEMA_RESOURCE})"
        ) from exc


@lru_cache(maxsize=1)
def _schema_validator() -> Draft201909Validator:
    return Draft201909Validator(load_schema())


def read_from_json(
    stream: BinaryIO,
    *,
    supported_version: str = SUPPORTED_VERSION,
    file_label: str = DEFAULT_FILE_LABEL,
) -> ConstraintSet:
    """Read a ``ConstraintSet`` from a JSON byte stream.

    The stream is closed before this function returns.  ``file_label`` is
    used as the old/new file name in the formatting patch.
    """
    try:
        return _read(stream, supported_version=supported_version, file_label=file_label)
    except (OSError, UnicodeDecodeError, DependencyConstrainError) as exc:
        raise DependencyConstrainError("Unable to read dependency constraints") from exc


def _read(stream: BinaryIO, *, supported_version: str, file_label: str) -> ConstraintSet:
    # 1. Read the input, keeping both the tree and the original lines.
    with stream:
        text = stream.read().decode("utf-8")
    input_lines = split_lines(text)
    if not input_lines:
        raise DependencyConstrainError("File is empty")
    tree = parse_json(text)

    # 2. Validate against the schema.
    validate_against_schema(tree)

    # 3. Typed form and version check.
    try:
        document = ConstraintsDocument.model_validate(tree)
    except ValidationError as exc:
        raise DependencyConstrainError(f"Unable to map dependency constraints: {exc}") from exc
    if document.version != supported_version:
        raise DependencyConstrainError(
            f"Unsupported dependency constraints version: {document.version}"
        )

    # 4. Build the constraints; JSON input is not checked for sort order.
    builder = ConstraintSetBuilder(strict=False)
    for entry in document.dependency_constraints:
        builder.add(constraint_from_document(entry))
    constraints = builder.build()

    # 5. Formatting must match the canonical rendering exactly.
    verify_canonical_formatting(input_lines, canonical_lines(tree), file_label=file_label)

    logger.debug("Read %d constraint(s) from JSON", len(constraints))
    return constraints


def parse_json(text: str, *, source: str | None = None) -> Any:
    """Parse ``text``; malformed or too deeply nested input raises ``DependencyConstrainError``."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        where = f" in {source}" if source else ""
        raise DependencyConstrainError(f"Invalid JSON{where}: {exc}") from exc


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, so stray ``\\r`` stays visible to the diff.

    A single final newline does not produce a trailing empty line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def validate_against_schema(tree: Any) -> None:
    """Raise listing every schema violation, one per line."""
    errors = sorted(
        _schema_validator().iter_errors(tree),
        key=lambda error: (error.json_path, error.message),
    )
    if errors:
        violations = "\n".join(f"  - {error.json_path}: {error.message}" for error in errors)
        raise DependencyConstrainError(
            "Dependency constraints contains schema violations:\n" + violations
        )


def verify_canonical_formatting(
    input_lines: list[str],
    formatted_lines: list[str],
    *,
    file_label: str = DEFAULT_FILE_LABEL,
) -> None:
    """Raise with a ready-to-apply patch when the input is not canonical."""
    patch = unified_diff(
        input_lines,
        formatted_lines,
        fromfile=file_label,
        tofile=file_label,
        context=0,
    )
    if patch:
        raise DependencyConstrainError(
            "The dependency constraints are not formatted correctly. "
            "Please apply this patch to fix the formatting:\n"
            + "\n".join(f"  {line}" for line in patch)
        )


def formatting_patch(text: str, *, file_label: str = DEFAULT_FILE_LABEL) -> list[str]:
    """The unified diff that would make ``text`` canonical; empty if it already is."""
    tree = parse_json(text)
    return unified_diff(
        split_lines(text),
        canonical_lines(tree),
        fromfile=file_label,
        tofile=file_label,
        context=0,
    )


def format_constraints_file(path: Path) -> bool:
    """Rewrite a JSON constraints file in canonical form.

    Returns ``True`` when the file content changed.  Only formatting is
    touched; the document is not schema-validated.
    """
    text = path.read_bytes().decode("utf-8")
    tree = parse_json(text, source=str(path))
    formatted = canonical_file_text(tree)
    if formatted == text:
        return False
    path.write_bytes(formatted.encode("utf-8"))
    logger.info("Reformatted %s", path)
    return True
