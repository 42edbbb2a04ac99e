"""Constraints file loader — locates the file and dispatches to a reader.

A directory holds at most one constraints file, either
``constraints.json`` or ``constraints.xml`` (names configurable through
``ConstrainSettings``).  No file at all is the common case and yields an
empty ``ConstraintSet``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from depconstrain.config import ConstrainSettings
from depconstrain.errors import DependencyConstrainError
from depconstrain.models.constraint_set import ConstraintSet
from depconstrain.serialize.json_reader import read_from_json
from depconstrain.serialize.xml_reader import read_from_xml

logger = logging.getLogger(__name__)


def find_constraints_file(
    directory: Path, settings: ConstrainSettings | None = None
) -> Path | None:
    """Return the constraints file in ``directory``, or ``None`` if absent.

    Raises ``DependencyConstrainError`` when both encodings are present.
    """
    settings = settings or ConstrainSettings()
    candidates = [
        directory / settings.json_file_name,
        directory / settings.xml_file_name,
    ]
    present = [path for path in candidates if path.is_file()]
    if len(present) > 1:
        raise DependencyConstrainError(
            "Found more than one dependency constraints file, keep only one of: "
            + ", ".join(str(path) for path in present)
        )
    return present[0] if present else None


def read_constraints_file(
    path: Path, settings: ConstrainSettings | None = None
) -> ConstraintSet:
    """Read one constraints file, choosing the reader by extension.

    Failures are wrapped once with the file path; the reader's error stays
    reachable as ``__cause__``.
    """
    settings = settings or ConstrainSettings()
    try:
        if path.suffix.lower() == ".json":
            constraints = read_from_json(
                path.open("rb"),
                supported_version=settings.supported_version,
                file_label=path.name,
            )
        elif path.suffix.lower() == ".xml":
            constraints = read_from_xml(
                path.open("rb"),
                strict=settings.strict_sort,
                chunk_size=settings.read_chunk_size,
            )
        else:
            raise DependencyConstrainError(
                f"Unsupported dependency constraints file type: {path.suffix or path.name}"
            )
    except (OSError, DependencyConstrainError) as exc:
        raise DependencyConstrainError(f"Failed to load constraints from {path}") from exc

    logger.info("Loaded %d constraint(s) from %s", len(constraints), path)
    return constraints


def load_constraints_from_directory(
    directory: Path, settings: ConstrainSettings | None = None
) -> ConstraintSet:
    """Load the constraints kept in ``directory``.

    Returns ``ConstraintSet.empty()`` when the directory holds no
    constraints file.
    """
    settings = settings or ConstrainSettings()
    path = find_constraints_file(directory, settings)
    if path is None:
        logger.debug("No constraints file in %s", directory)
        return ConstraintSet.empty()
    return read_constraints_file(path, settings)
