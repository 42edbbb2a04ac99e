"""Adversarial tests — hostile JSON input.

Nesting deep enough to exhaust the interpreter's recursion limit must
surface as an ordinary constraints error that names the file, never as a
bare interpreter error.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from depconstrain.errors import DependencyConstrainError, describe_error
from depconstrain.serialize.json_reader import (
    format_constraints_file,
    formatting_patch,
    read_from_json,
)
from depconstrain.serialize.loader import load_constraints_from_directory

DEEPLY_NESTED = "[" * 100000


class TestDeeplyNestedJson:
    def test_reader_wraps_recursion_failure(self):
        with pytest.raises(DependencyConstrainError, match="Unable to read dependency constraints") as exc_info:
            read_from_json(io.BytesIO(DEEPLY_NESTED.encode("utf-8")))
        cause = exc_info.value.__cause__
        assert str(cause).startswith("Invalid JSON:")
        assert isinstance(cause.__cause__, RecursionError)

    def test_loader_names_the_file(self, tmp_dir: Path):
        path = tmp_dir / "constraints.json"
        path.write_text(DEEPLY_NESTED, encoding="utf-8")
        with pytest.raises(DependencyConstrainError) as exc_info:
            load_constraints_from_directory(tmp_dir)
        assert str(exc_info.value) == f"Failed to load constraints from {path}"
        assert "Invalid JSON" in describe_error(exc_info.value)

    def test_formatting_patch(self):
        with pytest.raises(DependencyConstrainError, match="Invalid JSON"):
            formatting_patch(DEEPLY_NESTED)

    def test_format_file_leaves_file_untouched(self, tmp_dir: Path):
        path = tmp_dir / "constraints.json"
        path.write_text(DEEPLY_NESTED, encoding="utf-8")
        with pytest.raises(DependencyConstrainError, match="Invalid JSON in"):
            format_constraints_file(path)
        assert path.read_text(encoding="utf-8") == DEEPLY_NESTED
