"""End-to-end integration tests — constraints directory to build configurations.

These tests exercise the loader, both readers, the ConstraintSet model and the
constrain services working together.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from depconstrain import DependencyConstrainError, load_constraints_from_directory
from depconstrain.config import ConstrainSettings
from depconstrain.errors import describe_error
from depconstrain.models.constraint import Constraint
from depconstrain.service.constrain_service import AsyncConstrainService, ConstrainService


class FakeConfiguration:
    """Stands in for a resolvable build configuration."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.forced: dict[str, str] = {}
        self.rejected: dict[str, tuple[str, ...]] = {}

    def add_constraints(self, constraints: Sequence[Constraint]) -> None:
        for constraint in constraints:
            module = "{group}:{name}".format(**constraint.object_notation)
            self.forced[module] = constraint.suggested_version
            self.rejected[module] = constraint.rejected_versions


class TestLoadAndConstrain:
    """Directory -> ConstraintSet -> configurations."""

    def test_xml_directory_constrains_every_configuration(self, xml_dir: Path):
        configurations = [FakeConfiguration(name) for name in ("compile", "runtime", "test")]
        service = ConstrainService.load(xml_dir)

        assert service.constrain_all(configurations) == 3
        for configuration in configurations:
            assert configuration.forced == {
                "com.fasterxml.jackson.core:jackson-databind": "2.13.2.2",
                "org.yaml:snakeyaml": "1.33",
            }
            assert configuration.rejected["com.fasterxml.jackson.core:jackson-databind"] == (
                "[2.13.0,2.13.2.1]",
                "[2.12.0,2.12.6]",
            )

    def test_projects_loaded_in_parallel_and_combined(self, json_dir: Path, tmp_path_factory, constraint_element, constraints_document):
        other = tmp_path_factory.mktemp("other")
        (other / "constraints.xml").write_bytes(
            constraints_document(constraint_element("io.netty", "netty-codec", "4.1.86.Final"))
        )
        empty = tmp_path_factory.mktemp("empty")

        with ThreadPoolExecutor(max_workers=3) as executor:
            combined = (
                AsyncConstrainService.submit(executor, json_dir)
                .union(AsyncConstrainService.submit(executor, other))
                .union(AsyncConstrainService.submit(executor, empty))
            )
            configuration = FakeConfiguration("runtime")
            combined.constrain(configuration)

        assert list(configuration.forced) == [
            "com.fasterxml.jackson.core:jackson-databind",
            "org.yaml:snakeyaml",
            "io.netty:netty-codec",
        ]

    def test_broken_project_fails_the_combination(self, json_dir: Path, tmp_path_factory):
        broken = tmp_path_factory.mktemp("broken")
        (broken / "constraints.json").write_text('{"version": "1.0.0"}', encoding="utf-8")

        with ThreadPoolExecutor(max_workers=2) as executor:
            combined = AsyncConstrainService.submit(executor, json_dir).union(
                AsyncConstrainService.submit(executor, broken)
            )
            with pytest.raises(DependencyConstrainError) as exc_info:
                combined.constrain(FakeConfiguration("runtime"))

        described = describe_error(exc_info.value)
        assert f"Failed to load constraints from {broken / 'constraints.json'}" in described
        assert "'dependencyConstraints' is a required property" in described

    def test_custom_settings_flow_through(self, tmp_dir: Path, canonical_json):
        (tmp_dir / "pinned.json").write_text(canonical_json.replace('"1.0.0"', '"1.1.0"'), encoding="utf-8")
        settings = ConstrainSettings(json_file_name="pinned.json", supported_version="1.1.0")
        assert len(load_constraints_from_directory(tmp_dir, settings)) == 2
