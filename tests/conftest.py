"""Shared test fixtures for depconstrain."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from depconstrain.models.constraint import Constraint

CANONICAL_JSON = """\
{
  "version": "1.0.0",
  "dependencyConstraints": [
    {
      "group": "com.fasterxml.jackson.core",
      "name": "jackson-databind",
      "suggestedVersion": "2.13.2.2",
      "rejectedVersions": [
        "[2.13.0,2.13.2.1]"
      ],
      "because": {
        "advisoryIdentifiers": [
          "CVE-2020-36518"
        ],
        "moreInformationUrls": [
          "https://nvd.nist.gov/vuln/detail/CVE-2020-36518"
        ],
        "reason": "Deeply nested JSON causes a stack overflow"
      }
    },
    {
      "group": "org.yaml",
      "name": "snakeyaml",
      "suggestedVersion": "1.33",
      "because": {
        "reason": "Unbounded alias expansion"
      }
    }
  ]
}
"""

SORTED_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<constraints>
    <constraint>
        <group>com.fasterxml.jackson.core</group>
        <name>jackson-databind</name>
        <suggested-version>2.13.2.2</suggested-version>
        <rejected>
            <reject>[2.13.0,2.13.2.1]</reject>
            <reject>[2.12.0,2.12.6]</reject>
        </rejected>
        <because advisory="CVE-2020-36518">Deeply nested JSON causes a stack overflow</because>
    </constraint>
    <constraint>
        <group>org.yaml</group>
        <name>snakeyaml</name>
        <suggested-version>1.33</suggested-version>
        <because>Unbounded alias expansion</because>
    </constraint>
</constraints>
"""


class TrackingStream(io.BytesIO):
    """A byte stream that counts how often it was closed."""

    def __init__(self, data: bytes = b"") -> None:
        super().__init__(data)
        self.close_count = 0

    def close(self) -> None:
        self.close_count += 1
        super().close()


class FailingStream(TrackingStream):
    """A stream whose every read fails."""

    def read(self, size: int | None = -1) -> bytes:
        raise OSError("disk went away")


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for constraints files."""
    return tmp_path


@pytest.fixture
def canonical_json() -> str:
    """A valid constraints.json in canonical form (two constraints)."""
    return CANONICAL_JSON


@pytest.fixture
def sorted_xml() -> str:
    """A valid constraints.xml, sorted by group:name:suggestedVersion."""
    return SORTED_XML


@pytest.fixture
def json_dir(tmp_dir: Path) -> Path:
    (tmp_dir / "constraints.json").write_text(CANONICAL_JSON, encoding="utf-8")
    return tmp_dir


@pytest.fixture
def xml_dir(tmp_dir: Path) -> Path:
    (tmp_dir / "constraints.xml").write_text(SORTED_XML, encoding="utf-8")
    return tmp_dir


@pytest.fixture
def constraint_element() -> Callable[..., str]:
    """Factory for one well-formed <constraint> element."""

    def _make(group: str, name: str, version: str, reason: str = "reason") -> str:
        return (
            f"<constraint><group>{group}</group><name>{name}</name>"
            f"<suggested-version>{version}</suggested-version>"
            f"<because>{reason}</because></constraint>"
        )

    return _make


@pytest.fixture
def constraints_document() -> Callable[..., bytes]:
    """Factory wrapping <constraint> elements into a whole document."""

    def _make(*elements: str) -> bytes:
        return ("<constraints>" + "".join(elements) + "</constraints>").encode("utf-8")

    return _make


@pytest.fixture
def make_constraint() -> Callable[..., Constraint]:
    """Factory for a ``Constraint`` with a default reason."""

    def _make(group: str, name: str, version: str, reason: str = "reason") -> Constraint:
        return Constraint(group=group, name=name, suggested_version=version, reason=reason)

    return _make


@pytest.fixture
def tracking_stream() -> type[TrackingStream]:
    return TrackingStream


@pytest.fixture
def failing_stream() -> FailingStream:
    return FailingStream()


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """CLI runs reconfigure the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
