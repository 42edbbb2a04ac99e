"""Loader configuration — env-driven, with per-call overrides.

Settings are read from ``DEPCONSTRAIN_*`` environment variables or a
``.env`` file in the working directory.

Examples
--------
Disable sort-order enforcement for the XML encoding::

    export DEPCONSTRAIN_STRICT_SORT=false

Look for a differently named file::

    export DEPCONSTRAIN_JSON_FILE_NAME=dependency-constraints.json
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConstrainSettings(BaseSettings):
    """Configuration for locating and reading a constraints file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DEPCONSTRAIN_",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # File names looked up inside the constraints directory
    xml_file_name: str = "constraints.xml"
    json_file_name: str = "constraints.json"

    # Sort-order enforcement for the XML reader
    strict_sort: bool = True

    # Fragment size pushed into the incremental XML parser
    read_chunk_size: int = Field(default=8192, gt=0)

    # The only accepted top-level "version" of the JSON encoding
    supported_version: str = "1.0.0"

    log_level: str = "WARNING"
