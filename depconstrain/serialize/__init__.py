"""Readers for the XML and JSON constraints encodings, and the file loader."""

from depconstrain.serialize.json_reader import read_from_json
from depconstrain.serialize.loader import (
    find_constraints_file,
    load_constraints_from_directory,
    read_constraints_file,
)
from depconstrain.serialize.xml_reader import read_from_xml

__all__ = [
    "find_constraints_file",
    "load_constraints_from_directory",
    "read_constraints_file",
    "read_from_json",
    "read_from_xml",
]
