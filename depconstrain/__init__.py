"""depconstrain: load and validate dependency version constraint files.

Reads ``constraints.xml`` or ``constraints.json`` from a directory into an
immutable ``ConstraintSet``:
  - XML is read with a hardened, streaming SAX state machine
  - JSON is validated against a bundled schema and must be canonically formatted
  - Violations are reported as precise, diff-based messages
"""

__version__ = "0.1.0"
__description__ = "Loader and validator for dependency version constraint files"

from depconstrain.errors import DependencyConstrainError
from depconstrain.models.constraint import Constraint
from depconstrain.models.constraint_set import ConstraintSet
from depconstrain.serialize.loader import load_constraints_from_directory

__all__ = [
    "Constraint",
    "ConstraintSet",
    "DependencyConstrainError",
    "load_constraints_from_directory",
    "__version__",
]
