"""Boundary layer handing loaded constraints to build configurations."""

from depconstrain.service.constrain_service import (
    AsyncConstrainService,
    ConstrainService,
    Configuration,
)

__all__ = ["AsyncConstrainService", "ConstrainService", "Configuration"]
