"""Constrain services — hand loaded constraints to build configurations.

``ConstrainService`` wraps an already-loaded ``ConstraintSet``.
``AsyncConstrainService`` wraps a ``Future`` of one, so a load can run on
an executor while the caller carries on; every accessor joins the future.
Both support ``union`` so the constraints of several directories can be
combined without forcing the loads early.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from depconstrain.config import ConstrainSettings
from depconstrain.errors import DependencyConstrainError
from depconstrain.models.constraint import Constraint
from depconstrain.models.constraint_set import ConstraintSet
from depconstrain.serialize.loader import load_constraints_from_directory

logger = logging.getLogger(__name__)


@runtime_checkable
class Configuration(Protocol):
    """Anything constraints can be added to, e.g. a resolvable build configuration."""

    def add_constraints(self, constraints: Sequence[Constraint]) -> None:
        """Add the given constraints to this configuration."""
        ...


class ConstrainService:
    """Applies one immutable ``ConstraintSet`` to configurations.

    Parameters
    ----------
    constraints:
        The constraints to apply.  Defaults to the empty set.
    """

    def __init__(self, constraints: ConstraintSet | None = None) -> None:
        self._constraints = constraints or ConstraintSet.empty()

    @classmethod
    def empty(cls) -> ConstrainService:
        return cls()

    @classmethod
    def load(
        cls, directory: Path, settings: ConstrainSettings | None = None
    ) -> ConstrainService:
        """Load the constraints file kept in ``directory``."""
        return cls(load_constraints_from_directory(directory, settings))

    @property
    def constraints(self) -> ConstraintSet:
        return self._constraints

    def constrain(self, configuration: Configuration) -> None:
        """Add every constraint to ``configuration`` in a single call."""
        configuration.add_constraints(self._constraints.constraints)

    def constrain_all(self, configurations: Iterable[Configuration]) -> int:
        """Constrain each configuration; returns how many were constrained."""
        count = 0
        for configuration in configurations:
            self.constrain(configuration)
            count += 1
        return count

    def union(self, other: AnyConstrainService) -> AnyConstrainService:
        """Combine with ``other``; this service's constraints come first."""
        if isinstance(other, AsyncConstrainService):
            return AsyncConstrainService.completed(self).union(other)
        return ConstrainService(self._constraints.union(other.constraints))


def _combine_futures(
    left: Future[ConstrainService],
    right: Future[ConstrainService],
    combine: Callable[[ConstrainService, ConstrainService], ConstrainService],
) -> Future[ConstrainService]:
    """A future completing once both inputs have.

    A failure of either input becomes the failure of the result, the left
    one winning when both fail.
    """
    combined: Future[ConstrainService] = Future()
    lock = threading.Lock()
    pending = [2]

    def _on_done(_: Future[ConstrainService]) -> None:
        with lock:
            pending[0] -= 1
            if pending[0]:
                return
        try:
            result = combine(left.result(), right.result())
        except Exception as exc:
            combined.set_exception(exc)
        else:
            combined.set_result(result)

    left.add_done_callback(_on_done)
    right.add_done_callback(_on_done)
    return combined


class AsyncConstrainService:
    """A ``ConstrainService`` that may still be loading.

    Parameters
    ----------
    future:
        Future resolving to the loaded service.
    """

    def __init__(self, future: Future[ConstrainService]) -> None:
        self._future = future

    @classmethod
    def submit(
        cls,
        executor: Executor,
        directory: Path,
        settings: ConstrainSettings | None = None,
    ) -> AsyncConstrainService:
        """Schedule loading ``directory`` on ``executor``."""
        logger.debug("Scheduling constraints load for %s", directory)
        return cls(executor.submit(ConstrainService.load, directory, settings))

    @classmethod
    def completed(cls, service: ConstrainService) -> AsyncConstrainService:
        future: Future[ConstrainService] = Future()
        future.set_result(service)
        return cls(future)

    def done(self) -> bool:
        return self._future.done()

    def _join(self) -> ConstrainService:
        try:
            return self._future.result()
        except DependencyConstrainError:
            raise
        except Exception as exc:
            raise DependencyConstrainError("Loading dependency constraints did not complete") from exc

    @property
    def constraints(self) -> ConstraintSet:
        return self._join().constraints

    def constrain(self, configuration: Configuration) -> None:
        self._join().constrain(configuration)

    def constrain_all(self, configurations: Iterable[Configuration]) -> int:
        return self._join().constrain_all(configurations)

    def union(self, other: AnyConstrainService) -> AsyncConstrainService:
        """Combine without waiting; failures of either side surface on join."""
        if isinstance(other, AsyncConstrainService):
            other_future = other._future
        else:
            other_future = AsyncConstrainService.completed(other)._future
        return AsyncConstrainService(
            _combine_futures(self._future, other_future, lambda a, b: a.union(b))
        )


AnyConstrainService = Union[ConstrainService, AsyncConstrainService]
