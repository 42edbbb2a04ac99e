"""The single error kind raised by the constraint loading pipeline."""

from __future__ import annotations


class DependencyConstrainError(RuntimeError):
    """Raised when a dependency constraints file cannot be loaded.

    The lower-level diagnostic (schema violation, nesting violation,
    formatting patch, sort-order report, I/O failure) is always kept as
    ``__cause__`` so callers can walk the chain.
    """


def describe_error(exc: BaseException) -> str:
    """Flatten an exception and its ``__cause__`` chain into one message.

    Each cause is rendered on its own line prefixed with ``Caused by:``.
    """
    lines = [str(exc)]
    seen = {id(exc)}
    cause = exc.__cause__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"Caused by: {cause}")
        cause = cause.__cause__
    return "\n".join(lines)
