"""Exception hierarchy shared by the geometry core, the hosts and the generator."""

from __future__ import annotations


class ParaHouseError(Exception):
    """Base class for every error raised by parahouse."""


class InvalidArgumentError(ParaHouseError, ValueError):
    """Raised when an input parameter is out of range or geometrically degenerate."""


class NotFoundError(ParaHouseError, LookupError):
    """Raised when a level or family type cannot be found in the host document."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} not found: {name!r}")


class HostError(ParaHouseError):
    """Raised by a host document when it refuses to construct an element."""


class StepError(ParaHouseError):
    """Raised when a generation step fails; the step's changes were rolled back."""

    def __init__(self, step: str, message: str, index: int | None = None) -> None:
        self.step = step
        self.index = index
        label = f"{step!r}" if index is None else f"{step!r} #{index}"
        super().__init__(f"Step {label} failed: {message}")
