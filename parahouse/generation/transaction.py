"""Atomic step runner — one named, all-or-nothing mutation of the host document."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from parahouse.errors import StepError
from parahouse.host.base import HostDocument

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_step(
    host: HostDocument,
    name: str,
    operation: Callable[[], T],
    index: int | None = None,
) -> T:
    """Run *operation* inside ``host.transaction(name)`` and return its result.

    If *operation* raises, the host discards the step's changes and a
    :class:`StepError` naming the step is raised from the original error.
    *index* tells repeated steps apart (the wall a step works on) and is
    carried on the error.  Steps committed earlier are left in place.
    """
    logger.debug("Starting step %r (index %s) on %s host", name, index, host.name)
    try:
        with host.transaction(name):
            result = operation()
    except Exception as exc:
        logger.warning("Step %r (index %s) failed and was rolled back", name, index, exc_info=True)
        raise StepError(name, str(exc), index=index) from exc
    logger.debug("Committed step %r", name)
    return result
