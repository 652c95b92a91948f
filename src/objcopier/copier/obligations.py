"""Copy obligation tracking for one struct-level copy."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from objcopier.core.errors import FatalObligationViolation, ObligationUnmetError
from objcopier.core.tags import ObligationState, TagIndex

logger = logging.getLogger(__name__)


def track_obligations(index: TagIndex) -> dict[str, ObligationState]:
    """Obligation state for every destination field tagged ``must`` or ``nopanic``."""
    return {
        name: ObligationState(field_name=name, tag=tag)
        for name, tag in index.tags.items()
        if tag.must or tag.no_panic
    }


def mark_copied(obligations: dict[str, ObligationState], field_name: str) -> None:
    state = obligations.get(field_name)
    if state is not None:
        state.copied = True


def check_obligations(obligations: Iterable[ObligationState]) -> None:
    """Fail on the first ``must`` field that was never copied to.

    Raises:
        ObligationUnmetError: If the field is also tagged ``nopanic``.
        FatalObligationViolation: Otherwise.
    """
    for state in obligations:
        if not state.unmet:
            continue
        if state.tag.no_panic:
            raise ObligationUnmetError(state.field_name)
        logger.critical("Field %s has must tag but was not copied", state.field_name)
        raise FatalObligationViolation(state.field_name)
