"""BaseService — shared foundation for qrctl services."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class BaseService:
    """Base for the decode and encode services.

    Services are stateless between calls: every public method is a pure
    function of its arguments plus the configuration given at construction.
    """

    op: str = ""

    def _warn(self, warnings: list[str], message: str) -> None:
        """Record a non-fatal issue on both the result and the log.

        INVARIANT: Warnings never change the operation's outcome.
        """
        logger.info("%s: %s", self.op, message)
        warnings.append(message)
