"""
Guard against triggering the same mutating operation twice at once.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Set

from ..api.exceptions import OperationInProgress
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class OperationGuard:
    """
    Rejects a second request for an operation while the first is outstanding.

    Different operations (an import and a delete) may still run side by side.
    """

    def __init__(self):
        self._in_flight: Set[str] = set()

    def is_busy(self, operation: str) -> bool:
        return operation in self._in_flight

    @asynccontextmanager
    async def hold(self, operation: str) -> AsyncIterator[None]:
        if operation in self._in_flight:
            logger.info(f"Rejected concurrent '{operation}' request")
            raise OperationInProgress(operation)
        self._in_flight.add(operation)
        try:
            yield
        finally:
            self._in_flight.discard(operation)
