from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import status

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationTimeoutError(RuntimeError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT

    def __init__(self, operation: str, seconds: float):
        super().__init__(f"Tempo esgotado: {operation} levou mais de {seconds:g} segundos")
        self.operation = operation
        self.seconds = seconds


async def with_timeout(awaitable: Awaitable[T], seconds: float, operation: str) -> T:
    """Race ``awaitable`` against a timer.

    The underlying work is abandoned on expiry, not necessarily cancelled:
    work running in a thread keeps going and its result is ignored.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as exc:
        logger.warning("operation_timeout operation=%s seconds=%s", operation, seconds)
        raise OperationTimeoutError(operation, seconds) from exc
