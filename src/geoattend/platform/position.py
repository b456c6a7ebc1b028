"""Awaitable wrapper around the callback-style ``getCurrentPosition`` API."""

from __future__ import annotations

import asyncio
import logging

from ..models.domain import Position, PositionOptions
from .base import GeolocationBridge, PositionError, PositionErrorCode

logger = logging.getLogger(__name__)


async def current_position(
    geolocation: GeolocationBridge,
    options: PositionOptions,
    *,
    grace_seconds: float = 1.0,
) -> Position:
    """Request one fix and wait for it, bounded by the request's own timeout.

    The native layer is expected to enforce ``options.timeout_ms`` itself; the
    wrapper adds ``grace_seconds`` of slack and then gives up with a
    ``PositionError(TIMEOUT)``. A callback that arrives after that point is
    dropped, the native request is left to finish on its own.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Position] = loop.create_future()

    def _settle_result(position: Position) -> None:
        if future.done():
            logger.debug("Discarding late position callback")
            return
        future.set_result(position)

    def _settle_error(error: PositionError) -> None:
        if future.done():
            logger.debug(f"Discarding late position error: {error!r}")
            return
        future.set_exception(error)

    def _dispatch(settle, value) -> None:
        try:
            loop.call_soon_threadsafe(settle, value)
        except RuntimeError:
            # Event loop already closed.
            logger.debug("Discarding position callback after event loop shutdown")

    def on_success(position: Position) -> None:
        _dispatch(_settle_result, position)

    def on_error(error: PositionError) -> None:
        _dispatch(_settle_error, error)

    try:
        geolocation.get_current_position(on_success, on_error, options)
    except PositionError:
        raise
    except Exception as exc:
        raise PositionError(PositionErrorCode.POSITION_UNAVAILABLE, f"Geolocation bridge failed: {exc}") from exc

    timeout = options.timeout_ms / 1000.0 + grace_seconds
    try:
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise PositionError(
            PositionErrorCode.TIMEOUT,
            f"No position within {options.timeout_ms} ms",
        ) from exc
