"""HTTP endpoints exposing the cached ticker snapshot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import APIRouter, HTTPException, Request, Response

from .errors import StockTickerError
from .service import StockTickerService

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Non-standard status (nginx convention) logged when the client goes away
CLIENT_CLOSED_REQUEST = 499


class ClientDisconnected(Exception):
    """The HTTP client went away before the result was ready."""


def create_ticker_router(service: StockTickerService, disconnect_poll: float = 0.5) -> APIRouter:
    """Create the stock info router with a reference to the ticker service.

    This factory pattern lets us inject the service without globals.
    """
    router = APIRouter(tags=["stock"])

    @router.get("/api/stock-info")
    async def get_stock_info(request: Request):
        """Current snapshot: N-day average close plus the N newest daily bars.

        Every core failure is reported as a generic 500; the cause is logged.
        """
        try:
            snapshot = await _until_disconnected(request, service.get_snapshot(), disconnect_poll)
        except ClientDisconnected:
            logger.info("Client disconnected during refresh of %s", service.symbol)
            return Response(status_code=CLIENT_CLOSED_REQUEST)
        except StockTickerError as e:
            logger.error("Error from stock service: %s", e, exc_info=e)
            raise HTTPException(status_code=500, detail="Internal Server Error") from e

        logger.debug("Served snapshot for %s refreshed at %s", snapshot.symbol, snapshot.refreshed_at)
        return snapshot.to_dict()

    @router.get("/healthz")
    async def get_health_status():
        return {"status": "ok"}

    return router


async def _until_disconnected(request: Request, awaitable: Awaitable[T], interval: float) -> T:
    """Await `awaitable`, cancelling it if the client disconnects first.

    The upstream fetch is the only slow step, so this is what lets a
    dropped connection abort an in-flight refresh.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnected()
    finally:
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
