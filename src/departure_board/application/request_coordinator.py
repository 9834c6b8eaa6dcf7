"""Latest-request-wins coordination of overlapping lookups.

Every logical operation runs on a channel. Issuing a request on a channel
cancels the channel's in-flight request and advances its sequence counter.
A completion is applied only if its captured sequence is still the channel's
current one, so an old response that arrives late is discarded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeVar

from departure_board.domain.errors import LookupFailure, RequestCancelled

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Channel(str, Enum):
    """Logical request slots."""

    SUGGESTIONS = "suggestions"
    STATION = "station"
    DEPARTURES = "departures"


class RequestOutcome(str, Enum):
    """What happened to an issued request."""

    APPLIED = "applied"
    STALE = "stale"
    CANCELLED = "cancelled"
    FAILED = "failed"


class RequestChannel:
    """Tracks the in-flight request and sequence counter of one channel."""

    def __init__(self, channel: Channel) -> None:
        self.channel = channel
        self.sequence = 0
        self._in_flight: asyncio.Task[Any] | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    def is_current(self, sequence: int) -> bool:
        return sequence == self.sequence

    def cancel(self) -> None:
        """Cancel the in-flight request. No-op if it already completed."""
        task, self._in_flight = self._in_flight, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug(f"Cancelled {self.channel.value} request #{self.sequence}")

    def advance(self) -> int:
        """Cancel the in-flight request and start a new sequence."""
        self.cancel()
        self.sequence += 1
        return self.sequence

    def attach(self, task: asyncio.Task[Any]) -> None:
        self._in_flight = task

    def release(self, task: asyncio.Task[Any]) -> None:
        if self._in_flight is task:
            self._in_flight = None


class RequestCoordinator:
    """Runs lookups so that only the latest request per channel affects state."""

    def __init__(self) -> None:
        self._channels = {channel: RequestChannel(channel) for channel in Channel}
        self._completions: set[asyncio.Task[RequestOutcome]] = set()

    def channel(self, channel: Channel) -> RequestChannel:
        return self._channels[channel]

    def is_in_flight(self, channel: Channel) -> bool:
        return self._channels[channel].in_flight

    def issue(
        self,
        channel: Channel,
        operation: Callable[[], Awaitable[T]],
        on_success: Callable[[T], Any],
        on_failure: Callable[[LookupFailure], Any] | None = None,
    ) -> asyncio.Task[RequestOutcome]:
        """Issue a request on a channel, superseding the previous one.

        Args:
            channel: Channel the request belongs to.
            operation: Zero-argument coroutine function performing the lookup.
            on_success: Called with the result if the request is still current.
            on_failure: Called with the failure if the request is still current
                and was not cancelled.

        Returns:
            Task resolving to the request's outcome. It never raises for
            cancellation, so callers may await it freely.
        """
        request_channel = self._channels[channel]
        sequence = request_channel.advance()
        operation_task = asyncio.ensure_future(operation())
        request_channel.attach(operation_task)
        logger.debug(f"Issued {channel.value} request #{sequence}")

        completion = asyncio.create_task(
            self._complete(request_channel, sequence, operation_task, on_success, on_failure),
            name=f"{channel.value}-{sequence}",
        )
        self._completions.add(completion)
        completion.add_done_callback(self._completions.discard)
        return completion

    def invalidate(self, channel: Channel) -> None:
        """Cancel the channel's in-flight request and discard any pending result."""
        self._channels[channel].advance()

    def cancel_all(self) -> None:
        for request_channel in self._channels.values():
            request_channel.advance()

    async def drain(self) -> None:
        """Wait until every issued request, including ones issued meanwhile, completed."""
        while self._completions:
            await asyncio.gather(*self._completions)

    async def aclose(self) -> None:
        """Cancel all requests and wait for their completions to settle."""
        self.cancel_all()
        await self.drain()

    async def _complete(
        self,
        request_channel: RequestChannel,
        sequence: int,
        operation_task: asyncio.Future[T],
        on_success: Callable[[T], Any],
        on_failure: Callable[[LookupFailure], Any] | None,
    ) -> RequestOutcome:
        name = f"{request_channel.channel.value} request #{sequence}"
        try:
            result = await operation_task
        except asyncio.CancelledError:
            if not operation_task.cancelled():
                raise
            logger.debug(f"{name} cancelled")
            return RequestOutcome.CANCELLED
        except RequestCancelled:
            logger.debug(f"{name} cancelled")
            return RequestOutcome.CANCELLED
        except LookupFailure as e:
            if not request_channel.is_current(sequence):
                logger.debug(f"{name} failed after being superseded, ignoring")
                return RequestOutcome.STALE
            details = e.details()
            logger.warning(
                f"{name} failed: {details.reason} (status: {details.status_code}, error: {e})"
            )
            if on_failure is not None:
                on_failure(e)
            return RequestOutcome.FAILED
        finally:
            request_channel.release(operation_task)

        if not request_channel.is_current(sequence):
            logger.debug(
                f"Discarding stale {name} (current is #{request_channel.sequence})"
            )
            return RequestOutcome.STALE

        on_success(result)
        return RequestOutcome.APPLIED
