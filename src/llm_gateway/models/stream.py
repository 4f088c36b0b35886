"""
Streaming callback contract.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

TokenCallback = Callable[[str], Union[None, Awaitable[None]]]
CompleteCallback = Callable[[], Union[None, Awaitable[None]]]
ErrorCallback = Callable[[BaseException], Union[None, Awaitable[None]]]


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


def _noop(*args: Any) -> None:
    return None


@dataclass
class StreamHandlers:
    """
    Callbacks receiving a streamed response.

    Each callback may be a plain function or a coroutine function.
    """
    on_token: TokenCallback = _noop
    on_complete: CompleteCallback = _noop
    on_error: ErrorCallback = _noop

    async def token(self, fragment: str) -> None:
        await _maybe_await(self.on_token(fragment))

    async def complete(self) -> None:
        await _maybe_await(self.on_complete())

    async def error(self, error: BaseException) -> None:
        await _maybe_await(self.on_error(error))


@dataclass
class GuardedStreamHandlers(StreamHandlers):
    """
    Wraps caller handlers so that exactly one terminal callback fires
    and no token is delivered after it.
    """
    inner: Optional[StreamHandlers] = None
    finished: bool = field(default=False, init=False)

    @classmethod
    def wrap(cls, handlers: StreamHandlers) -> "GuardedStreamHandlers":
        if isinstance(handlers, GuardedStreamHandlers):
            return handlers
        return cls(inner=handlers)

    async def token(self, fragment: str) -> None:
        if self.finished:
            logger.debug("Dropping token received after stream termination")
            return
        await self.inner.token(fragment)

    async def complete(self) -> None:
        if self.finished:
            return
        self.finished = True
        await self.inner.complete()

    async def error(self, error: BaseException) -> None:
        if self.finished:
            return
        self.finished = True
        await self.inner.error(error)
