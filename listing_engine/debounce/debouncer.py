"""
Debounced task for filter-driven fetches.

Collapses bursts of filter changes into a single call made once the user has
been idle for the configured window, with an explicit flush for changes that
should apply right away (for example releasing the price slider).
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Set, Tuple


logger = logging.getLogger(__name__)


class DebouncedTask:
    """
    Runs a callback once rapid triggers have settled.

    Each trigger replaces the pending arguments and restarts the timer, so
    only the latest call goes through. Coroutine callbacks are scheduled as
    tasks on the running loop.

    Attributes:
        callback: Function or coroutine function to call
        delay_ms: Quiet period before the pending call fires
    """

    def __init__(self, callback: Callable, delay_ms: int = 250):
        """
        Initialize debounced task.

        Args:
            callback: Function or coroutine function to debounce
            delay_ms: Debounce window in milliseconds (default: 250)
        """
        self.callback = callback
        self.delay_ms = delay_ms
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[Tuple[tuple, Dict[str, Any]]] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """Whether a call is waiting for its timer."""
        return self._pending is not None

    def trigger(self, *args, immediate: bool = False, **kwargs) -> Optional[asyncio.Task]:
        """
        Schedule the callback with the given arguments.

        Must be called from within a running event loop.

        Args:
            *args: Positional arguments for the callback
            immediate: Skip the debounce window and call now
            **kwargs: Keyword arguments for the callback

        Returns:
            The scheduled task when ``immediate`` fires a coroutine, else None
        """
        self._cancel_timer()
        self._pending = (args, kwargs)

        if immediate:
            return self.flush()

        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay_ms / 1000, self._fire)
        return None

    def flush(self) -> Optional[asyncio.Task]:
        """
        Call the pending callback now, if any.

        Returns:
            Task running a coroutine callback, None otherwise
        """
        self._cancel_timer()
        if self._pending is None:
            return None
        return self._fire()

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        self._cancel_timer()
        self._pending = None

    async def drain(self) -> None:
        """Wait for coroutine callbacks that are still running."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> Optional[asyncio.Task]:
        self._handle = None
        pending, self._pending = self._pending, None
        if pending is None:
            return None

        args, kwargs = pending
        try:
            result = self.callback(*args, **kwargs)
        except Exception as e:
            logger.error(f"Debounced callback {self._name} failed: {e}", exc_info=True)
            return None

        if not inspect.isawaitable(result):
            return None

        task = asyncio.ensure_future(result)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Debounced callback {self._name} failed: {error}")

    @property
    def _name(self) -> str:
        return getattr(self.callback, "__name__", repr(self.callback))
