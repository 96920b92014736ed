"""Named, cancellable timers driving automatic session transitions."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable

from scenepartner.config import get_logger

logger = get_logger(__name__)

SILENCE_TIMER = "silence"
HOLD_TIMER = "hold"
POST_SPEECH_TIMER = "post_speech"


class TimerScheduler:
    """Keep at most one pending timer per name on an asyncio event loop.

    Arming a name cancels whatever was scheduled under it before, so a stale
    callback can never fire after the state it was armed for has moved on.

    ``arm`` and ``cancel`` may be called from threads other than the loop's.
    Those calls are handed to the loop with ``call_soon_threadsafe``, which
    requires the scheduler to know its loop: pass ``loop`` explicitly, or
    arm once from the loop thread first.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on; the running loop if omitted
        """
        self._loop = loop
        self._handles: dict[str, asyncio.TimerHandle] = {}
        self._lock = threading.Lock()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _off_loop_thread(self) -> bool:
        """Whether the caller must hop threads to reach the loop."""
        if self._loop is None or not self._loop.is_running():
            return False
        try:
            return asyncio.get_running_loop() is not self._loop
        except RuntimeError:
            return True

    def arm(self, name: str, delay_ms: float, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` after ``delay_ms``, replacing any timer ``name``."""
        loop = self._get_loop()
        if self._off_loop_thread():
            loop.call_soon_threadsafe(self.arm, name, delay_ms, callback)
            return

        self.cancel(name)

        def fire() -> None:
            # A handle cancelled from another thread may still be queued
            with self._lock:
                if self._handles.get(name) is not handle:
                    return
                del self._handles[name]
            callback()

        handle = loop.call_later(delay_ms / 1000, fire)
        with self._lock:
            self._handles[name] = handle
        logger.debug("Timer armed", timer=name, delay_ms=delay_ms)

    def cancel(self, name: str) -> bool:
        """Cancel timer ``name``; returns whether one was pending."""
        with self._lock:
            handle = self._handles.pop(name, None)
        if handle is None:
            return False
        if self._off_loop_thread():
            self._get_loop().call_soon_threadsafe(handle.cancel)
        else:
            handle.cancel()
        logger.debug("Timer cancelled", timer=name)
        return True

    def cancel_all(self) -> None:
        with self._lock:
            names = list(self._handles)
        for name in names:
            self.cancel(name)

    def is_armed(self, name: str) -> bool:
        with self._lock:
            return name in self._handles

    @property
    def pending(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._handles)
