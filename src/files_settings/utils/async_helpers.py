"""Utilities for running settings operations off tkinter's main thread."""

import asyncio
import threading
from typing import Callable, Coroutine, Any, Optional
from concurrent.futures import Future
import logging

logger = logging.getLogger(__name__)

GuiSchedule = Callable[[int, Callable[[], None]], Any]


class AsyncBridge:
    """Bridge between asyncio and tkinter's main thread.

    Runs an asyncio event loop in a background thread. Blocking work such as
    archive I/O is pushed further onto the loop's default executor, so the
    loop itself stays free while a bundle operation runs.
    """

    def __init__(self):
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if the async bridge is running."""
        return self._running and self._loop is not None

    def start(self) -> None:
        """Start the async event loop in a background thread."""
        if self._running:
            return

        self._loop = asyncio.new_event_loop()
        self._running = True
        self._thread = threading.Thread(target=self._run_loop, daemon=True, name="AsyncBridge")
        self._thread.start()
        logger.info("AsyncBridge started")

    def _run_loop(self) -> None:
        """Run the event loop (called in background thread)."""
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.run_until_complete(self._loop.shutdown_default_executor())
            self._loop.close()
            logger.info("AsyncBridge event loop closed")

    def run_async(
        self,
        coro: Coroutine[Any, Any, Any],
        callback: Optional[Callable[[Any], None]] = None,
        error_callback: Optional[Callable[[Exception], None]] = None,
        gui_schedule: Optional[GuiSchedule] = None,
    ) -> Optional[Future]:
        """Schedule a coroutine to run in the async loop.

        Args:
            coro: The coroutine to run
            callback: Optional callback for successful result
            error_callback: Optional callback for exceptions
            gui_schedule: Function to schedule callbacks on the GUI thread
                          (e.g., root.after). Callbacks run in the async
                          thread when omitted.

        Returns:
            A Future that can be used to get the result, or None if not running
        """
        if not self.is_running:
            logger.warning("AsyncBridge not running, cannot schedule coroutine")
            coro.close()
            return None

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)

        def deliver(func: Callable[[], None]) -> None:
            if gui_schedule is not None:
                gui_schedule(0, func)
            else:
                func()

        if callback or error_callback:

            def handle_result(f: Future):
                try:
                    result = f.result()
                except Exception as e:
                    logger.debug(f"Async operation failed: {e}")
                    if error_callback:
                        deliver(lambda err=e: error_callback(err))
                    return
                if callback:
                    deliver(lambda value=result: callback(value))

            future.add_done_callback(handle_result)

        return future

    def run_blocking(
        self,
        func: Callable[..., Any],
        *args: Any,
        callback: Optional[Callable[[Any], None]] = None,
        error_callback: Optional[Callable[[Exception], None]] = None,
        gui_schedule: Optional[GuiSchedule] = None,
    ) -> Optional[Future]:
        """Run a blocking function in a worker thread of the async loop.

        Takes the same callback arguments as ``run_async``.
        """
        return self.run_async(
            asyncio.to_thread(func, *args),
            callback=callback,
            error_callback=error_callback,
            gui_schedule=gui_schedule,
        )

    def stop(self) -> None:
        """Stop the async event loop."""
        if not self._running:
            return

        self._running = False

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)

        logger.info("AsyncBridge stopped")

    def __enter__(self) -> "AsyncBridge":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
