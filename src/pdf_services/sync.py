"""
Sync API wrappers for async SDK methods.
"""

import asyncio
import concurrent.futures
import threading
from functools import wraps
from typing import Any, Callable, Optional, TypeVar, cast

from .exceptions import UsageError

F = TypeVar("F", bound=Callable[..., Any])

_thread_local = threading.local()


def detect_event_loop_state() -> str:
    """Detect current event loop state.

    Returns:
        - "running": An event loop is running in the current thread
        - "none": No running event loop in the current thread
    """
    try:
        asyncio.get_running_loop()
        return "running"
    except RuntimeError:
        return "none"


def get_or_create_event_loop() -> asyncio.AbstractEventLoop:
    """Get this thread's private loop, creating it on first use.

    The loop is kept open between calls so that HTTP connections pooled by
    an execution context stay usable across sync calls.
    """
    loop = getattr(_thread_local, "loop", None)
    if loop is None or loop.is_closed():
        loop = asyncio.new_event_loop()
        _thread_local.loop = loop
    return cast(asyncio.AbstractEventLoop, loop)


def run_in_thread_pool(coro: Any, timeout: Optional[float] = None) -> Any:
    """Run coroutine in thread pool executor."""
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(lambda: asyncio.run(coro))
        return future.result(timeout=timeout)


def sync_wrapper(async_func: F) -> F:
    """
    Decorator to create sync version of async method.

    Inside a running event loop the coroutine runs on a worker thread;
    otherwise on this thread's private loop.
    """

    @wraps(async_func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if detect_event_loop_state() == "running":
            return run_in_thread_pool(async_func(*args, **kwargs))

        loop = get_or_create_event_loop()
        return loop.run_until_complete(async_func(*args, **kwargs))

    return cast(F, wrapper)


class SyncOperationMixin:
    """Mixin providing a blocking version of ``execute``."""

    def execute_sync(self, context: Any) -> Any:
        """Synchronous version of execute.

        The context's HTTP client and token lock belong to the loop that
        drives them, so this must not be called while an event loop is
        running in the current thread; await ``execute`` there instead.

        Raises:
            UsageError: If an event loop is running in the current thread
        """
        if detect_event_loop_state() == "running":
            raise UsageError(
                "execute_sync cannot be called from a running event loop; "
                "await execute(context) instead"
            )
        return sync_wrapper(getattr(self, "execute"))(context)
