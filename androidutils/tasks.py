"""Background task dispatch.

:func:`execute_async_task` hands a callable to a shared
:class:`~concurrent.futures.ThreadPoolExecutor` and returns its future.
The pool is created on first use and sized from
:attr:`Settings.task_pool_workers <androidutils.env_settings.Settings>`.
Interpreters without thread support run the task inline instead, so the
caller always gets a future back.
"""

from __future__ import annotations

import logging
import sys
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

from .env_settings import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# sys.platform values of interpreters built without threads.
_NO_THREAD_PLATFORMS = ("emscripten", "wasi")

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def supports_thread_pool() -> bool:
    """Return True if the interpreter can run a thread pool."""
    return sys.platform not in _NO_THREAD_PLATFORMS


def get_executor() -> ThreadPoolExecutor:
    """Return the shared executor, creating it if needed."""
    global _executor
    with _executor_lock:
        if _executor is None:
            workers = get_settings().task_pool_workers
            _executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="androidutils-task"
            )
            logger.debug("Created shared task pool (max_workers=%s)", workers)
        return _executor


def shutdown_executor(wait: bool = True) -> None:
    """Shut the shared executor down; the next dispatch starts a new one."""
    global _executor
    with _executor_lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)


def _run_inline(task: Callable[..., T], args: tuple) -> "Future[T]":
    future: "Future[T]" = Future()
    if not future.set_running_or_notify_cancel():
        return future
    try:
        result = task(*args)
    except BaseException as e:
        future.set_exception(e)
    else:
        future.set_result(result)
    return future


def execute_async_task(task: Callable[..., T], *args: Any) -> "Future[T]":
    """Run ``task(*args)`` in the background.

    Parameters
    ----------
    task:
        The unit of work.  Any callable.
    *args:
        Optional positional arguments passed to ``task``.

    Returns
    -------
    concurrent.futures.Future
        Resolves to the task's return value, or re-raises its exception
        from :meth:`~concurrent.futures.Future.result`.
    """
    if supports_thread_pool():
        return get_executor().submit(task, *args)
    logger.debug("Thread pool unsupported on %s, running task inline", sys.platform)
    return _run_inline(task, args)


__all__ = [
    "supports_thread_pool",
    "get_executor",
    "shutdown_executor",
    "execute_async_task",
]
