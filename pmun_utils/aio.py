"""asyncio convenience wrappers.

All helpers run on the caller's event loop and take durations in
milliseconds. Callables passed in may be coroutine functions or plain
functions; plain results are used as-is. There is no cancellation API
beyond what asyncio itself provides.
"""

import asyncio
import functools
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Literal, ParamSpec, TypeVar

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

Backoff = Literal["fixed", "linear"]

# Operations that outlived their timeout; the loop only holds weak references
_background: set["asyncio.Future[Any]"] = set()


async def _call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    result = fn(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def _settle(waiters: Sequence["asyncio.Future[Any]"], task: "asyncio.Task[Any]") -> None:
    for waiter in waiters:
        if waiter.done():
            continue
        if task.cancelled():
            waiter.cancel()
        elif task.exception() is not None:
            waiter.set_exception(task.exception())  # type: ignore[arg-type]
        else:
            waiter.set_result(task.result())


async def delay(ms: float) -> None:
    """Sleep for `ms` milliseconds."""
    await asyncio.sleep(ms / 1000)


async def timeout(
    awaitable: Awaitable[R], ms: float, message: str = "Operation timed out"
) -> R:
    """
    Race `awaitable` against a timer.

    The wrapped operation is never cancelled: when the deadline wins it keeps
    running in the background and its eventual outcome is discarded.

    Raises:
        TimeoutError: With `message` when `ms` milliseconds pass first
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=ms / 1000)
    finally:
        if not task.done():
            _background.add(task)
            task.add_done_callback(_discard)
    if task not in done:
        raise TimeoutError(message)
    return task.result()


def _discard(task: "asyncio.Future[Any]") -> None:
    _background.discard(task)
    if not task.cancelled():
        task.exception()


async def retry(
    fn: Callable[[], Awaitable[R] | R],
    retries: int = 3,
    delay_ms: float = 1000,
    backoff: Backoff = "fixed",
) -> R:
    """
    Call `fn` until it succeeds, at most ``retries + 1`` times.

    Args:
        fn: Zero-argument callable, sync or async
        retries: Extra attempts after the first failure
        delay_ms: Wait between attempts
        backoff: "fixed" waits `delay_ms` every time; "linear" waits
                 ``delay_ms * attempt``

    Raises:
        The exception from the final attempt
    """
    if backoff not in ("fixed", "linear"):
        raise ValueError(f"Invalid backoff '{backoff}'. Valid values: fixed, linear")
    if retries < 0:
        raise ValueError(f"retries must be >= 0, got {retries}")

    attempt = 0
    while True:
        try:
            return await _call(fn)
        except Exception as exc:
            attempt += 1
            if attempt > retries:
                raise
            wait = delay_ms * attempt if backoff == "linear" else delay_ms
            logger.warning(
                "Attempt %d/%d failed (%s: %s), retrying in %sms",
                attempt,
                retries + 1,
                type(exc).__name__,
                exc,
                wait,
            )
            await delay(wait)


def debounce(
    fn: Callable[P, Awaitable[R] | R], wait: float
) -> Callable[P, Awaitable[R]]:
    """
    Delay calls until `wait` ms pass without another call.

    Only the last call's arguments are used. Every caller awaiting during the
    quiet period receives that call's result (or its exception).

    Example:
        >>> save = debounce(store.save, 300)
        >>> await asyncio.gather(save("a"), save("ab"), save("abc"))  # one save("abc")
    """
    handle: asyncio.TimerHandle | None = None
    waiters: list["asyncio.Future[R]"] = []
    running: set["asyncio.Task[Any]"] = set()

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        nonlocal handle
        loop = asyncio.get_running_loop()
        if handle is not None:
            handle.cancel()
        waiter: asyncio.Future[R] = loop.create_future()
        waiters.append(waiter)

        def fire() -> None:
            nonlocal handle
            handle = None
            pending = list(waiters)
            waiters.clear()
            task = loop.create_task(_call(fn, *args, **kwargs))
            running.add(task)
            task.add_done_callback(running.discard)
            task.add_done_callback(lambda done: _settle(pending, done))

        handle = loop.call_later(wait / 1000, fire)
        return await waiter

    return wrapper


def throttle(
    fn: Callable[P, Awaitable[R] | R], wait: float
) -> Callable[P, Awaitable[R]]:
    """
    Run `fn` at most once every `wait` ms.

    A call outside the window runs immediately. Calls inside the window
    schedule one trailing run at the end of the window with the latest
    arguments, and all of them receive that run's result.
    """
    last_run = float("-inf")
    trailing: asyncio.Future[R] | None = None
    latest: tuple[tuple[Any, ...], dict[str, Any]] = ((), {})
    running: set["asyncio.Task[Any]"] = set()

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        nonlocal last_run, trailing, latest
        loop = asyncio.get_running_loop()
        now = loop.time()
        latest = (args, kwargs)
        elapsed = (now - last_run) * 1000

        if elapsed >= wait:
            last_run = now
            return await _call(fn, *args, **kwargs)

        if trailing is None:
            trailing = loop.create_future()

            def fire() -> None:
                nonlocal last_run, trailing
                last_run = loop.time()
                future, trailing = trailing, None
                call_args, call_kwargs = latest
                task = loop.create_task(_call(fn, *call_args, **call_kwargs))
                running.add(task)
                task.add_done_callback(running.discard)
                task.add_done_callback(lambda done: _settle([future], done))

            loop.call_later((wait - elapsed) / 1000, fire)

        # Shielded so one cancelled caller does not cancel the shared run
        return await asyncio.shield(trailing)

    return wrapper


async def parallel(
    tasks: Sequence[Callable[[], Awaitable[R] | R]], limit: int = 5
) -> list[R]:
    """
    Run task factories with at most `limit` in flight.

    Results come back in task order regardless of completion order. The
    first failure propagates; tasks already started are not cancelled.

    Example:
        >>> await parallel([lambda: fetch(1), lambda: fetch(2)], limit=2)
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    results: list[Any] = [None] * len(tasks)
    queue = iter(enumerate(tasks))

    async def worker() -> None:
        for index, task in queue:
            results[index] = await _call(task)

    await asyncio.gather(*(worker() for _ in range(min(limit, len(tasks)))))
    return results


async def sequential(tasks: Sequence[Callable[[], Awaitable[R] | R]]) -> list[R]:
    """Run task factories one after another and collect their results."""
    results: list[R] = []
    for task in tasks:
        results.append(await _call(task))
    return results
