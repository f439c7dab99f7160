"""Thread pools and chunked parallel helpers built on them."""

from __future__ import annotations

import functools
import os
import threading
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable, Generic, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def _run_task(future: Future, func: Callable[[], Any]) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = func()
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)


def _resolve_threads(num_threads: int | None) -> int:
    if num_threads is None:
        return os.cpu_count() or 1
    if num_threads < 1:
        raise ValueError("num_threads must be positive")
    return num_threads


class ThreadPool:
    """Fixed set of worker threads serving one shared FIFO of tasks."""

    def __init__(self, num_threads: int | None = None) -> None:
        count = _resolve_threads(num_threads)
        self._tasks: deque[tuple[Future, Callable[[], Any]]] = deque()
        self._lock = threading.Lock()
        self._work_ready = threading.Condition(self._lock)
        self._all_idle = threading.Condition(self._lock)
        self._stopped = False
        self._active = 0
        self._workers = [
            threading.Thread(target=self._worker, daemon=True) for _ in range(count)
        ]
        for worker in self._workers:
            worker.start()

    def enqueue(self, func: Callable[..., R], *args: Any, **kwargs: Any) -> Future:
        """Schedule ``func(*args, **kwargs)`` and return a future for its result."""
        future: Future = Future()
        with self._lock:
            if self._stopped:
                raise RuntimeError("enqueue on stopped ThreadPool")
            self._tasks.append((future, functools.partial(func, *args, **kwargs)))
            self._work_ready.notify()
        return future

    def size(self) -> int:
        return len(self._workers)

    def pending_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def wait_for_completion(self) -> None:
        """Block until the queue is empty and no task is running."""
        with self._lock:
            self._all_idle.wait_for(lambda: not self._tasks and self._active == 0)

    def shutdown(self) -> None:
        """Stop accepting tasks, finish the queued ones and join the workers."""
        with self._lock:
            self._stopped = True
            self._work_ready.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _worker(self) -> None:
        while True:
            with self._lock:
                self._work_ready.wait_for(lambda: self._stopped or bool(self._tasks))
                if self._stopped and not self._tasks:
                    return
                future, func = self._tasks.popleft()
                self._active += 1
            _run_task(future, func)
            with self._lock:
                self._active -= 1
                if not self._tasks and self._active == 0:
                    self._all_idle.notify_all()


class TaskQueue(Generic[T]):
    """Thread-safe FIFO queue."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()

    def enqueue(self, item: T) -> None:
        self._items.append(item)

    def dequeue(self) -> T:
        """Remove and return the oldest item; raises IndexError when empty."""
        try:
            return self._items.popleft()
        except IndexError:
            raise IndexError("dequeue from an empty TaskQueue") from None

    def empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class WorkStealingThreadPool:
    """Workers with their own queues that take work from each other when idle.

    Tasks submitted from a worker go to that worker's queue; others go to a
    shared queue. Tasks still queued at shutdown are cancelled.
    """

    def __init__(self, num_threads: int | None = None) -> None:
        count = _resolve_threads(num_threads)
        self._pool_queue: TaskQueue[tuple[Future, Callable[[], Any]]] = TaskQueue()
        self._queues: list[TaskQueue[tuple[Future, Callable[[], Any]]]] = [
            TaskQueue() for _ in range(count)
        ]
        self._local = threading.local()
        self._wakeup = threading.Condition()
        self._done = False
        self._workers = [
            threading.Thread(target=self._worker, args=(i,), daemon=True)
            for i in range(count)
        ]
        for worker in self._workers:
            worker.start()

    def submit(self, func: Callable[[], R]) -> Future:
        """Schedule ``func()`` and return a future for its result."""
        future: Future = Future()
        with self._wakeup:
            if self._done:
                raise RuntimeError("submit on stopped WorkStealingThreadPool")
            queue = getattr(self._local, "queue", None) or self._pool_queue
            queue.enqueue((future, func))
            self._wakeup.notify()
        return future

    def shutdown(self) -> None:
        """Stop the workers and cancel any task that has not started."""
        with self._wakeup:
            self._done = True
            self._wakeup.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()
        for queue in (self._pool_queue, *self._queues):
            while not queue.empty():
                try:
                    future, _ = queue.dequeue()
                except IndexError:
                    break
                future.cancel()

    def __enter__(self) -> "WorkStealingThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _worker(self, index: int) -> None:
        self._local.queue = self._queues[index]
        self._local.index = index
        while not self._done:
            task = self._pop_task(index)
            if task is not None:
                _run_task(*task)
                continue
            with self._wakeup:
                if not self._done:
                    self._wakeup.wait(timeout=0.01)

    def _pop_task(self, index: int) -> tuple[Future, Callable[[], Any]] | None:
        n = len(self._queues)
        order = [self._queues[index], self._pool_queue]
        order.extend(self._queues[(index + i + 1) % n] for i in range(n))
        for queue in order:
            try:
                return queue.dequeue()
            except IndexError:
                continue
        return None


def _chunk_bounds(length: int, num_threads: int) -> list[tuple[int, int]]:
    chunk = max(1, length // num_threads)
    return [(start, min(start + chunk, length)) for start in range(0, length, chunk)]


def parallel_for(
    items: Iterable[T], func: Callable[[T], Any], num_threads: int | None = None
) -> None:
    """Call ``func`` on every item, splitting the items into chunks across threads."""
    seq = list(items)
    if not seq:
        return
    count = _resolve_threads(num_threads)

    def run(chunk: list[T]) -> None:
        for item in chunk:
            func(item)

    with ThreadPool(count) as pool:
        futures = [pool.enqueue(run, seq[a:b]) for a, b in _chunk_bounds(len(seq), count)]
        for future in futures:
            future.result()


def parallel_transform(
    items: Iterable[T], func: Callable[[T], R], num_threads: int | None = None
) -> list[R]:
    """Return ``[func(x) for x in items]``, computed in chunks across threads."""
    seq = list(items)
    if not seq:
        return []
    count = _resolve_threads(num_threads)

    def run(chunk: list[T]) -> list[R]:
        return [func(item) for item in chunk]

    with ThreadPool(count) as pool:
        futures = [pool.enqueue(run, seq[a:b]) for a, b in _chunk_bounds(len(seq), count)]
        return [value for future in futures for value in future.result()]


def parallel_reduce(
    items: Iterable[T],
    func: Callable[[R, T], R],
    init_value: R,
    num_threads: int | None = None,
) -> R:
    """Fold each chunk from ``init_value``, then fold the chunk results from ``init_value``.

    ``init_value`` therefore enters once per chunk and once more at the end,
    so it should be the identity of ``func``.
    """
    seq = list(items)
    if not seq:
        return init_value
    count = _resolve_threads(num_threads)

    def run(chunk: list[T]) -> R:
        return functools.reduce(func, chunk, init_value)

    with ThreadPool(count) as pool:
        futures = [pool.enqueue(run, seq[a:b]) for a, b in _chunk_bounds(len(seq), count)]
        return functools.reduce(func, (f.result() for f in futures), init_value)