"""
Scoped worker pools for independent units of work.

Folds and bootstrap batches are dispatched through joblib. A pool is opened
for the duration of one call and released when the ``with`` block exits,
whether the units succeed or raise.

Example:
    >>> from spending_cv.utils.parallel import run_tasks
    >>>
    >>> squares = run_tasks(pow, [(2, 2), (3, 2)], n_workers=2)
    >>> print(squares)
    [4, 9]
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, List, Sequence
import logging

from joblib import Parallel, delayed

from ..config import check_workers

# Configure module logger
logger = logging.getLogger(__name__)


@contextmanager
def worker_pool(
    n_workers: int = 1,
    backend: str = 'loky',
    ordered: bool = True
) -> Iterator[Parallel]:
    """
    Open a joblib worker pool for the duration of a ``with`` block.

    Args:
        n_workers: Number of concurrent workers. 1 runs in the calling process.
        backend: joblib backend name ('loky', 'threading', 'multiprocessing').
        ordered: If False, results are yielded in completion order rather
                 than dispatch order.

    Yields:
        A ``joblib.Parallel`` instance bound to the open pool.

    Raises:
        InvalidConfigurationError: If n_workers or backend is invalid.
    """
    check_workers(n_workers, backend)
    return_as = 'list' if ordered else 'generator_unordered'

    logger.debug("Opening %s worker pool with %d workers", backend, n_workers)
    with Parallel(n_jobs=n_workers, backend=backend, return_as=return_as) as parallel:
        yield parallel
    logger.debug("Closed %s worker pool", backend)


def run_tasks(
    func: Callable[..., Any],
    tasks: Iterable[Sequence[Any]],
    n_workers: int = 1,
    backend: str = 'loky',
    ordered: bool = True
) -> List[Any]:
    """
    Apply ``func`` to every argument tuple in ``tasks`` on a scoped pool.

    Units never communicate with each other; the only synchronisation is the
    join at the end of this call. The first exception raised by a unit
    propagates to the caller once the pool has been shut down.

    Args:
        func: Module-level callable (must be picklable for process backends).
        tasks: Iterable of positional argument tuples, one per unit.
        n_workers: Number of concurrent workers.
        backend: joblib backend name.
        ordered: Keep dispatch order in the result list. With False the
                 results arrive in completion order, so callers must tag
                 them if they need to know which unit produced what.

    Returns:
        List with one result per task.
    """
    tasks = [tuple(task) for task in tasks]
    if not tasks:
        return []

    with worker_pool(n_workers=n_workers, backend=backend, ordered=ordered) as parallel:
        results = list(parallel(delayed(func)(*task) for task in tasks))

    return results
