"""
# src/flight_stats/utils/concurrency.py
# Fan-out helper for the two I/O bound batches (message fetch, code resolution)
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from tqdm import tqdm

T = TypeVar('T')


@dataclass
class BatchOutcome(Generic[T]):
    """Result of one operation in a batch: either value or error is set."""
    item: T
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_batch(
    func: Callable[[T], Any],
    items: Sequence[T],
    max_workers: int = 10,
    desc: Optional[str] = None,
    show_progress: bool = True,
) -> List[BatchOutcome[T]]:
    """
    Run func over every item concurrently and wait for all of them.

    A failing item never cancels the others. Outcomes come back in the order
    of items, not in completion order.
    """
    outcomes: List[Optional[BatchOutcome[T]]] = [None] * len(items)
    if not items:
        return []

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = {executor.submit(func, item): idx for idx, item in enumerate(items)}
        with tqdm(total=len(items), desc=desc, disable=not show_progress) as progress:
            for future in as_completed(futures):
                idx = futures[future]
                try:
                    outcomes[idx] = BatchOutcome(item=items[idx], value=future.result())
                except Exception as e:
                    outcomes[idx] = BatchOutcome(item=items[idx], error=e)
                progress.update(1)

    return outcomes
