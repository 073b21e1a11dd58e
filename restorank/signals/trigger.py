from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EmbeddingTrigger:
    """Fire-and-forget dispatcher for per-user embedding rebuilds.

    ``dispatch`` returns the ``Future`` so tests can wait on it; request
    handlers drop it. Failures are only logged. Rebuilds for the same user may
    overlap and the last one to finish wins.
    """

    def __init__(
        self,
        rebuild: Callable[[str], Any],
        executor: ThreadPoolExecutor | None = None,
        max_workers: int = 2,
    ) -> None:
        self._rebuild = rebuild
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="embedding-rebuild"
        )

    def dispatch(self, user_id: str) -> Future:
        logger.info("Triggering embedding rebuild for user %s", user_id)
        future = self._executor.submit(self._rebuild, user_id)
        future.add_done_callback(lambda f: self._log_outcome(user_id, f))
        return future

    @staticmethod
    def _log_outcome(user_id: str, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(
                "Embedding rebuild failed for user %s", user_id, exc_info=(type(exc), exc, exc.__traceback__)
            )
        else:
            logger.info("Embedding rebuild finished for user %s", user_id)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
