from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable

from .models import ValidationOutcome


class ResultCache:
    """Run-scoped, thread-safe map of raw reference string -> outcome.

    The first caller for a key runs the validation; callers arriving while
    it is in flight wait on the same future. Keys are never normalized, so
    ``/a/`` and ``/a/index.html`` are validated separately.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, Future[ValidationOutcome]] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get_or_validate(
        self,
        key: str,
        validate: Callable[[], ValidationOutcome],
    ) -> ValidationOutcome:
        with self._lock:
            fut = self._entries.get(key)
            owner = fut is None
            if fut is None:
                fut = Future()
                self._entries[key] = fut
                self.misses += 1
            else:
                self.hits += 1

        if owner:
            try:
                fut.set_result(validate())
            except BaseException as e:
                fut.set_exception(e)
                raise

        return fut.result()
