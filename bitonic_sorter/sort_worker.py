"""
Sort Worker
===========
Background-thread wrapper around a sort call.

Provides:
- Background thread execution for any sorter
- Result dict with status, timing and error details
- Blocking wait with timeout for drivers that poll
"""

import threading
import time
from typing import Any, Callable, Dict, Optional


class SortWorker:
    """
    Runs a sort callable in a background thread.

    Usage:
        values = [10, 30, 11, 20, 4, 330, 21, 110]
        worker = SortWorker(lambda: generic_sorter.sort(values), label="generic")
        worker.start()
        worker.wait(timeout=5.0)
        result = worker.get_result()   # {"success": True, "status": "Success", ...}

    The callable may return a dict; its keys are merged into the result.
    """

    def __init__(self, sort_fn: Callable[[], Any], label: str = "sorter"):
        self.sort_fn = sort_fn
        self.label = label

        self.done_event = threading.Event()
        self._result: Optional[Dict[str, Any]] = None
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[Exception] = None

    # ── Public API ─────────────────────────────────────────────

    def start(self):
        """Launch the sort in a background daemon thread."""
        self.done_event.clear()
        self._result = None
        self._error = None

        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def is_done(self) -> bool:
        return self.done_event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the sort finishes.  Returns False on timeout."""
        return self.done_event.wait(timeout)

    def get_result(self) -> Optional[Dict[str, Any]]:
        """Return the result dict. None if not yet done."""
        if not self.done_event.is_set():
            return None
        return self._result

    def get_error(self) -> Optional[Exception]:
        return self._error

    # ── Internal ───────────────────────────────────────────────

    def _run(self):
        start_time = time.perf_counter()
        try:
            returned = self.sort_fn()
            result = {
                "success": True,
                "status": "Success",
                "time_taken": time.perf_counter() - start_time,
                "worker_label": self.label,
            }
            if isinstance(returned, dict):
                result.update(returned)
            self._result = result

        except Exception as e:
            self._error = e
            self._result = {
                "success": False,
                "status": "Error",
                "error": str(e),
                "error_type": type(e).__name__,
                "time_taken": time.perf_counter() - start_time,
                "worker_label": self.label,
            }
        finally:
            self.done_event.set()
